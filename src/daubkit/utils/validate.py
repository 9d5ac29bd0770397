"""Validation utilities for daubkit."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

__all__ = [
    "MIN_VANISHING_MOMENTS",
    "MAX_VANISHING_MOMENTS",
    "MAX_DERIVATIVE_ORDER",
    "validate_vanishing_moments",
    "validate_derivative_order",
    "validate_refinement",
    "validate_precision_pair",
    "validate_uniform_samples",
    "bit_view_dtype",
    "validate_real_dtype",
]

#: Smallest number of vanishing moments in the catalog.
MIN_VANISHING_MOMENTS = 2
#: Largest number of vanishing moments in the catalog.
MAX_VANISHING_MOMENTS = 15
#: Highest derivative of the scaling function that can be tabulated.
MAX_DERIVATIVE_ORDER = 3

# Real types need a same-width unsigned integer view for exact ULP counting.
_BIT_VIEWS = {2: np.uint16, 4: np.uint32, 8: np.uint64}


def validate_vanishing_moments(p: int) -> int:
    """Checks that ``p`` names a scaling function in the catalog.

    Args:
        p: Number of vanishing moments.

    Returns:
        ``p`` as a plain ``int``.

    Raises:
        ValueError: If ``p`` is not an integer in ``[2, 15]``.
    """
    if isinstance(p, bool) or int(p) != p:
        raise ValueError(f"p must be an integer; got {p!r}.")
    p = int(p)
    if not MIN_VANISHING_MOMENTS <= p <= MAX_VANISHING_MOMENTS:
        raise ValueError(
            f"p must be in [{MIN_VANISHING_MOMENTS}, {MAX_VANISHING_MOMENTS}]; got {p}."
        )
    return p


def validate_derivative_order(p: int, order: int) -> int:
    """Checks that the ``order``-th derivative of the scaling function can be tabulated.

    The refinement recursion only yields a derivative grid when the scaling
    function reproduces polynomials of that degree, i.e. ``order < p``.

    Args:
        p: Number of vanishing moments (already validated).
        order: Derivative order.

    Returns:
        ``order`` as a plain ``int``.

    Raises:
        ValueError: If ``order`` is outside ``[0, 3]`` or ``order >= p``.
    """
    if isinstance(order, bool) or int(order) != order:
        raise ValueError(f"derivative order must be an integer; got {order!r}.")
    order = int(order)
    if not 0 <= order <= MAX_DERIVATIVE_ORDER:
        raise ValueError(
            f"derivative order must be in [0, {MAX_DERIVATIVE_ORDER}]; got {order}."
        )
    if order >= p:
        raise ValueError(
            f"the derivative of order {order} of the scaling function with p={p} "
            "vanishing moments cannot be tabulated; need order < p."
        )
    return order


def validate_refinement(r: int) -> int:
    """Checks that ``r`` is a non-negative dyadic refinement level."""
    if isinstance(r, bool) or int(r) != r:
        raise ValueError(f"refinement level must be an integer; got {r!r}.")
    r = int(r)
    if r < 0:
        raise ValueError(f"refinement level must be >= 0; got {r}.")
    return r


def validate_precision_pair(
    real: DTypeLike,
    precise: DTypeLike,
) -> tuple[np.dtype, np.dtype]:
    """Validates the working and reference floating-point types.

    Requirements:
      - both are numpy floating dtypes;
      - ``real`` has a same-width integer view (float16, float32 or float64),
        which is what makes the ULP distance exact;
      - ``precise`` carries at least as many mantissa bits as ``real``.

    Args:
        real: Working type under study.
        precise: Type used for the reference computation.

    Returns:
        Tuple of (real, precise) as ``numpy.dtype`` instances.

    Raises:
        ValueError: If any requirement above is violated.
    """
    real_dt = validate_real_dtype(real)
    precise_dt = np.dtype(precise)
    if not np.issubdtype(precise_dt, np.floating):
        raise ValueError(f"precise must be a floating dtype; got {precise_dt}.")
    if np.finfo(precise_dt).nmant < np.finfo(real_dt).nmant:
        raise ValueError(
            f"precise type {precise_dt} is narrower than real type {real_dt}; "
            "the reference must be at least as wide as the type under study."
        )
    return real_dt, precise_dt


def validate_uniform_samples(
    values: ArrayLike,
    *,
    min_size: int = 2,
    name: str = "samples",
) -> NDArray[np.floating]:
    """Validates a 1D buffer of equispaced samples.

    Args:
        values: Array-like of samples.
        min_size: Minimum number of samples required.
        name: Name used in error messages.

    Returns:
        The samples as a 1D numpy array (dtype preserved when floating).

    Raises:
        ValueError: If the input is not 1D or has fewer than ``min_size`` samples.
    """
    arr = np.asarray(values)
    if not np.issubdtype(arr.dtype, np.floating):
        arr = arr.astype(float)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be 1D; got shape {arr.shape}.")
    if arr.size < min_size:
        raise ValueError(f"{name} must contain at least {min_size} values; got {arr.size}.")
    return arr


def bit_view_dtype(real: DTypeLike) -> type[np.unsignedinteger]:
    """Returns the unsigned integer type sharing the bit width of ``real``."""
    return _BIT_VIEWS[np.dtype(real).itemsize]


def validate_real_dtype(real: DTypeLike) -> np.dtype:
    """Checks that ``real`` is float16, float32 or float64.

    Raises:
        ValueError: If ``real`` is not one of these types.
    """
    real_dt = np.dtype(real)
    if not np.issubdtype(real_dt, np.floating) or real_dt.itemsize not in _BIT_VIEWS:
        raise ValueError(f"real must be float16, float32 or float64; got {real_dt}.")
    return real_dt
