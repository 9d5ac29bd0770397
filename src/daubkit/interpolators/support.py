"""Shared helpers for interpolants of compactly supported functions."""

from __future__ import annotations

from typing import Callable, Protocol

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

__all__ = ["Interpolant", "evaluate_on_support", "sample_abscissae"]


class Interpolant(Protocol):
    """Protocol each candidate interpolant must satisfy.

    Candidates are built from the dyadic grids they need and are then
    evaluated on arrays of abscissae. Every candidate returns exactly zero
    outside the open support interval of the scaling function.
    """

    def __call__(self, x: ArrayLike) -> NDArray[np.floating]:
        """Evaluates the interpolant at ``x``."""
        ...


def evaluate_on_support(
    x: ArrayLike,
    lower: float,
    upper: float,
    interior: Callable[[NDArray[np.floating]], NDArray[np.floating]],
    dtype: DTypeLike,
) -> NDArray[np.floating]:
    """Evaluates ``interior`` on the open interval ``(lower, upper)`` and zero elsewhere.

    Args:
        x: Abscissae, scalar or array.
        lower: Left end of the support.
        upper: Right end of the support.
        interior: Vectorized evaluation used strictly inside the support.
        dtype: Output type.

    Returns:
        Array with the shape of ``x``.
    """
    x_arr = np.asarray(x, dtype=dtype)
    flat = x_arr.ravel()
    out = np.zeros(flat.shape, dtype=dtype)
    inside = (flat > lower) & (flat < upper)
    if np.any(inside):
        out[inside] = interior(flat[inside])
    return out.reshape(x_arr.shape)


def sample_abscissae(n: int, x0: float, dx: float) -> NDArray[np.float64]:
    """Returns the ``n`` equispaced abscissae ``x0 + i * dx`` in float64."""
    return x0 + dx * np.arange(n, dtype=np.float64)
