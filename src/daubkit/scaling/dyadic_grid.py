"""Dyadic grids of Daubechies scaling functions and their derivatives.

Starting from the values at the integers, each refinement step halves the
spacing: samples already on the grid are kept, and the new midpoints follow
from the two-scale relation

.. math::

    \\phi^{(d)}(x) = 2^d \\sqrt{2} \\sum_k h_k \\phi^{(d)}(2x - k).

On the level-``j`` grid (spacing ``2^-j``) the abscissa ``2x - k`` of a new
level-``j + 1`` sample ``i`` is the level-``j`` index ``i - k 2^j``, so every
tap reduces to a strided slice of the coarser grid.
"""

from __future__ import annotations

import numpy as np
from mpmath import mp
from numpy.typing import DTypeLike, NDArray

from daubkit.logger import daubkit_logger
from daubkit.scaling.filters import FILTER_DPS, daubechies_filter_mp, mp_to_numpy
from daubkit.scaling.integer_grid import integer_grid
from daubkit.utils.validate import (
    validate_derivative_order,
    validate_refinement,
    validate_vanishing_moments,
)

__all__ = [
    "dyadic_grid",
    "dyadic_abscissae",
    "grid_size",
    "refine",
]


def grid_size(p: int, refinement: int) -> int:
    """Number of samples of the level-``refinement`` grid on ``[0, 2p - 1]``."""
    return (2 * p - 1) * (1 << refinement) + 1


def _scaled_taps(p: int, order: int, dtype: np.dtype) -> NDArray[np.floating]:
    """Returns ``2^order * sqrt(2) * h_k`` narrowed to ``dtype``."""
    with mp.workdps(FILTER_DPS):
        scale = mp.mpf(2) ** order * mp.sqrt(2)
        taps = [+(scale * hk) for hk in daubechies_filter_mp(p)]
    return mp_to_numpy(taps, dtype)


def refine(
    grid: NDArray[np.floating],
    taps: NDArray[np.floating],
    level: int,
) -> NDArray[np.floating]:
    """Performs one dyadic refinement step.

    Args:
        grid: Samples on the level-``level`` grid, zero at both ends.
        taps: Scaled filter ``2^d sqrt(2) h_k``, same dtype as ``grid``.
        level: Refinement level of ``grid`` (``0`` for the integer grid).

    Returns:
        Samples on the level-``level + 1`` grid, of length ``2 * (len(grid) - 1) + 1``.
    """
    n_old = grid.size
    n_new = 2 * (n_old - 1) + 1
    stride = 1 << level

    out = np.empty(n_new, dtype=grid.dtype)
    out[::2] = grid

    # odd sample m sits at index 2m + 1 and reads grid[2m + 1 - k * stride]
    acc = np.zeros(n_old - 1, dtype=grid.dtype)
    for k, c in enumerate(taps):
        shift = k * stride
        m_lo = shift // 2
        m_hi = min(n_old - 2, (n_old - 2 + shift) // 2)
        if m_lo > m_hi:
            continue
        start = 2 * m_lo + 1 - shift
        stop = 2 * m_hi + 1 - shift
        acc[m_lo:m_hi + 1] += c * grid[start:stop + 1:2]
    out[1::2] = acc
    return out


def dyadic_grid(
    p: int,
    order: int,
    refinement: int,
    dtype: DTypeLike = np.longdouble,
) -> NDArray[np.floating]:
    """Samples ``phi_p^(order)`` on the dyadic grid ``k / 2^refinement``.

    Args:
        p: Number of vanishing moments, in ``[2, 15]``.
        order: Derivative order, in ``[0, 3]`` and below ``p``.
        refinement: Dyadic refinement level ``r >= 0``.
        dtype: Floating type the recursion runs in. Defaults to
            ``numpy.longdouble`` so that derivative grids at high ``r`` keep
            their accuracy once narrowed to ``float64``.

    Returns:
        Array of length ``(2p - 1) * 2^r + 1`` whose first and last entries are zero.

    Raises:
        ValueError: If ``p``, ``order`` or ``refinement`` is unsupported.

    Example:
        >>> import numpy as np
        >>> from daubkit.scaling.dyadic_grid import dyadic_grid
        >>> phi = dyadic_grid(2, 0, 3, dtype=np.float64)
        >>> phi.size, float(phi[0]), float(phi[-1])
        (25, 0.0, 0.0)
        >>> round(float(phi.sum()) / 8, 12)
        1.0
    """
    p = validate_vanishing_moments(p)
    order = validate_derivative_order(p, order)
    refinement = validate_refinement(refinement)
    dtype = np.dtype(dtype)

    taps = _scaled_taps(p, order, dtype)
    grid = integer_grid(p, order, dtype)
    for level in range(refinement):
        grid = refine(grid, taps, level)

    daubkit_logger.debug(
        "dyadic_grid(p=%d, order=%d, r=%d) -> %d samples of %s",
        p, order, refinement, grid.size, dtype,
    )
    return grid


def dyadic_abscissae(
    p: int,
    refinement: int,
    dtype: DTypeLike = np.float64,
) -> NDArray[np.floating]:
    """Returns the abscissae ``k / 2^refinement`` matching :func:`dyadic_grid`."""
    dtype = np.dtype(dtype)
    n = grid_size(p, refinement)
    return np.arange(n, dtype=dtype) / dtype.type(1 << refinement)
