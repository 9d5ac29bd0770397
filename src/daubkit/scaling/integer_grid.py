"""Values of the Daubechies scaling function and its derivatives at the integers."""

from __future__ import annotations

from functools import lru_cache

import numpy as np
from mpmath import mp
from numpy.typing import DTypeLike, NDArray

from daubkit.scaling.filters import FILTER_DPS, daubechies_filter_mp, mp_to_numpy
from daubkit.utils.validate import (
    validate_derivative_order,
    validate_vanishing_moments,
)

__all__ = ["integer_grid", "integer_grid_mp"]


@lru_cache(maxsize=None)
def integer_grid_mp(p: int, order: int) -> tuple:
    """Computes ``phi_p^(order)(k)`` for ``k = 0, ..., 2p - 1`` in ``mpmath``.

    Restricted to the integers, the two-scale relation differentiated
    ``order`` times reads

    .. math::

        \\phi^{(d)}(k) = 2^d \\sqrt{2} \\sum_m h_{2k-m} \\phi^{(d)}(m),

    so the interior values form an eigenvector with eigenvalue ``2^-d``. The
    eigenvector is fixed by the moment condition
    ``sum_k (-k)^d phi^(d)(k) = d!``, which reduces to ``sum_k phi(k) = 1``
    for ``d = 0``. Both conditions are stacked into one overdetermined
    system and solved by QR least squares.

    Args:
        p: Number of vanishing moments.
        order: Derivative order, ``0 <= order < min(p, 4)``.

    Returns:
        Tuple of ``2p`` ``mpf`` values; the first and last are zero.
    """
    p = validate_vanishing_moments(p)
    order = validate_derivative_order(p, order)
    h = daubechies_filter_mp(p)
    interior = range(1, 2 * p - 1)
    n = len(interior)

    with mp.workdps(FILTER_DPS):
        scale = mp.mpf(2) ** order * mp.sqrt(2)
        a = mp.matrix(n + 1, n)
        b = mp.matrix(n + 1, 1)
        for row, k in enumerate(interior):
            for col, m in enumerate(interior):
                j = 2 * k - m
                if 0 <= j < len(h):
                    a[row, col] = scale * h[j]
            a[row, row] -= 1
        for col, m in enumerate(interior):
            a[n, col] = mp.mpf(-m) ** order
        b[n] = mp.factorial(order)

        x, _residual = mp.qr_solve(a, b)
        values = tuple(+x[i] for i in range(n))

    return (mp.mpf(0),) + values + (mp.mpf(0),)


def integer_grid(
    p: int,
    order: int = 0,
    dtype: DTypeLike = np.float64,
) -> NDArray[np.floating]:
    """Returns ``phi_p^(order)`` at the integers ``0..2p-1`` as a numpy array."""
    return mp_to_numpy(integer_grid_mp(p, order), dtype)
