"""Daubechies low-pass filter coefficients.

The filters are obtained by spectral factorization of the Daubechies
polynomial

.. math::

    P(y) = \\sum_{k=0}^{p-1} \\binom{p-1+k}{k} y^k,
    \\qquad y = \\sin^2(\\omega / 2),

keeping, for every root of ``P``, the root of the associated quadratic in
``z = e^{-i\\omega}`` that lies outside the unit circle. This gives the
extremal-phase filters tabulated by Daubechies (and exposed by PyWavelets as
``dbN.rec_lo``), normalized so that the coefficients sum to ``sqrt(2)``.

All arithmetic is carried out with ``mpmath`` at :data:`FILTER_DPS`
significant digits, so the coefficients can be narrowed to any numpy
floating type without loss.
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np
from mpmath import mp
from numpy.typing import DTypeLike, NDArray

from daubkit.utils.validate import validate_vanishing_moments

__all__ = [
    "FILTER_DPS",
    "daubechies_filter",
    "daubechies_filter_mp",
    "mp_to_numpy",
]

#: Working precision (decimal digits) of the filter and integer-grid computations.
FILTER_DPS = 60


def _poly_mul(a: list, b: list) -> list:
    """Multiplies two polynomials given by ascending coefficient lists."""
    out = [mp.mpc(0)] * (len(a) + len(b) - 1)
    for i, ai in enumerate(a):
        for j, bj in enumerate(b):
            out[i + j] += ai * bj
    return out


def _daubechies_roots(p: int) -> list:
    """Returns the roots of the Daubechies polynomial ``P`` of degree ``p - 1``."""
    coeffs = [mp.binomial(p - 1 + k, k) for k in range(p)]
    if len(coeffs) == 2:
        return [-coeffs[0] / coeffs[1]]
    return list(
        mp.polyroots(coeffs, maxsteps=500, extraprec=4 * FILTER_DPS, asc=True)
    )


@lru_cache(maxsize=None)
def daubechies_filter_mp(p: int) -> tuple:
    """Computes the Daubechies filter with ``p`` vanishing moments in ``mpmath``.

    Args:
        p: Number of vanishing moments, in ``[2, 15]``.

    Returns:
        Tuple of ``2 * p`` ``mpf`` coefficients ``h_0, ..., h_{2p-1}`` with
        ``sum(h) == sqrt(2)``.

    Raises:
        ValueError: If ``p`` is outside the catalog.
    """
    p = validate_vanishing_moments(p)
    with mp.workdps(FILTER_DPS):
        remainder = [mp.mpc(1)]
        for y in _daubechies_roots(p):
            # sin^2(w/2) = (2 - z - 1/z) / 4  =>  z^2 - 2(1 - 2y) z + 1 = 0
            b = 1 - 2 * y
            s = mp.sqrt(b * b - 1)
            z = b + s if abs(b + s) > 1 else b - s
            remainder = _poly_mul(remainder, [-z / (1 - z), 1 / (1 - z)])

        h = remainder
        for _ in range(p):
            h = _poly_mul(h, [mp.mpf(1) / 2, mp.mpf(1) / 2])

        root2 = mp.sqrt(2)
        return tuple(+(root2 * mp.re(c)) for c in h)


def mp_to_numpy(values, dtype: DTypeLike) -> NDArray[np.floating]:
    """Narrows a sequence of ``mpf`` values to a numpy array of ``dtype``.

    Each value is split into a leading double and its double remainder, so
    types wider than ``float64`` (``numpy.longdouble``) receive more than 53
    significant bits.

    Args:
        values: Iterable of ``mpf`` (or anything ``float`` accepts).
        dtype: Target numpy floating type.

    Returns:
        1D array of ``dtype``.
    """
    dtype = np.dtype(dtype)
    hi = np.array([float(v) for v in values], dtype=np.float64)
    lo = np.array([float(v - float(v)) for v in values], dtype=np.float64)
    return hi.astype(dtype) + lo.astype(dtype)


def daubechies_filter(p: int, dtype: DTypeLike = np.float64) -> NDArray[np.floating]:
    """Returns the Daubechies filter with ``p`` vanishing moments as a numpy array.

    Example:
        >>> from daubkit.scaling.filters import daubechies_filter
        >>> h = daubechies_filter(2)
        >>> [round(float(c), 6) for c in h]
        [0.482963, 0.836516, 0.224144, -0.12941]
    """
    return mp_to_numpy(daubechies_filter_mp(p), dtype)
