"""Distances between floating-point numbers measured in units in the last place."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from daubkit.utils.validate import bit_view_dtype, validate_real_dtype

__all__ = ["float_distance"]


def _ordered_bits(values: NDArray[np.floating]) -> tuple[NDArray[np.bool_], NDArray[np.int64]]:
    """Splits IEEE values into sign flags and magnitudes of their bit patterns.

    The magnitude of the bit pattern grows monotonically with ``|x|``, so the
    signed magnitude maps the floats of one type onto consecutive integers.
    """
    nbits = 8 * values.dtype.itemsize
    bits = values.view(bit_view_dtype(values.dtype)).astype(np.uint64)
    negative = (bits >> np.uint64(nbits - 1)).astype(bool)
    magnitude = (bits & np.uint64((1 << (nbits - 1)) - 1)).astype(np.int64)
    return negative, magnitude


def float_distance(a: ArrayLike, b: ArrayLike, dtype: DTypeLike = np.float64) -> NDArray[np.float64]:
    """Counts the representable values of ``dtype`` between ``a`` and ``b``.

    The result is signed: positive when ``b > a``. Both zeros count as the
    same value. Non-finite inputs give an infinite distance.

    Args:
        a: First value(s); rounded to ``dtype``.
        b: Second value(s); rounded to ``dtype``.
        dtype: float16, float32 or float64.

    Returns:
        Distances as float64, broadcast to the shape of ``a`` and ``b``.

    Example:
        >>> import numpy as np
        >>> from daubkit.evaluation.float_distance import float_distance
        >>> float(float_distance(1.0, np.nextafter(1.0, 2.0)))
        1.0
        >>> float(float_distance(np.float32(-1e-45), np.float32(1e-45), np.float32))
        2.0
    """
    dtype = validate_real_dtype(dtype)
    a_arr, b_arr = np.broadcast_arrays(np.asarray(a, dtype=dtype), np.asarray(b, dtype=dtype))
    a_arr = np.array(a_arr, copy=True)
    b_arr = np.array(b_arr, copy=True)

    neg_a, mag_a = _ordered_bits(a_arr)
    neg_b, mag_b = _ordered_bits(b_arr)
    ord_a = np.where(neg_a, -mag_a, mag_a)
    ord_b = np.where(neg_b, -mag_b, mag_b)

    # Same sign: exact integer difference. Opposite signs: the magnitudes
    # add up and may exceed int64, so they are combined in float64.
    same_sign = neg_a == neg_b
    with np.errstate(over="ignore"):
        exact = (ord_b - ord_a).astype(np.float64)
    widened = ord_b.astype(np.float64) - ord_a.astype(np.float64)
    distance = np.where(same_sign | (mag_a == 0) | (mag_b == 0), exact, widened)

    finite = np.isfinite(a_arr) & np.isfinite(b_arr)
    return np.where(finite, distance, np.inf)
