"""Sup-norm error of an interpolant against a dense reference grid."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, DTypeLike

from daubkit.evaluation.float_distance import float_distance
from daubkit.utils.types import Evaluable
from daubkit.utils.validate import validate_real_dtype, validate_uniform_samples

__all__ = ["ErrorRecord", "default_mask_floor", "sup_error"]

#: Reference samples below this many machine epsilons are skipped.
MASK_FLOOR_FACTOR = 100


@dataclass(frozen=True)
class ErrorRecord:
    """Outcome of one sup-norm scan.

    Attributes:
        sup: Largest absolute difference; ``inf`` if the candidate produced
            a non-finite value.
        ulp: Largest distance in units in the last place.
        name: Candidate name.
        worst_abscissa: Abscissa of the largest ULP distance.
        worst_expected: Reference value there.
        worst_computed: Candidate value there.
        evaluated: Number of samples that passed the near-zero mask.
    """

    sup: float
    ulp: float
    name: str = ""
    worst_abscissa: float = math.nan
    worst_expected: float = math.nan
    worst_computed: float = math.nan
    evaluated: int = 0


def default_mask_floor(real: DTypeLike = np.float64) -> float:
    """Returns ``100 * eps`` of ``real``."""
    return MASK_FLOOR_FACTOR * float(np.finfo(real).eps)


def sup_error(
    reference: ArrayLike,
    candidate: Evaluable,
    dx_dense: float,
    mask_floor: float | None = None,
    *,
    real: DTypeLike | None = None,
    inclusive_end: bool = True,
    name: str = "",
) -> ErrorRecord:
    """Measures how far ``candidate`` strays from ``reference``.

    The reference holds samples at ``t_i = i * dx_dense``. Samples with
    ``|reference[i]| < mask_floor`` are dropped before the candidate is
    called, so the candidate is only evaluated where the reference is
    numerically non-zero. The remaining abscissae are passed to the
    candidate in one vectorized call, in increasing order, as float64
    values ``i * dx_dense``; the candidate rounds them to its own type.

    Args:
        reference: Dense reference samples.
        candidate: Vectorized interpolant.
        dx_dense: Spacing of the reference grid.
        mask_floor: Near-zero threshold. Defaults to :func:`default_mask_floor`.
        real: Working dtype. Defaults to the dtype of ``reference``.
        inclusive_end: If ``False`` the last reference sample is not scanned.
        name: Candidate name stored in the record.

    Returns:
        An :class:`ErrorRecord`. When every sample is masked, ``sup`` and
        ``ulp`` are zero and ``evaluated`` is zero.
    """
    ref = validate_uniform_samples(reference, min_size=1, name="reference")
    real_dt = validate_real_dtype(ref.dtype if real is None else real)
    ref = ref.astype(real_dt, copy=False)
    if mask_floor is None:
        mask_floor = default_mask_floor(real_dt)

    n = ref.size if inclusive_end else ref.size - 1
    idx = np.flatnonzero(np.abs(ref[:n]) >= mask_floor)
    if idx.size == 0:
        return ErrorRecord(sup=0.0, ulp=0.0, name=name)

    # float16 holds integers exactly only up to 2048
    t = idx.astype(np.float64) * float(dx_dense)
    expected = ref[idx]
    computed = np.asarray(candidate(t), dtype=real_dt)

    with np.errstate(invalid="ignore", over="ignore"):
        diff = np.abs(expected - computed)
    diff = np.where(np.isfinite(diff), diff, np.inf)
    ulp = np.abs(float_distance(computed, expected, real_dt))

    worst = int(np.argmax(ulp))
    return ErrorRecord(
        sup=float(np.max(diff)),
        ulp=float(ulp[worst]),
        name=name,
        worst_abscissa=float(t[worst]),
        worst_expected=float(expected[worst]),
        worst_computed=float(computed[worst]),
        evaluated=int(idx.size),
    )
