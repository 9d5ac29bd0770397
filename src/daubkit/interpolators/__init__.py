"""Candidate interpolants for tabulated scaling functions."""

from daubkit.interpolators.cardinal import (
    CardinalBSpline,
    CardinalHermiteSpline,
    MakimaInterpolant,
    PchipInterpolant,
)
from daubkit.interpolators.catalog import (
    CANDIDATES,
    CandidateSpec,
    GridSet,
    csv_columns,
    enabled_candidates,
)
from daubkit.interpolators.local import (
    LinearInterpolant,
    MatchedHolderInterpolant,
    TaylorInterpolant,
)
from daubkit.interpolators.support import Interpolant

__all__ = [
    "CANDIDATES",
    "CandidateSpec",
    "GridSet",
    "Interpolant",
    "csv_columns",
    "enabled_candidates",
    "LinearInterpolant",
    "TaylorInterpolant",
    "MatchedHolderInterpolant",
    "CardinalBSpline",
    "CardinalHermiteSpline",
    "PchipInterpolant",
    "MakimaInterpolant",
]
