"""The closed catalog of candidate interpolants.

Every entry of :data:`CANDIDATES` names a CSV column, a console label, the
smallest number of vanishing moments for which the candidate is enabled,
whether the error scan includes the right end of the support, and a builder
turning a :class:`GridSet` into an :class:`~daubkit.interpolators.support.Interpolant`.

The order of :data:`CANDIDATES` is the column order of the convergence
tables and the order in which candidates are evaluated.

Example:
    >>> from daubkit.interpolators.catalog import csv_columns, enabled_candidates
    >>> [spec.column for spec in enabled_candidates(3)][-2:]
    ['quintic_hermite', 'second_order_taylor']
    >>> len(csv_columns(4))
    14
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np
from numpy.typing import NDArray

from daubkit.interpolators.cardinal import (
    CardinalBSpline,
    CardinalHermiteSpline,
    MakimaInterpolant,
    PchipInterpolant,
)
from daubkit.interpolators.local import (
    LinearInterpolant,
    MatchedHolderInterpolant,
    TaylorInterpolant,
)
from daubkit.interpolators.support import Interpolant, sample_abscissae
from daubkit.utils.validate import validate_vanishing_moments

__all__ = [
    "GridSet",
    "CandidateSpec",
    "CANDIDATES",
    "enabled_candidates",
    "csv_columns",
    "max_derivative_needed",
]


@dataclass(frozen=True)
class GridSet:
    """Dyadic samples of a scaling function and its derivatives at one refinement level.

    Attributes:
        p: Number of vanishing moments.
        refinement: Refinement level ``r``.
        derivatives: ``(phi, phi', ...)`` sampled at ``k / 2^r``, in the working dtype.
    """

    p: int
    refinement: int
    derivatives: tuple[NDArray[np.floating], ...]

    @property
    def size(self) -> int:
        """Number of samples per grid."""
        return self.derivatives[0].size

    @property
    def dx(self) -> float:
        """Grid spacing ``(2p - 1) / (size - 1)``, in the working dtype."""
        dtype = self.derivatives[0].dtype.type
        return dtype(2 * self.p - 1) / dtype(self.size - 1)

    def copies(self, count: int) -> list[NDArray[np.floating]]:
        """Returns fresh copies of the first ``count`` grids.

        Raises:
            ValueError: If fewer than ``count`` grids are available.
        """
        if count > len(self.derivatives):
            raise ValueError(
                f"{count} derivative grids requested but only {len(self.derivatives)} available."
            )
        return [g.copy() for g in self.derivatives[:count]]

    def abscissae(self) -> NDArray[np.float64]:
        """Sample abscissae in float64."""
        return sample_abscissae(self.size, 0.0, float(self.dx))


@dataclass(frozen=True)
class CandidateSpec:
    """One entry of the candidate catalog.

    Attributes:
        column: CSV column name.
        label: Name printed in the ranking.
        min_p: Smallest ``p`` for which the candidate is evaluated.
        grids_needed: How many of ``(phi, phi', phi'', phi''')`` the builder reads.
        build: Factory from a :class:`GridSet` to an interpolant.
        inclusive_end: Whether the error scan includes the right end of the support.
    """

    column: str
    label: str
    min_p: int
    grids_needed: int
    build: Callable[[GridSet], Interpolant]
    inclusive_end: bool = True


def _matched_holder(g: GridSet) -> Interpolant:
    phi, dphi = g.copies(2)
    return MatchedHolderInterpolant(phi, dphi, g.refinement)


def _linear(g: GridSet) -> Interpolant:
    (phi,) = g.copies(1)
    return LinearInterpolant(phi, 0.0, g.dx)


def _clamped_b_spline(degree: int) -> Callable[[GridSet], Interpolant]:
    def build(g: GridSet) -> Interpolant:
        phi, dphi = g.copies(2)
        return CardinalBSpline(
            phi, 0.0, g.dx,
            degree=degree,
            left_derivatives=(dphi[0],),
            right_derivatives=(dphi[-1],),
        )
    return build


def _quintic_b_spline(g: GridSet) -> Interpolant:
    (phi,) = g.copies(1)
    return CardinalBSpline(
        phi, 0.0, g.dx,
        degree=5,
        left_derivatives=(0.0, 0.0),
        right_derivatives=(0.0, 0.0),
    )


def _hermite(n_grids: int) -> Callable[[GridSet], Interpolant]:
    def build(g: GridSet) -> Interpolant:
        return CardinalHermiteSpline(g.copies(n_grids), 0.0, g.dx)
    return build


def _pchip(g: GridSet) -> Interpolant:
    (phi,) = g.copies(1)
    return PchipInterpolant(g.abscissae(), phi)


def _makima(g: GridSet) -> Interpolant:
    (phi,) = g.copies(1)
    return MakimaInterpolant(g.abscissae(), phi)


def _taylor(n_grids: int) -> Callable[[GridSet], Interpolant]:
    def build(g: GridSet) -> Interpolant:
        return TaylorInterpolant(g.copies(n_grids), 0.0, g.dx)
    return build


#: The candidate catalog, in column order.
CANDIDATES: tuple[CandidateSpec, ...] = (
    CandidateSpec("matched_holder", "matched_holder", 2, 2, _matched_holder, inclusive_end=False),
    CandidateSpec("linear", "linear", 2, 1, _linear),
    CandidateSpec("quadratic_b_spline", "quadratic_b_spline", 2, 2, _clamped_b_spline(2)),
    CandidateSpec("cubic_b_spline", "cubic_b_spline", 2, 2, _clamped_b_spline(3)),
    CandidateSpec("quintic_b_spline", "quintic_b_spline", 2, 1, _quintic_b_spline),
    CandidateSpec("cubic_hermite", "cubic_hermite_spline", 2, 2, _hermite(2)),
    CandidateSpec("pchip", "pchip", 2, 1, _pchip),
    CandidateSpec("makima", "makima", 2, 1, _makima),
    CandidateSpec("fo_taylor", "first_order_taylor", 2, 2, _taylor(2)),
    CandidateSpec("quintic_hermite", "quintic_hermite_spline", 3, 3, _hermite(3)),
    CandidateSpec("second_order_taylor", "second_order_taylor", 3, 3, _taylor(3)),
    CandidateSpec("third_order_taylor", "third_order_taylor", 4, 4, _taylor(4)),
    CandidateSpec("septic_hermite", "septic_hermite_spline", 4, 4, _hermite(4)),
)


def enabled_candidates(p: int) -> tuple[CandidateSpec, ...]:
    """Returns the catalog entries evaluated for ``p`` vanishing moments, in column order."""
    p = validate_vanishing_moments(p)
    return tuple(spec for spec in CANDIDATES if p >= spec.min_p)


def csv_columns(p: int) -> list[str]:
    """Returns the convergence-table header for ``p``, starting with ``r``."""
    return ["r"] + [spec.column for spec in enabled_candidates(p)]


def max_derivative_needed(p: int) -> int:
    """Highest derivative order any enabled candidate reads for ``p``."""
    return max(spec.grids_needed for spec in enabled_candidates(p)) - 1
