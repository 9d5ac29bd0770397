"""Configuration of the interpolator selection experiment.

The command line runs with the defaults below; smaller configurations
(fewer ``p``, lower ``r_max``) are only built programmatically, for example
in tests.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np

from daubkit.evaluation.sup_error import MASK_FLOOR_FACTOR
from daubkit.utils.validate import (
    validate_precision_pair,
    validate_refinement,
    validate_vanishing_moments,
)

__all__ = ["ExperimentConfig", "DEFAULT_P_VALUES", "DEFAULT_R_MAX"]

#: Scaling functions studied by default.
DEFAULT_P_VALUES = tuple(range(2, 16))
#: Refinement level of the reference grid.
DEFAULT_R_MAX = 17


class ExperimentConfig:
    """Configuration of the interpolator selection experiment."""

    def __init__(
        self,
        p_values=DEFAULT_P_VALUES,
        r_max: int = DEFAULT_R_MAX,
        r_min: int = 2,
        real=np.float64,
        precise=np.longdouble,
        output_dir: str | Path = ".",
        mask_floor_factor: float = MASK_FLOOR_FACTOR,
    ):
        """Initialize configuration.

        Args:
            p_values:
                Numbers of vanishing moments to study, each in ``[2, 15]``.
                Processed in the given order.

            r_max:
                Refinement level of the reference grid. Candidates are
                built at every level ``r_min <= r <= r_max - 2``, so the
                reference is always at least four times finer than the
                densest candidate grid.

            r_min:
                Coarsest candidate refinement level.

            real:
                Working floating type under study: ``float16``,
                ``float32`` or ``float64``. Candidate grids are narrowed to
                this type and errors are measured in it.

            precise:
                Floating type in which all dyadic grids are computed before
                being narrowed to ``real``. Must carry at least as many
                mantissa bits as ``real``.

            output_dir:
                Directory receiving one
                ``daubechies_<p>_scaling_convergence.csv`` per ``p``.

            mask_floor_factor:
                Reference samples with ``|phi| < mask_floor_factor * eps``
                are excluded from the error scan.

        Raises:
            ValueError: If any ``p`` is outside the catalog, the refinement
                range is empty or the precision pair is unsupported.
        """
        self.p_values = tuple(validate_vanishing_moments(p) for p in p_values)
        if not self.p_values:
            raise ValueError("p_values must not be empty.")

        self.r_max = validate_refinement(r_max)
        self.r_min = validate_refinement(r_min)
        if self.r_min + 2 > self.r_max:
            raise ValueError(
                f"r_max must be at least r_min + 2; got r_min={self.r_min}, r_max={self.r_max}."
            )

        self.real, self.precise = validate_precision_pair(real, precise)
        self.output_dir = Path(output_dir)
        if mask_floor_factor < 0:
            raise ValueError("mask_floor_factor must be non-negative.")
        self.mask_floor_factor = float(mask_floor_factor)

    @property
    def refinements(self) -> range:
        """Candidate refinement levels ``r_min .. r_max - 2``."""
        return range(self.r_min, self.r_max - 1)

    @property
    def mask_floor(self) -> float:
        """Near-zero threshold of the error scan in the working type."""
        return self.mask_floor_factor * float(np.finfo(self.real).eps)

    @property
    def digits(self) -> int:
        """Decimal places used when printing errors: ``digits10 + 3`` of the working type."""
        return np.finfo(self.real).precision + 3
