"""Finds the most accurate interpolant of each Daubechies scaling function.

For every ``p`` the driver

1. builds the reference grid ``phi_p`` at refinement ``r_max`` in the precise
   type and narrows it to the working type;
2. for each ``r`` in ``r_min .. r_max - 2`` tabulates ``phi_p`` and the
   derivatives the enabled candidates need, builds every candidate in
   catalog order, and measures its sup error on the reference grid;
3. writes one CSV row per ``r`` and prints the candidates ranked by sup
   error together with the winner.

Only one candidate exists at a time; it is dropped before the next one is
built. Everything runs sequentially, so the output is deterministic.

Example:
    Run a reduced experiment in a scratch directory (the command line runs
    ``p = 2..15`` with ``r_max = 17``)::

        >>> from daubkit.experiment.config import ExperimentConfig
        >>> from daubkit.experiment.driver import run_experiment
        >>> cfg = ExperimentConfig(p_values=(2,), r_max=8, output_dir="/tmp")
        >>> table = run_experiment(2, cfg)  # doctest: +SKIP
        >>> table.levels[0].winner  # doctest: +SKIP
        'linear'
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from daubkit.evaluation.sup_error import ErrorRecord, sup_error
from daubkit.experiment.config import ExperimentConfig
from daubkit.experiment.csv_report import ConvergenceReport, format_value, report_filename
from daubkit.interpolators.catalog import (
    GridSet,
    csv_columns,
    enabled_candidates,
    max_derivative_needed,
)
from daubkit.logger import daubkit_logger
from daubkit.scaling.dyadic_grid import dyadic_grid

__all__ = [
    "LevelResult",
    "ConvergenceTable",
    "reference_grid",
    "level_grids",
    "evaluate_level",
    "run_experiment",
    "main",
]


@dataclass
class LevelResult:
    """Errors of all candidates at one refinement level.

    Attributes:
        refinement: Refinement level ``r``.
        dx: Grid spacing ``2^-r``.
        records: Error records keyed by CSV column; candidates that could not
            be built are absent.
        ranking: ``(sup, label)`` pairs in ascending sup order; ties keep
            catalog order and NaN ranks as ``inf``.
    """

    refinement: int
    dx: float
    records: dict[str, ErrorRecord] = field(default_factory=dict)
    ranking: list[tuple[float, str]] = field(default_factory=list)

    @property
    def winner(self) -> str | None:
        """Label of the candidate with the smallest sup error."""
        return self.ranking[0][1] if self.ranking else None

    def row(self, columns: list[str]) -> list[float | None]:
        """Sup errors in the order of ``columns`` (without the leading ``r``)."""
        return [
            self.records[c].sup if c in self.records else None
            for c in columns[1:]
        ]


@dataclass
class ConvergenceTable:
    """Everything measured for one scaling function."""

    p: int
    path: Path
    columns: list[str]
    levels: list[LevelResult] = field(default_factory=list)


def reference_grid(p: int, r_max: int, real, precise) -> NDArray[np.floating]:
    """Computes ``phi_p`` at refinement ``r_max`` in ``precise`` and narrows it to ``real``."""
    phi_dense_precise = dyadic_grid(p, 0, r_max, dtype=precise)
    phi_dense = phi_dense_precise.astype(real)
    del phi_dense_precise
    return phi_dense


def level_grids(p: int, refinement: int, max_order: int, real, precise) -> GridSet:
    """Tabulates ``phi_p, ..., phi_p^(max_order)`` at ``refinement`` in the working type."""
    derivatives = tuple(
        dyadic_grid(p, order, refinement, dtype=precise).astype(real)
        for order in range(max_order + 1)
    )
    return GridSet(p=p, refinement=refinement, derivatives=derivatives)


def _rank_key(sup: float) -> float:
    return math.inf if math.isnan(sup) else sup


def evaluate_level(
    grids: GridSet,
    reference: NDArray[np.floating],
    dx_dense: float,
    config: ExperimentConfig,
) -> LevelResult:
    """Builds and measures every candidate enabled for ``grids.p``.

    A candidate whose construction fails with ``ValueError`` or
    ``LinAlgError`` is logged and left out of the result.
    """
    result = LevelResult(refinement=grids.refinement, dx=float(grids.dx))
    for spec in enabled_candidates(grids.p):
        start = time.perf_counter()
        try:
            interpolant = spec.build(grids)
        except (ValueError, np.linalg.LinAlgError) as exc:
            daubkit_logger.warning(
                "Skipping %s for p=%d at r=%d: %s",
                spec.label, grids.p, grids.refinement, exc,
            )
            continue

        record = sup_error(
            reference,
            interpolant,
            dx_dense,
            config.mask_floor,
            real=config.real,
            inclusive_end=spec.inclusive_end,
            name=spec.label,
        )
        del interpolant
        result.records[spec.column] = record
        daubkit_logger.info(
            "p=%d r=%d %s: sup=%.3e ulp=%.3e at x=%.6f (%.2fs)",
            grids.p, grids.refinement, spec.label, record.sup, record.ulp,
            record.worst_abscissa, time.perf_counter() - start,
        )

    result.ranking = sorted(
        ((rec.sup, rec.name) for rec in result.records.values()),
        key=lambda item: _rank_key(item[0]),
    )
    return result


def _print_ranking(p: int, level: LevelResult, digits: int) -> None:
    for sup, label in level.ranking:
        print(f"\t{format_value(sup, digits)} is error of {label}")
    print(f"\tThe best method for p = {p} is the {level.winner}")


def run_experiment(p: int, config: ExperimentConfig | None = None) -> ConvergenceTable:
    """Runs the interpolator comparison for one scaling function.

    Args:
        p: Number of vanishing moments.
        config: Experiment configuration; defaults to :class:`ExperimentConfig`.

    Returns:
        The :class:`ConvergenceTable` that was also written to
        ``config.output_dir``.

    Raises:
        OSError: If the convergence table cannot be written.
    """
    config = config or ExperimentConfig()
    columns = csv_columns(p)
    path = config.output_dir / report_filename(p)
    table = ConvergenceTable(p=p, path=path, columns=columns)
    max_order = max_derivative_needed(p)

    with ConvergenceReport(path, columns, config.digits) as report:
        print("Computing phi_dense_precise")
        phi_dense = reference_grid(p, config.r_max, config.real, config.precise)
        print("Done")
        dx_dense = (2 * p - 1) / (phi_dense.size - 1)

        for r in config.refinements:
            grids = level_grids(p, r, max_order, config.real, config.precise)
            print(f"dx = 1/{1 << r} = {format_value(grids.dx, config.digits)}")

            level = evaluate_level(grids, phi_dense, dx_dense, config)
            del grids
            report.write_row(r, level.row(columns))
            _print_ranking(p, level, config.digits)
            table.levels.append(level)

    return table


def main(config: ExperimentConfig | None = None) -> int:
    """Runs the experiment for every configured ``p``.

    A ``p`` whose table cannot be written is logged and skipped.

    Returns:
        ``0`` if every table was written, ``1`` otherwise.
    """
    config = config or ExperimentConfig()
    failed = []
    for p in config.p_values:
        try:
            run_experiment(p, config)
        except OSError as exc:
            daubkit_logger.error("Could not write the convergence table for p=%d: %s", p, exc)
            failed.append(p)
    return 1 if failed else 0
