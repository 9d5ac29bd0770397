"""Tests for daubkit.experiment.driver and the command line entry point."""

from __future__ import annotations

import logging
import math

import numpy as np
import pytest

import daubkit.__main__ as entry
from daubkit.evaluation.sup_error import ErrorRecord
from daubkit.experiment.config import ExperimentConfig
from daubkit.experiment.csv_report import report_filename
from daubkit.experiment.driver import (
    LevelResult,
    evaluate_level,
    level_grids,
    main,
    reference_grid,
    run_experiment,
)
from daubkit.interpolators.catalog import CANDIDATES, GridSet, csv_columns, max_derivative_needed

LABELS = {spec.column: spec.label for spec in CANDIDATES}


def _small_config(tmp_path, p_values=(2,), r_max=6):
    return ExperimentConfig(p_values=p_values, r_max=r_max, output_dir=tmp_path)


def _read_table(path):
    lines = path.read_text(encoding="ascii").splitlines()
    return [line.split(", ") for line in lines]


def test_reference_grid_is_narrowed_precise_grid():
    """Tests that the reference equals the precise grid cast to the working type."""
    from daubkit.scaling.dyadic_grid import dyadic_grid

    ref = reference_grid(3, 6, np.float64, np.longdouble)
    assert ref.dtype == np.float64
    np.testing.assert_array_equal(ref, dyadic_grid(3, 0, 6, dtype=np.longdouble).astype(np.float64))


def test_level_grids_tabulates_requested_derivatives():
    """Tests that one grid per derivative order is produced in the working type."""
    grids = level_grids(4, 3, 3, np.float32, np.float64)
    assert len(grids.derivatives) == 4
    assert all(g.dtype == np.float32 for g in grids.derivatives)
    assert grids.size == 7 * 8 + 1


def test_level_result_row_and_winner():
    """Tests that missing candidates leave None and NaN ranks last."""
    level = LevelResult(refinement=2, dx=0.25)
    assert level.winner is None
    level.records["linear"] = ErrorRecord(sup=0.5, ulp=1.0, name="linear")
    assert level.row(["r", "matched_holder", "linear"]) == [None, 0.5]


def test_evaluate_level_ranks_by_sup(tmp_path):
    """Tests that the ranking is ascending in sup and the winner is its head."""
    cfg = _small_config(tmp_path)
    ref = reference_grid(2, 6, cfg.real, cfg.precise)
    grids = level_grids(2, 3, max_derivative_needed(2), cfg.real, cfg.precise)
    level = evaluate_level(grids, ref, 3 / (ref.size - 1), cfg)

    assert set(level.records) == set(csv_columns(2)[1:])
    sups = [s for s, _ in level.ranking]
    assert sups == sorted(sups)
    best = min(level.records.values(), key=lambda rec: rec.sup)
    assert level.winner == best.name


def test_evaluate_level_skips_candidates_that_cannot_be_built(tmp_path, caplog):
    """Tests that a construction failure is logged and the candidate omitted."""
    cfg = _small_config(tmp_path, p_values=(3,))
    ref = reference_grid(3, 6, cfg.real, cfg.precise)
    full = level_grids(3, 3, 1, cfg.real, cfg.precise)
    grids = GridSet(p=3, refinement=3, derivatives=full.derivatives[:2])

    with caplog.at_level(logging.WARNING, logger="daubkit"):
        level = evaluate_level(grids, ref, 5 / (ref.size - 1), cfg)

    assert "quintic_hermite" not in level.records
    assert "second_order_taylor" not in level.records
    assert "linear" in level.records
    assert "Skipping quintic_hermite_spline" in caplog.text
    row = level.row(csv_columns(3))
    assert row[-2:] == [None, None]


def test_evaluate_level_nan_candidate_never_wins(tmp_path, monkeypatch):
    """Tests that a candidate returning NaN gets an infinite error and ranks last."""
    import daubkit.experiment.driver as driver
    from daubkit.interpolators.catalog import CandidateSpec

    def broken(g):
        return lambda x: np.full(np.shape(x), np.nan)

    specs = (
        CandidateSpec("broken", "broken", 2, 1, broken),
        next(spec for spec in CANDIDATES if spec.column == "linear"),
    )
    monkeypatch.setattr(driver, "enabled_candidates", lambda p: specs)

    cfg = _small_config(tmp_path)
    ref = reference_grid(2, 5, cfg.real, cfg.precise)
    grids = level_grids(2, 2, 0, cfg.real, cfg.precise)
    level = evaluate_level(grids, ref, 3 / (ref.size - 1), cfg)

    assert math.isinf(level.records["broken"].sup)
    assert level.winner == "linear"
    assert level.ranking[-1][1] == "broken"


def test_run_experiment_writes_table(tmp_path):
    """Tests the table layout and that the announced winner is the row argmin."""
    cfg = _small_config(tmp_path)
    table = run_experiment(2, cfg)

    assert table.path == tmp_path / report_filename(2)
    rows = _read_table(table.path)
    assert rows[0] == csv_columns(2)
    assert [row[0] for row in rows[1:]] == ["2", "3", "4"]
    assert all(len(row) == 10 for row in rows)

    for row, level in zip(rows[1:], table.levels):
        values = [float(v) for v in row[1:]]
        column = rows[0][1 + int(np.argmin(values))]
        assert LABELS[column] == level.winner


def test_run_experiment_console_output(tmp_path, capsys):
    """Tests the progress banner, dx lines and rankings on standard output."""
    run_experiment(2, _small_config(tmp_path, r_max=5))
    out = capsys.readouterr().out.splitlines()

    assert out[0] == "Computing phi_dense_precise"
    assert out[1] == "Done"
    assert out[2].startswith("dx = 1/4 = 0.25")
    assert sum(line.endswith(" is error of linear") for line in out) == 2
    winners = [line for line in out if line.startswith("\tThe best method for p = 2 is the ")]
    assert len(winners) == 2
    assert any(line.startswith("dx = 1/8 = 0.125") for line in out)


def test_run_experiment_is_deterministic(tmp_path):
    """Tests that two runs produce identical bytes."""
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    a = run_experiment(3, _small_config(first, p_values=(3,)))
    b = run_experiment(3, _small_config(second, p_values=(3,)))
    assert a.path.read_bytes() == b.path.read_bytes()


def test_main_writes_one_table_per_p(tmp_path):
    """Tests that main processes every configured p and reports success."""
    cfg = ExperimentConfig(p_values=(2, 4), r_max=5, output_dir=tmp_path)
    assert main(cfg) == 0
    assert (tmp_path / report_filename(2)).exists()
    rows = _read_table(tmp_path / report_filename(4))
    assert len(rows[0]) == 14


def test_main_reports_io_failure(tmp_path, caplog):
    """Tests that an unwritable output directory is logged and gives exit code 1."""
    cfg = ExperimentConfig(p_values=(2,), r_max=4, output_dir=tmp_path / "missing")
    with caplog.at_level(logging.ERROR, logger="daubkit"):
        assert main(cfg) == 1
    assert "p=2" in caplog.text


def test_cli_exits_with_main_status(monkeypatch):
    """Tests that the console script exits with the status returned by main."""
    monkeypatch.setattr(entry, "main", lambda: 0)
    with pytest.raises(SystemExit) as excinfo:
        entry.cli()
    assert excinfo.value.code == 0


@pytest.mark.slow
@pytest.mark.parametrize(
    "p, r, winner",
    [
        # p = 5, 8 and 12 are left out: their winners were found in 128-bit
        # arithmetic, and at p = 12, r = 10 the float64 errors of the quintic
        # (2.1e-14) and septic (2.6e-14) Hermite splines sit at the working
        # precision, so float64 ranks quintic_hermite_spline first.
        (2, 2, "linear"),
        (3, 2, "linear"),
        (4, 5, "cubic_hermite_spline"),
    ],
)
def test_best_interpolant_against_fine_reference(p, r, winner):
    """Tests the known winners against the r = 17 reference."""
    cfg = ExperimentConfig(p_values=(p,))
    ref = reference_grid(p, cfg.r_max, cfg.real, cfg.precise)
    grids = level_grids(p, r, max_derivative_needed(p), cfg.real, cfg.precise)
    level = evaluate_level(grids, ref, (2 * p - 1) / (ref.size - 1), cfg)
    assert len(level.records) == len(csv_columns(p)) - 1
    assert level.winner == winner
