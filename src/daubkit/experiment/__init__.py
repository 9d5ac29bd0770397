"""Interpolator selection experiment for Daubechies scaling functions."""

from daubkit.experiment.config import ExperimentConfig
from daubkit.experiment.driver import ConvergenceTable, LevelResult, main, run_experiment

__all__ = ["ExperimentConfig", "ConvergenceTable", "LevelResult", "main", "run_experiment"]
