"""Provides all daubkit methods."""

from importlib.metadata import PackageNotFoundError, version

from daubkit.evaluation.sup_error import ErrorRecord, sup_error
from daubkit.experiment.config import ExperimentConfig
from daubkit.experiment.driver import run_experiment
from daubkit.interpolators.catalog import CANDIDATES, enabled_candidates
from daubkit.scaling.dyadic_grid import dyadic_grid

try:
    __version__ = version("daubkit")
except PackageNotFoundError:
    pass

__all__ = [
    "CANDIDATES",
    "ErrorRecord",
    "ExperimentConfig",
    "dyadic_grid",
    "enabled_candidates",
    "run_experiment",
    "sup_error",
]
