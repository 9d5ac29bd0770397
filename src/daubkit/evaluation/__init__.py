"""Error measurement of candidate interpolants."""

from daubkit.evaluation.float_distance import float_distance
from daubkit.evaluation.sup_error import ErrorRecord, default_mask_floor, sup_error

__all__ = ["ErrorRecord", "default_mask_floor", "float_distance", "sup_error"]
