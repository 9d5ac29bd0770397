"""Utility functions for daubkit package."""

from .validate import (
    validate_derivative_order,
    validate_precision_pair,
    validate_refinement,
    validate_vanishing_moments,
)

__all__ = [
    "validate_vanishing_moments",
    "validate_derivative_order",
    "validate_refinement",
    "validate_precision_pair",
]
