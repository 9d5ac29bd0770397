"""Daubechies scaling functions tabulated on dyadic grids."""

from daubkit.scaling.dyadic_grid import dyadic_abscissae, dyadic_grid, grid_size
from daubkit.scaling.filters import daubechies_filter
from daubkit.scaling.integer_grid import integer_grid

__all__ = [
    "daubechies_filter",
    "integer_grid",
    "dyadic_grid",
    "dyadic_abscissae",
    "grid_size",
]
