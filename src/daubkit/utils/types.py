"""Shared typing aliases for daubkit."""

from __future__ import annotations

from typing import Callable, TypeAlias

import numpy as np
from numpy.typing import DTypeLike, NDArray

Float: TypeAlias = np.floating
Array: TypeAlias = NDArray[np.floating]
FloatArray: TypeAlias = NDArray[np.float64]

#: A vectorized function of one real variable, as produced by the interpolator catalog.
Evaluable: TypeAlias = Callable[[Array], Array]

__all__ = ["Float", "Array", "FloatArray", "Evaluable", "DTypeLike"]
