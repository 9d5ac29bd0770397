"""Interpolants that only read the samples bracketing the evaluation point.

Provides the piecewise linear interpolant, the piecewise Taylor expansions
of orders 1 to 3 and the matched-Hölder model. All of them compute directly
in the dtype of the grids they were built from.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from daubkit.interpolators.support import evaluate_on_support
from daubkit.utils.validate import validate_uniform_samples

__all__ = [
    "LinearInterpolant",
    "TaylorInterpolant",
    "MatchedHolderInterpolant",
]


class LinearInterpolant:
    """Piecewise linear interpolation of equispaced samples.

    With ``s = (x - x0) / dx``, ``k = floor(s)`` and ``t = s - k`` the value
    is ``(1 - t) y[k] + t y[k + 1]``.
    """

    def __init__(self, y: ArrayLike, x0: float, dx: float) -> None:
        self.y = validate_uniform_samples(y, name="y")
        dtype = self.y.dtype.type
        self.x0 = dtype(x0)
        self.inv_dx = dtype(1) / dtype(dx)
        self.upper = self.x0 + dtype(self.y.size - 1) * dtype(dx)

    def _interior(self, x: NDArray[np.floating]) -> NDArray[np.floating]:
        s = (x - self.x0) * self.inv_dx
        k = np.floor(s)
        t = s - k
        kk = np.minimum(k.astype(np.intp), self.y.size - 2)
        return (1 - t) * self.y[kk] + t * self.y[kk + 1]

    def __call__(self, x: ArrayLike) -> NDArray[np.floating]:
        return evaluate_on_support(x, self.x0, self.upper, self._interior, self.y.dtype)


class TaylorInterpolant:
    """Piecewise Taylor expansion about the nearest grid point.

    Given the samples of ``f, f', ..., f^(n)`` on an equispaced grid, the
    value at ``x`` is

    .. math::

        \\sum_{j=0}^{n} \\frac{\\varepsilon^j}{j!} f^{(j)}(x_a),

    where ``x_a`` is the grid point nearest to ``x`` and
    ``eps = x - x_a``. The comparison is strict, so exactly halfway between
    two samples the right one is used.

    Attributes:
        derivatives: Tuple of sample buffers ``(f, f', ..., f^(n))``.
        order: Expansion order ``n``.
    """

    def __init__(self, derivatives: Sequence[ArrayLike], x0: float, dx: float) -> None:
        """Initializes the expansion.

        Args:
            derivatives: Samples of the function and of its first ``n``
                derivatives, all of the same length, ``1 <= n <= 3``.
            x0: Abscissa of the first sample.
            dx: Grid spacing.

        Raises:
            ValueError: If fewer than two buffers are given or lengths differ.
        """
        if not 2 <= len(derivatives) <= 4:
            raise ValueError(
                f"TaylorInterpolant needs between 2 and 4 sample buffers; got {len(derivatives)}."
            )
        self.derivatives = tuple(
            validate_uniform_samples(d, name=f"derivative {j}")
            for j, d in enumerate(derivatives)
        )
        sizes = {d.size for d in self.derivatives}
        if len(sizes) != 1:
            raise ValueError(f"derivative buffers must have the same length; got {sorted(sizes)}.")
        self.order = len(self.derivatives) - 1

        dtype = self.derivatives[0].dtype.type
        self.x0 = dtype(x0)
        self.dx = dtype(dx)
        self.inv_dx = dtype(1) / self.dx
        self.upper = self.x0 + dtype(self.derivatives[0].size - 1) * self.dx

    def _interior(self, x: NDArray[np.floating]) -> NDArray[np.floating]:
        s = (x - self.x0) * self.inv_dx
        k = np.floor(s)
        anchor = np.where(s - k < k + 1 - s, k, k + 1)
        eps = (s - anchor) * self.dx
        idx = anchor.astype(np.intp)

        acc = self.derivatives[self.order][idx]
        for j in range(self.order - 1, -1, -1):
            acc = self.derivatives[j][idx] + eps * acc / (j + 1)
        return acc

    def __call__(self, x: ArrayLike) -> NDArray[np.floating]:
        return evaluate_on_support(
            x, self.x0, self.upper, self._interior, self.derivatives[0].dtype
        )


class MatchedHolderInterpolant:
    """Local model ``y_i + a sqrt(t) + b t`` on each grid cell.

    The Daubechies scaling functions are only Hölder continuous at the left
    end of a cell, so the model carries a square-root term. With
    ``Delta y = y_{i+1} - y_i`` and ``d = h y'_{i+1}`` (the sampled derivative at
    the right end, scaled to the cell) the coefficients are

    .. math::

        a = 2 d - \\Delta y, \\qquad b = \\Delta y - d.

    The model reproduces ``y_i`` at ``t = 0``; at ``t = 1`` it reaches
    ``y_i + d``, which equals ``y_{i+1}`` only where the chord and the
    sampled derivative agree. The exponent 1/2 stands in for the exact
    (smaller) Hölder exponent, which is only attained at dyadic rationals.
    """

    def __init__(
        self,
        y: ArrayLike,
        dydx: ArrayLike,
        refinement: int,
        x0: float = 0.0,
    ) -> None:
        self.y = validate_uniform_samples(y, name="y")
        dydx = validate_uniform_samples(dydx, name="dydx")
        if dydx.size != self.y.size:
            raise ValueError("y and dydx must have the same length.")

        dtype = self.y.dtype.type
        self.inv_h = dtype(1 << refinement)
        h = dtype(1) / self.inv_h
        self.dy = np.asarray(dydx, dtype=self.y.dtype) * h
        self.x0 = dtype(x0)
        self.upper = self.x0 + dtype(self.y.size - 1) * h

    def _interior(self, x: NDArray[np.floating]) -> NDArray[np.floating]:
        s = (x - self.x0) * self.inv_h
        ii = np.floor(s)
        t = s - ii
        i = np.minimum(ii.astype(np.intp), self.y.size - 2)
        dphi = self.dy[i + 1]
        diff = self.y[i + 1] - self.y[i]
        a = 2 * dphi - diff
        b = diff - dphi
        return self.y[i] + a * np.sqrt(t) + b * t

    def __call__(self, x: ArrayLike) -> NDArray[np.floating]:
        return evaluate_on_support(x, self.x0, self.upper, self._interior, self.y.dtype)
