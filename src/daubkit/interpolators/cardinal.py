"""Spline interpolants of equispaced samples built on ``scipy.interpolate``.

All classes take the samples on the uniform grid ``x0 + i * dx`` and wrap a
scipy piecewise polynomial:

* :class:`CardinalBSpline`: interpolating B-splines of degree 2, 3 or 5
  (``make_interp_spline``) with prescribed end derivatives.
* :class:`CardinalHermiteSpline`: cubic, quintic and septic Hermite
  interpolation from samples of the function and its derivatives
  (``PPoly``).
* :class:`PchipInterpolant` and :class:`MakimaInterpolant`: the monotone and
  modified-Akima cubic interpolants, which only need the function samples.

scipy evaluates in float64; results are cast back to the dtype of the
samples. Construction errors raised by scipy (``ValueError`` or
``numpy.linalg.LinAlgError``) are left to propagate.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from functools import lru_cache

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.interpolate import (
    Akima1DInterpolator,
    PchipInterpolator,
    PPoly,
    make_interp_spline,
)

from daubkit.interpolators.support import evaluate_on_support, sample_abscissae
from daubkit.utils.validate import validate_uniform_samples

__all__ = [
    "CardinalBSpline",
    "CardinalHermiteSpline",
    "PchipInterpolant",
    "MakimaInterpolant",
    "hermite_basis",
]

#: Supported B-spline degrees.
BSPLINE_DEGREES = (2, 3, 5)


class _ScipyBacked:
    """Evaluation shared by the scipy-backed interpolants."""

    def __init__(self, y: NDArray[np.floating], x0: float, dx: float) -> None:
        self.dtype = y.dtype
        self.x0 = float(x0)
        self.upper = self.x0 + float(dx) * (y.size - 1)
        self._impl = None

    def _interior(self, x: NDArray[np.floating]) -> NDArray[np.floating]:
        return self._impl(np.asarray(x, dtype=np.float64))

    def __call__(self, x: ArrayLike) -> NDArray[np.floating]:
        return evaluate_on_support(x, self.x0, self.upper, self._interior, self.dtype)


class CardinalBSpline(_ScipyBacked):
    """Interpolating B-spline of degree 2, 3 or 5 on a uniform grid.

    A degree-``k`` interpolating spline needs ``k - 1`` conditions besides the
    samples; they are given as derivative values at the two ends. The
    quadratic spline places its knots halfway between the samples (as a
    cardinal quadratic B-spline does) and therefore takes one derivative at
    each end.

    Example:
        >>> import numpy as np
        >>> from daubkit.interpolators.cardinal import CardinalBSpline
        >>> y = np.sin(np.linspace(0.0, np.pi, 33))
        >>> s = CardinalBSpline(y, 0.0, np.pi / 32, degree=3,
        ...                     left_derivatives=(1.0,), right_derivatives=(-1.0,))
        >>> abs(float(s(np.pi / 2)) - 1.0) < 1e-6
        True
    """

    def __init__(
        self,
        y: ArrayLike,
        x0: float,
        dx: float,
        *,
        degree: int,
        left_derivatives: Sequence[float] = (),
        right_derivatives: Sequence[float] = (),
    ) -> None:
        """Initializes the spline.

        Args:
            y: Samples on ``x0 + i * dx``.
            x0: Abscissa of the first sample.
            dx: Grid spacing.
            degree: Spline degree, one of :data:`BSPLINE_DEGREES`.
            left_derivatives: Values of the derivatives of order
                ``1, 2, ...`` at the left end.
            right_derivatives: Same at the right end.

        Raises:
            ValueError: If the degree is unsupported, the number of end
                conditions does not match the degree or the grid is too
                short.
        """
        if degree not in BSPLINE_DEGREES:
            raise ValueError(f"degree must be one of {BSPLINE_DEGREES}; got {degree}.")
        y = validate_uniform_samples(y, min_size=degree + 1, name="y")
        super().__init__(y, x0, dx)

        x = sample_abscissae(y.size, x0, dx)
        knots = None
        if degree == 2:
            knots = np.concatenate(
                ([x[0]] * 3, 0.5 * (x[1:] + x[:-1]), [x[-1]] * 3)
            )
        bc_type = None
        if left_derivatives or right_derivatives:
            bc_type = (
                [(j + 1, float(v)) for j, v in enumerate(left_derivatives)],
                [(j + 1, float(v)) for j, v in enumerate(right_derivatives)],
            )
        self.degree = degree
        self._impl = make_interp_spline(
            x, np.asarray(y, dtype=np.float64), k=degree, t=knots, bc_type=bc_type
        )


@lru_cache(maxsize=None)
def hermite_basis(n_derivatives: int) -> NDArray[np.float64]:
    """Maps Hermite data on ``[0, 1]`` to monomial coefficients.

    For a polynomial ``q(t) = sum_i c_i t^i`` of degree ``2m - 1`` the data
    vector is ``(q(0), q'(0), ..., q^(m-1)(0), q(1), ..., q^(m-1)(1))``. The
    returned matrix ``B`` satisfies ``c = B @ data``.

    Args:
        n_derivatives: ``m``, the number of derivatives (including the
            function itself) known at each end: 2 for cubic, 3 for quintic,
            4 for septic.

    Returns:
        Read-only array of shape ``(2m, 2m)``.
    """
    m = n_derivatives
    conditions = np.zeros((2 * m, 2 * m))
    for j in range(m):
        conditions[j, j] = math.factorial(j)
        for i in range(j, 2 * m):
            conditions[m + j, i] = math.factorial(i) / math.factorial(i - j)
    basis = np.linalg.inv(conditions)
    basis.setflags(write=False)
    return basis


class CardinalHermiteSpline(_ScipyBacked):
    """Hermite interpolation of a function from samples of it and its derivatives.

    With ``m`` buffers ``(f, f', ..., f^(m-1))`` each cell carries the unique
    polynomial of degree ``2m - 1`` matching all of them at both ends: cubic
    for ``m = 2``, quintic for ``m = 3`` and septic for ``m = 4``. The
    coefficients of every cell are obtained at once from :func:`hermite_basis`
    and stored in a ``scipy.interpolate.PPoly``.

    Attributes:
        degree: Polynomial degree of every cell.
    """

    def __init__(self, derivatives: Sequence[ArrayLike], x0: float, dx: float) -> None:
        """Initializes the spline.

        Args:
            derivatives: Between 2 and 4 sample buffers of equal length,
                the function first.
            x0: Abscissa of the first sample.
            dx: Grid spacing.

        Raises:
            ValueError: If the number of buffers is unsupported or lengths differ.
        """
        m = len(derivatives)
        if not 2 <= m <= 4:
            raise ValueError(f"Hermite interpolation needs 2 to 4 sample buffers; got {m}.")
        buffers = [
            validate_uniform_samples(d, name=f"derivative {j}")
            for j, d in enumerate(derivatives)
        ]
        if len({b.size for b in buffers}) != 1:
            raise ValueError("derivative buffers must have the same length.")
        super().__init__(buffers[0], x0, dx)

        h = float(dx)
        scaled = [np.asarray(b, dtype=np.float64) * h**j for j, b in enumerate(buffers)]
        data = np.vstack([s[:-1] for s in scaled] + [s[1:] for s in scaled])
        coeffs = hermite_basis(m) @ data
        powers = h ** -np.arange(2 * m, dtype=np.float64)
        # PPoly wants the highest power of (x - x_i) first
        pp_coeffs = (coeffs * powers[:, np.newaxis])[::-1]

        self.degree = 2 * m - 1
        self._impl = PPoly(pp_coeffs, sample_abscissae(buffers[0].size, x0, dx))


class PchipInterpolant(_ScipyBacked):
    """Monotone piecewise cubic Hermite interpolation (``PchipInterpolator``)."""

    def __init__(self, x: ArrayLike, y: ArrayLike) -> None:
        y = validate_uniform_samples(y, name="y")
        x = np.asarray(x, dtype=np.float64)
        super().__init__(y, x[0], (x[-1] - x[0]) / (x.size - 1))
        self.upper = float(x[-1])
        self._impl = PchipInterpolator(x, np.asarray(y, dtype=np.float64))


class MakimaInterpolant(_ScipyBacked):
    """Modified Akima piecewise cubic interpolation."""

    def __init__(self, x: ArrayLike, y: ArrayLike) -> None:
        y = validate_uniform_samples(y, name="y")
        x = np.asarray(x, dtype=np.float64)
        super().__init__(y, x[0], (x[-1] - x[0]) / (x.size - 1))
        self.upper = float(x[-1])
        self._impl = Akima1DInterpolator(x, np.asarray(y, dtype=np.float64), method="makima")
