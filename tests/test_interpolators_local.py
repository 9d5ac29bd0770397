"""Tests for daubkit.interpolators.local and daubkit.interpolators.support."""

import numpy as np
import pytest
from numpy.polynomial import Polynomial
from numpy.testing import assert_allclose, assert_array_equal

from daubkit.interpolators.local import (
    LinearInterpolant,
    MatchedHolderInterpolant,
    TaylorInterpolant,
)
from daubkit.interpolators.support import evaluate_on_support, sample_abscissae


def test_evaluate_on_support_zeroes_outside_open_interval():
    """Tests that the interior callable is only used strictly inside the support."""
    calls = []

    def interior(x):
        calls.append(x.copy())
        return np.ones_like(x)

    x = np.array([-1.0, 0.0, 0.5, 1.0, 2.0, 3.0])
    out = evaluate_on_support(x, 0.0, 3.0, interior, np.float64)
    assert_array_equal(out, [0.0, 0.0, 1.0, 1.0, 1.0, 0.0])
    assert_array_equal(calls[0], [0.5, 1.0, 2.0])


def test_evaluate_on_support_keeps_shape():
    """Tests that scalar and 2D inputs keep their shape."""
    out = evaluate_on_support(np.full((2, 3), 0.5), 0.0, 1.0, lambda x: 2 * x, np.float32)
    assert out.shape == (2, 3)
    assert out.dtype == np.float32
    assert_array_equal(out, np.ones((2, 3)))
    assert evaluate_on_support(0.25, 0.0, 1.0, lambda x: x, np.float64).shape == ()


def test_evaluate_on_support_skips_call_when_nothing_inside():
    """Tests that the interior callable is not invoked when every point is outside."""
    def interior(x):
        raise AssertionError("should not be called")

    assert_array_equal(evaluate_on_support([5.0, -5.0], 0.0, 1.0, interior, np.float64), [0.0, 0.0])


def test_sample_abscissae():
    """Tests that abscissae start at x0 with step dx."""
    assert_allclose(sample_abscissae(4, 1.0, 0.5), [1.0, 1.5, 2.0, 2.5])


def test_linear_interpolant_nodes_and_midpoints():
    """Tests that linear interpolation hits the samples and averages neighbours."""
    y = np.array([0.0, 1.0, 4.0, 9.0, 16.0])
    f = LinearInterpolant(y, 0.0, 0.25)
    assert_allclose(f([0.25, 0.5, 0.75]), [1.0, 4.0, 9.0])
    assert_allclose(f([0.125, 0.375, 0.875]), [0.5, 2.5, 12.5])
    assert_array_equal(f([-0.1, 0.0, 1.0, 1.1]), np.zeros(4))


def test_linear_interpolant_keeps_sample_dtype():
    """Tests that evaluation happens in the dtype of the samples."""
    f = LinearInterpolant(np.array([0.0, 1.0, 0.0], dtype=np.float32), 0.0, 0.5)
    out = f(np.array([0.25, 0.5]))
    assert out.dtype == np.float32
    assert_allclose(out, [0.5, 1.0])


@pytest.mark.parametrize("order", [1, 2, 3])
def test_taylor_interpolant_reproduces_polynomials(order):
    """Tests that an order-n expansion is exact on polynomials of degree n."""
    poly = Polynomial([1.0, 2.0, -1.0, 0.5][: order + 1])
    x = sample_abscissae(17, 0.0, 0.125)
    buffers = [poly.deriv(j)(x) for j in range(order + 1)]
    f = TaylorInterpolant(buffers, 0.0, 0.125)
    xs = np.linspace(0.01, 1.99, 101)
    assert_allclose(f(xs), poly(xs), rtol=1e-12, atol=1e-12)


def test_taylor_interpolant_ties_use_right_sample():
    """Tests that a point exactly halfway between two samples expands about the right one."""
    y = np.arange(9, dtype=float)
    dy = np.zeros(9)
    f = TaylorInterpolant([y, dy], 0.0, 0.25)
    assert float(f(0.625)) == 3.0
    assert float(f(0.6)) == 2.0
    assert float(f(0.65)) == 3.0


def test_taylor_interpolant_uses_nearest_sample_derivatives():
    """Tests the first order expansion away from the nodes."""
    y = np.array([0.0, 1.0, 2.0, 3.0])
    dy = np.array([0.0, 10.0, -10.0, 0.0])
    f = TaylorInterpolant([y, dy], 0.0, 1.0)
    # nearest sample to 1.2 is 1: 1 + 0.2 * 10
    assert float(f(1.2)) == pytest.approx(3.0)
    # nearest sample to 1.7 is 2: 2 - 0.3 * (-10)
    assert float(f(1.7)) == pytest.approx(5.0)


@pytest.mark.parametrize("count", [1, 5])
def test_taylor_interpolant_rejects_buffer_count(count):
    """Tests that only 2 to 4 sample buffers are accepted."""
    with pytest.raises(ValueError):
        TaylorInterpolant([np.zeros(4)] * count, 0.0, 1.0)


def test_taylor_interpolant_rejects_length_mismatch():
    """Tests that derivative buffers must share one length."""
    with pytest.raises(ValueError):
        TaylorInterpolant([np.zeros(4), np.zeros(5)], 0.0, 1.0)


def test_matched_holder_interpolates_nodes():
    """Tests that the model reproduces the samples at the grid points."""
    rng = np.random.default_rng(3)
    y = rng.normal(size=17)
    y[0] = y[-1] = 0.0
    dy = rng.normal(size=17)
    f = MatchedHolderInterpolant(y, dy, refinement=3)
    x = np.arange(1, 16) / 8.0
    assert_allclose(f(x), y[1:16], rtol=1e-12, atol=1e-12)


def test_matched_holder_cell_shape():
    """Tests the square-root model inside one cell."""
    y = np.array([0.0, 1.0, 3.0, 0.0])
    dy = np.array([0.0, 4.0, 8.0, 0.0])
    f = MatchedHolderInterpolant(y, dy, refinement=1)
    # cell [0.5, 1.0): y_i = 1, diff = 2, h * y'_{i+1} = 4, so a = 6 and b = -2
    assert float(f(0.625)) == pytest.approx(1.0 + 6.0 * 0.5 - 2.0 * 0.25)
    assert float(f(0.5)) == 1.0


def test_matched_holder_right_end_follows_sampled_derivative():
    """Tests that the model ends a cell at y_i + h y'_{i+1} rather than at y_{i+1}."""
    y = np.array([0.0, 1.0, 3.0, 0.0])
    dy = np.array([0.0, 4.0, 8.0, 0.0])
    f = MatchedHolderInterpolant(y, dy, refinement=1)
    assert float(f(1.0 - 1e-12)) == pytest.approx(1.0 + 0.5 * 8.0, abs=1e-5)


def test_matched_holder_zero_outside_support():
    """Tests that the model vanishes outside the open support."""
    f = MatchedHolderInterpolant(np.ones(5), np.zeros(5), refinement=2)
    assert_array_equal(f([-0.1, 0.0, 1.0, 2.0]), np.zeros(4))


def test_matched_holder_rejects_length_mismatch():
    """Tests that y and dydx must have the same length."""
    with pytest.raises(ValueError):
        MatchedHolderInterpolant(np.zeros(5), np.zeros(4), refinement=2)
