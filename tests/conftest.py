"""Pytest configuration shared by the daubkit tests."""

import os

import numpy as np
import pytest


@pytest.fixture(autouse=True, scope="session")
def _limit_blas_threads():
    os.environ.setdefault("OMP_NUM_THREADS", "1")
    os.environ.setdefault("OPENBLAS_NUM_THREADS", "1")
    os.environ.setdefault("MKL_NUM_THREADS", "1")


@pytest.fixture
def smooth_samples():
    """Return ``(x, y, dy)`` for ``sin`` on a uniform grid over ``[0, pi]``."""
    x = np.linspace(0.0, np.pi, 65)
    return x, np.sin(x), np.cos(x)
