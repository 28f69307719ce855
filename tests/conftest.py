import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg")


@pytest.fixture
def rng():
    return np.random.RandomState(0)


@pytest.fixture
def centered_data(rng):
    """(3, 20) data with zero mean rows and well separated variances."""
    X = rng.randn(3, 20) * np.array([[3.0], [1.5], [0.5]])
    return X - X.mean(axis=1, keepdims=True)
