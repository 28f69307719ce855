import numpy as np
import pandas as pd
import os
from scipy import sparse


def read_data(data_path, filename="X.csv"):
    """Load row samples from a csv file and return them as a (d, n) matrix."""
    X = np.array(pd.read_csv(os.path.join(data_path, filename), header=None, sep=','))
    return X.T


def save_embedding(Y, results_name="embedding.csv", results_path="data"):
    """Write a (k, m) embedding as m rows, one column per component."""
    Y = np.atleast_2d(Y)
    dataframe = pd.DataFrame(Y.T, columns=[f"component_{i+1}" for i in range(Y.shape[0])])
    dataframe.index += 1
    os.makedirs(results_path, exist_ok=True)
    dataframe.to_csv(os.path.join(results_path, results_name), index_label='Id')
    return dataframe


def make_circles(n_samples=200, factor=0.3, noise=0.05, random_state=None):
    """Two concentric noisy circles, returned as a (2, n) matrix and labels."""
    rng = np.random.RandomState(random_state)
    n_outer = n_samples // 2
    n_inner = n_samples - n_outer
    angles_outer = np.linspace(0, 2*np.pi, n_outer, endpoint=False)
    angles_inner = np.linspace(0, 2*np.pi, n_inner, endpoint=False)
    outer = np.vstack([np.cos(angles_outer), np.sin(angles_outer)])
    inner = factor * np.vstack([np.cos(angles_inner), np.sin(angles_inner)])
    X = np.hstack([outer, inner]) + noise * rng.randn(2, n_samples)
    labels = np.concatenate([np.zeros(n_outer, dtype=int), np.ones(n_inner, dtype=int)])
    return X, labels


def check_symmetric(K):
    if K.ndim != 2 or K.shape[0] != K.shape[1]:
        return False
    if sparse.issparse(K):
        return (K != K.T).nnz == 0
    return bool(np.array_equal(K, K.T))


def init_v0(size, random_state=None):
    """Initial vector for ARPACK, uniform on [-1, 1]."""
    rng = np.random.RandomState(random_state)
    return rng.uniform(-1, 1, size)


def as_columns(Z):
    """View a single point as a one-column matrix. Returns (matrix, was_vector)."""
    Z = np.asarray(Z)
    if Z.ndim == 1:
        return Z.reshape(-1, 1), True
    return Z, False
