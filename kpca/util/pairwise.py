import numpy as np
from tqdm import tqdm

from kpca.util.errors import InputError


def float_dtype(*arrays):
    """Common floating dtype of the arrays, float64 for integer input."""
    dtype = np.result_type(*arrays)
    if not np.issubdtype(dtype, np.floating):
        dtype = np.dtype(np.float64)
    return dtype


def pairwise(kernel, X, Y=None, verbose=False):
    """
    Gram matrix K[i, j] = kernel(X[:, i], Y[:, j]).

    X: (d, n) array, one point per column
    Y: (d, m) array, or None for the symmetric self-Gram matrix of X.
       In that case each cell with i <= j is evaluated once and mirrored.
    """
    symmetric = Y is None
    if symmetric:
        Y = X
    if X.ndim != 2 or Y.ndim != 2:
        raise InputError(f"Expected 2-D matrices, got shapes {X.shape} and {Y.shape}")
    if X.shape[0] != Y.shape[0]:
        raise InputError(f"Dimension mismatch: {X.shape[0]} rows against {Y.shape[0]} rows")

    n, m = X.shape[1], Y.shape[1]
    K = np.empty((n, m), dtype=float_dtype(X, Y))

    for j in tqdm(range(m), desc="Gram matrix", disable=not verbose):
        y = Y[:, j]
        stop = j + 1 if symmetric else n
        for i in range(stop):
            K[i, j] = np.asarray(kernel(X[:, i], y)).item()
        if symmetric:
            K[j, :j] = K[:j, j]
    return K
