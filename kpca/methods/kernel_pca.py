import logging

import numpy as np
from scipy import linalg, sparse
from scipy.sparse.linalg import eigsh, ArpackNoConvergence

from kpca import config
from kpca.methods.kernel_center import KernelCenter
from kpca.util.errors import ConfigurationError, InputError, NonConvergenceError
from kpca.util.kernels import Linear, PrecomputedKernel, get_kernel
from kpca.util.pairwise import float_dtype, pairwise
from kpca.util.utils import as_columns, check_symmetric, init_v0

logger = logging.getLogger(__name__)


def _frozen(a):
    a = np.array(a)
    a.setflags(write=False)
    return a


class KernelPCAModel():
    """
    Fitted kernel PCA. Read-only once built by fit_kernel_pca.

    X: (d, n) training data, or the (n, n) kernel matrix when precomputed
    kernel: callable (x, y) -> float
    center: KernelCenter of the training kernel matrix
    eigenvalues: (k,) descending
    eigenvectors: (n, k)
    inverse_coefficients: (d, n), or (0, 0) without inverse transform
    """

    def __init__(self, X, kernel, center, eigenvalues, eigenvectors, inverse_coefficients):
        self._X = _frozen(X)
        self._kernel = kernel
        self._center = center
        self._eigenvalues = _frozen(eigenvalues)
        self._eigenvectors = _frozen(eigenvectors)
        self._inverse_coefficients = _frozen(inverse_coefficients)

    X = property(lambda self: self._X)
    kernel = property(lambda self: self._kernel)
    center = property(lambda self: self._center)
    eigenvalues = property(lambda self: self._eigenvalues)
    eigenvectors = property(lambda self: self._eigenvectors)
    inverse_coefficients = property(lambda self: self._inverse_coefficients)

    @property
    def precomputed(self):
        return isinstance(self._kernel, PrecomputedKernel)

    def __repr__(self):
        return f"Kernel PCA(indim = {input_dimension(self)}, outdim = {output_dimension(self)})"


## properties

def input_dimension(model):
    return model.X.shape[0]


def output_dimension(model):
    return model.eigenvalues.shape[0]


def projection(model):
    """Eigenvectors scaled by 1/sqrt(eigenvalue); zero for non-positive eigenvalues."""
    alphas = np.zeros(model.eigenvectors.shape, dtype=model.eigenvectors.dtype)
    non_zeros = np.flatnonzero(model.eigenvalues > 0)
    alphas[:, non_zeros] = model.eigenvectors[:, non_zeros] / np.sqrt(model.eigenvalues[non_zeros])
    return alphas


def principal_variances(model):
    return model.eigenvalues


def _representatives(eigenvalues, eigenvectors):
    # training points in embedding coordinates, one per column: (k, n)
    return (eigenvectors * np.sqrt(np.clip(eigenvalues, 0, None))).T


## use

def transform_new(model, Z):
    """
    Project new points into the embedding.

    Z: (d, m) points, or a (d,) single point. For a precomputed model, the
       (n, m) kernel matrix between training points and new points.
    Returns (k, m), or (k,) for a single point.
    """
    if sparse.issparse(Z):
        Z = Z.toarray()
    Z, was_vector = as_columns(Z)
    if Z.shape[0] != input_dimension(model):
        raise InputError(f"Expected {input_dimension(model)} rows, got {Z.shape[0]}")

    if model.precomputed:
        K = np.array(Z, dtype=float_dtype(model.X, Z))
    else:
        K = pairwise(model.kernel, model.X, Z)
    model.center.apply(K)
    Y = projection(model).T @ K
    return Y[:, 0] if was_vector else Y


def transform_training(model):
    """Embedding of the training set, (k, n). The centered kernel is rebuilt from X."""
    if model.precomputed:
        K = np.array(model.X)
    else:
        K = pairwise(model.kernel, model.X)
    model.center.apply(K)
    return projection(model).T @ K


def reconstruct(model, y):
    """
    Approximate pre-images of embedding coordinates.

    y: (k, m) coordinates, or a (k,) single point
    Returns (d, m), or (d,) for a single point.
    """
    if model.inverse_coefficients.shape[0] == 0:
        raise ConfigurationError(
            "Inverse transformation coefficients are not available, set `inverse` parameter when fitting data"
        )
    y, was_vector = as_columns(y)
    if y.shape[0] != output_dimension(model):
        raise InputError(f"Expected {output_dimension(model)} embedding coordinates, got {y.shape[0]}")

    Pt = _representatives(model.eigenvalues, model.eigenvectors)
    k = pairwise(model.kernel, Pt, y)
    Xr = model.inverse_coefficients @ k
    return Xr[:, 0] if was_vector else Xr


## core algorithm

def _eigen_decomposition(K, n_components, solver, tol, max_iter, random_state):
    n = K.shape[0]
    if solver == "iterative" and n_components >= n:
        logger.info("Iterative solver needs fewer than %d components, using dense solver", n)
        solver = "dense"

    if solver == "iterative":
        v0 = init_v0(n, random_state)
        try:
            evl, evc = eigsh(K, k=n_components, which="LA", v0=v0, tol=tol, maxiter=max_iter)
        except ArpackNoConvergence as e:
            raise NonConvergenceError(
                f"Iterative eigensolver did not converge in {max_iter} iterations "
                f"({len(e.eigenvalues)} of {n_components} eigenpairs found)"
            ) from e
        return np.real(evl), np.real(evc)

    return linalg.eigh(K)


def fit_kernel_pca(X, kernel=Linear(), max_output_dim=None,
                   remove_zero_eig=False, atol=config.ATOL,
                   solver=config.SOLVER,
                   inverse=False, beta=config.BETA,
                   tol=config.TOL, max_iter=config.MAX_ITER,
                   random_state=config.SEED, verbose=False):
    """
    Fit kernel PCA on the columns of X.

    X: (d, n) training data, or a symmetric (n, n) kernel matrix when
       kernel is None (dense or scipy.sparse)
    kernel: callable (x, y) -> float, or None for a precomputed kernel matrix
    max_output_dim: number of components to keep, clipped to min(d, n)
    remove_zero_eig: drop components with |eigenvalue| <= atol
    solver: 'dense' or 'iterative' (ARPACK, tol and max_iter apply)
    inverse: learn the pre-image map, with ridge strength beta
    """
    if not sparse.issparse(X):
        X = np.asarray(X)
    if solver not in config.SOLVERS:
        raise ConfigurationError(f"Unknown solver '{solver}'. Supported: {list(config.SOLVERS)}")
    if X.ndim != 2:
        raise InputError(f"Training data must be a 2-D matrix, got shape {X.shape}")

    d, n = X.shape
    if d == 0 or n == 0:
        raise InputError(f"Training data is empty, got shape {X.shape}")
    if max_output_dim is None:
        max_output_dim = min(d, n)
    if max_output_dim < 1:
        raise ConfigurationError(f"max_output_dim must be at least 1, got {max_output_dim}")
    max_output_dim = min(d, n, max_output_dim)

    is_sparse = sparse.issparse(X)
    if callable(kernel):
        if is_sparse:
            X = X.toarray()
        X = np.array(X, dtype=float_dtype(X))
        K = pairwise(kernel, X, verbose=verbose)
    elif kernel is None:
        if not check_symmetric(X):
            raise ConfigurationError("Precomputed kernel matrix must be symmetric.")
        if inverse:
            logger.warning("Inverse transform needs a kernel function, ignored for a precomputed kernel")
        inverse = False
        if is_sparse:
            solver = "iterative"
            X = X.toarray()
        X = np.array(X, dtype=float_dtype(X))
        K = X.copy()
        kernel = PrecomputedKernel()
    else:
        raise ConfigurationError("Incorrect kernel type. Use function or symmetric matrix.")

    logger.debug("Fitting kernel PCA on %d points of dimension %d with %s solver", n, d, solver)

    center = KernelCenter.fit(K)
    center.apply(K)

    evl, evc = _eigen_decomposition(K, max_output_dim, solver, tol, max_iter, random_state)

    order = np.argsort(evl, kind="stable")[::-1][:max_output_dim]
    eigenvalues, eigenvectors = evl[order], evc[:, order]

    if remove_zero_eig:
        keep = np.abs(eigenvalues) > atol
        if not keep.any():
            raise ConfigurationError(f"All {len(keep)} selected eigenvalues are within {atol} of zero")
        if not keep.all():
            logger.info("Removed %d zero eigenvalues", np.count_nonzero(~keep))
        eigenvalues, eigenvectors = eigenvalues[keep], eigenvectors[:, keep]

    Q = np.zeros((0, 0), dtype=X.dtype)
    if inverse:
        Pt = _representatives(eigenvalues, eigenvectors)
        KT = pairwise(kernel, Pt, verbose=verbose)
        Q = linalg.solve(KT + beta * np.identity(KT.shape[0], dtype=KT.dtype), X.T).T

    model = KernelPCAModel(X, kernel, center, eigenvalues.astype(X.dtype, copy=False),
                           eigenvectors.astype(X.dtype, copy=False), Q.astype(X.dtype, copy=False))
    logger.info("Fitted %r", model)
    return model


class Kernel_PCA():
    def __init__(self, n_components : int, kernel_fnct, kernel_params=None, **options):
        """
        n_components: int, number of components to keep
        kernel_fnct: function, kernel name ('rbf', 'linear', ...) or None for
                     a precomputed kernel
        kernel_params: dict, parameters of a named kernel
        options: forwarded to fit_kernel_pca
        """
        if isinstance(kernel_fnct, str):
            kernel_fnct = get_kernel(kernel_fnct, **(kernel_params or {}))
        self.kernel = kernel_fnct
        self.n_components = n_components
        self.options = options
        self.model = None

    def fit(self, X):
        """X: (n, d) samples in rows, or an (n, n) kernel matrix when precomputed"""
        self.model = fit_kernel_pca(X.T, kernel=self.kernel, max_output_dim=self.n_components, **self.options)
        return self

    def fit_and_transform(self, X):
        self.fit(X)
        return transform_training(self.model).T

    def transform(self, X):
        """X: (m, d) samples, or the (m, n) kernel matrix against training points when precomputed"""
        return transform_new(self.model, X.T).T

    def inverse_transform(self, Y):
        return reconstruct(self.model, Y.T).T

    @property
    def eigenvals(self):
        return principal_variances(self.model)

    @property
    def alphas(self):
        return projection(self.model)
