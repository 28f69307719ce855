import numpy as np

from kpca.util.errors import InputError


class KernelCenter():
    """
    Double centering of kernel matrices in feature space.

    means: row means of the training kernel matrix, length n
    total: mean of means
    """

    def __init__(self, means, total):
        means = np.array(means)
        means.setflags(write=False)
        self._means = means
        self._total = means.dtype.type(total)

    @classmethod
    def fit(cls, K):
        means = np.asarray(K.mean(axis=1)).ravel()
        return cls(means, means.sum() / means.shape[0])

    @property
    def means(self):
        return self._means

    @property
    def total(self):
        return self._total

    def apply(self, K):
        """
        Center K in place and return it.

        K: (n, m) floating point matrix whose rows are the n training points.
        Column means are taken from K itself, row means from the training matrix.
        """
        if not np.issubdtype(K.dtype, np.floating):
            raise InputError(f"Kernel matrix must be floating point to be centered in place, got {K.dtype}")
        if K.shape[0] != self._means.shape[0]:
            raise InputError(f"Kernel matrix has {K.shape[0]} rows, center was fit on {self._means.shape[0]} points")
        col_means = K.mean(axis=0)
        K -= self._means[:, None] + col_means[None, :] - self._total
        return K

    def __repr__(self):
        return f"KernelCenter(n = {self._means.shape[0]}, total = {self._total})"
