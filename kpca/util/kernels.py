import numpy as np

from kpca.util.errors import ConfigurationError


class Kernel :
    """Vector kernel, callable as kernel(x, y) -> float."""

    def kernel(self, x, y) :
        raise NotImplementedError

    def __call__(self, x, y) :
        return self.kernel(x, y)

    def __repr__(self) :
        params = ", ".join(f"{k}={v}" for k, v in self.__dict__.items())
        return f"{self.__class__.__name__}({params})"


class RBF(Kernel) :
    def __init__(self, sigma=1.) :
        self.sigma = sigma

    def kernel(self, x, y) :
        diff = np.asarray(x) - np.asarray(y)
        return float(np.exp(-0.5*np.dot(diff, diff)/self.sigma**2))


class Linear(Kernel) :
    def kernel(self, x, y) :
        return float(np.dot(x, y))


class Polynomial(Kernel) :
    def __init__(self, coef0=1, degree=2):
        self.coef0 = coef0
        self.degree = degree

    def kernel(self, x, y):
        return float((np.dot(x, y) + self.coef0) ** self.degree)


class PrecomputedKernel(Kernel) :
    """Placeholder held by models fit on a precomputed kernel matrix."""

    def kernel(self, x, y):
        raise ConfigurationError("Kernel is precomputed.")

    def __repr__(self):
        return "PrecomputedKernel()"


str_to_kernel = {
    "rbf": RBF,
    "linear": Linear,
    "polynomial": Polynomial,
}


def get_kernel(name, **params):
    key = str(name).lower()
    if key not in str_to_kernel:
        raise ConfigurationError(f"Unknown kernel '{name}'. Supported: {list(str_to_kernel.keys())}")
    return str_to_kernel[key](**params)
