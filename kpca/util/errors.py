class KernelPCAError(Exception):
    """Base class of every error raised by kpca."""


class ConfigurationError(KernelPCAError, ValueError):
    """Options or fitted state that cannot produce a valid result."""


class NonConvergenceError(KernelPCAError, RuntimeError):
    """The iterative eigensolver ran out of iterations before converging."""


class InputError(KernelPCAError, ValueError):
    """Data whose shape does not match the model or the other operand."""
