# ardgp/__init__.py

from . import config
from . import num
from . import kernel
from . import core
from .exceptions import ShapeMismatchError
from .kernel import ard_squared_exponential_kernel, ard_squared_exponential_covariance
from .core import (
    GaussianProcessRegression,
    Hyperparameters,
    training_covariance,
    cross_covariance,
    log_marginal_likelihood,
    negative_log_likelihood,
    make_selection_criterion,
)

__all__ = [
    "config",
    "num",
    "kernel",
    "core",
    "GaussianProcessRegression",
    "Hyperparameters",
    "ShapeMismatchError",
    "ard_squared_exponential_kernel",
    "ard_squared_exponential_covariance",
    "training_covariance",
    "cross_covariance",
    "log_marginal_likelihood",
    "negative_log_likelihood",
    "make_selection_criterion",
    "__version__",
]

__version__ = config.__version__
