# ardgp/core/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------

"""
Core components of the ardgp package.

This subpackage contains the covariance matrix builders, the
factorization of the training covariance, the log-marginal-likelihood
and the regression model.

Public API
----------
GaussianProcessRegression : class
    Stateful GP regression engine.
Hyperparameters : class
    Signal variance, noise variance and length scales.
"""

from .model import GaussianProcessRegression
from .params import Hyperparameters
from .covariance import training_covariance, cross_covariance
from .likelihood import (
    log_marginal_likelihood,
    negative_log_likelihood,
    make_selection_criterion,
)
from .utils import ShapeMismatchError

__all__ = [
    "GaussianProcessRegression",
    "Hyperparameters",
    "training_covariance",
    "cross_covariance",
    "log_marginal_likelihood",
    "negative_log_likelihood",
    "make_selection_criterion",
    "ShapeMismatchError",
]
