# ardgp/core/covariance.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Covariance matrices of the ARD squared-exponential GP.

Functions
---------
training_covariance(xi, signal_variance, noise_variance, lengthscales)
    Covariance K of the noisy observations at the training points.

cross_covariance(xt, xi, signal_variance, lengthscales)
    Covariance between the latent values at query points and the
    training observations.
"""
import ardgp.num as gnp
from ardgp.config import get_noise_floor, get_logger
from ardgp.kernel import ard_squared_exponential_covariance
from .utils import ShapeMismatchError

_logger = get_logger()


def effective_noise_variance(noise_variance, warn=True):
    """Noise variance actually put on the diagonal of K.

    This is `noise_variance` unless a positive noise floor is configured
    (see `ardgp.config.set_noise_floor`) and is larger.
    """
    floor = get_noise_floor()
    if noise_variance < floor:
        if warn:
            _logger.warning(
                "noise variance %.3g raised to configured noise floor %.3g",
                noise_variance,
                floor,
            )
        return floor
    return noise_variance


def training_covariance(xi, signal_variance, noise_variance, lengthscales, warn=True):
    """Compute the (n, n) training covariance matrix.

    .. math::
        K_{ij} = k(x_i, x_j) + \\sigma_n^2 \\delta_{ij}

    Parameters
    ----------
    xi : array_like, shape (n, d)
        Training inputs.
    signal_variance : float
    noise_variance : float
    lengthscales : array_like, shape (d,)
    warn : bool, optional
        Log a warning when the noise floor raises noise_variance.

    Returns
    -------
    K : gnp.array, shape (n, n)
        Exactly symmetric; K[i, i] = signal_variance + noise_variance.
    """
    K = ard_squared_exponential_covariance(xi, None, signal_variance, lengthscales)
    K[gnp.diag_indices_from(K)] += effective_noise_variance(noise_variance, warn=warn)
    return K


def cross_covariance(xt, xi, signal_variance, lengthscales):
    """Compute the cross covariance between query points and training inputs.

    Parameters
    ----------
    xt : array_like, shape (d,) or (m, d)
        A single query point or m query points.
    xi : array_like, shape (n, d)
        Training inputs.
    signal_variance : float
    lengthscales : array_like, shape (d,)

    Returns
    -------
    gnp.array
        Shape (n,) for a single query point, (n, m) otherwise. No noise
        term is added.
    """
    xt = gnp.asarray(xt)
    xi = gnp.asarray(xi)
    single = xt.ndim == 1
    if single:
        xt = xt.reshape(1, -1)
    if xi.ndim != 2 or xt.ndim != 2 or xt.shape[1] != xi.shape[1]:
        raise ShapeMismatchError(
            f"query of shape {xt.shape} incompatible with training inputs of shape {xi.shape}"
        )
    k = ard_squared_exponential_covariance(xi, xt, signal_variance, lengthscales)
    return k[:, 0] if single else k
