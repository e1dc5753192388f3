# ardgp/core/likelihood.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Log-marginal-likelihood of the ARD squared-exponential GP.

The log-likelihood is a pure scoring function of the hyperparameters.
No optimizer is provided: any search strategy can be plugged in through
`make_selection_criterion`, which exposes the negative log-likelihood as a
function of an unconstrained log-parameter vector.

Numerical sensitivity
---------------------
The computation needs K to be invertible with a positive determinant.
When K is singular or nearly so (duplicated training points, tiny noise
variance, extreme length scales), the value degrades: it may become very
large, -inf, or meaningless. Such settings are not reported as errors.
Optimizers exploring the parameter space should expect non-finite values
and treat them as rejected candidates.
"""
import warnings
import ardgp.num as gnp
from ardgp.config import get_logger, get_noise_floor
from .covariance import training_covariance
from .linalg import factorize
from .params import Hyperparameters
from . import utils

_logger = get_logger()


def log_likelihood_from_factorization(zi, factorization):
    """Log-marginal-likelihood from an existing factorization of K.

    .. math::
        \\log p(z | X) = -\\frac{1}{2} z^T K^{-1} z - \\frac{1}{2} \\log |K|
                         - \\frac{n}{2} \\log 2\\pi

    Returns -inf if det(K) is not positive.
    """
    n = zi.shape[0]
    norm2 = gnp.einsum("i, i", zi, factorization.alpha)
    try:
        ldetK = factorization.logdet()
    except ValueError:
        _logger.warning("covariance matrix has a non-positive determinant")
        return -gnp.inf
    return float(-0.5 * (norm2 + ldetK + n * gnp.log(2.0 * gnp.pi)))


def log_marginal_likelihood(xi, zi, signal_variance, noise_variance, lengthscales):
    """Computes the log-marginal-likelihood of the observations.

    Parameters
    ----------
    xi : array_like, shape (n, d)
        Training inputs.
    zi : array_like, shape (n,)
        Observed outputs.
    signal_variance : float
        s_f^2 > 0.
    noise_variance : float
        s_n^2 >= 0.
    lengthscales : array_like, shape (d,)
        Positive length scales.

    Returns
    -------
    float
        log p(zi | xi). Higher is better. Values for ill-conditioned
        covariance matrices are unreliable (see module notes).

    Raises
    ------
    ShapeMismatchError
        If the shapes of xi, zi and lengthscales are inconsistent.
    numpy.linalg.LinAlgError
        If K cannot be inverted at all.
    """
    xi, zi = utils.ensure_training_data(xi, zi)
    hp = Hyperparameters.create(
        signal_variance, noise_variance, lengthscales, dim=xi.shape[1]
    )
    K = training_covariance(xi, hp.signal_variance, hp.noise_variance, hp.lengthscales)
    return log_likelihood_from_factorization(zi, factorize(K, zi))


def negative_log_likelihood(xi, zi, signal_variance, noise_variance, lengthscales):
    """Negative of `log_marginal_likelihood`, for minimizers."""
    return -log_marginal_likelihood(
        xi, zi, signal_variance, noise_variance, lengthscales
    )


def make_selection_criterion(xi, zi):
    """Build a selection criterion for external optimizers.

    Parameters
    ----------
    xi : array_like, shape (n, d)
    zi : array_like, shape (n,)

    Returns
    -------
    criterion : callable
        ``criterion(p)`` returns the negative log-marginal-likelihood at
        ``Hyperparameters.from_vector(p)``, where
        ``p = [log s_f^2, log s_n^2, log l_1, ..., log l_d]``. Linear-algebra
        failures and non-finite parameters return +inf so that the
        candidate is simply rejected.
    """
    xi, zi = utils.ensure_training_data(xi, zi)
    dim = xi.shape[1]
    floor = get_noise_floor()
    if floor > 0.0:
        _logger.info(
            "selection criterion: noise variances below %.3g are raised to it", floor
        )

    def criterion(p):
        try:
            hp = Hyperparameters.from_vector(p, dim=dim)
        except utils.ShapeMismatchError:
            raise
        except ValueError:
            return gnp.inf
        K = training_covariance(
            xi, hp.signal_variance, hp.noise_variance, hp.lengthscales, warn=False
        )
        try:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore", RuntimeWarning)
                factorization = factorize(K, zi)
        except Exception as exc:
            if gnp.is_linalg_exception(exc):
                return gnp.inf
            raise
        return -log_likelihood_from_factorization(zi, factorization)

    return criterion
