# ardgp/core/model.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Gaussian Process regression model class.
"""
import threading
import warnings
from typing import NamedTuple
import ardgp.num as gnp
from ardgp.config import get_logger

from . import utils
from .covariance import training_covariance, cross_covariance, effective_noise_variance
from .likelihood import log_likelihood_from_factorization, make_selection_criterion
from .linalg import CovarianceFactorization, factorize
from .params import Hyperparameters

_logger = get_logger()


class _ModelState(NamedTuple):
    hyperparameters: Hyperparameters
    prior_variance: float
    factorization: CovarianceFactorization


class GaussianProcessRegression:
    """Gaussian Process regression with an ARD squared-exponential kernel.

    The model owns a fixed training set (xi, zi) and a hyperparameter
    setting (signal variance s_f^2, noise variance s_n^2, length scales l).
    The training covariance K and its inverse are computed whenever the
    hyperparameters change and are reused by every prediction.

    Attributes
    ----------
    xi : ndarray, shape (n, d)
        Training inputs (read-only).
    zi : ndarray, shape (n,)
        Observed outputs (read-only).
    hyperparameters : Hyperparameters
        Current setting.
    K : ndarray, shape (n, n)
        Training covariance matrix for the current setting.
    K_inv : ndarray, shape (n, n)
        Inverse of K.

    Public API (methods)
    --------------------
    set_hyperparameters
        Replace the hyperparameters and recompute K, K^-1.
    fit
        Apply hyperparameters chosen by a caller-provided optimizer.
    predict_mean
        Posterior mean at one point.
    predict_std
        Posterior standard deviation at one point.
    predict
        Posterior means and standard deviations at several points.
    log_likelihood
        Log-marginal-likelihood for the current setting.

    Notes
    -----
    The hyperparameters and every matrix derived from them are stored in
    one record that is replaced as a whole. Mutations and reads are
    serialized by a per-instance lock, so K and K^-1 always correspond to
    the same hyperparameters.

    Examples
    --------
    >>> import ardgp
    >>> xi = [[0.0], [1.0], [2.0]]
    >>> zi = [0.0, 1.0, 4.0]
    >>> model = ardgp.GaussianProcessRegression(xi, zi)
    >>> model.set_hyperparameters(1.0, 1e-8, [1.0])
    >>> mean = model.predict_mean([1.0])
    >>> std = model.predict_std([1.5])
    """

    def __init__(self, xi, zi):
        """
        Parameters
        ----------
        xi : array_like, shape (n, d)
            Training inputs, one point per row.
        zi : array_like, shape (n,) or (n, 1)
            Observed outputs.

        Raises
        ------
        ShapeMismatchError
            If xi and zi do not describe the same number of points.
        """
        xi, zi = utils.ensure_training_data(xi, zi)
        self._xi = gnp.readonly(xi)
        self._zi = gnp.readonly(zi)
        self._lock = threading.RLock()
        self._state = None
        hp = Hyperparameters.default(self.dim)
        self._apply(hp)

    def __repr__(self):
        output = str("<ardgp.core.GaussianProcessRegression object> " + hex(id(self)))
        return output

    def __str__(self):
        hp = self.hyperparameters
        return (
            f"GP Regression Model:\n"
            f"  Training points: {self.n}\n"
            f"  Input dimension: {self.dim}\n"
            f"  Signal variance: {hp.signal_variance}\n"
            f"  Noise variance: {hp.noise_variance}\n"
            f"  Length scales: {list(map(float, hp.lengthscales))}"
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def xi(self):
        return self._xi

    @property
    def zi(self):
        return self._zi

    @property
    def n(self):
        return self._xi.shape[0]

    @property
    def dim(self):
        return self._xi.shape[1]

    @property
    def hyperparameters(self):
        with self._lock:
            return self._state.hyperparameters

    @property
    def K(self):
        with self._lock:
            return self._state.factorization.K

    @property
    def K_inv(self):
        with self._lock:
            return self._state.factorization.K_inv

    def _snapshot(self):
        with self._lock:
            return self._state

    def _apply(self, hp):
        K = training_covariance(
            self._xi, hp.signal_variance, hp.noise_variance, hp.lengthscales
        )
        state = _ModelState(
            hyperparameters=hp,
            prior_variance=hp.signal_variance
            + effective_noise_variance(hp.noise_variance, warn=False),
            factorization=factorize(K, self._zi),
        )
        with self._lock:
            self._state = state
        _logger.debug("hyperparameters set to %s", hp)

    # ------------------------------------------------------------------
    # Hyperparameters
    # ------------------------------------------------------------------
    def set_hyperparameters(self, signal_variance, noise_variance, lengthscales):
        """Replace the hyperparameters and recompute K and K^-1.

        Parameters
        ----------
        signal_variance : float
            s_f^2 > 0.
        noise_variance : float
            s_n^2 >= 0.
        lengthscales : array_like, shape (d,)
            One positive length scale per input dimension.

        Raises
        ------
        ShapeMismatchError
            If len(lengthscales) != d.
        ValueError
            If a value is out of its domain.
        """
        hp = Hyperparameters.create(
            signal_variance, noise_variance, lengthscales, dim=self.dim
        )
        with self._lock:
            self._apply(hp)

    def fit(self, optimizer=None, initial=None):
        """Select hyperparameters by maximum likelihood using a caller's optimizer.

        No search strategy is built in. The caller provides one, it is
        given the negative log-marginal-likelihood as a function of the
        log-parameter vector and a starting point, and the point it
        returns is applied with `set_hyperparameters`.

        Parameters
        ----------
        optimizer : callable
            ``optimizer(criterion, p0) -> p_best`` where ``criterion(p)``
            returns the negative log-marginal-likelihood at
            ``p = [log s_f^2, log s_n^2, log l_1, ..., log l_d]`` (+inf for
            rejected candidates) and ``p0`` is the starting vector.
        initial : Hyperparameters, optional
            Starting point. Defaults to the current hyperparameters.

        Returns
        -------
        Hyperparameters
            The applied setting.

        Raises
        ------
        NotImplementedError
            If no optimizer is given.
        """
        if optimizer is None:
            raise NotImplementedError(
                "no built-in hyperparameter optimizer; pass optimizer(criterion, p0)"
            )
        initial = self.hyperparameters if initial is None else initial
        criterion = make_selection_criterion(self._xi, self._zi)
        p_best = optimizer(criterion, initial.to_vector())
        hp = Hyperparameters.from_vector(p_best, dim=self.dim)
        with self._lock:
            self._apply(hp)
        _logger.info("fit: %s, log-likelihood %.6g", hp, self.log_likelihood())
        return hp

    def log_likelihood(self):
        """Log-marginal-likelihood at the current hyperparameters."""
        state = self._snapshot()
        return log_likelihood_from_factorization(self._zi, state.factorization)

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------
    def predict_mean(self, x):
        """Posterior mean k(x, X)^T K^-1 z at a point x of dimension d."""
        x = utils.ensure_vector(x, self.dim)
        state = self._snapshot()
        hp = state.hyperparameters
        k = cross_covariance(x, self._xi, hp.signal_variance, hp.lengthscales)
        return float(gnp.einsum("i, ij, j", k, state.factorization.K_inv, self._zi))

    def predict_std(self, x):
        """Posterior standard deviation at a point x of dimension d.

        .. math::
            \\sqrt{\\max(0, \\sigma_f^2 + \\sigma_n^2 - k^T K^{-1} k)}
        """
        x = utils.ensure_vector(x, self.dim)
        state = self._snapshot()
        hp = state.hyperparameters
        k = cross_covariance(x, self._xi, hp.signal_variance, hp.lengthscales)
        var = state.prior_variance - gnp.einsum(
            "i, ij, j", k, state.factorization.K_inv, k
        )
        return float(gnp.sqrt(_zero_neg_variances(var, state.prior_variance)))

    def predict(self, xt, return_var=False):
        """Performs a prediction at target points xt.

        Parameters
        ----------
        xt : array_like, shape (m, d)
            Target points.
        return_var : bool, optional
            Return variances instead of standard deviations.

        Returns
        -------
        zt_posterior_mean : ndarray, shape (m,)
        zt_posterior_std : ndarray, shape (m,)
            Standard deviations (variances if return_var). Negative
            variances due to round-off are replaced by zeros.
        """
        xt = utils.ensure_points(xt, self.dim)
        state = self._snapshot()
        hp = state.hyperparameters
        kit = cross_covariance(xt, self._xi, hp.signal_variance, hp.lengthscales)
        lambda_t = gnp.matmul(state.factorization.K_inv, kit)  # (n, m)
        zt_posterior_mean = gnp.einsum("i..., i...", lambda_t, self._zi)
        zt_posterior_variance = state.prior_variance - gnp.sum(kit * lambda_t, axis=0)
        zt_posterior_variance = _zero_neg_variances(
            zt_posterior_variance, state.prior_variance
        )
        if return_var:
            return zt_posterior_mean, zt_posterior_variance
        return zt_posterior_mean, gnp.sqrt(zt_posterior_variance)


def _zero_neg_variances(var, prior_variance):
    if gnp.any(var < -gnp.sqrt(gnp.eps()) * prior_variance):
        warnings.warn(
            "Negative variances detected. Consider a larger noise variance.",
            RuntimeWarning,
        )
    return gnp.maximum(var, 0.0)
