# ardgp/core/linalg.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Factorization of the training covariance matrix.

The model caches K together with K^-1 and K^-1 z in a single immutable
record so that a prediction never mixes quantities computed from
different hyperparameters.
"""
import warnings
from typing import NamedTuple, Any, Optional
import ardgp.num as gnp
from ardgp.config import get_solver, get_logger

_logger = get_logger()


class CovarianceFactorization(NamedTuple):
    K: Any
    K_inv: Any
    alpha: Any
    chol: Optional[Any]
    solver: str

    def logdet(self):
        """log |K|. Raises ValueError if det(K) <= 0."""
        if self.chol is not None:
            return 2.0 * gnp.sum(gnp.log(gnp.diag(self.chol)))
        return gnp.logdet(self.K)


def factorize(K, zi, solver=None):
    """Compute K^-1 and K^-1 zi.

    Parameters
    ----------
    K : gnp.array, shape (n, n)
        Symmetric covariance matrix.
    zi : gnp.array, shape (n,)
        Observations.
    solver : {'cholesky', 'inverse'}, optional
        Defaults to the configured solver (`ardgp.config.get_solver`).

    Returns
    -------
    CovarianceFactorization
        Read-only arrays.

    Notes
    -----
    With 'cholesky', K = C C^T is factorized and K^-1 is obtained by
    triangular solves. If K is not numerically positive definite the
    explicit inverse is used instead and a RuntimeWarning is issued.
    With 'inverse', K^-1 is computed directly. If the inverse itself does
    not exist, numpy.linalg.LinAlgError propagates.
    """
    solver = get_solver() if solver is None else solver
    n = K.shape[0]
    chol = None
    if solver == "cholesky":
        try:
            chol = gnp.cholesky(K)
        except gnp.LinAlgError:
            warnings.warn(
                "Covariance matrix is not numerically positive definite; "
                "falling back to explicit inversion. Consider a larger noise variance.",
                RuntimeWarning,
            )
            solver = "inverse"
    if chol is not None:
        K_inv = gnp.cholesky_inv(chol)
        alpha = gnp.cho_solve((chol, True), zi, check_finite=False)
    else:
        K_inv = gnp.inv(K)
        alpha = gnp.matmul(K_inv, zi)
    # K^-1 is symmetric; remove round-off asymmetry
    K_inv = 0.5 * (K_inv + K_inv.T)
    _logger.debug("factorized %d x %d covariance matrix (solver=%s)", n, n, solver)
    return CovarianceFactorization(
        K=gnp.readonly(K),
        K_inv=gnp.readonly(K_inv),
        alpha=gnp.readonly(alpha),
        chol=None if chol is None else gnp.readonly(chol),
        solver=solver,
    )
