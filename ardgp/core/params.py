# ardgp/core/params.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Hyperparameters of the ARD squared-exponential GP.

The natural parameters are positive (noise variance may be zero). Search
routines usually work in an unconstrained space, so the values can be
mapped to and from the log-space vector

    p = [log(s_f^2), log(s_n^2), log(l_1), ..., log(l_d)].
"""
from typing import NamedTuple, Any
import ardgp.num as gnp
from .utils import ShapeMismatchError, check_hyperparameters

DEFAULT_SIGNAL_VARIANCE = 0.10
DEFAULT_NOISE_VARIANCE = 1e-05
DEFAULT_LENGTHSCALE = 0.10


class Hyperparameters(NamedTuple):
    signal_variance: float
    noise_variance: float
    lengthscales: Any

    @classmethod
    def create(cls, signal_variance, noise_variance, lengthscales, dim=None):
        """Build validated hyperparameters.

        Parameters
        ----------
        signal_variance : float
            s_f^2 > 0.
        noise_variance : float
            s_n^2 >= 0.
        lengthscales : array_like, shape (d,)
            One positive length scale per input dimension.
        dim : int, optional
            Expected input dimension. If given, the length of
            `lengthscales` must match it.

        Raises
        ------
        ShapeMismatchError
            If `lengthscales` is not a vector of length `dim`.
        ValueError
            If a value is out of its domain.
        """
        lengthscales = gnp.asarray(lengthscales)
        if lengthscales.ndim != 1:
            raise ShapeMismatchError(
                f"lengthscales should be a 1D array, got shape {lengthscales.shape}"
            )
        if dim is not None and lengthscales.shape[0] != dim:
            raise ShapeMismatchError(
                f"lengthscales has dimension {lengthscales.shape[0]}, expected {dim}"
            )
        signal_variance = float(signal_variance)
        noise_variance = float(noise_variance)
        check_hyperparameters(signal_variance, noise_variance, lengthscales)
        return cls(signal_variance, noise_variance, gnp.readonly(lengthscales))

    @classmethod
    def default(cls, dim):
        """Default setting: s_f^2 = 0.1, s_n^2 = 1e-5, l = 0.1 in every dimension."""
        return cls.create(
            DEFAULT_SIGNAL_VARIANCE,
            DEFAULT_NOISE_VARIANCE,
            gnp.full((dim,), DEFAULT_LENGTHSCALE),
        )

    @classmethod
    def from_vector(cls, p, dim=None):
        """Inverse of `to_vector`."""
        p = gnp.asarray(p).reshape(-1)
        if p.shape[0] < 3:
            raise ShapeMismatchError(
                f"parameter vector should have at least 3 entries, got {p.shape[0]}"
            )
        return cls.create(gnp.exp(p[0]), gnp.exp(p[1]), gnp.exp(p[2:]), dim=dim)

    @property
    def dim(self):
        return self.lengthscales.shape[0]

    def to_vector(self):
        """Log-space vector [log s_f^2, log s_n^2, log l_1, ..., log l_d].

        A zero noise variance maps to -inf.
        """
        with gnp.errstate(divide="ignore"):
            return gnp.hstack(
                (
                    gnp.log(self.signal_variance),
                    gnp.log(self.noise_variance),
                    gnp.log(self.lengthscales),
                )
            )

    def same_as(self, other):
        """Exact equality of all values."""
        return (
            self.signal_variance == other.signal_variance
            and self.noise_variance == other.noise_variance
            and gnp.array_equal(self.lengthscales, other.lengthscales)
        )

    def __str__(self):
        return (
            f"Hyperparameters(signal_variance={self.signal_variance:.6g}, "
            f"noise_variance={self.noise_variance:.6g}, "
            f"lengthscales={list(map(float, self.lengthscales))})"
        )
