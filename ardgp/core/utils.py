# ardgp/core/utils.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Small utilities used across `ardgp.core` modules.

This file hosts:
- Re-export of the shape-mismatch error raised by every public operation
- Shape/type validation & conversion helpers for (xi, zi, xt)
- Hyperparameter value checks
"""
import ardgp.num as gnp
from ardgp.exceptions import ShapeMismatchError


def ensure_training_data(xi, zi):
    """Validate and convert the training set.

    Parameters
    ----------
    xi : array_like, shape (n, d)
        Training inputs, one point per row.
    zi : array_like, shape (n,) or (n, 1)
        Observed outputs.

    Returns
    -------
    tuple
        (xi, zi) as float arrays of shapes (n, d) and (n,).

    Raises
    ------
    ShapeMismatchError
        If xi is not 2D, zi is not a vector or a single column, or
        xi.shape[0] != zi.shape[0].
    """
    xi = gnp.asarray(xi)
    zi = gnp.asarray(zi)
    if xi.ndim != 2:
        raise ShapeMismatchError(f"xi should be a 2D array, got shape {xi.shape}")
    if zi.ndim == 2:
        if zi.shape[1] != 1:
            raise ShapeMismatchError("zi should only have one column if it's a 2D array")
        zi = zi.reshape(-1)  # (n,1) -> (n,)
    elif zi.ndim != 1:
        raise ShapeMismatchError("zi should be 1D or a 2D column array")
    if xi.shape[0] != zi.shape[0]:
        raise ShapeMismatchError(
            f"xi has {xi.shape[0]} points but zi has {zi.shape[0]} values"
        )
    return xi, zi


def ensure_vector(x, dim, name="x"):
    """Return x as a float vector of length `dim`."""
    x = gnp.asarray(x)
    if x.ndim == 0:
        x = x.reshape(1)
    elif x.ndim == 2 and x.shape[0] == 1:
        x = x.reshape(-1)
    if x.ndim != 1 or x.shape[0] != dim:
        raise ShapeMismatchError(
            f"{name} should be a vector of dimension {dim}, got shape {x.shape}"
        )
    return x


def ensure_points(xt, dim, name="xt"):
    """Return xt as a float (m, dim) array."""
    xt = gnp.asarray(xt)
    if xt.ndim != 2 or xt.shape[1] != dim:
        raise ShapeMismatchError(
            f"{name} should be a 2D array with {dim} columns, got shape {xt.shape}"
        )
    return xt


def check_hyperparameters(signal_variance, noise_variance, lengthscales):
    """Check positivity and finiteness of hyperparameter values.

    Raises
    ------
    ValueError
        If signal_variance <= 0, noise_variance < 0, any length scale <= 0,
        or any value is not finite.
    """
    if not (gnp.isfinite(signal_variance) and signal_variance > 0.0):
        raise ValueError(f"signal_variance must be positive, got {signal_variance}")
    if not (gnp.isfinite(noise_variance) and noise_variance >= 0.0):
        raise ValueError(f"noise_variance must be nonnegative, got {noise_variance}")
    if not gnp.all(gnp.isfinite(lengthscales)) or gnp.any(lengthscales <= 0.0):
        raise ValueError(f"lengthscales must be positive, got {lengthscales}")
