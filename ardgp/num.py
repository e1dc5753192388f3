# ardgp/num.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""NumPy numerical backend for ardgp.

All array creation, distance and dense linear-algebra primitives used by
the package go through this module (imported as ``gnp``).
"""

import builtins
from typing import Any, Union
from ardgp.config import get_config, get_dtype, init_solver, get_logger

Scalar = Union[int, float]
ArrayLike = Any

_ardgp_solver_: str = init_solver()
_config = get_config()
_logger = get_logger()
_logger.info("Using solver: %s", _ardgp_solver_)

_LINALG_ERROR_KEYWORDS = (
    "singular",
    "not positive definite",
    "not positive-definite",
    "cholesky",
    "matrix is not invertible",
    "ill-conditioned",
    "linalg",
    "lapack",
    "array must not contain infs or nans",
)

import numpy
from numpy.linalg import LinAlgError

from numpy import (
    array_equal,
    any,
    isfinite,
    hstack,
    diag,
    diag_indices_from,
    sqrt,
    exp,
    log,
    sum,
    maximum,
    einsum,
    errstate,
    matmul,
    all,
)
from numpy.linalg import cholesky, inv
from numpy import pi, inf
from numpy import finfo
from scipy.linalg import cho_solve
from scipy.spatial.distance import cdist, pdist, squareform

# ..................................................


def _np_dtype():
    """numpy floating type selected by ardgp.config.set_dtype."""
    return numpy.dtype(get_dtype()).type


def eps():
    return finfo(_np_dtype()).eps


def is_linalg_exception(exc: Exception) -> bool:
    if isinstance(exc, LinAlgError):
        return True
    msg = str(exc).lower()
    return builtins.any(keyword in msg for keyword in _LINALG_ERROR_KEYWORDS)


# ..................................................

def asarray(x, dtype=None):
    if dtype is not None:
        return numpy.asarray(x, dtype=dtype)
    dtype = _np_dtype()
    if isinstance(x, numpy.ndarray):
        if numpy.issubdtype(x.dtype, numpy.floating):
            return x.astype(dtype, copy=False)
        return x.astype(dtype)
    elif isinstance(x, (int, float)):
        return numpy.array([x], dtype=dtype)
    else:
        return numpy.asarray(x, dtype=dtype)


def full(shape, fill_value, dtype=None):
    return numpy.full(
        shape, fill_value, dtype=_np_dtype() if dtype is None else dtype
    )


def eye(n, m=None, k=0, dtype=None):
    return numpy.eye(n, M=m, k=k, dtype=_np_dtype() if dtype is None else dtype)


def readonly(x):
    """Return a copy of x that cannot be written to."""
    out = numpy.array(x, dtype=_np_dtype(), copy=True)
    out.setflags(write=False)
    return out


# ..................................................

def scaled_sqdistance(lengthscales: ArrayLike, x: ArrayLike, y: ArrayLike) -> ArrayLike:
    """(nx, ny) squared Euclidean distances between x / l and y / l."""
    return cdist(x / lengthscales, y / lengthscales, metric="sqeuclidean")


def scaled_sqdistance_ii(lengthscales: ArrayLike, x: ArrayLike) -> ArrayLike:
    """Symmetric (n, n) squared distances between the rows of x / l.

    Only the strict upper triangle is computed (condensed form); it is then
    mirrored, so the result is exactly symmetric with a zero diagonal.
    """
    return squareform(pdist(x / lengthscales, metric="sqeuclidean"))


# ..................................................

def logdet(A):
    sign, logabsdet = numpy.linalg.slogdet(A)
    if sign <= 0:
        raise ValueError(
            "Matrix is not positive definite (or has non-positive determinant)."
        )
    return logabsdet


def cholesky_inv(C):
    """Return A^-1 given the lower Cholesky factor C of A."""
    n = C.shape[0]
    return cho_solve((C, True), eye(n), check_finite=False)
