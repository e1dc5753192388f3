# ardgp/kernel/ard.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import ardgp.num as gnp
from ardgp.exceptions import ShapeMismatchError


def squared_exponential_kernel(h2):
    """Squared-exponential kernel as a function of squared scaled distance.

    .. math::
        k(h^2) = \\exp(-h^2 / 2)

    Parameters
    ----------
    h2 : gnp.array
        Squared scaled distances.

    Returns
    -------
    gnp.array
        Kernel values.
    """
    return gnp.exp(-0.5 * h2)


def ard_squared_exponential_kernel(x_i, x_j, signal_variance, lengthscales):
    """ARD squared-exponential covariance between two points.

    .. math::
        k(x_i, x_j) = \\sigma_f^2 \\exp\\Big(-\\frac{1}{2}
                      \\sum_{d=1}^{D} \\frac{(x_{i,d} - x_{j,d})^2}{l_d^2}\\Big)

    Parameters
    ----------
    x_i, x_j : array_like, shape (d,)
        Input points.
    signal_variance : float
        :math:`\\sigma_f^2`.
    lengthscales : array_like, shape (d,)
        One length scale per input dimension.

    Returns
    -------
    float
        Covariance value.

    Raises
    ------
    ShapeMismatchError
        If x_i, x_j and lengthscales do not share the same dimension.
    """
    x_i = gnp.asarray(x_i).reshape(-1)
    x_j = gnp.asarray(x_j).reshape(-1)
    lengthscales = gnp.asarray(lengthscales).reshape(-1)
    if not (x_i.shape[0] == x_j.shape[0] == lengthscales.shape[0]):
        raise ShapeMismatchError(
            f"dimension mismatch: x_i has {x_i.shape[0]}, x_j has {x_j.shape[0]}, "
            f"lengthscales has {lengthscales.shape[0]}"
        )
    h2 = gnp.sum(((x_i - x_j) / lengthscales) ** 2)
    return float(signal_variance * squared_exponential_kernel(h2))


def ard_squared_exponential_covariance(x, y, signal_variance, lengthscales):
    """ARD squared-exponential covariance matrix between the rows of x and y.

    Parameters
    ----------
    x : gnp.array, shape (nx, d)
    y : gnp.array, shape (ny, d) or None
        If None (or `y is x`), the symmetric covariance of x with itself is
        returned, computed from the upper triangle only.
    signal_variance : float
    lengthscales : gnp.array, shape (d,)

    Returns
    -------
    gnp.array, shape (nx, ny)
    """
    x = gnp.asarray(x)
    lengthscales = gnp.asarray(lengthscales).reshape(-1)
    if x.ndim != 2 or x.shape[1] != lengthscales.shape[0]:
        raise ShapeMismatchError(
            f"x should have {lengthscales.shape[0]} columns, got shape {x.shape}"
        )
    if y is None or y is x:
        h2 = gnp.scaled_sqdistance_ii(lengthscales, x)
    else:
        y = gnp.asarray(y)
        if y.ndim != 2 or y.shape[1] != lengthscales.shape[0]:
            raise ShapeMismatchError(
                f"y should have {lengthscales.shape[0]} columns, got shape {y.shape}"
            )
        h2 = gnp.scaled_sqdistance(lengthscales, x, y)
    return signal_variance * squared_exponential_kernel(h2)
