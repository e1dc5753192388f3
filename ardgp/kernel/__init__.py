# ardgp/kernel/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Gaussian Process kernels.

Modules
-------
ard
    Squared-exponential kernel with automatic relevance determination
    (one length scale per input dimension).

Public API
-----------
- squared_exponential_kernel
- ard_squared_exponential_kernel
- ard_squared_exponential_covariance
"""

from .ard import (
    squared_exponential_kernel,
    ard_squared_exponential_kernel,
    ard_squared_exponential_covariance,
)

__all__ = [
    "squared_exponential_kernel",
    "ard_squared_exponential_kernel",
    "ard_squared_exponential_covariance",
]
