# ardgp/exceptions.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------


class ShapeMismatchError(ValueError):
    """Raised when array dimensions are incompatible.

    Covers a training set whose number of points differs from the number of
    observations, a query whose dimension differs from the training inputs,
    and a length-scale vector whose size differs from the input dimension.
    Arrays are never truncated or padded to make them fit.
    """
