# ardgp/config.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import os
import logging

# Read version from VERSION file
_version_file = os.path.join(os.path.dirname(__file__), "..", "VERSION")
try:
    with open(os.path.abspath(_version_file), "r") as f:
        __version__ = f.read().strip()
except FileNotFoundError:
    __version__ = "0.0.0"

_SOLVERS = ("cholesky", "inverse")
_DTYPES = ("float32", "float64")


def _normalize_dtype_spec(dtype):
    """Map float, 'float32'/'float64' or a numpy float type to its name."""
    if dtype is float:
        return "float64"
    if isinstance(dtype, str):
        name = dtype
    elif isinstance(dtype, type):
        name = dtype.__name__
    else:
        name = getattr(dtype, "name", None)
    if name not in _DTYPES:
        raise ValueError("dtype must be float32 or float64")
    return name


class _ARDGPConfig:
    def __init__(self):
        self.version = __version__
        self.dtype = "float64"
        self.solver = None
        self.noise_floor = 0.0
        # logger lives in config
        self.logger = logging.getLogger("ardgp")
        if not self.logger.handlers:
            h = logging.StreamHandler()
            h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
            self.logger.addHandler(h)
        self.logger.setLevel(logging.INFO)

    def __str__(self):
        return (
            f"ARDGPConfig("
            f"version={self.version}, "
            f"dtype={self.dtype}, "
            f"solver={self.solver}, "
            f"noise_floor={self.noise_floor})"
        )

    def __repr__(self):
        return (
            f"<ARDGPConfig "
            f"version={self.version!r}, "
            f"dtype={self.dtype!r}, "
            f"solver={self.solver!r}, "
            f"noise_floor={self.noise_floor!r}>"
        )

    def update(self, **kwargs):
        for k, v in kwargs.items():
            if k == "solver":
                set_solver(v)
            elif k == "noise_floor":
                set_noise_floor(v)
            elif k == "dtype":
                set_dtype(v)
            else:
                setattr(self, k, v)
        return self


_config = _ARDGPConfig()


def get_config():
    return _config


def _detect_solver():
    env = os.environ.get("ARDGP_SOLVER")
    if env in _SOLVERS:
        return env
    return "cholesky"


def init_solver():
    """Idempotent. Detect and store the solver used to factorize K."""
    if _config.solver is None:
        _config.solver = _detect_solver()
    return _config.solver


def set_solver(solver: str):
    """Select how K^-1 is obtained: 'cholesky' (default) or 'inverse'."""
    if solver not in _SOLVERS:
        raise ValueError("solver must be 'cholesky' or 'inverse'")
    _config.solver = solver


def get_solver():
    """Return current solver; triggers detection if not set."""
    return _config.solver or init_solver()


def set_noise_floor(noise_floor):
    """Minimum noise variance added to the diagonal of K (0.0 disables it)."""
    noise_floor = float(noise_floor)
    if not noise_floor >= 0.0:
        raise ValueError("noise_floor must be nonnegative")
    _config.noise_floor = noise_floor


def get_noise_floor():
    return _config.noise_floor


def set_dtype(dtype):
    """Floating type of the arrays built by ardgp.num (float32 or float64)."""
    _config.dtype = _normalize_dtype_spec(dtype)


def get_dtype():
    return _config.dtype


def get_logger():
    return _config.logger


def set_log_level(level):
    _config.logger.setLevel(level)
