"""triangulr: the triangular distribution for NumPy.

Density, distribution function, quantile function, random generation,
moment generating function and expected shortfall over numeric arrays,
with parameter recycling and tail/log variants.
"""

__version__ = "1.0.0"
__author__ = "triangulr developers"

# Distribution functions
from .core.triangular import dtri, ptri, qtri, rtri, mgtri, estri
from .core.distributions import TriangularDistribution
from .core.sampler import TriangularSampler

# Exception handling
from .core.exceptions import (
    TriangulrError,
    TriErrorKind,
    InvalidParameterError,
    RecycleError,
    FlagError,
    CountError,
)

# Logging configuration
from .core.logging_config import setup_logging, get_logger

__all__ = [
    # Distribution functions
    "dtri",
    "ptri",
    "qtri",
    "rtri",
    "mgtri",
    "estri",
    "TriangularDistribution",
    "TriangularSampler",
    # Exception handling
    "TriangulrError",
    "TriErrorKind",
    "InvalidParameterError",
    "RecycleError",
    "FlagError",
    "CountError",
    # Logging
    "setup_logging",
    "get_logger",
]
