"""Core evaluation engine."""

# Distribution functions
from .triangular import dtri, ptri, qtri, rtri, mgtri, estri
from .distributions import TriangularDistribution
from .sampler import TriangularSampler, resolve_random_state

# Broadcasting
from .validation import BroadcastSet, broadcast, broadcast_count

# Configuration
from .config import TriangulrConfig, load_config

# Exception handling and logging
from .exceptions import (
    TriangulrError, TriErrorKind, InvalidParameterError,
    RecycleError, FlagError, CountError, handle_exception
)
from .logging_config import setup_logging, get_logger

__all__ = [
    'dtri', 'ptri', 'qtri', 'rtri', 'mgtri', 'estri',
    'TriangularDistribution', 'TriangularSampler', 'resolve_random_state',
    'BroadcastSet', 'broadcast', 'broadcast_count',
    'TriangulrConfig', 'load_config',
    'TriangulrError', 'TriErrorKind', 'InvalidParameterError',
    'RecycleError', 'FlagError', 'CountError', 'handle_exception',
    'setup_logging', 'get_logger',
]
