"""Random variate generation by inverse-transform sampling.

Uniform draws come from an explicit NumPy generator rather than global
state. Exactly one draw is consumed per output element, in index order,
so the same seed always reproduces the same sequence.
"""

from typing import Optional, Union

import numpy as np

from . import kernels
from .logging_config import get_logger
from .validation import broadcast_count

logger = get_logger(__name__)

RandomStateLike = Optional[Union[int, np.random.Generator, np.random.RandomState]]


def resolve_random_state(random_state: RandomStateLike = None) -> Union[np.random.Generator, np.random.RandomState]:
    """Turn a seed, generator or ``None`` into a uniform source.

    Args:
        random_state: ``None`` for a freshly seeded generator, an integer
            seed, a ``numpy.random.Generator`` or a legacy ``RandomState``

    Returns:
        Object exposing ``random(size)``
    """
    if random_state is None:
        return np.random.default_rng()
    if isinstance(random_state, (np.random.Generator, np.random.RandomState)):
        return random_state
    if isinstance(random_state, (int, np.integer)) and not isinstance(random_state, bool):
        return np.random.default_rng(int(random_state))
    raise TypeError(
        f"random_state must be None, an int seed, a Generator or a RandomState, "
        f"not {type(random_state).__name__}"
    )


class TriangularSampler:
    """Stateful triangular sampler around a single uniform stream."""

    def __init__(self, random_state: RandomStateLike = None):
        """Initialize sampler.

        Args:
            random_state: Seed or generator for reproducibility
        """
        self.random_state = resolve_random_state(random_state)

    def uniforms(self, n: int) -> np.ndarray:
        """Draw ``n`` uniforms in [0, 1) from the stream."""
        return np.ascontiguousarray(self.random_state.random(n), dtype=np.float64)

    def sample(self, n, min=0.0, max=1.0, mode=0.5) -> np.ndarray:
        """Draw ``n`` triangular variates.

        Args:
            n: Number of observations, floored to an integer
            min: Lower limit(s), length 1 or ``n``
            max: Upper limit(s), length 1 or ``n``
            mode: Mode(s), length 1 or ``n``

        Returns:
            Array of length ``n``
        """
        bset = broadcast_count(n, min, max, mode)
        u = self.uniforms(bset.length)

        if bset.scalar_params:
            out = kernels.rtri_scalar_params(u, bset.min, bset.max, bset.mode)
        else:
            out = kernels.rtri_vector_params(u, bset.min, bset.max, bset.mode)

        logger.debug("Drew %d triangular variates", bset.length,
                     extra={'function': 'rtri', 'length': bset.length,
                            'scalar_params': bset.scalar_params})
        return out
