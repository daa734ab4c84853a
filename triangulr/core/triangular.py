"""The triangular distribution.

Density, distribution function, quantile function, random generation,
moment generating function and expected shortfall for the triangular
distribution on ``[min, max]`` with peak at ``mode``.

The numerical arguments other than ``n`` are recycled: if ``min``, ``max``
and ``mode`` each have length one they are shared by every element of the
primary input; otherwise every vector must have length one or the common
length, which becomes the length of the result. The logical options
``log``, ``lower_tail`` and ``log_p`` must each be a single boolean.

Examples:
    >>> dtri([0, 0.5, 1], min=0, max=1, mode=[0.5, 0.5, 0.5])
    array([0., 2., 0.])
    >>> ptri(0.5)
    array([0.5])
"""

import numpy as np

from . import kernels
from .logging_config import get_logger
from .sampler import RandomStateLike, TriangularSampler
from .validation import broadcast, check_scalar_flag

logger = get_logger(__name__)


def _dispatch(name, scalar_kernel, vector_kernel, bset, *options) -> np.ndarray:
    if bset.scalar_params:
        out = scalar_kernel(bset.values, bset.min, bset.max, bset.mode, *options)
    else:
        out = vector_kernel(bset.values, bset.min, bset.max, bset.mode, *options)
    logger.debug("Evaluated %s over %d elements", name, bset.length,
                 extra={'function': name, 'length': bset.length,
                        'scalar_params': bset.scalar_params})
    return out


def dtri(x, min=0.0, max=1.0, mode=0.5, log=False) -> np.ndarray:
    """Density of the triangular distribution.

    Args:
        x: Vector of quantiles
        min: Lower limit, ``min < max``
        max: Upper limit
        mode: Mode, ``min <= mode <= max``
        log: If True, return ``log(f(x))`` evaluated in log space

    Returns:
        Density values; 0 (or ``-inf`` on the log scale) outside the support
    """
    flags = check_scalar_flag(log=log)
    bset = broadcast('x', x, min, max, mode)
    return _dispatch('dtri', kernels.dtri_scalar_params, kernels.dtri_vector_params,
                     bset, flags['log'])


def ptri(q, min=0.0, max=1.0, mode=0.5, lower_tail=True, log_p=False) -> np.ndarray:
    """Distribution function of the triangular distribution.

    Args:
        q: Vector of quantiles
        min: Lower limit, ``min < max``
        max: Upper limit
        mode: Mode, ``min <= mode <= max``
        lower_tail: If True, probabilities are P[X <= q], otherwise P[X > q]
        log_p: If True, probabilities are returned as log(p)

    Returns:
        Probabilities
    """
    flags = check_scalar_flag(lower_tail=lower_tail, log_p=log_p)
    bset = broadcast('q', q, min, max, mode)
    return _dispatch('ptri', kernels.ptri_scalar_params, kernels.ptri_vector_params,
                     bset, flags['lower_tail'], flags['log_p'])


def qtri(p, min=0.0, max=1.0, mode=0.5, lower_tail=True, log_p=False) -> np.ndarray:
    """Quantile function of the triangular distribution.

    Args:
        p: Vector of probabilities
        min: Lower limit, ``min < max``
        max: Upper limit
        mode: Mode, ``min <= mode <= max``
        lower_tail: If True, probabilities are P[X <= x], otherwise P[X > x]
        log_p: If True, probabilities are given as log(p)

    Returns:
        Quantiles in ``[min, max]``; NaN where ``p`` is not a probability
    """
    flags = check_scalar_flag(lower_tail=lower_tail, log_p=log_p)
    bset = broadcast('p', p, min, max, mode)
    return _dispatch('qtri', kernels.qtri_scalar_params, kernels.qtri_vector_params,
                     bset, flags['lower_tail'], flags['log_p'])


def rtri(n, min=0.0, max=1.0, mode=0.5, random_state: RandomStateLike = None) -> np.ndarray:
    """Random variates from the triangular distribution.

    Extreme values are only produced when ``max - min`` is small relative
    to ``min``.

    Args:
        n: Number of observations; a single number >= 1, floored
        min: Lower limit(s), length 1 or ``n``
        max: Upper limit(s), length 1 or ``n``
        mode: Mode(s), length 1 or ``n``
        random_state: Seed, ``numpy.random.Generator`` or ``RandomState``

    Returns:
        Array of ``n`` variates
    """
    return TriangularSampler(random_state).sample(n, min, max, mode)


def mgtri(t, min=0.0, max=1.0, mode=0.5) -> np.ndarray:
    """Moment generating function of the triangular distribution.

    Args:
        t: Vector of dummy variables
        min: Lower limit, ``min < max``
        max: Upper limit
        mode: Mode, ``min <= mode <= max``

    Returns:
        E[exp(t X)] for each ``t``. At ``t = inf`` this is ``inf`` when
        ``max > 0`` and 0 otherwise; at ``t = -inf`` it is ``inf`` when
        ``min < 0`` and 0 otherwise.
    """
    bset = broadcast('t', t, min, max, mode)
    return _dispatch('mgtri', kernels.mgtri_scalar_params, kernels.mgtri_vector_params, bset)


def estri(p, min=0.0, max=1.0, mode=0.5, lower_tail=True, log_p=False) -> np.ndarray:
    """Expected shortfall of the triangular distribution.

    The mean of X conditional on X falling in its lower ``p`` tail,
    ``(1/p) * integral of Q(u) du over [0, p]``.

    Args:
        p: Vector of probabilities
        min: Lower limit, ``min < max``
        max: Upper limit
        mode: Mode, ``min <= mode <= max``
        lower_tail: If False, ``p`` is replaced by ``1 - p``
        log_p: If True, probabilities are given as log(p)

    Returns:
        Expected shortfall; ``min`` at ``p = 0``, the mean at ``p = 1``
    """
    flags = check_scalar_flag(lower_tail=lower_tail, log_p=log_p)
    bset = broadcast('p', p, min, max, mode)
    return _dispatch('estri', kernels.estri_scalar_params, kernels.estri_vector_params,
                     bset, flags['lower_tail'], flags['log_p'])
