"""Frozen triangular distribution.

Holds one validated (min, max, mode) triple and exposes the vectorised
functions of ``triangulr.core.triangular`` as methods, alongside analytic
summaries.
"""

import math
from typing import Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, model_validator
from scipy import stats

from .exceptions import InvalidParameterError
from .sampler import RandomStateLike, TriangularSampler
from .triangular import dtri, estri, mgtri, ptri, qtri
from .validation import check_params


class TriangularDistribution(BaseModel):
    """Triangular distribution on [min, max] with peak at mode."""
    model_config = ConfigDict(frozen=True)

    min: float = 0.0
    max: float = 1.0
    mode: float = 0.5

    @model_validator(mode='after')
    def validate_order(self):
        check_params(np.array([self.min]), np.array([self.max]), np.array([self.mode]))
        return self

    @property
    def width(self) -> float:
        return self.max - self.min

    @property
    def mode_probability(self) -> float:
        """CDF value at the mode."""
        return (self.mode - self.min) / self.width

    def pdf(self, x, log: bool = False) -> np.ndarray:
        return dtri(x, self.min, self.max, self.mode, log=log)

    def cdf(self, q, lower_tail: bool = True, log_p: bool = False) -> np.ndarray:
        return ptri(q, self.min, self.max, self.mode, lower_tail=lower_tail, log_p=log_p)

    def ppf(self, p, lower_tail: bool = True, log_p: bool = False) -> np.ndarray:
        return qtri(p, self.min, self.max, self.mode, lower_tail=lower_tail, log_p=log_p)

    def rvs(self, n, random_state: RandomStateLike = None) -> np.ndarray:
        return TriangularSampler(random_state).sample(n, self.min, self.max, self.mode)

    def mgf(self, t) -> np.ndarray:
        return mgtri(t, self.min, self.max, self.mode)

    def expected_shortfall(self, p, lower_tail: bool = True, log_p: bool = False) -> np.ndarray:
        return estri(p, self.min, self.max, self.mode, lower_tail=lower_tail, log_p=log_p)

    def mean(self) -> float:
        return (self.min + self.max + self.mode) / 3

    def variance(self) -> float:
        a, b, c = self.min, self.max, self.mode
        return (a**2 + b**2 + c**2 - a*b - a*c - b*c) / 18

    def median(self) -> float:
        return float(self.ppf(0.5)[0])

    def stats(self) -> Tuple[float, float]:
        """Analytical mean and variance."""
        return self.mean(), self.variance()

    def raw_moment(self, k: int) -> float:
        """E[X^k] for a non-negative integer ``k``.

        Expands X = min + Y where Y = X - min has moments
        E[Y^j] = 2 / ((j+1)(j+2)) * sum_i w^i h^(j-i).
        """
        if k < 0 or int(k) != k:
            raise InvalidParameterError(
                f"Moment order must be a non-negative integer, not {k}",
                argument='k', value=k, rule="non-negative integer"
            )
        k = int(k)
        w = self.width
        h = self.mode - self.min
        total = 0.0
        for j in range(k + 1):
            shifted = 2.0 / ((j + 1) * (j + 2)) * sum(w**i * h**(j - i) for i in range(j + 1))
            total += math.comb(k, j) * self.min**(k - j) * shifted
        return total

    def to_scipy(self):
        """Equivalent frozen ``scipy.stats.triang`` distribution."""
        return stats.triang(self.mode_probability, loc=self.min, scale=self.width)
