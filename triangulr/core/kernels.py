"""Numba-compiled elementwise kernels for the triangular distribution.

Every function has a scalar ``_*_one`` form evaluating a single element and
two loop drivers: ``*_scalar_params`` for one (min, max, mode) triple shared
by the whole input and ``*_vector_params`` for index-aligned parameter
arrays. Callers are expected to have validated the parameters
(min < max, min <= mode <= max, all finite) before entering a kernel.

Notation used throughout: ``a = min``, ``b = max``, ``c = mode``,
``w = b - a``, ``h = c - a``, ``d = b - c``.
"""

import math

import numpy as np
from numba import njit

_INF = np.inf
_NAN = np.nan
_LOG2 = math.log(2.0)

# |t| * (max - min) below which the MGF is summed as a moment series
MGF_SERIES_THRESHOLD = 0.5
MGF_SERIES_TERMS = 40


# ---------------------------------------------------------------------------
# density
# ---------------------------------------------------------------------------

@njit(cache=True)
def _dtri_one(x, a, b, c, log_):
    if math.isnan(x):
        return x
    if x < a or x > b:
        return -_INF if log_ else 0.0
    w = b - a
    if x == c:
        if log_:
            return _LOG2 - math.log(w)
        return 2.0 / w
    if x < c:
        h = c - a
        if x == a:
            return -_INF if log_ else 0.0
        if log_:
            return _LOG2 + math.log(x - a) - math.log(w) - math.log(h)
        return 2.0 * (x - a) / (w * h)
    d = b - c
    if x == b:
        return -_INF if log_ else 0.0
    if log_:
        return _LOG2 + math.log(b - x) - math.log(w) - math.log(d)
    return 2.0 * (b - x) / (w * d)


@njit(cache=True)
def dtri_scalar_params(x, a, b, c, log_):
    n = x.shape[0]
    out = np.empty(n)
    for i in range(n):
        out[i] = _dtri_one(x[i], a, b, c, log_)
    return out


@njit(cache=True)
def dtri_vector_params(x, a, b, c, log_):
    n = x.shape[0]
    out = np.empty(n)
    for i in range(n):
        out[i] = _dtri_one(x[i], a[i], b[i], c[i], log_)
    return out


# ---------------------------------------------------------------------------
# distribution function
# ---------------------------------------------------------------------------

@njit(cache=True)
def _ptri_one(q, a, b, c, lower_tail, log_p):
    if math.isnan(q):
        return q
    w = b - a
    if q <= a:
        if lower_tail:
            return -_INF if log_p else 0.0
        return 0.0 if log_p else 1.0
    if q >= b:
        if lower_tail:
            return 0.0 if log_p else 1.0
        return -_INF if log_p else 0.0
    if q <= c:
        # a < q <= c implies c > a
        h = c - a
        if lower_tail:
            if log_p:
                return 2.0 * math.log(q - a) - math.log(w) - math.log(h)
            return (q - a) * (q - a) / (w * h)
        tail = (q - a) * (q - a) / (w * h)
        if log_p:
            return math.log1p(-tail)
        return 1.0 - tail
    # c < q < b implies b > c
    d = b - c
    if lower_tail:
        tail = (b - q) * (b - q) / (w * d)
        if log_p:
            return math.log1p(-tail)
        return 1.0 - tail
    if log_p:
        return 2.0 * math.log(b - q) - math.log(w) - math.log(d)
    return (b - q) * (b - q) / (w * d)


@njit(cache=True)
def ptri_scalar_params(q, a, b, c, lower_tail, log_p):
    n = q.shape[0]
    out = np.empty(n)
    for i in range(n):
        out[i] = _ptri_one(q[i], a, b, c, lower_tail, log_p)
    return out


@njit(cache=True)
def ptri_vector_params(q, a, b, c, lower_tail, log_p):
    n = q.shape[0]
    out = np.empty(n)
    for i in range(n):
        out[i] = _ptri_one(q[i], a[i], b[i], c[i], lower_tail, log_p)
    return out


# ---------------------------------------------------------------------------
# probability normalisation shared by the quantile and expected shortfall
# ---------------------------------------------------------------------------

@njit(cache=True)
def _normalize_p(p, lower_tail, log_p):
    """Return ``(p_lower, p_upper)`` with ``p_upper == 1 - p_lower``.

    Both halves are computed directly so that neither loses precision
    near 0. Out-of-range or NaN input gives ``(nan, nan)``.
    """
    if math.isnan(p):
        return _NAN, _NAN
    if log_p:
        if p > 0.0:
            return _NAN, _NAN
        inside = math.exp(p)
        outside = -math.expm1(p)
    else:
        if p < 0.0 or p > 1.0:
            return _NAN, _NAN
        inside = p
        outside = 1.0 - p
    if lower_tail:
        return inside, outside
    return outside, inside


@njit(cache=True)
def _quantile(p_lower, p_upper, a, b, c):
    w = b - a
    h = c - a
    pm = h / w
    if p_lower <= pm:
        x = a + math.sqrt(p_lower * w * h)
    else:
        x = b - math.sqrt(p_upper * w * (b - c))
    # rounding in the square root must not leave the support
    if x < a:
        return a
    if x > b:
        return b
    return x


@njit(cache=True)
def _qtri_one(p, a, b, c, lower_tail, log_p):
    p_lower, p_upper = _normalize_p(p, lower_tail, log_p)
    if math.isnan(p_lower):
        return _NAN
    return _quantile(p_lower, p_upper, a, b, c)


@njit(cache=True)
def qtri_scalar_params(p, a, b, c, lower_tail, log_p):
    n = p.shape[0]
    out = np.empty(n)
    for i in range(n):
        out[i] = _qtri_one(p[i], a, b, c, lower_tail, log_p)
    return out


@njit(cache=True)
def qtri_vector_params(p, a, b, c, lower_tail, log_p):
    n = p.shape[0]
    out = np.empty(n)
    for i in range(n):
        out[i] = _qtri_one(p[i], a[i], b[i], c[i], lower_tail, log_p)
    return out


# ---------------------------------------------------------------------------
# inverse-transform step for the sampler
# ---------------------------------------------------------------------------

@njit(cache=True)
def rtri_scalar_params(u, a, b, c):
    n = u.shape[0]
    out = np.empty(n)
    for i in range(n):
        out[i] = _quantile(u[i], 1.0 - u[i], a, b, c)
    return out


@njit(cache=True)
def rtri_vector_params(u, a, b, c):
    n = u.shape[0]
    out = np.empty(n)
    for i in range(n):
        out[i] = _quantile(u[i], 1.0 - u[i], a[i], b[i], c[i])
    return out


# ---------------------------------------------------------------------------
# moment generating function
# ---------------------------------------------------------------------------

@njit(cache=True)
def _mgf_series(t, w, h):
    """Taylor series of E[exp(t * (X - min))] around t = 0.

    Uses the raw moments of the shifted variable,
    E[Y^k] = 2 / ((k+1)(k+2)) * sum_{j=0..k} w^j h^(k-j),
    accumulated as T_k = S_k t^k / k! = (h t / k) T_{k-1} + (w t)^k / k!.
    """
    total = 1.0
    power = 1.0
    partial = 1.0
    for k in range(1, MGF_SERIES_TERMS + 1):
        power = power * w * t / k
        partial = partial * h * t / k + power
        term = 2.0 * partial / ((k + 1) * (k + 2))
        total += term
        if abs(term) <= 1e-17 * abs(total):
            break
    return total


@njit(cache=True)
def _mgf_closed(t, w, h):
    """Closed form of E[exp(t * (X - min))] for t away from zero."""
    d = w - h
    wt = w * t
    if h == 0.0:
        return 2.0 * (math.expm1(wt) - wt) / (wt * wt)
    if d == 0.0:
        return 2.0 * (wt * math.exp(wt) - math.expm1(wt)) / (wt * wt)
    # h*expm1(wt) - w*expm1(ht) == w*exp(ht)*expm1(dt) - d*expm1(wt);
    # the first form is O(h) without cancellation when h <= d, the second O(d) when d < h
    if h <= d:
        numer = h * math.expm1(wt) - w * math.expm1(h * t)
    else:
        numer = w * math.exp(h * t) * math.expm1(d * t) - d * math.expm1(wt)
    return 2.0 * numer / (w * h * d * t * t)


@njit(cache=True)
def _mgtri_one(t, a, b, c):
    if math.isnan(t):
        return t
    if math.isinf(t):
        # exp(t * x) tends to inf where t * x > 0 and to 0 elsewhere
        if t > 0.0:
            return _INF if b > 0.0 else 0.0
        return _INF if a < 0.0 else 0.0
    if t == 0.0:
        return 1.0
    w = b - a
    h = c - a
    if abs(t) * w < MGF_SERIES_THRESHOLD:
        shifted = _mgf_series(t, w, h)
    else:
        shifted = _mgf_closed(t, w, h)
    return math.exp(a * t) * shifted


@njit(cache=True)
def mgtri_scalar_params(t, a, b, c):
    n = t.shape[0]
    out = np.empty(n)
    for i in range(n):
        out[i] = _mgtri_one(t[i], a, b, c)
    return out


@njit(cache=True)
def mgtri_vector_params(t, a, b, c):
    n = t.shape[0]
    out = np.empty(n)
    for i in range(n):
        out[i] = _mgtri_one(t[i], a[i], b[i], c[i])
    return out


# ---------------------------------------------------------------------------
# expected shortfall
# ---------------------------------------------------------------------------

@njit(cache=True)
def _estri_one(p, a, b, c, lower_tail, log_p):
    p_lower, p_upper = _normalize_p(p, lower_tail, log_p)
    if math.isnan(p_lower):
        return _NAN
    if p_lower == 0.0:
        return a
    w = b - a
    h = c - a
    pm = h / w
    if p_lower <= pm:
        es = a + (2.0 / 3.0) * math.sqrt(p_lower * w * h)
    else:
        # lower triangle fully integrated plus the upper part up to Q(p)
        d = b - c
        # s = (p - pm) / (1 - pm) and r = 1 - s, each from its own side
        s = (p_lower - pm) * w / d
        r = min(p_upper * w / d, 1.0)
        if r < 0.5:
            shrink = 1.0 - r * math.sqrt(r)
        else:
            shrink = -math.expm1(1.5 * math.log1p(-s))
        area = 2.0 * h * h / (3.0 * w) + d * s - (2.0 / 3.0) * (d * d / w) * shrink
        es = a + area / p_lower
    if es < a:
        return a
    if es > b:
        return b
    return es


@njit(cache=True)
def estri_scalar_params(p, a, b, c, lower_tail, log_p):
    n = p.shape[0]
    out = np.empty(n)
    for i in range(n):
        out[i] = _estri_one(p[i], a, b, c, lower_tail, log_p)
    return out


@njit(cache=True)
def estri_vector_params(p, a, b, c, lower_tail, log_p):
    n = p.shape[0]
    out = np.empty(n)
    for i in range(n):
        out[i] = _estri_one(p[i], a[i], b[i], c[i], lower_tail, log_p)
    return out
