"""Argument validation and parameter broadcasting.

Every public function runs its arguments through this module before any
kernel is entered, so a single bad argument aborts the whole call.
"""

from dataclasses import dataclass
from typing import Dict, Union

import numpy as np

from .exceptions import CountError, FlagError, InvalidParameterError, RecycleError
from .logging_config import get_logger

logger = get_logger(__name__)

ParamValue = Union[float, np.ndarray]


@dataclass
class BroadcastSet:
    """Inputs reconciled to a common length.

    In scalar-parameter mode ``min``, ``max`` and ``mode`` are plain floats
    shared by every element; otherwise they are float64 arrays aligned
    index-by-index with ``values``.
    """
    values: np.ndarray
    min: ParamValue
    max: ParamValue
    mode: ParamValue
    length: int
    scalar_params: bool


def as_numeric(name: str, value) -> np.ndarray:
    """Coerce ``value`` to a non-empty 1-D float64 array.

    Raises:
        InvalidParameterError: If ``value`` is not numeric or is empty
    """
    try:
        arr = np.asarray(value)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(
            f"`{name}` must be a numeric vector",
            argument=name, value=value, rule="numeric", cause=e
        )

    if arr.dtype.kind not in 'iuf':
        raise InvalidParameterError(
            f"`{name}` must be a numeric vector, not of dtype {arr.dtype}",
            argument=name, value=value, rule="numeric"
        )

    arr = np.ascontiguousarray(arr, dtype=np.float64).ravel()
    if arr.size == 0:
        raise InvalidParameterError(
            f"`{name}` must have length of at least one",
            argument=name, value=value, rule="non-empty"
        )
    return arr


def check_numeric(**vectors) -> Dict[str, np.ndarray]:
    """Coerce every keyword argument with ``as_numeric``, preserving order."""
    return {name: as_numeric(name, value) for name, value in vectors.items()}


def check_scalar_flag(**flags) -> Dict[str, bool]:
    """Verify that each logical option is a single boolean.

    Raises:
        FlagError: If a flag is not ``True``/``False``
    """
    checked = {}
    for name, value in flags.items():
        if isinstance(value, (bool, np.bool_)):
            checked[name] = bool(value)
        elif isinstance(value, np.ndarray) and value.dtype == np.bool_ and value.size == 1:
            checked[name] = bool(value.item())
        else:
            raise FlagError(
                f"`{name}` must be a logical vector of length one",
                argument=name, value=value, rule="scalar logical"
            )
    return checked


def check_count(n) -> int:
    """Validate the number of observations and floor it to an integer.

    Raises:
        CountError: If ``n`` is not a single finite number >= 1
    """
    if isinstance(n, (bool, np.bool_)):
        raise CountError("`n` must be numeric", argument="n", value=n, rule="numeric")

    try:
        arr = np.asarray(n)
    except (TypeError, ValueError) as e:
        raise CountError("`n` must be numeric", argument="n", value=n, rule="numeric", cause=e)

    if arr.dtype.kind not in 'iuf':
        raise CountError("`n` must be numeric", argument="n", value=n, rule="numeric")
    if arr.size != 1:
        raise CountError(
            f"`n` must have length one, not {arr.size}",
            argument="n", value=n, rule="scalar"
        )

    count = float(arr.item())
    if not np.isfinite(count) or count < 1:
        raise CountError(
            f"`n` must be a finite number of at least one, not {count}",
            argument="n", value=n, rule=">= 1"
        )
    return int(np.floor(count))


def is_scalar(min: np.ndarray, max: np.ndarray, mode: np.ndarray) -> bool:
    """True when all three parameters have length one."""
    return min.size == 1 and max.size == 1 and mode.size == 1


def try_recycle(**vectors) -> int:
    """Return the common length under the one-or-L recycling rule.

    Raises:
        RecycleError: If a vector's length is neither 1 nor the common length
    """
    common = max(v.size for v in vectors.values())
    for name, v in vectors.items():
        if v.size != 1 and v.size != common:
            raise RecycleError(
                f"Can't recycle `{name}` (size {v.size}) to size {common}",
                argument=name, size=v.size, common_size=common
            )
    return common


def _recycle(v: np.ndarray, length: int) -> np.ndarray:
    if v.size == length:
        return v
    return np.full(length, v[0])


def check_params(min: np.ndarray, max: np.ndarray, mode: np.ndarray) -> None:
    """Verify finiteness and ordering of aligned parameter triples.

    Arrays must already share a common length (or all be length one).

    Raises:
        InvalidParameterError: Naming the violated rule and first bad index
    """
    for name, v in (("min", min), ("max", max), ("mode", mode)):
        bad = ~np.isfinite(v)
        if bad.any():
            i = int(np.argmax(bad))
            raise InvalidParameterError(
                f"`{name}` must be finite; element {i} is {v[i]}",
                argument=name, value=float(v[i]), rule="finite",
                context={'index': i}
            )

    rules = (
        ("min", min >= max, "min < max"),
        ("mode", mode < min, "min <= mode"),
        ("mode", mode > max, "mode <= max"),
    )
    for name, bad, rule in rules:
        if bad.any():
            i = int(np.argmax(bad))
            raise InvalidParameterError(
                f"Parameters must satisfy {rule}; element {i} has "
                f"min={min[i]}, max={max[i]}, mode={mode[i]}",
                argument=name, value=float((min if name == "min" else mode)[i]), rule=rule,
                context={'index': i}
            )


def broadcast(primary_name: str, primary, min, max, mode) -> BroadcastSet:
    """Validate and align the primary input with the distribution parameters.

    Args:
        primary_name: Argument name of the primary input (x, q, p or t)
        primary: Primary input vector
        min, max, mode: Distribution parameters

    Returns:
        BroadcastSet ready for a kernel
    """
    vectors = check_numeric(**{primary_name: primary, 'min': min, 'max': max, 'mode': mode})
    values = vectors[primary_name]
    mins, maxs, modes = vectors['min'], vectors['max'], vectors['mode']

    if is_scalar(mins, maxs, modes):
        check_params(mins, maxs, modes)
        logger.debug(
            "Scalar parameters for %s of length %d", primary_name, values.size,
            extra={'length': values.size, 'scalar_params': True}
        )
        return BroadcastSet(
            values=values,
            min=float(mins[0]),
            max=float(maxs[0]),
            mode=float(modes[0]),
            length=values.size,
            scalar_params=True,
        )

    length = try_recycle(**vectors)
    values, mins, maxs, modes = (_recycle(v, length) for v in (values, mins, maxs, modes))
    check_params(mins, maxs, modes)
    logger.debug(
        "Vector parameters for %s recycled to length %d", primary_name, length,
        extra={'length': length, 'scalar_params': False}
    )
    return BroadcastSet(
        values=values, min=mins, max=maxs, mode=modes,
        length=length, scalar_params=False,
    )


def broadcast_count(n, min, max, mode) -> BroadcastSet:
    """Validate the sampler count and align parameters to length ``n``.

    ``values`` is left empty; the sampler fills it with uniform draws.
    """
    count = check_count(n)
    vectors = check_numeric(min=min, max=max, mode=mode)
    mins, maxs, modes = vectors['min'], vectors['max'], vectors['mode']

    if is_scalar(mins, maxs, modes):
        check_params(mins, maxs, modes)
        return BroadcastSet(
            values=np.empty(0), min=float(mins[0]), max=float(maxs[0]), mode=float(modes[0]),
            length=count, scalar_params=True,
        )

    for name, v in vectors.items():
        if v.size != 1 and v.size != count:
            raise RecycleError(
                f"Can't recycle `{name}` (size {v.size}) to size {count}",
                argument=name, size=v.size, common_size=count
            )
    mins, maxs, modes = (_recycle(v, count) for v in (mins, maxs, modes))
    check_params(mins, maxs, modes)
    logger.debug(
        "Vector parameters for n recycled to length %d", count,
        extra={'length': count, 'scalar_params': False}
    )
    return BroadcastSet(
        values=np.empty(0), min=mins, max=maxs, mode=modes,
        length=count, scalar_params=False,
    )
