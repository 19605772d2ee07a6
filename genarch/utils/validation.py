"""
Argument checks and random generator handling shared by the simulators
"""

from typing import Optional, Tuple, Union

import numpy as np

from .errors import InvalidParameter

RandomState = Optional[Union[int, np.random.Generator]]


def as_rng(rng: RandomState = None) -> np.random.Generator:
    """Return a ``numpy.random.Generator`` for a seed, a generator or None.

    Passing an existing generator returns it unchanged so that a caller can
    thread one stream of randomness through several routines.
    """
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def check_positive_int(value, name: str) -> int:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise InvalidParameter(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidParameter(f"{name} must be positive, got {value}")
    return int(value)


def check_proportion(value: float, name: str,
                     allow_zero: bool = True, allow_one: bool = True) -> float:
    """Validate a proportion, with configurable inclusion of 0 and 1."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidParameter(f"{name} must be a number, got {value!r}")
    if np.isnan(value):
        raise InvalidParameter(f"{name} must not be NaN")
    low_ok = value >= 0.0 if allow_zero else value > 0.0
    high_ok = value <= 1.0 if allow_one else value < 1.0
    if not (low_ok and high_ok):
        lo = '[0' if allow_zero else '(0'
        hi = '1]' if allow_one else '1)'
        raise InvalidParameter(f"{name} must lie in {lo}, {hi}, got {value}")
    return value


def check_range(bounds: Tuple[float, float], name: str,
                strict: bool = True, allow_one: bool = False) -> Tuple[float, float]:
    """Validate a ``(lo, hi)`` pair inside the open unit interval.

    Args:
        bounds: Lower and upper bound
        name: Parameter name used in error messages
        strict: Require ``lo < hi`` (otherwise ``lo <= hi`` is accepted)
        allow_one: Accept an upper bound of exactly 1

    Returns:
        The bounds as a tuple of floats
    """
    try:
        lo, hi = (float(b) for b in bounds)
    except (TypeError, ValueError):
        raise InvalidParameter(f"{name} must be a (low, high) pair, got {bounds!r}")
    if strict and lo >= hi:
        raise InvalidParameter(f"{name} lower bound must be below upper bound, got ({lo}, {hi})")
    if not strict and lo > hi:
        raise InvalidParameter(f"{name} lower bound exceeds upper bound, got ({lo}, {hi})")
    upper_ok = hi <= 1.0 if allow_one else hi < 1.0
    if lo <= 0.0 or not upper_ok:
        hi_txt = '1]' if allow_one else '1)'
        raise InvalidParameter(f"{name} bounds must lie in (0, {hi_txt}, got ({lo}, {hi})")
    return lo, hi


def check_matrix(genotypes, name: str = "genotypes") -> np.ndarray:
    arr = np.asarray(genotypes)
    if arr.ndim != 2:
        raise InvalidParameter(f"{name} must be a 2-D array, got {arr.ndim}-D")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise InvalidParameter(f"{name} must not be empty, got shape {arr.shape}")
    return arr


def check_vector(values, name: str = "column") -> np.ndarray:
    arr = np.asarray(values)
    if arr.ndim != 1:
        raise InvalidParameter(f"{name} must be a 1-D array, got {arr.ndim}-D")
    return arr
