"""Comparator catalog ("delta" functions).

Each comparator is a plain ``(a, b) -> float`` function. Anywhere a metric
accepts a ``delta`` or ``psi`` argument it takes either one of these, any
other callable with the same contract, or the comparator's registered name.
"""

from __future__ import annotations

from typing import Callable, Dict, Union

from mmcore.errors import ParameterMismatch

from .numeric import mod

Comparator = Callable[[float, float], float]
ComparatorLike = Union[Comparator, str]


def abs_diff(a: float, b: float) -> float:
    """Absolute difference ``|a - b|``."""
    return abs(a - b)


def ratio(a: float, b: float) -> float:
    """Ratio ``a / b``. Raises ZeroDivisionError when ``b`` is zero."""
    return a / b


def squared_diff(a: float, b: float) -> float:
    """Squared difference ``(a - b) ** 2``."""
    return (a - b) ** 2


def interval_class(a: float, b: float) -> float:
    """Pitch-class distance: the shorter way around the 12-tone circle."""
    return min(mod(a - b, 12), mod(b - a, 12))


def sgn(a: float, b: float) -> int:
    """Direction of the move from ``a`` to ``b``.

    Note the sign: a falling pair (``a > b``) gives 1, a rising pair gives -1.
    """
    if a > b:
        return 1
    if a < b:
        return -1
    return 0


def sign_diff(a: float, b: float) -> int:
    """1 when two sign classifications disagree, else 0."""
    return 1 if a != b else 0


COMPARATORS: Dict[str, Comparator] = {
    "abs_diff": abs_diff,
    "ratio": ratio,
    "squared_diff": squared_diff,
    "interval_class": interval_class,
    "sgn": sgn,
    "sign_diff": sign_diff,
}


def resolve(delta: ComparatorLike) -> Comparator:
    """Return a comparator function from a callable or a registered name."""
    if callable(delta):
        return delta
    try:
        return COMPARATORS[delta]
    except (KeyError, TypeError):
        raise ParameterMismatch(
            f"Unknown comparator: {delta!r}. Known: {sorted(COMPARATORS)}"
        ) from None


__all__ = [
    "Comparator",
    "ComparatorLike",
    "abs_diff",
    "ratio",
    "squared_diff",
    "interval_class",
    "sgn",
    "sign_diff",
    "COMPARATORS",
    "resolve",
]
