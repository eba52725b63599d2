"""Error taxonomy shared by the morph and metric packages.

Every error is a ``ValueError`` so existing ``except ValueError`` call sites
keep working; ``IndexOutOfRange`` is additionally an ``IndexError``.
"""

from __future__ import annotations


class MorphError(ValueError):
    """Base class for all morphological metric errors."""


class TooShortSequence(MorphError):
    """A sequence has fewer than two elements."""


class InvalidOrder(MorphError):
    """A derivative order is negative or not smaller than the sequence length."""


class OrderingViolation(MorphError):
    """An ordered-only metric was used in unordered mode, or lengths differ."""


class ParameterMismatch(MorphError):
    """Two parameters disagree (weights vs. order range, interval counts, ...)."""


class UndefinedParameter(MorphError):
    """A parameter required by the chosen interval form was not supplied."""


class IndexOutOfRange(MorphError, IndexError):
    """A fundamental index falls outside the sequence."""


__all__ = [
    "MorphError",
    "TooShortSequence",
    "InvalidOrder",
    "OrderingViolation",
    "ParameterMismatch",
    "UndefinedParameter",
    "IndexOutOfRange",
]
