"""Morphological Metrics

Sequence (Morph) analysis and Polansky's morphological metric suite.
"""

__version__ = "0.1.0"

from . import delta
from .correlation import pearson_correlation
from .delta import (
    COMPARATORS,
    abs_diff,
    ratio,
    squared_diff,
    interval_class,
    sgn,
    sign_diff,
)
from .metric import MorphologicalMetric
from .morph import Morph, as_morph
from .numeric import mod, lm, degree_of_combinatoriality
from .options import GrainedValue, IntervalForm, IntervalOptions, ScalingMode

__all__ = [
    # Sequence
    "Morph",
    "as_morph",
    # Metrics
    "MorphologicalMetric",
    "GrainedValue",
    "pearson_correlation",
    # Options
    "IntervalForm",
    "IntervalOptions",
    "ScalingMode",
    # Comparators
    "delta",
    "COMPARATORS",
    "abs_diff",
    "ratio",
    "squared_diff",
    "interval_class",
    "sgn",
    "sign_diff",
    # Numeric helpers
    "mod",
    "lm",
    "degree_of_combinatoriality",
]
