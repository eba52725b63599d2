"""Pearson correlation between two sequences.

Not a morphological metric; kept alongside the suite as the conventional
contour-similarity baseline to compare metric results against.

Returns a float in [-1, 1]. 1.0 = identical contour shape; 0.0 = uncorrelated
or degenerate (a constant sequence); -1.0 = inverted.
"""

from __future__ import annotations

from typing import Iterable, Union

import numpy as np

from mmcore.errors import ParameterMismatch, TooShortSequence

from .morph import Morph


def pearson_correlation(
    x: Union[Morph, Iterable[float]],
    y: Union[Morph, Iterable[float]],
) -> float:
    """Pearson correlation coefficient of two equal-length sequences.

    Raises:
        ParameterMismatch: the sequences differ in length.
        TooShortSequence: fewer than two values.
    """
    a = np.asarray(list(x), dtype=float)
    b = np.asarray(list(y), dtype=float)
    if a.shape != b.shape:
        raise ParameterMismatch(f"Sequences must have equal length, got {a.size} and {b.size}")
    if a.size < 2:
        raise TooShortSequence(f"Correlation needs at least 2 values, got {a.size}")

    # Pearson correlation is undefined for zero variance
    if np.std(a) == 0 or np.std(b) == 0:
        return 0.0

    corr = float(np.corrcoef(a, b)[0, 1])
    return corr if not np.isnan(corr) else 0.0


__all__ = ["pearson_correlation"]
