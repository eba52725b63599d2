import math

import numpy as np
import pytest

from mmcore.errors import ParameterMismatch, TooShortSequence
from mmorph import (
    COMPARATORS,
    Morph,
    abs_diff,
    degree_of_combinatoriality,
    interval_class,
    lm,
    mod,
    pearson_correlation,
    ratio,
    sgn,
    sign_diff,
    squared_diff,
)
from mmorph.delta import resolve


def test_mod_wraps_negative_values():
    assert mod(-1, 12) == 11
    assert mod(13, 12) == 1
    assert mod(0, 12) == 0


def test_pairwise_counts():
    assert lm(2) == 1
    assert lm(5) == 10
    assert all(lm(n) == n * (n - 1) // 2 for n in range(2, 30))
    assert degree_of_combinatoriality(4, 5) == pytest.approx(0.4)
    assert degree_of_combinatoriality(10, 5) == 1.0


def test_degree_of_combinatoriality_needs_pairs():
    with pytest.raises(ValueError):
        degree_of_combinatoriality(0, 1)


def test_basic_comparators():
    assert abs_diff(3, 7) == 4
    assert ratio(6, 3) == 2
    assert squared_diff(2, 5) == 9
    assert sign_diff(1, -1) == 1
    assert sign_diff(0, 0) == 0


def test_sgn_reports_falling_as_positive():
    assert sgn(5, 3) == 1
    assert sgn(3, 3) == 0
    assert sgn(3, 5) == -1


@pytest.mark.parametrize(
    "a, b, expected",
    [(0, 0, 0), (0, 1, 1), (0, 7, 5), (11, 0, 1), (2, 8, 6), (14, 1, 1)],
)
def test_interval_class(a, b, expected):
    assert interval_class(a, b) == expected
    assert interval_class(b, a) == expected


def test_resolve_by_name_and_callable():
    assert resolve("interval_class") is interval_class
    assert resolve(abs_diff) is abs_diff
    custom = lambda a, b: a + b  # noqa: E731
    assert resolve(custom) is custom
    assert set(COMPARATORS) == {
        "abs_diff", "ratio", "squared_diff", "interval_class", "sgn", "sign_diff",
    }


@pytest.mark.parametrize("name", ["euclid", None, 3])
def test_resolve_unknown(name):
    with pytest.raises(ParameterMismatch):
        resolve(name)


def test_pearson_matches_numpy():
    x = [60, 62, 64, 65, 67]
    y = [55, 58, 57, 61, 66]
    assert pearson_correlation(x, y) == pytest.approx(float(np.corrcoef(x, y)[0, 1]))


def test_pearson_identical_and_inverted():
    m = Morph([1, 5, 12, 2, 9, 6])
    assert pearson_correlation(m, m) == pytest.approx(1.0)
    assert pearson_correlation(m, Morph([-x for x in m])) == pytest.approx(-1.0)


def test_pearson_constant_is_zero():
    assert pearson_correlation([1, 2, 3], [4, 4, 4]) == 0.0


def test_pearson_rejects_bad_input():
    with pytest.raises(ParameterMismatch):
        pearson_correlation([1, 2, 3], [1, 2])
    with pytest.raises(TooShortSequence):
        pearson_correlation([1], [2])


def test_pearson_is_finite_for_random_input():
    rng = np.random.default_rng(3)
    value = pearson_correlation(rng.normal(size=32), rng.normal(size=32))
    assert math.isfinite(value)
    assert -1.0 <= value <= 1.0
