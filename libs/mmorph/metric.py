"""Morphological metrics between a pair of Morphs.

Implements the magnitude and contour metric families of Polansky (1996):
ordered/unordered (O/U), linear/combinatorial (L/C), magnitude/direction
(M/D), plus the max- and variance-based variants.

Ordered metrics compare the two sequences point by point and need equal
lengths; unordered metrics compare aggregate statistics. Page references are
to Polansky, "Morphological Metrics", Journal of New Music Research 25 (1996).
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from mmcore.errors import (
    InvalidOrder,
    OrderingViolation,
    ParameterMismatch,
)
from mmcore.logging import get_logger

from .delta import ComparatorLike, abs_diff, resolve, sgn, sign_diff
from .morph import Morph, OptionsLike, as_morph
from .numeric import lm
from .options import GrainedValue, IntervalForm, ScalingMode

logger = get_logger(__name__)

MorphLike = Union[Morph, Iterable[float]]
ContourResult = Union[float, GrainedValue]


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def _peak(values: Iterable[float]) -> float:
    return max(abs(v) for v in values)


def _normalize(value: float, peak: float) -> float:
    # A zero peak means every delta is zero; the scaled distance is zero too.
    if peak == 0:
        logger.debug("zero normalization peak, returning 0.0")
        return 0.0
    return value / peak


def _scaled(values: Sequence[float]) -> List[float]:
    peak = _peak(values)
    if peak == 0:
        logger.debug("zero relative-scaling peak, operand scaled to zeros")
        return [0.0] * len(values)
    return [v / peak for v in values]


def _scaling_mode(scaling: Union[ScalingMode, str]) -> ScalingMode:
    try:
        return ScalingMode(scaling)
    except ValueError:
        raise ParameterMismatch(
            f"Unknown scaling: {scaling!r}. Expected one of {[s.value for s in ScalingMode]}"
        ) from None


def _ordered_magnitude(md: Sequence[float], nd: Sequence[float], mode: ScalingMode) -> float:
    """Mean point-by-point distance under a scaling mode."""
    if mode is ScalingMode.RELATIVE:
        md, nd = _scaled(md), _scaled(nd)
    raw = _mean([abs(a - b) for a, b in zip(md, nd)])
    if mode is ScalingMode.ABSOLUTE:
        return _normalize(raw, max(_peak(md), _peak(nd)))
    return raw


def _unordered_magnitude(md: Sequence[float], nd: Sequence[float], mode: ScalingMode) -> float:
    """Distance between the two operands' mean deltas under a scaling mode."""
    if mode is ScalingMode.RELATIVE:
        md, nd = _scaled(md), _scaled(nd)
    raw = abs(_mean(md) - _mean(nd))
    if mode is ScalingMode.ABSOLUTE:
        return _normalize(raw, max(_peak(md), _peak(nd)))
    return raw


def _contour_result(value: float, grain: float, verbose: bool) -> ContourResult:
    if verbose:
        return GrainedValue(value=value, grain=grain)
    return value


class MorphologicalMetric:
    """Compare two Morphs with the metric suite.

    Args:
        morphs: A pair of Morphs (raw numeric sequences are wrapped).
        ordered: Point-by-point mode. Requires equal lengths; most metrics
            need it.
    """

    def __init__(self, morphs: Sequence[MorphLike], ordered: bool = True):
        if len(morphs) != 2:
            raise ParameterMismatch(f"Exactly two morphs are required, got {len(morphs)}")
        m, n = (as_morph(x) for x in morphs)
        if ordered and len(m) != len(n):
            raise OrderingViolation(
                f"Ordered metrics need morphs of equal length, got {len(m)} and {len(n)}"
            )
        self.morphs: Tuple[Morph, Morph] = (m, n)
        self.ordered = ordered
        logger.debug(
            "metric over lengths %d/%d (ordered=%s)", len(m), len(n), ordered,
            extra={"m_length": len(m), "n_length": len(n), "ordered": ordered},
        )

    @property
    def m(self) -> Morph:
        return self.morphs[0]

    @property
    def n(self) -> Morph:
        return self.morphs[1]

    def __repr__(self) -> str:
        return f"MorphologicalMetric([{self.m!r}, {self.n!r}], ordered={self.ordered})"

    def _require_ordered(self, name: str) -> None:
        if not self.ordered:
            raise OrderingViolation(f"{name} requires ordered morphs")

    def _require_equal_length(self, name: str, alternative: str) -> None:
        if len(self.m) != len(self.n):
            raise ParameterMismatch(
                f"{name} needs morphs of equal length, got {len(self.m)} and {len(self.n)}; "
                f"use {alternative} instead"
            )

    # ------------------------ Linear magnitude -------------------------- #
    def magnitude_metric(self, absolute: bool = True, normalized: bool = True) -> float:
        """Point-by-point first-order interval distance (pg. 299).

        With ``absolute`` the intervals and their differences are magnitudes;
        otherwise signed differences of signed intervals are summed. With
        ``normalized`` the sum is divided by the number of intervals.
        """
        self._require_ordered("MagnitudeMetric")
        md = self.m.derivate(1, absolute)
        nd = self.n.derivate(1, absolute)
        if absolute:
            total = sum(abs(a - b) for a, b in zip(md, nd))
        else:
            total = sum(a - b for a, b in zip(md, nd))
        return total / len(md) if normalized else total

    def olm(
        self,
        scaling: Union[ScalingMode, str] = ScalingMode.NONE,
        squared: bool = False,
        order: int = 1,
    ) -> float:
        """Ordered linear magnitude, dispatched by scaling mode.

        ``none`` uses the original form (which honours ``squared`` and
        ``order``); ``absolute`` and ``relative`` are first-order only.
        """
        mode = _scaling_mode(scaling)
        if mode is ScalingMode.NONE:
            return self.olm_original(squared=squared, order=order)
        if squared or order != 1:
            raise ParameterMismatch(
                f"squared/order options only apply with scaling='none', got scaling={mode.value!r}"
            )
        if mode is ScalingMode.ABSOLUTE:
            return self.olm_scaled()
        return self.olm_relative_scaling()

    # Polansky, 1996, pg. 300 - 301. The squared form wraps the difference
    # of squares in an absolute value; unwrapped it can go imaginary.
    def olm_original(self, squared: bool = False, order: int = 1) -> float:
        self._require_ordered("OLM")
        if order < 1:
            raise InvalidOrder(f"Order must be at least 1, got {order}")
        md = self.m.derivate(order, True)
        nd = self.n.derivate(order, True)
        if squared:
            total = sum(abs(a ** 2 - b ** 2) ** 0.5 for a, b in zip(md, nd))
        else:
            total = sum(abs(abs(a) - abs(b)) for a, b in zip(md, nd))
        return total / (len(self.m) - order)

    def sobalev_olm(
        self,
        min_order: int = 0,
        max_order: int = 2,
        weights: Optional[Sequence[float]] = None,
    ) -> float:
        """Weighted average of OLM across derivative orders (pg. 300).

        Args:
            min_order: Lowest order, inclusive (0 compares raw values).
            max_order: Highest order, inclusive.
            weights: One weight per order; defaults to all 1.
        """
        self._require_ordered("SobalevOLM")
        if min_order < 0 or max_order - min_order < 1:
            raise InvalidOrder(
                f"Need 0 <= min_order < max_order, got min_order={min_order}, max_order={max_order}"
            )
        count = max_order - min_order + 1
        if weights is None:
            weights = [1.0] * count
        elif len(weights) != count:
            raise ParameterMismatch(
                f"Expected {count} weights for orders {min_order}..{max_order}, got {len(weights)}"
            )
        total_weight = sum(weights)
        if total_weight == 0:
            raise ParameterMismatch("Weights must not sum to zero")

        weighted = 0.0
        for weight, order in zip(weights, range(min_order, max_order + 1)):
            md = self.m.derivate(order, True)
            nd = self.n.derivate(order, True)
            weighted += weight * _mean([abs(a - b) for a, b in zip(md, nd)])
        return weighted / total_weight

    def olm_general(self, delta: ComparatorLike = abs_diff, order: int = 1) -> float:
        """OLM with a pluggable comparator between intervals (pg. 302)."""
        self._require_ordered("OLMGeneral")
        if order < 1:
            raise InvalidOrder(f"Order must be at least 1, got {order}")
        fn = resolve(delta)
        md = self.m.derivate(order, True)
        nd = self.n.derivate(order, True)
        return _mean([fn(a, b) for a, b in zip(md, nd)])

    def olm_canonical(self) -> float:
        """Mean distance between first-order absolute intervals."""
        self._require_ordered("OLMCanonical")
        return _ordered_magnitude(
            self.m.first_order_absolute_interval,
            self.n.first_order_absolute_interval,
            ScalingMode.NONE,
        )

    def olm_scaled(self) -> float:
        """OLMCanonical divided by the largest interval of either morph."""
        self._require_ordered("OLMScaled")
        return _ordered_magnitude(
            self.m.first_order_absolute_interval,
            self.n.first_order_absolute_interval,
            ScalingMode.ABSOLUTE,
        )

    def olm_relative_scaling(self) -> float:
        """OLM after scaling each morph's intervals by its own largest interval."""
        self._require_ordered("OLMRelativeScaling")
        return _ordered_magnitude(
            self.m.first_order_absolute_interval,
            self.n.first_order_absolute_interval,
            ScalingMode.RELATIVE,
        )

    # ---------------------------- Meta-intervals ------------------------- #
    def _meta_intervals(self, morph: Morph, delta: ComparatorLike) -> List[float]:
        if len(morph) < 3:
            raise InvalidOrder(f"Meta-intervals need at least 3 elements, got {len(morph)}")
        fn = resolve(delta)
        d = morph.derivate(1)
        return [fn(d[k], d[k + 1]) for k in range(len(d) - 1)]

    def olm_meta_interval(self, psi: ComparatorLike = abs_diff, delta: ComparatorLike = abs_diff) -> float:
        """Ordered distance between the two morphs' meta-interval sequences.

        A meta-interval is ``delta`` between successive signed first
        differences. The mean ``psi`` distance is divided by the largest
        meta-interval of either morph.
        """
        self._require_ordered("OLMMetaInterval")
        psi_fn = resolve(psi)
        mm = self._meta_intervals(self.m, delta)
        nm = self._meta_intervals(self.n, delta)
        raw = _mean([psi_fn(a, b) for a, b in zip(mm, nm)])
        return _normalize(raw, max(_peak(mm), _peak(nm)))

    def ulm_meta_interval(self, psi: ComparatorLike = abs_diff, delta: ComparatorLike = abs_diff) -> float:
        """``psi`` between the two morphs' mean meta-intervals."""
        psi_fn = resolve(psi)
        mm = self._meta_intervals(self.m, delta)
        nm = self._meta_intervals(self.n, delta)
        return psi_fn(_mean(mm), _mean(nm))

    def olm_generalized_interval(
        self,
        m_intervals: OptionsLike = None,
        n_intervals: OptionsLike = None,
        delta: ComparatorLike = abs_diff,
        psi: ComparatorLike = abs_diff,
    ) -> float:
        """OLM over independently chosen interval forms for each morph.

        Each morph is split into pairs by its own ``IntervalOptions``; each
        pair is reduced with ``delta`` and the two reductions compared with
        ``psi``. The mean is divided by the largest endpoint magnitude seen in
        either morph's pairs.

        Raises:
            ParameterMismatch: the two forms produce different pair counts.
        """
        self._require_ordered("OLMGeneralizedInterval")
        delta_fn = resolve(delta)
        psi_fn = resolve(psi)
        mi = self.m.generate_intervals(m_intervals)
        ni = self.n.generate_intervals(n_intervals)
        if len(mi) != len(ni):
            raise ParameterMismatch(
                f"Interval forms produce different pair counts: {len(mi)} vs {len(ni)}"
            )
        raw = _mean([psi_fn(delta_fn(*p), delta_fn(*q)) for p, q in zip(mi, ni)])
        peak = max(_peak(v for pair in mi for v in pair), _peak(v for pair in ni for v in pair))
        return _normalize(raw, peak)

    # --------------------------- Contour metrics ------------------------- #
    def uld(self, verbose: bool = False) -> ContourResult:
        """Unordered linear direction: linear contour vector distance."""
        self._require_equal_length("ULD", "uld_unequal_length_form")
        grain = 1 / (2 * (len(self.m) - 1))
        lcv_m = self.m.linear_contour_vector
        lcv_n = self.n.linear_contour_vector
        value = sum(abs(a - b) for a, b in zip(lcv_m, lcv_n)) * grain
        return _contour_result(value, grain, verbose)

    def old(self, verbose: bool = False) -> ContourResult:
        """Ordered linear direction: share of adjacent moves with differing direction."""
        self._require_ordered("OLD")
        grain = 1 / (len(self.m) - 1)
        mismatches = sum(
            sign_diff(a, b) for a, b in zip(self.m.direction_interval, self.n.direction_interval)
        )
        return _contour_result(mismatches * grain, grain, verbose)

    def ocd(self, verbose: bool = False) -> ContourResult:
        """Ordered combinatorial direction: share of all pairs with differing direction."""
        self._require_ordered("OCD")
        grain = 1 / lm(len(self.m))
        m_signs = self.m.interval_values(form=IntervalForm.COMBINATORIAL, delta=sgn)
        n_signs = self.n.interval_values(form=IntervalForm.COMBINATORIAL, delta=sgn)
        mismatches = sum(sign_diff(a, b) for a, b in zip(m_signs, n_signs))
        return _contour_result(mismatches * grain, grain, verbose)

    def ucd(self, verbose: bool = False) -> ContourResult:
        """Unordered combinatorial direction: combinatorial contour vector distance."""
        self._require_equal_length("UCD", "ucd_unequal_length_form")
        grain = 1 / (2 * lm(len(self.m)))
        ccv_m = self.m.combinatorial_contour_vector
        ccv_n = self.n.combinatorial_contour_vector
        value = sum(abs(a - b) for a, b in zip(ccv_m, ccv_n)) * grain
        return _contour_result(value, grain, verbose)

    def uld_unequal_length_form(self) -> float:
        """ULD on contour vectors normalized by each morph's own interval count."""
        lcv_m = [c / (len(self.m) - 1) for c in self.m.linear_contour_vector]
        lcv_n = [c / (len(self.n) - 1) for c in self.n.linear_contour_vector]
        return sum(abs(a - b) for a, b in zip(lcv_m, lcv_n)) / 2

    def ucd_unequal_length_form(self) -> float:
        """UCD on contour vectors normalized by each morph's own pair count."""
        ccv_m = [c / lm(len(self.m)) for c in self.m.combinatorial_contour_vector]
        ccv_n = [c / lm(len(self.n)) for c in self.n.combinatorial_contour_vector]
        return sum(abs(a - b) for a, b in zip(ccv_m, ccv_n)) / 2

    # ------------------------- Unordered magnitude ----------------------- #
    def ulm(self, scaling: Union[ScalingMode, str] = ScalingMode.NONE) -> float:
        """Distance between the morphs' mean first-order absolute intervals."""
        return _unordered_magnitude(
            self.m.first_order_absolute_interval,
            self.n.first_order_absolute_interval,
            _scaling_mode(scaling),
        )

    def ulm_absolute_scaling(self) -> float:
        return self.ulm(ScalingMode.ABSOLUTE)

    def ulm_relative_scaling(self) -> float:
        return self.ulm(ScalingMode.RELATIVE)

    # ----------------------- Combinatorial magnitude --------------------- #
    def _combinatorial_magnitudes(self) -> Tuple[List[float], List[float]]:
        return (
            self.m.interval_values(form=IntervalForm.COMBINATORIAL),
            self.n.interval_values(form=IntervalForm.COMBINATORIAL),
        )

    def ocm(self, scaling: Union[ScalingMode, str] = ScalingMode.NONE) -> float:
        """Ordered combinatorial magnitude: mean distance over all Lm(L) pairs."""
        self._require_ordered("OCM")
        mode = _scaling_mode(scaling)
        return _ordered_magnitude(*self._combinatorial_magnitudes(), mode)

    def ucm(self, scaling: Union[ScalingMode, str] = ScalingMode.NONE) -> float:
        """Unordered combinatorial magnitude: distance between mean pair magnitudes."""
        mode = _scaling_mode(scaling)
        return _unordered_magnitude(*self._combinatorial_magnitudes(), mode)

    # -------------------------------- Max ------------------------------- #
    def max_olm(self, delta: ComparatorLike = abs_diff) -> float:
        """Largest point-by-point distance between adjacency intervals."""
        self._require_ordered("maxOLM")
        md = self.m.interval_values(delta=delta)
        nd = self.n.interval_values(delta=delta)
        return max(abs(a - b) for a, b in zip(md, nd))

    def max_ulm(self, delta: ComparatorLike = abs_diff) -> float:
        """Distance between the morphs' largest adjacency intervals."""
        md = self.m.interval_values(delta=delta)
        nd = self.n.interval_values(delta=delta)
        return abs(max(md) - max(nd))

    def max_ocm(self, delta: ComparatorLike = abs_diff) -> float:
        """Largest point-by-point distance between combinatorial intervals."""
        self._require_ordered("maxOCM")
        md = self.m.interval_values(form=IntervalForm.COMBINATORIAL, delta=delta)
        nd = self.n.interval_values(form=IntervalForm.COMBINATORIAL, delta=delta)
        return max(abs(a - b) for a, b in zip(md, nd))

    def max_ucm(self, delta: ComparatorLike = abs_diff) -> float:
        """Distance between the morphs' largest combinatorial intervals."""
        md = self.m.interval_values(form=IntervalForm.COMBINATORIAL, delta=delta)
        nd = self.n.interval_values(form=IntervalForm.COMBINATORIAL, delta=delta)
        return abs(max(md) - max(nd))

    # ------------------------------ Variance ----------------------------- #
    def sigma_ulm(self) -> float:
        """Distance between the standard deviations of the morphs' intervals."""
        return abs(math.sqrt(self.m.interval_variance()) - math.sqrt(self.n.interval_variance()))


__all__ = ["MorphologicalMetric", "MorphLike"]
