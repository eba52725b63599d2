"""The Morph sequence value object.

A Morph wraps an ordered, one-dimensional sequence of real numbers (a melody's
pitches, a dynamics curve, ...) and derives from it the representations the
metric suite compares: finite differences, interval pairs, contour vectors,
ranks and magnitude tables. Nothing is cached; every property recomputes from
``data`` and returns a fresh list.
"""

from __future__ import annotations

import operator
from itertools import combinations
from typing import Any, Iterable, Iterator, List, Mapping, Tuple, Union

import numpy as np

from mmcore.errors import InvalidOrder, MorphError, TooShortSequence

from .delta import ComparatorLike, abs_diff, resolve, sgn
from .numeric import degree_of_combinatoriality
from .options import IntervalForm, IntervalOptions

IntervalPair = Tuple[float, float]
ContourVector = List[int]
OptionsLike = Union[IntervalOptions, Mapping[str, Any], None]


class Morph:
    """An immutable ordered sequence of at least two real numbers."""

    __slots__ = ("_data",)

    def __init__(self, data: Iterable[float]):
        """Validate and freeze the sequence.

        Raises:
            TooShortSequence: fewer than two elements.
            MorphError: string, nested (multi-dimensional) or non-finite input.
        """
        if isinstance(data, Morph):
            data = data.data
        if isinstance(data, (str, bytes, bytearray)):
            raise MorphError(f"Morph data must be a sequence of numbers, got {type(data).__name__}")
        try:
            arr = np.asarray(list(data), dtype=float)
        except (TypeError, ValueError) as exc:
            raise MorphError(f"Morph data must be a flat sequence of numbers: {exc}") from exc
        if arr.ndim != 1:
            raise MorphError(f"Morph data must be one-dimensional, got {arr.ndim} dimensions")
        if arr.size < 2:
            raise TooShortSequence(f"Morph needs at least 2 elements, got {arr.size}")
        if not np.all(np.isfinite(arr)):
            raise MorphError("Morph data must be finite")
        self._data: Tuple[float, ...] = tuple(arr.tolist())

    @property
    def data(self) -> Tuple[float, ...]:
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[float]:
        return iter(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Morph):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"Morph({list(self._data)!r})"

    # --------------------------- Derivatives ---------------------------- #
    def derivate(self, order: int = 1, absolute: bool = False) -> List[float]:
        """Order-``order`` finite difference of the data.

        The first difference is applied ``order`` times. With ``absolute`` the
        magnitude is taken after every pass, so the second-order absolute
        interval is the difference of the first-order absolute intervals.
        Order 0 returns a copy of the data.

        Raises:
            InvalidOrder: non-integer ``order``, ``order < 0`` or ``order >= len(data)``.
        """
        try:
            order = operator.index(order)
        except TypeError as exc:
            raise InvalidOrder(f"Order must be an integer, got {order!r}") from exc
        if order < 0:
            raise InvalidOrder(f"Order must be non-negative, got {order}")
        if len(self._data) - order < 1:
            raise InvalidOrder(
                f"Order must be less than the sequence length ({len(self._data)}), got {order}"
            )
        out = np.asarray(self._data, dtype=float)
        if order == 0 and absolute:
            out = np.abs(out)
        for _ in range(order):
            out = np.diff(out)
            if absolute:
                out = np.abs(out)
        return out.tolist()

    @property
    def first_order_absolute_interval(self) -> List[float]:
        return self.derivate(1, absolute=True)

    @property
    def second_order_absolute_interval(self) -> List[float]:
        return self.derivate(2, absolute=True)

    # ----------------------------- Contour ------------------------------ #
    @property
    def direction_interval(self) -> List[int]:
        """``sgn`` of each adjacent pair: 1 falling, 0 level, -1 rising."""
        d = self._data
        return [sgn(d[i], d[i + 1]) for i in range(len(d) - 1)]

    @property
    def linear_contour_vector(self) -> ContourVector:
        """Counts of [rising, level, falling] adjacent moves."""
        lcv = [0, 0, 0]
        for step in self.derivate(1):
            if step > 0:
                lcv[0] += 1
            elif step == 0:
                lcv[1] += 1
            else:
                lcv[2] += 1
        return lcv

    @property
    def combinatorial_contour_vector(self) -> ContourVector:
        """Counts of [rising, level, falling] over every earlier/later pair.

        Classified by ``b - a``, so a rising pair lands in slot 0 here while
        ``sgn`` reports it as -1.
        """
        ccv = [0, 0, 0]
        for a, b in combinations(self._data, 2):
            step = b - a
            if step > 0:
                ccv[0] += 1
            elif step == 0:
                ccv[1] += 1
            else:
                ccv[2] += 1
        return ccv

    @property
    def morris_ranking(self) -> List[int]:
        """1-based rank of each element; equal values share the first rank."""
        ordered = sorted(self._data)
        return [ordered.index(value) + 1 for value in self._data]

    @property
    def combinatorial_magnitude_matrix(self) -> List[List[float]]:
        """Upper-triangular rows of ``|data[i] - data[j]|`` for ``j > i``."""
        d = self._data
        return [[abs(d[i] - d[j]) for j in range(i + 1, len(d))] for i in range(len(d) - 1)]

    def interval_variance(self, delta: ComparatorLike = abs_diff) -> float:
        """Spread of the adjacency intervals around their mean."""
        fn = resolve(delta)
        intervals = [fn(a, b) for a, b in self.generate_intervals()]
        mean = sum(intervals) / len(intervals)
        denom = len(self._data) - 1
        return sum((value - mean) ** 2 / denom for value in intervals)

    # ---------------------------- Intervals ----------------------------- #
    def generate_intervals(self, options: OptionsLike = None, **fields: Any) -> List[IntervalPair]:
        """Split the sequence into ``(a, b)`` pairs under one interval form.

        Args:
            options: ``IntervalOptions`` or a mapping of its fields.
            **fields: Field overrides, e.g. ``form="fundamental index", fundamental_index=2``.

        Raises:
            UndefinedParameter: fundamental value/index missing for its form.
            IndexOutOfRange: fundamental index outside the sequence.
            ParameterMismatch: adjacency interval below 1 or not below the length.
        """
        opts = IntervalOptions.coerce(options, **fields)
        opts.check(len(self._data))
        d = self._data

        if opts.form is IntervalForm.ADJACENCY:
            k = opts.adjacency_interval
            return [(d[i], d[i + k]) for i in range(len(d) - k)]
        if opts.form is IntervalForm.FUNDAMENTAL_INDEX:
            ref = d[opts.fundamental_index]
            return [(value, ref) for value in d]
        if opts.form is IntervalForm.FUNDAMENTAL_VALUE:
            ref = float(opts.fundamental_value)
            return [(value, ref) for value in d]
        if opts.form is IntervalForm.MEAN_FUNDAMENTAL_VALUE:
            ref = sum(d) / len(d)
            return [(value, ref) for value in d]
        if opts.form is IntervalForm.MAX_FUNDAMENTAL_VALUE:
            ref = max(d)
            return [(value, ref) for value in d]
        return list(combinations(d, 2))

    def interval_values(
        self,
        options: OptionsLike = None,
        delta: ComparatorLike = abs_diff,
        **fields: Any,
    ) -> List[float]:
        """``delta(a, b)`` for every generated interval pair."""
        fn = resolve(delta)
        return [fn(a, b) for a, b in self.generate_intervals(options, **fields)]

    def degree_of_combinatoriality(self, options: OptionsLike = None, **fields: Any) -> float:
        """Generated interval count as a share of all ``Lm(len)`` pairs."""
        return degree_of_combinatoriality(
            len(self.generate_intervals(options, **fields)), len(self._data)
        )


def as_morph(value: Union[Morph, Iterable[float]]) -> Morph:
    """Return ``value`` unchanged if it is a Morph, else wrap it."""
    if isinstance(value, Morph):
        return value
    return Morph(value)


__all__ = ["Morph", "IntervalPair", "ContourVector", "as_morph"]
