"""Small numeric helpers used across the morph and metric modules."""

from __future__ import annotations


def mod(n: float, m: float) -> float:
    """Modulo that always wraps into ``[0, m)``, even for negative ``n``."""
    return ((n % m) + m) % m


def lm(length: int) -> int:
    """Number of unordered pairs in a sequence of ``length`` elements."""
    return (length * length - length) // 2


def degree_of_combinatoriality(num_intervals: int, length: int) -> float:
    """Share of all pairwise relationships covered by ``num_intervals``.

    1.0 means every pair is compared (combinatorial form); an adjacency form
    on a length-L sequence gives ``(L - 1) / Lm(L)``.
    """
    pairs = lm(length)
    if pairs == 0:
        raise ValueError(f"No pairwise relationships in a sequence of length {length}")
    return num_intervals / pairs


__all__ = ["mod", "lm", "degree_of_combinatoriality"]
