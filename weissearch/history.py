"""History heuristics: bounded gravity updates and correction-history mixing."""

from __future__ import annotations

from collections.abc import Hashable, Sequence

PAWN_HISTORY_SIZE = 512
CORRECTION_HISTORY_SIZE = 16384

QUIET_LIMIT = 5280
PAWN_LIMIT = 9275
NOISY_LIMIT = 16000
CONT_LIMIT = 21250
PAWN_CORR_LIMIT = 1662
MINOR_CORR_LIMIT = 1024
MAJOR_CORR_LIMIT = 1024
CONT_CORR_LIMIT = 1220
NON_PAWN_CORR_LIMIT = 1024

_CONT_CORR_WEIGHTS = (3121, 2979, 2849, 3121, 2789, 2979)


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def history_bonus(entry: int, bonus: int, div: int) -> int:
    """Return ``entry`` moved towards ``bonus``, staying within ``div``."""
    if abs(bonus) > div:
        raise ValueError(f"bonus {bonus} exceeds limit {div}")
    return entry + bonus - _cdiv(entry * abs(bonus), div)


def bonus(depth: int) -> int:
    return min(2410, 268 * depth - 310)


def malus(depth: int) -> int:
    return -min(834, 531 * depth - 148)


def correction_bonus(score: int, eval: int, depth: int) -> int:
    return max(-212, min(254, _cdiv((score - eval) * depth, 4)))


def pawn_structure_index(pawn_key: int) -> int:
    return pawn_key & (PAWN_HISTORY_SIZE - 1)


def correction_index(key: int) -> int:
    return key & (CORRECTION_HISTORY_SIZE - 1)


def combine_correction(pawn: int, minor: int, major: int, non_pawn_white: int,
                       non_pawn_black: int, continuations: Sequence[int]) -> int:
    """Weighted sum of correction entries; ``continuations`` are plies 2 to 7."""
    if len(continuations) != len(_CONT_CORR_WEIGHTS):
        raise ValueError("expected six continuation correction values")
    total = (6554 * pawn + 6800 * minor + 3700 * major
             + 7000 * (non_pawn_white + non_pawn_black)
             + sum(w * c for w, c in zip(_CONT_CORR_WEIGHTS, continuations)))
    return _cdiv(total, 131072)


class HistoryTable:
    """Sparse table of history scores bounded by a fixed limit."""

    def __init__(self, limit: int) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        self.limit = limit
        self._values: dict[Hashable, int] = {}

    def get(self, index: Hashable) -> int:
        return self._values.get(index, 0)

    def update(self, index: Hashable, bonus: int) -> int:
        """Apply a bonus (or malus) to one slot and return its new value."""
        value = history_bonus(self.get(index), bonus, self.limit)
        self._values[index] = value
        return value

    def clear(self) -> None:
        self._values.clear()