"""Transposition table with two-entry buckets and generation-based ageing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

HASH_MIN = 2
HASH_DEFAULT = 32
BUCKET_SIZE = 2
# One entry packs into 16 bytes, so a bucket of two takes 32.
BUCKET_BYTES = 32
HASH_MAX = (2**40) * BUCKET_BYTES // (1024 * 1024)

TT_BOUND_BITS = 2
TT_BOUND_MASK = (1 << TT_BOUND_BITS) - 1
TT_GEN_OFFSET = TT_BOUND_BITS + 1
TT_GEN_DELTA = 1 << TT_GEN_OFFSET
TT_GEN_CYCLE = 255 + (1 << TT_GEN_OFFSET)
TT_GEN_MASK = (0xFF << TT_GEN_OFFSET) & 0xFF

_MB = 1024 * 1024


class Bound(IntEnum):
    """Kind of score stored in an entry."""

    NONE = 0
    UPPER = 1
    LOWER = 2
    EXACT = 3


def _key32(key: int) -> int:
    """The low 32 bits of a key as a signed 32-bit integer."""
    low = key & 0xFFFFFFFF
    return low - (1 << 32) if low >= (1 << 31) else low


def _int16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value >= 0x8000 else value


def score_to_tt(score: int, ply: int, win_threshold: int) -> int:
    """Convert a terminal score to distance from the current position."""
    if score >= win_threshold:
        return score + ply
    if score <= -win_threshold:
        return score - ply
    return score


def score_from_tt(score: int, ply: int, win_threshold: int) -> int:
    """Convert a stored terminal score back to distance from the root."""
    if score >= win_threshold:
        return score - ply
    if score <= -win_threshold:
        return score + ply
    return score


def tt_score_is_more_informative(bound: int, tt_score: int, score: int) -> bool:
    """Whether a stored score tells more than ``score`` given its bound."""
    return bool(bound & (Bound.LOWER if tt_score >= score else Bound.UPPER))


@dataclass
class TTEntry:
    """A single slot of the table."""

    key: int = 0
    move: int = 0
    score: int = 0
    eval: int = 0
    depth: int = 0
    gen_bound: int = 0

    def bound(self) -> int:
        return self.gen_bound & TT_BOUND_MASK

    def generation(self) -> int:
        return self.gen_bound & TT_GEN_MASK

    def is_empty(self) -> bool:
        return self.bound() == Bound.NONE


class TranspositionTable:
    """Hash table of search results, indexed by position key.

    Buckets are created on first use, so a large table costs memory only
    for the part that is actually filled.
    """

    def __init__(self, requested_mb: int = HASH_DEFAULT) -> None:
        self.requested_mb = requested_mb
        self.current_mb = 0
        self.count = 0
        self.generation = 0
        self.dirty = False
        self._table: dict[int, list[TTEntry]] = {}

    def index(self, key: int) -> int:
        """Map a 64-bit key onto a bucket number."""
        return ((key & 0xFFFFFFFFFFFFFFFF) * self.count) >> 64

    def _bucket(self, index: int) -> list[TTEntry]:
        bucket = self._table.get(index)
        if bucket is None:
            bucket = [TTEntry() for _ in range(BUCKET_SIZE)]
            self._table[index] = bucket
        return bucket

    def age(self, entry: TTEntry) -> int:
        return (TT_GEN_CYCLE + self.generation - entry.gen_bound) & TT_GEN_MASK

    def entry_value(self, entry: TTEntry) -> int:
        return entry.depth - self.age(entry)

    def probe(self, key: int) -> tuple[TTEntry, bool]:
        """Find the entry for ``key``, or the one to replace; return it and whether it hit."""
        if self.count == 0:
            raise RuntimeError("transposition table has not been allocated")
        bucket = self._bucket(self.index(key))
        k32 = _key32(key)
        for entry in bucket:
            if entry.key == k32 or entry.is_empty():
                return entry, not entry.is_empty()
        return min(bucket, key=self.entry_value), False

    def store(self, entry: TTEntry, key: int, move: int, score: int,
              eval: int, depth: int, bound: int) -> None:
        """Write a search result into ``entry`` unless deeper data would be lost."""
        if not Bound.UPPER <= bound <= Bound.EXACT:
            raise ValueError(f"invalid bound: {bound}")
        if not -0x8000 <= score <= 0x7FFF:
            raise ValueError(f"score out of range: {score}")
        k32 = _key32(key)
        depth &= 0xFF
        if move or k32 != entry.key:
            entry.move = move
        if (k32 != entry.key or depth + 4 >= entry.depth
                or bound == Bound.EXACT or self.age(entry)):
            entry.key = k32
            entry.score = score
            entry.eval = _int16(eval)
            entry.depth = depth
            entry.gen_bound = (self.generation | int(bound)) & 0xFF

    def hash_full(self) -> int:
        """Estimate of the load factor in permille, from the first 1000 buckets."""
        used = 0
        for i in range(min(1000, self.count)):
            bucket = self._table.get(i)
            if bucket is None:
                continue
            used += sum(1 for e in bucket
                        if not e.is_empty() and e.generation() == self.generation)
        return used // BUCKET_SIZE

    def clear(self) -> None:
        """Empty the table if anything has been written since the last clear."""
        if not self.dirty:
            return
        self._table.clear()
        self.generation = 0
        self.dirty = False

    def new_search(self) -> None:
        self.generation = (self.generation + TT_GEN_DELTA) & 0xFF
        self.dirty = True

    def request_size(self, megabytes: int) -> str:
        """Record a new size to apply on the next resize; return the notice to show."""
        self.requested_mb = megabytes
        return "info string Hash will resize after next 'isready'."

    def resize(self) -> None:
        """Apply the requested size, emptying the table."""
        if self.current_mb == self.requested_mb:
            return
        if self.requested_mb < 1:
            raise MemoryError(
                f"Failed to allocate {self.requested_mb}MB for transposition table.")
        self._table = {}
        self.current_mb = self.requested_mb
        self.count = self.requested_mb * _MB // BUCKET_BYTES
        self.dirty = True
        self.clear()