"""Root move bookkeeping, per-thread tallies and a sleep/wake signal."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

SS_OFFSET = 10
MULTI_PV_MAX = 64
MAX_ROOT_MOVES = 256


@dataclass
class RootMove:
    """A legal move at the root with its latest score, node count and line."""

    move: int
    score: int = 0
    nodes: int = 0
    pv: list[int] = field(default_factory=list)


class _SearchThread(Protocol):
    nodes: int
    tbhits: int


def sort_root_moves(root_moves: list[RootMove], begin: int = 0) -> None:
    """Sort ``root_moves`` by descending score, in place, from ``begin`` on.

    Moves from ``begin + 1`` onwards are inserted, stably, after the nearest
    earlier move whose score is not lower.
    """
    for i in range(begin + 1, len(root_moves)):
        item = root_moves.pop(i)
        j = i
        while j > 0 and root_moves[j - 1].score < item.score:
            j -= 1
        root_moves.insert(j, item)


def select_root_moves(legal_moves: Sequence[int],
                      searchmoves: Iterable[int] = ()) -> list[RootMove]:
    """Build the root move list for a search.

    ``searchmoves`` ends at its first null move. Those that are legal become
    the root moves; if none are, every legal move does.
    """
    selected: list[RootMove] = []
    for wanted in searchmoves:
        if not wanted:
            break
        selected.extend(RootMove(move) for move in legal_moves if move == wanted)
    if not selected:
        selected = [RootMove(move) for move in legal_moves]
    if len(selected) > MAX_ROOT_MOVES:
        raise ValueError(f"more than {MAX_ROOT_MOVES} root moves")
    return selected


def total_nodes(threads: Iterable[_SearchThread]) -> int:
    """Nodes searched by all threads together."""
    return sum(thread.nodes for thread in threads)


def total_tb_hits(threads: Iterable[_SearchThread]) -> int:
    """Tablebase hits of all threads together."""
    return sum(thread.tbhits for thread in threads)


class Signal:
    """A boolean flag that a thread can sleep on until it is set."""

    def __init__(self, initial: bool = False) -> None:
        self._flag = initial
        self._cond = threading.Condition()

    def set(self) -> None:
        with self._cond:
            self._flag = True
            self._cond.notify_all()

    def clear(self) -> None:
        with self._cond:
            self._flag = False

    def is_set(self) -> bool:
        with self._cond:
            return self._flag

    def wait(self, timeout: float | None = None) -> bool:
        """Sleep until the flag is set; return whether it was set in time."""
        with self._cond:
            return self._cond.wait_for(lambda: self._flag, timeout)

    def wake(self) -> None:
        """Wake sleeping threads so they recheck the flag."""
        with self._cond:
            self._cond.notify_all()