"""Search limits and time management."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

OVERHEAD = 6


@dataclass
class SearchLimits:
    """Constraints of a search, as given by the 'go' command."""

    start: int = 0
    time: int = 0
    inc: int = 0
    movestogo: int = 0
    movetime: int = 0
    depth: int = 0
    nodes: int = 0
    optimal_usage: int = 0
    max_usage: int = 0
    mate: int = 0
    timelimit: bool = False
    node_time: bool = False
    infinite: bool = False
    searchmoves: list[int] = field(default_factory=list)
    multipv: int = 1


def now_ms() -> int:
    """Monotonic clock in milliseconds."""
    return time.monotonic_ns() // 1_000_000


def time_since(start: int) -> int:
    return now_ms() - start


def _trunc_div(a: int, b: int) -> int:
    return int(a / b) if abs(a) < 2**52 else (abs(a) // b) * (1 if a >= 0 else -1)


def init_time_management(limits: SearchLimits) -> None:
    """Decide how much time to spend on this move, updating ``limits``."""
    if not limits.timelimit:
        return

    if limits.movetime:
        limits.max_usage = limits.optimal_usage = limits.movetime - OVERHEAD
        return

    mtg = min(limits.movestogo, 50) if limits.movestogo else 50
    time_left = max(0, limits.time + mtg * limits.inc - mtg * OVERHEAD)

    if not limits.movestogo:
        limits.optimal_usage = int(min(time_left * 0.022, 0.2 * limits.time))
    else:
        limits.optimal_usage = int(min(time_left * (0.7 / mtg), 0.8 * limits.time))

    limits.max_usage = int(min(5 * limits.optimal_usage, 0.8 * limits.time))


def out_of_time(limits: SearchLimits, thread_index: int, depth: int, nodes: int,
                do_pruning: bool, elapsed: int | None = None) -> tuple[bool, bool]:
    """Check the clock; return whether to stop and the updated pruning flag.

    ``elapsed`` defaults to the time since ``limits.start``.
    """
    if thread_index != 0 or depth == 1:
        return False, do_pruning

    if limits.node_time and nodes >= limits.nodes:
        return True, do_pruning

    if (nodes & 2047) != 2047:
        return False, do_pruning

    if elapsed is None:
        elapsed = time_since(limits.start)

    if not do_pruning and limits.infinite:
        enable = elapsed > 5000
    else:
        enable = elapsed >= _trunc_div(limits.optimal_usage, 32)
    if enable:
        do_pruning = True

    return bool(limits.timelimit and elapsed >= limits.max_usage), do_pruning