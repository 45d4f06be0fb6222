"""Search components for a UCI chess engine: transposition table, history
heuristics, time management, root move bookkeeping, UCI protocol helpers and
an evaluation tuner."""

__version__ = "0.1.0"

__all__ = ["history", "threads", "timeman", "transposition", "tuner", "uci"]