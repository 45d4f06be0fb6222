"""Parsing and formatting of the UCI text protocol."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import IntEnum

from .timeman import SearchLimits, now_ms

NAME = "Weiss 2.1-dev"
AUTHOR = "weissearch developers"
START_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
INPUT_SIZE = 8192
DEFAULT_DEPTH = 100

_ATOI = re.compile(r"\s*([+-]?\d+)")

_INT_OPTIONS = {"Hash", "Threads", "MultiPV", "NoobBookLimit"}
_BOOL_OPTIONS = {"Minimal", "NoobBook", "UCI_Chess960", "OnlineSyzygy"}
# Checked by prefix in this order, so longer names come before their prefixes.
_OPTION_ORDER = ("Hash", "Threads", "SyzygyPath", "MultiPV", "Minimal",
                 "NoobBookLimit", "NoobBookMode", "NoobBook", "UCI_Chess960",
                 "OnlineSyzygy")


class InputCommand(IntEnum):
    """Hashes of the first word of recognised input lines."""

    GO = 11
    UCI = 127
    STOP = 28
    QUIT = 29
    ISREADY = 113
    POSITION = 17
    SETOPTION = 96
    UCINEWGAME = 6
    EVAL = 26
    PRINT = 112
    PERFT = 116


@dataclass
class GoCommand:
    """A parsed 'go' command: its limits and the searchmoves as given."""

    limits: SearchLimits
    searchmoves: list[str] = field(default_factory=list)


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def hash_input(line: str) -> int:
    """Hash the first word of a line."""
    value = 0
    word = line.split(" ", 1)[0]
    for position, char in enumerate(word, start=1):
        value ^= ord(char) ^ position
    return value


def classify(line: str) -> InputCommand | None:
    """The command a line starts with, or None if it is not recognised."""
    try:
        return InputCommand(hash_input(line))
    except ValueError:
        return None


def set_limit(line: str, token: str) -> int | None:
    """The number after the first occurrence of ``token``, or None if absent."""
    found = line.find(token)
    if found < 0:
        return None
    return _atoi(line[found + len(token):])


def parse_go(line: str, white_to_move: bool) -> GoCommand:
    """Parse the limits of a 'go' command for the side to move."""
    limits = SearchLimits(start=now_ms())
    limits.infinite = "infinite" in line

    tokens = {
        "time": "wtime" if white_to_move else "btime",
        "inc": "winc" if white_to_move else "binc",
        "movestogo": "movestogo",
        "movetime": "movetime",
        "depth": "depth",
        "nodes": "nodes",
        "mate": "mate",
    }
    for attribute, token in tokens.items():
        value = set_limit(line, token)
        if value is not None:
            setattr(limits, attribute, value)

    searchmoves: list[str] = []
    found = line.find("searchmoves ")
    if found >= 0:
        searchmoves = line[found:].split()[1:]

    limits.timelimit = bool(limits.time or limits.movetime)
    limits.node_time = bool(limits.nodes)
    limits.depth = limits.depth or DEFAULT_DEPTH
    return GoCommand(limits, searchmoves)


def parse_setoption(line: str) -> tuple[str, int | bool | str]:
    """Parse a 'setoption' line into the option's name and typed value.

    Raises ValueError for an unknown option.
    """
    name_at = line.find("name")
    if name_at < 0:
        raise ValueError("No such option.")
    name_text = line[name_at + 5:]
    value_at = line.find("value")
    value_text = line[value_at + 6:] if value_at >= 0 else ""

    for option in _OPTION_ORDER:
        if name_text.startswith(option):
            if option in _INT_OPTIONS:
                return option, _atoi(value_text)
            if option in _BOOL_OPTIONS:
                return option, value_text.startswith("true")
            return option, value_text
    raise ValueError("No such option.")


def parse_position(line: str, start_fen: str = START_FEN) -> tuple[str, list[str]]:
    """Split a 'position' line into the starting FEN and the moves to play."""
    is_fen = line.startswith("position fen")
    moves_at = line.find("moves")
    if is_fen:
        fen_text = line[13:moves_at] if moves_at >= 13 else line[13:]
        fen = fen_text.strip()
    else:
        fen = start_fen
    moves = line[moves_at:].split()[1:] if moves_at >= 0 else []
    return fen, moves


def mate_score(score: int, mate: int) -> int:
    """Translate an internal mate score into moves to mate, signed."""
    distance = (mate - abs(score) + 1) // 2
    return distance if score > 0 else -distance


def format_info(depth: int, seldepth: int, multipv: int, score: int, alpha: int,
                beta: int, mate: int, mate_bound: int, elapsed: int, nodes: int,
                tbhits: int, hashfull: int, pv: Sequence[str]) -> str:
    """One 'info' line for a principal variation.

    ``mate_bound`` is the smallest absolute score that counts as a mate.
    """
    is_mate = abs(score) >= mate_bound
    kind = "mate" if is_mate else "cp"
    if score >= beta:
        bound = " lowerbound"
    elif score <= alpha:
        bound = " upperbound"
    else:
        bound = ""

    if is_mate:
        shown = mate_score(score, mate)
    elif abs(score) <= 8 and len(pv) <= 2:
        shown = 0
    else:
        shown = score

    nps = 1000 * nodes // (elapsed + 1)
    head = (f"info depth {depth} seldepth {seldepth} multipv {multipv} "
            f"score {kind} {shown}{bound} time {elapsed} nodes {nodes} "
            f"nps {nps} tbhits {tbhits} hashfull {hashfull} pv")
    return head + "".join(f" {move}" for move in pv)


def format_bestmove(move: str) -> str:
    return f"bestmove {move}"


def uci_info_lines(name: str, hash_default: int, hash_min: int, hash_max: int,
                   multipv_max: int) -> list[str]:
    """The reply to the 'uci' command, ending with 'uciok'."""
    return [
        f"id name {name}",
        f"id author {AUTHOR}",
        f"option name Hash type spin default {hash_default} min {hash_min} max {hash_max}",
        "option name Threads type spin default 1 min 1 max 2048",
        "option name SyzygyPath type string default <empty>",
        f"option name MultiPV type spin default 1 min 1 max {multipv_max}",
        "option name Minimal type check default false",
        "option name UCI_Chess960 type check default false",
        "option name NoobBook type check default false",
        "option name NoobBookMode type string default <best>",
        "option name NoobBookLimit type spin default 0 min 0 max 1000",
        "option name OnlineSyzygy type check default false",
        "uciok",
    ]