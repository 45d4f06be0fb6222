"""Gradient-descent tuning of linear evaluation terms with the Adam optimiser."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

NTERMS = 552
MAXEPOCHS = 10000
REPORTING = 50
NPARTITIONS = 64
LRRATE = 0.1
LRDROPRATE = 1.00
LRSTEPRATE = 250
BETA_1 = 0.9
BETA_2 = 0.999
DEFAULT_K = 2.25

_RESULTS = (("[1.0]", 1.0), ("[0.5]", 0.5), ("[0.0]", 0.0))

Pair = Sequence[float]


@dataclass
class TunerEntry:
    """One training position reduced to its non-zero evaluation coefficients.

    ``tuples`` holds ``(term index, coefficient)`` pairs, ``eval_mg`` and
    ``eval_eg`` the untuned part of the evaluation, and ``seval`` the static
    evaluation from white's point of view.
    """

    result: float
    seval: int = 0
    phase: int = 0
    white: bool = True
    eval_mg: int = 0
    eval_eg: int = 0
    scale: float = 1.0
    pfactor_mg: float = 0.0
    pfactor_eg: float = 1.0
    tuples: list[tuple[int, int]] = field(default_factory=list)


def sigmoid(k: float, e: float) -> float:
    """Expected game result for an evaluation ``e`` under scaling ``k``."""
    exponent = -k * e / 400.0
    if exponent > 700.0:
        return 0.0
    return 1.0 / (1.0 + math.exp(exponent))


def parse_result(line: str) -> float:
    """The game result recorded in a dataset line: 1.0, 0.5 or 0.0."""
    for marker, value in _RESULTS:
        if marker in line:
            return value
    raise ValueError(f"Cannot Parse {line}")


def sparse_coefficients(coeffs: Iterable[float]) -> list[tuple[int, int]]:
    """The ``(index, coefficient)`` pairs of the non-zero coefficients."""
    return [(index, int(coeff)) for index, coeff in enumerate(coeffs) if coeff != 0.0]


def linear_evaluation(entry: TunerEntry, params: Sequence[Pair], base_mg: float,
                      base_eg: float, mid_game: int, tempo: int) -> float:
    """Evaluate an entry as a linear function of ``params``, plus a base score."""
    midgame = float(base_mg)
    endgame = float(base_eg)
    for index, coeff in entry.tuples:
        midgame += coeff * params[index][0]
        endgame += coeff * params[index][1]

    value = (midgame * entry.phase
             + endgame * (mid_game - entry.phase) * entry.scale) / mid_game
    return value + (tempo if entry.white else -tempo)


def _mean(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        raise ValueError("no entries to evaluate")
    return sum(values) / len(values)


def static_evaluation_errors(entries: Sequence[TunerEntry], k: float) -> float:
    """Mean squared error of the static evaluations against the results."""
    return _mean((entry.result - sigmoid(k, entry.seval)) ** 2 for entry in entries)


def tuned_evaluation_errors(entries: Sequence[TunerEntry], params: Sequence[Pair],
                            k: float, mid_game: int, tempo: int) -> float:
    """Mean squared error of the linear evaluation with ``params``."""
    return _mean(
        (entry.result - sigmoid(k, linear_evaluation(
            entry, params, entry.eval_mg, entry.eval_eg, mid_game, tempo))) ** 2
        for entry in entries)


def compute_gradient(entries: Iterable[TunerEntry], params: Sequence[Pair], k: float,
                     mid_game: int, tempo: int) -> list[list[float]]:
    """Summed gradient terms of every entry, one ``[mg, eg]`` pair per parameter."""
    gradient = [[0.0, 0.0] for _ in params]
    for entry in entries:
        e = linear_evaluation(entry, params, entry.eval_mg, entry.eval_eg, mid_game, tempo)
        s = sigmoid(k, e)
        x = (entry.result - s) * s * (1 - s)
        mg_base = x * entry.pfactor_mg
        eg_base = x * entry.pfactor_eg
        for index, coeff in entry.tuples:
            gradient[index][0] += mg_base * coeff
            gradient[index][1] += eg_base * coeff * entry.scale
    return gradient


def compute_optimal_k(entries: Sequence[TunerEntry]) -> float:
    """The scaling constant that best fits static evaluations to results."""
    rate, delta, deviation_goal = 100.0, 1e-5, 1e-6
    k, deviation = 2.0, 1.0
    while abs(deviation) > deviation_goal:
        up = static_evaluation_errors(entries, k + delta)
        down = static_evaluation_errors(entries, k - delta)
        deviation = (up - down) / (2 * delta)
        k -= deviation * rate
    return k


def format_score_pair(name: str, mg: int, eg: int, filler: str = "") -> str:
    """A single tuned term as a constant declaration."""
    return f"const int {name}{filler} = S({mg:3d},{eg:3d});"


def format_array(name: str, pairs: Sequence[tuple[int, int]], filler: str = "") -> str:
    """A tuned array of terms as a constant declaration."""
    per_line = 4 if len(pairs) >= 8 else 7
    parts = [f"const int {name}{filler} = {{\n    "]
    for a, (mg, eg) in enumerate(pairs):
        if a and a % per_line == 0:
            parts.append("\n    ")
        parts.append(f"S({mg:3d},{eg:3d})")
        if a != len(pairs) - 1:
            parts.append(", ")
    parts.append("\n};")
    return "".join(parts)


class AdamOptimizer:
    """Adam updates of ``[mg, eg]`` parameter pairs with a stepped learning rate."""

    def __init__(self, nterms: int = NTERMS, rate: float = LRRATE,
                 beta1: float = BETA_1, beta2: float = BETA_2,
                 step_rate: int = LRSTEPRATE, drop_rate: float = LRDROPRATE,
                 reporting: int = REPORTING) -> None:
        self.rate = rate
        self.beta1 = beta1
        self.beta2 = beta2
        self.step_rate = step_rate
        self.drop_rate = drop_rate
        self.reporting = reporting
        self.params = [[0.0, 0.0] for _ in range(nterms)]
        self.momentum = [[0.0, 0.0] for _ in range(nterms)]
        self.velocity = [[0.0, 0.0] for _ in range(nterms)]

    def step(self, gradient: Sequence[Pair], k: float,
             npositions: int) -> list[list[float]]:
        """Apply one epoch's gradient and return the updated parameters."""
        if len(gradient) != len(self.params):
            raise ValueError("gradient and parameters differ in length")
        if npositions <= 0:
            raise ValueError("npositions must be positive")
        scale = -k / 200.0
        for grad, m, v, p in zip(gradient, self.momentum, self.velocity, self.params):
            for phase in (0, 1):
                g = scale * grad[phase] / npositions
                m[phase] = self.beta1 * m[phase] + (1.0 - self.beta1) * g
                v[phase] = self.beta2 * v[phase] + (1.0 - self.beta2) * g * g
                p[phase] -= self.rate * m[phase] / (1e-8 + math.sqrt(v[phase]))
        return self.params

    def end_epoch(self, epoch: int) -> bool:
        """Apply the scheduled rate drop; return whether parameters are due for a report."""
        if epoch % self.step_rate == 0:
            self.rate /= self.drop_rate
        return epoch % self.reporting == 0