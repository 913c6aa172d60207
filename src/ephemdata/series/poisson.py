"""
Poisson series: a polynomial part plus periodic terms whose amplitudes are
polynomials in time.

    value(t) = P(t) + sum_j sum_d t^d (S_jd sin(a_j) + C_jd cos(a_j))

where each argument a_j is an integer combination of the 15 fundamental
arguments held by :class:`~ephemdata.series.arguments.BodiesElements`.
"""

import logging
from typing import Dict, List, Sequence, Tuple

import numpy as np
import pandas as pd

from .codec import MULTIPLIER_NAMES, MULTIPLIERS, NutationCodec

logger = logging.getLogger(__name__)


class SeriesTerm:
    """
    Periodic term of a Poisson series, with per-degree sine and cosine amplitudes.
    """

    __slots__ = ("multipliers", "sin", "cos")

    def __init__(self, multipliers: Sequence[int]):
        if len(multipliers) != MULTIPLIERS:
            raise ValueError(f"expected {MULTIPLIERS} multipliers, got {len(multipliers)}")
        self.multipliers = tuple(int(m) for m in multipliers)
        self.sin: List[float] = []
        self.cos: List[float] = []

    @property
    def key(self) -> int:
        return NutationCodec.encode(self.multipliers)

    @property
    def degree(self) -> int:
        return len(self.sin) - 1

    def add(self, degree: int, sin_coeff: float, cos_coeff: float) -> None:
        """Add amplitudes to the ``t^degree`` part of the term."""
        while len(self.sin) <= degree:
            self.sin.append(0.0)
            self.cos.append(0.0)
        self.sin[degree] += sin_coeff
        self.cos[degree] += cos_coeff

    def __repr__(self) -> str:
        return f"SeriesTerm({self.multipliers}, sin={self.sin}, cos={self.cos})"


def _polynomial_value(coefficients: Sequence[float], tc: float) -> float:
    value = 0.0
    for c in reversed(coefficients):
        value = value * tc + c
    return value


def _polynomial_derivative(coefficients: Sequence[float], tc: float) -> float:
    value = 0.0
    for d in range(len(coefficients) - 1, 0, -1):
        value = value * tc + d * coefficients[d]
    return value


def _combine(multipliers: np.ndarray, values: np.ndarray) -> np.ndarray:
    # column by column, so a given row always gets the same rounding
    result = np.zeros(multipliers.shape[0])
    for k in range(MULTIPLIERS):
        result += multipliers[:, k] * values[k]
    return result


def _sum_terms(sin_a, cos_a, sin_amp, cos_amp, tc: float) -> float:
    if sin_amp.shape[0] == 0:
        return 0.0
    top = sin_amp.shape[1] - 1
    acc = sin_amp[:, top] * sin_a + cos_amp[:, top] * cos_a
    for d in range(top - 1, -1, -1):
        acc = acc * tc + (sin_amp[:, d] * sin_a + cos_amp[:, d] * cos_a)
    return float(np.sum(acc))


def _sum_terms_derivative(sin_a, cos_a, rates, sin_amp, cos_amp, tc: float, tc_dot: float) -> float:
    if sin_amp.shape[0] == 0:
        return 0.0
    top = sin_amp.shape[1] - 1

    # time dependence of the amplitudes
    amplitude = np.zeros(sin_amp.shape[0])
    for d in range(top, 0, -1):
        amplitude = amplitude * tc + d * (sin_amp[:, d] * sin_a + cos_amp[:, d] * cos_a)

    # time dependence of the arguments
    phase = sin_amp[:, top] * cos_a - cos_amp[:, top] * sin_a
    for d in range(top - 1, -1, -1):
        phase = phase * tc + (sin_amp[:, d] * cos_a - cos_amp[:, d] * sin_a)

    return float(np.sum(amplitude * tc_dot + phase * rates))


class PoissonSeries:
    """
    Evaluated form of a parsed Poisson series.

    Series are immutable once built. Terms are ordered by key so evaluation
    does not depend on the order of the source file.
    """

    def __init__(self, polynomial: Sequence[float], terms: Dict[int, SeriesTerm]):
        self.polynomial: Tuple[float, ...] = tuple(float(c) for c in polynomial)
        self._terms = dict(sorted(terms.items()))

        keys = list(self._terms)
        top = max((t.degree for t in self._terms.values()), default=0)
        self._keys = np.array(keys, dtype=np.uint64)
        self._multipliers = np.array(
            [t.multipliers for t in self._terms.values()], dtype=np.int64
        ).reshape(len(keys), MULTIPLIERS)
        self._sin = np.zeros((len(keys), top + 1))
        self._cos = np.zeros((len(keys), top + 1))
        for row, term in enumerate(self._terms.values()):
            self._sin[row, : len(term.sin)] = term.sin
            self._cos[row, : len(term.cos)] = term.cos

    @property
    def terms(self) -> Dict[int, SeriesTerm]:
        return dict(self._terms)

    @property
    def non_polynomial_size(self) -> int:
        """Number of periodic terms."""
        return len(self._terms)

    def value(self, elements) -> float:
        """
        Evaluate the series.

        Args:
            elements: fundamental arguments at evaluation date

        Returns:
            Series value, in the unit of the coefficients (radians for most tables)
        """
        arguments = _combine(self._multipliers, elements.arguments)
        return self._value(np.sin(arguments), np.cos(arguments), elements.tc)

    def value_derivative(self, elements) -> float:
        """
        Evaluate the time derivative of the series, per second.
        """
        arguments = _combine(self._multipliers, elements.arguments)
        rates = _combine(self._multipliers, elements.rates)
        return self._derivative(
            np.sin(arguments), np.cos(arguments), rates, elements.tc, elements.tc_dot
        )

    def _value(self, sin_a, cos_a, tc: float) -> float:
        return _polynomial_value(self.polynomial, tc) + _sum_terms(
            sin_a, cos_a, self._sin, self._cos, tc
        )

    def _derivative(self, sin_a, cos_a, rates, tc: float, tc_dot: float) -> float:
        return _polynomial_derivative(self.polynomial, tc) * tc_dot + _sum_terms_derivative(
            sin_a, cos_a, rates, self._sin, self._cos, tc, tc_dot
        )

    def to_frame(self) -> pd.DataFrame:
        """
        Tabulate the periodic terms, one row per term.

        Columns are the multipliers followed by ``sin_<d>`` and ``cos_<d>``
        amplitudes for each degree.
        """
        frame = pd.DataFrame(self._multipliers, columns=list(MULTIPLIER_NAMES))
        for d in range(self._sin.shape[1]):
            frame[f"sin_{d}"] = self._sin[:, d]
            frame[f"cos_{d}"] = self._cos[:, d]
        frame.index = pd.Index(self._keys, name="key")
        return frame

    @staticmethod
    def compile(*series: "PoissonSeries") -> "CompiledSeries":
        """
        Combine several series sharing many arguments for joint evaluation.
        """
        return CompiledSeries(series)

    def __repr__(self) -> str:
        return (
            f"PoissonSeries(polynomial_degree={len(self.polynomial) - 1}, "
            f"terms={self.non_polynomial_size})"
        )


class CompiledSeries:
    """
    Joint evaluation of several Poisson series.

    The sine and cosine of each distinct argument are computed once and
    shared by all series. Results are the same as evaluating each series
    on its own.
    """

    def __init__(self, series: Sequence[PoissonSeries]):
        if not series:
            raise ValueError("at least one series is required")
        self.series = tuple(series)

        union = sorted({key for s in self.series for key in s._terms})
        position = {key: row for row, key in enumerate(union)}
        multipliers = {}
        for s in self.series:
            for key, term in s._terms.items():
                multipliers[key] = term.multipliers
        self._multipliers = np.array(
            [multipliers[key] for key in union], dtype=np.int64
        ).reshape(len(union), MULTIPLIERS)
        self._rows = [
            np.array([position[key] for key in s._terms], dtype=np.intp)
            for s in self.series
        ]
        logger.debug(
            f"Compiled {len(self.series)} series sharing {len(union)} distinct arguments"
        )

    def value(self, elements) -> List[float]:
        """Evaluate all series, in the order they were given."""
        arguments = _combine(self._multipliers, elements.arguments)
        sin_a = np.sin(arguments)
        cos_a = np.cos(arguments)
        return [
            s._value(sin_a[rows], cos_a[rows], elements.tc)
            for s, rows in zip(self.series, self._rows)
        ]

    def value_derivative(self, elements) -> List[float]:
        """Evaluate the time derivatives of all series, per second."""
        arguments = _combine(self._multipliers, elements.arguments)
        rates = _combine(self._multipliers, elements.rates)
        sin_a = np.sin(arguments)
        cos_a = np.cos(arguments)
        return [
            s._derivative(sin_a[rows], cos_a[rows], rates[rows], elements.tc, elements.tc_dot)
            for s, rows in zip(self.series, self._rows)
        ]
