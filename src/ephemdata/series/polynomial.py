"""
Parser for polynomial expressions found in IERS conventions tables.

Typical lines are::

    X = -16616.99 + 2004191742.88 t - 427219.05 t^2 - 198620.54 t^3
    s + XY/2 = 94.00 + 3808.65 t - 122.68 t^2 - 72574.11 t^3
    F5 ≡ Ω = 125.04455501° − 6962890.5431″t + 7.4722″t² + 0.007702″t³
"""

import math
import re
from enum import Enum
from typing import List, Optional

UNICODE_MINUS = "−"

DEGREE_MARKERS = ("°", "◦")
ARC_SECOND_MARKERS = ("″", "''", '"')

SUPERSCRIPTS = {
    "⁰": 0, "¹": 1, "²": 2, "³": 3, "⁴": 4,
    "⁵": 5, "⁶": 6, "⁷": 7, "⁸": 8, "⁹": 9,
}


class Unit(Enum):
    """Default unit of the coefficients, used when no marker is present."""

    RADIANS = "rad"
    DEGREES = "deg"
    ARC_SECONDS = "as"
    MILLI_ARC_SECONDS = "mas"
    MICRO_ARC_SECONDS = "µas"
    NO_UNITS = "none"

    @property
    def factor(self) -> float:
        return _FACTORS[self]

    def to_si(self, value: float) -> float:
        return value * self.factor


_ARC_SECOND = math.radians(1.0 / 3600.0)

_FACTORS = {
    Unit.RADIANS: 1.0,
    Unit.DEGREES: math.radians(1.0),
    Unit.ARC_SECONDS: _ARC_SECOND,
    Unit.MILLI_ARC_SECONDS: _ARC_SECOND * 1.0e-3,
    Unit.MICRO_ARC_SECONDS: _ARC_SECOND * 1.0e-6,
    Unit.NO_UNITS: 1.0,
}


class PolynomialParser:
    """
    Parser for polynomials in one free variable.

    Each coefficient may carry its own unit marker (``°`` for degrees,
    ``″`` or ``''`` for arc seconds), placed either after the number or
    between its integer and fractional parts (``0''.5``). Exponents are
    written ``t^2`` or ``t²``. Coefficients are returned in SI units, by
    ascending degree.
    """

    def __init__(self, free_variable: str, unit: Unit):
        if len(free_variable) != 1:
            raise ValueError(f"free variable must be a single character: {free_variable!r}")
        self.free_variable = free_variable
        self.unit = unit

        units = "|".join(re.escape(m) for m in DEGREE_MARKERS + ARC_SECOND_MARKERS)
        superscripts = "".join(SUPERSCRIPTS)
        self._term = re.compile(
            rf"\s*(?P<sign>[-+{UNICODE_MINUS}])?\s*"
            rf"(?:(?P<int1>\d+)(?P<unit1>{units})(?:\.(?P<frac1>\d*))?"
            rf"|(?P<int2>\d*)(?:\.(?P<frac2>\d*))?\s*(?P<unit2>{units})?)"
            rf"\s*×?\s*"
            rf"(?:(?P<var>{re.escape(free_variable)})"
            rf"\s*(?:\^\s*(?P<power>\d+)|(?P<super>[{superscripts}]+))?)?"
        )

    def parse(self, line: str) -> Optional[List[float]]:
        """
        Parse a polynomial expression.

        Only the part after the last ``=`` or ``≡`` sign is considered.

        Returns:
            The coefficients by ascending degree, or None if the line does
            not hold a polynomial
        """
        expression = re.split(r"[=≡]", line)[-1].rstrip()
        if not expression.strip():
            return None

        coefficients = {}
        position = 0
        first = True
        while position < len(expression):
            match = self._term.match(expression, position)
            if match is None or match.end() == position:
                return None

            integer = match.group("int1") if match.group("int1") is not None else match.group("int2")
            fraction = match.group("frac1") if match.group("int1") is not None else match.group("frac2")
            if not integer and not fraction:
                return None
            if match.group("sign") is None and not first:
                return None

            value = float(f"{integer or '0'}.{fraction or '0'}")
            if match.group("sign") in ("-", UNICODE_MINUS):
                value = -value

            marker = match.group("unit1") or match.group("unit2")
            if marker in DEGREE_MARKERS:
                value = Unit.DEGREES.to_si(value)
            elif marker in ARC_SECOND_MARKERS:
                value = Unit.ARC_SECONDS.to_si(value)
            else:
                value = self.unit.to_si(value)

            if match.group("var") is None:
                power = 0
            elif match.group("power") is not None:
                power = int(match.group("power"))
            elif match.group("super") is not None:
                power = int("".join(str(SUPERSCRIPTS[c]) for c in match.group("super")))
            else:
                power = 1

            coefficients[power] = coefficients.get(power, 0.0) + value
            position = match.end()
            first = False

        degree = max(coefficients)
        return [coefficients.get(d, 0.0) for d in range(degree + 1)]
