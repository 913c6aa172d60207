"""
Fundamental nutation arguments.

The 5 Delaunay arguments (l, l', F, D, Ω) and the 9 planetary arguments
(mean longitudes of Mercury to Neptune and general accumulated precession)
are polynomials in ``tc``, the Julian centuries elapsed since a reference
epoch in TT. The tide parameter γ is not a polynomial and is provided by the
caller when needed.
"""

import io
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import BinaryIO, Dict, List, Optional

import numpy as np

from ..errors import DataConfigurationError, LineParseError, UnsupportedFormatError
from .codec import MULTIPLIER_NAMES
from .poisson import _polynomial_derivative, _polynomial_value
from .polynomial import PolynomialParser, Unit

logger = logging.getLogger(__name__)

JULIAN_DAY = 86400.0
JULIAN_CENTURY = 36525.0 * JULIAN_DAY
J2000 = datetime(2000, 1, 1, 12, 0, 0)

DELAUNAY_NAMES = ("l", "l'", "F", "D", "Ω")
PLANETARY_NAMES = ("LMe", "LVe", "LE", "LMa", "LJ", "LSa", "LU", "LNe", "pA")

IERS_2010_DEFINITIONS = """\
reference = 2000-01-01T12:00:00 TT
F1 ≡ l = 134.96340251° + 1717915923.2178″t + 31.8792″t² + 0.051635″t³ − 0.00024470″t⁴
F2 ≡ l' = 357.52910918° + 129596581.0481″t − 0.5532″t² + 0.000136″t³ − 0.00001149″t⁴
F3 ≡ F = 93.27209062° + 1739527262.8478″t − 12.7512″t² − 0.001037″t³ + 0.00000417″t⁴
F4 ≡ D = 297.85019547° + 1602961601.2090″t − 6.3706″t² + 0.006593″t³ − 0.00003169″t⁴
F5 ≡ Ω = 125.04455501° − 6962890.5431″t + 7.4722″t² + 0.007702″t³ − 0.00005939″t⁴
F6 ≡ LMe = 4.402608842 + 2608.7903141574 t
F7 ≡ LVe = 3.176146697 + 1021.3285546211 t
F8 ≡ LE = 1.753470314 + 628.3075849991 t
F9 ≡ LMa = 6.203480913 + 334.0612426700 t
F10 ≡ LJ = 0.599546497 + 52.9690962641 t
F11 ≡ LSa = 0.874016757 + 21.3299104960 t
F12 ≡ LU = 5.481293872 + 7.4781598567 t
F13 ≡ LNe = 5.311886287 + 3.8133035638 t
F14 ≡ pA = 0.02438175 t + 0.00000538691 t²
"""

_REFERENCE = re.compile(
    r"\s*reference\s*=\s*(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d*)?)\s*TT\s*"
)
_NAMES = "|".join(re.escape(n) for n in DELAUNAY_NAMES + PLANETARY_NAMES)
_DEFINITION = re.compile(rf"\s*F\d+\s*≡\s*({_NAMES})\s*=\s*(.*)")


@dataclass(frozen=True)
class BodiesElements:
    """
    Snapshot of the 15 fundamental arguments and their rates.

    ``arguments`` and ``rates`` follow the multiplier order of
    :data:`~ephemdata.series.codec.MULTIPLIER_NAMES` (γ first). Rates are
    in radians per second, ``tc_dot`` in centuries per second.
    """

    tc: float
    arguments: np.ndarray
    rates: np.ndarray = field(default_factory=lambda: np.zeros(len(MULTIPLIER_NAMES)))
    tc_dot: float = 1.0 / JULIAN_CENTURY

    def __getitem__(self, name: str) -> float:
        return float(self.arguments[MULTIPLIER_NAMES.index(name)])

    @property
    def gamma(self) -> float:
        return float(self.arguments[0])

    @property
    def delaunay(self) -> np.ndarray:
        return self.arguments[1:6]

    @property
    def planetary(self) -> np.ndarray:
        return self.arguments[6:]


class FundamentalNutationArguments:
    """
    Polynomial models of the fundamental nutation arguments.

    Coefficients are in radians, by ascending degree in ``tc``. When the
    planetary arguments are not defined, they evaluate to zero.
    """

    def __init__(self, polynomials: Dict[str, List[float]], reference: datetime = J2000):
        missing = [n for n in DELAUNAY_NAMES if n not in polynomials]
        if missing:
            raise ValueError(f"missing Delaunay arguments: {', '.join(missing)}")
        self.reference = reference
        self.polynomials = {
            name: list(polynomials.get(name, [0.0]))
            for name in DELAUNAY_NAMES + PLANETARY_NAMES
        }

    @classmethod
    def iers2010(cls) -> "FundamentalNutationArguments":
        """Arguments from IERS conventions 2010, equations 5.43 and 5.44."""
        return cls.from_text(IERS_2010_DEFINITIONS, "IERS 2010 fundamental arguments")

    @classmethod
    def from_text(cls, text: str, name: str) -> "FundamentalNutationArguments":
        return cls._parse(io.StringIO(text), name)

    @classmethod
    def from_stream(cls, stream: Optional[BinaryIO], name: str) -> "FundamentalNutationArguments":
        """
        Read arguments definitions such as::

            reference = 2000-01-01T12:00:00 TT
            F1 ≡ l = 134.96340251° + 1717915923.2178″t + 31.8792″t² ...

        Raises:
            DataConfigurationError: if stream is None
            UnsupportedFormatError: if the reference or a Delaunay argument is missing
            LineParseError: if a definition cannot be parsed
        """
        if stream is None:
            raise DataConfigurationError(f"unable to find file {name}")
        reader = io.TextIOWrapper(stream, encoding="utf-8")
        try:
            return cls._parse(reader, name)
        finally:
            reader.detach()

    @classmethod
    def _parse(cls, reader, name: str) -> "FundamentalNutationArguments":
        parser = PolynomialParser("t", Unit.RADIANS)
        reference = None
        polynomials: Dict[str, List[float]] = {}

        for line_number, line in enumerate(reader, start=1):
            line = line.rstrip("\r\n")
            match = _REFERENCE.fullmatch(line)
            if match:
                reference = datetime.fromisoformat(match.group(1))
                continue
            match = _DEFINITION.fullmatch(line)
            if match:
                coefficients = parser.parse(match.group(2))
                if coefficients is None:
                    raise LineParseError(line_number, name, line)
                polynomials[match.group(1)] = coefficients

        if reference is None or any(n not in polynomials for n in DELAUNAY_NAMES):
            raise UnsupportedFormatError(f"file {name} is not a supported IERS data file", name)
        if not any(n in polynomials for n in PLANETARY_NAMES):
            logger.debug(f"No planetary arguments in {name}, using zero")

        return cls(polynomials, reference)

    def evaluate_all(self, tc: float, gamma: float = 0.0, gamma_rate: float = 0.0) -> BodiesElements:
        """
        Evaluate all arguments.

        Args:
            tc: Julian centuries since the reference epoch
            gamma: tide parameter γ = GMST + π, when relevant
            gamma_rate: rate of γ in radians per second

        Returns:
            Arguments and their rates
        """
        names = DELAUNAY_NAMES + PLANETARY_NAMES
        arguments = [gamma] + [_polynomial_value(self.polynomials[n], tc) for n in names]
        rates = [gamma_rate] + [
            _polynomial_derivative(self.polynomials[n], tc) / JULIAN_CENTURY for n in names
        ]
        return BodiesElements(tc, np.array(arguments), np.array(rates), 1.0 / JULIAN_CENTURY)

    def centuries_since_reference(self, when: datetime) -> float:
        """
        Julian centuries between the reference epoch and a date.

        Naive dates are taken in TT. Aware dates are converted to UTC first
        and then read as TT.
        """
        if when.tzinfo is not None:
            when = when.astimezone(timezone.utc).replace(tzinfo=None)
        return (when - self.reference).total_seconds() / JULIAN_CENTURY

    def evaluate_at(self, when: datetime, gamma: float = 0.0, gamma_rate: float = 0.0) -> BodiesElements:
        return self.evaluate_all(self.centuries_since_reference(when), gamma, gamma_rate)
