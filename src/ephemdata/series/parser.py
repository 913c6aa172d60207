"""
Parser for Poisson series tables from IERS conventions.

Tables hold a polynomial part followed by one section per time degree::

    j = 0  Nb of terms = 1306

       1    -6844318.44     1328.67    0    0    0    0    1 ...

Each data line gives the term index, the sine and cosine amplitudes and the
multipliers of the fundamental arguments. The column layout differs between
tables, so the parser is configured with the positions of each field.
"""

import io
import logging
import re
from typing import BinaryIO, Dict, List, Optional

from ..errors import (
    DataConfigurationError,
    LineParseError,
    MissingSeriesError,
    ParserConfigurationError,
    UnsupportedFormatError,
)
from .codec import NutationCodec
from .poisson import PoissonSeries, SeriesTerm
from .polynomial import PolynomialParser, Unit

logger = logging.getLogger(__name__)

UNKNOWN_FIELD = r"\S+"
OPTIONAL_FIELD = r"\S*"
INTEGER_FIELD = r"[-+]?\d+"
REAL_FIELD = r"[-+]?(?:(?:\d+(?:\.\d*)?)|(?:\.\d+))(?:[eE][-+]?\d+)?"
DOODSON_FIELD = r"\d{2,3}[.,]\d{3}"

DEGREE_SECTION_HEADER = re.compile(r"^\s*j\s*=\s*(\d+)[A-Za-z\s]+=\s*(\d+)\s*$")


def doodson_number(tau: int, s: int, h: int, p: int, n_prime: int, ps: int) -> int:
    """Compute the Doodson number from the Doodson multipliers."""
    return ((((tau * 10 + (s + 5)) * 10 + (h + 5)) * 10 + (p + 5)) * 10 + (n_prime + 5)) * 10 + (ps + 5)


def delaunay_to_doodson_number(gamma: int, l: int, l_prime: int, f: int, d: int, omega: int) -> int:
    """Compute the Doodson number from γ and the Delaunay multipliers."""
    return doodson_number(
        gamma,
        gamma + (l + f + d),
        l_prime - d,
        -l,
        f - omega,
        -l_prime,
    )


def _index(match: re.Match) -> int:
    try:
        return int(match.group(1))
    except ValueError:
        return -1


def _set_patterns(patterns: List[str], first: int, count: int, pattern: str) -> None:
    if first > 0:
        patterns[first - 1:first - 1 + count] = [pattern] * count


class PoissonSeriesParser:
    """
    Parser for Poisson series tables.

    Parsers are immutable: each ``with_*`` method returns a new parser.
    Columns are counted from 1, and -1 means the field is absent.

    Example for IERS 2010 table 5.3a::

        parser = (PoissonSeriesParser(17)
                  .with_polynomial_part("t", Unit.MICRO_ARC_SECONDS)
                  .with_first_delaunay(4)
                  .with_first_planetary(9)
                  .with_sin_cos(0, 2, micro_as, 3, micro_as))
    """

    def __init__(self, total_columns: int):
        if total_columns < 0:
            raise ParserConfigurationError("number of columns cannot be negative")
        self._polynomial_parser: Optional[PolynomialParser] = None
        self._fields = [UNKNOWN_FIELD] * total_columns
        self._optional = -1
        self._gamma = -1
        self._first_doodson = -1
        self._doodson = -1
        self._first_delaunay = -1
        self._first_planetary = -1
        self._sin_cos_columns: List[int] = []
        self._sin_cos_factors: List[float] = []

    def _copy(self, **changes) -> "PoissonSeriesParser":
        new = object.__new__(PoissonSeriesParser)
        new.__dict__.update(self.__dict__)
        new._fields = list(self._fields)
        new._sin_cos_columns = list(self._sin_cos_columns)
        new._sin_cos_factors = list(self._sin_cos_factors)
        for attribute, value in changes.items():
            setattr(new, f"_{attribute}", value)
        return new

    @property
    def total_columns(self) -> int:
        return len(self._fields)

    def with_polynomial_part(self, free_variable: str, unit: Unit) -> "PoissonSeriesParser":
        """Expect a polynomial part, in the given variable and default unit."""
        return self._copy(polynomial_parser=PolynomialParser(free_variable, unit))

    def with_optional_column(self, column: int) -> "PoissonSeriesParser":
        """Set up a column that may be empty."""
        new = self._copy(optional=column)
        _set_patterns(new._fields, self._optional, 1, UNKNOWN_FIELD)
        _set_patterns(new._fields, column, 1, OPTIONAL_FIELD)
        return new

    def with_gamma(self, column: int) -> "PoissonSeriesParser":
        """
        Set up the column of the γ multiplier.

        Raises:
            ParserConfigurationError: if Doodson multipliers are already configured
        """
        if self._first_doodson > 0 and column > 0:
            raise ParserConfigurationError("cannot parse both τ and γ from the same Poisson series file")
        new = self._copy(gamma=column)
        _set_patterns(new._fields, self._gamma, 1, UNKNOWN_FIELD)
        _set_patterns(new._fields, column, 1, INTEGER_FIELD)
        return new

    def with_doodson(self, first_multiplier_column: int, number_column: int) -> "PoissonSeriesParser":
        """
        Set up the columns of the 6 Doodson multipliers (τ first) and of the
        Doodson number.

        Raises:
            ParserConfigurationError: if γ is already configured
        """
        if self._gamma > 0 and first_multiplier_column > 0:
            raise ParserConfigurationError("cannot parse both τ and γ from the same Poisson series file")
        new = self._copy(first_doodson=first_multiplier_column, doodson=number_column)
        _set_patterns(new._fields, self._first_doodson, 6, UNKNOWN_FIELD)
        _set_patterns(new._fields, first_multiplier_column, 6, INTEGER_FIELD)
        _set_patterns(new._fields, self._doodson, 1, UNKNOWN_FIELD)
        _set_patterns(new._fields, number_column, 1, DOODSON_FIELD)
        return new

    def with_first_delaunay(self, column: int) -> "PoissonSeriesParser":
        """Set up the column of the first of the 5 Delaunay multipliers."""
        new = self._copy(first_delaunay=column)
        _set_patterns(new._fields, self._first_delaunay, 5, UNKNOWN_FIELD)
        _set_patterns(new._fields, column, 5, INTEGER_FIELD)
        return new

    def with_first_planetary(self, column: int) -> "PoissonSeriesParser":
        """Set up the column of the first of the 9 planetary multipliers."""
        new = self._copy(first_planetary=column)
        _set_patterns(new._fields, self._first_planetary, 9, UNKNOWN_FIELD)
        _set_patterns(new._fields, column, 9, INTEGER_FIELD)
        return new

    def with_sin_cos(
        self, degree: int, sin_column: int, sin_factor: float, cos_column: int, cos_factor: float
    ) -> "PoissonSeriesParser":
        """
        Set up the columns of the sine and cosine amplitudes for ``t^degree``.

        Args:
            degree: degree to set up
            sin_column: column of the sine amplitude, -1 if there is none
            sin_factor: factor applied to the sine amplitude
            cos_column: column of the cosine amplitude, -1 if there is none
            cos_factor: factor applied to the cosine amplitude
        """
        new = self._copy()
        size = 2 * max(degree + 1, len(self._sin_cos_columns) // 2)
        new._sin_cos_columns += [-1] * (size - len(new._sin_cos_columns))
        new._sin_cos_factors += [float("nan")] * (size - len(new._sin_cos_factors))

        if 2 * degree < len(self._sin_cos_columns):
            _set_patterns(new._fields, self._sin_cos_columns[2 * degree], 1, UNKNOWN_FIELD)
        if 2 * degree + 1 < len(self._sin_cos_columns):
            _set_patterns(new._fields, self._sin_cos_columns[2 * degree + 1], 1, UNKNOWN_FIELD)
        _set_patterns(new._fields, sin_column, 1, REAL_FIELD)
        _set_patterns(new._fields, cos_column, 1, REAL_FIELD)

        new._sin_cos_columns[2 * degree] = sin_column
        new._sin_cos_columns[2 * degree + 1] = cos_column
        new._sin_cos_factors[2 * degree] = sin_factor
        new._sin_cos_factors[2 * degree + 1] = cos_factor
        return new

    def _regular_line(self) -> Optional[re.Pattern]:
        if not self._fields:
            return None
        fields = r"\s+".join(f"({pattern})" for pattern in self._fields)
        return re.compile(rf"^\s*{fields}\s*$")

    def parse(self, stream: Optional[BinaryIO], name: str) -> PoissonSeries:
        """
        Parse a Poisson series table.

        Args:
            stream: binary stream holding the table, read as UTF-8
            name: name of the table, for error messages

        Raises:
            DataConfigurationError: if stream is None
            LineParseError: if a data line is inconsistent
            MissingSeriesError: if a degree section is missing
            UnsupportedFormatError: if the file does not hold a complete series
        """
        if stream is None:
            raise DataConfigurationError(f"unable to find file {name}")
        if self._fields and self._first_delaunay < 0:
            raise ParserConfigurationError("Delaunay multipliers columns are not configured")

        if isinstance(stream, io.TextIOBase):
            return self._parse_lines(stream, name)
        reader = io.TextIOWrapper(stream, encoding="utf-8")
        try:
            return self._parse_lines(reader, name)
        finally:
            reader.detach()

    def _int(self, match: re.Match, column: int) -> int:
        return 0 if column < 0 else int(match.group(column))

    def _coefficient(self, match: re.Match, column: int, factor: float) -> float:
        return 0.0 if column < 0 else factor * float(match.group(column))

    def _parse_lines(self, reader, name: str) -> PoissonSeries:
        regular_line = self._regular_line()
        expected_index = -1
        n_terms = -1
        count = 0
        degree = 0

        polynomial = [] if self._polynomial_parser is None else None
        series: Dict[int, SeriesTerm] = {}

        for line_number, line in enumerate(reader, start=1):
            # tables copied from PDF files use unicode minus signs
            line = line.rstrip("\r\n").replace("−", "-")

            match = regular_line.match(line) if regular_line is not None else None
            if match:
                if expected_index > 0 and _index(match) != expected_index:
                    raise LineParseError(line_number, name, line)

                multipliers = self._multipliers(match, line_number, name, line)
                try:
                    key = NutationCodec.encode(multipliers)
                except ValueError as e:
                    raise LineParseError(line_number, name, line) from e

                term = series.get(key)
                if term is None:
                    term = SeriesTerm(multipliers)

                non_zero = False
                for d in range(len(self._sin_cos_columns) // 2):
                    sin_coeff = self._coefficient(match, self._sin_cos_columns[2 * d], self._sin_cos_factors[2 * d])
                    cos_coeff = self._coefficient(match, self._sin_cos_columns[2 * d + 1], self._sin_cos_factors[2 * d + 1])
                    if sin_coeff != 0.0 or cos_coeff != 0.0:
                        non_zero = True
                        term.add(degree + d, sin_coeff, cos_coeff)
                        count += 1
                if non_zero:
                    series[key] = term

                if expected_index > 0:
                    expected_index += 1
                continue

            header = DEGREE_SECTION_HEADER.match(line)
            if header:
                next_degree = int(header.group(1))
                if next_degree != degree + 1 and (degree != 0 or next_degree != 0):
                    raise MissingSeriesError(degree + 1, name, line_number)

                if next_degree == 0:
                    # sectioned files number all their terms
                    expected_index = 1

                if next_degree > 0 and count != n_terms:
                    raise UnsupportedFormatError(
                        f"file {name} is not a supported IERS data file", name
                    )

                n_terms = int(header.group(2))
                count = 0
                degree = next_degree

            elif polynomial is None:
                polynomial = self._polynomial_parser.parse(line)

        if polynomial is None or not series:
            raise UnsupportedFormatError(f"file {name} is not a supported IERS data file", name)
        if n_terms > 0 and count != n_terms:
            raise UnsupportedFormatError(f"file {name} is not a supported IERS data file", name)

        result = PoissonSeries(polynomial, series)
        logger.debug(f"Parsed {result!r} from {name}")
        return result

    def _multipliers(self, match: re.Match, line_number: int, name: str, line: str) -> List[int]:
        tau, s, h, p, n_prime, ps = (
            (0,) * 6 if self._first_doodson < 0
            else tuple(int(match.group(self._first_doodson + i)) for i in range(6))
        )
        n_doodson = 0 if self._doodson < 0 else int(re.sub(r"[.,]", "", match.group(self._doodson)))

        gamma = self._int(match, self._gamma)
        delaunay = [int(match.group(self._first_delaunay + i)) for i in range(5)]
        planetary = (
            [0] * 9 if self._first_planetary < 0
            else [int(match.group(self._first_planetary + i)) for i in range(9)]
        )

        if n_doodson > 0:
            # Doodson tables use the opposite sign convention for Delaunay arguments
            gamma = tau
            delaunay = [-m for m in delaunay]
            if (n_doodson != doodson_number(tau, s, h, p, n_prime, ps)
                    or n_doodson != delaunay_to_doodson_number(gamma, *delaunay)):
                raise LineParseError(line_number, name, line)

        return [gamma] + delaunay + planetary
