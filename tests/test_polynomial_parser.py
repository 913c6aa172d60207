"""
Tests for the polynomial expressions parser.
"""

import math

import pytest

from ephemdata.series import PolynomialParser, Unit

ARC_SECOND = math.radians(1.0 / 3600.0)


class TestPolynomialParser:
    """Test cases for the PolynomialParser class."""

    def test_plain_numbers(self):
        """Test coefficients without unit markers, in the default unit."""
        parser = PolynomialParser("t", Unit.NO_UNITS)

        coefficients = parser.parse(
            "  -16616.99 + 2004191742.88 t - 427219.05 t^2 - 198620.54 t^3 - 46.05 t^4 + 5.98 t^5"
        )

        assert coefficients == pytest.approx(
            [-16616.99, 2004191742.88, -427219.05, -198620.54, -46.05, 5.98]
        )

    def test_default_unit(self):
        """Test conversion of unmarked coefficients to radians."""
        parser = PolynomialParser("t", Unit.MICRO_ARC_SECONDS)

        coefficients = parser.parse("X = 1.5 - 2 t")

        assert coefficients == pytest.approx([1.5e-6 * ARC_SECOND, -2.0e-6 * ARC_SECOND])

    def test_unit_markers(self):
        """Test degree and arc second markers with superscript exponents."""
        parser = PolynomialParser("t", Unit.RADIANS)

        coefficients = parser.parse(
            "F5 ≡ Ω = 125.04455501° − 6962890.5431″t + 7.4722″t² + 0.007702″t³ − 0.00005939″t⁴"
        )

        assert coefficients == pytest.approx([
            math.radians(125.04455501),
            -6962890.5431 * ARC_SECOND,
            7.4722 * ARC_SECOND,
            0.007702 * ARC_SECOND,
            -0.00005939 * ARC_SECOND,
        ])

    def test_marker_inside_number(self):
        """Test arc second markers between integer and fractional parts."""
        parser = PolynomialParser("t", Unit.NO_UNITS)

        coefficients = parser.parse("  0''.5 + 1''.25 t")

        assert coefficients == pytest.approx([0.5 * ARC_SECOND, 1.25 * ARC_SECOND])

    def test_missing_degrees(self):
        """Test that absent degrees get zero coefficients."""
        parser = PolynomialParser("t", Unit.NO_UNITS)

        assert parser.parse("pA = 0.02438175 t + 0.00000538691 t²") == pytest.approx(
            [0.0, 0.02438175, 0.00000538691]
        )

    def test_other_variable(self):
        """Test a free variable other than t."""
        parser = PolynomialParser("x", Unit.NO_UNITS)

        assert parser.parse("1.0 + 2.0 x^2") == pytest.approx([1.0, 0.0, 2.0])

    @pytest.mark.parametrize("line", [
        "",
        "this is NOT an IERS nutation model file",
        "X = polynomial part + non-polynomial part",
        "1.0 2.0 t",
    ])
    def test_not_a_polynomial(self, line):
        """Test that non polynomial lines are rejected."""
        assert PolynomialParser("t", Unit.NO_UNITS).parse(line) is None

    def test_free_variable_length(self):
        """Test that the free variable is a single character."""
        with pytest.raises(ValueError):
            PolynomialParser("tt", Unit.NO_UNITS)

    def test_unit_factors(self):
        """Test the conversion factors of the units."""
        assert Unit.DEGREES.to_si(180.0) == pytest.approx(math.pi)
        assert Unit.MILLI_ARC_SECONDS.factor == pytest.approx(1.0e-3 * ARC_SECOND)
        assert Unit.NO_UNITS.factor == 1.0
