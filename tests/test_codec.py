"""
Tests for the nutation multipliers codec.
"""

import random

import pytest

from ephemdata.series import MULTIPLIER_NAMES, NutationCodec
from ephemdata.series.codec import MAX_NON_ZERO, MAX_VALUE, MIN_VALUE, MULTIPLIERS


class TestNutationCodec:
    """Test cases for the NutationCodec class."""

    def test_random_multipliers(self):
        """Test that random admissible multipliers survive encoding."""
        rng = random.Random(0x6F2A)
        values = [v for v in range(MIN_VALUE, MAX_VALUE + 1) if v != 0]
        seen = {}
        for _ in range(100000):
            multipliers = [0] * MULTIPLIERS
            for index in rng.sample(range(MULTIPLIERS), rng.randint(0, MAX_NON_ZERO)):
                multipliers[index] = rng.choice(values)
            key = NutationCodec.encode(multipliers)

            assert 0 <= key < 1 << 64
            assert NutationCodec.decode(key) == tuple(multipliers)
            assert seen.setdefault(key, tuple(multipliers)) == tuple(multipliers)

    def test_zero(self):
        """Test that all-zero multipliers give a zero key."""
        assert NutationCodec.encode([0] * MULTIPLIERS) == 0
        assert NutationCodec.decode(0) == (0,) * MULTIPLIERS

    def test_extreme_values(self):
        """Test the bounds of the multiplier fields."""
        multipliers = [MIN_VALUE, MAX_VALUE] * 3 + [-1] + [0] * 8
        assert NutationCodec.decode(NutationCodec.encode(multipliers)) == tuple(multipliers)

    def test_multiplier_order(self):
        """Test that the flag bits follow the multiplier order."""
        for index in range(MULTIPLIERS):
            multipliers = [0] * MULTIPLIERS
            multipliers[index] = 1
            assert NutationCodec.encode(multipliers) & ((1 << MULTIPLIERS) - 1) == 1 << index
        assert MULTIPLIER_NAMES[0] == "gamma"
        assert len(MULTIPLIER_NAMES) == MULTIPLIERS

    def test_wrong_count(self):
        """Test that exactly 15 multipliers are required."""
        with pytest.raises(ValueError):
            NutationCodec.encode([0] * 14)
        with pytest.raises(ValueError):
            NutationCodec.encode([0] * 16)

    def test_out_of_range(self):
        """Test that multipliers outside of the 7 bits range are rejected."""
        multipliers = [0] * MULTIPLIERS
        multipliers[3] = MAX_VALUE + 1
        with pytest.raises(ValueError) as excinfo:
            NutationCodec.encode(multipliers)
        assert "F" in str(excinfo.value)

        multipliers[3] = MIN_VALUE - 1
        with pytest.raises(ValueError):
            NutationCodec.encode(multipliers)

    def test_too_many_non_zero(self):
        """Test that at most 7 multipliers may be non-zero."""
        with pytest.raises(ValueError):
            NutationCodec.encode([1] * (MAX_NON_ZERO + 1) + [0] * (MULTIPLIERS - MAX_NON_ZERO - 1))

    def test_invalid_key(self):
        """Test that keys must be unsigned 64-bit values."""
        with pytest.raises(ValueError):
            NutationCodec.decode(-1)
        with pytest.raises(ValueError):
            NutationCodec.decode(1 << 64)
