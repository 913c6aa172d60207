"""
Tests for the UTC-TAI history loader.
"""

import io
from datetime import date

import pytest

from ephemdata.data import DataProvidersManager, DirectoryCrawler, UTCTAIHistoryLoader
from ephemdata.data.leap_seconds import DEFAULT_SUPPORTED_NAMES, LeapSecondEntry
from ephemdata.errors import LineParseError, UnsupportedFormatError


def load(text, name="UTC-TAI.history"):
    loader = UTCTAIHistoryLoader()
    loader.load_data(io.BytesIO(text.encode("utf-8")), name)
    return loader


class TestUTCTAIHistoryLoader:
    """Test cases for the UTCTAIHistoryLoader class."""

    def test_full_history(self, utc_tai_history):
        """Test loading the complete history file."""
        with open(utc_tai_history, "rb") as stream:
            loader = UTCTAIHistoryLoader()
            loader.load_data(stream, "UTC-TAI.history")
            assert not stream.closed

        entries = loader.entries
        assert len(entries) == 41

        first = entries[0]
        assert first.start == date(1961, 1, 1)
        assert first.end == date(1961, 8, 1)
        assert first.offset == pytest.approx(1.4228180)
        assert first.mjd_reference == pytest.approx(37300)
        assert first.drift == pytest.approx(0.001296)

        last = entries[-1]
        assert last.start == date(2017, 1, 1)
        assert last.end is None
        assert last.offset == 37.0
        assert last.drift == 0.0

    def test_intervals_are_contiguous(self, utc_tai_history):
        """Test that every interval starts where the previous one ends."""
        with open(utc_tai_history, "rb") as stream:
            loader = UTCTAIHistoryLoader()
            loader.load_data(stream, "UTC-TAI.history")

        for previous, current in zip(loader.entries, loader.entries[1:]):
            assert previous.end == current.start

    def test_ditto_keeps_drift(self, utc_tai_history):
        """Test that a ditto mark repeats the previous drift."""
        with open(utc_tai_history, "rb") as stream:
            loader = UTCTAIHistoryLoader()
            loader.load_data(stream, "UTC-TAI.history")

        second = loader.entries[1]
        assert second.start == date(1961, 8, 1)
        assert second.offset == pytest.approx(1.3728180)
        assert second.mjd_reference == pytest.approx(37300)
        assert second.drift == pytest.approx(0.001296)

        # first integer offset resets the drift
        integer = loader.entries[13]
        assert integer.start == date(1972, 1, 1)
        assert integer.offset == 10.0
        assert integer.drift == 0.0

    def test_offset_at(self):
        """Test evaluating a drifting offset."""
        entry = LeapSecondEntry(
            start=date(1961, 1, 1), end=date(1961, 8, 1),
            offset=1.422818, mjd_reference=37300, drift=0.001296,
        )
        # 1961-01-01 is MJD 37300
        assert entry.offset_at(date(1961, 1, 1)) == pytest.approx(1.422818)
        assert entry.offset_at(date(1961, 1, 11)) == pytest.approx(1.422818 + 0.01296)

    def test_accepts_data_until_loaded(self):
        """Test that only the first history file is used."""
        loader = UTCTAIHistoryLoader()
        assert loader.still_accepts_data()

        loader = load(" 2017  Jan.  1 -      37s\n")
        assert not loader.still_accepts_data()

    def test_missing_year(self):
        """Test that the first date must carry a year."""
        with pytest.raises(LineParseError) as excinfo:
            load("       Jan.  1 - 1973  Jan.  1    11s\n")
        assert excinfo.value.line_number == 1

    def test_gap_between_intervals(self):
        """Test that non contiguous intervals are rejected."""
        text = (
            " 1972  Jan.  1 -       Jul.  1    10s\n"
            " 1973  Jan.  1 - 1974  Jan.  1    12s\n"
        )
        with pytest.raises(LineParseError) as excinfo:
            load(text, name="gap.history")
        assert excinfo.value.line_number == 2
        assert excinfo.value.name == "gap.history"

    def test_reversed_interval(self):
        """Test that an interval ending before it starts is rejected."""
        with pytest.raises(LineParseError):
            load(" 1973  Jan.  1 - 1972  Jan.  1    12s\n")

    def test_garbled_data_line(self):
        """Test that data lines that cannot be parsed are reported."""
        text = (
            " 1972  Jan.  1 -       Jul.  1    10s\n"
            "       Jul.  1 - 1973  Jan.  1    eleven\n"
        )
        with pytest.raises(LineParseError) as excinfo:
            load(text)
        assert "eleven" in excinfo.value.line

    def test_no_entries(self):
        """Test that files without any entry are not supported."""
        with pytest.raises(UnsupportedFormatError):
            load(" RELATIONSHIP BETWEEN TAI AND UTC\n")

    @pytest.mark.integration
    def test_through_manager(self, data_tree):
        """Test loading the history file found deep in a directory tree."""
        manager = DataProvidersManager()
        manager.add_provider(DirectoryCrawler(data_tree))
        loader = UTCTAIHistoryLoader()

        assert manager.feed(DEFAULT_SUPPORTED_NAMES, loader)

        assert len(loader.entries) == 41
