"""
Tests for data sources and their openers.
"""

import io

import pytest

from ephemdata.data import DataSource, Opener


class TestOpener:
    """Test cases for the Opener class."""

    def test_requires_exactly_one_opener(self):
        """Test that one and only one access path must be given."""
        with pytest.raises(ValueError):
            Opener()
        with pytest.raises(ValueError):
            Opener(lambda: io.BytesIO(b""), lambda: io.StringIO(""))

    def test_binary_flag(self):
        """Test the raw data nature reported by the opener."""
        assert Opener(stream_opener=lambda: io.BytesIO(b"x")).raw_data_is_binary()
        assert not Opener(reader_opener=lambda: io.StringIO("x")).raw_data_is_binary()

    def test_stream_opened_as_reader(self):
        """Test that binary content can be read as UTF-8 text."""
        opener = Opener(stream_opener=lambda: io.BytesIO("Δt = 32.184 s\n".encode("utf-8")))

        with opener.open_reader_once() as reader:
            assert reader.read() == "Δt = 32.184 s\n"

    def test_reader_opened_as_stream(self):
        """Test that text content can be read as UTF-8 bytes."""
        text = "µas\n" * 5000
        opener = Opener(reader_opener=lambda: io.StringIO(text))

        with opener.open_stream_once() as stream:
            assert stream.read() == text.encode("utf-8")

    def test_each_open_is_fresh(self):
        """Test that every call returns a new independent stream."""
        opener = Opener(stream_opener=lambda: io.BytesIO(b"abc"))

        first = opener.open_stream_once()
        assert first.read(2) == b"ab"
        second = opener.open_stream_once()
        assert second.read() == b"abc"

    def test_none_propagates(self):
        """Test that a missing resource is reported as None on both paths."""
        assert Opener(stream_opener=lambda: None).open_reader_once() is None
        assert Opener(reader_opener=lambda: None).open_stream_once() is None


class TestDataSource:
    """Test cases for the DataSource class."""

    def test_name_required(self):
        """Test that a name is mandatory."""
        with pytest.raises(ValueError):
            DataSource(None, stream_opener=lambda: io.BytesIO(b""))

    def test_from_path(self, utc_tai_history):
        """Test that a file source is named after its final path segment."""
        source = DataSource.from_path(utc_tai_history)

        assert source.name == "UTC-TAI.history"
        assert source.opener.raw_data_is_binary()

    def test_lines_read_back_exactly(self, utc_tai_history):
        """Test that reading through the reader bridge preserves every line."""
        expected = utc_tai_history.read_text(encoding="utf-8").splitlines()
        source = DataSource.from_path(utc_tai_history)

        with source.opener.open_reader_once() as reader:
            lines = reader.read().splitlines()

        assert lines == expected
        assert any("2017" in line and "37s" in line for line in lines)

    def test_repr(self):
        """Test the representation of a data source."""
        source = DataSource("sample.txt", reader_opener=lambda: io.StringIO(""))
        assert repr(source) == "DataSource(name='sample.txt', binary=False)"
