"""
Named, lazily openable handles on data resources.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, Callable, Optional, TextIO, Union

logger = logging.getLogger(__name__)

StreamOpener = Callable[[], Optional[BinaryIO]]
ReaderOpener = Callable[[], Optional[TextIO]]


class _EncodingStream(io.RawIOBase):
    """Binary view of a text reader, encoding characters on the fly."""

    def __init__(self, reader: TextIO, encoding: str = "utf-8", chunk_size: int = 8192):
        self._reader = reader
        self._encoding = encoding
        self._chunk_size = chunk_size
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        while not self._pending:
            text = self._reader.read(self._chunk_size)
            if not text:
                return 0
            self._pending = text.encode(self._encoding)
        n = min(len(buffer), len(self._pending))
        buffer[:n] = self._pending[:n]
        self._pending = self._pending[n:]
        return n

    def close(self) -> None:
        if not self.closed:
            self._reader.close()
        super().close()


class Opener:
    """
    Opener for a data source content.

    Exactly one of the stream or reader openers is set. The other access path
    is bridged through UTF-8.
    """

    def __init__(
        self,
        stream_opener: Optional[StreamOpener] = None,
        reader_opener: Optional[ReaderOpener] = None,
    ):
        if (stream_opener is None) == (reader_opener is None):
            raise ValueError("exactly one of stream_opener and reader_opener is required")
        self._stream_opener = stream_opener
        self._reader_opener = reader_opener

    def raw_data_is_binary(self) -> bool:
        """Check if the raw data is binary (i.e. opened as a byte stream)."""
        return self._stream_opener is not None

    def open_stream_once(self) -> Optional[BinaryIO]:
        """
        Open a fresh byte stream on the content.

        Returns:
            A new binary stream, or None if the underlying opener returned None
        """
        if self._stream_opener is not None:
            return self._stream_opener()
        reader = self._reader_opener()
        if reader is None:
            return None
        return io.BufferedReader(_EncodingStream(reader))

    def open_reader_once(self) -> Optional[TextIO]:
        """
        Open a fresh character reader on the content.

        Returns:
            A new text stream, or None if the underlying opener returned None
        """
        if self._reader_opener is not None:
            return self._reader_opener()
        stream = self._stream_opener()
        if stream is None:
            return None
        return io.TextIOWrapper(stream, encoding="utf-8")


class DataSource:
    """
    Container associating a name with an opener for its content.
    """

    def __init__(
        self,
        name: str,
        stream_opener: Optional[StreamOpener] = None,
        reader_opener: Optional[ReaderOpener] = None,
        opener: Optional[Opener] = None,
    ):
        if name is None:
            raise ValueError("data source name is required")
        self._name = name
        self._opener = opener if opener is not None else Opener(stream_opener, reader_opener)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "DataSource":
        """
        Build a data source reading a file.

        The name is the final segment of the path.
        """
        path = Path(path)
        return cls(path.name, stream_opener=lambda: open(path, "rb"))

    @property
    def name(self) -> str:
        return self._name

    @property
    def opener(self) -> Opener:
        return self._opener

    def __repr__(self) -> str:
        binary = self._opener.raw_data_is_binary()
        return f"{self.__class__.__name__}(name={self._name!r}, binary={binary})"
