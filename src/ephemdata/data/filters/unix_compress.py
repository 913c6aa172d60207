"""
Filter for Unix ``compress`` (``.Z``) data.

The ``.Z`` format is a 3 bytes header (``1f 9d`` magic number and a flags
byte) followed by an LZW code stream. Codes start 9 bits wide and widen each
time the dictionary fills the current width, up to the maximum width given in
the flags byte. In block mode, code 256 clears the dictionary. Codes are
written in groups of eight, and ``compress`` pads the current group when the
code width changes or the dictionary is cleared.
"""

import io
from typing import Optional

from ...errors import CorruptedFileError, UnsupportedFormatError
from ..source import DataSource
from .base import SuffixFilter

MAGIC = b"\x1f\x9d"
MAX_BITS_MASK = 0x1F
BLOCK_MODE_MASK = 0x80
INIT_BITS = 9
MIN_MAX_BITS = 9
MAX_MAX_BITS = 16
CLEAR = 256
GROUP_SIZE = 8


class UnixCompressFilter(SuffixFilter):
    """
    Filter decompressing ``.Z`` data sources.
    """

    suffix = ".Z"

    def filter(self, original: DataSource) -> DataSource:
        if not self.applies_to(original.name):
            return original

        name = self.filtered_name(original.name)
        self.logger.debug(f"Applying Unix compress decompression to {original.name}")

        def open_stream() -> Optional[io.BufferedReader]:
            upstream = original.opener.open_stream_once()
            if upstream is None:
                return None
            try:
                raw = UnixCompressStream(upstream, original.name)
            except Exception:
                upstream.close()
                raise
            return io.BufferedReader(raw)

        return DataSource(name, stream_opener=open_stream)


class UnixCompressStream(io.RawIOBase):
    """
    Lazy LZW decoder for Unix compressed streams.

    Data is decoded as the consumer reads. Closing this stream closes the
    compressed stream it reads from.
    """

    def __init__(self, upstream, name: str, chunk_size: int = 8192):
        super().__init__()
        self._upstream = upstream
        self._name = name
        self._chunk_size = chunk_size

        # raw input buffering
        self._input = b""
        self._input_pos = 0

        # bits not yet consumed, least significant first
        self._bit_buffer = 0
        self._bit_count = 0
        self._codes_in_group = 0

        # decoded bytes not yet delivered
        self._pending = b""
        self._pending_pos = 0
        self._eof = False

        magic = bytes(b for b in (self._next_byte(), self._next_byte()) if b is not None)
        if magic != MAGIC:
            raise UnsupportedFormatError(
                f"file {name} is not a supported Unix-compressed file", name
            )
        flags = self._next_byte()
        if flags is None:
            raise CorruptedFileError(f"unexpected end of Unix-compressed file {name}", name)

        self._max_bits = flags & MAX_BITS_MASK
        if not MIN_MAX_BITS <= self._max_bits <= MAX_MAX_BITS:
            raise UnsupportedFormatError(
                f"file {name} uses unsupported {self._max_bits} bits codes", name
            )
        self._block_mode = bool(flags & BLOCK_MODE_MASK)
        self._max_entries = 1 << self._max_bits
        self._reset_table()

    @property
    def name(self) -> str:
        return self._name

    @property
    def max_bits(self) -> int:
        return self._max_bits

    @property
    def block_mode(self) -> bool:
        return self._block_mode

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        view = memoryview(buffer).cast("B")
        filled = 0
        while filled < len(view):
            if self._pending_pos >= len(self._pending):
                if self._eof or not self._decode_next():
                    self._eof = True
                    break
            end = min(len(self._pending), self._pending_pos + len(view) - filled)
            count = end - self._pending_pos
            view[filled:filled + count] = self._pending[self._pending_pos:end]
            self._pending_pos = end
            filled += count
        return filled

    def close(self) -> None:
        if not self.closed:
            try:
                self._upstream.close()
            finally:
                super().close()

    def _reset_table(self) -> None:
        self._table = [bytes((i,)) for i in range(256)]
        if self._block_mode:
            # placeholder for the clear code, never looked up
            self._table.append(b"")
        self._n_bits = INIT_BITS
        self._previous = None

    def _decode_next(self) -> bool:
        """Decode one code into the pending buffer, return False at end of data."""
        while True:
            if self._n_bits < self._max_bits and len(self._table) >= (1 << self._n_bits):
                self._skip_group_padding()
                self._n_bits += 1

            code = self._read_code()
            if code is None:
                return False

            if self._block_mode and code == CLEAR:
                self._skip_group_padding()
                self._reset_table()
                continue

            if self._previous is None:
                if code >= 256:
                    raise CorruptedFileError(f"corrupted Unix-compressed file {self._name}", self._name)
                entry = self._table[code]
            elif code < len(self._table):
                entry = self._table[code]
            elif code == len(self._table):
                # KwKwK: the code is being defined by this very step
                entry = self._previous + self._previous[:1]
            else:
                raise CorruptedFileError(f"corrupted Unix-compressed file {self._name}", self._name)

            if self._previous is not None and len(self._table) < self._max_entries:
                self._table.append(self._previous + entry[:1])
            self._previous = entry

            self._pending = entry
            self._pending_pos = 0
            return True

    def _read_code(self) -> Optional[int]:
        n_bits = self._n_bits
        while self._bit_count < n_bits:
            byte = self._next_byte()
            if byte is None:
                if self._bit_count >= 8:
                    # at least one full byte belongs to an incomplete code
                    raise CorruptedFileError(
                        f"unexpected end of Unix-compressed file {self._name}", self._name
                    )
                return None
            self._bit_buffer |= byte << self._bit_count
            self._bit_count += 8
        code = self._bit_buffer & ((1 << n_bits) - 1)
        self._bit_buffer >>= n_bits
        self._bit_count -= n_bits
        self._codes_in_group = (self._codes_in_group + 1) % GROUP_SIZE
        return code

    def _skip_group_padding(self) -> None:
        if self._codes_in_group == 0:
            return
        remaining = (GROUP_SIZE - self._codes_in_group) * self._n_bits
        self._codes_in_group = 0
        while remaining > 0:
            if self._bit_count == 0:
                byte = self._next_byte()
                if byte is None:
                    return
                self._bit_buffer = byte
                self._bit_count = 8
            dropped = min(remaining, self._bit_count)
            self._bit_buffer >>= dropped
            self._bit_count -= dropped
            remaining -= dropped

    def _next_byte(self) -> Optional[int]:
        if self._input_pos >= len(self._input):
            self._input = self._upstream.read(self._chunk_size) or b""
            self._input_pos = 0
            if not self._input:
                return None
        byte = self._input[self._input_pos]
        self._input_pos += 1
        return byte
