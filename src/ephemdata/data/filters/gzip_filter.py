"""
Filter for gzip compressed data.
"""

import gzip
import io
from typing import Optional

from ..source import DataSource
from .base import SuffixFilter


class GzipFilter(SuffixFilter):
    """
    Filter decompressing ``.gz`` data sources.
    """

    suffix = ".gz"

    def filter(self, original: DataSource) -> DataSource:
        if not self.applies_to(original.name):
            return original

        name = self.filtered_name(original.name)
        self.logger.debug(f"Applying gzip decompression to {original.name}")

        def open_stream() -> Optional[io.BufferedIOBase]:
            upstream = original.opener.open_stream_once()
            if upstream is None:
                return None
            return _ClosingGzipFile(upstream)

        return DataSource(name, stream_opener=open_stream)


class _ClosingGzipFile(gzip.GzipFile):
    """Gzip reader that also closes the compressed stream it reads from."""

    def __init__(self, upstream):
        self._upstream = upstream
        super().__init__(fileobj=upstream, mode="rb")

    def close(self) -> None:
        try:
            super().close()
        finally:
            self._upstream.close()
