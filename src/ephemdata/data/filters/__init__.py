from .base import DataFilter, SuffixFilter
from .gzip_filter import GzipFilter
from .manager import FiltersManager
from .unix_compress import UnixCompressFilter, UnixCompressStream

__all__ = [
    "DataFilter",
    "SuffixFilter",
    "GzipFilter",
    "UnixCompressFilter",
    "UnixCompressStream",
    "FiltersManager",
]
