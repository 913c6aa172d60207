"""
Provider crawling a directory tree.
"""

from functools import partial
from pathlib import Path
from typing import Pattern, Union

from ...errors import DataConfigurationError
from ..loader import DataLoader
from ..source import DataSource
from .base import ARCHIVE_PATTERN, DataProvider
from .registry import register_provider


@register_provider("directory", priority=90)
class DirectoryCrawler(DataProvider):
    """
    Provider for data files stored in a directory tree.

    Sub-directories are crawled recursively in sorted order. Zip and jar
    archives found along the way are crawled as well.
    """

    def __init__(self, root: Union[str, Path]):
        super().__init__()
        root = Path(root)
        if not root.exists():
            raise DataConfigurationError(f"{root} does not exist")
        if not root.is_dir():
            raise DataConfigurationError(f"{root} is not a directory")
        self.root = root

    @property
    def provider_type(self) -> str:
        return "directory"

    @classmethod
    def can_handle(cls, location: str) -> bool:
        return Path(location).is_dir()

    def feed(self, supported: Pattern, loader: DataLoader, manager) -> bool:
        self.logger.debug(f"Crawling directory {self.root}")
        return self._feed_directory(self.root, supported, loader, manager)

    def _feed_directory(
        self, directory: Path, supported: Pattern, loader: DataLoader, manager
    ) -> bool:
        loaded = False
        for entry in sorted(directory.iterdir()):
            if not loader.still_accepts_data():
                break
            if entry.is_dir():
                loaded |= self._feed_directory(entry, supported, loader, manager)
            elif ARCHIVE_PATTERN.match(entry.name):
                from .zip_archive import ZipJarCrawler

                loaded |= ZipJarCrawler(entry).feed(supported, loader, manager)
            else:
                source = DataSource(str(entry), stream_opener=partial(open, entry, "rb"))
                loaded |= self.feed_source(source, supported, loader, manager)
        return loaded

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str(self.root)!r})"
