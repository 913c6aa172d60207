"""
Provider crawling zip and jar archives.
"""

import io
import zipfile
from functools import partial
from pathlib import Path
from typing import Optional, Pattern, Union

from ...errors import DataConfigurationError
from ..loader import DataLoader
from ..source import DataSource
from .base import ARCHIVE_PATTERN, DataProvider
from .registry import register_provider


@register_provider("zip", priority=20)
class ZipJarCrawler(DataProvider):
    """
    Provider for data files stored in zip or jar archives.

    Entries are named ``<archive>!/<entry>``. Archives nested inside the
    archive are crawled too, whatever their depth.
    """

    def __init__(self, archive: Union[str, Path], source: Optional[DataSource] = None):
        super().__init__()
        if source is None:
            path = Path(archive)
            if not path.is_file():
                raise DataConfigurationError(f"{path} does not exist")
            self.name = str(path)
            self._path = path
        else:
            self.name = source.name
            self._path = None
        self._source = source

    @classmethod
    def from_source(cls, source: DataSource) -> "ZipJarCrawler":
        """
        Build a crawler for an archive available only as a data source,
        typically an archive nested in another one.
        """
        return cls(source.name, source=source)

    @property
    def provider_type(self) -> str:
        return "zip"

    @classmethod
    def can_handle(cls, location: str) -> bool:
        return bool(ARCHIVE_PATTERN.match(location)) and Path(location).is_file()

    def _open_archive(self) -> zipfile.ZipFile:
        try:
            if self._path is not None:
                return zipfile.ZipFile(self._path)
            stream = self._source.opener.open_stream_once()
            if stream is None:
                raise DataConfigurationError(f"unable to open archive {self.name}")
            with stream:
                # zip reading needs random access
                content = io.BytesIO(stream.read())
            return zipfile.ZipFile(content)
        except zipfile.BadZipFile as e:
            raise DataConfigurationError(f"{self.name} is not a valid archive: {e}") from e

    def feed(self, supported: Pattern, loader: DataLoader, manager) -> bool:
        self.logger.debug(f"Crawling archive {self.name}")
        loaded = False
        with self._open_archive() as archive:
            for info in archive.infolist():
                if not loader.still_accepts_data():
                    break
                if info.is_dir():
                    continue
                source = DataSource(
                    f"{self.name}!/{info.filename}",
                    stream_opener=partial(archive.open, info),
                )
                loaded |= self.feed_source(source, supported, loader, manager)
        return loaded

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"
