"""
Abstract base class for data providers.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Pattern

from ...errors import DataLoadingError, EphemDataError
from ..loader import DataLoader
from ..source import DataSource

if TYPE_CHECKING:
    from ..manager import DataProvidersManager

logger = logging.getLogger(__name__)

ARCHIVE_PATTERN = re.compile(r".*\.(?:zip|jar)$", re.IGNORECASE)


def bare_name(name: str) -> str:
    """
    Get the last segment of a data source name.

    Works for filesystem paths, ``archive!/entry`` names and URLs.
    """
    return re.split(r"[\\/]", name.split("?", 1)[0])[-1]


class DataProvider(ABC):
    """
    Abstract base class for data providers implementing a pluggable architecture.

    A provider crawls some storage, applies the manager filters to each data
    source it finds and feeds the loader with the sources whose bare name
    matches the supported pattern.
    """

    def __init__(self):
        self.logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )

    @classmethod
    def can_handle(cls, location: str) -> bool:
        """
        Check if this provider type can crawl the given location.
        """
        return False

    @property
    @abstractmethod
    def provider_type(self) -> str:
        """
        Return the type identifier for this provider.
        """
        pass

    @abstractmethod
    def feed(
        self, supported: Pattern, loader: DataLoader, manager: DataProvidersManager
    ) -> bool:
        """
        Feed a loader with the data sources this provider can reach.

        Args:
            supported: pattern the bare data names must match
            loader: loader to feed
            manager: manager providing the filters and tracking loaded names

        Returns:
            True if some data has been loaded
        """
        pass

    def feed_source(
        self,
        source: DataSource,
        supported: Pattern,
        loader: DataLoader,
        manager: DataProvidersManager,
    ) -> bool:
        """
        Filter one data source and hand it to the loader if its name matches.

        Archives (after filtering) are crawled in turn.
        """
        filtered = manager.filters.apply_relevant_filters(source)

        if ARCHIVE_PATTERN.match(bare_name(filtered.name)):
            from .zip_archive import ZipJarCrawler

            return ZipJarCrawler.from_source(filtered).feed(supported, loader, manager)

        if not supported.search(bare_name(filtered.name)):
            return False

        stream = filtered.opener.open_stream_once()
        if stream is None:
            self.logger.debug(f"No content available for {filtered.name}")
            return False

        self.logger.debug(f"Loading {filtered.name}")
        with stream:
            try:
                loader.load_data(stream, filtered.name)
            except EphemDataError:
                raise
            except Exception as e:
                raise DataLoadingError(str(e)) from e

        manager.add_loaded_data_name(filtered.name)
        return True

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
