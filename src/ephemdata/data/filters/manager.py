"""
Ordered chain of data filters.
"""

import logging
from typing import List

from ..source import DataSource
from .base import DataFilter
from .gzip_filter import GzipFilter
from .unix_compress import UnixCompressFilter

logger = logging.getLogger(__name__)


class FiltersManager:
    """
    Manager applying the relevant filters to data sources.

    Filters are applied repeatedly until a full pass over the chain leaves
    the source unchanged, so stacked layers such as ``file.txt.Z.gz`` are all
    removed.
    """

    def __init__(self):
        self.logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )
        self._filters: List[DataFilter] = []
        self.reset_filters()

    def add_filter(self, data_filter: DataFilter) -> None:
        """Append a filter at the end of the chain."""
        self._filters.append(data_filter)
        self.logger.debug(f"Added filter {data_filter!r}")

    def clear_filters(self) -> None:
        self._filters.clear()

    def reset_filters(self) -> None:
        """Restore the default gzip and Unix compress filters."""
        self._filters = [GzipFilter(), UnixCompressFilter()]

    def get_filters(self) -> tuple:
        return tuple(self._filters)

    def apply_relevant_filters(self, original: DataSource) -> DataSource:
        """
        Apply all relevant filters to a data source.

        Args:
            original: data source as provided by a crawler

        Returns:
            Filtered data source, ``original`` if no filter applies
        """
        top = original
        changed = True
        while changed:
            changed = False
            for data_filter in self._filters:
                filtered = data_filter.filter(top)
                if filtered is not top:
                    changed = True
                    top = filtered
        if top is not original:
            self.logger.debug(f"Filtered {original.name} into {top.name}")
        return top
