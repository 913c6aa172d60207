"""
Abstract base class for data filters.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from ..source import DataSource

logger = logging.getLogger(__name__)


class DataFilter(ABC):
    """
    Filter mapping one data source to another one.

    A filter that does not apply to a source must return the very same
    object, so the filters manager can detect that nothing changed.
    """

    def __init__(self):
        self.logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )

    @abstractmethod
    def filter(self, original: DataSource) -> DataSource:
        """
        Filter a data source.

        Args:
            original: data source to filter

        Returns:
            Filtered data source, or ``original`` itself if the filter
            does not apply
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class SuffixFilter(DataFilter):
    """
    Filter applying to data sources whose name ends with a given suffix.

    The filtered source name is the original name without the suffix.
    """

    suffix: str = ""

    def applies_to(self, name: str) -> bool:
        return name.endswith(self.suffix)

    def filtered_name(self, name: str) -> str:
        return name[: -len(self.suffix)]
