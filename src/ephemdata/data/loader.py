"""
Contract for the objects consuming data sources.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO


class DataLoader(ABC):
    """
    Interface for loading data from streams found by data providers.
    """

    @abstractmethod
    def still_accepts_data(self) -> bool:
        """
        Check if the loader still accepts new data.

        Providers stop crawling as soon as this returns False.
        """
        pass

    @abstractmethod
    def load_data(self, stream: BinaryIO, name: str) -> None:
        """
        Load data from a stream.

        Args:
            stream: binary stream, already decompressed
            name: name of the data source (for diagnostics)
        """
        pass
