"""
Discovery and loading of data resources.
"""

from .filters import (
    DataFilter,
    FiltersManager,
    GzipFilter,
    UnixCompressFilter,
    UnixCompressStream,
)
from .leap_seconds import LeapSecondEntry, UTCTAIHistoryLoader
from .loader import DataLoader
from .manager import DataProvidersManager, build_manager, default_manager
from .providers import (
    DataProvider,
    DirectoryCrawler,
    NetworkCrawler,
    ProviderConfig,
    ResourceCrawler,
    ZipJarCrawler,
    create_provider,
    register_provider,
)
from .source import DataSource, Opener

__all__ = [
    "DataFilter",
    "FiltersManager",
    "GzipFilter",
    "UnixCompressFilter",
    "UnixCompressStream",
    "LeapSecondEntry",
    "UTCTAIHistoryLoader",
    "DataLoader",
    "DataProvidersManager",
    "default_manager",
    "build_manager",
    "DataProvider",
    "DirectoryCrawler",
    "NetworkCrawler",
    "ProviderConfig",
    "ResourceCrawler",
    "ZipJarCrawler",
    "create_provider",
    "register_provider",
    "DataSource",
    "Opener",
]
