from .base import DataProvider, bare_name
from .config import ProviderConfig, create_provider_from_config, load_provider_configs
from .directory import DirectoryCrawler
from .network import NetworkCrawler
from .registry import (
    ProviderRegistry,
    create_provider,
    get_provider_info,
    list_provider_types,
    register_provider,
)
from .resources import ResourceCrawler
from .zip_archive import ZipJarCrawler

__all__ = [
    "DataProvider",
    "bare_name",
    "ProviderConfig",
    "create_provider_from_config",
    "load_provider_configs",
    "DirectoryCrawler",
    "NetworkCrawler",
    "ResourceCrawler",
    "ZipJarCrawler",
    "ProviderRegistry",
    "create_provider",
    "get_provider_info",
    "list_provider_types",
    "register_provider",
]
