"""
Registry of data providers feeding caller supplied loaders.
"""

import logging
import os
import re
from pathlib import Path
from typing import List, Optional, Pattern, Set, Type, Union

from ..settings import settings
from .filters import FiltersManager
from .loader import DataLoader
from .providers import DataProvider, create_provider
from .providers.config import create_provider_from_config, load_provider_configs

logger = logging.getLogger(__name__)


class DataProvidersManager:
    """
    Ordered list of data providers.

    Providers are asked in insertion order. The same provider may be
    registered several times. When :meth:`feed` is called on an empty manager,
    the default providers are built from the configured search path.
    """

    def __init__(self, filters: Optional[FiltersManager] = None):
        self.logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )
        self._providers: List[DataProvider] = []
        self._loaded: Set[str] = set()
        self._filters = filters if filters is not None else FiltersManager()

    @property
    def filters(self) -> FiltersManager:
        return self._filters

    def add_provider(self, provider: DataProvider) -> None:
        """Append a provider at the end of the list."""
        self._providers.append(provider)
        self.logger.debug(f"Added provider {provider!r}")

    def remove_provider(
        self, provider: Union[DataProvider, Type[DataProvider]]
    ) -> Optional[DataProvider]:
        """
        Remove the first provider matching an instance or a class.

        Returns:
            The removed provider, None if nothing matched
        """
        for index, candidate in enumerate(self._providers):
            if self._matches(candidate, provider):
                self.logger.debug(f"Removed provider {candidate!r}")
                return self._providers.pop(index)
        return None

    def clear_providers(self) -> None:
        self._providers.clear()

    def get_providers(self) -> tuple:
        return tuple(self._providers)

    def is_supported(self, provider: Union[DataProvider, Type[DataProvider]]) -> bool:
        """Check if an instance, or an instance of a class, is registered."""
        return any(self._matches(candidate, provider) for candidate in self._providers)

    @staticmethod
    def _matches(candidate: DataProvider, provider) -> bool:
        if isinstance(provider, type):
            return isinstance(candidate, provider)
        return candidate is provider

    def add_default_providers(self, search_path: Optional[str] = None) -> None:
        """
        Add providers for each entry of a search path.

        Args:
            search_path: entries separated by ``os.pathsep``, empty entries are
                ignored. Defaults to the configured data path, then to the
                configured providers file.

        Raises:
            DataConfigurationError: if an entry does not exist or cannot be crawled
        """
        if search_path is None:
            entries = settings.search_path_entries()
            if settings.providers_file is not None:
                self.add_providers_from_file(settings.providers_file)
        else:
            entries = [e for e in search_path.split(os.pathsep) if e.strip()]

        for entry in entries:
            self.add_provider(create_provider(entry))

    def add_providers_from_file(self, path: Union[str, Path]) -> None:
        """Add the providers described in a YAML file."""
        for config in load_provider_configs(path):
            self.add_provider(create_provider_from_config(config))

    def feed(self, supported: Union[str, Pattern], loader: DataLoader) -> bool:
        """
        Feed a loader with all data sources whose name matches a pattern.

        Args:
            supported: regular expression the bare data names must match
            loader: loader to feed

        Returns:
            True if at least one provider fed the loader
        """
        pattern = re.compile(supported) if isinstance(supported, str) else supported

        if not self._providers:
            self.add_default_providers()
            if not self._providers:
                self.logger.warning("No data providers configured")

        loaded = False
        for provider in list(self._providers):
            if not loader.still_accepts_data():
                break
            loaded |= provider.feed(pattern, loader, self)

        if not loaded:
            self.logger.debug(f"No data matching {pattern.pattern} found")
        return loaded

    def add_loaded_data_name(self, name: str) -> None:
        self._loaded.add(name)

    def get_loaded_data_names(self) -> Set[str]:
        """Names of all data sources handed to loaders so far."""
        return set(self._loaded)

    def clear_loaded_data_names(self) -> None:
        self._loaded.clear()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(providers={self._providers!r})"


_default_manager: Optional[DataProvidersManager] = None


def default_manager() -> DataProvidersManager:
    """
    Get the shared manager, creating it on first use.
    """
    global _default_manager
    if _default_manager is None:
        _default_manager = DataProvidersManager()
    return _default_manager


def build_manager(
    search_path: Optional[str] = None,
    providers_file: Optional[Union[str, Path]] = None,
) -> DataProvidersManager:
    """
    Create a manager from an explicit search path and/or providers file.

    Without any of them, the configured defaults are used.
    """
    manager = DataProvidersManager()
    if search_path is None and providers_file is None:
        manager.add_default_providers()
        return manager
    if search_path:
        manager.add_default_providers(search_path)
    if providers_file is not None:
        manager.add_providers_from_file(providers_file)
    return manager
