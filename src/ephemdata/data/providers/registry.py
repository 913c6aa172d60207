"""
Provider registry with automatic registration and location detection.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Type

from ...errors import DataConfigurationError
from .base import DataProvider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """
    Registry for provider classes.

    Location detection asks the registered classes in priority order, the
    most specific types (network, archives) coming before directories.
    """

    _providers: Dict[str, Type[DataProvider]] = {}
    _priorities: Dict[str, int] = {}

    @classmethod
    def register(
        cls,
        provider_type: str,
        provider_class: Type[DataProvider],
        priority: int = 100,
    ) -> None:
        """
        Register a provider class for a specific type.

        Args:
            provider_type: Unique identifier for the provider
            provider_class: Provider class that inherits from DataProvider
            priority: Lower values are tried first during location detection
        """
        if not issubclass(provider_class, DataProvider):
            raise ValueError(
                f"Provider class must inherit from DataProvider: {provider_class}"
            )

        cls._providers[provider_type] = provider_class
        cls._priorities[provider_type] = priority
        logger.debug(f"Registered provider: {provider_type} -> {provider_class.__name__}")

    @classmethod
    def unregister(cls, provider_type: str) -> None:
        if provider_type in cls._providers:
            del cls._providers[provider_type]
            del cls._priorities[provider_type]
            logger.debug(f"Unregistered provider: {provider_type}")

    @classmethod
    def get_available_types(cls) -> List[str]:
        return sorted(cls._providers, key=lambda t: cls._priorities[t])

    @classmethod
    def get_provider_class(cls, provider_type: str) -> Type[DataProvider]:
        if provider_type not in cls._providers:
            raise DataConfigurationError(f"Unknown provider type: {provider_type}")
        return cls._providers[provider_type]

    @classmethod
    def detect_type(cls, location: str) -> str:
        """
        Find the provider type able to crawl a location.

        Raises:
            DataConfigurationError: if no registered type handles the location
        """
        for provider_type in cls.get_available_types():
            if cls._providers[provider_type].can_handle(location):
                return provider_type
        if Path(location).exists():
            raise DataConfigurationError(f"no provider able to crawl {location}")
        raise DataConfigurationError(f"{location} does not exist")

    @classmethod
    def create_provider(
        cls, location: str, provider_type: Optional[str] = None
    ) -> DataProvider:
        """
        Create a provider crawling a location.

        Args:
            location: directory, archive file or URL
            provider_type: Specific provider type to use, or None for auto-detection

        Returns:
            Configured provider instance
        """
        if provider_type is None:
            provider_type = cls.detect_type(location)
        provider_class = cls.get_provider_class(provider_type)
        logger.debug(f"Using {provider_class.__name__} for {location}")
        return provider_class(location)

    @classmethod
    def get_info(cls) -> Dict[str, str]:
        """
        Get information about all registered providers.
        """
        info = {}
        for provider_type in cls.get_available_types():
            provider_class = cls._providers[provider_type]
            doc = (provider_class.__doc__ or "No description").strip().splitlines()[0]
            info[provider_type] = f"{provider_class.__name__} - {doc}"
        return info


def register_provider(
    provider_type: str,
    provider_class: Optional[Type[DataProvider]] = None,
    priority: int = 100,
):
    """
    Decorator and function for registering providers.

    Can be used as:
    1. Function: register_provider("my_type", MyProvider)
    2. Decorator: @register_provider("my_type")
    3. Decorator with priority: @register_provider("my_type", priority=10)
    """

    def decorator(cls: Type[DataProvider]) -> Type[DataProvider]:
        ProviderRegistry.register(provider_type, cls, priority)
        return cls

    if provider_class is not None:
        ProviderRegistry.register(provider_type, provider_class, priority)
        return provider_class
    return decorator


def create_provider(location: str, provider_type: Optional[str] = None) -> DataProvider:
    """
    Create the provider crawling a location.

    This is the main entry point for turning search path entries into providers.
    """
    return ProviderRegistry.create_provider(location, provider_type)


def list_provider_types() -> List[str]:
    return ProviderRegistry.get_available_types()


def get_provider_info() -> Dict[str, str]:
    return ProviderRegistry.get_info()
