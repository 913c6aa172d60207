"""
Declarative provider configuration, typically read from a YAML file.

Example::

    providers:
      - type: directory
        location: /data/orekit-data
      - type: zip
        location: /data/extra.zip
      - type: network
        urls:
          - https://example.org/tai-utc.dat
        timeout: 30
      - type: resources
        package: mypackage.data
        names: [UTC-TAI.history]
      - location: /data/auto-detected
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from ...errors import DataConfigurationError
from .base import DataProvider
from .network import NetworkCrawler
from .registry import ProviderRegistry
from .resources import ResourceCrawler

logger = logging.getLogger(__name__)


class ProviderConfig(BaseModel):
    """
    Configuration for a data provider.
    """

    type: Optional[str] = Field(None, description="Provider type, auto-detected if missing")
    location: Optional[str] = Field(None, description="Directory, archive or URL")
    urls: List[str] = Field(default_factory=list, description="URLs for network providers")
    package: Optional[str] = Field(None, description="Package holding resources")
    names: List[str] = Field(default_factory=list, description="Resource names")
    timeout: Optional[int] = Field(None, description="Network timeout in seconds")

    model_config = {"extra": "allow"}


def create_provider_from_config(config: ProviderConfig) -> DataProvider:
    """
    Create a provider from its declarative configuration.
    """
    provider_type = config.type
    if provider_type is None:
        if config.location is None:
            raise DataConfigurationError("provider configuration needs a type or a location")
        provider_type = ProviderRegistry.detect_type(config.location)

    if provider_type == "network":
        urls = list(config.urls)
        if config.location:
            urls.insert(0, config.location)
        return NetworkCrawler(*urls, timeout=config.timeout)

    if provider_type == "resources":
        if not config.package:
            raise DataConfigurationError("resources providers need a package")
        return ResourceCrawler(config.package, *config.names)

    if config.location is None:
        raise DataConfigurationError(f"{provider_type} providers need a location")
    return ProviderRegistry.create_provider(config.location, provider_type)


def load_provider_configs(path: Union[str, Path]) -> List[ProviderConfig]:
    """
    Read provider configurations from a YAML file.

    The file holds either a list of providers or a mapping with a
    ``providers`` key.
    """
    path = Path(path)
    if not path.is_file():
        raise DataConfigurationError(f"{path} does not exist")

    with path.open("r", encoding="utf-8") as f:
        try:
            content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise DataConfigurationError(f"invalid providers file {path}: {e}") from e

    if isinstance(content, dict):
        content = content.get("providers")
    if content is None:
        content = []
    if not isinstance(content, list):
        raise DataConfigurationError(f"invalid providers file {path}: expected a list")

    try:
        configs = [ProviderConfig(**entry) for entry in content]
    except (TypeError, ValidationError) as e:
        raise DataConfigurationError(f"invalid providers file {path}: {e}") from e

    logger.debug(f"Read {len(configs)} provider configurations from {path}")
    return configs
