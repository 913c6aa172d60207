"""
Provider for data files shipped as package resources.
"""

from importlib import resources
from typing import Pattern

from ...errors import DataConfigurationError
from ..loader import DataLoader
from ..source import DataSource
from .registry import register_provider
from .base import DataProvider


@register_provider("resources", priority=200)
class ResourceCrawler(DataProvider):
    """
    Provider for data files embedded in an importable package.

    Resource names are relative to the package and may contain ``/``
    separated sub-directories.
    """

    def __init__(self, package: str, *names: str):
        super().__init__()
        try:
            root = resources.files(package)
        except ModuleNotFoundError as e:
            raise DataConfigurationError(f"unable to find package {package}") from e

        self.package = package
        self._resources = []
        for name in names:
            resource = root.joinpath(*name.strip("/").split("/"))
            if not resource.is_file():
                raise DataConfigurationError(
                    f"unable to find resource {name} in package {package}"
                )
            self._resources.append((name, resource))

    @property
    def provider_type(self) -> str:
        return "resources"

    @property
    def names(self) -> list:
        return [name for name, _ in self._resources]

    def feed(self, supported: Pattern, loader: DataLoader, manager) -> bool:
        loaded = False
        for name, resource in self._resources:
            if not loader.still_accepts_data():
                break
            source = DataSource(name, stream_opener=lambda r=resource: r.open("rb"))
            loaded |= self.feed_source(source, supported, loader, manager)
        return loaded

    def __repr__(self) -> str:
        names = ", ".join(repr(n) for n in self.names)
        return f"{self.__class__.__name__}({self.package!r}, {names})"
