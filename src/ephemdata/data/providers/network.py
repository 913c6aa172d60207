"""
Provider downloading data files from remote URLs.
"""

import io
from typing import Optional, Pattern
from urllib.parse import urlparse, urlunparse

import requests

from ...errors import DataConfigurationError
from ...settings import settings
from ..loader import DataLoader
from ..source import DataSource
from .base import DataProvider
from .registry import register_provider


@register_provider("network", priority=10)
class NetworkCrawler(DataProvider):
    """
    Provider for data files reachable over HTTP or HTTPS.

    Sources are named after the URL without its query string, so filters and
    patterns see the file name. Nothing is downloaded unless that name
    matches the loader pattern.
    """

    def __init__(self, *urls: str, timeout: Optional[int] = None):
        super().__init__()
        if not urls:
            raise DataConfigurationError("at least one URL is required")
        for url in urls:
            if not self.can_handle(url):
                raise DataConfigurationError(f"unsupported URL {url}")
        self.urls = list(urls)
        self.timeout = timeout if timeout is not None else settings.request_timeout

    @property
    def provider_type(self) -> str:
        return "network"

    @classmethod
    def can_handle(cls, location: str) -> bool:
        parsed = urlparse(location)
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)

    def set_timeout(self, timeout: int) -> None:
        """Set the connection and read timeout, in seconds."""
        self.timeout = timeout

    def _opener(self, url: str):
        def open_stream() -> io.BufferedReader:
            self.logger.info(f"Downloading {url}")
            try:
                response = requests.get(url, stream=True, timeout=self.timeout)
                response.raise_for_status()
            except requests.RequestException as e:
                raise DataConfigurationError(f"unable to fetch {url}: {e}") from e
            response.raw.decode_content = True
            return io.BufferedReader(response.raw, buffer_size=settings.download_chunk_size)

        return open_stream

    def feed(self, supported: Pattern, loader: DataLoader, manager) -> bool:
        loaded = False
        for url in self.urls:
            if not loader.still_accepts_data():
                break
            source = DataSource(_source_name(url), stream_opener=self._opener(url))
            loaded |= self.feed_source(source, supported, loader, manager)
        return loaded

    def __repr__(self) -> str:
        urls = ", ".join(repr(u) for u in self.urls)
        return f"{self.__class__.__name__}({urls})"


def _source_name(url: str) -> str:
    return urlunparse(urlparse(url)._replace(query="", fragment=""))
