"""
ephemdata: data loading toolkit for astrodynamics.

Subpackages
-----------
- data:        data sources, decompression filters, providers and their manager
- series:      IERS conventions tables (Poisson series, nutation arguments)
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__: str = version(__name__)
except PackageNotFoundError:  # local editable install
    __version__ = "0.0.0-dev"

__all__ = [
    "data",
    "series",
]

from . import data, series
