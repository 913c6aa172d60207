"""
Data loader reading a Poisson series through a data providers manager.
"""

import logging
from typing import BinaryIO, Optional

from ..data.loader import DataLoader
from .parser import PoissonSeriesParser
from .poisson import PoissonSeries

logger = logging.getLogger(__name__)


class PoissonSeriesLoader(DataLoader):
    """
    Loader keeping the first Poisson series it is fed with.
    """

    def __init__(self, parser: PoissonSeriesParser):
        self.parser = parser
        self.series: Optional[PoissonSeries] = None
        self.name: Optional[str] = None

    def still_accepts_data(self) -> bool:
        return self.series is None

    def load_data(self, stream: BinaryIO, name: str) -> None:
        self.series = self.parser.parse(stream, name)
        self.name = name
        logger.info(f"Loaded Poisson series with {self.series.non_polynomial_size} terms from {name}")
