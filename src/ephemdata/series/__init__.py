"""
Poisson series, polynomial expressions and fundamental arguments from IERS
conventions tables.
"""

from .arguments import BodiesElements, FundamentalNutationArguments
from .codec import MULTIPLIER_NAMES, NutationCodec
from .loader import PoissonSeriesLoader
from .parser import PoissonSeriesParser
from .poisson import CompiledSeries, PoissonSeries, SeriesTerm
from .polynomial import PolynomialParser, Unit

__all__ = [
    "BodiesElements",
    "FundamentalNutationArguments",
    "MULTIPLIER_NAMES",
    "NutationCodec",
    "PoissonSeriesLoader",
    "PoissonSeriesParser",
    "CompiledSeries",
    "PoissonSeries",
    "SeriesTerm",
    "PolynomialParser",
    "Unit",
]
