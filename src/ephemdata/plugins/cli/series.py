"""
CLI command: series

Parses a Poisson series table and shows a summary, optionally evaluating it
or exporting its terms.
"""

import logging
from datetime import datetime
from typing import Tuple

import click

from ephemdata.data import DataSource, FiltersManager
from ephemdata.errors import EphemDataError
from ephemdata.series import FundamentalNutationArguments, PoissonSeriesParser, Unit

# Configure module-level logger
logger = logging.getLogger("ephemdata.cli.series")

UNIT_NAMES = [u.name for u in Unit]


def _split(value: str, count: int, option: str) -> Tuple[int, ...]:
    parts = value.split(":")
    if len(parts) != count:
        raise click.BadParameter(f"expected {count} integers separated by ':'", param_hint=option)
    try:
        return tuple(int(p) for p in parts)
    except ValueError:
        raise click.BadParameter(f"invalid integers in {value!r}", param_hint=option)


@click.command("series")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--columns", type=int, required=True, help="Number of columns of data lines")
@click.option("--delaunay", type=int, required=True, help="Column of the first Delaunay multiplier")
@click.option("--planetary", type=int, default=-1, help="Column of the first planetary multiplier")
@click.option("--gamma", type=int, default=-1, help="Column of the gamma multiplier")
@click.option("--doodson", default=None, help="FIRST:NUMBER columns of Doodson multipliers and number")
@click.option("--optional", "optional_column", type=int, default=-1, help="Column that may be empty")
@click.option("--sin-cos", "sin_cos", multiple=True, required=True,
              help="DEGREE:SIN:COS columns of amplitudes (-1 for none), may be repeated")
@click.option("--polynomial", default=None, help="Free variable of the polynomial part")
@click.option("--unit", type=click.Choice(UNIT_NAMES), default="MICRO_ARC_SECONDS",
              help="Unit of the polynomial and amplitudes")
@click.option("--at", "at", default=None, help="ISO date (TT) at which to evaluate the series")
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False), default=None,
              help="Write the terms to a CSV file")
def cli(path, columns, delaunay, planetary, gamma, doodson, optional_column,
        sin_cos, polynomial, unit, at, csv_path) -> None:
    """
    Parse the Poisson series table at PATH.
    """
    unit = Unit[unit]
    try:
        parser = PoissonSeriesParser(columns).with_first_delaunay(delaunay)
        if planetary > 0:
            parser = parser.with_first_planetary(planetary)
        if gamma > 0:
            parser = parser.with_gamma(gamma)
        if doodson:
            parser = parser.with_doodson(*_split(doodson, 2, "--doodson"))
        if optional_column > 0:
            parser = parser.with_optional_column(optional_column)
        for value in sin_cos:
            degree, sin_column, cos_column = _split(value, 3, "--sin-cos")
            parser = parser.with_sin_cos(degree, sin_column, unit.factor, cos_column, unit.factor)
        if polynomial:
            parser = parser.with_polynomial_part(polynomial, unit)

        source = FiltersManager().apply_relevant_filters(DataSource.from_path(path))
        with source.opener.open_stream_once() as stream:
            series = parser.parse(stream, source.name)
    except EphemDataError as e:
        logger.error("Unable to parse %s: %s", path, e)
        raise click.ClickException(str(e))

    click.echo(f"Series: {source.name}")
    click.echo(f"  polynomial coefficients: {len(series.polynomial)}")
    click.echo(f"  periodic terms: {series.non_polynomial_size}")

    if at is not None:
        try:
            when = datetime.fromisoformat(at)
        except ValueError:
            raise click.BadParameter(f"invalid date {at!r}", param_hint="--at")
        elements = FundamentalNutationArguments.iers2010().evaluate_at(when)
        click.echo(f"  value at {at}: {series.value(elements):.15e}")
        click.echo(f"  derivative at {at}: {series.value_derivative(elements):.15e}")

    if csv_path is not None:
        series.to_frame().to_csv(csv_path)
        click.echo(f"Wrote {series.non_polynomial_size} terms to {csv_path}")
