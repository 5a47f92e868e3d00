"""CLI helpers for dataset filter options."""

from __future__ import annotations

import click

from costtrack.domain.entities import FilterState
from costtrack.utils.date_parser import get_period_filter

PERIODS = ("this-month", "last-month", "this-year", "last-year")


def filter_options(command):
    """Add the shared --year/--month/... filter options to a command."""
    options = [
        click.option("--year", type=int, help="Only records from this year"),
        click.option("--month", type=click.IntRange(1, 12), help="Only records from this month (1-12)"),
        click.option("--department", help="Only records from this department"),
        click.option("--section", help="Only records from this section"),
        click.option("--maintenance-type", help="Only records of this maintenance type"),
        click.option(
            "--period",
            type=click.Choice(PERIODS, case_sensitive=False),
            help="Shortcut for --year/--month relative to today",
        ),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def resolve_filter_state(
    ctx,
    *,
    year: int | None = None,
    month: int | None = None,
    department: str | None = None,
    section: str | None = None,
    maintenance_type: str | None = None,
    period: str | None = None,
) -> FilterState:
    """Resolve CLI filter options into a FilterState."""
    if period and (year is not None or month is not None):
        click.echo(
            "Error: --period cannot be combined with --year or --month.",
            err=True,
        )
        ctx.exit(1)

    if period:
        year, month = get_period_filter(period)

    return FilterState(
        year=str(year) if year is not None else "",
        month=str(month) if month is not None else "",
        department=department or "",
        section=section or "",
        maintenance_type=maintenance_type or "",
    )
