"""CLI helpers for loading the ledger and building services."""

from __future__ import annotations

import click

from costtrack.cli.error_handling import handle_domain_error
from costtrack.domain.aggregation import AggregationService
from costtrack.domain.dataset import DatasetStore
from costtrack.domain.entities import FilterState
from costtrack.domain.errors import LoadError
from costtrack.domain.production_lines import ProductionLineService


def load_store_or_exit(ctx: click.Context, required: bool = True) -> DatasetStore:
    """Load the ledger named by --data / COSTTRACK_DATA, or exit with a CLI error.

    With required=False an empty store is returned when no ledger is configured.
    """
    data_path = ctx.obj.get("data_path")
    store = DatasetStore()
    if not data_path:
        if required:
            click.echo("Error: No ledger file given. Use --data or set COSTTRACK_DATA.", err=True)
            ctx.exit(1)
        return store

    try:
        store.load(data_path)
    except LoadError as e:
        handle_domain_error(ctx, e)
    return store


def build_services(
    ctx: click.Context, store: DatasetStore, filters: FilterState | None = None
) -> tuple[AggregationService, ProductionLineService]:
    """Apply filters to the store and wire up the aggregation services."""
    if filters is not None and not filters.is_empty():
        store.apply_filter(filters)
    production_lines = ProductionLineService(ctx.obj["config_store"], store)
    return AggregationService(store, production_lines), production_lines
