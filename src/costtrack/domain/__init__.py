"""Domain layer for costtrack application."""

from costtrack.domain.dataset import DatasetStore
from costtrack.domain.aggregation import AggregationService
from costtrack.domain.production_lines import ProductionLineService

__all__ = [
    "DatasetStore",
    "AggregationService",
    "ProductionLineService",
]
