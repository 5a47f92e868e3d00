"""Shared pytest fixtures for costtrack tests."""

import csv
from pathlib import Path
import pytest

from costtrack.database.base import MemoryConfigStore
from costtrack.domain.aggregation import AggregationService
from costtrack.domain.dataset import DatasetStore
from costtrack.domain.export import EXPORT_COLUMNS
from costtrack.domain.production_lines import ProductionLineService


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_ledger(fixtures_dir):
    """Path to the sample ledger (6 valid rows, 3 invalid)."""
    return fixtures_dir / "sample_ledger.csv"


@pytest.fixture
def write_ledger(tmp_path):
    """Return a helper writing row dicts to a quoted CSV ledger."""

    def _write(rows, name="ledger.csv", columns=EXPORT_COLUMNS):
        path = tmp_path / name
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(
                f, fieldnames=list(columns), quoting=csv.QUOTE_ALL, restval=""
            )
            writer.writeheader()
            writer.writerows(rows)
        return path

    return _write


@pytest.fixture
def store(sample_ledger):
    """Create a DatasetStore loaded with the sample ledger."""
    dataset = DatasetStore()
    dataset.load(sample_ledger)
    return dataset


@pytest.fixture
def config_store():
    """Create an in-memory configuration store."""
    return MemoryConfigStore()


@pytest.fixture
def production_line_service(config_store, store):
    """Create a ProductionLineService over the sample ledger."""
    return ProductionLineService(config_store, store)


@pytest.fixture
def aggregation_service(store, production_line_service):
    """Create an AggregationService over the sample ledger."""
    return AggregationService(store, production_line_service)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
