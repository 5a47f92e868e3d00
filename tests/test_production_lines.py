"""Tests for production line configuration and config stores."""

from costtrack.database.base import MemoryConfigStore
from costtrack.database.factories import create_sqlite_config_store, resolve_config_path
from costtrack.domain.dataset import DatasetStore
from costtrack.domain.entities import ImportMode
from costtrack.domain.production_lines import PRODUCTION_LINES_KEY, ProductionLineService


def test_get_machines_lists_all_candidates(production_line_service):
    """Test every machine in the ledger is a candidate."""
    production_line_service.save(["Torno 1"])
    assert production_line_service.get_machines() == ["Compresor A", "Prensa 2", "Torno 1"]


def test_no_production_lines_by_default(production_line_service):
    """Test the set starts empty."""
    assert production_line_service.get_production_lines() == []
    assert not production_line_service.is_production_line("Torno 1")


def test_save_replaces_set(production_line_service):
    """Test save replaces rather than merges."""
    production_line_service.save(["Torno 1", "Prensa 2"])
    production_line_service.save(["Compresor A"])

    assert production_line_service.get_production_lines() == ["Compresor A"]
    assert production_line_service.is_production_line("Compresor A")
    assert not production_line_service.is_production_line("Torno 1")


def test_save_drops_blanks_and_duplicates(production_line_service):
    """Test saved names are cleaned up."""
    saved = production_line_service.save(["Torno 1", " ", "Torno 1", " Prensa 2 "])
    assert saved == ["Torno 1", "Prensa 2"]


def test_production_lines_survive_reload(config_store, store, sample_ledger, fixtures_dir):
    """Test the set is independent of the dataset lifecycle."""
    service = ProductionLineService(config_store, store)
    service.save(["Torno 1"])

    store.load(sample_ledger)
    store.import_file(fixtures_dir / "alias_import.csv", ImportMode.REPLACE)
    assert service.is_production_line("Torno 1")

    other = ProductionLineService(config_store, DatasetStore())
    assert other.get_production_lines() == ["Torno 1"]


def test_memory_config_store_returns_copies():
    """Test callers cannot mutate stored lists."""
    config_store = MemoryConfigStore()
    config_store.set_list("key", ["a"])
    config_store.get_list("key").append("b")
    assert config_store.get_list("key") == ["a"]
    assert config_store.get_list("missing") == []


def test_sqlite_config_store_persists(tmp_path):
    """Test the SQLite store keeps lists across connections."""
    db_path = str(tmp_path / "config.db")

    first = create_sqlite_config_store(database_path=db_path)
    first.connect()
    first.set_list(PRODUCTION_LINES_KEY, ["Torno 1", "Prensa 2"])
    first.set_list(PRODUCTION_LINES_KEY, ["Prensa 2"])
    first.disconnect()

    second = create_sqlite_config_store(database_path=db_path)
    second.connect()
    assert second.get_list(PRODUCTION_LINES_KEY) == ["Prensa 2"]
    assert second.get_list("unknown") == []
    second.disconnect()


def test_sqlite_config_store_env_var(tmp_path, monkeypatch):
    """Test COSTTRACK_DB_PATH selects the database file."""
    db_path = tmp_path / "env.db"
    monkeypatch.setenv("COSTTRACK_DB_PATH", str(db_path))

    config_store = create_sqlite_config_store()
    config_store.set_list("key", ["value"])
    config_store.disconnect()

    assert db_path.exists()


def test_sqlite_config_store_creates_parent_directory(tmp_path):
    """Test an explicit path in a new directory is usable."""
    db_path = tmp_path / "nested" / "dir" / "config.db"

    config_store = create_sqlite_config_store(database_path=str(db_path))
    config_store.set_list("key", ["value"])
    config_store.disconnect()

    assert db_path.exists()


def test_explicit_path_wins_over_env_var(tmp_path, monkeypatch):
    """Test the explicit path takes precedence over COSTTRACK_DB_PATH."""
    monkeypatch.setenv("COSTTRACK_DB_PATH", str(tmp_path / "env.db"))

    assert resolve_config_path(str(tmp_path / "explicit.db")) == tmp_path / "explicit.db"
    assert resolve_config_path() == tmp_path / "env.db"
