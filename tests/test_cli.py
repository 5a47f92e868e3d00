"""Tests for the command-line interface."""

import pytest

from costtrack.cli.main import cli


@pytest.fixture
def invoke(cli_runner, config_store, sample_ledger):
    """Invoke the CLI against the sample ledger and an in-memory config store."""

    def _invoke(*args, data=sample_ledger):
        base = ["--data", str(data)] if data is not None else []
        return cli_runner.invoke(cli, [*base, *args], obj={"config_store": config_store})

    return _invoke


def test_summary(invoke):
    """Test summary shows KPIs and both aggregations."""
    result = invoke("summary")

    assert result.exit_code == 0
    assert "Q 6,870.50" in result.output
    assert "Compresor A" in result.output
    assert "Spending by Department" in result.output
    assert "Mantenimiento" in result.output
    assert "Correctivo" in result.output


def test_summary_with_filters(invoke):
    """Test filter options narrow the summary."""
    result = invoke("summary", "--department", "Produccion", "--year", "2025")

    assert result.exit_code == 0
    assert "Q 2,550.50" in result.output
    assert "Torno 1" in result.output


def test_summary_no_matches(invoke):
    """Test an empty filter result is not an error."""
    result = invoke("summary", "--department", "Ventas")

    assert result.exit_code == 0
    assert "No records found." in result.output


def test_period_option_conflicts_with_year(invoke):
    """Test --period cannot be combined with --year."""
    result = invoke("summary", "--period", "this-year", "--year", "2025")

    assert result.exit_code == 1
    assert "cannot be combined" in result.output


def test_missing_data_option(invoke):
    """Test data commands require a ledger."""
    result = invoke("summary", data=None)

    assert result.exit_code == 1
    assert "No ledger file given" in result.output


def test_unreadable_ledger(invoke, fixtures_dir):
    """Test load errors are reported with exit code 1."""
    result = invoke("summary", data=fixtures_dir / "notes.txt")

    assert result.exit_code == 1
    assert "Error: Error loading data" in result.output


def test_trend_monthly_and_weekly(invoke):
    """Test monthly and weekly trends."""
    monthly = invoke("trend")
    assert monthly.exit_code == 0
    assert "2024-12" in monthly.output
    assert "2025-03" in monthly.output

    weekly = invoke("trend", "--weekly")
    assert weekly.exit_code == 0
    assert "2025-W01" in weekly.output
    assert "2025-W12" in weekly.output


def test_top_machines_limit(invoke):
    """Test top machines honours --limit."""
    result = invoke("top-machines", "--limit", "1")

    assert result.exit_code == 0
    assert "Compresor A" in result.output
    assert "Torno 1" not in result.output


def test_hierarchy(invoke):
    """Test the department hierarchy and its total."""
    result = invoke("hierarchy")

    assert result.exit_code == 0
    assert "Produccion" in result.output
    assert "Maquinado" in result.output
    assert "Sin Departamento" in result.output
    assert "Q 6,870.50" in result.output


def test_production_line_workflow(invoke):
    """Test saving production lines and viewing their hierarchy."""
    empty = invoke("hierarchy", "--production-lines")
    assert empty.exit_code == 0
    assert "No production line records found" in empty.output

    saved = invoke("lines", "set", "Torno 1", "Prensa 2")
    assert saved.exit_code == 0
    assert "Saved 2 production lines." in saved.output

    listed = invoke("lines", "list", data=None)
    assert "Torno 1" in listed.output
    assert "Prensa 2" in listed.output

    candidates = invoke("lines", "candidates")
    assert "[x] Torno 1" in candidates.output
    assert "[ ] Compresor A" in candidates.output

    tree = invoke("hierarchy", "--production-lines")
    assert "Torno 1 (Produccion)" in tree.output
    assert "Compresor A" not in tree.output

    summary = invoke("lines", "summary")
    assert "Prensa 2" in summary.output

    cleared = invoke("lines", "clear", data=None)
    assert cleared.exit_code == 0
    assert "No production lines configured" in invoke("lines", "list", data=None).output


def test_machine_detail(invoke):
    """Test machine detail lists records newest first."""
    result = invoke("machine", "Compresor A")

    assert result.exit_code == 0
    assert "Department: Mantenimiento" in result.output
    assert result.output.index("5 Feb 2025") < result.output.index("31 Dic 2024")


def test_machine_unknown(invoke):
    """Test an unknown machine is reported without failing."""
    result = invoke("machine", "Fresadora")

    assert result.exit_code == 0
    assert "No records found for machine 'Fresadora'" in result.output


def test_period_breakdown_ignores_filters(invoke):
    """Test the period command breaks down one month."""
    result = invoke("period", "2025", "3")

    assert result.exit_code == 0
    assert "2 issues" in result.output
    assert "Preventivo" in result.output


def test_view_records(invoke):
    """Test the record listing."""
    result = invoke("view", "--maintenance-type", "Preventivo")

    assert result.exit_code == 0
    assert "Found 2 record(s)" in result.output
    assert "Banda de transmision" in result.output


def test_view_verbose(invoke):
    """Test verbose listing shows every field."""
    result = invoke("view", "--verbose", "--limit", "1")

    assert result.exit_code == 0
    assert "Authorizer: Ana Lopez" in result.output
    assert "Warehouse clerk: Pedro Gomez" in result.output


def test_filters_command(invoke):
    """Test available filter values are listed."""
    result = invoke("filters")

    assert result.exit_code == 0
    assert "2024" in result.output
    assert "Estampado" in result.output


def test_import_append_with_output(invoke, fixtures_dir, tmp_path):
    """Test appending an import and writing the merged ledger."""
    output = tmp_path / "merged.csv"
    result = invoke("import", str(fixtures_dir / "alias_import.csv"), "--append", "--output", str(output))

    assert result.exit_code == 0
    assert "Imported 2 records successfully." in result.output
    assert "Total records: 8" in result.output
    assert output.exists()

    merged = invoke("summary", data=output)
    assert "Q 9,291.17" in merged.output


def test_import_replace_without_data(invoke, fixtures_dir):
    """Test a replace import does not need a loaded ledger."""
    result = invoke("import", str(fixtures_dir / "alias_import.csv"), data=None)

    assert result.exit_code == 0
    assert "Total records: 2" in result.output


def test_import_unsupported_file(invoke, fixtures_dir):
    """Test unsupported imports fail with a readable message."""
    result = invoke("import", str(fixtures_dir / "notes.txt"))

    assert result.exit_code == 1
    assert "Unsupported file format" in result.output


def test_export(invoke, tmp_path):
    """Test exporting filtered records to a dated file."""
    result = invoke(
        "export", "--scope", "filtered", "--output-dir", str(tmp_path), "--department", "Produccion"
    )

    assert result.exit_code == 0
    assert "Exported 3 record(s)" in result.output
    files = list(tmp_path.glob("presupuestos_filtered_*.csv"))
    assert len(files) == 1


def test_export_excel_all(invoke, tmp_path):
    """Test exporting every record to Excel."""
    result = invoke("export", "--format", "excel", "--scope", "all", "--output-dir", str(tmp_path))

    assert result.exit_code == 0
    assert "Exported 6 record(s)" in result.output
    assert len(list(tmp_path.glob("presupuestos_all_*.xlsx"))) == 1


def test_db_path_option_persists_lines(cli_runner, sample_ledger, tmp_path):
    """Test production lines persist in the SQLite database between runs."""
    db_path = str(tmp_path / "costtrack.db")

    saved = cli_runner.invoke(cli, ["--db-path", db_path, "lines", "set", "Torno 1"])
    assert saved.exit_code == 0

    listed = cli_runner.invoke(cli, ["--db-path", db_path, "lines", "list"])
    assert "Torno 1" in listed.output


def test_import_replace_ignores_unreadable_data(invoke, fixtures_dir):
    """Test a replace import does not read the --data ledger."""
    result = invoke("import", str(fixtures_dir / "alias_import.csv"), data=fixtures_dir / "notes.txt")

    assert result.exit_code == 0
    assert "Total records: 2" in result.output
    assert "Not saved; use --output to keep the result." in result.output


def test_import_corrupt_workbook(invoke, tmp_path):
    """Test a corrupt workbook is reported as an error, not a traceback."""
    path = tmp_path / "broken.xlsx"
    path.write_text("not a workbook", encoding="utf-8")

    result = invoke("import", str(path), data=None)

    assert result.exit_code == 1
    assert "Error: Error importing file" in result.output
