"""Dataset store holding the loaded ledger and its filtered view."""

import logging
from pathlib import Path
from typing import Optional

from costtrack.domain.entities import (
    RECORD_FIELDS,
    FilterState,
    ImportMode,
    ImportResult,
    Record,
)
from costtrack.domain.errors import (
    ImportFileError,
    LoadError,
    TabularFormatError,
    ValidationError,
    imported_records,
    unknown_record_field,
)
from costtrack.domain.normalizer import normalize_rows
from costtrack.domain.tabular import read_rows

logger = logging.getLogger(__name__)


class DatasetStore:
    """Owner of the raw ledger records and the currently filtered subset.

    ``filtered_data`` is always derived from ``raw_data`` and the active
    filter; it is never edited on its own.
    """

    def __init__(self, records: Optional[list[Record]] = None):
        """Initialize the store.

        Args:
            records: Optional already-normalized records to start with
        """
        self._raw_data: list[Record] = list(records or [])
        self._filtered_data: list[Record] = list(self._raw_data)
        self._filters = FilterState()

    @property
    def raw_data(self) -> list[Record]:
        return list(self._raw_data)

    @property
    def filtered_data(self) -> list[Record]:
        return list(self._filtered_data)

    @property
    def filters(self) -> FilterState:
        return self._filters

    def load(self, path: str | Path) -> list[Record]:
        """Load a ledger file, replacing everything currently held.

        Args:
            path: CSV or Excel file

        Returns:
            Loaded records

        Raises:
            LoadError: If the file cannot be read or parsed
        """
        try:
            rows = read_rows(path)
        except TabularFormatError as e:
            raise LoadError(f"Error loading data: {e}")

        records = normalize_rows(rows, base_offset=0)

        self._raw_data = records
        self._filters = FilterState()
        self._filtered_data = list(records)
        logger.info("Loaded %d records from %s", len(records), path)
        return self.raw_data

    def import_file(
        self, path: str | Path, mode: ImportMode = ImportMode.REPLACE
    ) -> ImportResult:
        """Import records from a file.

        The filtered view is reset to the full raw data afterwards; callers
        must reapply their filter.

        Args:
            path: CSV or Excel file
            mode: Replace the current records or append to them

        Returns:
            ImportResult with the number of records imported

        Raises:
            ImportFileError: If the file cannot be read or parsed
        """
        mode = ImportMode(mode)
        try:
            rows = read_rows(path)
        except TabularFormatError as e:
            raise ImportFileError(f"Error importing file: {e}")

        base_offset = len(self._raw_data)
        imported = normalize_rows(rows, base_offset=base_offset)

        if mode == ImportMode.REPLACE:
            self._raw_data = imported
        else:
            self._raw_data = self._raw_data + imported
        self._filters = FilterState()
        self._filtered_data = list(self._raw_data)

        logger.info(
            "Imported %d records from %s (%s), %d total",
            len(imported),
            path,
            mode.value,
            len(self._raw_data),
        )
        return ImportResult(count=len(imported), message=imported_records(len(imported)))

    def apply_filter(self, state: FilterState) -> list[Record]:
        """Recompute the filtered view for a filter selection.

        Args:
            state: Filter to apply

        Returns:
            Matching records, in raw data order
        """
        self._filters = state
        self._filtered_data = [record for record in self._raw_data if state.matches(record)]
        return self.filtered_data

    def reset_filter(self) -> list[Record]:
        """Clear the filter and restore the full raw data view."""
        return self.apply_filter(FilterState())

    def get_unique_values(self, field: str) -> list[str]:
        """Get sorted distinct non-empty values of a record field.

        Raises:
            ValidationError: If field is not a Record attribute
        """
        if field not in RECORD_FIELDS:
            raise ValidationError(unknown_record_field(field))

        values = {getattr(record, field) for record in self._raw_data}
        return sorted(str(value) for value in values if value)

    def get_unique_years(self) -> list[int]:
        """Get sorted distinct calendar years across the raw data."""
        return sorted({record.date.year for record in self._raw_data})
