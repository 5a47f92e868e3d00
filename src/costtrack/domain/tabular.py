"""Reading CSV and Excel ledgers into row mappings."""

import csv
import logging
import zipfile
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException
from xlrd import XLRDError

from costtrack.domain.errors import TabularFormatError, unsupported_extension
from costtrack.utils.date_parser import format_date_for_export

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = frozenset({".csv"})
EXCEL_EXTENSIONS = frozenset({".xlsx", ".xls"})

# pandas reads legacy .xls workbooks with xlrd and .xlsx with openpyxl
EXCEL_ENGINES = {".xlsx": "openpyxl", ".xls": "xlrd"}
EXCEL_READ_ERRORS = (
    ValueError,
    OSError,
    ImportError,
    KeyError,
    zipfile.BadZipFile,
    InvalidFileException,
    XLRDError,
)
SUPPORTED_EXTENSIONS = CSV_EXTENSIONS | EXCEL_EXTENSIONS

CSV_DELIMITERS = ",;\t|"


def file_extension(path: str | Path) -> str:
    return Path(path).suffix.lower()


def read_rows(path: str | Path) -> list[dict[str, Any]]:
    """Read a ledger file into a list of row dictionaries.

    Args:
        path: Path to a .csv, .xlsx or .xls file with a header row

    Returns:
        One dict per non-empty data row, keyed by header name

    Raises:
        TabularFormatError: If the file is missing, has an unsupported
            extension, or cannot be parsed as a table
    """
    source = Path(path)
    extension = file_extension(source)
    if extension not in SUPPORTED_EXTENSIONS:
        raise TabularFormatError(unsupported_extension(extension))

    if not source.is_file():
        raise TabularFormatError(f"File not found: {source}")

    if extension in CSV_EXTENSIONS:
        return read_csv_rows(source)
    return read_excel_rows(source)


def read_csv_rows(path: Path) -> list[dict[str, Any]]:
    """Read a delimited text file, sniffing the delimiter."""
    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            # Try to detect delimiter
            sample = f.read(4096)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=CSV_DELIMITERS).delimiter
            except csv.Error:
                delimiter = ","
            logger.debug("Reading %s with delimiter %r", path, delimiter)

            reader = csv.DictReader(f, delimiter=delimiter)
            if not reader.fieldnames:
                raise TabularFormatError(f"File has no header row: {path.name}")
            header = [name.strip() for name in reader.fieldnames]
            reader.fieldnames = header

            rows = []
            for row in reader:
                # Skip blank lines
                if all(not (value or "").strip() for key, value in row.items() if key is not None):
                    continue
                rows.append({key: value for key, value in row.items() if key is not None})
            return rows
    except (UnicodeDecodeError, csv.Error) as e:
        raise TabularFormatError(f"Could not parse CSV file {path.name}: {e}")
    except OSError as e:
        raise TabularFormatError(f"Could not read file {path.name}: {e}")


def _cell(value: Any) -> Any:
    """Convert a spreadsheet cell into a value the normalizer understands."""
    if pd.isna(value):
        return ""
    if isinstance(value, (datetime, date)):
        return format_date_for_export(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def read_excel_rows(path: Path) -> list[dict[str, Any]]:
    """Read the first sheet of a workbook."""
    engine = EXCEL_ENGINES[path.suffix.lower()]
    try:
        df = pd.read_excel(path, sheet_name=0, engine=engine, dtype=object)
    except EXCEL_READ_ERRORS as e:
        raise TabularFormatError(f"Could not parse Excel file {path.name}: {e}")

    df.rename(columns={c: str(c).strip() for c in df.columns}, inplace=True)
    df = df.dropna(how="all")

    return [
        {column: _cell(value) for column, value in row.items()}
        for row in df.to_dict(orient="records")
    ]
