"""Record normalization from raw ledger rows."""

import logging
import math
from typing import Any, Mapping, Optional, Sequence

from costtrack.domain.entities import Record
from costtrack.utils.amount_parser import parse_currency
from costtrack.utils.date_parser import get_week_number, parse_date

logger = logging.getLogger(__name__)

# Canonical column first, then the aliases used by alternate import files
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "issue_number": ("No. Salida", "No Salida"),
    "date": ("Fecha Contabilizacion", "Fecha"),
    "day": ("Dia",),
    "week_number": ("Semana",),
    "month": ("Mes",),
    "item_code": ("Articulo",),
    "item_description": ("Descripcion",),
    "quantity": ("Cantidad",),
    "unit_cost": ("Costo Articulo", "Costo"),
    "issued_value": ("Valor Salida", "Valor"),
    "authorizer": ("Nombre Autorizador", "Autorizador"),
    "supervisor": ("Encargado",),
    "department": ("Departamento",),
    "machine": ("Maquinaria",),
    "section": ("Seccion",),
    "market": ("Mercado",),
    "comment": ("Comentario",),
    "warehouse_clerk": ("Bodeguero",),
    "maintenance_type": ("Tipo Mantenimiento", "Tipo"),
}

TEXT_FIELDS = (
    "item_code",
    "item_description",
    "authorizer",
    "supervisor",
    "department",
    "machine",
    "section",
    "market",
    "comment",
    "warehouse_clerk",
    "maintenance_type",
)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and value != value:
        return True
    return isinstance(value, str) and not value.strip()


def lookup(row: Mapping[str, Any], field: str) -> Any:
    """Return the first non-blank value among a field's column names."""
    for column in COLUMN_ALIASES[field]:
        value = row.get(column)
        if not _is_blank(value):
            return value
    return None


def _to_text(value: Any) -> str:
    if _is_blank(value):
        return ""
    return str(value).strip()


def _to_int(value: Any) -> int:
    """Convert a cell to int, returning 0 if missing/invalid."""
    if _is_blank(value):
        return 0
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        # "inf" and "1e400" overflow, "nan" is a ValueError
        return 0


def _to_float(value: Any) -> float:
    """Convert a cell to float, returning 0.0 if missing/invalid."""
    if _is_blank(value):
        return 0.0
    try:
        result = float(value) if isinstance(value, (int, float)) else float(str(value).strip())
    except (ValueError, OverflowError):
        return 0.0
    return result if math.isfinite(result) else 0.0


def normalize_row(
    row: Mapping[str, Any], index: int, base_offset: int = 0
) -> Optional[Record]:
    """Convert a raw ledger row into a Record.

    Day, month and week number are derived from the parsed date when the
    row leaves them blank or non-positive; positive supplied values are kept.

    Args:
        row: Mapping of column name to cell value
        index: Position of the row in its source
        base_offset: Added to index to form the record ID

    Returns:
        Record, or None if the date does not parse or the issued value
        is not positive
    """
    date_raw = _to_text(lookup(row, "date"))
    parsed_date = parse_date(date_raw)
    if parsed_date is None:
        return None

    issued_value = parse_currency(lookup(row, "issued_value"))
    if issued_value <= 0:
        return None

    day = _to_int(lookup(row, "day"))
    month = _to_int(lookup(row, "month"))
    week_number = _to_int(lookup(row, "week_number"))
    if day <= 0:
        day = parsed_date.day
    if month <= 0:
        month = parsed_date.month
    if week_number <= 0:
        week_number = get_week_number(parsed_date)

    text_values = {field: _to_text(lookup(row, field)) for field in TEXT_FIELDS}

    return Record(
        id=base_offset + index,
        issue_number=_to_text(lookup(row, "issue_number")),
        date=parsed_date,
        date_raw=date_raw,
        day=day,
        month=month,
        week_number=week_number,
        quantity=_to_float(lookup(row, "quantity")),
        unit_cost=parse_currency(lookup(row, "unit_cost")),
        issued_value=issued_value,
        **text_values,
    )


def normalize_rows(
    rows: Sequence[Mapping[str, Any]], base_offset: int = 0
) -> list[Record]:
    """Normalize rows, dropping those that fail the retention rules."""
    records = []
    for index, row in enumerate(rows):
        record = normalize_row(row, index, base_offset)
        if record is not None:
            records.append(record)

    dropped = len(rows) - len(records)
    if dropped:
        logger.debug("Dropped %d of %d rows without a valid date or value", dropped, len(rows))
    return records
