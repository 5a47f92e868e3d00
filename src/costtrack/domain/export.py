"""Export of records back into the ledger's tabular format."""

import csv
import logging
from datetime import date
from pathlib import Path
from typing import Any, Optional, Sequence

import pandas as pd

from costtrack.domain.dataset import DatasetStore
from costtrack.domain.entities import Record
from costtrack.domain.errors import ValidationError
from costtrack.utils.amount_parser import format_currency_for_export
from costtrack.utils.date_parser import format_date_for_export

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = (
    "No. Salida",
    "Fecha Contabilizacion",
    "Dia",
    "Semana",
    "Mes",
    "Articulo",
    "Descripcion",
    "Cantidad",
    "Costo Articulo",
    "Valor Salida",
    "Nombre Autorizador",
    "Encargado",
    "Departamento",
    "Maquinaria",
    "Seccion",
    "Mercado",
    "Comentario",
    "Bodeguero",
    "Tipo Mantenimiento",
)

EXPORT_SCOPES = ("filtered", "all")
EXPORT_FORMATS = {"csv": "csv", "excel": "xlsx", "xlsx": "xlsx"}
EXCEL_SHEET_NAME = "Presupuestos"


def to_export_rows(records: Sequence[Record]) -> list[dict[str, Any]]:
    """Map records onto the canonical ledger columns."""
    return [
        {
            "No. Salida": record.issue_number,
            "Fecha Contabilizacion": format_date_for_export(record.date),
            "Dia": record.day,
            "Semana": record.week_number,
            "Mes": record.month,
            "Articulo": record.item_code,
            "Descripcion": record.item_description,
            "Cantidad": record.quantity,
            "Costo Articulo": format_currency_for_export(record.unit_cost),
            "Valor Salida": format_currency_for_export(record.issued_value),
            "Nombre Autorizador": record.authorizer,
            "Encargado": record.supervisor,
            "Departamento": record.department,
            "Maquinaria": record.machine,
            "Seccion": record.section,
            "Mercado": record.market,
            "Comentario": record.comment,
            "Bodeguero": record.warehouse_clerk,
            "Tipo Mantenimiento": record.maintenance_type,
        }
        for record in records
    ]


def write_csv(records: Sequence[Record], path: str | Path) -> Path:
    """Write records as a comma-delimited file with a header row."""
    target = Path(path)
    with open(target, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=EXPORT_COLUMNS)
        writer.writeheader()
        writer.writerows(to_export_rows(records))
    return target


def write_excel(records: Sequence[Record], path: str | Path) -> Path:
    """Write records to a single-sheet .xlsx workbook."""
    target = Path(path)
    df = pd.DataFrame(to_export_rows(records), columns=list(EXPORT_COLUMNS))
    df.to_excel(target, sheet_name=EXCEL_SHEET_NAME, index=False, engine="openpyxl")
    return target


def export_filename(scope: str, extension: str, today: Optional[date] = None) -> str:
    """Build an export filename like ``presupuestos_filtered_2025-03-19.csv``."""
    today = today or date.today()
    return f"presupuestos_{scope}_{today.isoformat()}.{extension}"


def export_records(
    store: DatasetStore,
    directory: str | Path,
    file_format: str = "csv",
    scope: str = "filtered",
    today: Optional[date] = None,
) -> Path:
    """Export the filtered or full ledger to a dated file.

    Args:
        store: Dataset store to export from
        directory: Directory the file is written into
        file_format: "csv" or "excel"/"xlsx"
        scope: "filtered" for the current view, "all" for every record
        today: Date stamped into the filename (defaults to today)

    Returns:
        Path of the written file

    Raises:
        ValidationError: If scope or file_format is not recognized
    """
    if scope not in EXPORT_SCOPES:
        raise ValidationError(
            f"Unknown export scope '{scope}'. Supported scopes: {', '.join(EXPORT_SCOPES)}"
        )
    extension = EXPORT_FORMATS.get(file_format.lower())
    if extension is None:
        raise ValidationError(f"Unknown export format '{file_format}'. Use csv or excel.")

    records = store.raw_data if scope == "all" else store.filtered_data
    target = Path(directory) / export_filename(scope, extension, today)

    if extension == "csv":
        write_csv(records, target)
    else:
        write_excel(records, target)

    logger.info("Exported %d records to %s", len(records), target)
    return target
