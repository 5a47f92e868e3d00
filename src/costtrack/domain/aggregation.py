"""Aggregation domain service: KPIs, groupings, time series and hierarchies."""

from collections import defaultdict
from typing import Any, Optional, Sequence

from costtrack.domain.dataset import DatasetStore
from costtrack.domain.entities import RECORD_FIELDS, Record
from costtrack.domain.errors import ValidationError, unknown_record_field
from costtrack.domain.production_lines import ProductionLineService

UNSPECIFIED = "Sin especificar"
NO_DEPARTMENT = "Sin Departamento"
NO_SECTION = "Sin Sección"
NO_MACHINE = "Sin Máquina"
NO_TYPE = "Sin Tipo"


def _total(records: Sequence[Record]) -> float:
    return sum((record.issued_value for record in records), 0.0)


def _sorted_by_total(results: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return sorted(results, key=lambda item: item["total"], reverse=True)


def week_year(record: Record) -> int:
    """Year a record's week number belongs to.

    This is the ISO week-year, not the calendar year of the date. ISO week 1
    can start in late December and weeks 52/53 can run into early January;
    those weeks count toward the neighbouring year, so 31/12/2024 falls in
    2025-W01 instead of forming a separate 2024-W01 bucket. The week comes
    from the record's week number, which may be supplied by the ledger.
    """
    year = record.date.year
    if record.week_number == 1 and record.date.month == 12:
        return year + 1
    if record.week_number >= 52 and record.date.month == 1:
        return year - 1
    return year


class AggregationService:
    """Service computing every dashboard query from the dataset store.

    Queries read the store's filtered records unless noted otherwise and are
    recomputed on every call.
    """

    def __init__(
        self,
        store: DatasetStore,
        production_lines: Optional[ProductionLineService] = None,
    ):
        """Initialize aggregation service.

        Args:
            store: Dataset store to read records from
            production_lines: Production line configuration; when omitted no
                machine counts as a production line
        """
        self.store = store
        self.production_lines = production_lines

    def _production_line_names(self) -> set[str]:
        if self.production_lines is None:
            return set()
        return set(self.production_lines.get_production_lines())

    def calculate_kpis(self, records: Optional[Sequence[Record]] = None) -> dict[str, Any]:
        """Calculate headline KPIs.

        Args:
            records: Records to summarize (defaults to the filtered records)

        Returns:
            Dict with total, average, count, top_machine and top_machine_value
        """
        dataset = self.store.filtered_data if records is None else list(records)
        if not dataset:
            return {
                "total": 0.0,
                "average": 0.0,
                "count": 0,
                "top_machine": "-",
                "top_machine_value": 0.0,
            }

        total = _total(dataset)

        machine_spending: dict[str, float] = {}
        for record in dataset:
            if record.machine:
                machine_spending[record.machine] = (
                    machine_spending.get(record.machine, 0.0) + record.issued_value
                )

        # max() keeps the first-seen machine on ties
        top_machine = None
        if machine_spending:
            top_machine = max(machine_spending.items(), key=lambda item: item[1])

        return {
            "total": total,
            "average": total / len(dataset),
            "count": len(dataset),
            "top_machine": top_machine[0] if top_machine else "-",
            "top_machine_value": top_machine[1] if top_machine else 0.0,
        }

    def group_by(
        self, field: str, records: Optional[Sequence[Record]] = None
    ) -> dict[str, list[Record]]:
        """Group records by a field, in first-occurrence order.

        Records with an empty value are grouped under "Sin especificar".

        Raises:
            ValidationError: If field is not a Record attribute
        """
        if field not in RECORD_FIELDS:
            raise ValidationError(unknown_record_field(field))

        dataset = self.store.filtered_data if records is None else records
        grouped: dict[str, list[Record]] = {}
        for record in dataset:
            value = getattr(record, field)
            key = str(value) if value else UNSPECIFIED
            grouped.setdefault(key, []).append(record)
        return grouped

    def get_department_aggregation(self) -> list[dict[str, Any]]:
        """Totals per department, largest first."""
        return _sorted_by_total(
            [
                {"department": department, "total": _total(items), "count": len(items)}
                for department, items in self.group_by("department").items()
            ]
        )

    def get_maintenance_type_aggregation(self) -> list[dict[str, Any]]:
        """Totals per maintenance type, largest first."""
        return _sorted_by_total(
            [
                {"type": maintenance_type, "total": _total(items), "count": len(items)}
                for maintenance_type, items in self.group_by("maintenance_type").items()
            ]
        )

    def get_top_machines(self, limit: int = 10) -> list[dict[str, Any]]:
        """Machines with the highest spending.

        Department and section come from each machine's first record.
        """
        machines = [
            {
                "machine": machine,
                "total": _total(items),
                "count": len(items),
                "department": items[0].department,
                "section": items[0].section,
            }
            for machine, items in self.group_by("machine").items()
        ]
        return _sorted_by_total(machines)[: max(limit, 0)]

    def get_production_line_aggregation(self) -> list[dict[str, Any]]:
        """Totals per production line machine, largest first."""
        production_lines = self._production_line_names()
        machines = [
            {
                "machine": machine,
                "total": _total(items),
                "count": len(items),
                "department": items[0].department,
                "sections": len({item.section for item in items}),
            }
            for machine, items in self.group_by("machine").items()
            if machine in production_lines
        ]
        return _sorted_by_total(machines)

    def get_monthly_time_series(self) -> list[dict[str, Any]]:
        """Spending per calendar month, oldest first."""
        monthly: dict[str, dict[str, Any]] = {}
        for record in self.store.filtered_data:
            key = f"{record.date.year}-{record.month:02d}"
            if key not in monthly:
                monthly[key] = {
                    "period": key,
                    "year": record.date.year,
                    "month": record.month,
                    "total": 0.0,
                    "count": 0,
                }
            monthly[key]["total"] += record.issued_value
            monthly[key]["count"] += 1

        return [monthly[key] for key in sorted(monthly)]

    def get_weekly_time_series(self) -> list[dict[str, Any]]:
        """Spending per ISO week, oldest first."""
        weekly: dict[str, dict[str, Any]] = {}
        for record in self.store.filtered_data:
            year = week_year(record)
            key = f"{year}-W{record.week_number:02d}"
            if key not in weekly:
                weekly[key] = {
                    "period": key,
                    "year": year,
                    "week": record.week_number,
                    "total": 0.0,
                    "count": 0,
                }
            weekly[key]["total"] += record.issued_value
            weekly[key]["count"] += 1

        return [weekly[key] for key in sorted(weekly)]

    def get_hierarchy(self) -> dict[str, dict[str, Any]]:
        """Build the department > section > machine breakdown.

        Returns:
            Mapping of department to {"total", "sections"}; each section maps
            to {"total", "machines"} and each machine to {"total", "records"}
        """
        hierarchy: dict[str, dict[str, Any]] = {}

        for record in self.store.filtered_data:
            department = record.department or NO_DEPARTMENT
            section = record.section or NO_SECTION
            machine = record.machine or NO_MACHINE

            dept_node = hierarchy.setdefault(department, {"total": 0.0, "sections": {}})
            section_node = dept_node["sections"].setdefault(
                section, {"total": 0.0, "machines": {}}
            )
            machine_node = section_node["machines"].setdefault(
                machine, {"total": 0.0, "records": []}
            )

            machine_node["records"].append(record)
            machine_node["total"] += record.issued_value
            section_node["total"] += record.issued_value
            dept_node["total"] += record.issued_value

        return hierarchy

    def get_production_line_hierarchy(self) -> dict[str, dict[str, Any]]:
        """Build the machine > section breakdown for production lines only.

        Returns:
            Mapping of machine to {"total", "department", "sections"}; each
            section maps to {"total", "records"}. Machines outside the
            production line set are left out.
        """
        production_lines = self._production_line_names()
        hierarchy: dict[str, dict[str, Any]] = {}
        if not production_lines:
            return hierarchy

        for record in self.store.filtered_data:
            machine = record.machine or NO_MACHINE
            if machine not in production_lines:
                continue

            section = record.section or NO_SECTION
            machine_node = hierarchy.setdefault(
                machine,
                {
                    "total": 0.0,
                    "department": record.department or NO_DEPARTMENT,
                    "sections": {},
                },
            )
            section_node = machine_node["sections"].setdefault(
                section, {"total": 0.0, "records": []}
            )

            section_node["records"].append(record)
            section_node["total"] += record.issued_value
            machine_node["total"] += record.issued_value

        return hierarchy

    def get_machine_data(self, name: str) -> Optional[dict[str, Any]]:
        """Detail for one machine, or None if it has no filtered records."""
        records = [record for record in self.store.filtered_data if record.machine == name]
        if not records:
            return None

        return {
            "name": name,
            "department": records[0].department,
            "section": records[0].section,
            "total": _total(records),
            "count": len(records),
            "records": sorted(records, key=lambda record: record.date, reverse=True),
        }

    def get_period_breakdown(self, year: int, month: int) -> dict[str, Any]:
        """Break down one month of spending by department and type.

        Unlike the other queries this reads the raw records, so the active
        filter does not narrow the period.
        """
        period_records = [
            record
            for record in self.store.raw_data
            if record.date.year == year and record.month == month
        ]

        by_department: dict[str, float] = defaultdict(float)
        by_type: dict[str, float] = defaultdict(float)
        for record in period_records:
            by_department[record.department or NO_DEPARTMENT] += record.issued_value
            by_type[record.maintenance_type or NO_TYPE] += record.issued_value

        return {
            "total": _total(period_records),
            "count": len(period_records),
            "by_department": dict(by_department),
            "by_type": dict(by_type),
        }
