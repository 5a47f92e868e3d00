"""Domain model entities for costtrack.

These are pure data classes describing a warehouse issue ledger,
independent of the file format the ledger was read from.
"""

from dataclasses import dataclass, fields
from datetime import date
from enum import Enum


@dataclass(frozen=True)
class Record:
    """One warehouse expense-issue event."""

    id: int
    issue_number: str
    date: date
    date_raw: str
    day: int
    month: int
    week_number: int
    item_code: str = ""
    item_description: str = ""
    quantity: float = 0.0
    unit_cost: float = 0.0
    issued_value: float = 0.0
    authorizer: str = ""
    supervisor: str = ""
    department: str = ""
    machine: str = ""
    section: str = ""
    market: str = ""
    comment: str = ""
    warehouse_clerk: str = ""
    maintenance_type: str = ""

    @property
    def year(self) -> int:
        return self.date.year


RECORD_FIELDS = frozenset(f.name for f in fields(Record))


@dataclass(frozen=True)
class FilterState:
    """Active filter selection; an empty string leaves a field unconstrained."""

    year: str = ""
    month: str = ""
    department: str = ""
    section: str = ""
    maintenance_type: str = ""

    def is_empty(self) -> bool:
        return not any(
            (self.year, self.month, self.department, self.section, self.maintenance_type)
        )

    def matches(self, record: Record) -> bool:
        """Check whether a record satisfies every non-empty field."""
        if self.year and str(record.date.year) != self.year:
            return False
        if self.month and str(record.month) != self.month:
            return False
        if self.department and record.department != self.department:
            return False
        if self.section and record.section != self.section:
            return False
        if self.maintenance_type and record.maintenance_type != self.maintenance_type:
            return False
        return True


class ImportMode(str, Enum):
    """How imported records combine with the loaded ledger."""

    REPLACE = "replace"
    APPEND = "append"


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a successful import."""

    count: int
    message: str
