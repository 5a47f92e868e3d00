"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class TabularFormatError(DomainError):
    """A source file could not be read as a table with a header row."""


class LoadError(DomainError):
    """The ledger could not be loaded; the previous data is kept."""


class ImportFileError(DomainError):
    """An import failed; the previous data is kept."""


def unsupported_extension(extension: str) -> str:
    """Return message for a file type we cannot read."""
    shown = extension or "(none)"
    return f"Unsupported file format '{shown}'. Use CSV or Excel."


def unknown_record_field(field: str) -> str:
    """Return message for a field name that is not a Record attribute."""
    return f"Unknown record field '{field}'"


def imported_records(count: int) -> str:
    """Return message for a successful import."""
    return f"Imported {count} record{'s' if count != 1 else ''} successfully."
