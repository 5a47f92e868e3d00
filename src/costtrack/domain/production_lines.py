"""Production line configuration domain service."""

import logging

from costtrack.database.base import ConfigStore
from costtrack.domain.dataset import DatasetStore

logger = logging.getLogger(__name__)

PRODUCTION_LINES_KEY = "production_lines"


class ProductionLineService:
    """Service for the set of machines tracked as production lines.

    The set is kept in the config store, so it outlives any ledger that is
    loaded or imported into the dataset store.
    """

    def __init__(self, config_store: ConfigStore, store: DatasetStore):
        """Initialize production line service.

        Args:
            config_store: Where the production line list is persisted
            store: Dataset store supplying candidate machine names
        """
        self.config_store = config_store
        self.store = store

    def get_machines(self) -> list[str]:
        """Get every machine name in the loaded ledger, sorted."""
        return self.store.get_unique_values("machine")

    def get_production_lines(self) -> list[str]:
        """Get the saved production line machine names."""
        return self.config_store.get_list(PRODUCTION_LINES_KEY)

    def save(self, machines: list[str]) -> list[str]:
        """Replace the production line set.

        Args:
            machines: Full list of machine names to mark as production lines

        Returns:
            The saved list, without blanks or duplicates
        """
        cleaned: list[str] = []
        for machine in machines:
            name = machine.strip()
            if name and name not in cleaned:
                cleaned.append(name)

        self.config_store.set_list(PRODUCTION_LINES_KEY, cleaned)
        logger.info("Saved %d production lines", len(cleaned))
        return cleaned

    def is_production_line(self, name: str) -> bool:
        return name in self.get_production_lines()
