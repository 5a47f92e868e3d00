"""Abstract configuration store interface."""

from abc import ABC, abstractmethod


class ConfigStore(ABC):
    """Named slots holding lists of strings, kept apart from ledger data."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the backing store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the backing store."""
        pass

    @abstractmethod
    def get_list(self, key: str) -> list[str]:
        """Get the list stored under key, or an empty list if unset."""
        pass

    @abstractmethod
    def set_list(self, key: str, values: list[str]) -> None:
        """Replace the list stored under key."""
        pass


class MemoryConfigStore(ConfigStore):
    """Process-local ConfigStore, used in tests and one-off runs."""

    def __init__(self):
        self._slots: dict[str, list[str]] = {}

    def connect(self) -> None:
        pass

    def disconnect(self) -> None:
        pass

    def get_list(self, key: str) -> list[str]:
        return list(self._slots.get(key, []))

    def set_list(self, key: str, values: list[str]) -> None:
        self._slots[key] = list(values)
