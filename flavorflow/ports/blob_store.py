from abc import ABC, abstractmethod
from typing import Optional

class StorageError(Exception):
    """Persistence is unavailable or refused the operation."""

class BlobStorePort(ABC):
    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """Return the stored value for key, or None when absent."""
        pass

    @abstractmethod
    def save(self, key: str, value: str) -> None:
        """Overwrite the value stored under key."""
        pass
