"""Key-value store interface."""

from abc import ABC, abstractmethod
from typing import List, Optional


class IKeyValueStore(ABC):
    """Interface for a persistent text key-value store."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get the text stored under a key.

        Args:
            key: Entry key.

        Returns:
            Stored text or None if the key is absent.
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store text under a key, replacing any previous value.

        Args:
            key: Entry key.
            value: Text to store.

        Raises:
            OSError: If the store cannot be written.
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove a key. Missing keys are ignored.

        Args:
            key: Entry key.
        """
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """List stored keys."""
        pass
