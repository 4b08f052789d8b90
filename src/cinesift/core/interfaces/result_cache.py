"""Result cache interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..models import MovieDetail


class IResultCache(ABC):
    """Interface for the single-slot movie detail cache."""

    @property
    @abstractmethod
    def key(self) -> str:
        """Key the cache entry is stored under."""
        pass

    @abstractmethod
    def for_terms(self, terms: Sequence[str]) -> "IResultCache":
        """Get a cache for a different set of search terms.

        Args:
            terms: Search terms.

        Returns:
            Cache sharing the same store.
        """
        pass

    @abstractmethod
    def load(self) -> Optional[List[MovieDetail]]:
        """Load the cached detail batch.

        Returns:
            Cached details, or None if absent or corrupted. A corrupted
            entry is removed.
        """
        pass

    @abstractmethod
    def store(self, details: Sequence[Optional[MovieDetail]]) -> bool:
        """Replace the cached batch if enough details were fetched.

        Args:
            details: Fetched details, None for failed lookups.

        Returns:
            True if the batch was written.
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove the cached batch."""
        pass
