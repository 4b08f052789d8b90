"""Movie catalog interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from ..models import CatalogResult, FilterCriteria, MovieDetail


class IMovieCatalog(ABC):
    """Interface for loading and querying movies."""

    @abstractmethod
    async def load_movies(
        self, refresh: bool = False, terms: Optional[Sequence[str]] = None
    ) -> Tuple[List[MovieDetail], bool]:
        """Load movie details from the cache or the network.

        Args:
            refresh: Ignore the cached batch and fetch fresh data.
            terms: Search terms overriding the configured ones.

        Returns:
            Loaded details and whether they came from the cache.
        """
        pass

    @abstractmethod
    async def find_movies(
        self,
        criteria: FilterCriteria,
        refresh: bool = False,
        terms: Optional[Sequence[str]] = None,
    ) -> CatalogResult:
        """Load movies and apply the criteria.

        Args:
            criteria: Filter criteria.
            refresh: Ignore the cached batch and fetch fresh data.
            terms: Search terms overriding the configured ones.

        Returns:
            Filtered, sorted and classified result.

        Raises:
            CatalogError: If processing fails unexpectedly.
        """
        pass

    @abstractmethod
    async def validate_prerequisites(self) -> List[str]:
        """Validate that all prerequisites are met.

        Returns:
            List of validation errors (empty if all valid).
        """
        pass
