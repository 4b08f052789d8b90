"""OMDb service interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..models import MovieDetail, MovieSummary


class IOMDbService(ABC):
    """Interface for OMDb services."""

    @abstractmethod
    async def search(self, term: str, page: int = 1) -> List[MovieSummary]:
        """Search movies by term.

        Args:
            term: Search term.
            page: 1-based result page.

        Returns:
            Movie summaries on the page, empty on any failure.
        """
        pass

    @abstractmethod
    async def fetch_detail(self, imdb_id: str) -> Optional[MovieDetail]:
        """Fetch full movie details.

        Args:
            imdb_id: IMDb movie ID.

        Returns:
            Movie details or None if the lookup failed.
        """
        pass

    @abstractmethod
    async def fetch_details(self, imdb_ids: Sequence[str]) -> List[Optional[MovieDetail]]:
        """Fetch details for many movies as one concurrent batch.

        Args:
            imdb_ids: IMDb movie IDs.

        Returns:
            Details in the same order as the IDs, None for failed lookups.
        """
        pass
