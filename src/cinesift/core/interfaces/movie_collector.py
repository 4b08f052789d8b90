"""Movie collector interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..models import MovieSummary


class IMovieCollector(ABC):
    """Interface for gathering candidate movies across search terms."""

    @abstractmethod
    async def collect(
        self, terms: Optional[Sequence[str]] = None, max_pages: Optional[int] = None
    ) -> List[MovieSummary]:
        """Collect unique movie summaries for the search terms.

        Args:
            terms: Search terms. If None, uses the configured terms.
            max_pages: Page cap per term. If None, uses the configured cap.

        Returns:
            Summaries deduplicated by IMDb ID in first-seen order.
        """
        pass

    @abstractmethod
    def limit_for_details(self, summaries: Sequence[MovieSummary]) -> List[MovieSummary]:
        """Cap summaries to the number of detail lookups allowed per refresh.

        Args:
            summaries: Collected summaries.

        Returns:
            Leading summaries up to the configured cap.
        """
        pass
