"""Movie collector service implementation."""

from typing import List, Optional, Sequence

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ..interfaces import IMovieCollector, IOMDbService
from ..models import MovieSummary


class MovieCollector(IMovieCollector, LoggerMixin):
    """Gathers a broad pool of candidate movies from paginated searches.

    Pages are requested one at a time, term after term, to stay within
    OMDb's rate limits. A short page ends a term, and so does an empty
    page, which is what a failed request degrades to.
    """

    def __init__(self, config: Config, omdb_service: IOMDbService) -> None:
        """Initialize movie collector.

        Args:
            config: Application configuration.
            omdb_service: OMDb service.
        """
        self._collector_config = config.collector
        self._omdb_service = omdb_service

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
        search_terms = list(terms) if terms is not None else self._collector_config.search_terms
        page_cap = max_pages if max_pages is not None else self._collector_config.max_pages_per_term
        page_size = self._collector_config.page_size

        movies: List[MovieSummary] = []
        total_requests = 0

        for term in search_terms:
            page = 1
            while page <= page_cap:
                total_requests += 1
                results = await self._omdb_service.search(term, page)
                movies.extend(results)

                if len(results) < page_size:
                    break
                page += 1

        unique_movies = self._deduplicate(movies)
        self.logger.info(
            f"Total unique movie IDs found: {len(unique_movies)} "
            f"({total_requests} search requests, {len(search_terms)} terms)"
        )
        return unique_movies

    def limit_for_details(self, summaries: Sequence[MovieSummary]) -> List[MovieSummary]:
        """Cap summaries to the number of detail lookups allowed per refresh.

        Args:
            summaries: Collected summaries.

        Returns:
            Leading summaries up to the configured cap.
        """
        return list(summaries[: self._collector_config.max_details_to_fetch])

    @staticmethod
    def _deduplicate(movies: Sequence[MovieSummary]) -> List[MovieSummary]:
        seen = set()
        unique = []
        for movie in movies:
            if movie.imdb_id in seen:
                continue
            seen.add(movie.imdb_id)
            unique.append(movie)
        return unique
