"""Movie catalog service implementation."""

from typing import List, Optional, Sequence, Tuple

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import CatalogError
from ..interfaces import IMovieCatalog, IMovieCollector, IOMDbService, IResultCache
from ..models import CatalogResult, FilterCriteria, MovieDetail, ResultStatus
from .movie_filter import apply_criteria, count_genres, group_by_age_category


class MovieCatalog(IMovieCatalog, LoggerMixin):
    """Movie catalog service implementation.

    Implements the load-and-filter flow:
    - Serve the cached detail batch when present and parseable
    - Otherwise collect candidate IDs across the search terms
    - Fetch details for the capped ID set as one concurrent batch
    - Cache the batch if enough lookups succeeded
    - Filter, sort and classify with the requested criteria
    """

    def __init__(
        self,
        config: Config,
        omdb_service: IOMDbService,
        movie_collector: IMovieCollector,
        result_cache: IResultCache,
    ):
        """Initialize movie catalog.

        Args:
            config: Application configuration.
            omdb_service: OMDb service.
            movie_collector: Movie collector service.
            result_cache: Result cache.
        """
        self._config = config
        self._omdb_service = omdb_service
        self._movie_collector = movie_collector
        self._result_cache = result_cache

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
        cache = self._cache_for(terms)

        if cache is not None and not refresh:
            cached = cache.load()
            if cached is not None:
                return cached, True

        summaries = await self._movie_collector.collect(terms)
        to_detail = self._movie_collector.limit_for_details(summaries)

        details = await self._omdb_service.fetch_details([movie.imdb_id for movie in to_detail])

        if cache is not None:
            cache.store(details)

        return [detail for detail in details if detail is not None], False

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
        try:
            details, from_cache = await self.load_movies(refresh=refresh, terms=terms)
            movies = apply_criteria(details, criteria)
        except Exception as e:
            error_msg = f"Catalog query failed: {e}"
            self.logger.error(error_msg)
            raise CatalogError(error_msg) from e

        if not details:
            status = ResultStatus.NO_SOURCE_DATA
        elif not movies:
            status = ResultStatus.NO_MATCHES
        else:
            status = ResultStatus.OK

        self.logger.info(f"{len(movies)} of {len(details)} movies match the criteria")

        return CatalogResult(
            movies=movies,
            source_count=len(details),
            from_cache=from_cache,
            status=status,
            age_groups=group_by_age_category(movies, criteria.sensitive_keywords),
            genre_counts=count_genres(movies),
        )

    async def validate_prerequisites(self) -> List[str]:
        """Validate that all prerequisites are met.

        Returns:
            List of validation errors (empty if all valid).
        """
        errors = []

        api_key = self._config.omdb.api_key
        if not api_key or api_key.startswith("$"):
            errors.append("OMDb API key is not configured (set OMDB_API_KEY)")

        if self._config.cache.enabled:
            cache_dir = self._config.cache.path.parent
            if cache_dir.exists() and not cache_dir.is_dir():
                errors.append(f"Cache location is not a directory: {cache_dir}")

        return errors

    def _cache_for(self, terms: Optional[Sequence[str]]) -> Optional[IResultCache]:
        """Pick the cache for a query.

        Custom search terms only get a cache of their own when entries are
        keyed by query; otherwise they would overwrite the default batch.
        """
        if terms is None:
            return self._result_cache
        if self._config.cache.key_by_query:
            return self._result_cache.for_terms(terms)
        return None
