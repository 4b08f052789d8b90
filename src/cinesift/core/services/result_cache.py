"""Result cache service implementation."""

import json
from typing import List, Optional, Sequence

from pydantic import ValidationError

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import CacheError, fingerprint
from ..interfaces import IKeyValueStore, IResultCache
from ..models import MovieDetail


class ResultCache(IResultCache, LoggerMixin):
    """Single-slot cache holding the most recent detail batch.

    The whole batch is replaced on every successful refresh. There is no
    expiry; an entry goes away only when cleared or found corrupted.
    """

    def __init__(
        self,
        config: Config,
        store: IKeyValueStore,
        terms: Optional[Sequence[str]] = None,
    ) -> None:
        """Initialize result cache.

        Args:
            config: Application configuration.
            store: Key-value store holding the entry.
            terms: Search terms the entry belongs to. If None, uses the
                configured terms.
        """
        self._config = config
        self._cache_config = config.cache
        self._store = store
        self._terms = list(terms) if terms is not None else list(config.collector.search_terms)

    @property
    def key(self) -> str:
        """Key the cache entry is stored under."""
        if not self._cache_config.key_by_query:
            return self._cache_config.key

        collector = self._config.collector
        suffix = fingerprint(
            ",".join(self._terms),
            collector.max_pages_per_term,
            collector.max_details_to_fetch,
            collector.content_type,
        )
        return f"{self._cache_config.key}:{suffix}"

    @property
    def enabled(self) -> bool:
        """Whether caching is enabled."""
        return self._cache_config.enabled

    def for_terms(self, terms: Sequence[str]) -> "ResultCache":
        """Get a cache for a different set of search terms.

        Args:
            terms: Search terms.

        Returns:
            Cache sharing this cache's store.
        """
        return ResultCache(self._config, self._store, terms)

    def load(self) -> Optional[List[MovieDetail]]:
        """Load the cached detail batch.

        Returns:
            Cached details, or None if absent or corrupted. A corrupted
            entry is removed.
        """
        if not self.enabled:
            return None

        raw = self._store.get(self.key)
        if raw is None:
            return None

        try:
            details = self._decode(raw)
        except CacheError as e:
            self.logger.warning(f"Cache corrupted, fetching fresh data from OMDb: {e}")
            self.clear()
            return None

        self.logger.info(f"Loaded {len(details)} movie details from local cache")
        return details

    def store(self, details: Sequence[Optional[MovieDetail]]) -> bool:
        """Replace the cached batch if enough details were fetched.

        Args:
            details: Fetched details, None for failed lookups.

        Returns:
            True if the batch was written.
        """
        if not self.enabled:
            return False

        fetched = [detail for detail in details if detail is not None]
        if len(fetched) <= self._cache_config.min_viable_count:
            self.logger.warning(
                f"Insufficient successful detail fetches ({len(fetched)}). Cache not saved."
            )
            return False

        payload = json.dumps([detail.to_cache_dict() for detail in fetched])
        try:
            self._store.set(self.key, payload)
        except OSError as e:
            self.logger.error(f"Failed to write cache entry '{self.key}': {e}")
            return False

        self.logger.info(f"Successfully cached {len(fetched)} movie details")
        return True

    def clear(self) -> None:
        """Remove the cached batch."""
        try:
            self._store.remove(self.key)
        except OSError as e:
            self.logger.error(f"Failed to clear cache entry '{self.key}': {e}")

    def _decode(self, raw: str) -> List[MovieDetail]:
        """Decode a cache entry.

        Args:
            raw: Stored text.

        Returns:
            Decoded details; null elements are skipped.

        Raises:
            CacheError: If the entry is not a valid detail array.
        """
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise CacheError(f"invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise CacheError("entry is not an array")

        try:
            return [MovieDetail.model_validate(item) for item in data if item is not None]
        except ValidationError as e:
            raise CacheError(f"invalid movie detail: {e}") from e
