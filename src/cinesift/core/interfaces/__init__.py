"""Core interfaces for dependency injection."""

from .key_value_store import IKeyValueStore
from .movie_catalog import IMovieCatalog
from .movie_collector import IMovieCollector
from .omdb_service import IOMDbService
from .result_cache import IResultCache

__all__ = [
    "IKeyValueStore",
    "IOMDbService",
    "IMovieCollector",
    "IResultCache",
    "IMovieCatalog",
]
