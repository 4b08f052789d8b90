"""Core service implementations."""

from .movie_catalog import MovieCatalog
from .movie_collector import MovieCollector
from .omdb_service import OMDbService
from .result_cache import ResultCache

__all__ = [
    "OMDbService",
    "MovieCollector",
    "ResultCache",
    "MovieCatalog",
]
