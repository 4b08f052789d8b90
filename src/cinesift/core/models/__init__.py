"""Core data models."""

from .catalog_result import CatalogResult, ResultStatus
from .criteria import (
    DEFAULT_ALLOWED_RATINGS,
    DEFAULT_SENSITIVE_KEYWORDS,
    AgeCategory,
    FilterCriteria,
    SortOrder,
)
from .movie import MovieDetail, MovieSummary

__all__ = [
    "MovieSummary",
    "MovieDetail",
    "FilterCriteria",
    "SortOrder",
    "AgeCategory",
    "CatalogResult",
    "ResultStatus",
    "DEFAULT_ALLOWED_RATINGS",
    "DEFAULT_SENSITIVE_KEYWORDS",
]
