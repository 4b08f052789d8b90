"""Utility functions and classes."""

from .exceptions import (
    CacheError,
    CatalogError,
    CineSiftError,
    ConfigurationError,
    OMDbServiceError,
)
from .text_utils import (
    NOT_AVAILABLE,
    build_search_links,
    contains_any,
    contains_ignore_case,
    fingerprint,
    parse_float,
    parse_leading_int,
    split_csv,
    title_sort_key,
)

__all__ = [
    "CineSiftError",
    "ConfigurationError",
    "OMDbServiceError",
    "CacheError",
    "CatalogError",
    "NOT_AVAILABLE",
    "build_search_links",
    "contains_any",
    "contains_ignore_case",
    "fingerprint",
    "parse_float",
    "parse_leading_int",
    "split_csv",
    "title_sort_key",
]
