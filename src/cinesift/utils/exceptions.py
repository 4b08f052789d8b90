"""Custom exceptions for the application."""


class CineSiftError(Exception):
    """Base exception for all application errors."""

    pass


class ConfigurationError(CineSiftError):
    """Configuration-related errors."""

    pass


class OMDbServiceError(CineSiftError):
    """OMDb transport errors."""

    pass


class CacheError(CineSiftError):
    """Result cache errors."""

    pass


class CatalogError(CineSiftError):
    """Movie catalog errors."""

    pass
