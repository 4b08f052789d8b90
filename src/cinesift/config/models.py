"""Configuration data models."""

import os
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.models.criteria import DEFAULT_ALLOWED_RATINGS, FilterCriteria, SortOrder


class OMDbConfig(BaseModel):
    """OMDb API configuration."""

    api_key: str = Field(..., description="OMDb API key")
    base_url: str = Field(default="https://www.omdbapi.com/", description="OMDb API base URL")
    timeout: int = Field(default=10, gt=0, description="Request timeout in seconds")
    plot: str = Field(default="full", description="Plot length for detail lookups")

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Expand environment variables in API key."""
        return os.path.expandvars(v)

    @field_validator("plot")
    @classmethod
    def validate_plot(cls, v: str) -> str:
        """Validate plot length option."""
        allowed = {"short", "full"}
        if v not in allowed:
            raise ValueError(f"Plot must be one of: {allowed}")
        return v


class CollectorConfig(BaseModel):
    """Search collection configuration."""

    search_terms: List[str] = Field(
        default_factory=lambda: ["the", "and", "ing", "scream", "act", "man"],
        description="Search terms used to build the candidate pool",
    )
    max_pages_per_term: int = Field(default=10, gt=0, description="Page cap per search term")
    page_size: int = Field(default=10, gt=0, description="Results per full OMDb search page")
    max_details_to_fetch: int = Field(
        default=500, gt=0, description="Maximum detail lookups per refresh"
    )
    content_type: str = Field(default="movie", description="OMDb result type to search for")

    @field_validator("search_terms")
    @classmethod
    def validate_search_terms(cls, v: List[str]) -> List[str]:
        """Strip blanks from search terms."""
        terms = [term.strip() for term in v if term and term.strip()]
        if not terms:
            raise ValueError("At least one search term is required")
        return terms


class CacheConfig(BaseModel):
    """Local result cache configuration."""

    enabled: bool = Field(default=True, description="Enable the result cache")
    path: Path = Field(
        default=Path("~/.cache/cinesift/store.json"), description="Key-value store file"
    )
    key: str = Field(default="challengeMovieCache", min_length=1, description="Cache entry key")
    min_viable_count: int = Field(
        default=10, ge=0, description="Details required (exclusive) before the cache is written"
    )
    key_by_query: bool = Field(
        default=False, description="Key cache entries by query fingerprint"
    )

    @field_validator("path", mode="before")
    @classmethod
    def expand_path(cls, v: object) -> Path:
        """Expand environment variables and user home in the store path."""
        return Path(os.path.expandvars(str(v))).expanduser()


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )
    file: Optional[str] = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, gt=0, description="Maximum log file size in MB")
    backup_count: int = Field(default=5, ge=0, description="Number of backup log files")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate logging level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Logging level must be one of: {allowed}")
        return v.upper()


def default_profiles() -> Dict[str, FilterCriteria]:
    """Built-in filter profiles."""
    return {
        "challenge": FilterCriteria(
            year_min=1980,
            year_max=1999,
            rating_ceiling=6.0,
            sort=SortOrder.RATING_ASC,
        ),
        "family": FilterCriteria(
            content_ratings=list(DEFAULT_ALLOWED_RATINGS),
            exclude_sensitive=True,
            require_age_category=True,
        ),
    }


class Config(BaseModel):
    """Main configuration model."""

    omdb: OMDbConfig = Field(..., description="OMDb configuration")
    collector: CollectorConfig = Field(
        default_factory=CollectorConfig, description="Search collection configuration"
    )
    cache: CacheConfig = Field(default_factory=CacheConfig, description="Cache configuration")
    criteria: FilterCriteria = Field(
        default_factory=FilterCriteria, description="Default filter criteria"
    )
    profiles: Dict[str, FilterCriteria] = Field(
        default_factory=default_profiles, description="Named filter profiles"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    model_config = ConfigDict(
        validate_assignment=True,
        populate_by_name=True,
    )

    def get_criteria(self, profile: Optional[str] = None) -> FilterCriteria:
        """Get filter criteria for a profile.

        Args:
            profile: Profile name. If None, returns the default criteria.

        Returns:
            Copy of the selected criteria.

        Raises:
            KeyError: If the profile does not exist.
        """
        if profile is None:
            return self.criteria.model_copy(deep=True)
        if profile not in self.profiles:
            raise KeyError(f"Unknown profile '{profile}'. Available: {sorted(self.profiles)}")
        return self.profiles[profile].model_copy(deep=True)
