"""Filter criteria data models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_ALLOWED_RATINGS = ["G", "Approved", "TV-G", "U", "PG", "PG-13"]

DEFAULT_SENSITIVE_KEYWORDS = [
    "sex",
    "sexual",
    "affair",
    "cheating",
    "adult",
    "seduce",
    "gay",
    "lesbian",
    "pregnant",
    "nudity",
    "intimate",
    "erotic",
    "drugs",
    "violence",
    "terror",
    "horror",
]


class SortOrder(str, Enum):
    """Result ordering."""

    TITLE = "title"
    RATING_ASC = "rating_asc"
    RATING_DESC = "rating_desc"


class AgeCategory(str, Enum):
    """Audience age buckets derived from the content rating."""

    UNDER_6 = "under_6"
    SIX_TO_ELEVEN = "six_to_eleven"
    TWELVE_PLUS = "twelve_plus"

    @property
    def label(self) -> str:
        """Human readable bucket name."""
        return _AGE_LABELS[self]


_AGE_LABELS = {
    AgeCategory.UNDER_6: "Below 6 years",
    AgeCategory.SIX_TO_ELEVEN: "6-11 years",
    AgeCategory.TWELVE_PLUS: "12 years and up",
}


class FilterCriteria(BaseModel):
    """Declarative predicates applied to fetched movie details.

    Every predicate is optional; an unset predicate matches everything.
    The configured predicates are combined with logical AND.
    """

    model_config = ConfigDict(validate_assignment=True)

    year_min: Optional[int] = Field(default=None, description="Earliest release year (inclusive)")
    year_max: Optional[int] = Field(default=None, description="Latest release year (inclusive)")
    rating_ceiling: Optional[float] = Field(
        default=None, ge=0.0, le=10.0, description="Maximum IMDb rating"
    )
    allow_missing_rating: bool = Field(
        default=True, description="Let movies without a rating pass the rating ceiling"
    )
    content_ratings: Optional[List[str]] = Field(
        default=None, description="Allowed content ratings (case-insensitive)"
    )
    language: Optional[str] = Field(default=None, description="Language substring")
    topic: Optional[str] = Field(default=None, description="Substring of title or plot")
    genre: Optional[str] = Field(default=None, description="Genre substring")
    max_runtime: Optional[int] = Field(default=None, gt=0, description="Maximum runtime in minutes")
    exclude_sensitive: bool = Field(
        default=False, description="Reject movies whose plot mentions a sensitive keyword"
    )
    sensitive_keywords: List[str] = Field(
        default_factory=lambda: list(DEFAULT_SENSITIVE_KEYWORDS),
        description="Keywords screened in plot text",
    )
    require_age_category: bool = Field(
        default=False, description="Only keep movies that fall in an age category"
    )
    sort: SortOrder = Field(default=SortOrder.TITLE, description="Result ordering")
    unrated_last: bool = Field(
        default=True, description="Place movies without a rating after rated ones"
    )

    @field_validator("language", "topic", "genre")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank text filters as unset."""
        if v is None:
            return None
        v = v.strip()
        if not v or v.lower() == "all":
            return None
        return v

    @model_validator(mode="after")
    def validate_year_range(self) -> "FilterCriteria":
        """Validate that the year range is not inverted."""
        if self.year_min is not None and self.year_max is not None:
            if self.year_min > self.year_max:
                raise ValueError(
                    f"year_min ({self.year_min}) must not exceed year_max ({self.year_max})"
                )
        return self
