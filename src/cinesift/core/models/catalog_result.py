"""Catalog result data models."""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field

from .criteria import AgeCategory
from .movie import MovieDetail


class ResultStatus(str, Enum):
    """Outcome of a catalog query."""

    OK = "ok"
    NO_SOURCE_DATA = "no_source_data"
    NO_MATCHES = "no_matches"


class CatalogResult(BaseModel):
    """Filtered, sorted and classified movies for presentation."""

    movies: List[MovieDetail] = Field(default_factory=list, description="Matching movies")
    source_count: int = Field(default=0, ge=0, description="Details available before filtering")
    from_cache: bool = Field(default=False, description="Whether the cache served the details")
    status: ResultStatus = Field(default=ResultStatus.OK, description="Result status")
    age_groups: Dict[AgeCategory, List[MovieDetail]] = Field(
        default_factory=dict, description="Movies bucketed by age category"
    )
    genre_counts: Dict[str, int] = Field(
        default_factory=dict, description="Genre occurrences among matching movies"
    )

    @property
    def is_empty(self) -> bool:
        """Check if nothing matched."""
        return not self.movies

    @property
    def classified_count(self) -> int:
        """Count of movies placed in an age category."""
        return sum(len(movies) for movies in self.age_groups.values())
