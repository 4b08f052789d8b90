"""Movie-related data models."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ...utils.text_utils import (
    NOT_AVAILABLE,
    build_search_links,
    parse_float,
    parse_leading_int,
    split_csv,
)


class MovieSummary(BaseModel):
    """Minimal movie record returned by a search query."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    imdb_id: str = Field(..., alias="imdbID", min_length=1, description="IMDb ID")
    title: str = Field(default="", alias="Title", description="Movie title")
    year: str = Field(default="", alias="Year", description="Release year text")
    type: Optional[str] = Field(default=None, alias="Type", description="OMDb result type")
    poster: Optional[str] = Field(default=None, alias="Poster", description="Poster URL")


class MovieDetail(BaseModel):
    """Full movie record returned by a per-identifier lookup.

    Field aliases follow the OMDb payload so cached entries keep the same
    shape the API returns.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    imdb_id: str = Field(..., alias="imdbID", min_length=1, description="IMDb ID")
    title: str = Field(..., alias="Title", description="Movie title")
    year: str = Field(default="", alias="Year", description="Release year text")
    rated: str = Field(default="", alias="Rated", description="Content rating")
    runtime: str = Field(default="", alias="Runtime", description="Runtime text, e.g. '94 min'")
    genre: str = Field(default="", alias="Genre", description="Comma-separated genres")
    language: str = Field(default="", alias="Language", description="Comma-separated languages")
    plot: str = Field(default="", alias="Plot", description="Plot text")
    poster: str = Field(default="", alias="Poster", description="Poster URL or 'N/A'")
    imdb_rating: str = Field(default="", alias="imdbRating", description="IMDb rating or 'N/A'")

    @property
    def year_value(self) -> Optional[int]:
        """Release year as an integer."""
        return parse_leading_int(self.year)

    @property
    def runtime_minutes(self) -> Optional[int]:
        """Runtime in minutes."""
        return parse_leading_int(self.runtime)

    @property
    def rating_value(self) -> Optional[float]:
        """Numeric IMDb rating, None when not available."""
        return parse_float(self.imdb_rating)

    @property
    def poster_url(self) -> Optional[str]:
        """Poster URL, None when OMDb has none."""
        if not self.poster or self.poster == NOT_AVAILABLE:
            return None
        return self.poster

    @property
    def genres(self) -> List[str]:
        """Individual genres."""
        return split_csv(self.genre)

    @property
    def search_links(self) -> Dict[str, str]:
        """Web search links for finding somewhere to watch the movie."""
        return build_search_links(self.title, self.year)

    def to_cache_dict(self) -> Dict[str, Any]:
        """Serialize using OMDb field names."""
        return self.model_dump(by_alias=True)
