"""Pytest configuration and fixtures."""

from typing import Dict, List, Optional, Sequence

import pytest

from cinesift.config import ConfigManager
from cinesift.core.interfaces import IOMDbService
from cinesift.core.models import MovieDetail, MovieSummary
from cinesift.infrastructure import Container, MemoryStore


def make_detail(imdb_id: str, title: str, **fields: str) -> MovieDetail:
    """Build a movie detail using OMDb field names."""
    payload = {"imdbID": imdb_id, "Title": title}
    payload.update(fields)
    return MovieDetail.model_validate(payload)


def make_summaries(prefix: str, count: int, start: int = 0) -> List[MovieSummary]:
    """Build a page of search results."""
    return [
        MovieSummary(imdb_id=f"{prefix}{i:04d}", title=f"{prefix} movie {i}", year="1990")
        for i in range(start, start + count)
    ]


class FakeOMDbService(IOMDbService):
    """In-memory OMDb service for tests."""

    def __init__(
        self,
        pages: Optional[Dict[str, List[List[MovieSummary]]]] = None,
        details: Optional[Dict[str, MovieDetail]] = None,
    ):
        self.pages = pages or {}
        self.details = details or {}
        self.search_calls: List[tuple] = []
        self.detail_calls: List[str] = []
        self.closed = False

    async def search(self, term: str, page: int = 1) -> List[MovieSummary]:
        self.search_calls.append((term, page))
        term_pages = self.pages.get(term, [])
        if page > len(term_pages):
            return []
        return list(term_pages[page - 1])

    async def fetch_detail(self, imdb_id: str) -> Optional[MovieDetail]:
        self.detail_calls.append(imdb_id)
        return self.details.get(imdb_id)

    async def fetch_details(self, imdb_ids: Sequence[str]) -> List[Optional[MovieDetail]]:
        return [await self.fetch_detail(imdb_id) for imdb_id in imdb_ids]

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def temp_config_file(tmp_path):
    """Create a temporary configuration file."""
    config_content = f"""
omdb:
  api_key: "test-omdb-key"

collector:
  search_terms: ["the", "man"]
  max_pages_per_term: 3

cache:
  path: "{(tmp_path / 'store.json').as_posix()}"
  min_viable_count: 2
"""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(config_content)
    return config_file


@pytest.fixture
def config_manager(temp_config_file):
    """Create a configuration manager with test config."""
    return ConfigManager(temp_config_file)


@pytest.fixture
def config(config_manager):
    """Load test configuration."""
    return config_manager.load_config()


@pytest.fixture
def container(config_manager):
    """Create a test container."""
    container = Container(config_manager)
    return container


@pytest.fixture
def memory_store():
    """In-memory key-value store."""
    return MemoryStore()


@pytest.fixture
def sample_details():
    """Movie details covering the filter edge cases."""
    return [
        make_detail(
            "tt0000001",
            "Bad Movie",
            Year="1985",
            Rated="R",
            Runtime="88 min",
            Genre="Horror, Comedy",
            Language="English",
            Plot="A cheap horror flick.",
            imdbRating="3.2",
        ),
        make_detail(
            "tt0000002",
            "Unrated Oddity",
            Year="1990",
            Rated="N/A",
            Runtime="N/A",
            Genre="Drama",
            Language="French, English",
            Plot="Nobody rated this one.",
            imdbRating="N/A",
        ),
        make_detail(
            "tt0000003",
            "Family Trip",
            Year="1997",
            Rated="PG",
            Runtime="95 min",
            Genre="Animation, Family",
            Language="English",
            Plot="A family goes camping.",
            imdbRating="5.5",
        ),
        make_detail(
            "tt0000004",
            "Modern Hit",
            Year="2010",
            Rated="PG-13",
            Runtime="130 min",
            Genre="Action",
            Language="Spanish",
            Plot="Heroes save the day.",
            imdbRating="8.1",
        ),
        make_detail(
            "tt0000005",
            "Little Ones",
            Year="1995",
            Rated="G",
            Runtime="70 min",
            Genre="Animation",
            Language="English",
            Plot="Talking animals sing.",
            imdbRating="6.0",
        ),
    ]
