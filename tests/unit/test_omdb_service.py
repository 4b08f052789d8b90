"""Test the OMDb service against a fake HTTP session."""

import asyncio
import json

import aiohttp
import pytest

from cinesift.core.services import OMDbService


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse."""

    def __init__(self, body, status=200):
        self._body = body
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise aiohttp.ClientError(f"HTTP {self.status}")

    async def json(self, content_type="application/json"):
        if isinstance(self._body, Exception):
            raise self._body
        if isinstance(self._body, str):
            return json.loads(self._body)
        return self._body


class FakeRequest:
    def __init__(self, outcome):
        self._outcome = outcome

    async def __aenter__(self):
        if isinstance(self._outcome, Exception):
            raise self._outcome
        return self._outcome

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Records requests and replays canned outcomes keyed by query."""

    def __init__(self, responder):
        self._responder = responder
        self.requests = []
        self.closed = False

    def get(self, url, params=None):
        self.requests.append((url, dict(params or {})))
        return FakeRequest(self._responder(params or {}))

    async def close(self):
        self.closed = True


def detail_payload(imdb_id, title="Movie"):
    return {
        "Response": "True",
        "imdbID": imdb_id,
        "Title": title,
        "Year": "1991",
        "Rated": "PG",
        "Runtime": "90 min",
        "Genre": "Comedy",
        "Language": "English",
        "Plot": "Things happen.",
        "Poster": "N/A",
        "imdbRating": "5.4",
        "Ratings": [{"Source": "Internet Movie Database", "Value": "5.4/10"}],
    }


@pytest.fixture
def omdb_service(config):
    return OMDbService(config)


@pytest.mark.asyncio
async def test_search_sends_expected_query(omdb_service):
    """Test the search query parameters."""
    session = FakeSession(
        lambda params: FakeResponse(
            {
                "Response": "True",
                "totalResults": "2",
                "Search": [
                    {"imdbID": "tt1", "Title": "One", "Year": "1990", "Type": "movie"},
                    {"imdbID": "tt2", "Title": "Two", "Year": "1991", "Type": "movie"},
                ],
            }
        )
    )
    omdb_service._session = session

    results = await omdb_service.search("scream", 3)

    assert [movie.imdb_id for movie in results] == ["tt1", "tt2"]
    url, params = session.requests[0]
    assert url == "https://www.omdbapi.com/"
    assert params == {"s": "scream", "type": "movie", "page": "3", "apikey": "test-omdb-key"}


@pytest.mark.asyncio
async def test_search_failure_discriminator_returns_empty(omdb_service):
    omdb_service._session = FakeSession(
        lambda params: FakeResponse({"Response": "False", "Error": "Movie not found!"})
    )

    assert await omdb_service.search("zzzz", 1) == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "outcome",
    [
        aiohttp.ClientConnectionError("connection refused"),
        asyncio.TimeoutError(),
        FakeResponse("<html>not json</html>"),
        FakeResponse({"Response": "True"}, status=503),
        FakeResponse(["not", "an", "object"]),
    ],
)
async def test_search_transport_failure_returns_empty(omdb_service, outcome):
    omdb_service._session = FakeSession(lambda params: outcome)

    assert await omdb_service.search("the", 1) == []


@pytest.mark.asyncio
async def test_search_skips_malformed_entries(omdb_service):
    omdb_service._session = FakeSession(
        lambda params: FakeResponse(
            {
                "Response": "True",
                "Search": [{"Title": "No id"}, {"imdbID": "tt9", "Title": "Good"}],
            }
        )
    )

    results = await omdb_service.search("the", 1)

    assert [movie.imdb_id for movie in results] == ["tt9"]


@pytest.mark.asyncio
async def test_fetch_detail_sends_expected_query(omdb_service):
    session = FakeSession(lambda params: FakeResponse(detail_payload(params["i"])))
    omdb_service._session = session

    detail = await omdb_service.fetch_detail("tt0101")

    assert detail.imdb_id == "tt0101"
    assert detail.rating_value == 5.4
    assert detail.runtime_minutes == 90
    assert detail.poster_url is None
    _, params = session.requests[0]
    assert params == {"i": "tt0101", "plot": "full", "apikey": "test-omdb-key"}


@pytest.mark.asyncio
async def test_fetch_detail_not_found(omdb_service):
    omdb_service._session = FakeSession(
        lambda params: FakeResponse({"Response": "False", "Error": "Incorrect IMDb ID."})
    )

    assert await omdb_service.fetch_detail("tt0000") is None


@pytest.mark.asyncio
async def test_fetch_detail_transport_failure(omdb_service):
    omdb_service._session = FakeSession(
        lambda params: aiohttp.ClientConnectionError("connection reset")
    )

    assert await omdb_service.fetch_detail("tt0000") is None


@pytest.mark.asyncio
async def test_fetch_details_keeps_order_and_absent_entries(omdb_service):
    """Test that two failures out of five leave three details."""
    failing = {"tt2", "tt4"}

    def responder(params):
        if params["i"] in failing:
            return aiohttp.ClientConnectionError("boom")
        return FakeResponse(detail_payload(params["i"], title=params["i"].upper()))

    omdb_service._session = FakeSession(responder)

    details = await omdb_service.fetch_details(["tt1", "tt2", "tt3", "tt4", "tt5"])

    assert [d.imdb_id if d else None for d in details] == ["tt1", None, "tt3", None, "tt5"]


@pytest.mark.asyncio
async def test_fetch_details_empty(omdb_service):
    assert await omdb_service.fetch_details([]) == []


@pytest.mark.asyncio
async def test_close_releases_session(config):
    session = FakeSession(lambda params: FakeResponse({}))

    async with OMDbService(config) as omdb_service:
        omdb_service._session = session

    assert session.closed
    assert omdb_service._session is None


@pytest.mark.asyncio
async def test_search_error_status_keeps_omdb_message(omdb_service, caplog):
    """Test that a 401 carrying an OMDb error envelope reports OMDb's text."""
    omdb_service._session = FakeSession(
        lambda params: FakeResponse(
            {"Response": "False", "Error": "Request limit reached!"}, status=401
        )
    )

    assert await omdb_service.search("the", 1) == []
    assert "Request limit reached!" in caplog.text
    assert "HTTP 401" not in caplog.text


@pytest.mark.asyncio
async def test_fetch_detail_error_status_with_envelope(omdb_service, caplog):
    omdb_service._session = FakeSession(
        lambda params: FakeResponse({"Response": "False", "Error": "Invalid API key!"}, status=401)
    )

    assert await omdb_service.fetch_detail("tt1") is None
    assert "Invalid API key!" in caplog.text


@pytest.mark.asyncio
async def test_error_status_without_envelope_is_transport_failure(omdb_service, caplog):
    omdb_service._session = FakeSession(
        lambda params: FakeResponse("<html>Unauthorized</html>", status=401)
    )

    assert await omdb_service.search("the", 1) == []
    assert "HTTP 401" in caplog.text
