"""OMDb service implementation."""

import asyncio
from typing import Any, Dict, List, Optional, Sequence

import aiohttp
from pydantic import ValidationError

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import OMDbServiceError
from ..interfaces import IOMDbService
from ..models import MovieDetail, MovieSummary


class OMDbService(IOMDbService, LoggerMixin):
    """OMDb service implementation.

    Failures never propagate out of the public operations: a transport
    failure or an envelope with ``Response: "False"`` is logged and turned
    into an empty page or a missing detail. Requests are never retried.
    """

    def __init__(self, config: Config) -> None:
        """Initialize OMDb service.

        Args:
            config: Application configuration.
        """
        self._config = config
        self._omdb_config = config.omdb
        self._session: Optional[aiohttp.ClientSession] = None

    async def search(self, term: str, page: int = 1) -> List[MovieSummary]:
        """Search movies by term.

        Args:
            term: Search term.
            page: 1-based result page.

        Returns:
            Movie summaries on the page, empty on any failure.
        """
        params = {
            "s": term,
            "type": self._config.collector.content_type,
            "page": str(page),
            "apikey": self._omdb_config.api_key,
        }

        try:
            data = await self._get_json(params)
        except OMDbServiceError as e:
            self.logger.error(f"Search for '{term}' page {page} failed: {e}")
            return []

        if data.get("Response") != "True":
            self.logger.error(
                f"OMDb search failed for term '{term}' on page {page}: "
                f"{data.get('Error', 'unknown error')}"
            )
            return []

        results = data.get("Search")
        if not isinstance(results, list):
            return []

        summaries = []
        for item in results:
            try:
                summaries.append(MovieSummary.model_validate(item))
            except ValidationError as e:
                self.logger.debug(f"Skipping malformed search result for '{term}': {e}")
        return summaries

    async def fetch_detail(self, imdb_id: str) -> Optional[MovieDetail]:
        """Fetch full movie details.

        Args:
            imdb_id: IMDb movie ID.

        Returns:
            Movie details or None if the lookup failed.
        """
        params = {
            "i": imdb_id,
            "plot": self._omdb_config.plot,
            "apikey": self._omdb_config.api_key,
        }

        try:
            data = await self._get_json(params)
        except OMDbServiceError as e:
            self.logger.error(f"Detail lookup for {imdb_id} failed: {e}")
            return None

        if data.get("Response") != "True":
            self.logger.error(
                f"OMDb detail lookup failed for {imdb_id}: {data.get('Error', 'unknown error')}"
            )
            return None

        try:
            return MovieDetail.model_validate(data)
        except ValidationError as e:
            self.logger.error(f"Malformed detail payload for {imdb_id}: {e}")
            return None

    async def fetch_details(self, imdb_ids: Sequence[str]) -> List[Optional[MovieDetail]]:
        """Fetch details for many movies as one concurrent batch.

        The batch completes only once every lookup has settled.

        Args:
            imdb_ids: IMDb movie IDs.

        Returns:
            Details in the same order as the IDs, None for failed lookups.
        """
        if not imdb_ids:
            return []

        self.logger.info(f"Fetching details for {len(imdb_ids)} movies")
        details = await asyncio.gather(*(self.fetch_detail(imdb_id) for imdb_id in imdb_ids))

        fetched = sum(1 for detail in details if detail is not None)
        self.logger.info(f"Fetched {fetched}/{len(imdb_ids)} movie details")
        return list(details)

    async def _get_json(self, params: Dict[str, str]) -> Dict[str, Any]:
        """Issue a GET request and decode the JSON envelope.

        Args:
            params: Query parameters.

        Returns:
            Decoded JSON object.

        Raises:
            OMDbServiceError: On transport failure or an undecodable body.
        """
        try:
            async with self._get_session().get(
                self._omdb_config.base_url, params=params
            ) as response:
                if response.status >= 400:
                    error_body = await self._read_error_body(response)
                    if error_body is not None:
                        return error_body
                response.raise_for_status()
                data = await response.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise OMDbServiceError("request timed out") from e
        except aiohttp.ClientError as e:
            raise OMDbServiceError(str(e) or e.__class__.__name__) from e
        except ValueError as e:
            raise OMDbServiceError(f"invalid JSON response: {e}") from e

        if not isinstance(data, dict):
            raise OMDbServiceError("unexpected response body")
        return data

    async def _read_error_body(
        self, response: aiohttp.ClientResponse
    ) -> Optional[Dict[str, Any]]:
        """Decode an OMDb error envelope sent with an HTTP error status.

        OMDb answers a bad key or an exhausted quota with 401 and a JSON
        body carrying the message; other error bodies are left to
        raise_for_status.
        """
        try:
            data = await response.json(content_type=None)
        except ValueError:
            return None
        if isinstance(data, dict) and data.get("Response") == "False" and data.get("Error"):
            return data
        return None

    def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session.

        Returns:
            HTTP session.
        """
        if self._session is None:
            timeout = aiohttp.ClientTimeout(total=self._omdb_config.timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "OMDbService":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
