"""
Place search for the "fly to" box.

Uses the Mapbox forward geocoding endpoint. Each search gets a request token; a response
that arrives after a newer search was started is dropped instead of overwriting the
newer results.
"""

import itertools
import logging
import threading
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from core.config import GEOCODING_LIMIT, GEOCODING_URL, HTTP_TIMEOUT_SECONDS, MAPBOX_ACCESS_TOKEN
from models.geocoding import PlaceResult

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """The geocoding service could not be reached or answered with an error."""


def parse_features(data: Dict[str, Any], limit: int = GEOCODING_LIMIT) -> List[PlaceResult]:
    """Convert a GeoJSON FeatureCollection from the geocoder into place results."""
    results: List[PlaceResult] = []
    for feature in data.get("features") or []:
        center = feature.get("center")
        if not center or len(center) < 2:
            logger.debug(f"Skipping geocoding feature without center: {feature.get('id')}")
            continue
        name = feature.get("place_name") or feature.get("text") or ""
        results.append(
            PlaceResult(
                name=name,
                text=feature.get("text") or name,
                center=[float(center[0]), float(center[1])],
            )
        )
        if len(results) >= limit:
            break
    return results


class GeocodingClient:
    def __init__(
        self,
        base_url: str = GEOCODING_URL,
        access_token: str = MAPBOX_ACCESS_TOKEN,
        limit: int = GEOCODING_LIMIT,
        timeout: float = HTTP_TIMEOUT_SECONDS,
    ):
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.limit = limit
        self.timeout = timeout
        self.results: List[PlaceResult] = []
        self._tokens = itertools.count(1)
        self._latest_token = 0
        self._lock = threading.Lock()

    def _issue_token(self) -> int:
        with self._lock:
            self._latest_token = next(self._tokens)
            return self._latest_token

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._latest_token

    def fetch(self, query: str) -> List[PlaceResult]:
        """Run one search request. Does not touch ``results``."""
        url = f"{self.base_url}/{quote(query, safe='')}.json"
        params = {"access_token": self.access_token, "limit": self.limit}
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Geocoding request for {query!r} failed: {e}")
            raise GeocodingError(f"Search failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"Geocoding for {query!r} returned HTTP {response.status_code}")
            raise GeocodingError(f"Search failed with HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise GeocodingError(f"Search returned invalid JSON: {e}") from e
        return parse_features(data, self.limit)

    def search(self, query: str) -> Optional[List[PlaceResult]]:
        """
        Search for ``query`` and store the results.

        Returns:
            The results, or ``None`` if a newer search started while this one was in
            flight (its response is discarded).

        Raises:
            ValueError: for a blank query.
            GeocodingError: on network or service errors.
        """
        if not query or not query.strip():
            raise ValueError("Please enter a location")

        token = self._issue_token()
        results = self.fetch(query.strip())
        with self._lock:
            if token != self._latest_token:
                logger.info(f"Discarding stale geocoding response for {query!r} (token {token})")
                return None
            self.results = results
        return results

    def clear(self) -> None:
        self.results = []
