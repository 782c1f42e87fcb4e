"""
Weather service - cache-backed METAR lookups.

Validation happens before the cache is touched. Upstream failures are
folded into an empty observation, and that empty observation is cached
like any other, so an outage is retried at most once per TTL per code.
"""

import logging
from typing import Optional

from skyguard.cache import FreshnessCache
from skyguard.ingestion.errors import FetchResult, UpstreamError
from skyguard.ingestion.metar_client import MetarClient, normalize_icao
from skyguard.models.weather import WeatherObservation

logger = logging.getLogger(__name__)


def cache_key(icao: str) -> str:
    return f'metar:{icao}'


class WeatherService:
    """Per-airport METAR observations with bounded staleness."""

    def __init__(self, client: MetarClient, cache: FreshnessCache):
        self.client = client
        self.cache = cache

    def fetch_live(self, icao: str) -> FetchResult[WeatherObservation]:
        try:
            return FetchResult.success(self.client.fetch_metar(icao))
        except UpstreamError as e:
            return FetchResult.failure(e)

    def _refresh(self, icao: str) -> WeatherObservation:
        result = self.fetch_live(icao)
        if result.ok:
            return result.data

        logger.error(f'metar error for {icao}: {result.error}')
        return WeatherObservation(icao=icao)

    def get_observation(self, raw_icao: Optional[str]) -> WeatherObservation:
        """
        Latest observation for an airport code.

        Raises:
            ValidationError if the code is malformed
        """
        icao = normalize_icao(raw_icao)
        return self.cache.get_or_refresh(
            cache_key(icao), self.cache.ttl_seconds, lambda: self._refresh(icao),
        )

    @staticmethod
    def empty_observation(raw_icao: Optional[str]) -> WeatherObservation:
        """Well-formed 'unavailable' observation echoing the requested code."""
        return WeatherObservation(icao=(raw_icao or '').upper())
