"""
Flight feed service - cache-backed live flights with synthetic fallback.

Orchestrates one request:
1. Serve the cached list if it is younger than the TTL ('cache')
2. Otherwise fetch the ADS-B feed ('live')
3. On failure or an empty result, generate synthetic flights ('simulated')
4. Whatever was produced in 2 or 3 is written back to the cache

Caching the simulated list means a known-bad upstream is retried at
most once per TTL window.
"""

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from skyguard.cache import FreshnessCache
from skyguard.ingestion.adsb_client import AdsbClient
from skyguard.ingestion.errors import EmptyResult, FetchResult, UpstreamError
from skyguard.ingestion.simulator import DEFAULT_COUNT, generate_flights
from skyguard.models.flight import FlightRecord, FlightSource

logger = logging.getLogger(__name__)

# Single global entry
FLIGHTS_CACHE_KEY = 'flights'


@dataclass(frozen=True)
class FlightFeed:
    """A flight list and where it came from."""
    flights: Tuple[FlightRecord, ...]
    source: FlightSource

    def to_dict(self) -> dict:
        return {
            'flights': [f.to_dict() for f in self.flights],
            'source': self.source.value,
        }


class FlightFeedService:
    """Serves flights with bounded staleness, never failing outward."""

    def __init__(
        self,
        client: AdsbClient,
        cache: FreshnessCache,
        simulated_count: int = DEFAULT_COUNT,
        fatal_fallback_count: int = 80,
        rng: Optional[random.Random] = None,
    ):
        self.client = client
        self.cache = cache
        self.simulated_count = simulated_count
        self.fatal_fallback_count = fatal_fallback_count
        self.rng = rng

        self._live_count = 0
        self._simulated_count = 0

    def fetch_live(self) -> FetchResult[List[FlightRecord]]:
        """Call the adapter and fold every failure into a FetchResult."""
        try:
            flights = self.client.fetch_flights()
        except UpstreamError as e:
            return FetchResult.failure(e)

        if not flights:
            return FetchResult.failure(EmptyResult('no flights inside bounding box'))
        return FetchResult.success(flights)

    def simulate(self, count: Optional[int] = None) -> FlightFeed:
        flights = generate_flights(self.simulated_count if count is None else count, rng=self.rng)
        return FlightFeed(flights=tuple(flights), source=FlightSource.SIMULATED)

    def _refresh(self) -> FlightFeed:
        result = self.fetch_live()

        if result.ok:
            self._live_count += 1
            logger.info(f'Serving {len(result.data)} live flights')
            return FlightFeed(flights=tuple(result.data), source=FlightSource.LIVE)

        self._simulated_count += 1
        logger.warning(f'Live flights unavailable ({result.error}), serving simulated data')
        return self.simulate()

    def get_flights(self) -> FlightFeed:
        """
        Current flight list tagged with its source.

        A cache hit is tagged 'cache' and carries the identical list that
        was stored on the populating request.
        """
        lookup = self.cache.get_or_refresh_with_status(
            FLIGHTS_CACHE_KEY, self.cache.ttl_seconds, self._refresh,
        )
        if lookup.hit:
            return FlightFeed(flights=lookup.payload.flights, source=FlightSource.CACHE)
        return lookup.payload

    def fatal_fallback(self) -> FlightFeed:
        """Smaller simulated list for unexpected failures. Not cached."""
        return self.simulate(self.fatal_fallback_count)

    def cached_flights(self) -> Tuple[FlightRecord, ...]:
        """Flights currently held, regardless of age, without fetching."""
        entry = self.cache.peek(FLIGHTS_CACHE_KEY)
        return entry.payload.flights if entry else ()

    @property
    def stats(self) -> dict:
        return {
            'live_refreshes': self._live_count,
            'simulated_refreshes': self._simulated_count,
            'cache': self.cache.stats,
        }
