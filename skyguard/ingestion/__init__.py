"""
Data ingestion module for SkyGuard.

Upstream adapters for the ADS-B state feed and NWS METAR text files,
plus the geofence filter and the synthetic fallback generator.
"""

from skyguard.ingestion.adsb_client import AdsbClient
from skyguard.ingestion.metar_client import MetarClient, normalize_icao
from skyguard.ingestion.simulator import generate_flights
from skyguard.ingestion.errors import (
    EmptyResult,
    FetchResult,
    SkyGuardError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    'AdsbClient',
    'MetarClient',
    'normalize_icao',
    'generate_flights',
    'EmptyResult',
    'FetchResult',
    'SkyGuardError',
    'UpstreamError',
    'ValidationError',
]
