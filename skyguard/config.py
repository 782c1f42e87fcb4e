"""
Configuration management for SkyGuard.

Loads settings from environment variables with sensible defaults.
All configuration is centralized here to avoid magic strings scattered
throughout the codebase.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class FlightFeedConfig:
    """Aircraft-state feed and flight cache settings."""
    url: str = os.getenv('ADSB_FEED_URL', 'https://api.adsb.lol/v2/state/all')
    cache_ttl_seconds: float = float(os.getenv('FLIGHT_CACHE_TTL_SECONDS', '10'))

    # Payload bounds
    max_live_flights: int = int(os.getenv('MAX_LIVE_FLIGHTS', '150'))
    simulated_count: int = int(os.getenv('SIMULATED_FLIGHT_COUNT', '120'))
    fatal_fallback_count: int = int(os.getenv('FATAL_FALLBACK_FLIGHT_COUNT', '80'))


@dataclass(frozen=True)
class WeatherConfig:
    """METAR text source and weather cache settings."""
    base_url: str = os.getenv(
        'METAR_BASE_URL',
        'https://tgftp.nws.noaa.gov/data/observations/metar/stations',
    )
    cache_ttl_seconds: float = float(os.getenv('METAR_CACHE_TTL_SECONDS', '120'))


@dataclass(frozen=True)
class DatabaseConfig:
    """Event log database configuration."""
    url: str = os.getenv('DATABASE_URL', 'sqlite:///skyguard.db')

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith('sqlite')


@dataclass(frozen=True)
class StorageConfig:
    """File upload storage."""
    upload_dir: str = os.getenv('UPLOAD_DIR', 'uploads')
    max_upload_bytes: int = 5 * 1024 * 1024


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    flights: FlightFeedConfig = field(default_factory=FlightFeedConfig)
    weather: WeatherConfig = field(default_factory=WeatherConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    # Applies to every upstream call, there is no retry
    upstream_timeout_seconds: float = 8.0

    static_dir: str = 'frontend'

    # Flask settings
    secret_key: str = 'dev-key-change-in-prod'
    debug: bool = False
    port: int = 3002


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        flights=FlightFeedConfig(),
        weather=WeatherConfig(),
        database=DatabaseConfig(),
        storage=StorageConfig(),
        upstream_timeout_seconds=float(os.getenv('UPSTREAM_TIMEOUT_SECONDS', '8')),
        static_dir=os.getenv('STATIC_DIR', 'frontend'),
        secret_key=os.getenv('SECRET_KEY', 'dev-key-change-in-prod'),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
        port=int(os.getenv('PORT', '3002')),
    )


# Singleton instance
config = load_config()
