"""
Cache-backed orchestration services.

Combine the freshness cache with the upstream adapters and degrade
gracefully to synthetic or empty data when a feed is unavailable.
"""

from skyguard.services.flight_feed import FlightFeed, FlightFeedService
from skyguard.services.weather import WeatherService

__all__ = ['FlightFeed', 'FlightFeedService', 'WeatherService']
