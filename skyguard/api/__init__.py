"""
API module for SkyGuard.

Provides REST endpoints for:
- Flights (cached live ADS-B data with simulated fallback)
- METAR weather observations
- Event log and file uploads
- Cache and fleet status
"""

from skyguard.api.flights import flights_bp
from skyguard.api.weather import weather_bp
from skyguard.api.events import events_bp
from skyguard.api.metrics import metrics_bp

__all__ = ['flights_bp', 'weather_bp', 'events_bp', 'metrics_bp']
