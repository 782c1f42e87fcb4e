"""
Data models for SkyGuard.

Flight and weather records are plain dataclasses held in memory;
only the dashboard event log is persisted through SQLAlchemy.
"""

from skyguard.models.base import Base, engine, SessionLocal, init_db, get_session
from skyguard.models.flight import FlightRecord, FlightSource
from skyguard.models.weather import WeatherObservation
from skyguard.models.event_log import EventLogEntry, append_event, list_recent_events

__all__ = [
    'Base',
    'engine',
    'SessionLocal',
    'init_db',
    'get_session',
    'FlightRecord',
    'FlightSource',
    'WeatherObservation',
    'EventLogEntry',
    'append_event',
    'list_recent_events',
]
