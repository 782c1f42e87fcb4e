"""
SkyGuard Backend Package.

Live aviation dashboard backend built with Flask, requests, SQLAlchemy, and NumPy.

Modules:
    api/         REST endpoints for flights, METAR weather, event log, uploads, status
    models/      Flight/weather records and the SQLAlchemy event log model
    ingestion/   Upstream adapters (ADS-B feed, METAR text), geofence, simulator
    services/    Cache-backed orchestration with fallback to synthetic data
    cache.py     Thread-safe freshness cache with per-key refresh coalescing
    config.py    Centralized configuration from environment variables
"""

__version__ = '1.0.0'
