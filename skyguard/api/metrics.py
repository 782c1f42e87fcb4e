"""
Status API endpoints.

Provides endpoints for:
- GET /api/metrics/status - Cache statistics and a fleet summary
"""

import logging
import time
from datetime import datetime, timezone
from typing import Iterable, List

import numpy as np
from flask import Blueprint, current_app, jsonify

from skyguard.models.flight import FlightRecord
from skyguard.services.flight_feed import FLIGHTS_CACHE_KEY

logger = logging.getLogger(__name__)

metrics_bp = Blueprint('metrics', __name__, url_prefix='/api/metrics')


def _distribution(values: List[float]) -> dict:
    if not values:
        return {'mean': None, 'min': None, 'max': None, 'std': None}
    arr = np.asarray(values, dtype=np.float64)
    return {
        'mean': round(float(np.mean(arr)), 1),
        'min': round(float(np.min(arr)), 1),
        'max': round(float(np.max(arr)), 1),
        'std': round(float(np.std(arr)), 1),
    }


def fleet_summary(flights: Iterable[FlightRecord]) -> dict:
    """Aggregate altitude/speed statistics over a flight list."""
    flights = list(flights)
    airlines, counts = np.unique([f.airline for f in flights], return_counts=True) if flights else ([], [])
    return {
        'count': len(flights),
        'altitude_ft': _distribution([f.alt_ft for f in flights]),
        'speed_kts': _distribution([f.vel_kt for f in flights]),
        'by_airline': {str(a): int(c) for a, c in zip(airlines, counts)},
    }


@metrics_bp.route('/status', methods=['GET'])
def get_system_status():
    """
    Get cache health and a summary of the flights currently cached.

    Never triggers an upstream fetch.
    """
    start_time = time.perf_counter()

    flight_service = current_app.config['FLIGHT_SERVICE']
    weather_service = current_app.config['WEATHER_SERVICE']

    entry = flight_service.cache.peek(FLIGHTS_CACHE_KEY)

    query_time_ms = (time.perf_counter() - start_time) * 1000

    return jsonify({
        'flights': {
            **flight_service.stats,
            'cached_source': entry.payload.source.value if entry else None,
            'fleet': fleet_summary(flight_service.cached_flights()),
        },
        'weather': {
            'cache': weather_service.cache.stats,
        },
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'query_time_ms': round(query_time_ms, 2),
    })
