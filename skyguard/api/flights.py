"""
Flight data API endpoints.

Provides endpoints for:
- GET /api/flights - Current flights tagged with their source
"""

import logging

from flask import Blueprint, current_app, jsonify

logger = logging.getLogger(__name__)

flights_bp = Blueprint('flights', __name__, url_prefix='/api/flights')


@flights_bp.route('', methods=['GET'])
def list_flights():
    """
    List current flights.

    Response:
        {"flights": [...], "source": "cache" | "live" | "simulated"}

    Always answers 200: upstream problems degrade to simulated data.
    """
    service = current_app.config['FLIGHT_SERVICE']

    try:
        feed = service.get_flights()
    except Exception as e:
        logger.exception(f'flights fatal: {e}')
        feed = service.fatal_fallback()

    return jsonify(feed.to_dict())
