"""
Weather API endpoints.

Provides endpoints for:
- GET /api/metar?icao=KSEA - Latest METAR for an airport
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from skyguard.ingestion.errors import ValidationError
from skyguard.services.weather import WeatherService

logger = logging.getLogger(__name__)

weather_bp = Blueprint('weather', __name__, url_prefix='/api')


@weather_bp.route('/metar', methods=['GET'])
def get_metar():
    """
    Get the latest METAR observation.

    Query parameters:
    - icao: airport code, required. Uppercased and stripped to [A-Z0-9];
      fewer than 4 remaining characters is a bad request.

    Response:
        {"icao": str, "metar": str, "fetchedAt": ISO-8601}
    An empty metar string means the report is currently unavailable.
    """
    raw_icao = request.args.get('icao')
    service = current_app.config['WEATHER_SERVICE']

    try:
        observation = service.get_observation(raw_icao)
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.exception(f'metar error: {e}')
        observation = WeatherService.empty_observation(raw_icao)

    return jsonify(observation.to_dict())
