"""
SkyGuard Flask Application.

Main entry point for the web application. Initializes:
- Event log schema
- Flight and weather caches with their upstream adapters
- API routes
- Static dashboard serving
- Process-wide exception guard

Usage:
    python -m skyguard.app

Or with gunicorn:
    gunicorn "skyguard.app:create_app()"
"""

import logging
import os
import sys
import threading
from typing import Callable, Optional

from flask import Flask, jsonify, send_from_directory
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from skyguard.config import AppConfig, config as default_config
from skyguard.models import init_db
from skyguard.api import flights_bp, weather_bp, events_bp, metrics_bp
from skyguard.cache import FreshnessCache
from skyguard.ingestion import AdsbClient, MetarClient, ValidationError
from skyguard.services import FlightFeedService, WeatherService

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if default_config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def install_exception_guard() -> None:
    """
    Log uncaught exceptions instead of dying silently.

    Covers the main thread and any worker/background thread.
    """
    def log_uncaught(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logger.critical(f'Uncaught: {exc_value}', exc_info=(exc_type, exc_value, exc_traceback))

    def log_uncaught_thread(args):
        if args.exc_type is SystemExit:
            return
        logger.critical(
            f'Uncaught in thread {args.thread.name if args.thread else "?"}: {args.exc_value}',
            exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
        )

    sys.excepthook = log_uncaught
    threading.excepthook = log_uncaught_thread


def create_app(
    app_config: Optional[AppConfig] = None,
    flight_client: Optional[AdsbClient] = None,
    metar_client: Optional[MetarClient] = None,
    clock: Optional[Callable[[], float]] = None,
) -> Flask:
    """
    Application factory for Flask.

    Args:
        app_config: Configuration (module-level config if None)
        flight_client: ADS-B adapter (built from config if None)
        metar_client: METAR adapter (built from config if None)
        clock: Monotonic time source for both caches. Set for testing.

    Returns:
        Configured Flask application instance.
    """
    app_config = app_config or default_config

    app = Flask(
        __name__,
        static_folder=os.path.abspath(app_config.static_dir),
        static_url_path='/static',
    )

    # Configuration
    app.config['SECRET_KEY'] = app_config.secret_key
    app.config['MAX_CONTENT_LENGTH'] = app_config.storage.max_upload_bytes
    app.config['UPLOAD_DIR'] = app_config.storage.upload_dir

    # Enable CORS for API endpoints
    CORS(app, resources={r'/api/*': {'origins': '*'}})

    logger.info('Initializing event log...')
    init_db()

    # Caches are owned by this app instance and shared by its request threads
    cache_kwargs = {'clock': clock} if clock else {}
    flight_cache = FreshnessCache(
        ttl_seconds=app_config.flights.cache_ttl_seconds,
        name='flights',
        **cache_kwargs,
    )
    weather_cache = FreshnessCache(
        ttl_seconds=app_config.weather.cache_ttl_seconds,
        name='metar',
        **cache_kwargs,
    )

    flight_client = flight_client or AdsbClient(
        url=app_config.flights.url,
        timeout=app_config.upstream_timeout_seconds,
        max_flights=app_config.flights.max_live_flights,
    )
    metar_client = metar_client or MetarClient(
        base_url=app_config.weather.base_url,
        timeout=app_config.upstream_timeout_seconds,
    )

    app.config['FLIGHT_SERVICE'] = FlightFeedService(
        client=flight_client,
        cache=flight_cache,
        simulated_count=app_config.flights.simulated_count,
        fatal_fallback_count=app_config.flights.fatal_fallback_count,
    )
    app.config['WEATHER_SERVICE'] = WeatherService(client=metar_client, cache=weather_cache)

    # Register API blueprints
    app.register_blueprint(flights_bp)
    app.register_blueprint(weather_bp)
    app.register_blueprint(events_bp)
    app.register_blueprint(metrics_bp)

    @app.route('/api/health')
    def health():
        """Simple health check endpoint."""
        return {'ok': True}

    # -------------------------------------------------------------------------
    # Frontend routes
    # -------------------------------------------------------------------------

    @app.route('/')
    @app.route('/<path:path>')
    def index(path: str = ''):
        """Serve the dashboard for any non-API path."""
        if path.startswith('api/'):
            return {'error': 'Not found'}, 404
        return send_from_directory(app.static_folder, 'index.html')

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(ValidationError)
    def bad_request(e):
        return jsonify({'error': str(e)}), 400

    @app.errorhandler(404)
    def not_found(e):
        return {'error': 'Not found'}, 404

    @app.errorhandler(413)
    def too_large(e):
        return {'ok': False, 'error': 'File too large'}, 413

    @app.errorhandler(Exception)
    def server_error(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception(f'Server error: {e}')
        return {'error': 'Internal server error'}, 500

    return app


def run_development_server():
    """Run the development server."""
    install_exception_guard()
    app = create_app()

    port = default_config.port

    logger.info(f'SkyGuard backend listening on http://localhost:{port}')

    app.run(
        host='0.0.0.0',
        port=port,
        debug=default_config.debug,
        threaded=True,
        use_reloader=False,
    )


if __name__ == '__main__':
    run_development_server()
