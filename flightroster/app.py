"""
FlightRoster Flask Application.

Main entry point for the web application. Bootstraps, in order:
- Document store connection
- Flight repository
- Optional sample-data seed
- API routes and error envelopes

Usage:
    python -m flightroster.app

Or with gunicorn:
    gunicorn 'flightroster.app:create_app()'
"""

import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from flightroster.api import flights_bp, passengers_bp
from flightroster.api.responses import error_response, status_response
from flightroster.config import config
from flightroster.errors import FlightRosterError
from flightroster.models import FlightStore
from flightroster.services import FlightRepository, seed_sample_flights

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def create_app(store: Optional[FlightStore] = None, seed: Optional[bool] = None) -> Flask:
    """
    Application factory for Flask.

    Args:
        store: Document store handle. Built from DATABASE_URL when omitted.
               Connected here if it is not connected yet.
        seed: Whether to insert the sample flights into an empty store.
              Defaults to SEED_SAMPLE_DATA. Set to False for testing.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Configuration
    app.config['SECRET_KEY'] = config.secret_key
    app.json.sort_keys = False

    # Enable CORS for API endpoints
    CORS(app, resources={r'/api/*': {'origins': list(config.server.cors_origins)}})

    # Document store and repository
    if store is None:
        store = FlightStore(config.database.url, echo=config.debug)
    store.connect()
    repository = FlightRepository(store)

    app.config['FLIGHT_STORE'] = store
    app.config['FLIGHT_REPOSITORY'] = repository

    if seed is None:
        seed = config.seed_sample_data
    if seed:
        seed_sample_flights(repository)

    # Register API blueprints
    app.register_blueprint(flights_bp)
    app.register_blueprint(passengers_bp)

    @app.route('/health')
    def health():
        """Liveness check."""
        return status_response('Server is running')

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(FlightRosterError)
    def domain_error(e: FlightRosterError):
        if e.status_code >= 500:
            logger.error(f'Server error: {e.message}')
            return error_response('Internal server error', e.status_code)
        return error_response(e.message, e.status_code)

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        return error_response(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def server_error(e: Exception):
        logger.exception(f'Unhandled error: {e}')
        return error_response('Internal server error', 500)

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()
    store: FlightStore = app.config['FLIGHT_STORE']
    port = config.server.port

    logger.info(f'Starting FlightRoster on http://localhost:{port}')
    logger.info(f'Health check: http://localhost:{port}/health')

    try:
        app.run(
            host=config.server.host,
            port=port,
            debug=config.debug,
            use_reloader=False,  # The reloader would open a second store
        )
    finally:
        store.disconnect()


if __name__ == '__main__':
    run_development_server()
