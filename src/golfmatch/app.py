"""Application initialization."""

import logging
from typing import Any

from flask import Flask
from flask import g
from flask import jsonify
from flask import request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from golfmatch.api.backend import BackendClient
from golfmatch.api.overpass import OverpassClient
from golfmatch.config.logging import setup_logging
from golfmatch.config.logging_config import CorrelationConfig
from golfmatch.config.logging_filters import correlation_id
from golfmatch.config.logging_filters import new_correlation_id
from golfmatch.config.settings import ConfigurationManager
from golfmatch.config.validation import validate_config
from golfmatch.exceptions import APIError
from golfmatch.exceptions import AuthError
from golfmatch.exceptions import BackendNotConfiguredError
from golfmatch.exceptions import GolfMatchError
from golfmatch.exceptions import NotFoundError
from golfmatch.exceptions import ValidationError
from golfmatch.web import BLUEPRINTS
from golfmatch.web.context import EXTENSION_KEY
from golfmatch.web.context import Services

logger = logging.getLogger(__name__)

# Most specific first
ERROR_STATUS: list[tuple[type[GolfMatchError], int]] = [
    (ValidationError, 400),
    (AuthError, 401),
    (NotFoundError, 404),
    (BackendNotConfiguredError, 503),
    (APIError, 502),
]

def status_for(error: GolfMatchError) -> int:
    """HTTP status for an application error."""
    for error_type, status in ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    return 500

def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(GolfMatchError)
    def handle_app_error(error: GolfMatchError) -> Any:
        status = status_for(error)
        if status >= 500:
            logger.error(f"{request.method} {request.path} failed: {error}")
        else:
            logger.info(f"{request.method} {request.path} rejected: {error.message}")
        return jsonify(error.to_dict()), status

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException) -> Any:
        body = {
            "error": (error.name or "http_error").lower().replace(" ", "_"),
            "message": error.description,
            "details": {}
        }
        return jsonify(body), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception) -> Any:
        logger.error(f"Unhandled error on {request.method} {request.path}: {error}", exc_info=True)
        body = {"error": "server_error", "message": "Internal server error", "details": {}}
        return jsonify(body), 500

def _register_correlation(app: Flask, header_name: str) -> None:
    @app.before_request
    def assign_correlation_id() -> None:
        g.correlation_id = new_correlation_id(request.headers.get(header_name))

    @app.after_request
    def echo_correlation_id(response: Any) -> Any:
        response.headers[header_name] = g.get('correlation_id') or correlation_id.get()
        return response

def create_app(
    config_dir: str | None = None,
    testing: bool = False,
    dev_mode: bool = False,
    verbose: bool = False,
    log_file: str | None = None,
    backend: BackendClient | None = None,
    overpass: OverpassClient | None = None
) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_dir: Directory holding an optional config.yaml
        testing: Flask testing mode, logging setup is left to the caller
        dev_mode: Development logging
        verbose: Verbose logging
        log_file: Log file path, overrides the configured one
        backend: Backend client to use instead of one built from config
        overpass: Map-data client to use instead of one built from config
    """
    config = ConfigurationManager().load_config(config_dir, dev_mode=dev_mode, verbose=verbose)
    validate_config(config)

    if not testing:
        setup_logging(config, dev_mode=dev_mode, verbose=verbose, log_file=log_file)

    app = Flask(__name__)
    app.config['TESTING'] = testing
    app.json.sort_keys = False

    server = config.server
    CORS(app, resources={r"/api/*": {"origins": server.get('cors_origins', [])}})

    if backend is None and config.backend_configured:
        backend = BackendClient.from_config(config)
    app.extensions[EXTENSION_KEY] = Services.build(config, backend, overpass)

    correlation = CorrelationConfig(**config.global_config.get('logging', {}).get('correlation', {}))
    if correlation.enabled:
        _register_correlation(app, correlation.header_name)

    _register_error_handlers(app)
    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint)

    logger.info(f"GolfMatch API ready ({'demo mode' if config.demo_mode else 'backend configured'})")
    return app
