"""
Widget Sample App
Flask application factory
"""
import os
import logging
from flask import Flask
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .extensions import db, migrate, compress
from .config import get_config, validate_config
from .utils.logging_config import setup_logging
from .utils.errors import error_response, ErrorCode, bad_request, not_found, internal_error
from .utils.exceptions import SampleAppError

logger = logging.getLogger(__name__)


def create_app(config_name: str = None) -> Flask:
    """
    Application factory for creating Flask app instances.

    Args:
        config_name: Configuration environment (development, production, testing)

    Returns:
        Configured Flask application
    """
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    # Setup logging before anything else
    setup_logging()

    validate_config(config_name)

    app = Flask(__name__)
    app.config.from_object(get_config(config_name))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    compress.init_app(app)

    # Initialize caching (Redis with graceful fallback)
    from .utils.cache import init_cache
    init_cache(app)

    CORS(app, origins=app.config['CORS_ORIGINS'], allow_headers=['Content-Type', 'Authorization', 'X-Request-ID'])

    # Request logging and X-Request-ID tracking
    from .middleware import init_request_logging
    init_request_logging(app)

    # Register blueprints
    register_blueprints(app)

    # Register CLI commands
    from .commands import init_app as init_commands
    init_commands(app)

    # Register error handlers
    register_error_handlers(app)

    # Create tables and seed sample data (AUTO_INIT_DB / SEED_ON_EMPTY)
    from .services.seed import init_database
    init_database(app)

    logger.info('Widget sample app created (config=%s, routes=%d)',
                config_name, len(list(app.url_map.iter_rules())))
    return app


def register_blueprints(app: Flask) -> None:
    """Register all API blueprints."""
    from .api.status import status_bp
    from .api.widget_types import widget_types_bp
    from .api.widgets import widgets_bp
    from .api.cache_demo import cache_demo_bp

    # Index, health, status and dashboard
    app.register_blueprint(status_bp)

    # CRUD routes
    app.register_blueprint(widget_types_bp, url_prefix='/api/widget-types')
    app.register_blueprint(widgets_bp, url_prefix='/api/widgets')

    # Two layer cache demonstration routes
    app.register_blueprint(cache_demo_bp, url_prefix='/api/cache')


def register_error_handlers(app: Flask) -> None:
    """Register error handlers."""

    @app.errorhandler(SampleAppError)
    def handle_domain_error(error):
        if error.status_code >= 500:
            db.session.rollback()
        return error_response(error.message, error.code, error.status_code, log_error=error.status_code >= 500)

    @app.errorhandler(400)
    def handle_bad_request(error):
        return bad_request(error.description)

    @app.errorhandler(404)
    def handle_not_found(error):
        return not_found(error.description)

    @app.errorhandler(405)
    def method_not_allowed(error):
        return error_response(error.description, ErrorCode.METHOD_NOT_ALLOWED, 405, log_error=False)

    @app.errorhandler(Exception)
    def unhandled_error(error):
        if isinstance(error, HTTPException):
            return error_response(error.description, error.name.upper().replace(' ', '_'), error.code,
                                  log_error=False)
        db.session.rollback()
        logger.exception('Unhandled error: %s', error)
        return internal_error(details={'type': type(error).__name__})
