import logging
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from flask import Flask, request, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from pressure_tracker.config import load_config
from pressure_tracker.errors import (
    EmptyUpdateError, NotFoundError, StartupError, StoreError, ValidationError,
)
from pressure_tracker.utils.dates import isoformat_utc

logger = logging.getLogger(__name__)

db = SQLAlchemy()
migrate = Migrate()


def create_app(config=None, store=None):
    """Build the Flask application.

    Args:
        config: optional mapping of config overrides applied after the
            environment-derived values
        store: optional measurement store; defaults to a MeasurementStore
            over the Flask-SQLAlchemy session
    """
    app = Flask(__name__)

    app.config.update(load_config())
    if config:
        app.config.update(config)

    try:
        app.config['STATS_TZINFO'] = ZoneInfo(app.config['STATS_TIMEZONE'])
    except (ZoneInfoNotFoundError, ValueError) as err:
        raise StartupError(f"Unknown STATS_TIMEZONE {app.config['STATS_TIMEZONE']!r}") from err

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    if store is None:
        from pressure_tracker.store import MeasurementStore
        store = MeasurementStore(db.session)
    app.extensions['measurement_store'] = store

    # CORS: no configured origins means any origin
    api_prefix = app.config['API_PREFIX'].rstrip('/')
    origins = app.config['CORS_ORIGINS'] or '*'
    CORS(app, resources={rf"{api_prefix}/*": {"origins": origins}}, supports_credentials=True)

    # Validate Content-Type on POST/PATCH requests
    @app.before_request
    def validate_content_type():
        if request.method in ('POST', 'PATCH'):
            content_type = request.content_type or ''
            if 'application/json' not in content_type:
                return jsonify({'error': 'Content-Type must be application/json'}), 415

    register_error_handlers(app)

    # Setup audit logging
    from pressure_tracker.utils.audit_logger import setup_audit_logging
    setup_audit_logging(app)

    # Register blueprints
    from pressure_tracker.routes.measurements import measurements_bp
    from pressure_tracker.routes.stats import stats_bp

    app.register_blueprint(measurements_bp, url_prefix=api_prefix)
    app.register_blueprint(stats_bp, url_prefix=api_prefix)

    # Health check endpoint
    @app.route(f'{api_prefix}/health')
    def health():
        return {'status': 'ok', 'time': isoformat_utc(datetime.now(timezone.utc))}, 200

    @app.cli.command('init-db')
    def init_db_command():
        """Create the measurements table and check connectivity."""
        init_database(app)
        print('Database ready.')

    return app


def register_error_handlers(app):
    """Map application errors to JSON responses."""

    @app.errorhandler(EmptyUpdateError)
    def handle_empty_update(err):
        return jsonify({'error': err.errors[0]}), 400

    @app.errorhandler(ValidationError)
    def handle_validation_error(err):
        return jsonify({'errors': err.errors}), 400

    @app.errorhandler(NotFoundError)
    def handle_not_found(err):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        return jsonify({'error': err.description}), err.code

    @app.errorhandler(StoreError)
    @app.errorhandler(Exception)
    def handle_unexpected_error(err):
        logger.exception('Unhandled error')
        return jsonify({'error': 'Internal server error', 'details': str(err)}), 500


def init_database(app):
    """Create missing tables and run a connectivity check.

    Raises:
        StartupError: if either step fails.
    """
    from pressure_tracker import models  # noqa: F401  registers tables

    with app.app_context():
        try:
            db.create_all()
            app.extensions['measurement_store'].ping()
        except Exception as err:
            raise StartupError(f'Database initialization failed: {err}') from err

        logger.info('Database ready at %s', db.engine.url.render_as_string(hide_password=True))
