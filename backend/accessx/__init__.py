"""AccessX Attendance - Application Factory."""
import logging
import os
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["500 per day", "100 per hour"]
)

def create_app(config_name: str = None, record_store=None, clock=None) -> Flask:
    """Application factory pattern.

    ``record_store`` and ``clock`` let callers inject the persistence
    backend and the wall clock used by the attendance window check.
    """
    app = Flask(__name__)

    # Load configuration
    from accessx.config import get_config
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)

    # Configure CORS
    CORS(app, origins=app.config.get('CORS_ORIGINS', ["*"]))

    # Setup logging
    setup_logging(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Setup database
    setup_database(app)

    # Build the process-wide service graph
    setup_services(app, record_store=record_store, clock=clock)

    # Add CLI commands
    register_commands(app)

    # Add health check
    @app.route('/health')
    def health_check():
        return jsonify({
            'status': 'healthy',
            'service': 'AccessX Attendance',
            'version': '1.0.0'
        })

    return app

def register_blueprints(app: Flask) -> None:
    """Register all application blueprints."""
    from accessx.api.auth import auth_bp
    from accessx.api.admin import admin_bp
    from accessx.api.student import student_bp
    from accessx.api.validator import validator_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(student_bp, url_prefix='/student')
    app.register_blueprint(validator_bp, url_prefix='/validator')

    # Swagger UI
    from flask_swagger_ui import get_swaggerui_blueprint
    from accessx.utils.swagger import SWAGGER_URL, API_URL, generate_swagger_spec

    @app.route(API_URL)
    def swagger_spec():
        """Serve Swagger/OpenAPI specification."""
        return jsonify(generate_swagger_spec())

    swaggerui_bp = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={'app_name': "AccessX Attendance API"}
    )
    app.register_blueprint(swaggerui_bp, url_prefix=SWAGGER_URL)

def register_error_handlers(app: Flask) -> None:
    """Register error handlers."""
    from accessx.errors import AttendanceError
    from accessx.utils.helpers import handle_error
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(AttendanceError)
    def handle_attendance_error(error):
        return handle_error(error.message, error.status_code, code=error.code)

    @app.errorhandler(404)
    def not_found(error):
        return handle_error(error, 404)

    @app.errorhandler(429)
    def rate_limited(error):
        return handle_error(error, 429)

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return handle_error(error, 500)

    @app.errorhandler(HTTPException)
    def handle_exception(e):
        return handle_error(e, e.code)

    # JWT error handlers
    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({
            'error': True,
            'message': 'Token has expired',
            'status_code': 401
        }), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return jsonify({
            'error': True,
            'message': 'Invalid token',
            'status_code': 401
        }), 401

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return jsonify({
            'error': True,
            'message': 'Authorization token required',
            'status_code': 401
        }), 401

def setup_logging(app: Flask) -> None:
    """Setup application logging."""
    level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO'))
    logging.getLogger('accessx').setLevel(level)

    if not app.debug and not app.testing:
        log_file = app.config.get('LOG_FILE', 'logs/app.log')
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(level)
        app.logger.addHandler(file_handler)
        logging.getLogger('accessx').addHandler(file_handler)

        app.logger.setLevel(level)
        app.logger.info('AccessX Attendance startup')

def setup_database(app: Flask) -> None:
    """Setup database connections."""
    with app.app_context():
        # Import all models
        from accessx.models import AttendanceSession, AttendanceRecord, Instructor

def setup_services(app: Flask, record_store=None, clock=None) -> None:
    """Construct the record store and services once per process."""
    from accessx.services import build_services
    from accessx.services.notification_service import SessionEventPublisher
    from accessx.store import create_record_store

    store = record_store or create_record_store(app.config.get('RECORD_STORE', 'sqlalchemy'))
    publisher = SessionEventPublisher.from_url(
        app.config.get('REDIS_URL'),
        channel=app.config.get('SESSION_EVENTS_CHANNEL', 'accessx:sessions')
    )
    app.extensions['record_store'] = store
    app.extensions['accessx'] = build_services(
        store,
        publisher=publisher,
        window_minutes=app.config.get('ATTENDANCE_WINDOW_MINUTES', 10),
        proximity_meters=app.config.get('PROXIMITY_MAX_DISTANCE_METERS', 100),
        badge_image=app.config.get('BADGE_IMAGE_URL'),
        badge_description=app.config.get('BADGE_DESCRIPTION'),
        clock=clock
    )

def register_commands(app: Flask) -> None:
    """Register CLI commands."""
    import click

    @app.cli.command('create-db')
    def create_db():
        """Create database tables."""
        db.create_all()
        click.echo('Database tables created.')

    @app.cli.command('drop-db')
    def drop_db():
        """Drop all database tables."""
        if click.confirm('Are you sure you want to drop all tables?'):
            db.drop_all()
            click.echo('Database tables dropped.')

    @app.cli.command('reset-db')
    def reset_db():
        """Reset database completely."""
        if click.confirm('This will delete all data and recreate tables. Continue?'):
            db.drop_all()
            db.create_all()
            click.echo('Database reset complete.')

    @app.cli.command('create-instructor')
    @click.option('--email', prompt='Instructor email')
    @click.option('--wallet', prompt='Wallet address')
    @click.password_option()
    def create_instructor(email, wallet, password):
        """Create an instructor account."""
        from accessx.services.auth_service import AuthService
        from accessx.errors import AttendanceError

        try:
            instructor = AuthService.register(email, password, wallet)
            click.echo(f'Instructor created: {instructor["email"]}')
        except AttendanceError as e:
            click.echo(f'Error creating instructor: {e.message}')
