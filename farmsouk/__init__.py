# farmsouk/__init__.py
import os
import logging
from logging.handlers import RotatingFileHandler
from flask import Flask, request, jsonify
from flask.logging import default_handler
from flask_cors import CORS
from flask_talisman import Talisman
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from .config import get_config_by_name
from .errors import MarketplaceError
from .models.base import db

# Initialize extensions without app object yet
migrate = Migrate()
talisman = Talisman()

LOG_FORMAT = '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'


def _configure_logging(app):
    log_level_str = app.config.get('LOG_LEVEL', 'INFO').upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    log_file = app.config.get('LOG_FILE')
    if log_file and not app.testing:
        handler = RotatingFileHandler(log_file, maxBytes=1024 * 1024 * 100, backupCount=20)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(log_level)
    # The logger is shared by name across app instances; the latest configuration wins.
    for existing in list(app.logger.handlers):
        app.logger.removeHandler(existing)
        if existing is not default_handler:
            existing.close()
    app.logger.addHandler(handler)
    app.logger.setLevel(logging.DEBUG if app.debug else log_level)


def _register_error_handlers(app):
    @app.errorhandler(MarketplaceError)
    def marketplace_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def http_error(error):
        return jsonify(error=error.description or error.name, success=False), error.code

    # Per-request boundary: the failing request gets a 500, the process keeps serving.
    @app.errorhandler(Exception)
    def internal_server_error(error):
        db.session.rollback()
        app.logger.error(f"Internal Server Error on {request.method} {request.path}: {error}", exc_info=True)
        return jsonify(error="Internal server error", success=False), 500


def create_app(config_name=None):
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'default')

    app_config = get_config_by_name(config_name)

    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    app = Flask(__name__, instance_path=os.path.join(project_root, 'instance'), static_folder=None)
    app.config.from_object(app_config)
    app.json.ensure_ascii = False

    _configure_logging(app)
    app.logger.info(f"Farm Souk API starting with config: {config_name}")
    app.logger.info(f"Database backend: {app.config['SQLALCHEMY_DATABASE_URI'].split(':', 1)[0]}")

    # Initialize extensions with app object
    db.init_app(app)
    migrate.init_app(app, db)

    talisman.init_app(
        app,
        content_security_policy=app.config.get('CONTENT_SECURITY_POLICY'),
        force_https=app.config.get('TALISMAN_FORCE_HTTPS', False),
        strict_transport_security=app.config.get('TALISMAN_FORCE_HTTPS', False),
        frame_options='DENY',
        referrer_policy='strict-origin-when-cross-origin',
    )

    CORS(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS", "*").split(',')}})

    from . import models  # noqa: F401  (registers tables for Flask-Migrate)

    from .products import products_bp
    app.register_blueprint(products_bp)

    from .farmers import farmers_bp
    app.register_blueprint(farmers_bp)

    from .orders import orders_bp
    app.register_blueprint(orders_bp)

    from .admin_api import admin_api_bp
    app.register_blueprint(admin_api_bp)

    from .database import register_db_commands
    register_db_commands(app)

    app.logger.info("Blueprints registered.")

    @app.after_request
    def log_request(response):
        app.logger.debug(f"{request.method} {request.path} -> {response.status_code}")
        return response

    @app.route('/api', methods=['GET'])
    def api_root():
        return jsonify({
            "message": "Welcome to the Farm Souk API!",
            "version": app.config.get("API_VERSION", "v1.0")
        })

    @app.route('/api/meta', methods=['GET'])
    def api_meta():
        return jsonify(whatsappNumber=app.config.get('WHATSAPP_NUMBER'))

    _register_error_handlers(app)
    return app
