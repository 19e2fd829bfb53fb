"""Flask application factory for the ESHS compliance dashboard API."""
from flask import Flask, jsonify
import logging
from pathlib import Path
from .models import db
from .config import load_config
from .gateway import PersistenceGateway
from .services.cloud_storage import ProxyUploadStorage, PresignedUploadStorage
from .blueprints import (
    organization, emergency, documents, risks, programs, training,
    resource_efficiency, communications, uploads, health,
)
from .cli import init_db_command, check_references_command
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(test_config=None):
    """Flask application factory for the ESHS dashboard API.

    Creates and configures a Flask application instance with:
    - SQLAlchemy database integration behind a persistence gateway
    - Attachment storage (proxied and pre-signed uploads)
    - Blueprint registration for API endpoints
    - CLI command registration
    - Logging configuration

    Args:
        test_config (dict, optional): Configuration overrides for testing

    Returns:
        Flask: Configured Flask application instance
    """
    # Setup logging first
    setup_logging()
    logger.info("Starting Flask application initialization")

    app = Flask(__name__, instance_relative_config=True)
    logger.debug(f"Flask app created with instance path: {app.instance_path}")

    app.config.from_mapping(load_config())

    if test_config is None:
        # Load the instance config, if it exists, when not testing
        config_loaded = app.config.from_pyfile('config.py', silent=True)
        if config_loaded:
            logger.info("Loaded configuration from instance/config.py")
        else:
            logger.debug("No instance config file found, using environment defaults")
    else:
        # Load the test config if passed in
        app.config.from_mapping(test_config)
        logger.info("Loaded test configuration")

    # Ensure the instance folder exists
    try:
        Path(app.instance_path).mkdir(parents=True, exist_ok=True)
        logger.debug(f"Created instance directory: {app.instance_path}")
    except OSError:
        logger.debug(f"Instance directory already exists: {app.instance_path}")

    logger.info(f"Using database URI: {app.config['SQLALCHEMY_DATABASE_URI']}")
    db.init_app(app)
    logger.info("SQLAlchemy database initialized")

    gateway = PersistenceGateway(db)
    proxy_storage = ProxyUploadStorage(app.config)
    presigned_storage = PresignedUploadStorage(app.config)
    app.extensions['eshs_gateway'] = gateway

    # Register blueprints
    logger.info("Registering API blueprints")
    for module in (organization, emergency, programs, training, resource_efficiency, communications, health):
        app.register_blueprint(module.create_blueprint(gateway))
        logger.debug(f"Registered {module.__name__.rsplit('.', 1)[-1]} blueprint")
    # Records holding attachment URLs remove replaced files through the proxy storage
    for module in (documents, risks):
        app.register_blueprint(module.create_blueprint(gateway, proxy_storage))
        logger.debug(f"Registered {module.__name__.rsplit('.', 1)[-1]} blueprint")
    app.register_blueprint(uploads.create_blueprint(proxy_storage, presigned_storage))
    logger.debug("Registered uploads blueprint")
    logger.info("All API blueprints registered successfully")

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'error': 'Method not allowed'}), 405

    # Register CLI commands
    app.cli.add_command(init_db_command)
    app.cli.add_command(check_references_command)
    logger.info("CLI commands registered: init-db, check-references")

    logger.info("Flask application initialization completed successfully")
    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=True)
