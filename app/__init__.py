"""
App package for the prode bracket service
Contains the Flask application factory and the shared exception classes
"""

import logging
import os

from flask import Flask, jsonify

from constants import DEFAULT_LOG_LEVEL

__version__ = "1.0.0"

# --- Configuration ---
BASE_DIR = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
THIRD_PLACE_RULES_DIR = os.path.join(BASE_DIR, 'data', 'third_place_rules')


def create_app(config=None):
    app = Flask(__name__)
    app.config['SECRET_KEY'] = os.environ.get('PRODE_SECRET_KEY', 'your_secret_key_please_change_this')
    app.config['THIRD_PLACE_RULES_DIR'] = os.environ.get('PRODE_THIRD_PLACE_RULES_DIR', THIRD_PLACE_RULES_DIR)
    app.config['USE_LEGACY_THIRD_PLACE_RULES'] = os.environ.get('PRODE_USE_LEGACY_THIRD_PLACE_RULES', '1') != '0'
    app.config['LOG_LEVEL'] = os.environ.get('PRODE_LOG_LEVEL', DEFAULT_LOG_LEVEL)
    app.config['BASE_DIR'] = BASE_DIR
    if config:
        app.config.update(config)

    logging.basicConfig(level=app.config['LOG_LEVEL'])
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Blueprints are imported here, utils imports app.exceptions at module level
    from app.exceptions import ServiceError
    from routes.blueprints import bracket_bp

    app.register_blueprint(bracket_bp)

    @app.errorhandler(ServiceError)
    def handle_service_error(error):
        if error.status_code >= 500:
            app.logger.error(f"{error.code}: {error.message}")
        else:
            app.logger.info(f"{error.code}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    return app


__all__ = ['create_app']
