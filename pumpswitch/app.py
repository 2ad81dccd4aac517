"""Flask application factory."""
import logging
from typing import Callable, Optional

from flask import Flask, jsonify
from flask_cors import CORS

from pumpswitch.api import api_bp, pump_bp
from pumpswitch.config.config import PumpConfig
from pumpswitch.controllers.pump_controller import PumpController
from pumpswitch.safety.errors import InconsistentStateError

logger = logging.getLogger(__name__)


def create_app(config: PumpConfig, controller: PumpController,
               fatal_handler: Optional[Callable[[InconsistentStateError], None]] = None) -> Flask:
    """
    Create the Flask application serving the pump controls.

    Args:
        config: Runtime configuration
        controller: Pump controller shared with the watchdog
        fatal_handler: Called when a request finds the pump state inconsistent
    """
    app = Flask(__name__)

    # Enable CORS for all routes
    CORS(app)

    app.config['PUMP_CONFIG'] = config
    app.config['PUMP_CONTROLLER'] = controller
    app.config['PUMP_FATAL_HANDLER'] = fatal_handler

    # Register blueprints
    app.register_blueprint(pump_bp)
    app.register_blueprint(api_bp)

    @app.errorhandler(InconsistentStateError)
    def handle_inconsistent_state(e):
        logger.critical(f"Inconsistent pump state during request: {e}")
        handler = app.config.get('PUMP_FATAL_HANDLER')
        if handler:
            handler(e)
        return jsonify({
            'success': False,
            'error': f'Inconsistent pump state, pump powered off: {e}'
        }), 500

    return app
