"""HTTP endpoints package."""
from flask import Blueprint

pump_bp = Blueprint('pump', __name__)
api_bp = Blueprint('api', __name__, url_prefix='/api')

# Import all endpoints to register routes
from pumpswitch.api import pump, status
