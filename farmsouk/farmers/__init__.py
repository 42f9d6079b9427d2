# farmsouk/farmers/__init__.py
from flask import Blueprint

farmers_bp = Blueprint('farmers_bp', __name__, url_prefix='/api/farmers')

# Import routes after blueprint creation to avoid circular imports
from . import auth_routes
from . import product_routes
from . import public_routes
