# farmsouk/admin_api/__init__.py
from flask import Blueprint

admin_api_bp = Blueprint('admin_api_bp', __name__, url_prefix='/api/admin')

# Import all the route modules to register their routes with the blueprint
from . import order_routes
from . import product_routes
