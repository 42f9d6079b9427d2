# farmsouk/admin_api/order_routes.py
from flask import jsonify

from . import admin_api_bp
from ..services import OrderService
from ..utils import admin_required


@admin_api_bp.route('/orders', methods=['GET'])
@admin_required
def get_orders_admin():
    """Retrieves the most recent orders with their item snapshots."""
    return jsonify(OrderService().list_orders()), 200
