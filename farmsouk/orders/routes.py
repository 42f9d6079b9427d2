# farmsouk/orders/routes.py
from flask import jsonify

from . import orders_bp
from ..services import OrderService
from ..utils import get_json_body


@orders_bp.route('', methods=['POST'])
def create_order():
    """
    Guest checkout. Body: customer fields plus `items: [{slug, qty}]`.
    Client-side prices or titles in `items` are ignored.
    """
    data = get_json_body()
    order_id = OrderService().place_order(customer=data, cart_items=data.get('items'))
    return jsonify(id=order_id), 201
