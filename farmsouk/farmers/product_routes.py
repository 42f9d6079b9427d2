# farmsouk/farmers/product_routes.py
# Seller dashboard: submissions and the seller's own listings, any status.
from flask import jsonify, g

from . import farmers_bp
from ..services import CatalogService, ModerationService
from ..utils import get_json_body, farmer_required


@farmers_bp.route('/products', methods=['POST'])
@farmer_required
def submit_product():
    slug = CatalogService().create_pending(g.current_farmer, get_json_body())
    return jsonify(ok=True, slug=slug), 201


@farmers_bp.route('/products', methods=['GET'])
@farmer_required
def list_my_products():
    products = CatalogService().list_owned_by_farmer(g.current_farmer.id)
    return jsonify([p.to_dict() for p in products]), 200


@farmers_bp.route('/products/<string:slug>', methods=['DELETE'])
@farmer_required
def delete_my_product(slug):
    ModerationService().self_delete(slug, g.current_farmer.id)
    return jsonify(ok=True), 200
