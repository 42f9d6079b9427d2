# farmsouk/farmers/public_routes.py
from flask import jsonify

from . import farmers_bp
from ..services import CatalogService, FarmerAuthService


@farmers_bp.route('/<string:farmer_id>/public', methods=['GET'])
def get_public_profile(farmer_id):
    """Public seller page: contact card plus approved listings."""
    farmer = FarmerAuthService().get_public_profile(farmer_id)
    products = CatalogService().get_public_by_farmer(farmer_id)
    return jsonify(farmer=farmer, products=[p.to_dict() for p in products]), 200
