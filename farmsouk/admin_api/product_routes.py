# farmsouk/admin_api/product_routes.py
# Moderation queue and transitions.
from flask import jsonify

from . import admin_api_bp
from ..services import CatalogService, ModerationService
from ..utils import admin_required


@admin_api_bp.route('/pending-products', methods=['GET'])
@admin_required
def get_pending_products():
    return jsonify(CatalogService().list_pending()), 200


@admin_api_bp.route('/products/<string:slug>/approve', methods=['POST'])
@admin_required
def approve_product(slug):
    ModerationService().approve(slug)
    return jsonify(ok=True), 200


@admin_api_bp.route('/products/<string:slug>/reject', methods=['POST'])
@admin_required
def reject_product(slug):
    ModerationService().reject(slug)
    return jsonify(ok=True), 200
