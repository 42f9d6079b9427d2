# farmsouk/products/routes.py
# Public catalog: only active, approved products are ever returned here.
from flask import request, jsonify

from . import products_bp
from ..services import CatalogService


@products_bp.route('', methods=['GET'])
def list_products():
    products = CatalogService().list_public(
        category=request.args.get('category'),
        city=request.args.get('city'),
        query=request.args.get('q')
    )
    return jsonify([p.to_dict() for p in products]), 200


@products_bp.route('/<string:slug>', methods=['GET'])
def get_product(slug):
    return jsonify(CatalogService().get_public_by_slug(slug).to_dict()), 200
