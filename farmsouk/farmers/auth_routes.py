# farmsouk/farmers/auth_routes.py
from flask import jsonify, g

from . import farmers_bp
from ..errors import Unauthorized
from ..services import FarmerAuthService
from ..utils import get_json_body, get_bearer_token, farmer_required


@farmers_bp.route('/register', methods=['POST'])
def register():
    """Creates a seller account and returns a first session token."""
    data = get_json_body()
    token, farmer = FarmerAuthService().register(
        name=data.get('name'),
        phone=data.get('phone'),
        city=data.get('city'),
        password=data.get('password')
    )
    return jsonify(token=token, farmer=farmer), 201


@farmers_bp.route('/login', methods=['POST'])
def login():
    data = get_json_body()
    token, farmer = FarmerAuthService().login(data.get('phone'), data.get('password'))
    return jsonify(token=token, farmer=farmer), 200


@farmers_bp.route('/me', methods=['GET'])
@farmer_required
def me():
    return jsonify(farmer=g.current_farmer.to_dict()), 200


@farmers_bp.route('/logout', methods=['POST'])
def logout():
    # Not behind farmer_required: logging out an already-dead token is a no-op.
    token = get_bearer_token()
    if not token:
        raise Unauthorized()
    FarmerAuthService().logout(token)
    return jsonify(ok=True), 200
