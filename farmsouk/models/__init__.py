# farmsouk/models/__init__.py
from .base import db, utcnow, new_public_id
from .enums import ProductStatusEnum, ProductSourceEnum, OrderStatusEnum
from .farmer_models import Farmer, FarmerSession
from .product_models import Product
from .order_models import Order
