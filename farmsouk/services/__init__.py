# farmsouk/services/__init__.py
from .farmer_auth_service import FarmerAuthService, FarmerIdentity
from .catalog_service import CatalogService
from .moderation_service import ModerationService
from .order_service import OrderService
