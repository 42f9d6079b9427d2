# farmsouk/services/order_service.py
from flask import current_app

from .. import db
from ..errors import InvalidInput, EmptyCart, NoValidItems, NotFound
from ..models import Order, OrderStatusEnum, new_public_id
from ..utils import sanitize_input, parse_int
from .catalog_service import CatalogService

CUSTOMER_FIELD_LIMITS = {
    'customer_name': 120,
    'phone': 40,
    'city': 80,
    'address': 220,
}
NOTES_MAX_LENGTH = 500


class OrderService:
    """
    Checkout. Prices and titles always come from the catalog row at purchase
    time; anything the client sends besides `slug` and `qty` is ignored.
    """

    def __init__(self, session=None):
        self.session = session or db.session
        self.config = current_app.config
        self.catalog = CatalogService(session=self.session)

    def _clean_customer(self, customer):
        cleaned = {field: sanitize_input(customer.get(field), limit) for field, limit in CUSTOMER_FIELD_LIMITS.items()}
        missing = [field for field, value in cleaned.items() if not value]
        if missing:
            raise InvalidInput(f"Missing fields: {', '.join(missing)}")
        cleaned['notes'] = sanitize_input(customer.get('notes'), NOTES_MAX_LENGTH) or None
        return cleaned

    def _requested_lines(self, cart_items):
        """Yields (slug, qty) for well-formed lines; malformed ones are dropped."""
        max_qty = self.config['ORDER_MAX_QTY']
        for item in cart_items:
            if not isinstance(item, dict):
                continue
            slug = sanitize_input(item.get('slug'), 170)
            raw_qty = item.get('qty')
            qty = 1 if raw_qty is None else parse_int(raw_qty)
            if not slug or qty is None or not (1 <= qty <= max_qty):
                continue
            yield slug, qty

    def place_order(self, customer, cart_items):
        """
        Validates the cart, snapshots authoritative prices and stores one order.
        Catalog reads and the insert share one transaction; product rows are
        locked where the backend supports it. Returns the order id.
        """
        cleaned = self._clean_customer(customer or {})
        if not isinstance(cart_items, list) or not cart_items:
            raise EmptyCart()

        snapshot = []
        subtotal = 0
        try:
            for slug, qty in self._requested_lines(cart_items):
                try:
                    product = self.catalog.get_public_by_slug(slug, for_update=True)
                except NotFound:
                    continue
                snapshot.append({
                    "slug": product.slug,
                    "title_fr": product.title_fr,
                    "title_ar": product.title_ar,
                    "price_mad": product.price_mad,
                    "qty": qty
                })
                subtotal += product.price_mad * qty

            if not snapshot:
                raise NoValidItems()

            order = Order(
                id=new_public_id('ord'),
                items=snapshot,
                subtotal_mad=subtotal,
                status=OrderStatusEnum.NEW.value,
                **cleaned
            )
            self.session.add(order)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        current_app.logger.info(f"Order {order.id} placed: {len(snapshot)} line(s), {subtotal} MAD.")
        return order.id

    def list_orders(self):
        orders = self.session.query(Order).order_by(Order.created_at.desc()).limit(self.config['ADMIN_ORDER_LIST_LIMIT']).all()
        return [o.to_dict() for o in orders]
