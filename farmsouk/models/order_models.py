# farmsouk/models/order_models.py
from .base import db, utcnow
from .enums import OrderStatusEnum


class Order(db.Model):
    """
    Checkout record. `items` is a frozen snapshot of
    `{slug, title_fr, title_ar, price_mad, qty}` taken from the catalog at
    purchase time; later catalog edits never touch it.
    """
    __tablename__ = 'orders'
    id = db.Column(db.String(32), primary_key=True)
    customer_name = db.Column(db.String(120), nullable=False)
    phone = db.Column(db.String(40), nullable=False)
    city = db.Column(db.String(80), nullable=False)
    address = db.Column(db.String(220), nullable=False)
    notes = db.Column(db.String(500), nullable=True)
    items = db.Column(db.JSON, nullable=False)
    subtotal_mad = db.Column(db.Integer, nullable=False)
    # Plain string: fulfilment tooling outside this service owns the other values.
    status = db.Column(db.String(30), nullable=False, default=OrderStatusEnum.NEW.value, index=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)

    def to_dict(self):
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "customer_name": self.customer_name, "phone": self.phone,
            "city": self.city, "address": self.address, "notes": self.notes,
            "subtotal_mad": self.subtotal_mad, "status": self.status,
            "items": [dict(item) for item in (self.items or [])]
        }

    def __repr__(self): return f'<Order {self.id}>'
