# farmsouk/models/product_models.py
from .base import db, utcnow
from .enums import ProductStatusEnum, ProductSourceEnum


class Product(db.Model):
    __tablename__ = 'products'
    id = db.Column(db.String(32), primary_key=True)
    slug = db.Column(db.String(170), unique=True, nullable=False, index=True)
    title_fr = db.Column(db.String(120), nullable=False)
    title_ar = db.Column(db.String(120), nullable=False)
    category = db.Column(db.String(40), nullable=False, index=True)
    city = db.Column(db.String(80), nullable=False, index=True)
    price_mad = db.Column(db.Integer, nullable=False)
    weight_kg = db.Column(db.Float, nullable=True)
    age_months = db.Column(db.Integer, nullable=True)
    gender = db.Column(db.String(20), nullable=True)
    certified = db.Column(db.Boolean, default=False, nullable=False)
    delivery = db.Column(db.Boolean, default=True, nullable=False)
    images = db.Column(db.JSON, nullable=False, default=list)
    description_fr = db.Column(db.Text, nullable=False)
    description_ar = db.Column(db.Text, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)
    # Null for seed rows.
    farmer_id = db.Column(db.String(32), db.ForeignKey('farmers.id'), nullable=True, index=True)
    # Null is read as approved (legacy seed rows).
    status = db.Column(db.Enum(ProductStatusEnum, name="product_status_enum"), nullable=True, default=ProductStatusEnum.APPROVED, index=True)
    source = db.Column(db.Enum(ProductSourceEnum, name="product_source_enum"), nullable=False, default=ProductSourceEnum.SEED, index=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)

    farmer = db.relationship('Farmer', back_populates='products')

    @property
    def effective_status(self):
        return self.status or ProductStatusEnum.APPROVED

    def to_dict(self):
        return {
            "id": self.id, "slug": self.slug,
            "title_fr": self.title_fr, "title_ar": self.title_ar,
            "category": self.category, "city": self.city,
            "price_mad": self.price_mad, "weight_kg": self.weight_kg,
            "age_months": self.age_months, "gender": self.gender,
            "certified": bool(self.certified), "delivery": bool(self.delivery),
            "images": list(self.images or []),
            "description_fr": self.description_fr, "description_ar": self.description_ar,
            "is_active": bool(self.is_active),
            "farmer_id": self.farmer_id,
            "status": self.effective_status.value,
            "source": self.source.value if self.source else ProductSourceEnum.SEED.value,
            "created_at": self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self): return f'<Product {self.slug}>'
