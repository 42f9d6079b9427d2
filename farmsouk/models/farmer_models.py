# farmsouk/models/farmer_models.py
from .base import db, utcnow


class Farmer(db.Model):
    """
    Seller account. Rows are never hard-deleted; `is_active=False` blocks login.
    """
    __tablename__ = 'farmers'
    id = db.Column(db.String(32), primary_key=True)
    phone = db.Column(db.String(40), unique=True, nullable=False, index=True)
    name = db.Column(db.String(80), nullable=False)
    city = db.Column(db.String(80), nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    sessions = db.relationship('FarmerSession', back_populates='farmer', lazy='dynamic', cascade="all, delete-orphan")
    products = db.relationship('Product', back_populates='farmer', lazy='dynamic')

    def to_summary(self):
        return {"id": self.id, "name": self.name, "phone": self.phone, "city": self.city}

    def to_public_dict(self):
        return {
            "id": self.id, "name": self.name, "phone": self.phone, "city": self.city,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self): return f'<Farmer {self.phone}>'


class FarmerSession(db.Model):
    __tablename__ = 'farmer_sessions'
    token = db.Column(db.String(64), primary_key=True)
    farmer_id = db.Column(db.String(32), db.ForeignKey('farmers.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)

    farmer = db.relationship('Farmer', back_populates='sessions')

    def __repr__(self): return f'<FarmerSession farmer={self.farmer_id}>'
