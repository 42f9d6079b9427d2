# farmsouk/services/catalog_service.py
import uuid

from flask import current_app
from sqlalchemy import or_

from .. import db
from ..errors import InvalidInput, NotFound
from ..models import Farmer, Product, ProductStatusEnum, ProductSourceEnum, new_public_id
from ..utils import sanitize_input, parse_int, parse_number, is_https_url, escape_like, generate_slug


def public_filter():
    """Visibility rule shared by every public read: active and approved (null counts as approved)."""
    return (
        Product.is_active.is_(True),
        or_(Product.status.is_(None), Product.status == ProductStatusEnum.APPROVED)
    )


class CatalogService:
    """
    Product reads (public and owner-scoped) and seller submissions.
    Status and visibility changes after creation belong to ModerationService.
    """

    def __init__(self, session=None):
        self.session = session or db.session
        self.config = current_app.config

    @property
    def limit(self):
        return self.config['CATALOG_LIST_LIMIT']

    def list_public(self, category=None, city=None, query=None):
        q = self.session.query(Product).filter(*public_filter())

        category = sanitize_input(category, 40)
        if category and category != 'all':
            q = q.filter(Product.category == category)
        city = sanitize_input(city, 80)
        if city and city != 'all':
            q = q.filter(Product.city == city)
        term = sanitize_input(query, 120)
        if term:
            pattern = f"%{escape_like(term)}%"
            q = q.filter(or_(
                Product.title_fr.ilike(pattern, escape='\\'),
                Product.title_ar.ilike(pattern, escape='\\'),
                Product.description_fr.ilike(pattern, escape='\\'),
                Product.description_ar.ilike(pattern, escape='\\')
            ))

        return q.order_by(Product.created_at.desc()).limit(self.limit).all()

    def get_public_by_slug(self, slug, for_update=False):
        q = self.session.query(Product).filter(Product.slug == slug, *public_filter())
        if for_update:
            q = q.with_for_update()
        product = q.first()
        if not product:
            raise NotFound()
        return product

    def get_public_by_farmer(self, farmer_id):
        return self.session.query(Product).filter(
            Product.farmer_id == farmer_id,
            Product.source == ProductSourceEnum.FARMER,
            Product.status == ProductStatusEnum.APPROVED,
            Product.is_active.is_(True)
        ).order_by(Product.created_at.desc()).limit(self.limit).all()

    def list_owned_by_farmer(self, farmer_id):
        return self.session.query(Product).filter(
            Product.farmer_id == farmer_id,
            Product.source == ProductSourceEnum.FARMER
        ).order_by(Product.created_at.desc()).limit(self.limit).all()

    def list_pending(self):
        """Moderation queue with seller contact details."""
        rows = self.session.query(Product, Farmer.name, Farmer.phone)\
                           .outerjoin(Farmer, Farmer.id == Product.farmer_id)\
                           .filter(Product.source == ProductSourceEnum.FARMER,
                                   Product.status == ProductStatusEnum.PENDING,
                                   Product.is_active.is_(True))\
                           .order_by(Product.created_at.desc())\
                           .limit(self.limit).all()
        pending = []
        for product, farmer_name, farmer_phone in rows:
            product_dict = product.to_dict()
            product_dict['farmer_name'] = farmer_name or ""
            product_dict['farmer_phone'] = farmer_phone or ""
            pending.append(product_dict)
        return pending

    def _clean_images(self, raw_images):
        if not isinstance(raw_images, list):
            return []
        cleaned = []
        for raw in raw_images:
            url = sanitize_input(raw, 300)
            if is_https_url(url):
                cleaned.append(url)
        return cleaned[:self.config['PRODUCT_MAX_IMAGES']]

    def _unique_slug(self, title):
        base = generate_slug(title)[:150].strip('-') or 'produit'
        while True:
            slug = f"{base}-{uuid.uuid4().hex[:8]}"
            if not self.session.query(Product.id).filter_by(slug=slug).first():
                return slug

    def create_pending(self, farmer, attrs):
        """
        Validates a seller submission and stores it as pending.
        `farmer` is the resolved FarmerIdentity. Returns the new slug.
        """
        title_fr = sanitize_input(attrs.get('title_fr'), 120)
        title_ar = sanitize_input(attrs.get('title_ar'), 120)
        category = sanitize_input(attrs.get('category'), 40)
        city = sanitize_input(attrs.get('city'), 80) or farmer.city
        description_fr = sanitize_input(attrs.get('description_fr'), 1200)
        description_ar = sanitize_input(attrs.get('description_ar'), 1200)

        if not all([title_fr, title_ar, category, city, description_fr, description_ar]):
            raise InvalidInput("Missing fields")

        price_mad = parse_int(attrs.get('price_mad'))
        if price_mad is None or not (self.config['PRODUCT_MIN_PRICE_MAD'] <= price_mad <= self.config['PRODUCT_MAX_PRICE_MAD']):
            raise InvalidInput("Invalid price")

        images = self._clean_images(attrs.get('images'))
        if not images:
            raise InvalidInput("Add at least 1 image URL (https://...)")

        weight_kg = parse_number(attrs.get('weight_kg'))
        if weight_kg is not None and weight_kg < 0:
            weight_kg = None
        age_months = parse_int(attrs.get('age_months'))
        if age_months is not None and age_months < 0:
            age_months = None

        product = Product(
            id=new_public_id('prd'),
            slug=self._unique_slug(title_fr),
            title_fr=title_fr, title_ar=title_ar,
            category=category, city=city,
            price_mad=price_mad,
            weight_kg=weight_kg, age_months=age_months,
            gender=sanitize_input(attrs.get('gender'), 20) or None,
            certified=bool(attrs.get('certified')),
            delivery=attrs.get('delivery') is not False,
            images=images,
            description_fr=description_fr, description_ar=description_ar,
            is_active=True,
            farmer_id=farmer.id,
            status=ProductStatusEnum.PENDING,
            source=ProductSourceEnum.FARMER
        )
        self.session.add(product)
        self.session.commit()
        current_app.logger.info(f"Product {product.slug} submitted by farmer {farmer.id}; awaiting moderation.")
        return product.slug
