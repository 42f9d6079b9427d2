# farmsouk/services/moderation_service.py
from flask import current_app

from .. import db
from ..errors import NotFound, Forbidden, InvalidTransition
from ..models import Product, ProductStatusEnum, ProductSourceEnum


# action -> (allowed source statuses, target status, is_active after, or None to leave it)
TRANSITIONS = {
    'approve': ({ProductStatusEnum.PENDING}, ProductStatusEnum.APPROVED, None),
    'reject': ({ProductStatusEnum.PENDING}, ProductStatusEnum.REJECTED, False),
    'delete': ({ProductStatusEnum.PENDING, ProductStatusEnum.APPROVED}, ProductStatusEnum.DELETED, False),
}


class ModerationService:
    """
    The only writer of `status` / `is_active` on existing products.
    Rejected and deleted are terminal.
    """

    def __init__(self, session=None):
        self.session = session or db.session

    def _load_for_update(self, slug):
        return self.session.query(Product).filter(Product.slug == slug).with_for_update().first()

    def _apply(self, product, action):
        allowed_from, target, is_active = TRANSITIONS[action]
        current = product.effective_status
        if current not in allowed_from:
            self.session.rollback()
            raise InvalidTransition(f"Cannot {action} a product that is {current.value}")
        product.status = target
        if is_active is not None:
            product.is_active = is_active
        self.session.commit()
        current_app.logger.info(f"Product {product.slug}: {current.value} -> {target.value} ({action}).")

    def _load_moderatable(self, slug):
        product = self._load_for_update(slug)
        # Seed rows are exempt from moderation.
        if not product or product.source != ProductSourceEnum.FARMER:
            self.session.rollback()
            raise NotFound()
        return product

    def approve(self, slug):
        self._apply(self._load_moderatable(slug), 'approve')

    def reject(self, slug):
        self._apply(self._load_moderatable(slug), 'reject')

    def self_delete(self, slug, requesting_farmer_id):
        product = self._load_for_update(slug)
        if not product:
            self.session.rollback()
            raise NotFound()
        if product.source != ProductSourceEnum.FARMER or product.farmer_id != requesting_farmer_id:
            self.session.rollback()
            current_app.logger.warning(f"Farmer {requesting_farmer_id} tried to delete product {slug} they do not own.")
            raise Forbidden()
        self._apply(product, 'delete')
