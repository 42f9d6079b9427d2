# farmsouk/services/farmer_auth_service.py
import secrets
from typing import NamedTuple

from flask import current_app
from sqlalchemy.exc import IntegrityError

from .. import db
from ..errors import InvalidInput, Conflict, Unauthorized, NotFound
from ..models import Farmer, FarmerSession, new_public_id, utcnow
from ..security import PasswordHash, hash_password, verify_password
from ..utils import sanitize_input


# Per hash method, built on first use.
_DUMMY_HASHES = {}


class FarmerIdentity(NamedTuple):
    id: str
    name: str
    phone: str
    city: str

    def to_dict(self):
        return self._asdict()


class FarmerAuthService:
    """
    Seller credentials and opaque session tokens.
    Every `resolve` goes back to the store; there is no session cache.
    """

    def __init__(self, session=None):
        self.session = session or db.session
        self.config = current_app.config

    def _issue_session(self, farmer_id):
        token = secrets.token_urlsafe(32)
        self.session.add(FarmerSession(token=token, farmer_id=farmer_id))
        return token

    def _dummy_hash(self):
        method = self.config['PASSWORD_HASH_METHOD']
        if method not in _DUMMY_HASHES:
            _DUMMY_HASHES[method] = hash_password(secrets.token_urlsafe(16), method=method)
        return _DUMMY_HASHES[method]

    def _check_password_policy(self, password):
        if not isinstance(password, str):
            return False
        return self.config['PASSWORD_MIN_LENGTH'] <= len(password) <= self.config['PASSWORD_MAX_LENGTH']

    def register(self, name, phone, city, password):
        name = sanitize_input(name, 80)
        phone = sanitize_input(phone, 40)
        city = sanitize_input(city, 80)
        if not name or not phone or not city or not self._check_password_policy(password):
            raise InvalidInput("Invalid fields")

        if self.session.query(Farmer.id).filter_by(phone=phone).first():
            raise Conflict("Phone already used")

        farmer = Farmer(
            id=new_public_id('far'), name=name, phone=phone, city=city,
            password_hash=hash_password(password, method=self.config['PASSWORD_HASH_METHOD']),
            is_active=True
        )
        self.session.add(farmer)
        try:
            # Flush before issuing the session so a concurrent duplicate phone surfaces here.
            self.session.flush()
            token = self._issue_session(farmer.id)
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise Conflict("Phone already used")

        current_app.logger.info(f"Farmer {farmer.id} registered ({city}).")
        return token, farmer.to_summary()

    def login(self, phone, password):
        phone = sanitize_input(phone, 40)
        if not phone or not isinstance(password, str):
            raise Unauthorized("Invalid credentials")

        farmer = self.session.query(Farmer).filter_by(phone=phone, is_active=True).first()
        if not farmer:
            # Unknown phones pay the same key derivation cost as known ones.
            verify_password(password, self._dummy_hash())
        stored = PasswordHash.parse(farmer.password_hash) if farmer else None
        if not stored or not stored.verify(password):
            current_app.logger.warning(f"Failed farmer login for phone {phone}.")
            raise Unauthorized("Invalid credentials")

        current_method = self.config['PASSWORD_HASH_METHOD']
        if stored.needs_rehash(current_method):
            farmer.password_hash = hash_password(password, method=current_method)
            current_app.logger.info(f"Rotated password hash for farmer {farmer.id} from '{stored.method}' to '{current_method}'.")

        token = self._issue_session(farmer.id)
        self.session.commit()
        return token, farmer.to_summary()

    def logout(self, token):
        """Idempotent: an unknown token is not an error."""
        if not token:
            return
        self.session.query(FarmerSession).filter_by(token=token).delete(synchronize_session=False)
        self.session.commit()

    def resolve(self, token):
        if not token:
            raise Unauthorized()

        row = self.session.query(FarmerSession, Farmer)\
                          .join(Farmer, Farmer.id == FarmerSession.farmer_id)\
                          .filter(FarmerSession.token == token)\
                          .first()
        if not row:
            raise Unauthorized()
        farmer_session, farmer = row

        ttl = self.config.get('FARMER_SESSION_TTL')
        if ttl is not None:
            expired = self.session.query(FarmerSession.token)\
                                  .filter(FarmerSession.token == token, FarmerSession.created_at < utcnow() - ttl)\
                                  .first()
            if expired:
                self.session.delete(farmer_session)
                self.session.commit()
                current_app.logger.info(f"Expired session removed for farmer {farmer.id}.")
                raise Unauthorized("Session expired")

        if not farmer.is_active:
            raise Unauthorized()
        return FarmerIdentity(farmer.id, farmer.name, farmer.phone, farmer.city)

    def get_public_profile(self, farmer_id):
        farmer = self.session.query(Farmer).filter_by(id=farmer_id, is_active=True).first()
        if not farmer:
            raise NotFound()
        return farmer.to_public_dict()
