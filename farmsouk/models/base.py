# farmsouk/models/base.py
# Contains the shared SQLAlchemy instance to avoid circular imports.
import uuid
from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def utcnow():
    return datetime.now(timezone.utc)


def new_public_id(prefix):
    """Opaque identifier such as `prd_3f9c0a1b2d4e`."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"
