# farmsouk/utils.py
import re
import secrets
from functools import wraps
from urllib.parse import urlparse

from flask import current_app, g, request
from unidecode import unidecode

from .errors import InvalidInput, Unauthorized

BEARER_RE = re.compile(r'^Bearer\s+(.+)$', re.IGNORECASE)


# --- Sanitization Helpers ---
def sanitize_input(value, max_length=None):
    """
    Trims a free-text field and truncates it to `max_length`.
    Non-string values are treated as missing and come back as ''.
    """
    if not isinstance(value, str):
        return ''
    value_str = value.strip()
    if max_length is not None and len(value_str) > max_length:
        value_str = value_str[:max_length]
    return value_str

def get_json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidInput("JSON object expected")
    return data

def parse_int(value):
    """Strict integer parsing: ints and integral numeric strings only. Booleans are rejected."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and re.fullmatch(r'\s*[+-]?\d+\s*', value):
        try:
            return int(value)
        except ValueError:
            # beyond the interpreter's int-from-str digit limit
            return None
    return None

def parse_number(value):
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number or number in (float('inf'), float('-inf')):
        return None
    return number

def is_https_url(value):
    if not value:
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme.lower() == 'https' and bool(parsed.netloc) and ' ' not in value

def escape_like(term):
    return term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')

def generate_slug(text):
    if not text: return ""
    text = unidecode(str(text)); text = re.sub(r'[^\w\s-]', '', text).strip().lower(); text = re.sub(r'[-\s]+', '-', text)
    return text


# --- Request guards ---
def get_bearer_token():
    match = BEARER_RE.match(request.headers.get('Authorization', ''))
    return match.group(1).strip() if match else ''

def admin_required(fn):
    """Shared-secret gate for the admin API."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        header_name = current_app.config.get('ADMIN_HEADER_NAME', 'X-Admin-Password')
        supplied = request.headers.get(header_name, '')
        expected = current_app.config.get('ADMIN_PASSWORD') or ''
        if not supplied or not expected or not secrets.compare_digest(supplied.encode('utf-8'), expected.encode('utf-8')):
            current_app.logger.warning(f"Admin access denied for {request.path}: missing or invalid admin secret.")
            raise Unauthorized()
        return fn(*args, **kwargs)
    return wrapper

def farmer_required(fn):
    """Resolves the bearer token into `g.current_farmer` on every call."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        from .services.farmer_auth_service import FarmerAuthService
        g.current_farmer = FarmerAuthService().resolve(get_bearer_token())
        return fn(*args, **kwargs)
    return wrapper
