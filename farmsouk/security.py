# farmsouk/security.py
"""
Password hashing for seller accounts.

Stored hashes are composite strings `method$salt$key`. `PasswordHash` parses
them into a tagged value so several algorithms can coexist in one table and
old rows can be rotated to the configured method on the next login.

Supported tags:
  * werkzeug methods, e.g. `scrypt:32768:8:1` or `pbkdf2:sha256:600000`
  * `scrypt` (legacy rows: hex salt, 64-byte key, N=16384, r=8, p=1)
"""
import hashlib
import hmac
from typing import NamedTuple, Optional

from werkzeug.security import generate_password_hash, check_password_hash

LEGACY_SCRYPT_TAG = "scrypt"
WERKZEUG_FAMILIES = ("scrypt", "pbkdf2")


class PasswordHash(NamedTuple):
    method: str
    salt: str
    key: str

    @property
    def algorithm(self) -> str:
        """Algorithm family, without cost parameters."""
        return self.method.split(":", 1)[0]

    @property
    def is_legacy(self) -> bool:
        return self.method == LEGACY_SCRYPT_TAG

    @classmethod
    def parse(cls, stored: Optional[str]) -> Optional["PasswordHash"]:
        if not stored or stored.count("$") != 2:
            return None
        method, salt, key = stored.split("$")
        if not method or not salt or not key:
            return None
        return cls(method, salt, key)

    @classmethod
    def create(cls, password: str, method: str = "scrypt") -> "PasswordHash":
        return cls.parse(generate_password_hash(password, method=method))

    def __str__(self) -> str:
        return f"{self.method}${self.salt}${self.key}"

    def verify(self, password: str) -> bool:
        """Constant-time check of `password` against this hash."""
        if self.is_legacy:
            return _verify_legacy_scrypt(password, self.salt, self.key)
        if self.algorithm not in WERKZEUG_FAMILIES:
            return False
        try:
            return check_password_hash(str(self), password)
        except (ValueError, TypeError):
            return False

    def needs_rehash(self, current_method: str) -> bool:
        return self.is_legacy or self.algorithm != current_method.split(":", 1)[0]


def _verify_legacy_scrypt(password, salt, key_hex):
    try:
        expected = bytes.fromhex(key_hex)
        computed = hashlib.scrypt(password.encode("utf-8"), salt=salt.encode("utf-8"),
                                  n=16384, r=8, p=1, dklen=64)
    except ValueError:
        return False
    return hmac.compare_digest(expected, computed)


def hash_password(password, method="scrypt"):
    return str(PasswordHash.create(password, method=method))


def verify_password(password, stored):
    parsed = PasswordHash.parse(stored)
    return parsed.verify(password) if parsed else False
