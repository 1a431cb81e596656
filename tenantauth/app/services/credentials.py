"""
Credential Store

Password hashing, opaque random tokens and project API credentials.
"""

import hashlib
import secrets
from dataclasses import dataclass

import bcrypt

BCRYPT_ROUNDS = 12
# bcrypt only reads the first 72 bytes; newer releases raise instead of
# truncating, so the cut is made here.
BCRYPT_MAX_BYTES = 72

_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(BCRYPT_ROUNDS))


class HashingError(Exception):
    """The bcrypt primitive failed or a stored hash is malformed."""


@dataclass(frozen=True)
class ApiCredentials:
    api_key: str
    api_secret: str
    api_secret_hash: str


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    try:
        return bcrypt.hashpw(_encode(password), bcrypt.gensalt(BCRYPT_ROUNDS)).decode("utf-8")
    except (ValueError, TypeError) as exc:
        raise HashingError("Failed to hash password") from exc


def verify_password(password: str, password_hash: str) -> bool:
    """Returns False on mismatch, raises HashingError on a malformed hash."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except (ValueError, TypeError) as exc:
        raise HashingError("Failed to verify password") from exc


def burn_password_check() -> None:
    """Spend one bcrypt check so unknown accounts take as long as known ones."""
    bcrypt.checkpw(b"not_the_password", _DUMMY_HASH)


def random_token(byte_len: int = 32) -> str:
    """Hex encoded token from the OS CSPRNG (32 bytes = 256 bits by default)."""
    return secrets.token_hex(byte_len)


def token_digest(token: str) -> str:
    """SHA-256 hex digest used as the stored lookup key for opaque tokens."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def generate_api_credentials() -> ApiCredentials:
    api_key = f"pk_{random_token(16)}"
    api_secret = f"sk_{random_token(32)}"
    return ApiCredentials(
        api_key=api_key,
        api_secret=api_secret,
        api_secret_hash=token_digest(api_secret),
    )
