# shortlink/core/security.py
"""
Security module for authentication.
Handles password hashing (credential codec) and the signed session token
that carries a SessionIdentity between requests.
"""
import datetime as dt
import logging

import jwt  # PyJWT
from passlib.context import CryptContext
from passlib.exc import MissingBackendError

from shortlink.config import settings
from shortlink.core.errors import EncodingError, Unauthorized
from shortlink.core.randoms import generate_random
from shortlink.core.session import SessionIdentity

logger = logging.getLogger("uvicorn.error")

# Password hashing context
# Argon2 is salted per call and has adaptive time/memory cost
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",   # Automatically handle deprecated schemes
)

JWT_ALG = "HS256"  # Session token signing algorithm (HMAC SHA-256)


def _session_secret() -> str:
    if settings.session_key:
        return settings.session_key
    logger.warning("[security] SESSION_KEY not set -> using a random key, sessions will not survive restarts")
    return generate_random(64)

SESSION_SECRET = _session_secret()


def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (salt embedded, safe to store)

    Raises:
        EncodingError: If the hashing backend fails
    """
    try:
        return pwd_context.hash(plain)
    except (ValueError, TypeError, MissingBackendError) as exc:
        raise EncodingError("password could not be hashed") from exc


def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a stored hash.

    A mismatch, an empty hash or a malformed hash all yield False.
    """
    if not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        logger.warning("[security] unrecognised password hash format")
        return False


def encode_session_token(identity: SessionIdentity) -> str:
    """
    Sign a SessionIdentity into an opaque cookie value.

    Payload:
        - sub: User name
        - iat: Issue timestamp
    Expiry is not encoded here; the session policy decides validity.
    """
    payload = {
        "sub": identity.name,
        "iat": int(identity.issued_at.timestamp()),
    }
    return jwt.encode(payload, SESSION_SECRET, algorithm=JWT_ALG)


def decode_session_token(token: str) -> SessionIdentity:
    """
    Validate the token signature and rebuild the SessionIdentity.

    Raises:
        Unauthorized: If the token is missing, tampered with or malformed
    """
    if not token:
        raise Unauthorized("missing session")
    try:
        payload = jwt.decode(token, SESSION_SECRET, algorithms=[JWT_ALG])
    except jwt.InvalidTokenError as exc:
        raise Unauthorized("invalid session") from exc

    name = payload.get("sub")
    iat = payload.get("iat")
    if not isinstance(name, str) or not name or not isinstance(iat, (int, float)):
        raise Unauthorized("invalid session")
    return SessionIdentity(
        name=name,
        issued_at=dt.datetime.fromtimestamp(iat, tz=dt.timezone.utc),
    )
