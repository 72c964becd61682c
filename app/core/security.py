"""
app/core/security.py

Purpose: Credential and token primitives

- bcrypt password hashing and verification
- Signed session tokens (JWT, HS256 by default) binding a user's email
- Lenient claim reading for tokens whose expiry has already passed
"""

import secrets
from functools import lru_cache
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

import bcrypt
import jwt

from app.core.config import settings

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


@lru_cache(maxsize=1)
def _dummy_hash() -> bytes:
    return bcrypt.hashpw(secrets.token_hex(16).encode("ascii"), bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS))


def hash_password(password: str) -> str:
    """
    Hashes a password with a per-password random salt.

    Returns:
        The bcrypt hash as a string, safe to persist
    """
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """
    Checks a presented password against a stored bcrypt hash.

    Without a stored hash the password is still checked against a
    throwaway hash, so unknown accounts cost the same bcrypt round.
    """
    if not password:
        return False
    if not password_hash:
        bcrypt.checkpw(_password_bytes(password), _dummy_hash())
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(email: str, expires_minutes: Optional[int] = None) -> str:
    """
    Creates a signed session token for the given email.

    Every token carries a random ``jti`` so two tokens issued for the
    same user within the same second are still distinct.

    Args:
        email: Account email, stored in the ``email`` claim
        expires_minutes: Lifetime override, defaults to TOKEN_EXPIRE_MINUTES

    Returns:
        Encoded token string
    """
    lifetime = settings.TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    issued_at = datetime.now(timezone.utc)
    payload = {
        "email": email,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=lifetime),
        "jti": secrets.token_hex(16),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verifies signature and expiry of a session token.

    Returns:
        The claims if the token is valid and carries an email, else None
    """
    if not token:
        return None
    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None

    if not claims.get("email"):
        return None
    return claims


def token_expiry(token: str) -> Optional[datetime]:
    """
    Reads the ``exp`` claim of a correctly signed token without enforcing it.

    Returns:
        Expiry as an aware UTC datetime, or None if the token is unreadable
    """
    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_exp": False},
        )
    except jwt.InvalidTokenError:
        return None

    exp = claims.get("exp")
    if exp is None:
        return None
    return datetime.fromtimestamp(int(exp), tz=timezone.utc)
