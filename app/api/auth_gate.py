"""
app/api/auth_gate.py

Purpose: Request authorization gate

- Reads the session token from the cookie (or a Bearer header)
- Verifies the token and resolves the user from its email claim
- Checks the token against the user's session ledger
- Attaches the resolved SessionContext to request.state.session

Each request is evaluated once, independently; there is no state
across requests other than the persisted session ledger.
"""

from fastapi import Request
from typing import Optional

from app.core.config import settings
from app.core.exceptions import AuthenticationError
from app.core.logging import get_logger
from app.core.security import decode_access_token
from app.services.session_service import SessionContext, is_authorized
from app.services.user_service import get_user_by_email
from utils.constants import (
    MSG_TOKEN_MISSING,
    MSG_TOKEN_INVALID,
    MSG_USER_NOT_FOUND,
    MSG_SESSION_INACTIVE,
)

logger = get_logger(__name__)


def extract_token(request: Request) -> Optional[str]:
    """
    Returns the presented session token, cookie first, then Authorization header.
    """
    token = request.cookies.get(settings.COOKIE_NAME)
    if token:
        return token

    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()

    return None


async def authenticate(request: Request, allow_anonymous: bool = False) -> Optional[SessionContext]:
    """
    Admits or rejects a request based on its session token.

    Args:
        request: Incoming request
        allow_anonymous: Let requests without any token through (logout)

    Returns:
        SessionContext when admitted, None for an allowed anonymous request

    Raises:
        AuthenticationError: If the token is missing, invalid, expired,
            belongs to an unknown user, or is no longer in the ledger
    """
    token = extract_token(request)
    if not token:
        if allow_anonymous:
            return None
        raise AuthenticationError(MSG_TOKEN_MISSING)

    claims = decode_access_token(token)
    if claims is None:
        raise AuthenticationError(MSG_TOKEN_INVALID)

    user = await get_user_by_email(claims["email"])
    if not user:
        logger.warning("Token presented for unknown user", extra={"email": claims["email"]})
        raise AuthenticationError(MSG_USER_NOT_FOUND)

    if not is_authorized(user, token):
        logger.info("Token not in active session set", extra={"email": claims["email"]})
        raise AuthenticationError(MSG_SESSION_INACTIVE)

    session = SessionContext(user=user, token=token)
    request.state.session = session
    return session


async def require_session(request: Request) -> SessionContext:
    """
    Dependency for routes that need an authenticated session.
    """
    return await authenticate(request)
