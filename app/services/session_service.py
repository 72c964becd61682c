"""
app/services/session_service.py

Purpose: Session ledger

- Issues signed session tokens and records them on the user document
- Revokes individual tokens on logout
- Decides whether a presented token is still authorized
- Prunes tokens whose embedded expiry has passed

The user document is the single source of truth for active sessions.
Every mutation is one atomic update operator ($push / $pull), so
concurrent logins and logouts for the same user never lose updates.
"""

from app.db.mongo import get_users_collection
from app.core.exceptions import InternalError
from app.core.security import create_access_token, decode_access_token, token_expiry
from app.core.logging import get_logger, LogContext
from dataclasses import dataclass
from typing import Dict, Any, List

from utils.constants import FIELD_EMAIL, FIELD_SESSION_TOKENS
from utils.time_utils import is_expired, utc_now

logger = get_logger(__name__)


@dataclass
class SessionContext:
    """
    Identity resolved for an admitted request.
    """
    user: Dict[str, Any]
    token: str

    @property
    def email(self) -> str:
        return self.user[FIELD_EMAIL]


def expired_tokens(tokens: List[str]) -> List[str]:
    """
    Returns the tokens whose expiry has passed or that can no longer be read.
    """
    now = utc_now()
    return [token for token in tokens if is_expired(token_expiry(token), now)]


async def prune_expired_tokens(user: Dict[str, Any]) -> int:
    """
    Removes expired tokens from the user's session ledger.

    Args:
        user: User document as last read

    Returns:
        Number of tokens removed
    """
    stale = expired_tokens(user.get(FIELD_SESSION_TOKENS, []))
    if not stale:
        return 0

    users = get_users_collection()
    await users.update_one(
        {"_id": user["_id"]},
        {"$pull": {FIELD_SESSION_TOKENS: {"$in": stale}}}
    )
    with LogContext(email=user.get(FIELD_EMAIL)):
        logger.debug(f"Pruned {len(stale)} expired session tokens")
    return len(stale)


async def issue_session_token(user: Dict[str, Any]) -> str:
    """
    Creates a session token for the user and appends it to their ledger.

    Args:
        user: User document

    Returns:
        The newly issued token

    Raises:
        InternalError: If the user document disappeared before the append
    """
    email = user[FIELD_EMAIL]
    with LogContext(email=email):
        await prune_expired_tokens(user)

        token = create_access_token(email)
        users = get_users_collection()
        result = await users.update_one(
            {"_id": user["_id"]},
            {"$push": {FIELD_SESSION_TOKENS: token}}
        )

        if result.matched_count == 0:
            logger.error("User vanished while issuing session token")
            raise InternalError(f"User {email} no longer exists")

        logger.info("Session token issued")
        return token


async def revoke_session_token(user: Dict[str, Any], token: str) -> bool:
    """
    Removes a token from the user's session ledger.

    Args:
        user: User document
        token: Token to revoke

    Returns:
        True if the token was present and has been removed
    """
    with LogContext(email=user.get(FIELD_EMAIL)):
        users = get_users_collection()
        result = await users.update_one(
            {"_id": user["_id"], FIELD_SESSION_TOKENS: token},
            {"$pull": {FIELD_SESSION_TOKENS: token}}
        )

        revoked = result.modified_count > 0
        if revoked:
            logger.info("Session token revoked")
        else:
            logger.warning("Session token was not active")

        return revoked


def is_authorized(user: Dict[str, Any], token: str) -> bool:
    """
    Checks a presented token against the user's session ledger.

    The token must be in the ledger, carry a valid signature, be
    unexpired, and have been issued for this user's email.
    """
    if not token or token not in user.get(FIELD_SESSION_TOKENS, []):
        return False

    claims = decode_access_token(token)
    if claims is None:
        return False

    return claims.get("email") == user.get(FIELD_EMAIL)
