"""
app/services/user_service.py

Purpose: User data management

- Create user records
- Retrieve users by email, phone, or an active session token
- Record login metadata
"""

from app.db.mongo import get_users_collection
from app.core.logging import get_logger, LogContext
from datetime import datetime
from typing import Optional, Dict, Any, List

from utils.constants import (
    FIELD_NAME,
    FIELD_EMAIL,
    FIELD_PASSWORD_HASH,
    FIELD_MOBILE_NUMBER,
    FIELD_SESSION_TOKENS,
    FIELD_LAST_LOGIN_AT,
)

logger = get_logger(__name__)


async def get_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    """
    Retrieves a user by email.

    Args:
        email: Account email

    Returns:
        User document or None if not found
    """
    if not email:
        return None
    users = get_users_collection()
    return await users.find_one({FIELD_EMAIL: email})


async def email_exists(email: str) -> bool:
    users = get_users_collection()
    return await users.count_documents({FIELD_EMAIL: email}, limit=1) > 0


async def create_user(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Inserts a new user document.

    Args:
        document: Fully built user document

    Returns:
        The document, with its store-assigned _id

    Raises:
        pymongo.errors.DuplicateKeyError: If the email is already taken
    """
    with LogContext(email=document.get(FIELD_EMAIL)):
        users = get_users_collection()
        result = await users.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info("New user created successfully")
        return document


async def find_user_by_session_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Retrieves the user whose session ledger contains the given token.
    """
    if not token:
        return None
    users = get_users_collection()
    return await users.find_one({FIELD_SESSION_TOKENS: token})


async def list_names_by_phone(mobile_number: str) -> List[str]:
    """
    Returns the names of all users registered with this exact mobile number.
    """
    users = get_users_collection()
    cursor = users.find({FIELD_MOBILE_NUMBER: mobile_number}, {FIELD_NAME: 1})
    return [doc[FIELD_NAME] async for doc in cursor if FIELD_NAME in doc]


async def list_users() -> List[Dict[str, Any]]:
    """
    Returns every user document, without password hashes or session tokens.
    """
    users = get_users_collection()
    cursor = users.find({}, {FIELD_PASSWORD_HASH: 0, FIELD_SESSION_TOKENS: 0})
    return [doc async for doc in cursor]


async def touch_last_login(user_id: Any) -> bool:
    users = get_users_collection()
    result = await users.update_one(
        {"_id": user_id},
        {"$set": {FIELD_LAST_LOGIN_AT: datetime.utcnow()}}
    )
    return result.modified_count > 0
