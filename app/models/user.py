"""
app/models/user.py

Purpose: User document model

- Builds the stored account document
- Email is the natural key; session tokens live on the document
- Password is stored only as a bcrypt hash
"""

from datetime import datetime
from typing import Dict, Any

from utils.constants import (
    FIELD_NAME,
    FIELD_EMAIL,
    FIELD_ADDRESS,
    FIELD_PASSWORD_HASH,
    FIELD_MOBILE_NUMBER,
    FIELD_SESSION_TOKENS,
    FIELD_CREATED_AT,
    FIELD_LAST_LOGIN_AT,
)


def build_user_document(
    name: str,
    email: str,
    address: str,
    password_hash: str,
    mobile_number: str,
) -> Dict[str, Any]:
    """
    Returns a new user document with an empty session ledger.
    """
    return {
        FIELD_NAME: name,
        FIELD_EMAIL: email,
        FIELD_ADDRESS: address,
        FIELD_PASSWORD_HASH: password_hash,
        FIELD_MOBILE_NUMBER: mobile_number,
        FIELD_SESSION_TOKENS: [],
        FIELD_CREATED_AT: datetime.utcnow(),
        FIELD_LAST_LOGIN_AT: None,
    }
