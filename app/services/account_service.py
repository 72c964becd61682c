"""
app/services/account_service.py

Purpose: Account operations

- Registration with ordered field validation
- Credential login issuing a session token
- Logout by authenticated session or by explicit token
- Lookups by phone number and full listing (projected)
"""

from typing import Optional, List

from pymongo.errors import DuplicateKeyError

from app.core.exceptions import (
    InvalidInputError,
    AuthenticationError,
    ConflictError,
    ResourceNotFoundError,
)
from app.core.logging import get_logger, LogContext
from app.core.security import hash_password, verify_password
from app.models.user import build_user_document
from app.schemas.account import UserSummary, LoginData
from app.services import user_service
from app.services.session_service import (
    SessionContext,
    issue_session_token,
    revoke_session_token,
)
from utils.constants import (
    FIELD_EMAIL,
    FIELD_PASSWORD_HASH,
    MSG_ALL_FIELDS_REQUIRED,
    MSG_INVALID_NAME,
    MSG_INVALID_EMAIL,
    MSG_INVALID_ADDRESS,
    MSG_INVALID_PASSWORD,
    MSG_INVALID_MOBILE,
    MSG_EMAIL_EXISTS,
    MSG_CREDENTIALS_REQUIRED,
    MSG_INVALID_CREDENTIALS,
    MSG_TOKEN_REQUIRED,
    MSG_SESSION_NOT_FOUND,
    MSG_INVALID_MOBILE_FORMAT,
)
from utils.validation_utils import (
    is_valid_name,
    is_valid_email,
    is_valid_address,
    is_valid_password,
    is_valid_phone,
)

logger = get_logger(__name__)


def validate_registration(
    name: Optional[str],
    email: Optional[str],
    address: Optional[str],
    password: Optional[str],
    mobile_number: Optional[str],
) -> None:
    """
    Validates registration fields, stopping at the first failure.

    Order: presence of all fields, name, email, address, password, phone.

    Raises:
        InvalidInputError: Naming the first failing field
    """
    if not all((name, email, address, password, mobile_number)):
        raise InvalidInputError(MSG_ALL_FIELDS_REQUIRED)

    checks = (
        (is_valid_name, name, MSG_INVALID_NAME),
        (is_valid_email, email, MSG_INVALID_EMAIL),
        (is_valid_address, address, MSG_INVALID_ADDRESS),
        (is_valid_password, password, MSG_INVALID_PASSWORD),
        (is_valid_phone, mobile_number, MSG_INVALID_MOBILE),
    )
    for check, value, message in checks:
        if not check(value):
            raise InvalidInputError(message)


async def register(
    name: Optional[str],
    email: Optional[str],
    address: Optional[str],
    password: Optional[str],
    mobile_number: Optional[str],
) -> UserSummary:
    """
    Registers a new account.

    Returns:
        Summary of the created user

    Raises:
        InvalidInputError: If a field is missing or malformed
        ConflictError: If the email is already registered
    """
    validate_registration(name, email, address, password, mobile_number)

    with LogContext(email=email):
        if await user_service.email_exists(email):
            logger.info("Registration rejected, email already exists")
            raise ConflictError(MSG_EMAIL_EXISTS)

        document = build_user_document(
            name=name,
            email=email,
            address=address,
            password_hash=hash_password(password),
            mobile_number=mobile_number,
        )

        try:
            created = await user_service.create_user(document)
        except DuplicateKeyError:
            # Lost a race with a concurrent registration for the same email
            raise ConflictError(MSG_EMAIL_EXISTS)

        return UserSummary.from_document(created)


async def login(email: Optional[str], password: Optional[str]) -> LoginData:
    """
    Verifies credentials and issues a new session token.

    Raises:
        InvalidInputError: If email or password is missing
        AuthenticationError: If the credentials do not match an account
    """
    if not email or not password:
        raise InvalidInputError(MSG_CREDENTIALS_REQUIRED)

    with LogContext(email=email):
        user = await user_service.get_user_by_email(email)
        password_hash = user.get(FIELD_PASSWORD_HASH) if user else None
        if not verify_password(password, password_hash):
            logger.info("Login rejected")
            raise AuthenticationError(MSG_INVALID_CREDENTIALS)

        token = await issue_session_token(user)
        await user_service.touch_last_login(user["_id"])

        return LoginData(token=token, email=user[FIELD_EMAIL])


async def logout(session: Optional[SessionContext], token: Optional[str]) -> str:
    """
    Revokes a session token.

    Args:
        session: SessionContext admitted by the auth gate, if any
        token: Explicit token from the request body or query string,
            used when no authenticated session is attached

    Returns:
        Email of the account the token belonged to

    Raises:
        InvalidInputError: If no token can be resolved
        ResourceNotFoundError: If the token is not an active session
    """
    if session is not None:
        user, token = session.user, session.token
    else:
        if not token:
            raise InvalidInputError(MSG_TOKEN_REQUIRED)
        user = await user_service.find_user_by_session_token(token)
        if not user:
            raise ResourceNotFoundError(MSG_SESSION_NOT_FOUND)

    if not await revoke_session_token(user, token):
        # Revoked concurrently between lookup and removal
        raise ResourceNotFoundError(MSG_SESSION_NOT_FOUND)

    return user[FIELD_EMAIL]


async def list_by_phone(mobile_number: Optional[str]) -> List[str]:
    """
    Returns the names of users registered with a mobile number.

    Raises:
        InvalidInputError: If the number is not a valid mobile number
    """
    if not is_valid_phone(mobile_number):
        raise InvalidInputError(MSG_INVALID_MOBILE_FORMAT)

    return await user_service.list_names_by_phone(mobile_number)


async def list_all() -> List[UserSummary]:
    """
    Returns every account as a UserSummary.
    """
    documents = await user_service.list_users()
    return [UserSummary.from_document(doc) for doc in documents]
