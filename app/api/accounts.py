"""
app/api/accounts.py

Purpose: Account HTTP endpoints

- Registration, login, logout
- Lookup of user names by mobile number
- Protected listing of all users
- Session cookie handling (set on login, cleared on logout)
"""

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from typing import Optional
import json

from app.api.auth_gate import authenticate, require_session
from app.core.config import settings
from app.core.errors import error_response
from app.core.exceptions import AccountError, InternalError
from app.core.logging import get_logger
from app.schemas.account import RegisterRequest, LoginRequest, PhoneLookupRequest
from app.schemas.response import ApiResponse
from app.services import account_service
from app.services.session_service import SessionContext
from utils.constants import (
    MSG_REGISTERED,
    MSG_LOGIN_SUCCESS,
    MSG_LOGOUT_SUCCESS,
    MSG_USERS_FETCHED,
)

logger = get_logger(__name__)
router = APIRouter()


async def read_body_token(request: Request) -> Optional[str]:
    """
    Returns the ``token`` field of a JSON body, if there is one.
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None

    if isinstance(payload, dict) and isinstance(payload.get("token"), str):
        return payload["token"]
    return None


@router.post("/register", response_model=ApiResponse)
async def register(body: RegisterRequest):
    """
    Registers a new account.
    """
    await account_service.register(
        name=body.name,
        email=body.email,
        address=body.address,
        password=body.password,
        mobile_number=body.mobile_number,
    )
    logger.info("Account registered", extra={"email": body.email})
    return ApiResponse(message=MSG_REGISTERED, data={})


@router.post("/login", response_model=ApiResponse)
async def login(body: LoginRequest, response: Response):
    """
    Verifies credentials, issues a session token and sets it as an HTTP-only cookie.
    """
    result = await account_service.login(body.email, body.password)

    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=result.token,
        max_age=settings.token_max_age_seconds,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    return ApiResponse(message=MSG_LOGIN_SUCCESS, data=result.model_dump())


@router.post("/logout")
async def logout(
    request: Request,
    token: Optional[str] = Query(None, description="Token to revoke when no session cookie is sent"),
):
    """
    Revokes the current session token.

    The token comes from the session cookie when present, otherwise from
    the ``token`` body field or query parameter. The session cookie is
    cleared whatever the outcome.
    """
    try:
        session = await authenticate(request, allow_anonymous=True)
        explicit_token = None if session else (token or await read_body_token(request))
        email = await account_service.logout(session, explicit_token)
        logger.info("Session logged out", extra={"email": email})
        response = JSONResponse(
            content=ApiResponse(message=MSG_LOGOUT_SUCCESS, data={"email": email}).model_dump()
        )
    except AccountError as exc:
        logger.info(f"Logout rejected with {exc.status_code}: {exc.message}")
        response = error_response(exc)
    except PyMongoError as exc:
        logger.error(f"Database error during logout: {exc}", exc_info=True)
        response = error_response(InternalError("Database error"))

    response.delete_cookie(
        key=settings.COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    return response


@router.post("/users", response_model=ApiResponse)
async def users_by_phone(body: PhoneLookupRequest):
    """
    Returns the names of users registered with the given mobile number.
    """
    names = await account_service.list_by_phone(body.mobile_number)
    return ApiResponse(message=MSG_USERS_FETCHED, data=names)


@router.get("/all-users", response_model=ApiResponse)
async def all_users(session: SessionContext = Depends(require_session)):
    """
    Returns every account. Requires a valid session.
    """
    users = await account_service.list_all()
    logger.debug(f"Listed {len(users)} users", extra={"email": session.email})
    return ApiResponse(message=MSG_USERS_FETCHED, data=[user.model_dump() for user in users])
