from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from app.core.exceptions import AccountError
from app.schemas.response import ErrorResponse
from app.core.config import settings

logger = logging.getLogger(__name__)


def error_response(exc: AccountError) -> JSONResponse:
    """
    Renders an AccountError into the standard error envelope.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(message=exc.message).model_dump()
    )


def add_exception_handlers(app: FastAPI):
    """
    Registers exception handlers with the FastAPI app.
    """
    @app.exception_handler(AccountError)
    async def account_exception_handler(request: Request, exc: AccountError):
        if exc.status_code >= 500:
            logger.error(f"{exc.code}: {exc.message}", extra={"path": request.url.path})
        else:
            logger.info(
                f"Request rejected with {exc.status_code}: {exc.message}",
                extra={"path": request.url.path}
            )
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Handles standard HTTP exceptions (404, 405, etc.)
        """
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(message=str(exc.detail)).model_dump(),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Malformed bodies are input errors, reported with the same envelope.
        """
        logger.info(
            "Request body failed validation",
            extra={"path": request.url.path, "errors": exc.errors()}
        )
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(message="Input validation failed").model_dump()
        )

    @app.exception_handler(PyMongoError)
    async def database_exception_handler(request: Request, exc: PyMongoError):
        logger.error(
            f"Database error: {str(exc)}",
            extra={"path": request.url.path},
            exc_info=True
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(message="Database error").model_dump()
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all for unhandled exceptions.
        """
        logger.error(
            f"Unhandled exception: {str(exc)}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else "unknown"
            },
            exc_info=True
        )

        message = "Internal server error" if settings.is_production else str(exc)

        return JSONResponse(
            status_code=500,
            content=ErrorResponse(message=message).model_dump()
        )
