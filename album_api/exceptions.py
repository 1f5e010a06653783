"""
Application error taxonomy and the handlers that render it.

Every error leaves the API as ``{"error": "<message>"}``.
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from album_api.utils.logger import get_request_id, log_error
from album_api.utils.prometheus_metrics import exceptions_total


class AppError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(AppError):
    """Request body is missing required fields or carries malformed values."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request body is not valid."


class Conflict(AppError):
    """Identity already exists."""

    # 원본 API와 동일하게 중복 가입은 403으로 응답
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Requested username already exists in database. Please try another."


class Unauthenticated(AppError):
    """Missing, malformed, tampered or expired bearer token, or bad credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid authentication token."


class Forbidden(AppError):
    """Authenticated identity may not touch the resource."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized to access that resource"


class NotFound(AppError):
    """The addressed entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Requested resource does not exist"


class StoreFailure(AppError):
    """An underlying store call failed. The detail stays in the logs."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Unable to complete request.  Please try again later."


def _error_response(status_code: int, message: str, headers: dict = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message},
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register handlers that render the error taxonomy.
    """

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        headers = None
        message = exc.message
        if isinstance(exc, Unauthenticated):
            headers = {"WWW-Authenticate": "Bearer"}
        elif isinstance(exc, NotFound) and message == NotFound.default_message:
            message = f"Requested resource {request.url.path} does not exist"
        return _error_response(exc.status_code, message, headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # 라우트 미스(404)와 메서드 불일치(405)도 같은 본문 형식으로 응답
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = f"Requested resource {request.url.path} does not exist"
        else:
            message = str(exc.detail)
        return _error_response(exc.status_code, message, getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # JSON 파싱 실패 등
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "Request is malformed.",
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Unhandled exception handler with structured logging.
        """
        exceptions_total.inc()
        rid = get_request_id()
        log_error(
            "Unhandled exception occurred",
            error_type=type(exc).__name__,
            error_message=str(exc),
            error_code="INTERNAL_SERVER_ERROR",
            http_method=request.method,
            http_path=request.url.path,
            request_id=rid,
            event="exception",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "request_id": rid,
            },
        )
