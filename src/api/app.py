import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.adapter.services.database import Database
from src.adapter.services.reaper import run_reaper
from src.adapter.services.token_issuer import JoseTokenIssuer
from src.domain.errors import TransientStorageError
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


def _error_response(
    status_code: int, code: str, message: str, headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        headers=headers,
        content={
            "success": False,
            "message": message,
            "error": {"code": code, "message": message},
        },
    )


async def handle_client_error(request: Request, exc: ClientError):
    error = exc.base_error
    logger.warning(f"Client error: {error.code} ({error.message})")
    return _error_response(exc.status_code, error.code, error.message)


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code} ({exc.base_error.message})")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, exc.base_error.code, "Internal server error"
    )


async def handle_storage_error(request: Request, exc: TransientStorageError):
    logger.error(f"Storage error on {request.method} {request.url.path}: {exc}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "STORAGE_UNAVAILABLE",
        "Internal server error",
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    fields = sorted(
        {str(err["loc"][-1]) for err in exc.errors() if err.get("loc")}
    )
    message = "Invalid request"
    if fields:
        message = f"Missing or invalid field(s): {', '.join(fields)}"
    logger.warning(f"Validation error on {request.url.path}: {message}")
    return _error_response(status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", message)


_HTTP_ERROR_CODES = {
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    code = _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    logger.warning(f"HTTP error on {request.method} {request.url.path}: {exc.status_code} {message}")
    return _error_response(exc.status_code, code, message, headers=exc.headers)


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", "Internal server error"
    )


def create_app(ApplicationConfig) -> FastAPI:
    # Fails fast with ConfigurationError when no signing secret is configured
    token_issuer = JoseTokenIssuer(ApplicationConfig.JWT_SECRET, ApplicationConfig.JWT_ALGORITHM)
    database = Database(ApplicationConfig.DB_URI)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await database.create_all()
        reaper = None
        if ApplicationConfig.REAPER_ENABLED:
            reaper = asyncio.create_task(
                run_reaper(database, ApplicationConfig.REAPER_INTERVAL_SECONDS)
            )
        yield
        if reaper is not None:
            reaper.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await reaper
        await database.dispose()

    app = FastAPI(title="QR Login Service", version="0.1.0", lifespan=lifespan)
    app.state.database = database
    app.state.token_issuer = token_issuer

    allow_all = "*" in ApplicationConfig.CORS_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else ApplicationConfig.CORS_ORIGINS,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import admin, handshake, health_check, sessions

    prefix = ApplicationConfig.API_PREFIX or ""
    app.include_router(health_check.router, tags=["Health"])
    app.include_router(handshake.router, prefix=prefix, tags=["Handshake"])
    app.include_router(sessions.router, prefix=prefix, tags=["Sessions"])
    app.include_router(admin.router, prefix=prefix, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(TransientStorageError, handle_storage_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
