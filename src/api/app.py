import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError
from sqlmodel import SQLModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.app.services.background import best_effort
from .error import ClientError, ServerError, ServiceUnavailableError
from .utils.cookies import clear_auth_cookies

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers=headers,
    )


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(f"Client error: {exc.base_error.code} ({exc.status_code}) {request.url.path}")
    response = error_response(exc.status_code, exc.base_error.message, exc.headers)
    if exc.clear_cookies:
        clear_auth_cookies(response)
    return response


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code} {exc.base_error.message}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    logger.warning(f"HTTP error: {exc.status_code} {request.method} {request.url.path}")
    return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request body"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg", message)
    logger.warning(f"Validation error on {request.url.path}: {message}")
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def handle_service_unavailable(request: Request, exc: Exception):
    logger.error(f"Datastore unavailable on {request.url.path}: {type(exc).__name__}")
    return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "Database not configured")


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    from src.depends import engine

    if engine is not None:
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
    yield
    if best_effort.pending:
        logger.info(f"Waiting for {best_effort.pending} best-effort task(s)")
    await best_effort.drain()


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Inkhouse Auth API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import admin, api_keys, auth, health_check, membership, public_api, user

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(user.router, tags=["User"])
    app.include_router(api_keys.router, tags=["API Keys"])
    app.include_router(admin.router, tags=["Admin"])
    app.include_router(membership.router, tags=["Membership"])
    app.include_router(public_api.router, tags=["Public API"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(ServiceUnavailableError, handle_service_unavailable)
    app.add_exception_handler(OperationalError, handle_service_unavailable)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
