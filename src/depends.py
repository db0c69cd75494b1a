from typing import Callable, Optional

from fastapi import Depends, Request, status
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.api_key_usage import ApiKeyUsageRecorder
from src.adapter.services.email_sender import LoggingEmailSender, ResendEmailSender
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError, ServiceUnavailableError
from src.api.utils.cookies import ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE
from src.api.utils.jwt import TokenPayload, verify_access_token
from src.app.services.authorization import Capability, is_allowed
from src.app.services.email_sender import IEmailSender
from src.app.services.request_context import RequestContext
from src.libs.result import Error

engine = (
    create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)
    if ApplicationConfig.DB_URI
    else None
)

AsyncSessionLocal = (
    sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    if engine is not None
    else None
)


def get_session_factory() -> Optional[Callable[[], AsyncSession]]:
    """None when DB_URI is empty"""
    return AsyncSessionLocal


def _configured(session_factory):
    if session_factory is None:
        raise ServiceUnavailableError()
    return session_factory


async def get_unit_of_work(session_factory=Depends(get_session_factory)):
    async with _configured(session_factory)() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_optional_unit_of_work(session_factory=Depends(get_session_factory)):
    """Like get_unit_of_work, but yields None instead of failing without a datastore"""
    if session_factory is None:
        yield None
        return
    async with session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_api_key_usage_recorder(
    session_factory=Depends(get_session_factory),
) -> ApiKeyUsageRecorder:
    """last_used_at updates run after the response on a session of their own"""
    return ApiKeyUsageRecorder(_configured(session_factory))


def get_email_sender() -> IEmailSender:
    common = dict(
        app_name=ApplicationConfig.APP_NAME,
        app_url=ApplicationConfig.APP_URL,
        super_admin_email=ApplicationConfig.SUPER_ADMIN_EMAIL,
    )
    if not ApplicationConfig.RESEND_API_KEY:
        return LoggingEmailSender(**common)
    return ResendEmailSender(
        api_key=ApplicationConfig.RESEND_API_KEY,
        from_address=ApplicationConfig.EMAIL_FROM,
        api_url=ApplicationConfig.RESEND_API_URL,
        **common,
    )


def _client_ip(request: Request) -> str:
    # Forwarded headers are client-controlled unless a proxy overwrites them
    if ApplicationConfig.TRUST_PROXY_HEADERS:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip.strip()
    if request.client is not None:
        return request.client.host
    return "127.0.0.1"


def get_request_context(request: Request) -> RequestContext:
    """Capture the transport details auth use cases need, once per request."""
    return RequestContext(
        ip_address=_client_ip(request),
        user_agent=request.headers.get("user-agent", ""),
        access_token=request.cookies.get(ACCESS_TOKEN_COOKIE),
        refresh_token=request.cookies.get(REFRESH_TOKEN_COOKIE),
    )


def get_optional_user(
    context: RequestContext = Depends(get_request_context),
) -> Optional[TokenPayload]:
    if not context.access_token:
        return None
    return verify_access_token(context.access_token)


def get_current_user(
    user: Optional[TokenPayload] = Depends(get_optional_user),
) -> TokenPayload:
    """
    Dependency to extract and verify the access token cookie.

    Returns:
        Decoded payload containing user_id, email, username, role

    Raises:
        ClientError: 401 if the cookie is missing, invalid or expired
    """
    if user is None:
        raise ClientError(
            Error("NOT_AUTHENTICATED", "Not authenticated"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return user


def require_capability(capability: Capability):
    """Dependency factory: 401 when anonymous, 403 when the role is not allowed."""

    def dependency(user: TokenPayload = Depends(get_current_user)) -> TokenPayload:
        if not is_allowed(user.role, capability):
            raise ClientError(
                Error("ACCESS_DENIED", "Access denied"),
                status_code=status.HTTP_403_FORBIDDEN,
            )
        return user

    return dependency
