from fastapi import status

from src.api.error import ClientError
from src.app.services.rate_limiter import FixedWindowRateLimiter, RateLimitResult
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error


async def enforce_rate_limit(
    uow: UnitOfWork,
    identity: str,
    action: str,
    limit: int,
    window_seconds: int,
    message: str,
) -> RateLimitResult:
    """Count the request; raise a 429 ClientError carrying X-RateLimit-* headers when over."""
    result = await FixedWindowRateLimiter(uow).check(identity, action, limit, window_seconds)
    if not result.allowed:
        raise ClientError(
            Error("RATE_LIMITED", message),
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            headers=result.headers(),
        )
    return result
