from fastapi import Response

from config import ApplicationConfig

ACCESS_TOKEN_COOKIE = "access_token"
REFRESH_TOKEN_COOKIE = "refresh_token"


def _secure() -> bool:
    return ApplicationConfig.ENVIRONMENT == "production"


def set_auth_cookies(response: Response, access_token: str, refresh_token: str) -> None:
    """Issue both auth cookies: httpOnly, lax, secure in production."""
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=access_token,
        httponly=True,
        secure=_secure(),
        samesite="lax",
        path="/",
        max_age=ApplicationConfig.ACCESS_TOKEN_TTL_HOURS * 60 * 60,
    )
    response.set_cookie(
        key=REFRESH_TOKEN_COOKIE,
        value=refresh_token,
        httponly=True,
        secure=_secure(),
        samesite="lax",
        path="/",
        max_age=ApplicationConfig.REFRESH_TOKEN_TTL_DAYS * 24 * 60 * 60,
    )


def clear_auth_cookies(response: Response) -> None:
    """Clear both auth cookies together."""
    for key in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE):
        response.delete_cookie(
            key=key,
            path="/",
            secure=_secure(),
            httponly=True,
            samesite="lax",
        )
