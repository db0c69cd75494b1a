from typing import List

from httpx import Response


def set_cookie_headers(response: Response) -> List[str]:
    return response.headers.get_list("set-cookie")


def is_cookie_cleared(response: Response, name: str) -> bool:
    return any(
        header.startswith(f"{name}=") and "Max-Age=0" in header
        for header in set_cookie_headers(response)
    )


def cookie_header(**cookies: str) -> dict:
    """Explicit Cookie header; it takes precedence over the client's cookie jar."""
    return {"Cookie": "; ".join(f"{name}={value}" for name, value in cookies.items())}
