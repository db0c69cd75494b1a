from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RequestContext:
    """
    Per-request data the auth use cases need from the transport.

    Built once by the API layer and passed explicitly, so use cases never
    reach into the web framework.
    """

    ip_address: str = "127.0.0.1"
    user_agent: str = ""
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
