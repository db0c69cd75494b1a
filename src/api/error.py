from typing import Dict, Optional

from fastapi import status

from src.libs.result import Error


class ClientError(Exception):
    def __init__(
        self,
        base_error: Error,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        headers: Optional[Dict[str, str]] = None,
        clear_cookies: bool = False,
    ):
        self.base_error = base_error
        self.status_code = status_code
        self.headers = headers
        self.clear_cookies = clear_cookies
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


class ServiceUnavailableError(Exception):
    """The datastore is not configured or cannot be reached."""

    def __init__(self, message: str = "Database not configured"):
        self.message = message
        super().__init__(message)
