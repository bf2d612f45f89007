"""HTTP client utilities for talking to the booking backend.

Pattern: one shared requests.Session with connection pooling and a default
timeout. Calls are made once: a failure is reported to the caller, who falls
back to local storage instead of retrying.
"""
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter

from booking import config


class BackendError(Exception):
    """Raised when the backend can't be reached or answers with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TimeoutSession(requests.Session):
    """Session that applies a default timeout to every request."""

    def __init__(self, timeout: float):
        super().__init__()
        self.timeout = timeout

    def request(self, method, url, **kwargs):
        kwargs.setdefault('timeout', self.timeout)
        return super().request(method, url, **kwargs)


def create_http_session(timeout: float = config.HTTP_TIMEOUT) -> requests.Session:
    """
    Create HTTP session with connection pooling and no retries.

    Args:
        timeout: Request timeout in seconds

    Returns:
        Configured requests.Session
    """
    session = TimeoutSession(timeout)

    adapter = HTTPAdapter(
        max_retries=0,
        pool_connections=10,
        pool_maxsize=10,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    return session


def fetch_json(session: requests.Session, method: str, url: str, **kwargs) -> Any:
    """
    Make a request and decode its JSON body.

    Args:
        session: Session to send the request with
        method: HTTP method (GET, POST, DELETE)
        url: Request URL
        **kwargs: Additional arguments for requests

    Returns:
        Decoded JSON body

    Raises:
        BackendError: On network errors, non-2xx status or a non-JSON body
    """
    try:
        response = session.request(method.upper(), url, **kwargs)
    except requests.exceptions.RequestException as e:
        raise BackendError(f"{method.upper()} {url} failed: {e}") from e

    if not response.ok:
        raise BackendError(f"HTTP {response.status_code}", status_code=response.status_code)

    try:
        return response.json()
    except ValueError as e:
        raise BackendError(f"Invalid JSON from {url}", status_code=response.status_code) from e
