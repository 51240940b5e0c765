"""HTTP session mixin and the error types raised by the request pipeline."""

import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger("Gdax.HttpMixin")

DEFAULT_REQUEST_TIMEOUT = 10
DEFAULT_POOL_CONNECTIONS = 10
DEFAULT_POOL_MAXSIZE = 20


class GdaxError(Exception):
    """Base exception for every failure surfaced by the client."""
    pass


class TransportError(GdaxError):
    """Network or connection failure before a response was read."""
    pass


class InvalidCredential(GdaxError):
    """The signing secret is not valid base64."""
    pass


class DecodeError(GdaxError):
    """Response body did not match the expected JSON shape."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MalformedEntry(GdaxError):
    """A positional JSON entry had the wrong arity or element types."""

    def __init__(self, message: str, index: int, side: Optional[str] = None):
        location = f"{side}[{index}]" if side else f"[{index}]"
        super().__init__(f"malformed entry at {location}: {message}")
        self.index = index
        self.side = side


class ApiError(GdaxError):
    """
    Business error reported by the exchange in a ``{"message": ...}`` body.

    ``str(error)`` is exactly the server's message; the status code is kept
    as an attribute so callers can branch on it.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class HttpFetcherMixin:
    """Provides the pooled ``requests`` session used by the client.

    Usage:
        class MyClient(HttpFetcherMixin):
            def __init__(self):
                self.session = self._create_session()
    """

    def _create_session(
        self,
        pool_connections: int = DEFAULT_POOL_CONNECTIONS,
        pool_maxsize: int = DEFAULT_POOL_MAXSIZE,
    ) -> requests.Session:
        """
        Create a requests session with connection pooling.

        Retries are disabled: every call is a single request/response cycle
        and failures surface to the caller as they happen.

        Args:
            pool_connections: Number of connection pools to cache
            pool_maxsize: Maximum connections kept per pool

        Returns:
            Configured requests.Session instance
        """
        session = requests.Session()

        adapter = HTTPAdapter(
            max_retries=Retry(total=0, read=False),
            pool_connections=pool_connections,
            pool_maxsize=pool_maxsize,
        )

        session.mount("http://", adapter)
        session.mount("https://", adapter)

        logger.debug(f"Created HTTP session (pool_connections={pool_connections}, pool_maxsize={pool_maxsize})")
        return session

    def _send(
        self,
        method: str,
        url: str,
        headers: dict,
        data: bytes,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> requests.Response:
        """
        Issue a single HTTP request and read the full body.

        Args:
            method: HTTP method
            url: Absolute URL, query string included
            headers: Request headers
            data: Body bytes, sent as-is
            timeout: Request timeout in seconds

        Returns:
            The response with its content already read

        Raises:
            TransportError: On any connection, timeout or protocol failure
        """
        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                data=data,
                timeout=timeout,
            )
            # Force the body to be read before the connection goes back to the pool
            _ = response.content
            return response
        except requests.Timeout as e:
            logger.error(f"Request to {url} timed out after {timeout}s: {e}")
            raise TransportError(f"Request timed out: {e}") from e
        except requests.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise TransportError(f"Request failed: {e}") from e
