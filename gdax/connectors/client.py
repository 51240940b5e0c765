"""
GDAX REST API client.

Every call goes through one pipeline:
- build the request path and compact JSON body
- sign ``timestamp + METHOD + path + body`` with the API secret
- send exactly the signed bytes with the CB-ACCESS-* headers
- decode a 200 body with the caller's decoder, or the error envelope otherwise

Usage:
    client = GdaxClient(ClientConfig.sandbox())
    book = client.get("/products/BTC-USD/book", {"level": 2},
                      decoder=lambda p: decode_order_book(p, 2))
"""

import json
import logging
import time
from typing import Any, Callable, Optional, TypeVar

import requests

from gdax.config import ClientConfig
from gdax.connectors.decoders import decode_error
from gdax.connectors.http_mixin import (
    DecodeError,
    GdaxError,
    HttpFetcherMixin,
)
from gdax.connectors.signing import (
    QueryParams,
    build_headers,
    build_message,
    encode_body,
    format_request_path,
    sign_message,
)

logger = logging.getLogger("Gdax.Client")

T = TypeVar("T")
Decoder = Callable[[Any], T]

HTTP_OK = 200


class GdaxClient(HttpFetcherMixin):
    """
    Synchronous client for the GDAX REST API.

    The client holds only its immutable config and a pooled session, so one
    instance can be shared by concurrent callers as far as the session allows.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the client.

        Args:
            config: Client configuration (production, unauthenticated if None)
            session: Optional pre-built session (a pooled one is created if None)
            clock: Source of the current UNIX time, used for request timestamps
        """
        self.config = config or ClientConfig()
        self.session = session or self._create_session()
        self._clock = clock

    def __enter__(self) -> "GdaxClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Release pooled connections."""
        self.session.close()

    def get(self, path: str, params: Optional[QueryParams] = None, decoder: Optional[Decoder] = None):
        return self.request("GET", path, params=params, decoder=decoder)

    def post(self, path: str, body: Any = None, decoder: Optional[Decoder] = None):
        return self.request("POST", path, body=body, decoder=decoder)

    def delete(self, path: str, body: Any = None, decoder: Optional[Decoder] = None):
        return self.request("DELETE", path, body=body, decoder=decoder)

    def request(
        self,
        method: str,
        path: str,
        params: Optional[QueryParams] = None,
        body: Any = None,
        decoder: Optional[Decoder] = None,
    ):
        """
        Sign and send a request, then decode the response.

        Args:
            method: HTTP method (GET, POST, DELETE, ...)
            path: Request path, e.g. ``/products``
            params: Optional query parameters
            body: Optional JSON-serializable body
            decoder: Callable applied to the parsed JSON of a 200 response;
                the parsed JSON is returned as-is if None

        Returns:
            The decoded response

        Raises:
            TransportError: Network failure
            InvalidCredential: Secret is not valid base64
            ApiError: Non-200 response with a message envelope
            DecodeError: Body did not match the expected shape
            MalformedEntry: A positional entry failed its type checks
            TypeError: Body is not JSON-serializable (raised before sending)
        """
        method = method.upper()
        request_path = format_request_path(path, params)
        body_text = encode_body(body)

        # Timestamp is taken here, when the request is built
        timestamp = str(int(self._clock()))
        credentials = self.config.credentials
        signature = sign_message(build_message(timestamp, method, request_path, body_text), credentials.secret)

        headers = build_headers(
            timestamp,
            key=credentials.key,
            passphrase=credentials.passphrase,
            signature=signature,
            user_agent=self.config.user_agent,
        )

        url = f"{self.config.base_url}{request_path}"
        logger.debug(f"Request: {method} {request_path} body={body_text!r}")

        response = self._send(
            method,
            url,
            headers=headers,
            data=body_text.encode("utf-8"),
            timeout=self.config.request_timeout,
        )

        logger.debug(f"Response: {method} {request_path} status={response.status_code} body={response.text!r}")
        return self._decode_response(response.status_code, response.content, decoder)

    def _decode_response(self, status_code: int, content: bytes, decoder: Optional[Decoder] = None):
        """Route a response to the success decode or the error envelope."""
        if status_code != HTTP_OK:
            error = decode_error(content, status_code)
            logger.warning(f"API error (HTTP {status_code}): {error}")
            raise error

        try:
            payload = json.loads(content)
        except ValueError as e:
            raise DecodeError(
                f"Response is not valid JSON: {e}",
                status_code=status_code,
                body=content.decode("utf-8", errors="replace"),
            ) from e

        if decoder is None:
            return payload

        try:
            return decoder(payload)
        except DecodeError as e:
            if e.status_code is None:
                e.status_code = status_code
            raise
        except GdaxError:
            raise
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DecodeError(
                f"Response does not match the expected shape: {type(e).__name__}: {e}",
                status_code=status_code,
                body=content.decode("utf-8", errors="replace"),
            ) from e
