"""
Canonical message construction and HMAC request signing.

The exchange authenticates a request by the header ``CB-ACCESS-SIGN``: a
SHA-256 HMAC, keyed with the base64-decoded secret, over the prehash string
``timestamp + METHOD + requestPath + body``, base64-encoded. Everything here
is pure so the signing rules can be tested without a network.
"""

import base64
import binascii
import hashlib
import hmac
import json
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union
from urllib.parse import urlencode

from gdax.config import DEFAULT_USER_AGENT
from gdax.connectors.http_mixin import InvalidCredential

QueryParams = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]

HEADER_ACCEPT = "Accept"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_USER_AGENT = "User-Agent"
HEADER_TIMESTAMP = "CB-ACCESS-TIMESTAMP"
HEADER_KEY = "CB-ACCESS-KEY"
HEADER_PASSPHRASE = "CB-ACCESS-PASSPHRASE"
HEADER_SIGN = "CB-ACCESS-SIGN"

JSON_CONTENT_TYPE = "application/json"


def _flatten_params(params: QueryParams):
    items = params.items() if isinstance(params, Mapping) else params
    for key, value in items:
        if isinstance(value, (list, tuple)):
            for item in value:
                yield str(key), str(item)
        else:
            yield str(key), str(value)


def format_request_path(path: str, params: Optional[QueryParams] = None) -> str:
    """
    Append URL-encoded query parameters to a path.

    Pairs are sorted by key, then value, so the same logical request always
    produces the same string.

    Args:
        path: Request path, e.g. ``/products/BTC-USD/book``
        params: Mapping or sequence of (key, value) pairs; list values repeat the key

    Returns:
        ``path`` or ``path?k=v&...``
    """
    if not params:
        return path
    encoded = urlencode(sorted(_flatten_params(params)))
    if not encoded:
        return path
    return f"{path}?{encoded}"


def encode_body(body: Any = None) -> str:
    """
    Serialize a request body to compact JSON; no body is the empty string.

    Raises:
        TypeError: If the body holds a value json cannot serialize
    """
    if body is None:
        return ""
    return json.dumps(body, separators=(",", ":"))


def build_message(timestamp: str, method: str, request_path: str, body: str = "") -> str:
    """Build the prehash string: timestamp, upper-cased method, path, body."""
    return f"{timestamp}{method.upper()}{request_path}{body}"


def sign_message(message: str, secret: str) -> str:
    """
    Sign a canonical message.

    Args:
        message: Output of build_message()
        secret: Base64-encoded signing secret; empty means unsigned

    Returns:
        Base64-encoded HMAC-SHA256 signature, or "" when secret is empty

    Raises:
        InvalidCredential: If the secret is not valid base64
    """
    if not secret:
        return ""

    try:
        key = base64.b64decode(secret, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidCredential(f"API secret is not valid base64: {e}") from e

    digest = hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def build_headers(
    timestamp: str,
    key: str = "",
    passphrase: str = "",
    signature: str = "",
    user_agent: str = "",
) -> Dict[str, str]:
    """
    Assemble request headers.

    The timestamp and User-Agent headers are always present; an empty
    user_agent falls back to DEFAULT_USER_AGENT. The key, passphrase and
    signature headers are each added only when their value is non-empty, so
    the same pipeline serves public and authenticated calls.
    """
    headers = {
        HEADER_ACCEPT: JSON_CONTENT_TYPE,
        HEADER_CONTENT_TYPE: JSON_CONTENT_TYPE,
        HEADER_USER_AGENT: user_agent or DEFAULT_USER_AGENT,
        HEADER_TIMESTAMP: timestamp,
    }
    if key:
        headers[HEADER_KEY] = key
    if passphrase:
        headers[HEADER_PASSPHRASE] = passphrase
    if signature:
        headers[HEADER_SIGN] = signature
    return headers
