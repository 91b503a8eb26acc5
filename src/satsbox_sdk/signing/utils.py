"""
Utility functions for request signing

This module provides the helpers used while canonicalizing a request:
timestamp generation, stable body serialization, payload digest calculation
and URL construction.
"""

import time
import json
import hashlib
from typing import Any, Dict, Optional, Union
from urllib.parse import urlparse

from requests.utils import requote_uri

from ..exceptions import CanonicalizationError, ErrorCodes

RequestBody = Union[str, bytes, Dict[str, Any], list, int, float, bool, None]


def generate_timestamp() -> int:
    """
    Generate current Unix timestamp.

    Returns:
        int: Current Unix timestamp (seconds since epoch)
    """
    return int(time.time())


def serialize_body(body: RequestBody) -> Optional[bytes]:
    """
    Serialize a request body to the exact bytes sent on the wire.

    JSON-compatible structures are encoded compactly in insertion order, the
    same text ``JSON.stringify`` produces. Strings and bytes are taken as
    already serialized.

    Args:
        body: Request body (structure, string, bytes, or None)

    Returns:
        Optional[bytes]: Serialized body, or None when there is no body

    Raises:
        CanonicalizationError: If the body cannot be serialized
    """
    if body is None:
        return None

    if isinstance(body, bytes):
        return body

    try:
        if isinstance(body, str):
            return body.encode('utf-8')
        text = json.dumps(body, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        return text.encode('utf-8')
    except (TypeError, ValueError) as e:
        raise CanonicalizationError(
            f"Request body serialization failed: {e}",
            ErrorCodes.SERIALIZATION_FAILED,
            {"body_type": type(body).__name__}
        )


def calculate_payload_digest(content: bytes) -> str:
    """
    Calculate the payload digest for a serialized body.

    Args:
        content: Serialized body bytes

    Returns:
        str: Lowercase hex SHA-256 digest (64 characters)

    Raises:
        CanonicalizationError: If content is not bytes
    """
    if not isinstance(content, bytes):
        raise CanonicalizationError(
            f"Payload digest requires serialized bytes, got {type(content).__name__}",
            ErrorCodes.SERIALIZATION_FAILED,
            {"content_type": type(content).__name__}
        )

    return hashlib.sha256(content).hexdigest()


def validate_base_url(base_url: str) -> str:
    """
    Validate an API base URL and strip its trailing slash.

    Raises:
        CanonicalizationError: If the URL is not an absolute http(s) URL
    """
    if not isinstance(base_url, str) or not base_url:
        raise CanonicalizationError("Base URL cannot be empty", ErrorCodes.INVALID_URL)

    parsed = urlparse(base_url)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise CanonicalizationError(
            f"Invalid base URL format: {base_url}",
            ErrorCodes.INVALID_URL,
            {"url": base_url}
        )

    return base_url.rstrip('/')


def build_request_url(base_url: str, path: str) -> str:
    """
    Join the API base URL and a request path into the URL being authorized.

    Args:
        base_url: Absolute http(s) origin, optionally with a path prefix
        path: Request path starting with ``/``

    Returns:
        str: Absolute request URL with non-ASCII and unsafe path characters
            percent-encoded

    Raises:
        CanonicalizationError: If either part is missing or malformed
    """
    if not isinstance(path, str) or not path:
        raise CanonicalizationError("Request path cannot be empty", ErrorCodes.INVALID_PATH)

    if not path.startswith('/') or path.startswith('//'):
        raise CanonicalizationError(
            f"Request path must start with a single '/': {path}",
            ErrorCodes.INVALID_PATH,
            {"path": path}
        )

    if any(ch.isspace() for ch in path):
        raise CanonicalizationError(
            f"Request path contains whitespace: {path!r}",
            ErrorCodes.INVALID_PATH,
            {"path": path}
        )

    # Signed URL must match the percent-encoded URL put on the wire
    try:
        quoted_path = requote_uri(path)
    except ValueError as e:
        raise CanonicalizationError(
            f"Request path cannot be encoded: {e}",
            ErrorCodes.INVALID_PATH,
            {"path": path}
        )

    return validate_base_url(base_url) + quoted_path


def to_hex(data: bytes) -> str:
    """
    Convert bytes to lowercase hex string.
    """
    return data.hex().lower()
