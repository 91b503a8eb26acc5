"""
Canonical payload construction for Nostr HTTP authentication

This module builds the fixed-order description of one HTTP call (method,
absolute URL, optional payload digest) and the canonical serialization that
the assertion identifier is hashed from. Tag order and the field order of the
identifier serialization are part of the wire protocol.
"""

import json
import hashlib
from typing import Optional, Sequence
from urllib.parse import urlparse

from .types import CanonicalPayload, HttpMethod, HTTP_AUTH_KIND
from .utils import calculate_payload_digest, generate_timestamp
from ..exceptions import CanonicalizationError, ErrorCodes


def build_canonical_payload(
    method: str,
    url: str,
    body: Optional[bytes] = None,
    created_at: Optional[int] = None
) -> CanonicalPayload:
    """
    Build the canonical payload for an outgoing request.

    Args:
        method: HTTP method, GET or POST
        url: Absolute request URL
        body: Serialized request body; None or empty means no body. Only
            POST requests may carry a non-empty body
        created_at: Creation time override, defaults to the wall clock

    Returns:
        CanonicalPayload: Immutable canonical payload

    Raises:
        CanonicalizationError: If the method, URL or body is malformed
    """
    http_method = HttpMethod.parse(method)
    _validate_absolute_url(url)

    payload_digest = None
    if body is not None:
        if not isinstance(body, bytes):
            raise CanonicalizationError(
                "Request body must be serialized before canonicalization",
                ErrorCodes.SERIALIZATION_FAILED,
                {"body_type": type(body).__name__}
            )
        if body:
            if http_method is HttpMethod.GET:
                raise CanonicalizationError(
                    "GET requests cannot carry a body",
                    ErrorCodes.INVALID_METHOD,
                    {"url": url}
                )
            payload_digest = calculate_payload_digest(body)

    if created_at is None:
        created_at = generate_timestamp()
    elif not isinstance(created_at, int) or isinstance(created_at, bool) or created_at < 0:
        raise CanonicalizationError(
            f"Invalid created_at timestamp: {created_at!r}",
            ErrorCodes.INVALID_TIMESTAMP
        )

    return CanonicalPayload(
        method=http_method,
        url=url,
        created_at=created_at,
        payload_digest=payload_digest,
        kind=HTTP_AUTH_KIND
    )


def serialize_assertion_for_id(
    pubkey: str,
    created_at: int,
    kind: int,
    tags: Sequence[Sequence[str]],
    content: str
) -> str:
    """
    Serialize assertion fields in identifier order.

    The layout is ``[0, pubkey, created_at, kind, tags, content]`` encoded as
    compact JSON with non-ASCII characters kept as UTF-8.
    """
    return json.dumps(
        [0, pubkey, created_at, kind, [list(tag) for tag in tags], content],
        separators=(",", ":"),
        ensure_ascii=False
    )


def compute_assertion_id(
    pubkey: str,
    created_at: int,
    kind: int,
    tags: Sequence[Sequence[str]],
    content: str
) -> bytes:
    """
    Compute the 32-byte assertion identifier.

    Returns:
        bytes: SHA-256 digest of the canonical serialization
    """
    serialized = serialize_assertion_for_id(pubkey, created_at, kind, tags, content)
    try:
        encoded = serialized.encode('utf-8')
    except UnicodeEncodeError as e:
        raise CanonicalizationError(
            f"Assertion fields are not valid UTF-8 text: {e}",
            ErrorCodes.SERIALIZATION_FAILED
        )
    return hashlib.sha256(encoded).digest()


def _validate_absolute_url(url: str) -> None:
    if not isinstance(url, str) or not url:
        raise CanonicalizationError("Request URL cannot be empty", ErrorCodes.INVALID_URL)

    parsed = urlparse(url)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise CanonicalizationError(
            f"Request URL must be absolute http(s): {url}",
            ErrorCodes.INVALID_URL,
            {"url": url}
        )
