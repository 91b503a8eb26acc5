"""
Credential token encoding

A signed assertion travels as base64 text of its JSON serialization inside an
``Authorization: Nostr <token>`` header.
"""

import json
import base64
import binascii

from .types import SignedAssertion, AUTH_SCHEME, HeaderDict
from ..exceptions import TokenError


def encode_token(assertion: SignedAssertion) -> str:
    """
    Encode a signed assertion as a credential token.

    Args:
        assertion: Signed assertion including id and signature

    Returns:
        str: Standard base64 text of the compact JSON object
    """
    text = json.dumps(assertion.to_dict(), separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(text.encode('utf-8')).decode('ascii')


def decode_token(token: str) -> SignedAssertion:
    """
    Decode a credential token back into a signed assertion.

    Raises:
        TokenError: If the token is not base64 JSON of an assertion
    """
    if not isinstance(token, str) or not token.strip():
        raise TokenError("Token cannot be empty")

    try:
        raw = base64.b64decode(token.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise TokenError(f"Token is not valid base64: {e}")

    try:
        data = json.loads(raw.decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise TokenError(f"Token does not contain valid JSON: {e}")

    return SignedAssertion.from_dict(data)


def build_authorization_header(assertion: SignedAssertion) -> HeaderDict:
    """
    Build the Authorization header for a signed assertion.

    Returns:
        dict: ``{"Authorization": "Nostr <token>"}``
    """
    return {"Authorization": f"{AUTH_SCHEME} {encode_token(assertion)}"}


def parse_authorization_header(value: str) -> str:
    """
    Extract the token from an Authorization header value.

    Raises:
        TokenError: If the value does not use the Nostr scheme
    """
    if not isinstance(value, str):
        raise TokenError("Authorization header must be a string")

    scheme, _, token = value.strip().partition(" ")
    if scheme.lower() != AUTH_SCHEME.lower() or not token.strip():
        raise TokenError(f"Authorization header does not use the {AUTH_SCHEME} scheme")

    return token.strip()
