"""
Satsbox Python SDK - Request Signing Module

Nostr HTTP authentication (kind 27235 assertions) with BIP-340 Schnorr
signatures. This module builds the canonical description of a request, signs
it and encodes the result as an ``Authorization: Nostr <token>`` header.
"""

from .types import (
    CanonicalPayload,
    SignedAssertion,
    SigningOptions,
    HttpMethod,
    HTTP_AUTH_KIND,
    AUTH_SCHEME,
    METHOD_TAG,
    URL_TAG,
    PAYLOAD_TAG,
)

from .utils import (
    generate_timestamp,
    serialize_body,
    calculate_payload_digest,
    build_request_url,
    validate_base_url,
)

from .canonical_payload import (
    build_canonical_payload,
    serialize_assertion_for_id,
    compute_assertion_id,
)

from .nostr_signer import (
    NostrSigner,
    create_signer,
    sign_payload,
)

from .token import (
    encode_token,
    decode_token,
    build_authorization_header,
    parse_authorization_header,
)

from .context import CredentialContext

# Public API exports
__all__ = [
    # Types
    'CanonicalPayload',
    'SignedAssertion',
    'SigningOptions',
    'HttpMethod',
    'HTTP_AUTH_KIND',
    'AUTH_SCHEME',
    'METHOD_TAG',
    'URL_TAG',
    'PAYLOAD_TAG',
    # Utilities
    'generate_timestamp',
    'serialize_body',
    'calculate_payload_digest',
    'build_request_url',
    'validate_base_url',
    # Canonicalization
    'build_canonical_payload',
    'serialize_assertion_for_id',
    'compute_assertion_id',
    # Signing
    'NostrSigner',
    'create_signer',
    'sign_payload',
    # Tokens
    'encode_token',
    'decode_token',
    'build_authorization_header',
    'parse_authorization_header',
    # Credentials
    'CredentialContext',
]
