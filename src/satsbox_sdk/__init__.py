"""
Satsbox Python SDK
Client-side Nostr HTTP authentication for the Satsbox API
"""

from .version import __version__
from .crypto import (
    NostrKeyPair,
    decode_secret_key,
    decode_public_key,
    derive_public_key,
    encode_npub,
    load_key_pair,
    sign_schnorr,
    verify_schnorr,
)
from .exceptions import (
    SatsboxSDKError,
    CredentialKeyError,
    CanonicalizationError,
    SigningError,
    TokenError,
    TransportError,
    ServerError,
    ConfigError,
    ErrorCodes,
)
from .config import (
    ClientConfig,
    load_config_from_dict,
    load_config_from_json,
    load_config_from_file,
    load_config_from_env,
)
from .signing import (
    # Types
    CanonicalPayload,
    SignedAssertion,
    SigningOptions,
    HttpMethod,
    HTTP_AUTH_KIND,
    # Canonicalization and digests
    build_canonical_payload,
    compute_assertion_id,
    serialize_body,
    calculate_payload_digest,
    build_request_url,
    # Signing
    NostrSigner,
    create_signer,
    sign_payload,
    # Tokens
    encode_token,
    decode_token,
    build_authorization_header,
    # Credentials
    CredentialContext,
)
from .http_client import (
    SatsboxHttpClient,
    RequestsTransport,
    Transport,
    create_client,
    parse_server_error,
)
from .http_clients import (
    AsyncSatsboxHttpClient,
    AsyncTransport,
    HttpxTransport,
    create_async_client,
)

# Public API exports
__all__ = [
    '__version__',
    # Keys
    'NostrKeyPair',
    'decode_secret_key',
    'decode_public_key',
    'derive_public_key',
    'encode_npub',
    'load_key_pair',
    'sign_schnorr',
    'verify_schnorr',
    # Exceptions
    'SatsboxSDKError',
    'CredentialKeyError',
    'CanonicalizationError',
    'SigningError',
    'TokenError',
    'TransportError',
    'ServerError',
    'ConfigError',
    'ErrorCodes',
    # Configuration
    'ClientConfig',
    'load_config_from_dict',
    'load_config_from_json',
    'load_config_from_file',
    'load_config_from_env',
    # Request Signing
    'CanonicalPayload',
    'SignedAssertion',
    'SigningOptions',
    'HttpMethod',
    'HTTP_AUTH_KIND',
    'build_canonical_payload',
    'compute_assertion_id',
    'serialize_body',
    'calculate_payload_digest',
    'build_request_url',
    'NostrSigner',
    'create_signer',
    'sign_payload',
    'encode_token',
    'decode_token',
    'build_authorization_header',
    'CredentialContext',
    # HTTP Clients
    'SatsboxHttpClient',
    'RequestsTransport',
    'Transport',
    'create_client',
    'parse_server_error',
    'AsyncSatsboxHttpClient',
    'AsyncTransport',
    'HttpxTransport',
    'create_async_client',
]
