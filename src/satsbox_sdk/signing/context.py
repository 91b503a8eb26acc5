"""
Credential context for authenticated requests

Holds the secret key of one client session and mints Authorization headers
from it. The context is created once per session and handed to every client
that needs to authenticate; setting or clearing the key is the session
owner's job and must happen before any call that signs with it.
"""

import logging
from typing import Optional, Tuple

from ..crypto.secp256k1 import NostrKeyPair, decode_secret_key, derive_public_key, validate_secret_key
from ..exceptions import CredentialKeyError, ErrorCodes
from .nostr_signer import NostrSigner
from .types import SignedAssertion, SigningOptions, HeaderDict
from .token import build_authorization_header
from .utils import RequestBody, serialize_body

logger = logging.getLogger(__name__)


class CredentialContext:
    """
    Session-scoped holder of the secret key used to sign requests.
    """

    def __init__(self, secret_key: Optional[bytes] = None):
        self._secret_key = None
        if secret_key is not None:
            self.set_secret_key(secret_key)

    @classmethod
    def from_key_text(cls, key: str) -> "CredentialContext":
        """Create a context from a hex or ``nsec`` secret key."""
        return cls(decode_secret_key(key))

    @property
    def has_key(self) -> bool:
        return self._secret_key is not None

    def set_secret_key(self, secret_key: bytes) -> None:
        """Configure the raw secret key, replacing any previous one."""
        validate_secret_key(secret_key)
        self._secret_key = secret_key
        logger.info("Configured credential key")

    def set_key_text(self, key: str) -> None:
        """Configure the key from hex or ``nsec`` text."""
        self.set_secret_key(decode_secret_key(key))

    def clear(self) -> None:
        self._secret_key = None
        logger.info("Cleared credential key")

    def require_key(self) -> bytes:
        """
        Return the configured secret key.

        Raises:
            CredentialKeyError: If no key is configured
        """
        if self._secret_key is None:
            raise CredentialKeyError("missing credential key", ErrorCodes.MISSING_KEY)
        return self._secret_key

    def key_pair(self) -> NostrKeyPair:
        secret_key = self.require_key()
        return NostrKeyPair(secret_key=secret_key, public_key=derive_public_key(secret_key))

    def sign_request(
        self,
        method: str,
        url: str,
        body: Optional[bytes] = None,
        options: Optional[SigningOptions] = None
    ) -> SignedAssertion:
        """Mint a fresh signed assertion for one request."""
        return NostrSigner(self.require_key()).sign_request(method, url, body, options)

    def authorization_header(
        self,
        method: str,
        url: str,
        body: RequestBody = None,
        options: Optional[SigningOptions] = None
    ) -> Tuple[HeaderDict, Optional[bytes]]:
        """
        Build the Authorization header for a request.

        The body is serialized once; the returned bytes are the ones that were
        digested and must be sent unchanged.

        Returns:
            tuple: (header dict, serialized body or None)

        Raises:
            CredentialKeyError: If no key is configured
            CanonicalizationError: If the request cannot be canonicalized
            SigningError: If signing fails
        """
        self.require_key()
        serialized = serialize_body(body)
        assertion = self.sign_request(method, url, serialized, options)
        return build_authorization_header(assertion), serialized

    def __repr__(self) -> str:
        return f"CredentialContext(has_key={self.has_key})"
