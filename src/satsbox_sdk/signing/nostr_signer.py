"""
Nostr HTTP authentication signer

This module provides the signer that turns a canonical payload into a signed
assertion: it derives the public identifier from the secret key, computes the
assertion identifier and signs it with BIP-340 Schnorr over secp256k1.
Construction is all-or-nothing; no partially built assertion is returned.
"""

import logging
from typing import Optional

from ..crypto.secp256k1 import derive_public_key, sign_schnorr, validate_secret_key
from ..exceptions import SatsboxSDKError, SigningError, ErrorCodes
from .types import CanonicalPayload, SignedAssertion, SigningOptions
from .canonical_payload import build_canonical_payload, compute_assertion_id
from .utils import to_hex

logger = logging.getLogger(__name__)

# HTTP auth assertions carry no free text
ASSERTION_CONTENT = ""


class NostrSigner:
    """
    Signer for Nostr HTTP authentication assertions

    The signer borrows the caller's secret key; it keeps a reference only for
    its own lifetime and never persists it. The public identifier is derived
    again for every assertion.
    """

    def __init__(self, secret_key: bytes):
        """
        Initialize the signer with a secret key.

        Args:
            secret_key: Raw 32-byte secp256k1 secret key

        Raises:
            CredentialKeyError: If the key is absent or malformed
        """
        validate_secret_key(secret_key)
        self._secret_key = secret_key

    def sign(
        self,
        payload: CanonicalPayload,
        options: Optional[SigningOptions] = None
    ) -> SignedAssertion:
        """
        Sign a canonical payload.

        Args:
            payload: Canonical payload to sign
            options: Optional signing options

        Returns:
            SignedAssertion: Complete signed assertion

        Raises:
            SigningError: If signing fails
        """
        if not isinstance(payload, CanonicalPayload):
            raise SigningError(
                f"Expected CanonicalPayload, got {type(payload).__name__}",
                ErrorCodes.SIGNING_FAILED
            )

        aux_randomness = options.aux_randomness if options else None

        try:
            pubkey = to_hex(derive_public_key(self._secret_key))
            tags = payload.tags

            assertion_id = compute_assertion_id(
                pubkey, payload.created_at, payload.kind, tags, ASSERTION_CONTENT
            )
            signature = sign_schnorr(self._secret_key, assertion_id, aux_randomness)

        except SatsboxSDKError:
            raise
        except Exception as e:
            raise SigningError(
                f"Assertion signing failed: {e}",
                ErrorCodes.SIGNING_FAILED,
                {"original_error": str(e)}
            )

        logger.debug(f"Signed {payload.method.value} assertion for {payload.url} "
                     f"(id={assertion_id.hex()[:16]}...)")

        return SignedAssertion(
            kind=payload.kind,
            created_at=payload.created_at,
            tags=tuple(tuple(tag) for tag in tags),
            content=ASSERTION_CONTENT,
            pubkey=pubkey,
            id=to_hex(assertion_id),
            sig=to_hex(signature)
        )

    def sign_request(
        self,
        method: str,
        url: str,
        body: Optional[bytes] = None,
        options: Optional[SigningOptions] = None
    ) -> SignedAssertion:
        """
        Canonicalize and sign a request in one step.

        Args:
            method: HTTP method, GET or POST
            url: Absolute request URL
            body: Serialized request body, if any
            options: Optional signing options

        Returns:
            SignedAssertion: Complete signed assertion
        """
        created_at = options.created_at if options else None
        payload = build_canonical_payload(method, url, body, created_at=created_at)
        return self.sign(payload, options)


def create_signer(secret_key: bytes) -> NostrSigner:
    """
    Create a new Nostr signer.

    Args:
        secret_key: Raw 32-byte secp256k1 secret key

    Returns:
        NostrSigner: Configured signer instance
    """
    return NostrSigner(secret_key)


def sign_payload(
    secret_key: bytes,
    payload: CanonicalPayload,
    options: Optional[SigningOptions] = None
) -> SignedAssertion:
    """
    Sign a canonical payload with the given secret key.

    Args:
        secret_key: Raw 32-byte secp256k1 secret key
        payload: Canonical payload
        options: Optional signing options

    Returns:
        SignedAssertion: Signed assertion
    """
    return create_signer(secret_key).sign(payload, options)
