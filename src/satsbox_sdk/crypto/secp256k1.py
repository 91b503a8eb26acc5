"""
secp256k1 key handling for Satsbox Python SDK

This module parses Nostr secret keys supplied by the caller (hex or bech32
``nsec``), derives the x-only public identifier with the cryptography package,
and produces BIP-340 Schnorr signatures through coincurve. Keys are never
generated or persisted here.
"""

import re
import secrets
import logging
from dataclasses import dataclass
from typing import Optional

import coincurve
from cryptography.hazmat.primitives.asymmetric import ec
from pynostr.key import PrivateKey, PublicKey

from ..exceptions import CredentialKeyError, SigningError, ErrorCodes

logger = logging.getLogger(__name__)

# Constants for secp256k1 key operations
SECRET_KEY_LENGTH = 32
PUBLIC_KEY_LENGTH = 32
SCHNORR_SIGNATURE_LENGTH = 64
MESSAGE_HASH_LENGTH = 32

SECP256K1_ORDER = int(
    "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141", 16
)

NSEC_PREFIX = "nsec1"
NPUB_PREFIX = "npub1"

_HEX_KEY_PATTERN = re.compile(r'^[0-9a-fA-F]{64}$')


@dataclass(frozen=True)
class NostrKeyPair:
    """
    A caller-supplied secret key together with its public identifier.

    Attributes:
        secret_key: Raw secret scalar (32 bytes)
        public_key: x-only public identifier (32 bytes)
    """
    secret_key: bytes
    public_key: bytes

    def __post_init__(self):
        """Validate key lengths after initialization"""
        if len(self.secret_key) != SECRET_KEY_LENGTH:
            raise CredentialKeyError(
                f"Secret key must be exactly {SECRET_KEY_LENGTH} bytes",
                ErrorCodes.INVALID_KEY
            )
        if len(self.public_key) != PUBLIC_KEY_LENGTH:
            raise CredentialKeyError(
                f"Public key must be exactly {PUBLIC_KEY_LENGTH} bytes",
                ErrorCodes.INVALID_KEY
            )

    @property
    def public_key_hex(self) -> str:
        return self.public_key.hex()

    @property
    def npub(self) -> str:
        return encode_npub(self.public_key)

    def __repr__(self) -> str:
        # Never print the secret
        return f"NostrKeyPair(public_key='{self.public_key_hex}')"


def validate_secret_key(secret_key: bytes) -> None:
    """
    Validate raw secret key material.

    Args:
        secret_key: Secret key bytes to validate

    Raises:
        CredentialKeyError: If the key is absent, the wrong length, or not a
            valid secp256k1 scalar
    """
    if secret_key is None:
        raise CredentialKeyError("missing credential key", ErrorCodes.MISSING_KEY)

    if not isinstance(secret_key, bytes):
        raise CredentialKeyError("Secret key must be bytes", ErrorCodes.INVALID_KEY)

    if len(secret_key) != SECRET_KEY_LENGTH:
        raise CredentialKeyError(
            f"Secret key must be exactly {SECRET_KEY_LENGTH} bytes",
            ErrorCodes.INVALID_KEY,
            {"length": len(secret_key)}
        )

    scalar = int.from_bytes(secret_key, "big")
    if not 0 < scalar < SECP256K1_ORDER:
        raise CredentialKeyError(
            "Secret key is not a valid secp256k1 scalar",
            ErrorCodes.INVALID_KEY
        )


def decode_secret_key(key: str) -> bytes:
    """
    Decode a secret key given as 64 hex characters or a bech32 ``nsec``.

    Args:
        key: Key text as entered by the user

    Returns:
        bytes: Raw 32-byte secret key

    Raises:
        CredentialKeyError: If the text is a public key or is malformed
    """
    if not isinstance(key, str) or not key.strip():
        raise CredentialKeyError("Please input correct secret key", ErrorCodes.INVALID_KEY)

    key = key.strip()
    lowered = key.lower()

    if lowered.startswith(NPUB_PREFIX):
        raise CredentialKeyError(
            "Please input secret key not public key",
            ErrorCodes.PUBLIC_KEY_GIVEN
        )

    if lowered.startswith(NSEC_PREFIX):
        try:
            secret_key = bytes.fromhex(PrivateKey.from_nsec(lowered).hex())
        except Exception as e:
            raise CredentialKeyError(
                "Please input correct secret key",
                ErrorCodes.INVALID_KEY,
                {"original_error": str(e)}
            )
    elif _HEX_KEY_PATTERN.match(key):
        secret_key = bytes.fromhex(key)
    else:
        raise CredentialKeyError("Please input correct secret key", ErrorCodes.INVALID_KEY)

    validate_secret_key(secret_key)
    return secret_key


def derive_public_key(secret_key: bytes) -> bytes:
    """
    Derive the x-only public identifier for a secret key.

    Args:
        secret_key: Raw 32-byte secret key

    Returns:
        bytes: 32-byte x coordinate of the public point

    Raises:
        CredentialKeyError: If the secret key is invalid
    """
    validate_secret_key(secret_key)

    try:
        private_key_obj = ec.derive_private_key(
            int.from_bytes(secret_key, "big"), ec.SECP256K1()
        )
    except ValueError as e:
        raise CredentialKeyError(
            f"Secret key rejected by curve: {e}",
            ErrorCodes.INVALID_KEY
        )

    x = private_key_obj.public_key().public_numbers().x
    return x.to_bytes(PUBLIC_KEY_LENGTH, "big")


def load_key_pair(key: str) -> NostrKeyPair:
    """Parse key text and return the secret with its public identifier."""
    secret_key = decode_secret_key(key)
    return NostrKeyPair(secret_key=secret_key, public_key=derive_public_key(secret_key))


def encode_npub(public_key: bytes) -> str:
    """Encode a public identifier as bech32 ``npub``."""
    if len(public_key) != PUBLIC_KEY_LENGTH:
        raise CredentialKeyError(
            f"Public key must be exactly {PUBLIC_KEY_LENGTH} bytes",
            ErrorCodes.INVALID_KEY
        )
    return PublicKey(public_key).bech32()


def decode_public_key(key: str) -> bytes:
    """
    Decode a public identifier given as hex or bech32 ``npub``.

    Raises:
        CredentialKeyError: If the text is a secret key or is malformed
    """
    if not isinstance(key, str):
        raise CredentialKeyError("Please input correct public key", ErrorCodes.INVALID_KEY)

    key = key.strip()
    lowered = key.lower()

    if lowered.startswith(NSEC_PREFIX):
        raise CredentialKeyError(
            "Please input public key not secret key",
            ErrorCodes.INVALID_KEY
        )

    if lowered.startswith(NPUB_PREFIX):
        try:
            return bytes.fromhex(PublicKey.from_npub(lowered).hex())
        except Exception as e:
            raise CredentialKeyError(
                "Please input correct public key",
                ErrorCodes.INVALID_KEY,
                {"original_error": str(e)}
            )

    if _HEX_KEY_PATTERN.match(key):
        return bytes.fromhex(key)

    raise CredentialKeyError("Please input correct public key", ErrorCodes.INVALID_KEY)


def sign_schnorr(secret_key: bytes, message_hash: bytes,
                 aux_randomness: Optional[bytes] = None) -> bytes:
    """
    Produce a BIP-340 Schnorr signature over a 32-byte message hash.

    Args:
        secret_key: Raw 32-byte secret key
        message_hash: 32-byte digest to sign
        aux_randomness: Optional 32 bytes of auxiliary randomness; fresh
            random bytes are used when omitted

    Returns:
        bytes: 64-byte signature

    Raises:
        CredentialKeyError: If the secret key is invalid
        SigningError: If signing fails
    """
    validate_secret_key(secret_key)

    if not isinstance(message_hash, bytes) or len(message_hash) != MESSAGE_HASH_LENGTH:
        raise SigningError(
            f"Message hash must be exactly {MESSAGE_HASH_LENGTH} bytes",
            ErrorCodes.SIGNING_FAILED
        )

    if aux_randomness is None:
        aux_randomness = secrets.token_bytes(32)

    try:
        signature = coincurve.PrivateKey(secret_key).sign_schnorr(message_hash, aux_randomness)
    except Exception as e:
        raise SigningError(
            f"Schnorr signing failed: {e}",
            ErrorCodes.SIGNING_FAILED,
            {"original_error": str(e)}
        )

    if len(signature) != SCHNORR_SIGNATURE_LENGTH:
        raise SigningError(
            f"Unexpected signature length {len(signature)}",
            ErrorCodes.SIGNING_FAILED
        )

    return signature


def verify_schnorr(public_key: bytes, message_hash: bytes, signature: bytes) -> bool:
    """
    Verify a BIP-340 Schnorr signature.

    Returns:
        bool: True if the signature is valid for the public identifier
    """
    if len(public_key) != PUBLIC_KEY_LENGTH or len(signature) != SCHNORR_SIGNATURE_LENGTH:
        return False

    try:
        return coincurve.PublicKeyXOnly(public_key).verify(signature, message_hash)
    except ValueError:
        return False
