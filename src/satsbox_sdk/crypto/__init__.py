"""
Cryptographic primitives for Satsbox Python SDK

secp256k1 key decoding, public identifier derivation and BIP-340 Schnorr
signatures used by Nostr HTTP authentication.
"""

from .secp256k1 import (
    NostrKeyPair,
    decode_secret_key,
    decode_public_key,
    derive_public_key,
    encode_npub,
    load_key_pair,
    sign_schnorr,
    verify_schnorr,
    validate_secret_key,
    SECRET_KEY_LENGTH,
    PUBLIC_KEY_LENGTH,
    SCHNORR_SIGNATURE_LENGTH,
)

__all__ = [
    'NostrKeyPair',
    'decode_secret_key',
    'decode_public_key',
    'derive_public_key',
    'encode_npub',
    'load_key_pair',
    'sign_schnorr',
    'verify_schnorr',
    'validate_secret_key',
    'SECRET_KEY_LENGTH',
    'PUBLIC_KEY_LENGTH',
    'SCHNORR_SIGNATURE_LENGTH',
]
