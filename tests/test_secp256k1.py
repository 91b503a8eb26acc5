"""
Unit tests for secp256k1 key handling and Schnorr signatures
"""

import hashlib

import pytest
import coincurve

from satsbox_sdk.crypto.secp256k1 import (
    NostrKeyPair,
    decode_secret_key,
    decode_public_key,
    derive_public_key,
    encode_npub,
    load_key_pair,
    sign_schnorr,
    verify_schnorr,
    validate_secret_key,
    SECP256K1_ORDER,
)
from satsbox_sdk.exceptions import CredentialKeyError, SigningError, ErrorCodes

from conftest import TEST_SECRET_HEX

NSEC = "nsec1cfnu2t9xpdxk25ufrtfqrm4a5whjrtwuakmzha3ye9pyzwsva4rqr0d73w"
NSEC_HEX = "c267c52ca60b4d6553891ad201eebda3af21addcedb62bf624c942413a0ced46"
NPUB = "npub1fuvh5hz9tvyesqnrsrjlfy45j9dwj0zrzuzs4jy53kff850ge5sq6te9w6"
NPUB_HEX = "4f197a5c455b0998026380e5f492b4915ae93c4317050ac8948d9293d1e8cd20"

# BIP-340 test vector 0
BIP340_SECRET = bytes.fromhex("00" * 31 + "03")
BIP340_PUBKEY = "f9308a019258c31049344f85f89d5229b531c845836f99b08601f113bce036f9"
BIP340_SIGNATURE = (
    "e907831f80848d1069a5371b402410364bdf1c5f8307b0084c55f1ce2dca8215"
    "25f66a4a85ea8b71e482a74f382d2ce5ebeee8fdb2172f477df4900d310536c0"
)


class TestDecodeSecretKey:
    """Test cases for secret key input parsing"""

    def test_hex_key(self):
        assert decode_secret_key(TEST_SECRET_HEX) == bytes.fromhex(TEST_SECRET_HEX)

    def test_hex_key_uppercase_and_whitespace(self):
        assert decode_secret_key(f"  {TEST_SECRET_HEX.upper()}\n") == bytes.fromhex(TEST_SECRET_HEX)

    def test_nsec_key(self):
        assert decode_secret_key(NSEC) == bytes.fromhex(NSEC_HEX)

    def test_npub_rejected(self):
        with pytest.raises(CredentialKeyError, match="secret key not public key") as exc_info:
            decode_secret_key(NPUB)
        assert exc_info.value.error_code == ErrorCodes.PUBLIC_KEY_GIVEN

    @pytest.mark.parametrize("key", [
        "",
        "abcd",
        TEST_SECRET_HEX[:-1],
        TEST_SECRET_HEX + "00",
        "zz" * 32,
        NSEC[:-1] + ("q" if NSEC[-1] != "q" else "p"),
    ])
    def test_malformed_rejected(self, key):
        with pytest.raises(CredentialKeyError, match="correct secret key"):
            decode_secret_key(key)

    def test_non_string_rejected(self):
        with pytest.raises(CredentialKeyError):
            decode_secret_key(None)

    def test_zero_key_rejected(self):
        with pytest.raises(CredentialKeyError, match="valid secp256k1 scalar"):
            decode_secret_key("00" * 32)

    def test_key_above_curve_order_rejected(self):
        with pytest.raises(CredentialKeyError, match="valid secp256k1 scalar"):
            decode_secret_key(format(SECP256K1_ORDER, "064x"))


class TestValidateSecretKey:
    """Test cases for raw secret key validation"""

    def test_missing_key(self):
        with pytest.raises(CredentialKeyError, match="missing credential key") as exc_info:
            validate_secret_key(None)
        assert exc_info.value.error_code == ErrorCodes.MISSING_KEY

    def test_wrong_length(self):
        with pytest.raises(CredentialKeyError, match="exactly 32 bytes"):
            validate_secret_key(b"\x01" * 31)

    def test_wrong_type(self):
        with pytest.raises(CredentialKeyError, match="must be bytes"):
            validate_secret_key(TEST_SECRET_HEX)

    def test_largest_valid_scalar(self):
        validate_secret_key((SECP256K1_ORDER - 1).to_bytes(32, "big"))


class TestPublicKeyDerivation:
    """Test cases for public identifier derivation"""

    def test_bip340_vector(self):
        assert derive_public_key(BIP340_SECRET).hex() == BIP340_PUBKEY

    def test_matches_coincurve(self, secret_key):
        expected = coincurve.PrivateKey(secret_key).public_key_xonly.format()
        assert derive_public_key(secret_key) == expected

    def test_deterministic(self, secret_key):
        assert derive_public_key(secret_key) == derive_public_key(secret_key)

    def test_load_key_pair(self):
        key_pair = load_key_pair(NSEC)
        assert key_pair.secret_key == bytes.fromhex(NSEC_HEX)
        assert key_pair.public_key == derive_public_key(bytes.fromhex(NSEC_HEX))
        assert key_pair.public_key_hex == key_pair.public_key.hex()

    def test_key_pair_repr_hides_secret(self, secret_key):
        key_pair = NostrKeyPair(secret_key=secret_key, public_key=derive_public_key(secret_key))
        assert TEST_SECRET_HEX not in repr(key_pair)

    def test_key_pair_length_validation(self, secret_key):
        with pytest.raises(CredentialKeyError):
            NostrKeyPair(secret_key=secret_key, public_key=b"short")


class TestPublicKeyEncoding:
    """Test cases for npub and hex public identifiers"""

    def test_decode_npub(self):
        assert decode_public_key(NPUB).hex() == NPUB_HEX

    def test_decode_hex(self):
        assert decode_public_key(NPUB_HEX).hex() == NPUB_HEX

    def test_encode_npub(self):
        assert encode_npub(bytes.fromhex(NPUB_HEX)) == NPUB

    def test_nsec_rejected_as_public_key(self):
        with pytest.raises(CredentialKeyError, match="public key not secret key"):
            decode_public_key(NSEC)

    def test_encode_wrong_length(self):
        with pytest.raises(CredentialKeyError):
            encode_npub(b"\x01" * 33)


class TestSchnorr:
    """Test cases for BIP-340 signing and verification"""

    def test_bip340_vector(self):
        signature = sign_schnorr(BIP340_SECRET, b"\x00" * 32, aux_randomness=b"\x00" * 32)
        assert signature.hex() == BIP340_SIGNATURE
        assert verify_schnorr(bytes.fromhex(BIP340_PUBKEY), b"\x00" * 32, signature)

    def test_sign_and_verify(self, secret_key):
        message_hash = hashlib.sha256(b"satsbox").digest()
        signature = sign_schnorr(secret_key, message_hash)

        assert len(signature) == 64
        assert verify_schnorr(derive_public_key(secret_key), message_hash, signature)

    def test_verify_rejects_other_message(self, secret_key):
        signature = sign_schnorr(secret_key, hashlib.sha256(b"one").digest())
        assert not verify_schnorr(
            derive_public_key(secret_key), hashlib.sha256(b"two").digest(), signature
        )

    def test_verify_rejects_other_key(self, secret_key):
        message_hash = hashlib.sha256(b"satsbox").digest()
        signature = sign_schnorr(secret_key, message_hash)
        assert not verify_schnorr(bytes.fromhex(BIP340_PUBKEY), message_hash, signature)

    def test_verify_rejects_malformed_signature(self, secret_key):
        message_hash = hashlib.sha256(b"satsbox").digest()
        assert not verify_schnorr(derive_public_key(secret_key), message_hash, b"\x00" * 10)

    def test_message_hash_length_enforced(self, secret_key):
        with pytest.raises(SigningError, match="exactly 32 bytes"):
            sign_schnorr(secret_key, b"not a hash")

    def test_sign_requires_valid_key(self):
        with pytest.raises(CredentialKeyError):
            sign_schnorr(b"\x00" * 32, b"\x00" * 32)
