"""
Tests for credential token encoding
"""

import json
import base64

import pytest

from satsbox_sdk.signing import (
    NostrSigner,
    SignedAssertion,
    SigningOptions,
    encode_token,
    decode_token,
    build_authorization_header,
    parse_authorization_header,
    serialize_body,
)
from satsbox_sdk.exceptions import TokenError


@pytest.fixture
def assertion(secret_key):
    return NostrSigner(secret_key).sign_request(
        "POST", "https://example.test/pay", serialize_body({"amount": 1}),
        SigningOptions(created_at=1700000000)
    )


class TestTokenEncoding:
    """Test token encode/decode"""

    def test_round_trip(self, assertion):
        assert decode_token(encode_token(assertion)) == assertion

    def test_token_is_base64_json(self, assertion):
        data = json.loads(base64.b64decode(encode_token(assertion)))

        assert data["kind"] == 27235
        assert data["created_at"] == 1700000000
        assert data["content"] == ""
        assert data["tags"][0] == ["method", "POST"]
        assert data["tags"][1] == ["u", "https://example.test/pay"]
        assert data["tags"][2][0] == "payload"
        assert data == assertion.to_dict()

    def test_authorization_header(self, assertion):
        headers = build_authorization_header(assertion)

        assert list(headers) == ["Authorization"]
        scheme, token = headers["Authorization"].split(" ", 1)
        assert scheme == "Nostr"
        assert decode_token(token) == assertion

    def test_parse_authorization_header(self, assertion):
        token = encode_token(assertion)
        assert parse_authorization_header(f"Nostr {token}") == token
        assert parse_authorization_header(f"nostr  {token} ") == token

    @pytest.mark.parametrize("value", ["Bearer abc", "Nostr", "Nostr   ", ""])
    def test_parse_authorization_header_rejects(self, value):
        with pytest.raises(TokenError):
            parse_authorization_header(value)


class TestTokenDecodingErrors:
    """Test malformed tokens"""

    def test_empty(self):
        with pytest.raises(TokenError):
            decode_token("")

    def test_not_base64(self):
        with pytest.raises(TokenError, match="base64"):
            decode_token("not base64!")

    def test_not_json(self):
        with pytest.raises(TokenError, match="JSON"):
            decode_token(base64.b64encode(b"plain text").decode())

    def test_missing_field(self, assertion):
        data = assertion.to_dict()
        del data["sig"]
        token = base64.b64encode(json.dumps(data).encode()).decode()
        with pytest.raises(TokenError, match="sig"):
            decode_token(token)

    def test_wrong_field_type(self, assertion):
        data = assertion.to_dict()
        data["created_at"] = "1700000000"
        with pytest.raises(TokenError, match="created_at"):
            SignedAssertion.from_dict(data)

    def test_bad_tags(self, assertion):
        data = assertion.to_dict()
        data["tags"] = [["method"]]
        with pytest.raises(TokenError, match="tags"):
            SignedAssertion.from_dict(data)

    def test_not_an_object(self):
        token = base64.b64encode(b"[1, 2]").decode()
        with pytest.raises(TokenError):
            decode_token(token)
