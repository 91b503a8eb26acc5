"""
Type definitions for Nostr HTTP authentication

This module provides the data classes flowing through request signing: the
canonical payload describing one HTTP call and the signed assertion that gets
encoded into the ``Authorization`` header.
"""

from typing import Dict, List, Optional, Tuple, Any
from dataclasses import dataclass, field
from enum import Enum

from ..exceptions import CanonicalizationError, TokenError, ErrorCodes

# Event kind identifying an HTTP authorization assertion
HTTP_AUTH_KIND = 27235

# Tag names, in signing order
METHOD_TAG = "method"
URL_TAG = "u"
PAYLOAD_TAG = "payload"

AUTH_SCHEME = "Nostr"

Tag = Tuple[str, str]


class HttpMethod(str, Enum):
    """HTTP methods that can be authenticated"""
    GET = "GET"
    POST = "POST"

    @classmethod
    def parse(cls, method: Any) -> "HttpMethod":
        """Normalize a method name, rejecting anything not authenticated."""
        if isinstance(method, cls):
            return method
        if not isinstance(method, str):
            raise CanonicalizationError(
                f"HTTP method must be a string, got {type(method).__name__}",
                ErrorCodes.INVALID_METHOD
            )
        try:
            return cls(method.strip().upper())
        except ValueError:
            raise CanonicalizationError(
                f"Unsupported HTTP method for authentication: {method}",
                ErrorCodes.INVALID_METHOD,
                {"method": method}
            )


@dataclass(frozen=True)
class CanonicalPayload:
    """
    Canonical description of one outgoing HTTP call

    Attributes:
        method: HTTP verb (uppercase)
        url: Absolute URL the credential authorizes
        created_at: Creation time in whole seconds since the epoch
        payload_digest: Lowercase hex SHA-256 of the serialized body, if any
        kind: Assertion type discriminator
    """
    method: HttpMethod
    url: str
    created_at: int
    payload_digest: Optional[str] = None
    kind: int = HTTP_AUTH_KIND

    @property
    def tags(self) -> List[List[str]]:
        """Tags in their fixed signing order."""
        tags = [
            [METHOD_TAG, self.method.value],
            [URL_TAG, self.url],
        ]
        if self.payload_digest is not None:
            tags.append([PAYLOAD_TAG, self.payload_digest])
        return tags


@dataclass(frozen=True)
class SignedAssertion:
    """
    Canonical payload bound to a public identifier, its id and signature

    Attributes:
        kind: Assertion type discriminator
        created_at: Creation time in whole seconds since the epoch
        tags: Tag entries in signing order
        content: Free text content, always empty for HTTP auth
        pubkey: Hex-encoded 32-byte public identifier
        id: Hex-encoded SHA-256 identifier of the assertion
        sig: Hex-encoded 64-byte Schnorr signature over the id
    """
    kind: int
    created_at: int
    tags: Tuple[Tag, ...]
    content: str
    pubkey: str
    id: str
    sig: str

    def tag_value(self, name: str) -> Optional[str]:
        """Return the first value for a tag name."""
        for tag in self.tags:
            if tag[0] == name:
                return tag[1]
        return None

    @property
    def method(self) -> Optional[str]:
        return self.tag_value(METHOD_TAG)

    @property
    def url(self) -> Optional[str]:
        return self.tag_value(URL_TAG)

    @property
    def payload_digest(self) -> Optional[str]:
        return self.tag_value(PAYLOAD_TAG)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON object carried inside the token."""
        return {
            "kind": self.kind,
            "created_at": self.created_at,
            "tags": [list(tag) for tag in self.tags],
            "content": self.content,
            "pubkey": self.pubkey,
            "id": self.id,
            "sig": self.sig,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SignedAssertion":
        """
        Build an assertion from a decoded token object.

        Raises:
            TokenError: If a required field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise TokenError("Token payload must be a JSON object")

        expected = {
            "kind": int,
            "created_at": int,
            "tags": list,
            "content": str,
            "pubkey": str,
            "id": str,
            "sig": str,
        }
        for name, expected_type in expected.items():
            if name not in data:
                raise TokenError(f"Token payload missing field: {name}", details={"field": name})
            value = data[name]
            if not isinstance(value, expected_type) or isinstance(value, bool):
                raise TokenError(
                    f"Token field '{name}' must be {expected_type.__name__}",
                    details={"field": name}
                )

        tags = []
        for tag in data["tags"]:
            if not isinstance(tag, list) or len(tag) < 2 or not all(isinstance(v, str) for v in tag):
                raise TokenError("Token tags must be lists of strings", details={"tag": tag})
            tags.append(tuple(tag))

        return cls(
            kind=data["kind"],
            created_at=data["created_at"],
            tags=tuple(tags),
            content=data["content"],
            pubkey=data["pubkey"],
            id=data["id"],
            sig=data["sig"],
        )


@dataclass
class SigningOptions:
    """
    Signing options for individual requests

    Attributes:
        created_at: Fixed creation time instead of the wall clock
        aux_randomness: Fixed 32-byte Schnorr auxiliary randomness
    """
    created_at: Optional[int] = None
    aux_randomness: Optional[bytes] = field(default=None, repr=False)


# Type aliases for convenience
HeaderDict = Dict[str, str]
