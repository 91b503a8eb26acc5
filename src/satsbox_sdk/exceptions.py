"""
Exception classes for Satsbox Python SDK
"""

from typing import Optional, Dict, Any, List


class ErrorCodes:
    """Standard error codes for programmatic handling"""

    # Key errors
    MISSING_KEY = "MISSING_KEY"
    INVALID_KEY = "INVALID_KEY"
    PUBLIC_KEY_GIVEN = "PUBLIC_KEY_GIVEN"

    # Canonicalization errors
    INVALID_METHOD = "INVALID_METHOD"
    INVALID_URL = "INVALID_URL"
    INVALID_PATH = "INVALID_PATH"
    INVALID_TIMESTAMP = "INVALID_TIMESTAMP"
    SERIALIZATION_FAILED = "SERIALIZATION_FAILED"

    # Signing errors
    SIGNING_FAILED = "SIGNING_FAILED"

    # Token errors
    INVALID_TOKEN = "INVALID_TOKEN"

    # Transport and server errors
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    TIMEOUT = "TIMEOUT"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    SERVER_ERROR = "SERVER_ERROR"

    # Configuration errors
    INVALID_CONFIG = "INVALID_CONFIG"


class SatsboxSDKError(Exception):
    """Base exception for all Satsbox SDK errors"""

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class CredentialKeyError(SatsboxSDKError):
    """Exception raised when no secret key is configured or the key is malformed"""

    def __init__(self, message: str, error_code: str = ErrorCodes.INVALID_KEY,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class CanonicalizationError(SatsboxSDKError):
    """Exception raised when a request cannot be turned into a canonical payload"""
    pass


class SigningError(SatsboxSDKError):
    """Exception raised when the underlying signature operation fails"""

    def __init__(self, message: str, error_code: str = ErrorCodes.SIGNING_FAILED,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class TokenError(SatsboxSDKError):
    """Exception raised when a credential token cannot be decoded"""

    def __init__(self, message: str, error_code: str = ErrorCodes.INVALID_TOKEN,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class TransportError(SatsboxSDKError):
    """Exception raised for network-level failures"""

    def __init__(self, message: str, error_code: str = ErrorCodes.TRANSPORT_ERROR,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class ServerError(SatsboxSDKError):
    """
    Structured error reported by the Satsbox server.

    Attributes:
        kind: Error kind string from the ``error`` field
        message: Human readable text, may contain embedded newlines
        code: Numeric application error code
        status_code: HTTP status code reported in the body
        data: The full decoded error body
    """

    def __init__(self, kind: str, message: str, code: Optional[int] = None,
                 status_code: Optional[int] = None, data: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCodes.SERVER_ERROR, {
            "kind": kind,
            "code": code,
            "status_code": status_code,
        })
        self.kind = kind
        self.code = code
        self.status_code = status_code
        self.data = data or {}

    def message_lines(self) -> List[str]:
        """Split the message on its embedded line breaks."""
        return self.message.split("\n")

    def __repr__(self) -> str:
        return (f"ServerError(kind='{self.kind}', message={self.message!r}, "
                f"code={self.code}, status_code={self.status_code})")


class ConfigError(SatsboxSDKError):
    """Exception raised for invalid client configuration"""

    def __init__(self, message: str, error_code: str = ErrorCodes.INVALID_CONFIG,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)
