"""
Shared fixtures for the Satsbox SDK test suite
"""

import pytest

from satsbox_sdk.config import ClientConfig

# Secret key used by the Satsbox server's own auth tests
TEST_SECRET_HEX = "6b911fd37cdf5c81d4c0adb1ab7fa822ed253ab0ad9aa18d77257c88b29b718e"
TEST_BASE_URL = "https://example.test"


class FakeResponse:
    """Minimal stand-in for a transport response"""

    def __init__(self, payload=None, status_code=200, text=""):
        self.payload = payload
        self.status_code = status_code
        self.text = text

    def json(self):
        if self.payload is None:
            raise ValueError("No JSON body")
        return self.payload


class FakeTransport:
    """Transport that records calls instead of touching the network"""

    def __init__(self, response=None):
        self.calls = []
        self.response = response if response is not None else FakeResponse({"success": True})

    def perform(self, method, url, headers, body=None, **options):
        self.calls.append({
            "method": method,
            "url": url,
            "headers": dict(headers),
            "body": body,
            "options": options,
        })
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


class FakeAsyncTransport(FakeTransport):
    """Async variant of FakeTransport"""

    async def perform(self, method, url, headers, body=None, **options):
        return FakeTransport.perform(self, method, url, headers, body, **options)


@pytest.fixture
def secret_key():
    return bytes.fromhex(TEST_SECRET_HEX)


@pytest.fixture
def client_config():
    return ClientConfig(base_url=TEST_BASE_URL, secret_key=TEST_SECRET_HEX)


@pytest.fixture
def transport():
    return FakeTransport()
