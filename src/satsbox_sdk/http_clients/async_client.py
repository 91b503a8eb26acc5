"""
Asynchronous HTTP client for the Satsbox API

Mirrors ``SatsboxHttpClient`` for asyncio applications. Signing is synchronous
and finishes before the request coroutine yields, so concurrent calls never
observe each other's intermediate state.
"""

import logging
from typing import Optional, Any, Protocol, Tuple

import httpx

from ..config import ClientConfig
from ..exceptions import TransportError, ErrorCodes
from ..http_client import check_response, merge_headers, body_headers
from ..signing import CredentialContext, HttpMethod, SigningOptions, build_request_url, serialize_body
from ..signing.types import HeaderDict
from ..signing.utils import RequestBody

logger = logging.getLogger(__name__)


class AsyncTransport(Protocol):
    """Performs one HTTP call asynchronously and returns the response unchanged."""

    async def perform(self, method: str, url: str, headers: HeaderDict,
                      body: Optional[bytes] = None, **options) -> Any:
        ...


class HttpxTransport:
    """
    Transport backed by an ``httpx.AsyncClient``.
    """

    def __init__(self, config: ClientConfig, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.client = client or httpx.AsyncClient(
            timeout=config.timeout,
            verify=config.verify_ssl,
            headers={
                'Accept': 'application/json',
                'User-Agent': config.user_agent,
            }
        )

    async def perform(self, method: str, url: str, headers: HeaderDict,
                      body: Optional[bytes] = None, **options) -> httpx.Response:
        """
        Make an HTTP request.

        Raises:
            TransportError: On network errors or timeouts
        """
        try:
            logger.debug(f"Making async {method} request to {url}")
            return await self.client.request(method, url, headers=headers, content=body, **options)
        except httpx.TimeoutException:
            raise TransportError(
                f"Request timeout after {self.config.timeout} seconds",
                ErrorCodes.TIMEOUT,
                {"url": url}
            )
        except httpx.ConnectError as e:
            raise TransportError(f"Connection error: {e}", ErrorCodes.CONNECTION_ERROR, {"url": url})
        except httpx.HTTPError as e:
            raise TransportError(f"Request failed: {e}", ErrorCodes.TRANSPORT_ERROR, {"url": url})

    async def aclose(self) -> None:
        await self.client.aclose()


class AsyncSatsboxHttpClient:
    """
    Asynchronous Satsbox API client with Nostr HTTP authentication.
    """

    def __init__(
        self,
        config: ClientConfig,
        credentials: Optional[CredentialContext] = None,
        transport: Optional[AsyncTransport] = None
    ):
        self.config = config
        if credentials is None:
            credentials = CredentialContext()
            if config.secret_key:
                credentials.set_key_text(config.secret_key)
        self.credentials = credentials
        self.transport = transport or HttpxTransport(config)

        logger.info(f"Initialized async Satsbox HTTP client for server: {config.base_url}")

    def url_for(self, path: str) -> str:
        return build_request_url(self.config.base_url, path)

    async def request(
        self,
        method: str,
        path: str,
        body: RequestBody = None,
        headers: Optional[HeaderDict] = None,
        **options
    ) -> Any:
        """Perform a request with the given headers."""
        url = self.url_for(path)
        request_headers = merge_headers(body_headers(body), headers or {})
        response = await self.transport.perform(
            method.upper(), url, request_headers, serialize_body(body), **options
        )
        return check_response(response)

    async def get(self, path: str, **options) -> Any:
        return await self.request('GET', path, None, **options)

    async def post(self, path: str, body: RequestBody = None, **options) -> Any:
        return await self.request('POST', path, body, **options)

    def build_auth_header(
        self,
        method: str,
        path: str,
        body: RequestBody = None,
        signing_options: Optional[SigningOptions] = None
    ) -> Tuple[HeaderDict, Optional[bytes]]:
        """Mint the Authorization header for a request."""
        self.credentials.require_key()
        return self.credentials.authorization_header(
            HttpMethod.parse(method).value, self.url_for(path), body, signing_options
        )

    async def authenticated_request(
        self,
        method: str,
        path: str,
        body: RequestBody = None,
        headers: Optional[HeaderDict] = None,
        **options
    ) -> Any:
        auth_header, serialized = self.build_auth_header(method, path, body)
        request_headers = merge_headers(merge_headers(body_headers(body), headers or {}), auth_header)
        return await self.request(method, path, serialized, headers=request_headers, **options)

    async def authenticated_get(self, path: str, **options) -> Any:
        """Make authenticated GET request."""
        return await self.authenticated_request('GET', path, None, **options)

    async def authenticated_post(self, path: str, body: RequestBody = None, **options) -> Any:
        """Make authenticated POST request."""
        return await self.authenticated_request('POST', path, body, **options)

    async def aclose(self) -> None:
        aclose = getattr(self.transport, 'aclose', None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()


def create_async_client(
    base_url: str,
    secret_key: Optional[str] = None,
    transport: Optional[AsyncTransport] = None,
    **config_kwargs
) -> AsyncSatsboxHttpClient:
    """Create an asynchronous Satsbox API client."""
    config = ClientConfig(base_url=base_url, secret_key=secret_key, **config_kwargs)
    return AsyncSatsboxHttpClient(config, transport=transport)
