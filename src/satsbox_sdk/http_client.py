"""
HTTP client for the Satsbox API

This module provides the request façade of the SDK. Plain calls go through
``request`` with a fully-formed header set; authenticated calls first mint a
fresh ``Authorization: Nostr <token>`` header from the session's credential
context and then take the same path. Network I/O is delegated to a transport
object so that tests and alternative HTTP stacks can be plugged in.
"""

import logging
from typing import Optional, Any, Protocol, Tuple

import requests

from .config import ClientConfig
from .exceptions import TransportError, ServerError, ErrorCodes
from .signing import CredentialContext, HttpMethod, SigningOptions, build_request_url, serialize_body
from .signing.types import HeaderDict
from .signing.utils import RequestBody

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Performs one HTTP call and returns the response object unchanged."""

    def perform(self, method: str, url: str, headers: HeaderDict,
                body: Optional[bytes] = None, **options) -> Any:
        ...


class RequestsTransport:
    """
    Transport backed by a ``requests.Session``.
    """

    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update({
            'Accept': 'application/json',
            'User-Agent': self.config.user_agent,
        })
        return session

    def perform(self, method: str, url: str, headers: HeaderDict,
                body: Optional[bytes] = None, **options) -> requests.Response:
        """
        Make an HTTP request.

        Raises:
            TransportError: On network errors or timeouts
        """
        options.setdefault('timeout', self.config.timeout)
        options.setdefault('verify', self.config.verify_ssl)

        try:
            logger.debug(f"Making {method} request to {url}")
            return self.session.request(method, url, headers=headers, data=body, **options)
        except requests.exceptions.Timeout:
            raise TransportError(
                f"Request timeout after {options['timeout']} seconds",
                ErrorCodes.TIMEOUT,
                {"url": url}
            )
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Connection error: {e}", ErrorCodes.CONNECTION_ERROR, {"url": url})
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {e}", ErrorCodes.TRANSPORT_ERROR, {"url": url})

    def close(self) -> None:
        self.session.close()


def parse_server_error(data: Any) -> Optional[ServerError]:
    """
    Turn a decoded error body into a ServerError.

    Returns:
        ServerError if the body carries an ``error`` member, otherwise None
    """
    if not isinstance(data, dict) or not data.get('error'):
        return None

    return ServerError(
        kind=str(data['error']),
        message=str(data.get('message') or ''),
        code=data.get('code'),
        status_code=data.get('status_code'),
        data=data
    )


def check_response(response: Any) -> Any:
    """
    Raise structured or HTTP-level failures, otherwise return the response.

    Raises:
        ServerError: If the body is a structured server error
        TransportError: If the status code signals failure without a structured body
    """
    try:
        data = response.json()
    except ValueError:
        data = None

    error = parse_server_error(data)
    if error is not None:
        logger.debug(f"Server reported error '{error.kind}' (status {error.status_code})")
        raise error

    status = getattr(response, 'status_code', None)
    if isinstance(status, int) and status >= 400:
        raise TransportError(
            f"HTTP {status}",
            ErrorCodes.TRANSPORT_ERROR,
            {"status_code": status}
        )

    return response


def merge_headers(base: Optional[HeaderDict], extra: HeaderDict) -> HeaderDict:
    """Merge headers, letting ``extra`` replace names case-insensitively."""
    replaced = {name.lower() for name in extra}
    merged = {name: value for name, value in (base or {}).items() if name.lower() not in replaced}
    merged.update(extra)
    return merged


def body_headers(body: RequestBody) -> HeaderDict:
    """Content-Type for bodies the SDK serializes itself."""
    if body is None or isinstance(body, (str, bytes)):
        return {}
    return {'Content-Type': 'application/json'}


class SatsboxHttpClient:
    """
    Satsbox API client with Nostr HTTP authentication.

    Every authenticated call mints its own signed assertion; nothing about a
    previous call's credential is reused.
    """

    def __init__(
        self,
        config: ClientConfig,
        credentials: Optional[CredentialContext] = None,
        transport: Optional[Transport] = None
    ):
        """
        Initialize the client.

        Args:
            config: Client configuration
            credentials: Session credential context; built from
                ``config.secret_key`` when omitted
            transport: Transport performing HTTP calls
        """
        self.config = config
        if credentials is None:
            credentials = CredentialContext()
            if config.secret_key:
                credentials.set_key_text(config.secret_key)
        self.credentials = credentials
        self.transport = transport or RequestsTransport(config)

        logger.info(f"Initialized Satsbox HTTP client for server: {config.base_url}")

    def url_for(self, path: str) -> str:
        return build_request_url(self.config.base_url, path)

    def request(
        self,
        method: str,
        path: str,
        body: RequestBody = None,
        headers: Optional[HeaderDict] = None,
        **options
    ) -> Any:
        """
        Perform a request with the given headers.

        Returns:
            The transport's response object, unmodified

        Raises:
            CanonicalizationError: If the path or body is malformed
            TransportError: On network failures
            ServerError: If the server returns a structured error body
        """
        url = self.url_for(path)
        request_headers = merge_headers(body_headers(body), headers or {})
        response = self.transport.perform(
            method.upper(), url, request_headers, serialize_body(body), **options
        )
        return check_response(response)

    def get(self, path: str, **options) -> Any:
        """Make unauthenticated GET request."""
        return self.request('GET', path, None, **options)

    def post(self, path: str, body: RequestBody = None, **options) -> Any:
        """Make unauthenticated POST request."""
        return self.request('POST', path, body, **options)

    def build_auth_header(
        self,
        method: str,
        path: str,
        body: RequestBody = None,
        signing_options: Optional[SigningOptions] = None
    ) -> Tuple[HeaderDict, Optional[bytes]]:
        """
        Mint the Authorization header for a request.

        Returns:
            tuple: (header dict, serialized body that was digested)

        Raises:
            CredentialKeyError: If no key is configured
        """
        self.credentials.require_key()
        return self.credentials.authorization_header(
            HttpMethod.parse(method).value, self.url_for(path), body, signing_options
        )

    def authenticated_request(
        self,
        method: str,
        path: str,
        body: RequestBody = None,
        headers: Optional[HeaderDict] = None,
        **options
    ) -> Any:
        """Sign and perform a request."""
        auth_header, serialized = self.build_auth_header(method, path, body)
        request_headers = merge_headers(merge_headers(body_headers(body), headers or {}), auth_header)
        return self.request(method, path, serialized, headers=request_headers, **options)

    def authenticated_get(self, path: str, **options) -> Any:
        """Make authenticated GET request."""
        return self.authenticated_request('GET', path, None, **options)

    def authenticated_post(self, path: str, body: RequestBody = None, **options) -> Any:
        """Make authenticated POST request."""
        return self.authenticated_request('POST', path, body, **options)

    def close(self) -> None:
        close = getattr(self.transport, 'close', None)
        if close is not None:
            close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def create_client(
    base_url: str,
    secret_key: Optional[str] = None,
    transport: Optional[Transport] = None,
    **config_kwargs
) -> SatsboxHttpClient:
    """
    Create a Satsbox API client.

    Args:
        base_url: Satsbox API base URL
        secret_key: Optional secret key as hex or ``nsec``
        transport: Optional transport override
        **config_kwargs: Additional ClientConfig fields

    Returns:
        SatsboxHttpClient: Configured client
    """
    config = ClientConfig(base_url=base_url, secret_key=secret_key, **config_kwargs)
    return SatsboxHttpClient(config, transport=transport)
