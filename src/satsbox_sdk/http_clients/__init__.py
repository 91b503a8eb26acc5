"""
Additional HTTP clients for Satsbox Python SDK
"""

from .async_client import (
    AsyncSatsboxHttpClient,
    AsyncTransport,
    HttpxTransport,
    create_async_client,
)

__all__ = [
    'AsyncSatsboxHttpClient',
    'AsyncTransport',
    'HttpxTransport',
    'create_async_client',
]
