"""
Command-line interface for Satsbox Python SDK
Mints Nostr HTTP authentication headers and performs authenticated API calls
"""

import argparse
import sys
import json
import os
from typing import Optional, Any

from . import __version__
from .config import load_config_from_env, configure_logging, ENV_SECRET_KEY
from .crypto import load_key_pair
from .exceptions import SatsboxSDKError, ServerError, CredentialKeyError, ErrorCodes
from .http_client import SatsboxHttpClient
from .signing import CredentialContext


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='satsbox-auth',
        description='Satsbox SDK command-line interface for Nostr-authenticated requests'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'Satsbox Python SDK {__version__}'
    )
    parser.add_argument(
        '--secret-key',
        help=f'Secret key as hex or nsec (default: ${ENV_SECRET_KEY})'
    )
    parser.add_argument(
        '--base-url',
        help='Satsbox API base URL (default: $SATSBOX_API_BASE_URL)'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default=None,
        help='Logging level (default: $SATSBOX_LOG_LEVEL or WARNING)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    subparsers.add_parser('pubkey', help='Print the public identifier for the secret key')

    token_parser = subparsers.add_parser('token', help='Mint an Authorization header value')
    token_parser.add_argument('--method', choices=['GET', 'POST'], default='GET', help='HTTP method')
    token_parser.add_argument('--url', required=True, help='Absolute URL the token authorizes')
    token_parser.add_argument('--data', help='JSON request body')

    get_parser = subparsers.add_parser('get', help='Perform an authenticated GET request')
    get_parser.add_argument('path', help='Request path, e.g. /info')

    post_parser = subparsers.add_parser('post', help='Perform an authenticated POST request')
    post_parser.add_argument('path', help='Request path, e.g. /auth')
    post_parser.add_argument('--data', required=True, help='JSON request body')

    return parser


def _resolve_secret_key(args) -> str:
    key = args.secret_key or os.environ.get(ENV_SECRET_KEY)
    if not key:
        raise CredentialKeyError("missing credential key", ErrorCodes.MISSING_KEY)
    return key


def _parse_body(data: Optional[str]) -> Any:
    if data is None:
        return None
    try:
        return json.loads(data)
    except json.JSONDecodeError as e:
        raise SatsboxSDKError(f"--data is not valid JSON: {e}", ErrorCodes.SERIALIZATION_FAILED)


def _print_response(response) -> None:
    try:
        print(json.dumps(response.json(), indent=2, ensure_ascii=False))
    except ValueError:
        print(response.text)


def handle_pubkey_command(args) -> int:
    """Handle public identifier output."""
    key_pair = load_key_pair(_resolve_secret_key(args))
    print(f"Public Key (hex): {key_pair.public_key_hex}")
    print(f"Public Key (npub): {key_pair.npub}")
    return 0


def handle_token_command(args) -> int:
    """Handle minting an Authorization header value."""
    credentials = CredentialContext.from_key_text(_resolve_secret_key(args))
    headers, _ = credentials.authorization_header(args.method, args.url, _parse_body(args.data))
    print(headers['Authorization'])
    return 0


def handle_request_command(args) -> int:
    """Handle authenticated GET and POST requests."""
    config = load_config_from_env(
        base_url=args.base_url,
        secret_key=args.secret_key,
        log_level=args.log_level
    )
    configure_logging(config.log_level)

    with SatsboxHttpClient(config) as client:
        if args.command == 'get':
            response = client.authenticated_get(args.path)
        else:
            response = client.authenticated_post(args.path, _parse_body(args.data))

    _print_response(response)
    return 0


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI

    Args:
        argv: Command line arguments (None to use sys.argv)

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level or os.environ.get('SATSBOX_LOG_LEVEL', 'WARNING'))

    try:
        if args.command == 'pubkey':
            return handle_pubkey_command(args)
        elif args.command == 'token':
            return handle_token_command(args)
        elif args.command in ('get', 'post'):
            return handle_request_command(args)
        else:
            # No command specified, show help
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130
    except ServerError as e:
        print(f"Error ({e.kind}):", file=sys.stderr)
        for line in e.message_lines():
            print(f"  {line}", file=sys.stderr)
        return 1
    except SatsboxSDKError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
