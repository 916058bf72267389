"""
Command-line interface for GAEKit
Signs requests, builds Basic headers and sends authenticated requests
"""

import argparse
import sys
from typing import Dict, List, Optional

from . import __version__
from .auth import BasicAuthenticator
from .config import ConfigManager, configure_logging, LoggingConfig
from .exceptions import GAEKitError
from .oauth import OAuthCredentials, OAuthSigner, SignatureMethod
from .request import RequestModel


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='gaekit',
        description='GAEKit command-line interface for OAuth 1.0a signing and authenticated requests'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'GAEKit {__version__}'
    )

    parser.add_argument(
        '--log-level',
        help='Log level for gaekit loggers (default: WARNING, or the configured level for request)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    setup_sign_parser(subparsers)
    setup_basic_parser(subparsers)
    setup_request_parser(subparsers)

    return parser


def add_request_arguments(command_parser) -> None:
    command_parser.add_argument('url', help='Absolute request URL')
    command_parser.add_argument('--method', '-X', default='GET', help='HTTP method (default: GET)')
    command_parser.add_argument(
        '--data', '-d',
        action='append',
        default=[],
        metavar='NAME=VALUE',
        help='Form parameter (repeatable)'
    )
    command_parser.add_argument(
        '--header', '-H',
        action='append',
        default=[],
        metavar='NAME:VALUE',
        help='Extra request header (repeatable)'
    )


def setup_sign_parser(subparsers):
    """Setup sign subcommand."""
    sign_parser = subparsers.add_parser('sign', help='Print the OAuth Authorization header for a request')
    add_request_arguments(sign_parser)
    sign_parser.add_argument('--consumer-key', required=True, help='Consumer key')
    sign_parser.add_argument('--consumer-secret', required=True, help='Consumer secret')
    sign_parser.add_argument('--token', default='', help='Access token')
    sign_parser.add_argument('--token-secret', default='', help='Access token secret')
    sign_parser.add_argument(
        '--signature-method',
        choices=[method.value for method in SignatureMethod],
        default=SignatureMethod.HMAC_SHA1.value,
        help='Signature method (default: HMAC-SHA1)'
    )
    sign_parser.add_argument('--timestamp', type=int, help='Fixed oauth_timestamp')
    sign_parser.add_argument('--nonce', help='Fixed oauth_nonce')
    sign_parser.add_argument('--show-base-string', action='store_true', help='Also print the signature base string')


def setup_basic_parser(subparsers):
    """Setup basic subcommand."""
    basic_parser = subparsers.add_parser('basic', help='Print a Basic Authorization header')
    basic_parser.add_argument('username', help='User name')
    basic_parser.add_argument('password', help='Password')


def setup_request_parser(subparsers):
    """Setup request subcommand."""
    request_parser = subparsers.add_parser('request', help='Send an authenticated request')
    add_request_arguments(request_parser)
    request_parser.add_argument('--config', help='Configuration file (default: GAEKIT_CONFIG or gaekit.json)')
    request_parser.add_argument('--environment', help='Configuration environment')


def parse_pairs(values: List[str], separator: str) -> Dict[str, str]:
    """Split NAME<separator>VALUE arguments into a dictionary."""
    pairs = {}
    for value in values:
        name, found, rest = value.partition(separator)
        if not found:
            raise GAEKitError(f"Expected NAME{separator}VALUE, got {value!r}", "INVALID_ARGUMENT")
        pairs[name.strip()] = rest.strip() if separator == ':' else rest
    return pairs


def handle_sign_command(args) -> int:
    """Handle sign command."""
    credentials = OAuthCredentials(
        consumer_key=args.consumer_key,
        consumer_secret=args.consumer_secret,
        token=args.token,
        token_secret=args.token_secret,
        signature_method=args.signature_method,
    )

    clock = (lambda: args.timestamp) if args.timestamp is not None else None
    nonce_generator = (lambda: args.nonce) if args.nonce is not None else None
    signer = OAuthSigner(clock=clock, nonce_generator=nonce_generator)

    data = parse_pairs(args.data, '=') or None
    request = RequestModel.parse(args.url, args.method, data, parse_pairs(args.header, ':'))
    result = signer.sign_with_details(request, credentials)

    if args.show_base_string:
        print(result.base_string)
    print(f"Authorization: {result.authorization}")
    return 0


def handle_basic_command(args) -> int:
    """Handle basic command."""
    authenticator = BasicAuthenticator(args.username, args.password)
    print(f"Authorization: {authenticator.authorization}")
    return 0


def handle_request_command(args) -> int:
    """Handle request command."""
    if args.config:
        manager = ConfigManager.from_file(args.config, args.environment)
    else:
        manager = ConfigManager.load_default(args.environment)

    if args.log_level is None:
        configure_logging(manager.get_logging_config())

    client = manager.create_client()
    data = parse_pairs(args.data, '=') or None
    response = client.request(args.url, args.method, data, parse_pairs(args.header, ':'))

    print(f"HTTP {response.code}")
    for name, value in response.headers:
        print(f"{name}: {value}")
    if response.body is not None:
        print()
        print(response.text)
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

    try:
        configure_logging(LoggingConfig(level=args.log_level or 'WARNING'))

        if args.command == 'sign':
            return handle_sign_command(args)
        elif args.command == 'basic':
            return handle_basic_command(args)
        elif args.command == 'request':
            return handle_request_command(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
