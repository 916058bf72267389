"""
GAEKit Python SDK
OAuth 1.0a request signing and authenticated HTTP client
"""

from .version import __version__
from .exceptions import (
    GAEKitError,
    ValidationError,
    SigningError,
    UnsupportedSignatureMethodError,
    MalformedParameterPairError,
    ConfigError,
)
from .oauth import (
    # Types
    HttpMethod,
    SignatureMethod,
    OAuthCredentials,
    OAuthSignatureResult,
    # Encoding and canonicalization
    escape,
    unescape,
    query_string,
    parse_query,
    generate_nonce,
    generate_timestamp,
    build_signature_base_string,
    # Signing
    OAuthSigner,
    create_signer,
    sign_request,
    # Credentials
    CredentialsBuilder,
    create_credentials,
    validate_credentials,
)
from .request import RequestModel, FORM_URLENCODED
from .auth import (
    Authenticator,
    NoAuthenticator,
    BasicAuthenticator,
    OAuthAuthenticator,
)
from .transport import (
    Transport,
    RequestsTransport,
    FetchOptions,
    RawResponse,
)
from .http_client import HttpClient, Response, create_client
from .datastore import (
    PropertyStore,
    EntityBackend,
    MemoryBackend,
    LongText,
    dump,
)
from .config import (
    ConfigManager,
    configure_logging,
    load_config_from_file,
    load_default_config,
)


# Public API exports
__all__ = [
    '__version__',
    # Exceptions
    'GAEKitError',
    'ValidationError',
    'SigningError',
    'UnsupportedSignatureMethodError',
    'MalformedParameterPairError',
    'ConfigError',
    # OAuth - Types
    'HttpMethod',
    'SignatureMethod',
    'OAuthCredentials',
    'OAuthSignatureResult',
    # OAuth - Encoding
    'escape',
    'unescape',
    'query_string',
    'parse_query',
    'generate_nonce',
    'generate_timestamp',
    'build_signature_base_string',
    # OAuth - Signing
    'OAuthSigner',
    'create_signer',
    'sign_request',
    'CredentialsBuilder',
    'create_credentials',
    'validate_credentials',
    # Request model
    'RequestModel',
    'FORM_URLENCODED',
    # Authenticators
    'Authenticator',
    'NoAuthenticator',
    'BasicAuthenticator',
    'OAuthAuthenticator',
    # HTTP
    'Transport',
    'RequestsTransport',
    'FetchOptions',
    'RawResponse',
    'HttpClient',
    'Response',
    'create_client',
    # Datastore
    'PropertyStore',
    'EntityBackend',
    'MemoryBackend',
    'LongText',
    'dump',
    # Configuration
    'ConfigManager',
    'configure_logging',
    'load_config_from_file',
    'load_default_config',
]
