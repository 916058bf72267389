"""
GAEKit - OAuth 1.0a Signing Module

HMAC-SHA1 and PLAINTEXT request signing. This module turns a request model
and a credential set into the Authorization header a server re-derives to
authenticate the request.
"""

from .types import (
    OAUTH_VERSION,
    HttpMethod,
    SignatureMethod,
    OAuthCredentials,
    OAuthSignatureResult,
    OAuthErrorCodes,
)

from .utils import (
    escape,
    unescape,
    query_string,
    parse_query,
    generate_nonce,
    generate_timestamp,
    validate_nonce,
    validate_timestamp,
)

from .base_string import (
    build_signature_base_string,
    normalize_parameters,
)

from .signer import (
    OAuthSigner,
    create_signer,
    sign_request,
    hmac_sha1,
)

from .credentials import (
    CredentialsBuilder,
    create_credentials,
    validate_credentials,
)

# Public API exports
__all__ = [
    # Types
    'OAUTH_VERSION',
    'HttpMethod',
    'SignatureMethod',
    'OAuthCredentials',
    'OAuthSignatureResult',
    'OAuthErrorCodes',
    # Encoding and canonicalization
    'escape',
    'unescape',
    'query_string',
    'parse_query',
    'generate_nonce',
    'generate_timestamp',
    'validate_nonce',
    'validate_timestamp',
    'build_signature_base_string',
    'normalize_parameters',
    # Signing
    'OAuthSigner',
    'create_signer',
    'sign_request',
    'hmac_sha1',
    # Credentials
    'CredentialsBuilder',
    'create_credentials',
    'validate_credentials',
]
