"""
Type definitions for OAuth 1.0a request signing

This module provides the enums and data classes shared by the signer,
the credential builder and the HTTP client.
"""

from typing import Dict, Union, Callable
from dataclasses import dataclass, field
from enum import Enum

from ..exceptions import UnsupportedSignatureMethodError
from .utils import escape


OAUTH_VERSION = "1.0"


class HttpMethod(str, Enum):
    """HTTP methods accepted by the request model"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class SignatureMethod(str, Enum):
    """OAuth 1.0a signature methods"""
    HMAC_SHA1 = "HMAC-SHA1"
    PLAINTEXT = "PLAINTEXT"

    @classmethod
    def parse(cls, value: Union[str, "SignatureMethod"]) -> "SignatureMethod":
        """
        Resolve a signature method from its wire name.

        Args:
            value: Enum member or its string value (e.g. "HMAC-SHA1")

        Returns:
            SignatureMethod: Matching enum member

        Raises:
            UnsupportedSignatureMethodError: If the name is not a known method
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedSignatureMethodError(value) from None


@dataclass(frozen=True)
class OAuthCredentials:
    """
    OAuth credential set owned by one authenticator

    Attributes:
        consumer_key: Consumer (client) key
        consumer_secret: Consumer (client) secret
        token: Access token, may be empty
        token_secret: Access token secret, may be empty
        signature_method: HMAC-SHA1 or PLAINTEXT
    """
    consumer_key: str
    consumer_secret: str
    token: str = ""
    token_secret: str = ""
    signature_method: SignatureMethod = SignatureMethod.HMAC_SHA1

    def __post_init__(self):
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "signature_method", SignatureMethod.parse(self.signature_method))

    def __repr__(self) -> str:
        return (
            f"OAuthCredentials(consumer_key={self.consumer_key!r}, token={self.token!r}, "
            f"signature_method={self.signature_method.value!r})"
        )

    @property
    def signing_key(self) -> str:
        """Escaped consumer secret and token secret joined with '&'"""
        return f"{escape(self.consumer_secret)}&{escape(self.token_secret)}"


@dataclass
class OAuthSignatureResult:
    """
    Result of signing one request

    Attributes:
        headers: Headers to attach to the request
        signature: The oauth_signature value (unescaped)
        base_string: Signature base string that was signed
        protocol_parameters: oauth_* parameters including oauth_signature
    """
    headers: Dict[str, str]
    signature: str
    base_string: str
    protocol_parameters: Dict[str, str] = field(default_factory=dict)

    @property
    def authorization(self) -> str:
        return self.headers["Authorization"]


class OAuthErrorCodes:
    """Standard error codes for signing operations"""

    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    UNSUPPORTED_SIGNATURE_METHOD = "UNSUPPORTED_SIGNATURE_METHOD"
    INVALID_NONCE = "INVALID_NONCE"
    INVALID_TIMESTAMP = "INVALID_TIMESTAMP"
    SIGNING_FAILED = "SIGNING_FAILED"
    CRYPTO_ERROR = "CRYPTO_ERROR"


# Type aliases for convenience
NonceGenerator = Callable[[], str]
Clock = Callable[[], float]
HeaderDict = Dict[str, str]
