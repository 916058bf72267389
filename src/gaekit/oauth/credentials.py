"""
Credential building and validation for OAuth 1.0a signing

This module provides a fluent builder for OAuthCredentials and a
completeness check callers can run before sending requests. Signing itself
never validates credentials.
"""

from typing import List, Optional, Union

from ..exceptions import SigningError
from .types import OAuthCredentials, OAuthErrorCodes, SignatureMethod


class CredentialsBuilder:
    """
    Builder for creating OAuth credential sets with fluent API
    """

    def __init__(self):
        self._consumer_key: Optional[str] = None
        self._consumer_secret: Optional[str] = None
        self._token: str = ""
        self._token_secret: str = ""
        self._signature_method: SignatureMethod = SignatureMethod.HMAC_SHA1

    def consumer(self, key: str, secret: str) -> 'CredentialsBuilder':
        """
        Set consumer key and secret.

        Args:
            key: Consumer key
            secret: Consumer secret

        Returns:
            CredentialsBuilder: Self for method chaining
        """
        self._consumer_key = key
        self._consumer_secret = secret
        return self

    def token(self, token: str, secret: str) -> 'CredentialsBuilder':
        """
        Set access token and token secret.

        Args:
            token: Access token
            secret: Access token secret

        Returns:
            CredentialsBuilder: Self for method chaining
        """
        self._token = token
        self._token_secret = secret
        return self

    def signature_method(self, method: Union[str, SignatureMethod]) -> 'CredentialsBuilder':
        """
        Set signature method.

        Args:
            method: "HMAC-SHA1", "PLAINTEXT" or the enum member

        Returns:
            CredentialsBuilder: Self for method chaining

        Raises:
            UnsupportedSignatureMethodError: If the method is unknown
        """
        self._signature_method = SignatureMethod.parse(method)
        return self

    def build(self) -> OAuthCredentials:
        """
        Build the credential set.

        Returns:
            OAuthCredentials: Immutable credential set

        Raises:
            SigningError: If the consumer key or secret was never set
        """
        if self._consumer_key is None or self._consumer_secret is None:
            raise SigningError(
                "Consumer key and secret are required",
                OAuthErrorCodes.INVALID_CREDENTIALS
            )

        return OAuthCredentials(
            consumer_key=self._consumer_key,
            consumer_secret=self._consumer_secret,
            token=self._token,
            token_secret=self._token_secret,
            signature_method=self._signature_method
        )


def create_credentials() -> CredentialsBuilder:
    """
    Create a new credentials builder.

    Returns:
        CredentialsBuilder: New builder
    """
    return CredentialsBuilder()


def missing_credential_fields(credentials: OAuthCredentials) -> List[str]:
    """List the credential fields that are empty."""
    fields = ['consumer_key', 'consumer_secret', 'token', 'token_secret']
    return [name for name in fields if not getattr(credentials, name)]


def validate_credentials(credentials: OAuthCredentials, require_token: bool = True) -> None:
    """
    Check that a credential set is complete.

    Args:
        credentials: Credential set to check
        require_token: Whether token and token secret must be set

    Raises:
        SigningError: If required fields are empty
    """
    if not isinstance(credentials, OAuthCredentials):
        raise SigningError(
            "Credentials must be OAuthCredentials instance",
            OAuthErrorCodes.INVALID_CREDENTIALS
        )

    missing = missing_credential_fields(credentials)
    if not require_token:
        missing = [name for name in missing if not name.startswith('token')]

    if missing:
        raise SigningError(
            f"Credential fields are empty: {', '.join(missing)}",
            OAuthErrorCodes.INVALID_CREDENTIALS,
            {"missing_fields": missing}
        )
