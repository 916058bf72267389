"""
Authenticators for the HTTP client

An authenticator contributes the headers that authenticate one request.
The client asks the configured authenticator before every dispatch and
merges the returned headers over its own.
"""

import base64
import logging
from abc import ABC, abstractmethod
from typing import Optional

from .oauth.signer import OAuthSigner
from .oauth.types import HeaderDict, OAuthCredentials
from .request import RequestModel

logger = logging.getLogger(__name__)


class Authenticator(ABC):
    """Produces the authentication headers for a request"""

    @abstractmethod
    def header(self, request: RequestModel) -> HeaderDict:
        """
        Compute the headers to attach to a request.

        Args:
            request: Request about to be dispatched

        Returns:
            dict: Header names mapped to values
        """


class NoAuthenticator(Authenticator):
    """Contributes no headers"""

    def header(self, request: RequestModel) -> HeaderDict:
        return {}


class BasicAuthenticator(Authenticator):
    """HTTP Basic authentication with a header computed once"""

    def __init__(self, username: str, password: str):
        self.username = username
        token = base64.b64encode(f"{username}:{password}".encode('utf-8')).decode('ascii')
        self._header = {'Authorization': f"Basic {token}"}

    @property
    def authorization(self) -> str:
        return self._header['Authorization']

    def header(self, request: RequestModel) -> HeaderDict:
        return dict(self._header)

    def __repr__(self) -> str:
        return f"BasicAuthenticator(username={self.username!r})"


class OAuthAuthenticator(Authenticator):
    """
    OAuth 1.0a authentication

    Every call signs the request afresh with a new timestamp and nonce.
    The credential set is immutable and may be shared across threads.
    """

    def __init__(self, credentials: OAuthCredentials, signer: Optional[OAuthSigner] = None):
        self.credentials = credentials
        self.signer = signer or OAuthSigner()

    def header(self, request: RequestModel) -> HeaderDict:
        return self.signer.sign(request, self.credentials)

    def __repr__(self) -> str:
        return f"OAuthAuthenticator(credentials={self.credentials!r})"
