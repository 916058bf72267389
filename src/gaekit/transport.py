"""
HTTP transport for GAEKit

The transport performs the actual network call for a fully formed request.
RequestsTransport is backed by a requests.Session; any object implementing
Transport.fetch can replace it.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Tuple

import requests

from .exceptions import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "GAEKit-Python-SDK/0.2.0"


@dataclass
class FetchOptions:
    """
    Options passed to the transport with every fetch

    Attributes:
        allow_truncate: Whether a transport may cut oversized bodies
        follow_redirects: Whether redirects are followed
        timeout: Seconds to wait for the server
        verify_ssl: Whether TLS certificates are verified
    """
    allow_truncate: bool = False
    follow_redirects: bool = True
    timeout: float = 30.0
    verify_ssl: bool = True

    def __post_init__(self):
        """Validate fetch options"""
        if self.timeout <= 0:
            raise ValidationError("Timeout must be positive", "INVALID_TIMEOUT")


@dataclass
class RawResponse:
    """
    Response as delivered by a transport

    Attributes:
        status_code: HTTP status code
        headers: Response headers in wire order
        content: Response body bytes
        truncated: Whether the transport cut the body short
    """
    status_code: int
    headers: List[Tuple[str, str]] = field(default_factory=list)
    content: Optional[bytes] = None
    truncated: bool = False


class Transport(ABC):
    """Performs one blocking HTTP exchange"""

    @abstractmethod
    def fetch(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        payload: Optional[bytes],
        options: FetchOptions
    ) -> RawResponse:
        """
        Send a request and return the raw response.

        Status codes are not interpreted; network failures propagate.
        """


class RequestsTransport(Transport):
    """
    Transport backed by a requests.Session

    requests always reads complete bodies, so responses are never truncated.
    Exceptions from requests propagate unchanged.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        """Create HTTP session with default headers."""
        session = requests.Session()
        session.headers.update({
            'User-Agent': DEFAULT_USER_AGENT
        })
        return session

    def fetch(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        payload: Optional[bytes],
        options: FetchOptions
    ) -> RawResponse:
        logger.debug(f"Fetching {method} {url}")

        response = self.session.request(
            method,
            url,
            headers=dict(headers),
            data=payload,
            allow_redirects=options.follow_redirects,
            timeout=options.timeout,
            verify=options.verify_ssl,
        )

        return RawResponse(
            status_code=response.status_code,
            headers=list(response.headers.items()),
            content=response.content,
        )

    def close(self) -> None:
        self.session.close()
