"""
Authenticated HTTP client for GAEKit

This module builds a request model for every call, asks the configured
authenticator for headers, hands the request to the transport and wraps
the raw response into a Response envelope.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple, Union

from .auth import Authenticator, NoAuthenticator
from .request import FORM_URLENCODED, Payload, RequestModel
from .transport import FetchOptions, RawResponse, RequestsTransport, Transport

logger = logging.getLogger(__name__)


@dataclass
class Response:
    """
    Normalized HTTP response

    Attributes:
        code: HTTP status code
        body: Response body, None when empty
        headers: (name, value) pairs in the order the server sent them
    """
    code: int
    body: Optional[Union[bytes, str]] = None
    headers: List[Tuple[str, str]] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: RawResponse) -> 'Response':
        return cls(
            code=raw.status_code,
            body=raw.content or None,
            headers=list(raw.headers),
        )

    def header(self, name: str) -> Optional[str]:
        """Return the first header with exactly this name (case-sensitive)."""
        for header_name, value in self.headers:
            if header_name == name:
                return value
        return None

    @property
    def text(self) -> Optional[str]:
        if self.body is None or isinstance(self.body, str):
            return self.body
        return self.body.decode('utf-8', errors='replace')


class HttpClient:
    """
    HTTP client with pluggable authentication

    No retries and no redirect handling beyond what the transport does.
    Status codes are returned as-is; a 4xx or 5xx is not an error here.
    """

    def __init__(
        self,
        authenticator: Optional[Authenticator] = None,
        transport: Optional[Transport] = None,
        options: Optional[FetchOptions] = None,
        default_headers: Optional[Mapping[str, str]] = None
    ):
        """
        Initialize the HTTP client.

        Args:
            authenticator: Header provider (defaults to NoAuthenticator)
            transport: Network collaborator (defaults to RequestsTransport)
            options: Fetch options passed on every call
            default_headers: Headers sent with every request
        """
        self.authenticator = authenticator or NoAuthenticator()
        self.transport = transport or RequestsTransport()
        self.options = options or FetchOptions()
        self.default_headers = dict(default_headers or {})

        logger.info(f"Initialized HTTP client with {type(self.authenticator).__name__}")

    def build_request(
        self,
        url: str,
        method: str = "GET",
        data: Payload = None,
        headers: Optional[Mapping[str, str]] = None
    ) -> RequestModel:
        """
        Build the request model and attach authentication headers.

        Args:
            url: Absolute request URL
            method: HTTP method
            data: Form parameter mapping or raw body
            headers: Extra request headers

        Returns:
            RequestModel: Request with merged headers
        """
        merged: Dict[str, str] = dict(self.default_headers)
        merged.update(headers or {})

        request = RequestModel.parse(url, method, data, merged)

        if (
            request.has_form_payload
            and request.carries_body
            and not any(name.lower() == 'content-type' for name in request.header)
        ):
            request.header['Content-Type'] = FORM_URLENCODED

        request.header.update(self.authenticator.header(request))
        return request

    def request(
        self,
        url: str,
        method: str = "GET",
        data: Payload = None,
        headers: Optional[Mapping[str, str]] = None
    ) -> Response:
        """
        Send an authenticated request.

        Args:
            url: Absolute request URL
            method: HTTP method
            data: Form parameter mapping or raw body
            headers: Extra request headers

        Returns:
            Response: Status code, body and headers
        """
        request = self.build_request(url, method, data, headers)

        logger.debug(f"Dispatching {request.method} request to {request.target_url()}")
        raw = self.transport.fetch(
            request.method,
            request.target_url(),
            request.header,
            request.payload(),
            self.options,
        )

        return Response.from_raw(raw)

    def get(self, url: str, headers: Optional[Mapping[str, str]] = None) -> Response:
        """Make GET request."""
        return self.request(url, 'GET', None, headers)

    def head(self, url: str, headers: Optional[Mapping[str, str]] = None) -> Response:
        """Make HEAD request."""
        return self.request(url, 'HEAD', None, headers)

    def delete(self, url: str, headers: Optional[Mapping[str, str]] = None) -> Response:
        """Make DELETE request."""
        return self.request(url, 'DELETE', None, headers)

    def post(self, url: str, data: Payload, headers: Optional[Mapping[str, str]] = None) -> Response:
        """Make POST request."""
        return self.request(url, 'POST', data, headers)

    def put(self, url: str, data: Payload, headers: Optional[Mapping[str, str]] = None) -> Response:
        """Make PUT request."""
        return self.request(url, 'PUT', data, headers)


def create_client(
    authenticator: Optional[Authenticator] = None,
    options: Optional[FetchOptions] = None
) -> HttpClient:
    """
    Create an HTTP client backed by requests.

    Args:
        authenticator: Optional authenticator
        options: Optional fetch options

    Returns:
        HttpClient: Configured client
    """
    return HttpClient(authenticator=authenticator, options=options)
