"""
Request model for outgoing HTTP calls

A RequestModel captures one request before it is signed: the base URL
(query and fragment stripped), the uppercased method, the merged query and
form parameters, the payload and the mutable header mapping.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlsplit, urlunsplit

from .exceptions import ValidationError
from .oauth.types import HttpMethod
from .oauth.utils import parse_query, query_string

logger = logging.getLogger(__name__)

FORM_URLENCODED = "application/x-www-form-urlencoded"

# Methods that transmit a request body
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

Payload = Union[Mapping[str, Any], str, bytes, None]


def _is_form_encoded(header: Mapping[str, str]) -> bool:
    for name, value in header.items():
        if name.lower() == 'content-type':
            return value.split(';', 1)[0].strip().lower() == FORM_URLENCODED
    return False


class RequestModel:
    """
    One outgoing HTTP request prior to signing

    Attributes:
        url: scheme://host/path, without query or fragment
        method: Uppercase HTTP method
        data: Query parameters merged with form-encoded body parameters
        header: Header mapping, mutable by the client and authenticators
    """

    def __init__(
        self,
        url: str,
        method: str,
        data: Dict[str, str],
        header: Dict[str, str],
        raw_payload: Payload = None,
        raw_query: str = ""
    ):
        self._url = url
        self._method = method
        self._data = data
        self._raw_payload = raw_payload
        self._raw_query = raw_query
        self.header = header

    @classmethod
    def parse(
        cls,
        raw_url: str,
        method: str = "GET",
        payload: Payload = None,
        header: Optional[Mapping[str, str]] = None,
        strict: bool = False
    ) -> 'RequestModel':
        """
        Build a request model from a raw URL, method, payload and headers.

        Query parameters are parsed from the URL. A mapping payload, or a
        string/bytes payload sent as application/x-www-form-urlencoded, is
        merged on top; body pairs win over query pairs with the same name.
        Pairs without "=" get an empty value unless strict is set.

        Args:
            raw_url: Absolute URL, may include a query string and fragment
            method: HTTP method, any case
            payload: Mapping of form parameters, or a raw str/bytes body
            header: Initial request headers
            strict: Raise MalformedParameterPairError on pairs without "="

        Returns:
            RequestModel: Parsed request

        Raises:
            ValidationError: If the URL or method is invalid
        """
        try:
            http_method = HttpMethod(str(method).upper())
        except ValueError:
            raise ValidationError(
                f"Unsupported HTTP method: {method}",
                "INVALID_METHOD",
                {"method": method}
            ) from None

        parts = urlsplit(raw_url)
        if not parts.scheme or not parts.netloc:
            raise ValidationError(
                f"Invalid URL format: {raw_url}",
                "INVALID_URL",
                {"url": raw_url}
            )

        url = urlunsplit((parts.scheme, parts.netloc, parts.path, '', ''))
        header = dict(header or {})

        data = parse_query(parts.query, strict=strict)

        if isinstance(payload, Mapping):
            data.update((str(name), "" if value is None else str(value)) for name, value in payload.items())
        elif isinstance(payload, (str, bytes)) and _is_form_encoded(header):
            data.update(parse_query(payload, strict=strict))
        elif payload is not None and not isinstance(payload, (str, bytes)):
            raise ValidationError(
                f"Payload must be a mapping, str or bytes, got {type(payload).__name__}",
                "INVALID_PAYLOAD"
            )

        return cls(
            url=url,
            method=http_method.value,
            data=data,
            header=header,
            raw_payload=payload,
            raw_query=parts.query
        )

    @property
    def url(self) -> str:
        return self._url

    @property
    def method(self) -> str:
        return self._method

    @property
    def data(self) -> Dict[str, str]:
        """Copy of the parameters captured at construction"""
        return dict(self._data)

    @property
    def has_form_payload(self) -> bool:
        """True when the payload was given as a parameter mapping"""
        return isinstance(self._raw_payload, Mapping)

    @property
    def carries_body(self) -> bool:
        return self._method in BODY_METHODS

    def payload(self) -> Optional[bytes]:
        """
        Body to transmit.

        A mapping payload is re-serialized from data, or dropped for methods
        without a body (GET, HEAD, DELETE, OPTIONS), where the parameters go
        into the target URL instead. Any other payload is returned unchanged
        as bytes.

        Returns:
            bytes or None: Request body
        """
        if self.has_form_payload:
            if not self.carries_body:
                return None
            return query_string(self._data).encode('utf-8')

        if isinstance(self._raw_payload, str):
            return self._raw_payload.encode('utf-8')

        return self._raw_payload

    def target_url(self) -> str:
        """
        URL to dispatch the request to.

        With a mapping payload every parameter travels in the body, so the
        target is the bare URL; for methods without a body the parameters
        are re-serialized into the query instead. Otherwise the original
        query string is kept.

        Returns:
            str: Dispatch URL
        """
        if self.has_form_payload:
            if self.carries_body or not self._data:
                return self._url
            return f"{self._url}?{query_string(self._data)}"

        if not self._raw_query:
            return self._url

        return f"{self._url}?{self._raw_query}"

    def __repr__(self) -> str:
        return f"RequestModel(method={self._method!r}, url={self._url!r}, data={self._data!r})"
