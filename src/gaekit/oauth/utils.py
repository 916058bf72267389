"""
Utility functions for OAuth 1.0a request signing

This module provides percent-encoding, parameter canonicalization,
query string parsing, and nonce/timestamp generation.
"""

import time
import secrets
import hashlib
import logging
import re
from typing import Any, Dict, Iterable, Mapping, Tuple, Union
import urllib.parse

from ..exceptions import MalformedParameterPairError, ValidationError

logger = logging.getLogger(__name__)

# Characters left as-is by escape(): ALPHA, DIGIT, '-', '.', '_', '~'
UNRESERVED_PATTERN = re.compile(r'[A-Za-z0-9\-._~]+')


def escape(value: Any) -> str:
    """
    Percent-encode a value using the OAuth unreserved character set.

    Every byte of the UTF-8 form outside ALPHA / DIGIT / "-" / "." / "_" / "~"
    is written as %XX with uppercase hex. "/", ":", "?", "=" and "&" are
    escaped too, so an already-escaped query string is escaped again when
    used as a value. Strings with no UTF-8 form (lone surrogates) are
    rejected.

    Args:
        value: Value to encode (None encodes as an empty string)

    Returns:
        str: Percent-encoded string

    Raises:
        ValidationError: If the value cannot be encoded as UTF-8
    """
    if value is None:
        return ""
    if isinstance(value, bytes):
        return urllib.parse.quote(value, safe='')

    try:
        encoded = str(value).encode('utf-8')
    except UnicodeEncodeError as e:
        raise ValidationError(
            f"Value cannot be encoded as UTF-8: {e.reason}",
            "INVALID_ENCODING",
            {"value": repr(value)}
        ) from None

    return urllib.parse.quote(encoded, safe='')


def unescape(value: str) -> str:
    """
    Decode a percent-encoded (or form-encoded) string.

    Args:
        value: Encoded string; "+" decodes to a space

    Returns:
        str: Decoded string
    """
    return urllib.parse.unquote_plus(value, encoding='utf-8')


def query_string(
    parameters: Union[Mapping[str, Any], Iterable[Tuple[str, Any]]],
    delimiter: str = "&",
    quote: str = ""
) -> str:
    """
    Serialize parameters as escaped name=value pairs in the given order.

    Callers sort the pairs first when canonical order is required.

    Args:
        parameters: Mapping or iterable of (name, value) pairs
        delimiter: String placed between pairs ("&" for bodies, ", " for headers)
        quote: String wrapped around each escaped value ('"' for headers)

    Returns:
        str: Serialized parameter string
    """
    if isinstance(parameters, Mapping):
        pairs = parameters.items()
    else:
        pairs = parameters

    return delimiter.join(
        f"{escape(name)}={quote}{escape(value)}{quote}"
        for name, value in pairs
    )


def parse_query(text: Union[str, bytes, None], strict: bool = False) -> Dict[str, str]:
    """
    Parse an "&"-delimited name=value string into a dictionary.

    A segment without "=" is a malformed pair. By default its value is
    recorded as an empty string and a warning is logged; with strict=True
    it raises instead. Empty segments are skipped. Later pairs overwrite
    earlier ones with the same name.

    Args:
        text: Query string or form-encoded body
        strict: Raise on malformed pairs instead of recovering

    Returns:
        dict: Unescaped parameter names mapped to unescaped values

    Raises:
        MalformedParameterPairError: If strict and a pair has no "="
    """
    if not text:
        return {}

    if isinstance(text, bytes):
        text = text.decode('utf-8', errors='replace')

    parameters: Dict[str, str] = {}
    for segment in text.split('&'):
        if not segment:
            continue

        name, separator, value = segment.partition('=')
        if not separator:
            if strict:
                raise MalformedParameterPairError(segment)
            logger.warning(f"Malformed parameter pair {segment!r}; treating value as empty")

        parameters[unescape(name)] = unescape(value)

    return parameters


def generate_nonce() -> str:
    """
    Generate a fresh nonce for replay protection.

    Returns:
        str: 32 hex characters from a SHA-256 digest of the current
        high-resolution time and 16 random bytes
    """
    seed = f"{time.time_ns()}".encode('ascii') + secrets.token_bytes(16)
    return hashlib.sha256(seed).hexdigest()[:32]


def generate_timestamp() -> str:
    """
    Generate the current Unix timestamp as a decimal string.

    Returns:
        str: Seconds since epoch
    """
    return str(int(time.time()))


def validate_nonce(nonce: Any) -> bool:
    """
    Validate a nonce: a non-empty string of unreserved characters.

    Args:
        nonce: Nonce to validate

    Returns:
        bool: True if nonce is usable
    """
    if not isinstance(nonce, str) or not nonce:
        return False

    return bool(UNRESERVED_PATTERN.fullmatch(nonce))


def validate_timestamp(timestamp: Any) -> bool:
    """
    Validate a timestamp: a positive decimal string.

    Args:
        timestamp: Timestamp string to validate

    Returns:
        bool: True if timestamp is a positive integer in decimal form
    """
    if not isinstance(timestamp, str):
        return False

    return bool(re.fullmatch(r'[0-9]+', timestamp)) and int(timestamp) > 0
