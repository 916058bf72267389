"""
Signature base string construction for OAuth 1.0a

The base string is the exact text a verifier re-derives from the request:
the escaped method, the escaped base URL and the escaped, sorted
parameter string, joined with "&".
"""

from typing import Any, List, Mapping, Tuple

from .utils import escape, query_string


def normalize_parameters(
    request_parameters: Mapping[str, Any],
    protocol_parameters: Mapping[str, Any]
) -> List[Tuple[str, str]]:
    """
    Merge request and protocol parameters and sort them by name.

    Protocol parameters replace request parameters with the same name.
    oauth_signature is never part of the signed set.

    Args:
        request_parameters: Query and form parameters of the request
        protocol_parameters: oauth_* parameters for this signing call

    Returns:
        list: (name, value) pairs sorted by name
    """
    merged = dict(request_parameters)
    merged.update(protocol_parameters)
    merged.pop('oauth_signature', None)

    return sorted(
        ((str(name), "" if value is None else str(value)) for name, value in merged.items()),
        key=lambda pair: pair[0]
    )


def build_signature_base_string(
    method: str,
    url: str,
    parameters: List[Tuple[str, str]]
) -> str:
    """
    Build the signature base string.

    The parameter string is escaped as a whole after its names and values
    were escaped individually, so reserved characters inside values end
    up double-encoded.

    Args:
        method: HTTP method
        url: Base URL without query or fragment
        parameters: Sorted (name, value) pairs

    Returns:
        str: METHOD&escaped-url&escaped-parameter-string
    """
    normalized = query_string(parameters)
    return "&".join([
        escape(method.upper()),
        escape(url),
        escape(normalized),
    ])
