"""
OAuth 1.0a request signer

This module provides the signer that turns a request model and a credential
set into the Authorization header a server can re-derive and verify. It
supports HMAC-SHA1 and PLAINTEXT.
"""

import base64
import logging
import time
from typing import Dict, Optional, TYPE_CHECKING

from cryptography.hazmat.primitives import hashes, hmac

from ..exceptions import SigningError, UnsupportedSignatureMethodError
from .types import (
    OAUTH_VERSION,
    Clock,
    HeaderDict,
    NonceGenerator,
    OAuthCredentials,
    OAuthErrorCodes,
    OAuthSignatureResult,
    SignatureMethod,
)
from .utils import (
    generate_nonce,
    query_string,
    validate_nonce,
    validate_timestamp,
)
from .base_string import build_signature_base_string, normalize_parameters

if TYPE_CHECKING:
    from ..request import RequestModel

logger = logging.getLogger(__name__)


class OAuthSigner:
    """
    OAuth 1.0a signer

    The signer holds no per-request state. The clock and nonce generator
    are injected so tests can pin oauth_timestamp and oauth_nonce; every
    call to sign() draws fresh values from them.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        nonce_generator: Optional[NonceGenerator] = None
    ):
        """
        Initialize the signer.

        Args:
            clock: Returns seconds since epoch (defaults to time.time)
            nonce_generator: Returns a fresh nonce (defaults to generate_nonce)
        """
        self.clock = clock or time.time
        self.nonce_generator = nonce_generator or generate_nonce

    def sign(self, request: "RequestModel", credentials: OAuthCredentials) -> HeaderDict:
        """
        Sign a request and return the headers to attach.

        Args:
            request: Request model to sign
            credentials: OAuth credential set

        Returns:
            dict: {"Authorization": "OAuth ..."}

        Raises:
            UnsupportedSignatureMethodError: For unknown signature methods
            SigningError: If the clock or nonce generator misbehave
        """
        return self.sign_with_details(request, credentials).headers

    def sign_with_details(
        self,
        request: "RequestModel",
        credentials: OAuthCredentials
    ) -> OAuthSignatureResult:
        """
        Sign a request and return the headers with intermediate values.

        Args:
            request: Request model to sign
            credentials: OAuth credential set

        Returns:
            OAuthSignatureResult: Headers, signature, base string and parameters
        """
        protocol_parameters = self.protocol_parameters(credentials)

        parameters = normalize_parameters(request.data, protocol_parameters)
        base_string = build_signature_base_string(request.method, request.url, parameters)

        signature = self.compute_signature(base_string, credentials)
        protocol_parameters['oauth_signature'] = signature

        authorization = "OAuth " + query_string(protocol_parameters, ", ", '"')

        logger.debug(
            f"Signed {request.method} {request.url} with "
            f"{credentials.signature_method.value} (nonce {protocol_parameters['oauth_nonce']})"
        )

        return OAuthSignatureResult(
            headers={'Authorization': authorization},
            signature=signature,
            base_string=base_string,
            protocol_parameters=protocol_parameters
        )

    def protocol_parameters(self, credentials: OAuthCredentials) -> Dict[str, str]:
        """
        Build a fresh set of oauth_* protocol parameters.

        Args:
            credentials: OAuth credential set

        Returns:
            dict: Protocol parameters without oauth_signature, in header order

        Raises:
            SigningError: If the generated timestamp or nonce is invalid
        """
        timestamp = str(int(self.clock()))
        nonce = self.nonce_generator()

        if not validate_timestamp(timestamp):
            raise SigningError(
                f"Invalid timestamp: {timestamp}",
                OAuthErrorCodes.INVALID_TIMESTAMP,
                {"timestamp": timestamp}
            )

        if not validate_nonce(nonce):
            raise SigningError(
                f"Invalid nonce: {nonce!r}",
                OAuthErrorCodes.INVALID_NONCE,
                {"nonce": nonce}
            )

        return {
            'oauth_consumer_key': credentials.consumer_key,
            'oauth_token': credentials.token,
            'oauth_signature_method': credentials.signature_method.value,
            'oauth_timestamp': timestamp,
            'oauth_nonce': nonce,
            'oauth_version': OAUTH_VERSION,
        }

    def compute_signature(self, base_string: str, credentials: OAuthCredentials) -> str:
        """
        Compute oauth_signature for a signature base string.

        Args:
            base_string: Signature base string
            credentials: OAuth credential set

        Returns:
            str: Signature value (not yet escaped)

        Raises:
            UnsupportedSignatureMethodError: For unknown signature methods
        """
        method = credentials.signature_method

        if method is SignatureMethod.PLAINTEXT:
            return credentials.signing_key

        if method is SignatureMethod.HMAC_SHA1:
            return hmac_sha1(credentials.signing_key, base_string)

        raise UnsupportedSignatureMethodError(method)


def hmac_sha1(key: str, message: str) -> str:
    """
    HMAC-SHA1 a message and return the base64 digest as one header-safe token.

    Args:
        key: Signing key ("escaped-consumer-secret&escaped-token-secret")
        message: Signature base string

    Returns:
        str: Base64-encoded digest without line breaks

    Raises:
        SigningError: If the HMAC computation fails
    """
    try:
        mac = hmac.HMAC(key.encode('utf-8'), hashes.SHA1())
        mac.update(message.encode('utf-8'))
        digest = mac.finalize()
    except Exception as e:
        raise SigningError(
            f"HMAC-SHA1 computation failed: {e}",
            OAuthErrorCodes.CRYPTO_ERROR,
            {"original_error": str(e)}
        ) from e

    return base64.b64encode(digest).decode('ascii').replace('\n', '')


def create_signer(
    clock: Optional[Clock] = None,
    nonce_generator: Optional[NonceGenerator] = None
) -> OAuthSigner:
    """
    Create a new OAuth signer.

    Args:
        clock: Optional clock returning seconds since epoch
        nonce_generator: Optional nonce generator

    Returns:
        OAuthSigner: Configured signer instance
    """
    return OAuthSigner(clock=clock, nonce_generator=nonce_generator)


def sign_request(request: "RequestModel", credentials: OAuthCredentials) -> HeaderDict:
    """
    Sign a request with a default signer.

    Args:
        request: Request model to sign
        credentials: OAuth credential set

    Returns:
        dict: Headers to attach to the request
    """
    return create_signer().sign(request, credentials)
