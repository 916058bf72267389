"""
Unit tests for authenticators
"""

from unittest.mock import Mock

from gaekit.auth import (
    Authenticator,
    BasicAuthenticator,
    NoAuthenticator,
    OAuthAuthenticator,
)
from gaekit.oauth import OAuthCredentials, OAuthSigner
from gaekit.request import RequestModel


def make_request() -> RequestModel:
    return RequestModel.parse("http://example.com/resource", "GET")


class TestNoAuthenticator:

    def test_no_headers(self):
        assert NoAuthenticator().header(make_request()) == {}


class TestBasicAuthenticator:

    def test_header_value(self):
        """Basic header for u:p is exactly 'Basic dTpw'"""
        authenticator = BasicAuthenticator("u", "p")
        assert authenticator.header(make_request()) == {"Authorization": "Basic dTpw"}
        assert authenticator.authorization == "Basic dTpw"

    def test_utf8_credentials(self):
        authenticator = BasicAuthenticator("josé", "pa:ss")
        assert authenticator.authorization == "Basic am9zw6k6cGE6c3M="

    def test_returned_mapping_is_a_copy(self):
        authenticator = BasicAuthenticator("u", "p")
        authenticator.header(make_request())["Authorization"] = "tampered"
        assert authenticator.header(make_request()) == {"Authorization": "Basic dTpw"}

    def test_repr_hides_password(self):
        assert "secret" not in repr(BasicAuthenticator("u", "secret"))


class TestOAuthAuthenticator:

    def test_delegates_to_signer(self):
        credentials = OAuthCredentials("ck", "cs", "tk", "ts")
        signer = Mock(spec=OAuthSigner)
        signer.sign.return_value = {"Authorization": "OAuth test"}
        request = make_request()

        authenticator = OAuthAuthenticator(credentials, signer=signer)
        assert authenticator.header(request) == {"Authorization": "OAuth test"}
        signer.sign.assert_called_once_with(request, credentials)

    def test_default_signer(self):
        authenticator = OAuthAuthenticator(OAuthCredentials("ck", "cs", "tk", "ts"))
        headers = authenticator.header(make_request())
        assert headers["Authorization"].startswith('OAuth oauth_consumer_key="ck"')

    def test_is_authenticator(self):
        assert isinstance(OAuthAuthenticator(OAuthCredentials("ck", "cs")), Authenticator)
