"""Unit tests for the OAuth2 client."""

import hashlib
import hmac

import httpx
import pytest

from accountkit_token.auth.oauth2 import OAuth2Client, appsecret_proof


@pytest.fixture
def seen():
    return []


@pytest.fixture
def oauth2(seen):
    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    return OAuth2Client(
        client_id="123",
        client_secret="shhh",
        authorize_url="https://www.facebook.com/v1.3/dialog/oauth",
        access_token_url="https://graph.accountkit.com/v1.3/oauth/access_token",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


class TestOAuth2Client:
    """Test token presentation on GET."""

    @pytest.mark.asyncio
    async def test_query_parameter_by_default(self, oauth2, seen):
        await oauth2.get("https://graph.accountkit.com/v1.3/me", "tok")

        assert seen[0].url.params["access_token"] == "tok"
        assert "authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_authorization_header(self, oauth2, seen):
        oauth2.use_authorization_header_for_get(True)

        await oauth2.get("https://graph.accountkit.com/v1.3/me", "tok")

        assert seen[0].headers["authorization"] == "Bearer tok"
        assert "access_token" not in seen[0].url.params

    @pytest.mark.asyncio
    async def test_extra_params_merged(self, oauth2, seen):
        await oauth2.get("https://graph.accountkit.com/v1.3/me?fields=id", "tok", {"a": "b"})

        params = seen[0].url.params
        assert params["fields"] == "id"
        assert params["a"] == "b"
        assert params["access_token"] == "tok"

    @pytest.mark.asyncio
    async def test_http_error_raised(self):
        client = OAuth2Client(
            None,
            None,
            "https://example.test/auth",
            "https://example.test/token",
            http_client=httpx.AsyncClient(
                transport=httpx.MockTransport(lambda request: httpx.Response(401))
            ),
        )

        with pytest.raises(httpx.HTTPStatusError):
            await client.get("https://example.test/me", "tok")

    def test_authorize_url(self, oauth2):
        url = oauth2.get_authorize_url(redirect_uri="https://app.test/cb", state="xyz")

        assert url.startswith("https://www.facebook.com/v1.3/dialog/oauth?")
        assert "client_id=123" in url
        assert "state=xyz" in url
        assert "redirect_uri=https%3A%2F%2Fapp.test%2Fcb" in url


def test_appsecret_proof():
    expected = hmac.new(b"shhh", b"tok", hashlib.sha256).hexdigest()
    assert appsecret_proof("tok", "shhh") == expected
