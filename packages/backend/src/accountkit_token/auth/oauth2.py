"""Minimal OAuth2 client used to call protected Graph API resources."""

from __future__ import annotations

import hashlib
import hmac
from typing import Any
from urllib.parse import urlencode

import httpx

from ..logging import get_logger

logger = get_logger(__name__)


def appsecret_proof(access_token: str, client_secret: str) -> str:
    """Compute the Graph API ``appsecret_proof`` for an access token."""
    return hmac.new(
        client_secret.encode("utf-8"),
        access_token.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


class OAuth2Client:
    """OAuth2 client holding the provider endpoints and app credentials."""

    def __init__(
        self,
        client_id: str | None,
        client_secret: str | None,
        authorize_url: str,
        access_token_url: str,
        access_token_name: str = "access_token",
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the OAuth2 client.

        Args:
            client_id: Application (client) id
            client_secret: Application secret
            authorize_url: Provider authorization endpoint
            access_token_url: Provider token endpoint
            access_token_name: Query parameter used to present the token on GET
            http_client: Optional httpx client (a private one is created if omitted)
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.authorize_url = authorize_url
        self.access_token_url = access_token_url
        self.access_token_name = access_token_name
        self._use_authorization_header_for_get = False
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient()

    def use_authorization_header_for_get(self, enabled: bool) -> None:
        """Choose between the Authorization header and a query parameter on GET."""
        self._use_authorization_header_for_get = enabled

    @property
    def uses_authorization_header_for_get(self) -> bool:
        return self._use_authorization_header_for_get

    def get_authorize_url(self, **params: Any) -> str:
        """Build the authorization endpoint URL for the given parameters."""
        query = {"client_id": self.client_id, **params}
        query = {key: value for key, value in query.items() if value is not None}
        separator = "&" if "?" in self.authorize_url else "?"
        return f"{self.authorize_url}{separator}{urlencode(query)}"

    async def get(
        self,
        url: str,
        access_token: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """
        GET a protected resource, presenting the access token.

        The token is sent either as ``Authorization: Bearer`` or as the
        ``access_token`` query parameter, depending on
        ``use_authorization_header_for_get``.

        Raises:
            httpx.HTTPError: On transport failure or a non-2xx response
        """
        query = dict(params or {})
        headers: dict[str, str] = {}

        if self._use_authorization_header_for_get:
            headers["Authorization"] = f"Bearer {access_token}"
        else:
            query[self.access_token_name] = access_token

        # Keep any query string already present on the resource URL
        request_url = httpx.URL(url).copy_merge_params(query)
        response = await self._http_client.get(request_url, headers=headers)
        logger.debug("OAuth2 GET completed", url=url, status_code=response.status_code)
        response.raise_for_status()
        return response

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
