"""Account Kit access-token authentication strategy."""

from __future__ import annotations

import inspect
import json
from collections.abc import Iterable
from typing import Any

import httpx

from ..logging import get_logger, reset_strategy_context, set_strategy_context
from .base import (
    PROVIDER_NAME,
    AuthResult,
    InternalOAuthError,
    Profile,
    ProfileParseError,
    VerifyCallback,
)
from .lookup import TokenRequest, lookup
from .oauth2 import OAuth2Client, appsecret_proof
from .options import StrategyOptions

logger = get_logger(__name__)

PROFILE_FIELD_MAP = {
    "id": "id",
    "phone": "phone",
    "email": "email",
}


class AccountKitTokenStrategy:
    """
    Authenticate requests carrying an Account Kit access token.

    The token is looked up in the request body, query string, headers or the
    ``Authorization: Bearer`` header, exchanged for the user's profile at the
    Graph API, and passed to the application's ``verify`` callback, which
    decides whether it maps to a user.

    Example:
        async def verify(access_token, refresh_token, profile):
            return await users.find_or_create(accountkit_id=profile["id"])

        strategy = AccountKitTokenStrategy({"clientSecret": "shhh"}, verify)
        result = await strategy.authenticate(TokenRequest(query=request_query))
    """

    name = "accountkit-token"

    def __init__(
        self,
        options: StrategyOptions | dict[str, Any] | None,
        verify: VerifyCallback,
        http_client: httpx.AsyncClient | None = None,
    ):
        if not callable(verify):
            raise TypeError("AccountKitTokenStrategy requires a verify callback")

        self.options = StrategyOptions.resolve(options)
        self._verify = verify

        self._oauth2 = OAuth2Client(
            client_id=self.options.client_id,
            client_secret=self.options.client_secret,
            authorize_url=self.options.authorization_url,
            access_token_url=self.options.token_url,
            http_client=http_client,
        )
        self._oauth2.use_authorization_header_for_get(False)

    @property
    def oauth2(self) -> OAuth2Client:
        return self._oauth2

    async def authenticate(self, request: TokenRequest, **options: Any) -> AuthResult:
        """
        Authenticate a request.

        Returns a failed result when no access token is present or the verify
        callback rejects the profile.

        Raises:
            InternalOAuthError: If the profile could not be fetched
            ProfileParseError: If the profile response is not a JSON object
        """
        _ = options
        context_token = set_strategy_context(self.name)
        try:
            access_field = self.options.access_token_field
            access_token = lookup(request, access_field)
            refresh_token = lookup(request, self.options.refresh_token_field)

            if not access_token:
                logger.warning("No access token in request", field=access_field)
                return AuthResult.failed({"message": f"You should provide {access_field}"})

            profile = await self.user_profile(access_token)

            if self.options.pass_req_to_callback:
                outcome = self._verify(request.original, access_token, refresh_token, profile)
            else:
                outcome = self._verify(access_token, refresh_token, profile)
            if inspect.isawaitable(outcome):
                outcome = await outcome

            user, info = _split_outcome(outcome)
            if not user:
                logger.info("Verify callback rejected profile", profile_id=profile["id"])
                return AuthResult.failed(info)

            logger.debug("Authenticated Account Kit user", profile_id=profile["id"])
            return AuthResult.ok(user, info)
        finally:
            reset_strategy_context(context_token)

    async def user_profile(self, access_token: str) -> Profile:
        """
        Retrieve the user's profile from Account Kit.

        The normalized profile carries:

          - ``provider``  always ``accountkit``
          - ``id``        the user's id
          - ``phone``     the user's phone number (``""`` when absent)
          - ``email``     the user's email address (``""`` when absent)

        plus ``_raw`` (response body) and ``_json`` (parsed body).
        """
        params: dict[str, str] = {}
        if self.options.enable_proof and self.options.client_secret:
            params["appsecret_proof"] = appsecret_proof(access_token, self.options.client_secret)

        try:
            response = await self._oauth2.get(self.options.profile_url, access_token, params)
        except httpx.HTTPError as e:
            logger.warning("Failed to fetch Account Kit profile", error=str(e))
            raise InternalOAuthError("Failed to fetch user profile", e) from e

        body = response.text
        try:
            data = json.loads(body)
        except ValueError as e:
            logger.error("Account Kit profile response is not JSON", error=str(e))
            raise ProfileParseError(f"Failed to parse user profile: {e}", body=body) from e

        if not isinstance(data, dict):
            logger.error(
                "Account Kit profile response is not a JSON object",
                body_type=type(data).__name__,
            )
            raise ProfileParseError(
                "Failed to parse user profile: expected a JSON object", body=body
            )

        return _build_profile(body, data)

    @staticmethod
    def convert_profile_fields(profile_fields: Iterable[str] | None) -> str:
        """
        Convert profile field names into a Graph API ``fields`` value.

        Example:
            >>> AccountKitTokenStrategy.convert_profile_fields(["id", "email"])
            'id,email'
        """
        return ",".join(PROFILE_FIELD_MAP.get(f, f) for f in profile_fields or [])

    async def aclose(self) -> None:
        await self._oauth2.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()


def _build_profile(body: str, data: dict[str, Any]) -> Profile:
    return Profile(
        provider=PROVIDER_NAME,
        id=data.get("id"),
        email=data.get("email") or "",
        phone=data.get("phone") or "",
        _raw=body,
        _json=data,
    )


def _split_outcome(outcome: Any) -> tuple[Any, Any]:
    if isinstance(outcome, tuple) and len(outcome) == 2:
        return outcome[0], outcome[1]
    return outcome, None
