"""Construction-time options for the Account Kit token strategy."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_GRAPH_VERSION = "v1.3"


def default_authorization_url(version: str) -> str:
    return f"https://www.facebook.com/{version}/dialog/oauth"


def default_token_url(version: str) -> str:
    return f"https://graph.accountkit.com/{version}/oauth/access_token"


def default_profile_url(version: str) -> str:
    return f"https://graph.accountkit.com/{version}/me"


def _is_set(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    return value is not None and value != "" and not (
        isinstance(value, (list, tuple, dict)) and len(value) == 0
    )


class StrategyOptions(BaseModel):
    """
    Immutable strategy configuration.

    Unset or empty values fall back to their defaults; the endpoint URLs are
    derived from ``fb_graph_version``. Both snake_case names and the camelCase
    names used by passport-style configs (``fbGraphVersion``, ``profileURL``,
    ``clientSecret``...) are accepted.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    fb_graph_version: str = Field(DEFAULT_GRAPH_VERSION, alias="fbGraphVersion")
    authorization_url: str = Field("", alias="authorizationURL")
    token_url: str = Field("", alias="tokenURL")
    profile_url: str = Field("", alias="profileURL")
    access_token_field: str = Field("access_token", alias="accessTokenField")
    refresh_token_field: str = Field("refresh_token", alias="refreshTokenField")
    profile_fields: tuple[str, ...] = Field(("id",), alias="profileFields")
    profile_image: dict[str, Any] = Field(default_factory=dict, alias="profileImage")
    client_id: str | None = Field(None, alias="clientID")
    client_secret: str | None = Field(None, alias="clientSecret")
    enable_proof: bool = Field(True, alias="enableProof")
    pass_req_to_callback: bool = Field(False, alias="passReqToCallback")

    @model_validator(mode="before")
    @classmethod
    def _drop_empty(cls, data: Any) -> Any:
        # Falsy option values mean "use the default"
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if _is_set(value)}
        return data

    @model_validator(mode="after")
    def _derive_urls(self) -> StrategyOptions:
        version = self.fb_graph_version
        # Frozen model: populate derived defaults through object.__setattr__
        if not self.authorization_url:
            object.__setattr__(self, "authorization_url", default_authorization_url(version))
        if not self.token_url:
            object.__setattr__(self, "token_url", default_token_url(version))
        if not self.profile_url:
            object.__setattr__(self, "profile_url", default_profile_url(version))
        return self

    @classmethod
    def resolve(cls, options: StrategyOptions | dict[str, Any] | None) -> StrategyOptions:
        """Coerce ``None``, a mapping, or an existing instance into options."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.model_validate(dict(options))
