"""Base types for the Account Kit token strategy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Literal, Protocol, TypedDict, Union

PROVIDER_NAME: Literal["accountkit"] = "accountkit"

class Profile(TypedDict):
    """Normalized Account Kit profile handed to the verify callback."""

    provider: Literal["accountkit"]
    id: Any  # copied verbatim from the Graph API response
    email: str
    phone: str
    _raw: str
    _json: Any


VerifyReturn = Union[Any, tuple[Any, Any]]


class VerifyCallback(Protocol):
    """
    Application-supplied verification callback.

    Called as ``verify(access_token, refresh_token, profile)`` or, when the
    strategy is configured with ``pass_req_to_callback``, as
    ``verify(request, access_token, refresh_token, profile)``.

    Returns the user (or a ``(user, info)`` tuple); a falsy user rejects the
    credentials. May be a coroutine function. Raising reports an error.
    """

    def __call__(self, *args: Any) -> VerifyReturn | Awaitable[VerifyReturn]: ...


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a completed authentication attempt."""

    success: bool
    user: Any = None
    info: Any = field(default=None)

    @classmethod
    def ok(cls, user: Any, info: Any = None) -> AuthResult:
        return cls(success=True, user=user, info=info)

    @classmethod
    def failed(cls, info: Any = None) -> AuthResult:
        return cls(success=False, user=None, info=info)

    @property
    def message(self) -> str | None:
        """Human readable failure message, when the info payload carries one."""
        if isinstance(self.info, dict):
            return self.info.get("message")
        if isinstance(self.info, str):
            return self.info
        return None


class AuthenticationError(Exception):
    """Base class for hard authentication errors."""

    pass


class InternalOAuthError(AuthenticationError):
    """Raised when the provider API call fails at the transport or HTTP level."""

    def __init__(self, message: str, oauth_error: Any = None):
        super().__init__(message)
        self.message = message
        self.oauth_error = oauth_error

    def __str__(self) -> str:
        if self.oauth_error is not None:
            return f"{self.message} ({self.oauth_error})"
        return self.message


class ProfileParseError(AuthenticationError):
    """Raised when the profile response body is not valid JSON."""

    def __init__(self, message: str, body: str | None = None):
        super().__init__(message)
        self.body = body
