"""Account Kit bearer-token authentication."""

from .base import (
    AuthenticationError,
    AuthResult,
    InternalOAuthError,
    Profile,
    ProfileParseError,
    VerifyCallback,
)
from .factory import get_strategy
from .lookup import TokenRequest, lookup, parse_oauth2_token
from .middleware import AccountKitAuth, AuthenticatedUser
from .oauth2 import OAuth2Client
from .options import StrategyOptions
from .strategy import AccountKitTokenStrategy

__all__ = [
    "AccountKitTokenStrategy",
    "AccountKitAuth",
    "AuthenticatedUser",
    "AuthenticationError",
    "AuthResult",
    "InternalOAuthError",
    "OAuth2Client",
    "Profile",
    "ProfileParseError",
    "StrategyOptions",
    "TokenRequest",
    "VerifyCallback",
    "get_strategy",
    "lookup",
    "parse_oauth2_token",
]
