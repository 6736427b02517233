"""Locating bearer credentials within an inbound request."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from json import JSONDecodeError
from typing import TYPE_CHECKING, Any

from ..logging import get_logger

if TYPE_CHECKING:
    from starlette.requests import Request

logger = get_logger(__name__)

AUTHORIZATION_HEADER = "Authorization"
BEARER_RE = re.compile(r"Bearer (.*)")


def _lower_keys(headers: Mapping[str, Any] | None) -> dict[str, Any]:
    if not headers:
        return {}
    return {str(key).lower(): value for key, value in headers.items()}


@dataclass(frozen=True)
class TokenRequest:
    """
    Read-only view of the request parts searched for credentials.

    Header names are lower-cased on construction, so header lookups are
    case-insensitive.
    """

    body: Mapping[str, Any] | None = None
    query: Mapping[str, Any] | None = None
    headers: Mapping[str, Any] = field(default_factory=dict)
    raw: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _lower_keys(self.headers))

    @property
    def original(self) -> Any:
        """The framework request this view was built from, or the view itself."""
        return self.raw if self.raw is not None else self

    @classmethod
    async def from_request(cls, request: Request) -> TokenRequest:
        """Build a view over a Starlette/FastAPI request, reading its body."""
        return cls(
            body=await _read_body(request),
            query=dict(request.query_params),
            headers=dict(request.headers),
            raw=request,
        )


async def _read_body(request: Request) -> dict[str, Any] | None:
    if request.method in ("GET", "HEAD"):
        return None

    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/json"):
            payload = await request.json()
            return payload if isinstance(payload, dict) else None
        if content_type.startswith(
            ("application/x-www-form-urlencoded", "multipart/form-data")
        ):
            form = await request.form()
            return {key: value for key, value in form.items()}
    except (JSONDecodeError, UnicodeDecodeError, ValueError) as e:
        logger.debug("Ignoring unreadable request body", content_type=content_type, error=str(e))
    return None


def parse_oauth2_token(request: TokenRequest) -> str | None:
    """
    Parse an RFC 6750 bearer token from the Authorization header.

    Args:
        request: Request view (headers already case-normalized)

    Returns:
        The bearer token, or None when the header is absent or not a bearer value
    """
    header_value = request.headers.get(AUTHORIZATION_HEADER.lower())
    if not header_value:
        return None

    match = BEARER_RE.search(str(header_value))
    return (match and match.group(1)) or None


def lookup(request: TokenRequest, field_name: str) -> str | None:
    """
    Find ``field_name`` in the request body, query, headers, then Authorization.

    The first non-empty string wins, in that order. Values of any other type
    (numbers, objects, uploaded files) count as not found.
    """
    return (
        _string_value(request.body, field_name)
        or _string_value(request.query, field_name)
        or _string_value(request.headers, field_name.lower())
        or parse_oauth2_token(request)
        or None
    )


def _string_value(source: Mapping[str, Any] | None, field_name: str) -> str | None:
    if not source:
        return None
    value = source.get(field_name)
    return value if isinstance(value, str) and value else None
