"""FastAPI dependency wrapping the Account Kit token strategy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fastapi import HTTPException, Request

from ..logging import get_logger
from .base import AuthenticationError
from .lookup import TokenRequest
from .strategy import AccountKitTokenStrategy

logger = get_logger(__name__)


@dataclass
class AuthenticatedUser:
    """User resolved by the verify callback, with its info payload."""

    user: Any
    info: Any = None


class AccountKitAuth:
    """
    Dependency that authenticates a request with an ``AccountKitTokenStrategy``.

    Missing or rejected credentials produce a 401; failures talking to the
    Graph API produce a 502.

    The strategy's httpx client lives as long as the app; close it on
    shutdown:

    Example:
        strategy = get_strategy(verify)
        auth = AccountKitAuth(strategy)

        @asynccontextmanager
        async def lifespan(app: FastAPI):
            yield
            await strategy.aclose()

        app = FastAPI(lifespan=lifespan)

        @app.get("/me")
        async def me(current: AuthenticatedUser = Depends(auth)):
            return current.user
    """

    def __init__(self, strategy: AccountKitTokenStrategy):
        self.strategy = strategy

    async def __call__(self, request: Request) -> AuthenticatedUser:
        token_request = await TokenRequest.from_request(request)

        try:
            result = await self.strategy.authenticate(token_request)
        except AuthenticationError as e:
            logger.error("Account Kit profile lookup failed", error=str(e))
            raise HTTPException(
                status_code=502,
                detail="Failed to fetch user profile",
            ) from e

        if not result.success:
            logger.info("Authentication failed", reason=result.message)
            raise HTTPException(
                status_code=401,
                detail=result.message or "Unauthorized",
                headers={"WWW-Authenticate": "Bearer"},
            )

        return AuthenticatedUser(user=result.user, info=result.info)
