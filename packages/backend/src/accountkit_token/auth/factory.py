"""Factory for creating the strategy from configuration."""

from __future__ import annotations

import json

import httpx

from ..config import Settings, get_settings
from ..logging import configure_logging, get_logger
from .base import VerifyCallback
from .options import StrategyOptions
from .strategy import AccountKitTokenStrategy

logger = get_logger(__name__)


def get_strategy(
    verify: VerifyCallback,
    settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
    configure_logs: bool = True,
) -> AccountKitTokenStrategy:
    """
    Create a strategy from ``ACCOUNTKIT_*`` settings.

    Args:
        verify: Verification callback handed to the strategy
        settings: Settings to use (loaded from the environment if omitted)
        http_client: Optional httpx client; when omitted the strategy owns a
            private client and ``await strategy.aclose()`` must run at shutdown
        configure_logs: Configure structlog from ``ACCOUNTKIT_DEBUG`` and
            ``ACCOUNTKIT_LOG_LEVEL``; pass False when the host app owns logging
    """
    settings = settings or get_settings()

    if configure_logs:
        configure_logging(debug=settings.debug, log_level=settings.log_level)

    try:
        overrides = json.loads(settings.strategy_config or "{}")
    except json.JSONDecodeError:
        logger.warning("Ignoring invalid ACCOUNTKIT_STRATEGY_CONFIG")
        overrides = {}
    if not isinstance(overrides, dict):
        logger.warning("ACCOUNTKIT_STRATEGY_CONFIG must be a JSON object")
        overrides = {}

    options = {
        "fb_graph_version": settings.fb_graph_version,
        "authorization_url": settings.authorization_url,
        "token_url": settings.token_url,
        "profile_url": settings.profile_url,
        "access_token_field": settings.access_token_field,
        "refresh_token_field": settings.refresh_token_field,
        "profile_fields": settings.profile_fields,
        "client_id": settings.client_id,
        "client_secret": settings.client_secret,
        "enable_proof": settings.enable_proof,
        "pass_req_to_callback": settings.pass_req_to_callback,
    }
    # Overrides may use the camelCase option names
    aliases = {f.alias: name for name, f in StrategyOptions.model_fields.items() if f.alias}
    options.update({aliases.get(key, key): value for key, value in overrides.items()})

    if not options.get("client_secret"):
        logger.warning("No Account Kit client secret configured; appsecret_proof disabled")

    return AccountKitTokenStrategy(options, verify, http_client=http_client)
