"""
Configuration management for the Account Kit token strategy
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    # Graph API
    fb_graph_version: str = "v1.3"
    authorization_url: str | None = None
    token_url: str | None = None
    profile_url: str | None = None

    # OAuth2 client credentials
    client_id: str | None = None
    client_secret: str | None = None
    enable_proof: bool = True

    # Request lookup
    access_token_field: str = "access_token"
    refresh_token_field: str = "refresh_token"
    profile_fields: list[str] = ["id"]

    # Verify callback
    pass_req_to_callback: bool = False

    # JSON object overriding any of the strategy options above
    strategy_config: str = "{}"

    # Environment
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "ACCOUNTKIT_"
        case_sensitive = False
        extra = "ignore"


def get_settings() -> Settings:
    """Load a fresh Settings instance from the environment."""
    return Settings()
