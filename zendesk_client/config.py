"""
Configuration for the Zendesk API client.

Settings are read from ZENDESK_* environment variables or a local .env file.
"""

from typing import Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class ZendeskSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ZENDESK_",      # ZENDESK_SUBDOMAIN, ZENDESK_EMAIL, ...
        extra="ignore",
    )

    # ---- credentials ----
    subdomain: str = ""
    email: str = ""
    api_token: SecretStr = SecretStr("")

    # Overrides https://{subdomain}.zendesk.com/api/v2 when set
    base_url: Optional[str] = None

    # ---- transport ----
    timeout: float = 30.0
    max_retries: int = 3
    backoff_factor: float = 1.0

    @property
    def api_url(self) -> str:
        """Base URL of the v2 API, without a trailing slash."""
        if self.base_url:
            return self.base_url.rstrip("/")
        return f"https://{self.subdomain}.zendesk.com/api/v2"


def get_settings() -> ZendeskSettings:
    """Load settings from the environment."""
    return ZendeskSettings()
