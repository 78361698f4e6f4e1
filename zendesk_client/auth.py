"""
Authentication for the Zendesk API.

Zendesk API tokens are sent as HTTP Basic credentials of the form
``{email}/token:{api_token}``.
"""

import base64
import logging
from typing import Optional, Tuple

import requests
from requests.auth import HTTPBasicAuth

from zendesk_client.config import ZendeskSettings, get_settings

logger = logging.getLogger(__name__)


class ZendeskAuth:
    """API-token credentials for a Zendesk account."""

    def __init__(self, email: str, api_token: str, base_url: str, timeout: float = 30.0):
        self.email = email
        self.api_token = api_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Optional[ZendeskSettings] = None) -> "ZendeskAuth":
        settings = settings or get_settings()
        return cls(
            email=settings.email,
            api_token=settings.api_token.get_secret_value(),
            base_url=settings.api_url,
            timeout=settings.timeout,
        )

    def get_auth_object(self) -> HTTPBasicAuth:
        """
        Get the requests auth object for this account.

        Returns:
            HTTPBasicAuth: Basic auth with the token-style username
        """
        return HTTPBasicAuth(f"{self.email}/token", self.api_token)

    def get_auth_header(self) -> str:
        """Authorization header value, for HTTP libraries other than requests."""
        credentials = f"{self.email}/token:{self.api_token}"
        return f"Basic {base64.b64encode(credentials.encode()).decode()}"

    def validate_credentials(self) -> Tuple[bool, Optional[str]]:
        """
        Check the credentials against the current-user endpoint.

        Returns:
            tuple: (is_valid, error message or None)
        """
        if not self.email or not self.api_token:
            return False, "Missing Zendesk email or API token"

        try:
            response = requests.get(
                f"{self.base_url}/users/me.json",
                auth=self.get_auth_object(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("Credential check failed: %s", e)
            return False, str(e)

        if response.status_code != 200:
            return False, f"{response.status_code} - {response.text[:200]}"

        # Anonymous users come back with a null id instead of an error
        try:
            body = response.json()
        except ValueError:
            return False, "Invalid JSON from users/me"

        user = (body.get("user") if isinstance(body, dict) else None) or {}
        if user.get("id") is None:
            return False, "Credentials were not accepted"

        return True, None
