"""
HTTP client for the Zendesk Support API.

The ``Client`` owns one ``requests.Session`` and exposes the verb helpers
(get/post/put/delete) that every endpoint method goes through. Endpoint
methods live in the macros and side_conversations modules and are mixed in
here.
"""

import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from zendesk_client.auth import ZendeskAuth
from zendesk_client.config import ZendeskSettings, get_settings
from zendesk_client.errors import ZendeskAPIError
from zendesk_client.macros import MacroAPI
from zendesk_client.side_conversations import SideConversationAPI

logger = logging.getLogger(__name__)


class Client(MacroAPI, SideConversationAPI):
    """
    Zendesk API client.

    Example:
        >>> with Client.from_settings() as zd:
        ...     macros, page = zd.get_macros()
    """

    def __init__(
        self,
        auth: ZendeskAuth,
        session: Optional[requests.Session] = None,
        total_retries: int = 3,
        backoff_factor: float = 1.0,
        status_forcelist: tuple = (429, 500, 502, 503, 504),
    ):
        """
        Args:
            auth: Account credentials, base URL and timeout
            session: Session to send requests on; a retrying one is built if omitted
            total_retries: Retries for connection errors and retryable statuses
            backoff_factor: Exponential backoff factor between retries
            status_forcelist: Statuses that trigger a retry on idempotent verbs
        """
        self.auth = auth
        self.base_url = auth.base_url
        self.timeout = auth.timeout

        if session is None:
            session = requests.Session()
            retry_strategy = Retry(
                total=total_retries,
                connect=total_retries,
                read=total_retries,
                backoff_factor=backoff_factor,
                status_forcelist=status_forcelist,
                # idempotent verbs only
                allowed_methods=frozenset(["GET", "PUT", "DELETE"]),
                respect_retry_after_header=True,
                raise_on_status=False,
            )
            adapter = HTTPAdapter(max_retries=retry_strategy)
            session.mount("https://", adapter)
            session.mount("http://", adapter)

        self.session = session
        self.session.auth = auth.get_auth_object()
        self.session.headers.update({
            "Accept": "application/json",
            "Content-Type": "application/json",
        })

    @classmethod
    def from_settings(cls, settings: Optional[ZendeskSettings] = None, **kwargs) -> "Client":
        """Build a client from ZENDESK_* settings."""
        settings = settings or get_settings()
        kwargs.setdefault("total_retries", settings.max_retries)
        kwargs.setdefault("backoff_factor", settings.backoff_factor)
        return cls(ZendeskAuth.from_settings(settings), **kwargs)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ---- transport ----

    def _url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, data: Optional[Dict[str, Any]] = None) -> requests.Response:
        url = self._url(path)
        logger.debug("%s %s", method, url)

        response = self.session.request(method, url, json=data, timeout=self.timeout)

        if not 200 <= response.status_code < 300:
            logger.error("HTTP %s error for %s %s: %s", response.status_code, method, url, response.text[:500])
            raise ZendeskAPIError(response.status_code, response.text, url, response=response)

        logger.debug("%s %s -> %s (%d bytes)", method, url, response.status_code, len(response.content))
        return response

    def _decode(self, response: requests.Response) -> Any:
        if not response.content:
            logger.warning("Empty response received for %s", response.url)
            return {}

        try:
            return response.json()
        except ValueError:
            logger.error("Invalid JSON response from %s: %s", response.url, response.text[:200])
            raise

    def get(self, path: str) -> Any:
        """
        GET a path (or an absolute URL such as a next_page link).

        Returns:
            Any: The decoded JSON body

        Raises:
            ZendeskAPIError: For non-2xx statuses
            requests.RequestException: For transport failures
            ValueError: If the body is not valid JSON
        """
        return self._decode(self._request("GET", path))

    def post(self, path: str, data: Dict[str, Any]) -> Any:
        """POST a JSON body and return the decoded response."""
        return self._decode(self._request("POST", path, data))

    def put(self, path: str, data: Dict[str, Any]) -> Any:
        """PUT a JSON body and return the decoded response."""
        return self._decode(self._request("PUT", path, data))

    def delete(self, path: str) -> None:
        """DELETE a path. The response body is discarded."""
        self._request("DELETE", path)
