"""Errors raised by the Zendesk API client."""

from typing import Optional

import requests


class ZendeskAPIError(requests.HTTPError):
    """A request reached Zendesk but came back with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        body: str,
        url: str,
        response: Optional[requests.Response] = None,
    ):
        self.status_code = status_code
        self.body = body
        self.url = url
        super().__init__(f"{status_code}: {body}", response=response)
