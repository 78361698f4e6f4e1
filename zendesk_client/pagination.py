"""
Offset pagination for Zendesk list endpoints.

List responses carry ``next_page``/``previous_page`` URLs and a ``count``
alongside the resource array.
"""

from typing import Any, Dict, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field


class PageOptions(BaseModel):
    """Query parameters shared by every paginated endpoint."""

    model_config = ConfigDict(extra="forbid")

    page: Optional[int] = Field(None, ge=1, description="1-based page number")
    per_page: Optional[int] = Field(None, ge=1, le=100, description="Records per page")


class Page(BaseModel):
    """Pagination fields of a list response."""

    model_config = ConfigDict(extra="ignore")

    previous_page: Optional[str] = None
    next_page: Optional[str] = None
    count: int = 0

    def has_next(self) -> bool:
        return bool(self.next_page)

    def has_prev(self) -> bool:
        return bool(self.previous_page)


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_options(opts: Optional[BaseModel]) -> Dict[str, str]:
    """Flatten an options model into query parameters, skipping unset fields."""
    if opts is None:
        return {}
    data = opts.model_dump(exclude_none=True, by_alias=True)
    return {key: _query_value(value) for key, value in data.items()}


def add_options(path: str, opts: Optional[BaseModel]) -> str:
    """
    Append list options to a request path as a query string.

    Args:
        path: API path, e.g. "/macros.json"
        opts: Options model, or None

    Returns:
        str: The path with any set options encoded after "?"
    """
    params = encode_options(opts)
    if not params:
        return path

    separator = "&" if "?" in path else "?"
    return f"{path}{separator}{urlencode(params)}"
