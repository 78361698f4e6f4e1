"""
Records mirroring the JSON shapes of the Zendesk Support API.

Models ignore unknown response fields, and request bodies leave out any field
that is unset (None).
"""

import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

_INT_STRING = re.compile(r"[+-]?[0-9]+")
_TRUE_STRINGS =frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_STRINGS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_bool(value: Union[str, bool]) -> bool:
    """
    Parse a boolean that the API may send as a string.

    Args:
        value: A bool, or one of 1/t/T/TRUE/true/True, 0/f/F/FALSE/false/False

    Returns:
        bool: The parsed value

    Raises:
        ValueError: If the string is not a recognised boolean spelling
    """
    if isinstance(value, bool):
        return value
    if value in _TRUE_STRINGS:
        return True
    if value in _FALSE_STRINGS:
        return False
    raise ValueError(f"invalid boolean string: {value!r}")


class ZendeskModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict for a request body."""
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)


# ---- macros ----

class MacroAction(ZendeskModel):
    """
    What a macro does to a ticket.

    ref: https://developer.zendesk.com/documentation/ticketing/reference-guides/actions-reference/
    """

    field: str
    value: List[str] = Field(default_factory=list)

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, value: Any) -> Any:
        # Single-valued actions arrive as a bare string or number
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [str(v) for v in value]
        return [str(value)]


class Macro(ZendeskModel):
    actions: List[MacroAction] = Field(default_factory=list)
    active: bool = True
    created_at: Optional[datetime] = None
    description: Optional[Any] = None
    id: Optional[int] = None
    position: Optional[int] = None
    restriction: Optional[Any] = None
    title: str = ""
    updated_at: Optional[datetime] = None
    url: Optional[str] = None


# ---- tickets ----

class CustomField(ZendeskModel):
    id: int
    value: Optional[Any] = None


class TicketComment(ZendeskModel):
    """A ticket comment. ``public`` may be sent as "true"/"false" by the API."""

    id: Optional[int] = None
    type: Optional[str] = None
    body: Optional[str] = None
    html_body: Optional[str] = None
    public: Optional[bool] = None
    author_id: Optional[int] = None
    created_at: Optional[datetime] = None

    @field_validator("public", mode="before")
    @classmethod
    def _parse_public(cls, value: Any) -> Any:
        # Empty string means unset here, not a parse error
        if value is None or value == "":
            return None
        if isinstance(value, str):
            return parse_bool(value)
        return value


class TicketSideConversation(ZendeskModel):
    """Side conversation a macro would open, as embedded in an apply result."""

    subject: Optional[str] = None
    message: Optional[str] = None
    recipients: Optional[str] = None
    context_type: Optional[str] = None


class Ticket(ZendeskModel):
    id: Optional[int] = None
    url: Optional[str] = None
    external_id: Optional[str] = None
    type: Optional[str] = None
    subject: Optional[str] = None
    raw_subject: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    recipient: Optional[str] = None
    requester_id: Optional[int] = None
    submitter_id: Optional[int] = None
    assignee_id: Optional[int] = None
    organization_id: Optional[int] = None
    group_id: Optional[int] = None
    collaborator_ids: Optional[List[int]] = None
    follower_ids: Optional[List[int]] = None
    problem_id: Optional[int] = None
    has_incidents: Optional[bool] = None
    due_at: Optional[datetime] = None
    tags: Optional[List[str]] = None
    custom_fields: Optional[List[CustomField]] = None
    ticket_form_id: Optional[int] = None
    brand_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Only set on writes and on macro apply results
    comment: Optional[TicketComment] = None
    side_conversation: Optional[TicketSideConversation] = None

    @field_validator("ticket_form_id", mode="before")
    @classmethod
    def _parse_form_id(cls, value: Any) -> Any:
        # Show-changes responses send the form id as a string
        if value is None or value == "":
            return None
        if isinstance(value, str):
            if not _INT_STRING.fullmatch(value):
                raise ValueError(f"invalid integer string: {value!r}")
            return int(value)
        return value


# ---- side conversations ----

class Participant(ZendeskModel):
    user_id: Optional[int] = None
    name: Optional[str] = None
    email: Optional[str] = None


class MessageTo(ZendeskModel):
    email: Optional[str] = None
    name: Optional[str] = None


class ExternalIDs(ZendeskModel):
    """Caller-defined ids attached to a message. Extra keys are kept."""

    model_config = ConfigDict(extra="allow")

    my_system_id: Optional[str] = None


class Message(ZendeskModel):
    subject: Optional[str] = None
    preview_text: Optional[str] = None
    body: Optional[str] = None
    html_body: Optional[str] = None
    from_: Optional[Dict[str, Any]] = Field(None, alias="from")
    to: Optional[List[MessageTo]] = None
    external_ids: Optional[ExternalIDs] = None


class SideConversation(ZendeskModel):
    created_at: Optional[datetime] = None
    id: Optional[str] = None
    message_added_at: Optional[datetime] = None
    participants: Optional[List[Participant]] = None
    preview_text: Optional[str] = None
    state: Optional[str] = None
    state_updated_at: Optional[datetime] = None
    subject: Optional[str] = None
    ticket_id: Optional[int] = None
    updated_at: Optional[datetime] = None
    url: Optional[str] = None
