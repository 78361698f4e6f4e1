"""
Zendesk API Client Package.

Typed bindings for the Zendesk Support API: macros and side conversations,
with authentication, configuration and call monitoring.
"""

from zendesk_client.auth import ZendeskAuth
from zendesk_client.client import Client
from zendesk_client.config import ZendeskSettings, get_settings
from zendesk_client.errors import ZendeskAPIError
from zendesk_client.macros import MacroListOptions
from zendesk_client.models import (
    CustomField,
    ExternalIDs,
    Macro,
    MacroAction,
    Message,
    MessageTo,
    Participant,
    SideConversation,
    Ticket,
    TicketComment,
    TicketSideConversation,
    parse_bool,
)
from zendesk_client.pagination import Page, PageOptions

__version__ = "1.0.0"
