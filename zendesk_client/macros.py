"""
Macro endpoints.

ref: https://developer.zendesk.com/api-reference/ticketing/business-rules/macros/
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import Field

from zendesk_client.models import Macro, Ticket
from zendesk_client.monitoring import timed_api_call
from zendesk_client.pagination import Page, PageOptions, add_options

logger = logging.getLogger(__name__)


class MacroListOptions(PageOptions):
    """Filters and sorting for GET /macros.json."""

    access: Optional[str] = Field(None, description="personal, agents, shared or account")
    active: Optional[bool] = None
    category: Optional[int] = None
    group_id: Optional[int] = None
    include: Optional[str] = Field(None, description="Sideloads, e.g. usage_7d")
    only_viewable: Optional[bool] = None

    # created_at, updated_at, usage_1h, usage_24h, usage_7d, usage_30d, alphabetical
    sort_by: Optional[str] = None

    # asc or desc
    sort_order: Optional[str] = None


def parse_macro_page(data: Dict[str, Any]) -> Tuple[List[Macro], Page]:
    """Split a list response into its macros and pagination fields."""
    macros = [Macro.model_validate(item) for item in data.get("macros") or []]
    return macros, Page.model_validate(data)


def parse_apply_result(data: Dict[str, Any]) -> Ticket:
    """
    Decode the ticket from a macro apply response.

    The API sends ``comment.public`` as a string ("true"/"false") and, for
    show-changes, ``ticket_form_id`` as a string of digits; both are decoded
    to their real types.

    Args:
        data: Decoded body of the form {"result": {"ticket": {...}}}

    Returns:
        Ticket: The changed ticket fields

    Raises:
        ValueError: If the ticket is missing or a field fails to parse
    """
    ticket = (data.get("result") or {}).get("ticket")
    if ticket is None:
        raise ValueError("macro apply response has no result.ticket")
    return Ticket.model_validate(ticket)


class MacroAPI:
    """Macro methods, mixed into Client."""

    @timed_api_call("macros")
    def get_macros(self, opts: Optional[MacroListOptions] = None) -> Tuple[List[Macro], Page]:
        """
        List macros.

        ref: https://developer.zendesk.com/api-reference/ticketing/business-rules/macros/#list-macros

        Args:
            opts: Filters, sorting and page selection

        Returns:
            tuple: (macros on this page, pagination fields)
        """
        path = add_options("/macros.json", opts or MacroListOptions())
        return parse_macro_page(self.get(path))

    def get_all_macros(self, opts: Optional[MacroListOptions] = None) -> List[Macro]:
        """Follow next_page links from get_macros until the last page."""
        macros, page = self.get_macros(opts)
        all_macros = list(macros)

        while page.next_page:
            macros, page = self._get_macro_page(page.next_page)
            all_macros.extend(macros)

        logger.debug("Retrieved %d macros", len(all_macros))
        return all_macros

    @timed_api_call("macros")
    def _get_macro_page(self, url: str) -> Tuple[List[Macro], Page]:
        return parse_macro_page(self.get(url))

    @timed_api_call("macros")
    def get_macro(self, macro_id: int) -> Macro:
        """
        Show a macro.

        ref: https://developer.zendesk.com/api-reference/ticketing/business-rules/macros/#show-macro
        """
        data = self.get(f"/macros/{macro_id}.json")
        return Macro.model_validate(data.get("macro"))

    @timed_api_call("macros")
    def create_macro(self, macro: Macro) -> Macro:
        """
        Create a macro.

        ref: https://developer.zendesk.com/api-reference/ticketing/business-rules/macros/#create-macro
        """
        data = self.post("/macros.json", {"macro": macro.to_payload()})
        return Macro.model_validate(data.get("macro"))

    @timed_api_call("macros")
    def update_macro(self, macro_id: int, macro: Macro) -> Macro:
        """
        Update a macro.

        ref: https://developer.zendesk.com/api-reference/ticketing/business-rules/macros/#update-macro
        """
        data = self.put(f"/macros/{macro_id}.json", {"macro": macro.to_payload()})
        return Macro.model_validate(data.get("macro"))

    @timed_api_call("macros")
    def delete_macro(self, macro_id: int) -> None:
        """
        Delete a macro.

        ref: https://developer.zendesk.com/api-reference/ticketing/business-rules/macros/#delete-macro
        """
        self.delete(f"/macros/{macro_id}.json")

    @timed_api_call("macro_apply")
    def show_changes_to_ticket(self, macro_id: int) -> Ticket:
        """
        Return the changes the macro would make to a ticket.

        Nothing is changed. The result can be sent in a later ticket update.

        ref: https://developer.zendesk.com/api-reference/ticketing/business-rules/macros/#show-changes-to-ticket
        """
        return parse_apply_result(self.get(f"/macros/{macro_id}/apply.json"))

    @timed_api_call("macro_apply")
    def show_ticket_after_changes(self, ticket_id: int, macro_id: int) -> Ticket:
        """
        Return the full ticket as it would be after applying the macro.

        The ticket itself is not changed.

        ref: https://developer.zendesk.com/api-reference/ticketing/business-rules/macros/#show-ticket-after-changes
        """
        return parse_apply_result(self.get(f"/tickets/{ticket_id}/macros/{macro_id}/apply"))
