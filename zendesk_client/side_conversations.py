"""
Side conversation endpoints.

ref: https://developer.zendesk.com/api-reference/ticketing/side_conversation/side_conversation/
"""

import logging
from typing import List, Optional

from zendesk_client.models import Message, SideConversation
from zendesk_client.monitoring import timed_api_call

logger = logging.getLogger(__name__)


class SideConversationAPI:
    """Side conversation methods, mixed into Client."""

    @timed_api_call("side_conversations")
    def create_side_conversation(self, ticket_id: int, message: Message) -> SideConversation:
        """
        Start a side conversation on a ticket.

        ref: https://developer.zendesk.com/api-reference/ticketing/side_conversation/side_conversation/#create-side-conversation

        Args:
            ticket_id: Parent ticket
            message: First message of the conversation

        Returns:
            SideConversation: The created conversation
        """
        data = self.post(
            f"/tickets/{ticket_id}/side_conversations",
            {"message": message.to_payload()},
        )
        logger.debug("Created side conversation on ticket %s: %s", ticket_id, data)
        return SideConversation.model_validate(data.get("side_conversation"))

    @timed_api_call("side_conversations")
    def get_side_conversations(self, ticket_id: int) -> List[SideConversation]:
        """List the side conversations of a ticket."""
        data = self.get(f"/tickets/{ticket_id}/side_conversations")
        return [SideConversation.model_validate(item) for item in data.get("side_conversations") or []]

    @timed_api_call("side_conversations")
    def get_side_conversation(self, ticket_id: int, side_conversation_id: str) -> SideConversation:
        """Show one side conversation."""
        data = self.get(f"/tickets/{ticket_id}/side_conversations/{side_conversation_id}")
        return SideConversation.model_validate(data.get("side_conversation"))

    @timed_api_call("side_conversations")
    def reply_to_side_conversation(
        self, ticket_id: int, side_conversation_id: str, message: Message
    ) -> SideConversation:
        """Add a message to an existing side conversation."""
        data = self.post(
            f"/tickets/{ticket_id}/side_conversations/{side_conversation_id}/reply",
            {"message": message.to_payload()},
        )
        return SideConversation.model_validate(data.get("side_conversation"))

    @timed_api_call("side_conversations")
    def update_side_conversation(
        self,
        ticket_id: int,
        side_conversation_id: str,
        state: Optional[str] = None,
        subject: Optional[str] = None,
    ) -> SideConversation:
        """
        Change the state ("open"/"closed") or subject of a side conversation.

        Fields left as None are not sent.
        """
        changes = {}
        if state is not None:
            changes["state"] = state
        if subject is not None:
            changes["subject"] = subject

        data = self.put(
            f"/tickets/{ticket_id}/side_conversations/{side_conversation_id}",
            {"side_conversation": changes},
        )
        return SideConversation.model_validate(data.get("side_conversation"))
