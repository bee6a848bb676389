"""
Conversation endpoints.

Saving a conversation and looking one up by thread ID. The platform has
no single-thread lookup; get_conversation scans the user's thread list.
"""

import logging
from typing import Optional

from ..constants import SAVE_CONVERSATION_PATH, USER_THREADS_PATH
from ..errors import APIError, ValidationError
from ..models.conversation import (
    ConversationThread,
    SaveConversationRequest,
    SaveConversationResponse,
    UserThreadsOutput,
)
from .context import Context
from .utils import decode_response

logger = logging.getLogger(__name__)


class ConversationMixin:
    """Conversation operations, mixed into Client."""

    def save_conversation(
        self, request: SaveConversationRequest, ctx: Optional[Context] = None
    ) -> SaveConversationResponse:
        """
        Save a conversation.

        Raises:
            ValidationError: If assistant_id or conversation is empty
        """
        if not request.assistant_id:
            raise ValidationError("assistantId is required")
        if not request.conversation:
            raise ValidationError("conversation is required")

        logger.debug(f"Saving conversation with assistant ID: {request.assistant_id}")
        response = self.authenticated_request(
            "POST", SAVE_CONVERSATION_PATH, json=request.to_payload(), ctx=ctx
        )
        saved = decode_response(
            response, SaveConversationResponse, "save conversation", ok_statuses=(200, 201)
        )
        logger.info(f"Saved conversation with thread ID: {saved.id}")
        return saved

    def get_conversation(self, thread_id: str, ctx: Optional[Context] = None) -> ConversationThread:
        """
        Find one of the user's threads by ID.

        Raises:
            APIError: With status 404 if no thread has that ID
        """
        logger.debug(f"Fetching conversation thread: {thread_id}")
        response = self.authenticated_request("GET", USER_THREADS_PATH, ctx=ctx)
        output = decode_response(response, UserThreadsOutput, "threads", ok_statuses=(200,))

        for thread in output.threads:
            if thread.id == thread_id:
                logger.info(f"Found conversation thread: {thread.id}")
                return thread

        raise APIError(404, f"thread not found: {thread_id}")
