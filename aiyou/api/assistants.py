"""
Assistants endpoint.
"""

import logging
from typing import Optional

from ..constants import USER_ASSISTANTS_PATH
from ..models.assistants import AssistantsResponse
from .context import Context
from .utils import decode_response

logger = logging.getLogger(__name__)


class AssistantsMixin:
    """Assistant listing, mixed into Client."""

    def get_user_assistants(self, ctx: Optional[Context] = None) -> AssistantsResponse:
        """List the assistants available to the authenticated user."""
        logger.debug("Fetching user assistants")
        response = self.authenticated_request("GET", USER_ASSISTANTS_PATH, ctx=ctx)
        assistants = decode_response(response, AssistantsResponse, "assistants", ok_statuses=(200,))
        logger.info(f"Retrieved {len(assistants.members)} assistants")
        return assistants
