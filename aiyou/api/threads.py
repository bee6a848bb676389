"""
Thread listing and deletion endpoints.
"""

import logging
from typing import Optional

from ..constants import THREADS_PATH, USER_THREADS_PATH
from ..errors import APIError, ValidationError
from ..models.conversation import UserThreadsOutput, UserThreadsParams
from .context import Context
from .utils import decode_response, extract_error_message

logger = logging.getLogger(__name__)


class ThreadsMixin:
    """Thread operations, mixed into Client."""

    def get_user_threads(
        self, params: Optional[UserThreadsParams] = None, ctx: Optional[Context] = None
    ) -> UserThreadsOutput:
        """List the user's threads, optionally paginated and filtered."""
        query = params.to_query() if params is not None else None
        response = self.authenticated_request("GET", USER_THREADS_PATH, params=query or None, ctx=ctx)
        output = decode_response(response, UserThreadsOutput, "threads", ok_statuses=(200,))
        logger.info(f"Retrieved {len(output.threads)} threads")
        return output

    def delete_thread(self, thread_id: str, ctx: Optional[Context] = None) -> None:
        """Delete a thread by ID."""
        if not thread_id:
            raise ValidationError("thread ID is required")

        logger.debug(f"Deleting thread: {thread_id}")
        response = self.authenticated_request("DELETE", f"{THREADS_PATH}/{thread_id}", ctx=ctx)
        try:
            if response.status_code not in (200, 204):
                raise APIError(response.status_code, extract_error_message(response))
        finally:
            response.close()
        logger.info(f"Deleted thread: {thread_id}")
