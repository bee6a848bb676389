#!/usr/bin/env python3
"""
Conversation Models

Payloads for saving conversations and browsing the user's threads.
"""

from datetime import datetime
from typing import Dict, List, Optional, Union

from pydantic import Field

from .base import ApiModel


class ConversationThread(ApiModel):
    """A saved conversation thread."""

    id: str
    thread_id_param: Optional[int] = Field(None, alias="threadIdParam")
    content: str = ""
    assistant_name: str = Field("", alias="assistantName")
    assistant_model: Optional[str] = Field(None, alias="assistantModel")
    assistant_id: Optional[Union[int, str]] = Field(None, alias="assistantId")
    assistant_id_openai: Optional[str] = Field(None, alias="assistantIdOpenAi")
    first_message: str = Field("", alias="firstMessage")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    is_new_app_thread: bool = Field(False, alias="isNewAppThread")
    assistant_content_json: Optional[str] = Field(None, alias="assistantContentJson")


class SaveConversationRequest(ApiModel):
    """Body of ``POST /api/v1/save``."""

    assistant_id: str = Field("", alias="assistantId")
    conversation: str = ""
    first_message: str = Field("", alias="firstMessage")
    content_json: str = Field("", alias="contentJson")
    model_name: str = Field("", alias="modelName")
    is_new_app_thread: bool = Field(False, alias="isNewAppThread")
    thread_id: Optional[str] = Field(None, alias="threadId")


class SaveConversationResponse(ApiModel):
    """Body returned when a conversation is saved."""

    id: str
    object: str = ""
    created_at: int = Field(0, alias="createdAt")


class ThreadFilter(ApiModel):
    """Optional filters applied when listing threads."""

    assistant_id: Optional[str] = Field(None, alias="assistantId")
    search: Optional[str] = None


class UserThreadsParams(ApiModel):
    """Pagination and filtering for ``GET /api/v1/user/threads``."""

    page: int = 0
    items_per_page: int = Field(0, alias="itemsPerPage")
    filter: Optional[ThreadFilter] = None

    def to_query(self) -> Dict[str, str]:
        """Build the query string parameters, skipping unset values."""
        query: Dict[str, str] = {}
        if self.page > 0:
            query["page"] = str(self.page)
        if self.items_per_page > 0:
            query["itemsPerPage"] = str(self.items_per_page)
        if self.filter is not None:
            query.update({k: str(v) for k, v in self.filter.to_payload().items()})
        return query


class UserThreadsOutput(ApiModel):
    """A page of the user's conversation threads."""

    threads: List[ConversationThread] = Field(default_factory=list)
    total_items: int = Field(0, alias="totalItems")
    items_per_page: int = Field(0, alias="itemsPerPage")
    current_page: int = Field(0, alias="currentPage")
