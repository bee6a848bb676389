#!/usr/bin/env python3
"""
Assistant Models
"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import AliasChoices, Field

from .base import ApiModel


class Assistant(ApiModel):
    """An assistant available to the current user."""

    id: Union[int, str]
    name: str = ""
    description: Optional[str] = None
    model_id: Optional[str] = Field(None, validation_alias=AliasChoices("modelId", "model_id"))
    is_public: bool = Field(False, validation_alias=AliasChoices("isPublic", "is_public"))
    created_at: Optional[datetime] = Field(None, validation_alias=AliasChoices("createdAt", "created_at"))
    updated_at: Optional[datetime] = Field(None, validation_alias=AliasChoices("updatedAt", "updated_at"))


class AssistantsResponse(ApiModel):
    """Body of ``GET /api/v1/user/assistants``."""

    members: List[Assistant] = Field(
        default_factory=list, validation_alias=AliasChoices("members", "assistants")
    )
    total_items: int = Field(0, validation_alias=AliasChoices("totalItems", "total"))
