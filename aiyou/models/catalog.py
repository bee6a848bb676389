#!/usr/bin/env python3
"""
Model Catalog Models

Payloads for listing and creating language models on the platform.
"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import Field

from .base import ApiModel


class ModelProperties(ApiModel):
    """Tunable properties of a language model."""

    max_tokens: int = Field(0, alias="maxTokens")
    temperature: float = 0.0
    provider: str = ""
    capabilities: List[str] = Field(default_factory=list)


class Model(ApiModel):
    """A language model registered on the platform."""

    id: Union[int, str]
    name: str = ""
    description: Optional[str] = None
    version: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    properties: Optional[ModelProperties] = None


class ModelRequest(ApiModel):
    """Body of ``POST /api/v1/models``."""

    name: str
    description: str = ""
    properties: ModelProperties = Field(default_factory=ModelProperties)


class ModelResponse(ApiModel):
    """Body returned when a model is created."""

    model: Model


class ModelsResponse(ApiModel):
    """Body of ``GET /api/v1/models``."""

    models: List[Model] = Field(default_factory=list)
    total: int = 0
