"""
Model catalog endpoint.

Lists the language models known to the platform and registers new ones.
"""

import logging
from typing import Optional

from ..constants import MODELS_PATH
from ..models.catalog import ModelRequest, ModelResponse, ModelsResponse
from .context import Context
from .utils import decode_response

logger = logging.getLogger(__name__)


class CatalogMixin:
    """Model catalog operations, mixed into Client."""

    def create_model(self, request: ModelRequest, ctx: Optional[Context] = None) -> ModelResponse:
        """Register a new model."""
        logger.debug(f"Creating model: {request.name}")
        response = self.authenticated_request("POST", MODELS_PATH, json=request.to_payload(), ctx=ctx)
        created = decode_response(response, ModelResponse, "model")
        logger.info(f"Created model with ID: {created.model.id}")
        return created

    def get_models(self, ctx: Optional[Context] = None) -> ModelsResponse:
        """List available models."""
        logger.debug("Fetching models")
        response = self.authenticated_request("GET", MODELS_PATH, ctx=ctx)
        models = decode_response(response, ModelsResponse, "models")
        logger.info(f"Retrieved {len(models.models)} models")
        return models
