#!/usr/bin/env python3
"""
Base model for API payloads.

All request and response payloads are Pydantic models that accept both
the wire (camelCase) names and the Python attribute names, and ignore
fields the server adds that the client does not know about.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class ApiModel(BaseModel):
    """Common configuration for wire payloads."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", protected_namespaces=())

    def to_payload(self) -> Dict[str, Any]:
        """Serialize using wire names, dropping unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
