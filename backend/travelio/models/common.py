"""
Common API models
"""

from typing import Any

from bson import ObjectId
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class APIResponse(BaseModel):
    """
    Unified API response envelope
    """

    code: int = Field(default=0, description="0 means success; non-zero means error")
    msg: str = Field(default="ok", description="Human-readable message")
    data: Any | None = Field(default=None, description="Payload data")

    class Config:
        json_schema_extra = {"example": {"code": 0, "msg": "ok", "data": {"items": []}}}


class CamelModel(BaseModel):
    """
    Base for documents and payloads whose wire/storage names are camelCase.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def to_document(self, **kwargs) -> dict:
        return self.model_dump(by_alias=True, **kwargs)


def serialize_document(doc: dict | None) -> dict | None:
    """Make a MongoDB document JSON-safe (ObjectIds become strings)."""
    if doc is None:
        return None
    out = {}
    for key, value in doc.items():
        out[key] = str(value) if isinstance(value, ObjectId) else value
    return out
