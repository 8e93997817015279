"""
Shared helpers for request/response schemas.
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema exposing snake_case fields as camelCase JSON keys.

    Input accepts both spellings (``spanishWord`` or ``spanish_word``);
    FastAPI serializes responses by alias, so output is always camelCase.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def strip_or_none(v):
    """Trim a string value, turning blank strings into None."""
    if v is None:
        return None
    v = v.strip()
    return v or None
