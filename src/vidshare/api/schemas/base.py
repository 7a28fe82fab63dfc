"""Base schema configuration for the vidshare API."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ModelT = TypeVar("ModelT", bound="CamelModel")


class CamelModel(BaseModel):
    """
    Base model for all API request and response schemas.

    Configures:
    - populate_by_name: Allow both camelCase (wire) and snake_case (Python)
    - alias_generator: Auto-convert snake_case fields to camelCase on the wire
    - from_attributes: Build responses straight from ORM rows
    """

    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
        from_attributes=True,
    )

    @classmethod
    def build(cls: type[ModelT], obj: Any, **extra: Any) -> ModelT:
        """Validate an ORM row, adding derived fields such as counts."""
        data = {
            name: getattr(obj, name)
            for name in cls.model_fields
            if name not in extra and hasattr(obj, name)
        }
        data.update(extra)
        return cls.model_validate(data)
