"""
User models.

Defines Pydantic models for creating users and updating profiles.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Model for creating users."""

    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    image: Optional[str] = None
    background_image: Optional[str] = None
    handle: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None


class UserUpdate(BaseModel):
    """Model for updating user profiles.

    Only fields that were explicitly set are written; omitted fields keep
    their stored value.
    """

    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    image: Optional[str] = None
    background_image: Optional[str] = None
    handle: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None

    model_config = ConfigDict(
        validate_assignment=True,
    )
