"""Session models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class SessionCreate(BaseModel):
    """Model for recording an issued session token."""

    session_token: str = Field(..., min_length=16, max_length=255)
    user_id: str = Field(..., min_length=1)
    expires: datetime
