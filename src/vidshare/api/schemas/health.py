"""Health check schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class HealthChecks(BaseModel):
    """Individual health check results."""

    model_config = ConfigDict(strict=True)

    database_latency_ms: Optional[int] = None


class HealthStatus(BaseModel):
    """Application health status."""

    model_config = ConfigDict(strict=True)

    status: str  # "healthy", "unhealthy"
    version: str  # vidshare version
    database: str  # "connected", "disconnected"
    timestamp: datetime
    checks: Optional[HealthChecks] = None
