"""
Database module for vidshare.

Contains SQLAlchemy models and Alembic migration management.
"""

from __future__ import annotations

from vidshare.db.models import Base

__all__: list[str] = ["Base"]
