"""
Alembic entry point for the vidshare schema.

The target URL comes from ``-x database_url=...`` when given, otherwise
from the application settings with the async driver stripped.
"""

from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine

from vidshare.config.settings import settings
from vidshare.db.models import Base

alembic_cfg = context.config
if alembic_cfg.config_file_name is not None:
    fileConfig(alembic_cfg.config_file_name)

override = context.get_x_argument(as_dictionary=True).get("database_url")
url = override or settings.get_sync_database_url()


def _migrate(**configure_kwargs: object) -> None:
    context.configure(target_metadata=Base.metadata, **configure_kwargs)
    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    _migrate(url=url, literal_binds=True, dialect_opts={"paramstyle": "named"})
else:
    with create_engine(url).connect() as connection:
        _migrate(connection=connection)
