from __future__ import annotations

import os
import sys
from logging.config import fileConfig

from sqlalchemy import create_engine, pool

from alembic import context

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BASE_DIR not in sys.path:
    sys.path.insert(0, BASE_DIR)

# this is the Alembic Config object, which provides access to values within the .ini file
config = context.config

# Interpret the config file for Python logging.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

from db import DATABASE_URL, Base  # noqa: E402

# Ensure models are imported so tables are registered on Base.metadata during autogenerate
import models as _models  # noqa: E402,F401

target_metadata = Base.metadata

# Safety check: autogenerate against an empty metadata would emit destructive diffs
if "session_levels" not in target_metadata.tables:
    raise RuntimeError(
        "Alembic autogenerate safety: 'session_levels' is not present in Base.metadata. "
        "Ensure models are imported and that SessionLevel.__tablename__ = 'session_levels'."
    )


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,  # detect column type changes
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    # db.DATABASE_URL is already normalised to the psycopg driver
    connectable = create_engine(DATABASE_URL, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
