"""Alembic environment for EMPORIUM.

Policy defaults:
  - compare_type=True and compare_server_default=True for autogenerate
  - render_as_batch=True on SQLite (ALTER TABLE emulation)
  - URL precedence: `-x url=...` > config sqlalchemy.url > EMPORIUM_DB_URL
"""

import os
from logging.config import fileConfig

from alembic import context

# Import the table modules so autogenerate sees them on the shared metadata
import emporium.adapters.eventstore.schema  # noqa: F401 # pylint: disable=unused-import
import emporium.adapters.ratings.schema  # noqa: F401 # pylint: disable=unused-import
from emporium.adapters.db.dialects import DialectName
from emporium.adapters.db.metadata import metadata
from emporium.adapters.db.engine import make_engine

# pylint: disable=no-member

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = metadata


def get_url() -> str:
    """Resolve DB URL with precedence: `-x url` > config > env."""

    xargs = context.get_x_argument(as_dictionary=True)
    url = xargs.get("url") or config.get_main_option("sqlalchemy.url")

    # an unexpanded "%(...)s" placeholder counts as unset
    if not url or "%(" in url:  # pylint: disable=R2004
        url = os.environ.get("EMPORIUM_DB_URL")

    if not url:
        raise RuntimeError("Set EMPORIUM_DB_URL to your database URL.")
    return url


def run_migrations_offline() -> None:
    """Emit migration SQL for the resolved URL without connecting."""
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Connect through `make_engine` and apply migrations."""
    url = get_url()
    connectable = make_engine(url)

    try:
        with connectable.connect() as connection:
            context.configure(
                connection=connection,
                target_metadata=target_metadata,
                compare_type=True,
                compare_server_default=True,
                render_as_batch=DialectName.from_url(url) is DialectName.SQLITE,
            )

            with context.begin_transaction():
                context.run_migrations()
    finally:
        connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
