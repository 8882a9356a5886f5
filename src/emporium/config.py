"""Configuration for EMPORIUM.

Configuration is environment-driven: the database URL comes from
``EMPORIUM_DB_URL`` and the Alembic configuration is built in code, so no
``alembic.ini`` has to ship with the package.
"""

import os
import sys
from importlib.resources import files
from typing import TextIO

from alembic.config import Config

DB_URL_ENV_VAR = "EMPORIUM_DB_URL"

ALEMBIC_URL_KEY = "sqlalchemy.url"  # pragma: no mutate
ALEMBIC_SCRIPT_LOCATION_KEY = "script_location"  # pragma: no mutate


class DatabaseUrlNotSetError(Exception):
    """Raised when the EMPORIUM_DB_URL environment variable is not set."""


def get_db_url() -> str:
    """Get the database URL from the environment.

    Raises:
        DatabaseUrlNotSetError: If `EMPORIUM_DB_URL` is not set or empty.
    """
    if not (url := os.environ.get(DB_URL_ENV_VAR)):
        raise DatabaseUrlNotSetError
    return url


def build_alembic_config(
    db_url: str | None = None, stdout: TextIO = sys.stdout
) -> Config:
    """Build an Alembic `Config` for EMPORIUM's packaged migrations.

    Args:
        db_url: SQLAlchemy database URL. May be None for commands that only
            inspect the scripts (``heads``, ``history``).
        stdout: Stream Alembic writes status lines to.

    Returns:
        A Config whose ``script_location`` is ``emporium.adapters.db.alembic``.
    """
    cfg = Config(stdout=stdout)
    if db_url is not None:
        cfg.set_main_option(ALEMBIC_URL_KEY, db_url)
    cfg.set_main_option(
        ALEMBIC_SCRIPT_LOCATION_KEY,
        str(files("emporium.adapters.db.alembic")),
    )
    return cfg
