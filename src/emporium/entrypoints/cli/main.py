"""EMPORIUM CLI entry point.

Defines the top-level ``emporium`` command (via Click-Extra), configures
logging from the global options, and registers the subcommand groups:

- ``emporium db``: forward-only database management.
- ``emporium ledger``: read-only views of stores and the event log.

Examples
    $ emporium --version
    $ emporium -v db upgrade
    $ emporium ledger store 01J9Z3M6Q8K2V4XW7N5R1T0ABC
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from emporium import __version__
from emporium.logging import (
    DEFAULT_FLIGHT_RECORDER_CAPACITY,
    configure_logging,
    log_startup,
    verbosity_to_level,
)

from .db import db as db_group
from .helpers import hyperlink
from .helpers.log_level_parser import parse_log_level
from .ledger import ledger as ledger_group

logger = logging.getLogger(__name__)


HELP = """EMPORIUM command-line interface.

    EMPORIUM is a multi-tenant marketplace ledger: stores list items, sell
    them against escrowed payments and withdraw their balance, and every
    change is recorded in an append-only event log.
    """

EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('See Also:', fg='blue', bold=True, underline=True)}",
        "  SQLAlchemy URLs: "
        + hyperlink("https://docs.sqlalchemy.org/en/20/core/engines.html#database-urls"),
    ]
)


def _default_log_path() -> Path:
    return Path(user_log_dir("emporium", appauthor=False)) / "latest.log"


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
    epilog=EPILOG,
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    default=0,
    help="Lower the console threshold one level below WARNING per repetition.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    default=0,
    help="Raise the console threshold one level above WARNING per repetition.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Enable debug formatting (timestamps, logger names, source paths).",
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=_default_log_path,
    envvar="EMPORIUM_LOG_PATH",
    show_envvar=True,
    help="File the flight recorder writes to.",
)
@click.option(
    "--flight-recorder-capacity",
    type=click.IntRange(min=1),
    default=DEFAULT_FLIGHT_RECORDER_CAPACITY,
    hidden=True,
    envvar="EMPORIUM_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    default=True,
    envvar="EMPORIUM_FLIGHT_RECORDER",
    show_envvar=True,
    help=(
        "Keep the last N log records at DEBUG granularity and write them to "
        "--log-path when a WARNING or worse is logged (or on exit with --force-flush)."
    ),
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    default=False,
    envvar="EMPORIUM_FORCE_FLUSH_FLIGHT_RECORDER",
    show_default=True,
    show_envvar=True,
    help="Write the flight recorder buffer to --log-path on exit.",
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    envvar="EMPORIUM_LOGGER_LEVELS",
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    show_default=True,
    show_envvar=True,
    help=(
        "Set the minimum level of a logger (NAME=LEVEL). Repeatable, e.g. "
        "-L sqlalchemy.engine=INFO -L emporium=DEBUG."
    ),
)
@clickx.pass_context
def emporium(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """EMPORIUM command-line interface."""

    level = verbosity_to_level(verbose_count, quiet_count)
    handlers = configure_logging(
        level=level,
        debug_mode=debug,
        color=ctx.color is not False,
        flight_recorder_path=log_path if flight_recorder else None,
        flight_recorder_capacity=flight_recorder_capacity,
        force_flush=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        flight_capacity=flight_recorder_capacity if flight_recorder else None,
        force_flush_fr=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )

    ctx.call_on_close(logging.shutdown)


emporium.add_command(db_group)
emporium.add_command(ledger_group)
