"""Read-only inspection of the ledger.

``emporium ledger events`` prints the global event log; ``emporium ledger
store STORE_ID`` prints one store's account and inventory. Both read the
database at ``EMPORIUM_DB_URL`` and never write.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.table import Table

from emporium import config
from emporium.bootstrap import bootstrap
from emporium.service_layer import views
from emporium.service_layer.repositories import AggregateNotFoundError

from .db import MISSING_DB_URL_MSG

if TYPE_CHECKING:
    from emporium.interfaces.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)


def _read_uow() -> AbstractUnitOfWork:
    try:
        return bootstrap().uow
    except config.DatabaseUrlNotSetError as e:
        raise click.ClickException(MISSING_DB_URL_MSG) from e


def _console() -> Console:
    return Console(highlight=False)


@click.group()
def ledger() -> None:
    """Inspect stores and the event log."""


@ledger.command()
@click.option(
    "--since",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Only show events with a global sequence greater than this.",
)
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=None,
    help="Show at most this many events.",
)
@click.option("--store", "store_id", default=None, help="Only show events of this store.")
def events(since: int, limit: int | None, store_id: str | None) -> None:
    """Show the event log in recording order."""
    envelopes = views.event_log(_read_uow(), since=since, limit=limit)
    if store_id is not None:
        envelopes = [e for e in envelopes if e.stream_id == store_id]
    logger.debug("Rendering %d events", len(envelopes))

    table = Table(title="Event log")
    table.add_column("#", justify="right")
    table.add_column("Store", no_wrap=True)
    table.add_column("v", justify="right")
    table.add_column("Event")
    table.add_column("Payload", overflow="fold")
    for envelope in envelopes:
        payload = {k: v for k, v in envelope.payload.items() if k != "store_id"}
        table.add_row(
            str(envelope.global_seq),
            envelope.stream_id,
            str(envelope.version),
            envelope.event_type,
            json.dumps(payload, sort_keys=True),
        )
    _console().print(table)


@ledger.command()
@click.argument("store_id")
@click.option("--listed-only", is_flag=True, help="Hide unlisted items.")
def store(store_id: str, listed_only: bool) -> None:
    """Show a store's balance and inventory."""
    uow = _read_uow()
    try:
        view = views.store_view(uow, store_id)
    except AggregateNotFoundError as e:
        raise click.ClickException(str(e)) from e

    console = _console()
    console.print(f"Store   : {view.store_id}")
    console.print(f"Balance : {view.balance}")
    console.print(f"Items   : {view.item_count}")
    console.print(f"Version : {view.version}")

    table = Table(title="Inventory")
    table.add_column("Item", no_wrap=True)
    table.add_column("Title")
    table.add_column("Price", justify="right")
    table.add_column("Available", justify="right")
    table.add_column("Listed")
    for item in view.items:
        if listed_only and not item.listed:
            continue
        table.add_row(
            item.item_id,
            item.title,
            str(item.price),
            f"{item.available}/{item.total_supply}",
            "yes" if item.listed else "no",
        )
    console.print(table)
