"""Handlers for the store owner's commands: opening stores, listing items, withdrawing."""

import logging
from collections.abc import Callable

from emporium.domain.aggregates import Store
from emporium.domain.value_objects import StoreOwnerCap
from emporium.interfaces.escrow import EscrowBundle
from emporium.interfaces.id_generator import IdGenerator
from emporium.interfaces.unit_of_work import AbstractUnitOfWork
from emporium.service_layer import commands
from emporium.service_layer import repositories as repos
from emporium.service_layer.locks import StoreLocks

logger = logging.getLogger(__name__)


def create_store(
    cmd: commands.CreateStore,
    uow: AbstractUnitOfWork,
    id_generator: IdGenerator,
) -> StoreOwnerCap:
    """Open a store and return the capability that owns it."""

    cap = StoreOwnerCap(cap_id=id_generator.new_id(), store_id=id_generator.new_id())
    store = Store.create(aggregate_id=cap.store_id, owner_cap_id=cap.cap_id)

    with uow:
        store_repo = repos.StoreRepository(uow.eventstore, id_generator)
        store_repo.store_events(store, metadata=cmd.as_metadata())
        uow.commit()

    logger.info("Created store %s", cap.store_id)
    return cap


def add_item(
    cmd: commands.AddItem,
    uow: AbstractUnitOfWork,
    id_generator: IdGenerator,
    locks: StoreLocks,
) -> str:
    """List a new item and return its id."""

    with locks.hold(cmd.store_id), uow:
        store_repo = repos.StoreRepository(uow.eventstore, id_generator)
        store = store_repo.load(cmd.store_id)
        item_id = id_generator.new_id()
        store.add_item(
            cmd.owner_cap,
            item_id,
            title=cmd.title,
            description=cmd.description,
            url=cmd.url,
            price=cmd.price,
            supply=cmd.supply,
            category=cmd.category,
        )
        store_repo.store_events(store, metadata=cmd.as_metadata())
        uow.commit()

    logger.info(
        "Added item %s to store %s (price=%d, supply=%d)",
        item_id,
        cmd.store_id,
        cmd.price,
        cmd.supply,
    )
    return item_id


def unlist_item(
    cmd: commands.UnlistItem,
    uow: AbstractUnitOfWork,
    id_generator: IdGenerator,
    locks: StoreLocks,
) -> None:
    """Unlist an item; unlisting an already unlisted item is allowed."""

    with locks.hold(cmd.store_id), uow:
        store_repo = repos.StoreRepository(uow.eventstore, id_generator)
        store = store_repo.load(cmd.store_id)
        store.unlist_item(cmd.owner_cap, cmd.item_id)
        store_repo.store_events(store, metadata=cmd.as_metadata())
        uow.commit()

    logger.info("Unlisted item %s in store %s", cmd.item_id, cmd.store_id)


def withdraw_from_store(
    cmd: commands.WithdrawFromStore,
    uow: AbstractUnitOfWork,
    id_generator: IdGenerator,
    escrow: EscrowBundle,
    locks: StoreLocks,
) -> None:
    """Debit the store and hand the coins to the recipient.

    The coins leave the vault before the debit is recorded and go back if
    recording fails.
    """

    with locks.hold(cmd.store_id):
        with uow:
            store_repo = repos.StoreRepository(uow.eventstore, id_generator)
            store = store_repo.load(cmd.store_id)
            store.withdraw(cmd.owner_cap, cmd.amount, cmd.recipient)
            coins = escrow.vault.take(cmd.store_id, cmd.amount)
            try:
                store_repo.store_events(store, metadata=cmd.as_metadata())
                uow.commit()
            except Exception:
                escrow.vault.put(cmd.store_id, coins)
                raise

        escrow.wallets.deliver(cmd.recipient, coins)

    logger.info(
        "Withdrew %d from store %s to %s", cmd.amount, cmd.store_id, cmd.recipient
    )


COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    commands.CreateStore: create_store,
    commands.AddItem: add_item,
    commands.UnlistItem: unlist_item,
    commands.WithdrawFromStore: withdraw_from_store,
}
