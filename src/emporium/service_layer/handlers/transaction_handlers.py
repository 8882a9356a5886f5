"""Handlers for buyer-facing transactions.

Each handler decides on the store events first. Coins a transaction will
move are split off, taken or minted before the events are recorded, and are
put back if recording fails; they reach the vault and assets reach wallets
only after the commit. Minted credit from a failed commit is discarded
unspent. The per-store lock is held throughout, so the vault always matches
the balance the events describe.
"""

import logging
from collections.abc import Callable

from emporium.domain import ratings
from emporium.domain.value_objects import PurchasedItem, TransactionRating
from emporium.interfaces.escrow import EscrowBundle
from emporium.interfaces.id_generator import IdGenerator
from emporium.interfaces.unit_of_work import AbstractUnitOfWork
from emporium.service_layer import commands
from emporium.service_layer import repositories as repos
from emporium.service_layer.locks import StoreLocks

logger = logging.getLogger(__name__)


def purchase_item(
    cmd: commands.PurchaseItem,
    uow: AbstractUnitOfWork,
    id_generator: IdGenerator,
    escrow: EscrowBundle,
    locks: StoreLocks,
) -> list[PurchasedItem]:
    """Sell `cmd.quantity` units and deliver one item copy per unit."""

    with locks.hold(cmd.store_id):
        with uow:
            store_repo = repos.StoreRepository(uow.eventstore, id_generator)
            store = store_repo.load(cmd.store_id)
            cost = store.purchase_item(
                cmd.item_id, cmd.quantity, cmd.recipient, cmd.payment.value
            )
            coins = cmd.payment.split(cost)
            try:
                store_repo.store_events(store, metadata=cmd.as_metadata())
                uow.commit()
            except Exception:
                cmd.payment.join(coins)
                raise

        escrow.vault.put(cmd.store_id, coins)
        item = store.get_item(cmd.item_id)
        copies = [item.snapshot(id_generator.new_id()) for _ in range(cmd.quantity)]
        for copy in copies:
            escrow.wallets.deliver(cmd.recipient, copy)

    logger.info(
        "Sold %d x item %s from store %s to %s for %d",
        cmd.quantity,
        cmd.item_id,
        cmd.store_id,
        cmd.recipient,
        cost,
    )
    if item.available == 0:
        logger.info("Item %s in store %s is sold out", cmd.item_id, cmd.store_id)
    return copies


def initiate_delivery(
    cmd: commands.InitiateDelivery,
    uow: AbstractUnitOfWork,
    id_generator: IdGenerator,
    locks: StoreLocks,
) -> None:
    """Record that delivery to the buyer has started."""

    with locks.hold(cmd.store_id), uow:
        store_repo = repos.StoreRepository(uow.eventstore, id_generator)
        store = store_repo.load(cmd.store_id)
        store.initiate_delivery(cmd.item_id, cmd.buyer)
        store_repo.store_events(store, metadata=cmd.as_metadata())
        uow.commit()

    logger.info(
        "Delivery of item %s from store %s to %s initiated",
        cmd.item_id,
        cmd.store_id,
        cmd.buyer,
    )


def confirm_delivery(
    cmd: commands.ConfirmDelivery,
    uow: AbstractUnitOfWork,
    id_generator: IdGenerator,
    escrow: EscrowBundle,
    locks: StoreLocks,
) -> None:
    """Credit the store with the item price, minted fresh."""

    with locks.hold(cmd.store_id):
        with uow:
            store_repo = repos.StoreRepository(uow.eventstore, id_generator)
            store = store_repo.load(cmd.store_id)
            amount = store.confirm_delivery(cmd.item_id, cmd.buyer)
            credit = escrow.mint.mint(amount)
            store_repo.store_events(store, metadata=cmd.as_metadata())
            uow.commit()

        escrow.vault.put(cmd.store_id, credit)

    logger.info(
        "Delivery of item %s to %s confirmed; store %s credited %d",
        cmd.item_id,
        cmd.buyer,
        cmd.store_id,
        amount,
    )


def refund_purchase(
    cmd: commands.RefundPurchase,
    uow: AbstractUnitOfWork,
    id_generator: IdGenerator,
    escrow: EscrowBundle,
    locks: StoreLocks,
) -> None:
    """Put units back into availability and credit escrow with their price."""

    with locks.hold(cmd.store_id):
        with uow:
            store_repo = repos.StoreRepository(uow.eventstore, id_generator)
            store = store_repo.load(cmd.store_id)
            amount = store.refund_purchase(cmd.item_id, cmd.quantity, cmd.buyer)
            credit = escrow.mint.mint(amount)
            store_repo.store_events(store, metadata=cmd.as_metadata())
            uow.commit()

        escrow.vault.put(cmd.store_id, credit)

    logger.info(
        "Refunded %d x item %s in store %s for %s",
        cmd.quantity,
        cmd.item_id,
        cmd.store_id,
        cmd.buyer,
    )


def rate_transaction(
    cmd: commands.RateTransaction,
    uow: AbstractUnitOfWork,
    id_generator: IdGenerator,
    escrow: EscrowBundle,
) -> TransactionRating:
    """Record a rating of a store item and give the buyer a copy."""

    with uow:
        store = repos.StoreRepository(uow.eventstore).load(cmd.store_id)
        store.get_item(cmd.item_id)
        rating = ratings.rate_transaction(
            id_generator.new_id(),
            store_id=cmd.store_id,
            item_id=cmd.item_id,
            rating=cmd.rating,
            review=cmd.review,
            buyer=cmd.buyer,
        )
        uow.ratings.add(rating)
        uow.commit()

    escrow.wallets.deliver(cmd.buyer, rating)
    logger.info(
        "Recorded rating %d for item %s in store %s by %s",
        rating.rating,
        cmd.item_id,
        cmd.store_id,
        cmd.buyer,
    )
    return rating


COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    commands.PurchaseItem: purchase_item,
    commands.InitiateDelivery: initiate_delivery,
    commands.ConfirmDelivery: confirm_delivery,
    commands.RefundPurchase: refund_purchase,
    commands.RateTransaction: rate_transaction,
}
