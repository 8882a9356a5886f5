"""Bootstrap the message bus with handlers and their dependencies."""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from emporium import config
from emporium.adapters.db.engine import make_engine
from emporium.adapters.escrow import build_in_memory_escrow
from emporium.adapters.id_generators import ULIDGenerator
from emporium.adapters.unit_of_work import InMemoryUnitOfWork, SqlAlchemyUnitOfWork
from emporium.service_layer.handlers import COMMAND_HANDLERS
from emporium.service_layer.locks import StoreLocks
from emporium.service_layer.messagebus import MessageBus

if TYPE_CHECKING:
    from emporium.interfaces.escrow import EscrowBundle
    from emporium.interfaces.id_generator import IdGenerator
    from emporium.interfaces.unit_of_work import AbstractUnitOfWork
    from emporium.service_layer.commands import Command

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContainer:
    """The wired application: the bus for commands, the escrow it moves coins through."""

    message_bus: MessageBus
    escrow: EscrowBundle

    @property
    def uow(self) -> AbstractUnitOfWork:
        """Unit of work for read-side views."""
        return self.message_bus.uow


def build_write_uow(url: str) -> AbstractUnitOfWork:
    """Build a new unit of work for write operations."""
    engine = make_engine(url)
    return SqlAlchemyUnitOfWork(engine)


def build_message_bus(
    uow: AbstractUnitOfWork,
    command_handlers: Mapping[type[Command], Callable[..., Any]],
    *,
    id_generator: IdGenerator | None = None,
    escrow: EscrowBundle | None = None,
    locks: StoreLocks | None = None,
) -> MessageBus:
    """Build a message bus whose handlers receive their dependencies by name.

    Dependencies left as None get fresh defaults: a ULID generator, in-memory
    escrow and a new lock registry.
    """
    dependencies: dict[str, object] = {
        "uow": uow,
        "id_generator": id_generator if id_generator is not None else ULIDGenerator(),
        "escrow": escrow if escrow is not None else build_in_memory_escrow(),
        "locks": locks if locks is not None else StoreLocks(),
    }
    injected_command_handlers = {
        command_type: inject_dependencies(handler, dependencies)
        for command_type, handler in command_handlers.items()
    }

    return MessageBus(uow, command_handlers=injected_command_handlers)


def bootstrap(
    *,
    in_memory: bool = False,
    escrow: EscrowBundle | None = None,
    id_generator: IdGenerator | None = None,
) -> AppContainer:
    """Wire the application.

    Args:
        in_memory: Use in-memory storage instead of the database at
            ``EMPORIUM_DB_URL``.
        escrow: Escrow collaborators; in-memory ones by default.
        id_generator: Id source; monotonic ULIDs by default.

    Raises:
        DatabaseUrlNotSetError: If a database is needed and the URL is unset.
    """
    uow = InMemoryUnitOfWork() if in_memory else build_write_uow(config.get_db_url())
    escrow = escrow if escrow is not None else build_in_memory_escrow()
    message_bus = build_message_bus(
        uow, COMMAND_HANDLERS, id_generator=id_generator, escrow=escrow
    )
    logger.debug(
        "Bootstrapped %s with %d command handlers",
        type(uow).__name__,
        len(COMMAND_HANDLERS),
    )
    return AppContainer(message_bus=message_bus, escrow=escrow)


def inject_dependencies(
    handler: Callable, dependencies: Mapping[str, object]
) -> Callable:
    """Bind the dependencies named in the handler's signature."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    return functools.partial(handler, **deps)
