"""Service layer handlers."""

from collections.abc import Callable

from .store_handlers import COMMAND_HANDLERS as STORE_COMMAND_HANDLERS
from .transaction_handlers import COMMAND_HANDLERS as TRANSACTION_COMMAND_HANDLERS

__all__ = ["COMMAND_HANDLERS"]

COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    **STORE_COMMAND_HANDLERS,
    **TRANSACTION_COMMAND_HANDLERS,
}
