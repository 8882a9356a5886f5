"""Bootstrap (composition root) for EMPORIUM.

Assembles the application at runtime: wires concrete adapters (unit of work,
escrow, id generation, store locks) into the service-layer handlers and
exposes the result as an `AppContainer`.

Import rules:
- Entry points import *this* package rather than adapters directly.
- Inner layers must not import `emporium.bootstrap`.
"""

from .bootstrap import (
    AppContainer,
    bootstrap,
    build_message_bus,
    build_write_uow,
    inject_dependencies,
)

__all__ = [
    "AppContainer",
    "bootstrap",
    "build_message_bus",
    "build_write_uow",
    "inject_dependencies",
]
