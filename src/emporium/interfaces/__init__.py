"""Interfaces (application boundary) for EMPORIUM.

Defines framework-free application contracts: ports for the event store, the
unit of work, ID generation, the escrow collaborators and the rating book.
Business rules stay out of this package.

Dependency rule: may import value objects from `emporium.domain`; never from
`emporium.adapters`, `emporium.service_layer` or `emporium.entrypoints`.
"""
