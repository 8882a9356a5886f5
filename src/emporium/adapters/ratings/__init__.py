"""Rating book adapters."""

from .memory import InMemoryRatingBook
from .sqlalchemy_adapter import SqlAlchemyRatingBook

__all__ = ["InMemoryRatingBook", "SqlAlchemyRatingBook"]
