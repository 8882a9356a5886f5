"""Rating book port.

Ratings live outside the store event streams. The rating book records each
`TransactionRating` once and answers lookups by id, by item and by buyer.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from emporium.domain.value_objects import TransactionRating


class RatingBookError(Exception):
    """Base class for rating book errors."""


class DuplicateRatingError(RatingBookError):
    """Raised when a rating id is recorded twice."""

    def __init__(self, rating_id: str) -> None:
        super().__init__(f"Rating {rating_id} already recorded.")
        self.rating_id = rating_id


class RatingBook(abc.ABC):
    """Append-only collection of transaction ratings."""

    @abc.abstractmethod
    def add(self, rating: TransactionRating) -> None:
        """Record a rating.

        Raises:
            DuplicateRatingError: If a rating with the same id exists.
        """

    @abc.abstractmethod
    def get(self, rating_id: str) -> TransactionRating | None:
        """Return a rating by id, or None."""

    @abc.abstractmethod
    def for_item(self, store_id: str, item_id: str) -> list[TransactionRating]:
        """Ratings of one item, in the order they were recorded."""

    @abc.abstractmethod
    def by_buyer(self, buyer: str) -> list[TransactionRating]:
        """Ratings written by one buyer, in the order they were recorded."""
