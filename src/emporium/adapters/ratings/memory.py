"""In-memory rating book."""

from __future__ import annotations

import threading

from emporium.domain.value_objects import TransactionRating
from emporium.interfaces.ratings import DuplicateRatingError, RatingBook


class InMemoryRatingBook(RatingBook):
    """Keeps ratings in insertion order."""

    def __init__(self) -> None:
        self._ratings: dict[str, TransactionRating] = {}
        self._lock = threading.Lock()

    def add(self, rating: TransactionRating) -> None:
        with self._lock:
            if rating.rating_id in self._ratings:
                raise DuplicateRatingError(rating.rating_id)
            self._ratings[rating.rating_id] = rating

    def get(self, rating_id: str) -> TransactionRating | None:
        return self._ratings.get(rating_id)

    def for_item(self, store_id: str, item_id: str) -> list[TransactionRating]:
        with self._lock:
            return [
                r
                for r in self._ratings.values()
                if r.store_id == store_id and r.item_id == item_id
            ]

    def by_buyer(self, buyer: str) -> list[TransactionRating]:
        with self._lock:
            return [r for r in self._ratings.values() if r.buyer == buyer]
