"""SQLAlchemy-backed rating book.

Writes go through the unit of work's connection and become visible on commit.
"""

from __future__ import annotations

from sqlalchemy import insert, select
from sqlalchemy.engine import Connection, RowMapping
from sqlalchemy.exc import IntegrityError

from emporium.domain.value_objects import TransactionRating
from emporium.interfaces.ratings import DuplicateRatingError, RatingBook, RatingBookError

from .schema import transaction_ratings

_RATING_COLUMNS = (
    transaction_ratings.c.rating_id,
    transaction_ratings.c.store_id,
    transaction_ratings.c.item_id,
    transaction_ratings.c.rating,
    transaction_ratings.c.review,
    transaction_ratings.c.buyer,
)


def _to_rating(row: RowMapping) -> TransactionRating:
    return TransactionRating(**row)


class SqlAlchemyRatingBook(RatingBook):
    """RatingBook over the ``transaction_ratings`` table."""

    def __init__(self, connection: Connection):
        self.connection = connection

    def add(self, rating: TransactionRating) -> None:
        if self.get(rating.rating_id) is not None:
            raise DuplicateRatingError(rating.rating_id)
        try:
            self.connection.execute(
                insert(transaction_ratings).values(
                    rating_id=rating.rating_id,
                    store_id=rating.store_id,
                    item_id=rating.item_id,
                    rating=rating.rating,
                    review=rating.review,
                    buyer=rating.buyer,
                )
            )
        except IntegrityError as e:
            raise RatingBookError(str(e.orig or e)) from e

    def get(self, rating_id: str) -> TransactionRating | None:
        row = (
            self.connection.execute(
                select(*_RATING_COLUMNS).where(
                    transaction_ratings.c.rating_id == rating_id
                )
            )
            .mappings()
            .one_or_none()
        )
        return None if row is None else _to_rating(row)

    def for_item(self, store_id: str, item_id: str) -> list[TransactionRating]:
        stmt = (
            select(*_RATING_COLUMNS)
            .where(transaction_ratings.c.store_id == store_id)
            .where(transaction_ratings.c.item_id == item_id)
            .order_by(transaction_ratings.c.seq.asc())
        )
        return [_to_rating(row) for row in self.connection.execute(stmt).mappings()]

    def by_buyer(self, buyer: str) -> list[TransactionRating]:
        stmt = (
            select(*_RATING_COLUMNS)
            .where(transaction_ratings.c.buyer == buyer)
            .order_by(transaction_ratings.c.seq.asc())
        )
        return [_to_rating(row) for row in self.connection.execute(stmt).mappings()]
