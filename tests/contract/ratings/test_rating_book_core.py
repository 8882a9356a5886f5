"""Contract tests for the RatingBook port."""

from __future__ import annotations

from collections.abc import Iterable

import pytest

from emporium.adapters.ratings import InMemoryRatingBook, SqlAlchemyRatingBook
from emporium.domain.value_objects import TransactionRating
from emporium.interfaces.ratings import DuplicateRatingError, RatingBook

from tests.fixtures.datagen import ulid_like

# pylint: disable=redefined-outer-name


@pytest.fixture(params=["memory", "sqlite"])
def book(request: pytest.FixtureRequest, sqlite_engine_memory) -> Iterable[RatingBook]:
    """A fresh rating book for each backend."""
    match request.param:
        case "memory":
            yield InMemoryRatingBook()
        case "sqlite":
            with sqlite_engine_memory.begin() as connection:
                yield SqlAlchemyRatingBook(connection)
        case _:
            raise ValueError(f"unknown book type: {request.param}")


def make_rating(
    *, store_id: str = "S1", item_id: str = "I1", buyer: str = "bob", score: int = 5
) -> TransactionRating:
    """A rating with a fresh id."""
    return TransactionRating(
        rating_id=ulid_like(),
        store_id=store_id,
        item_id=item_id,
        rating=score,
        review=f"{score} stars",
        buyer=buyer,
    )


def test_get_roundtrip(book: RatingBook):
    """A recorded rating is returned unchanged."""
    rating = make_rating()
    book.add(rating)
    assert book.get(rating.rating_id) == rating


def test_get_missing(book: RatingBook):
    """Unknown ids yield None."""
    assert book.get("0" * 26) is None


def test_for_item_filters_and_keeps_order(book: RatingBook):
    """Only the item's ratings, oldest first."""
    first = make_rating(score=2)
    other_item = make_rating(item_id="I2")
    other_store = make_rating(store_id="S2")
    second = make_rating(score=4, buyer="amy")
    for rating in (first, other_item, other_store, second):
        book.add(rating)
    assert book.for_item("S1", "I1") == [first, second]
    assert book.for_item("S9", "I1") == []


def test_by_buyer(book: RatingBook):
    """A buyer's ratings across stores, oldest first."""
    a = make_rating(store_id="S1")
    b = make_rating(store_id="S2")
    book.add(a)
    book.add(make_rating(buyer="amy"))
    book.add(b)
    assert book.by_buyer("bob") == [a, b]


def test_duplicate_rejected(book: RatingBook):
    """A rating id is recorded once."""
    rating = make_rating()
    book.add(rating)
    with pytest.raises(DuplicateRatingError):
        book.add(rating)
    assert book.for_item("S1", "I1") == [rating]
