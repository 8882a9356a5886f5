"""Transaction ratings.

A rating is a free-standing record: it references a store and an item but is
not part of the store aggregate, and nothing checks that the buyer ever bought
the item.
"""

from emporium.domain.errors import InvalidRatingError
from emporium.domain.value_objects import RATING_MAX, RATING_MIN, TransactionRating

# pylint: disable=too-many-arguments


def rate_transaction(
    rating_id: str,
    *,
    store_id: str,
    item_id: str,
    rating: int,
    review: str,
    buyer: str,
) -> TransactionRating:
    """Create a rating record.

    Raises:
        InvalidRatingError: If `rating` is outside RATING_MIN..RATING_MAX.
    """
    if not RATING_MIN <= rating <= RATING_MAX:
        raise InvalidRatingError(rating, RATING_MIN, RATING_MAX)
    return TransactionRating(
        rating_id=rating_id,
        store_id=store_id,
        item_id=item_id,
        rating=rating,
        review=review,
        buyer=buyer,
    )
