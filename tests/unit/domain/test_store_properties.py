"""Property-based tests for store accounting."""

from hypothesis import given, settings
from hypothesis import strategies as st

from emporium.domain import errors
from emporium.domain.aggregates import Store
from emporium.domain.value_objects import StoreOwnerCap

CAP = StoreOwnerCap(cap_id="C" * 26, store_id="S" * 26)
ITEM_ID = "I" * 26

operations = st.lists(
    st.one_of(
        st.tuples(st.just("buy"), st.integers(min_value=-1, max_value=6)),
        st.tuples(st.just("refund"), st.integers(min_value=-1, max_value=6)),
        st.tuples(st.just("withdraw"), st.integers(min_value=-5, max_value=60)),
        st.tuples(st.just("confirm"), st.just(1)),
        st.tuples(st.just("unlist"), st.just(0)),
    ),
    max_size=30,
)


def run(store: Store, op: str, n: int) -> None:
    """Apply one operation, ignoring domain rejections."""
    try:
        match op:
            case "buy":
                store.purchase_item(ITEM_ID, n, "buyer", payment_value=1000)
            case "refund":
                store.refund_purchase(ITEM_ID, n, "buyer")
            case "withdraw":
                store.withdraw(CAP, n, "owner")
            case "confirm":
                store.confirm_delivery(ITEM_ID, "buyer")
            case "unlist":
                store.unlist_item(CAP, ITEM_ID)
    except errors.DomainError:
        pass


@settings(max_examples=200)
@given(supply=st.integers(min_value=1, max_value=5), ops=operations)
def test_invariants_hold_and_replay_matches(supply, ops):
    """Inventory and balance stay in bounds, and replaying events reproduces state."""
    store = Store.create(CAP.store_id, CAP.cap_id)
    store.add_item(
        CAP,
        ITEM_ID,
        title="t",
        description="d",
        url="u",
        price=5,
        supply=supply,
        category=0,
    )
    for op, n in ops:
        run(store, op, n)
        item = store.get_item(ITEM_ID)
        assert 0 <= item.available <= item.total_supply
        assert item.available > 0 or not item.listed
        assert store.balance >= 0

    history = store.dequeue_uncommitted()
    replayed = Store.rehydrate(CAP.store_id, history)
    original_item = store.get_item(ITEM_ID)
    replayed_item = replayed.get_item(ITEM_ID)
    assert replayed.balance == store.balance
    assert (replayed_item.available, replayed_item.listed) == (
        original_item.available,
        original_item.listed,
    )
