from sheet_inventory.schemas import InventoryRecord
from sheet_inventory.store import InventoryStore


def _records(*ids):
    return [InventoryRecord(id=i, quantity=5) for i in ids]


def test_initial_snapshot_is_empty():
    snapshot = InventoryStore().snapshot()
    assert snapshot.records == ()
    assert snapshot.stats.total_items == 0
    assert snapshot.last_updated is None
    assert snapshot.error is None


def test_publish_replaces_whole_collection():
    store = InventoryStore()
    assert store.publish(store.begin_fetch(), _records("a", "b"))
    assert store.publish(store.begin_fetch(), _records("c"))

    snapshot = store.snapshot()
    assert [r.id for r in snapshot.records] == ["c"]
    assert snapshot.stats.total_items == 1
    assert snapshot.stats.low_stock_count == 1
    assert snapshot.last_updated is not None


def test_stale_response_is_discarded():
    store = InventoryStore()
    older = store.begin_fetch()
    newer = store.begin_fetch()

    assert store.publish(newer, _records("fresh"))
    assert not store.publish(older, _records("stale"))
    assert [r.id for r in store.records] == ["fresh"]


def test_failure_keeps_previous_records():
    store = InventoryStore()
    store.publish(store.begin_fetch(), _records("a"))

    store.fail(store.begin_fetch(), "Unable to load inventory data from any source.")

    assert [r.id for r in store.records] == ["a"]
    assert store.error == "Unable to load inventory data from any source."


def test_success_clears_error():
    store = InventoryStore()
    store.fail(store.begin_fetch(), "boom")
    store.publish(store.begin_fetch(), _records("a"))
    assert store.error is None


def test_stale_failure_ignored():
    store = InventoryStore()
    older = store.begin_fetch()
    store.publish(store.begin_fetch(), _records("a"))
    store.fail(older, "late error")
    assert store.error is None
