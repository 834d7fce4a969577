"""Tests for premiumpool.journal store and anchoring."""
from premiumpool.core.receipt import merkle
from premiumpool.journal import ReceiptStore, anchor_events, journal_events, verify_anchor

from conftest import FARMER


class TestReceiptStore:
    """Append-only JSONL journal."""

    def test_append_returns_payload_hash(self, tmp_store):
        """receipt_id is the payload_hash."""
        assert tmp_store.append({"receipt_type": "x", "payload_hash": "h1"}) == "h1"

    def test_read_back_in_order(self, tmp_store):
        """read_all() returns receipts in append order."""
        tmp_store.append_many([{"n": 1}, {"n": 2}, {"n": 3}])
        assert [r["n"] for r in tmp_store.read_all()] == [1, 2, 3]

    def test_by_type(self, tmp_store):
        """by_type() filters on receipt_type."""
        tmp_store.append_many([{"receipt_type": "a"}, {"receipt_type": "b"}, {"receipt_type": "a"}])
        assert len(tmp_store.by_type("a")) == 2

    def test_append_many_returns_hashes_and_query_filters(self, tmp_store):
        """Batch write keeps order; query() applies the predicate."""
        ids = tmp_store.append_many([{"payload_hash": "h1", "amount": 5},
                                     {"payload_hash": "h2", "amount": 50}])
        assert ids == ["h1", "h2"]
        assert [r["payload_hash"] for r in tmp_store.query(lambda r: r["amount"] > 10)] == ["h2"]

    def test_creates_parent_dirs(self, tmp_path):
        """Missing parent directory is created."""
        store = ReceiptStore(str(tmp_path / "nested" / "dir" / "r.jsonl"))
        assert store.path.exists()
        assert store.read_all() == []


class TestAnchor:
    """Merkle anchoring of event trails."""

    def test_anchor_commits_to_events(self, distributed_pool, capsys):
        """Root and batch size match the events."""
        anchor = anchor_events(distributed_pool.events)
        assert anchor["receipt_type"] == "anchor"
        assert anchor["batch_size"] == len(distributed_pool.events)
        assert anchor["merkle_root"] == merkle(distributed_pool.events)
        assert verify_anchor(distributed_pool.events, anchor)

    def test_tampered_event_fails_verification(self, distributed_pool, capsys):
        """Changing an amount breaks the anchor."""
        anchor = anchor_events(distributed_pool.events)
        tampered = [dict(e) for e in distributed_pool.events]
        tampered[-1]["amount"] = 1
        assert not verify_anchor(tampered, anchor)

    def test_journal_events(self, distributed_pool, tmp_store, capsys):
        """Events then anchor are appended; stored events reproduce the root."""
        distributed_pool.claim(FARMER, 1)
        anchor = journal_events(distributed_pool, tmp_store)

        stored = tmp_store.read_all()
        assert stored[-1]["receipt_type"] == "anchor"
        assert stored[:-1] == distributed_pool.events
        assert verify_anchor(stored[:-1], anchor)

    def test_repeated_journaling_writes_each_event_once(self, distributed_pool, tmp_store, capsys):
        """A second call only appends events committed since the first."""
        first = journal_events(distributed_pool, tmp_store)
        assert journal_events(distributed_pool, tmp_store) is None

        distributed_pool.claim(FARMER, 1)
        second = journal_events(distributed_pool, tmp_store)

        stored = tmp_store.read_all()
        events = [r for r in stored if r["receipt_type"] != "anchor"]
        assert events == distributed_pool.events
        assert first["batch_size"] == len(distributed_pool.events) - 1
        assert second["batch_size"] == 1
        assert verify_anchor(distributed_pool.events[-1:], second)

    def test_empty_pool_writes_nothing(self, pool, tmp_store, capsys):
        """No events -> no anchor, journal stays empty."""
        assert journal_events(pool, tmp_store) is None
        assert tmp_store.read_all() == []
