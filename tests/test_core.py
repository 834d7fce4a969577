"""Tests for premiumpool.core receipt primitives."""
import json

import pytest

from premiumpool.core import (
    RECEIPT_SCHEMAS,
    StopRule,
    dual_hash,
    emit_receipt,
    merkle,
    validate_receipt,
)


class TestDualHash:
    """Tests for dual_hash."""

    def test_format(self):
        """Two 64-hex halves joined by ':'."""
        sha, b3 = dual_hash(b"premium").split(":")
        assert len(sha) == 64
        assert len(b3) == 64
        assert sha != b3

    def test_str_and_bytes_agree(self):
        """str input is utf-8 encoded."""
        assert dual_hash("premium") == dual_hash(b"premium")

    def test_dict_is_canonical(self):
        """Key order does not change the hash."""
        assert dual_hash({"a": 1, "b": 2}) == dual_hash({"b": 2, "a": 1})


class TestEmitReceipt:
    """Tests for emit_receipt."""

    def test_required_fields(self, capsys):
        """Receipt carries type, ts, tenant and payload hash."""
        receipt = emit_receipt("premium-deposited", {"depositor": "A", "amount": 5})
        assert receipt["receipt_type"] == "premium-deposited"
        assert receipt["tenant_id"] == "premiumpool"
        assert receipt["ts"].endswith("Z")
        assert ":" in receipt["payload_hash"]

    def test_prints_json_line(self, capsys):
        """One JSON line per receipt on stdout."""
        emit_receipt("premium-deposited", {"depositor": "A", "amount": 5})
        line = capsys.readouterr().out.strip()
        assert json.loads(line)["amount"] == 5

    def test_tenant_from_data(self, capsys):
        """tenant_id in data overrides the default."""
        receipt = emit_receipt("anchor", {"tenant_id": "coop-7"})
        assert receipt["tenant_id"] == "coop-7"


class TestMerkle:
    """Tests for merkle."""

    def test_empty(self):
        """Empty list hashes a fixed sentinel."""
        assert merkle([]) == dual_hash(b"empty")

    def test_order_matters(self):
        """Event order is committed to."""
        assert merkle([{"a": 1}, {"b": 2}]) != merkle([{"b": 2}, {"a": 1}])

    def test_odd_count(self):
        """Odd count duplicates the last leaf."""
        items = [{"i": i} for i in range(3)]
        assert merkle(items) == merkle(items + [items[-1]])


class TestValidateReceipt:
    """Tests for validate_receipt."""

    def test_pool_receipts_validate(self, distributed_pool, capsys):
        """Every receipt the ledger emits matches its schema."""
        distributed_pool.claim("ST3FARMER", 1)
        for event in distributed_pool.events:
            assert validate_receipt(event) is True

    def test_unknown_type(self):
        """Unknown receipt_type -> StopRule."""
        with pytest.raises(StopRule):
            validate_receipt({"receipt_type": "x", "ts": "", "tenant_id": "", "payload_hash": ""})

    def test_missing_required(self):
        """Missing base field -> StopRule."""
        with pytest.raises(StopRule):
            validate_receipt({"receipt_type": "anchor"})

    def test_wrong_type(self, capsys):
        """Field of wrong type -> StopRule."""
        receipt = emit_receipt("premium-deposited", {"depositor": "A", "amount": "5"})
        with pytest.raises(StopRule):
            validate_receipt(receipt)

    def test_schemas_cover_event_types(self):
        """Every ledger event type has a schema."""
        for receipt_type in ("premium-deposited", "sale-verified", "premium-distributed",
                             "premium-claimed", "dispute-initiated", "dispute-resolved",
                             "config-updated", "operation_rejected"):
            assert receipt_type in RECEIPT_SCHEMAS
