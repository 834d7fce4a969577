"""Receipts: every pool event as a hashed JSON record.

Receipts double as the log: each one is printed as a single JSON line.
Hashes are SHA256 and BLAKE3 side by side.
"""
import hashlib
import json
from datetime import datetime, timezone

import blake3

from .constants import TENANT_ID


class StopRule(Exception):
    """A ledger invariant broke. The pool must stop, not recover."""


def dual_hash(data: bytes | str | dict) -> str:
    """Return 'sha256hex:blake3hex' for data.

    Dicts are hashed as canonical JSON (sorted keys, no spaces) so equal
    payloads hash equally whatever their key order.
    """
    if isinstance(data, dict):
        data = json.dumps(data, sort_keys=True, separators=(",", ":"))
    if isinstance(data, str):
        data = data.encode("utf-8")

    sha256_hex = hashlib.sha256(data).hexdigest()
    blake3_hex = blake3.blake3(data).hexdigest()

    return f"{sha256_hex}:{blake3_hex}"


def emit_receipt(receipt_type: str, data: dict, tenant_id: str = TENANT_ID) -> dict:
    """Build a receipt around data, print it and return it.

    Args:
        receipt_type: Event name, e.g. premium-deposited, anchor, anomaly
        data: Event fields; a tenant_id here wins over the argument
        tenant_id: Tenant stamped when data carries none

    Returns:
        data plus receipt_type, ts (UTC, Z suffix), tenant_id and payload_hash
    """
    tenant_id = data.get("tenant_id", tenant_id)

    payload_bytes = json.dumps(data, sort_keys=True).encode("utf-8")
    payload_hash = dual_hash(payload_bytes)

    receipt = {
        "receipt_type": receipt_type,
        "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "tenant_id": tenant_id,
        "payload_hash": payload_hash,
        **data
    }

    print(json.dumps(receipt, sort_keys=True), flush=True)

    return receipt


def merkle(items: list) -> str:
    """Merkle root over items in order.

    Leaves are dual hashes of sorted-key JSON. An odd level repeats its last
    hash. The empty list has the fixed root dual_hash(b"empty").
    """
    if not items:
        return dual_hash(b"empty")

    level = [dual_hash(json.dumps(item, sort_keys=True)) for item in items]
    while len(level) > 1:
        if len(level) % 2:
            level.append(level[-1])
        level = [dual_hash(left + right) for left, right in zip(level[::2], level[1::2])]
    return level[0]
