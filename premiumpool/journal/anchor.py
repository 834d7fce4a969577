"""Merkle anchoring of the ledger event trail.

An anchor receipt commits to an ordered batch of event receipts; anyone
holding the same receipts can recompute the root and compare.
"""
from ..core.constants import TENANT_ID
from ..core.receipt import emit_receipt, merkle
from .store import ReceiptStore


def anchor_events(receipts: list[dict], tenant_id: str = TENANT_ID) -> dict:
    """Compute Merkle root for a batch of receipts and emit anchor receipt.

    Args:
        receipts: Event receipts, in commit order
        tenant_id: Tenant identifier

    Returns:
        Anchor receipt dict
    """
    return emit_receipt("anchor", {
        "tenant_id": tenant_id,
        "merkle_root": merkle(receipts),
        "hash_algos": ["SHA256", "BLAKE3"],
        "batch_size": len(receipts),
    })


def verify_anchor(receipts: list[dict], anchor: dict) -> bool:
    """True if receipts reproduce the anchor's root and batch size."""
    return (
        anchor.get("batch_size") == len(receipts)
        and anchor.get("merkle_root") == merkle(receipts)
    )


def journal_events(pool, store: ReceiptStore) -> dict | None:
    """Append the pool's unjournaled events to the journal and anchor them.

    Only events past pool.journaled are written, so repeated calls never
    duplicate a receipt. The anchor covers just the new batch and follows it.

    Args:
        pool: PremiumPool whose events to persist
        store: Destination journal

    Returns:
        Anchor receipt dict, or None when there was nothing new
    """
    events = pool.events_since(pool.journaled)
    if not events:
        return None
    store.append_many(events)
    anchor = anchor_events(events, tenant_id=pool.tenant_id)
    store.append(anchor)
    pool.journaled += len(events)
    return anchor
