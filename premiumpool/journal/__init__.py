"""Journal subpackage: receipt storage and Merkle anchoring of events."""
from .anchor import anchor_events, journal_events, verify_anchor
from .store import ReceiptStore

__all__ = [
    "ReceiptStore",
    "anchor_events",
    "journal_events",
    "verify_anchor",
]
