"""PremiumPool: escrow-and-settlement ledger for commodity-sale premiums.

Public API:
- Core: dual_hash, emit_receipt, StopRule, merkle
- Pool: PremiumPool, PoolConfig, ErrorKind, Result
- Journal: ReceiptStore, anchor_events, journal_events
"""
from .core import StopRule, dual_hash, emit_receipt, merkle
from .journal import ReceiptStore, anchor_events, journal_events, verify_anchor
from .pool import ErrorKind, PoolConfig, PoolError, PremiumPool, Result

__version__ = "0.1.0"

__all__ = [
    # Core
    "dual_hash",
    "emit_receipt",
    "StopRule",
    "merkle",
    # Pool
    "PremiumPool",
    "PoolConfig",
    "ErrorKind",
    "PoolError",
    "Result",
    # Journal
    "ReceiptStore",
    "anchor_events",
    "journal_events",
    "verify_anchor",
    "__version__",
]
