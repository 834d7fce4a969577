"""Pool subpackage: the premium ledger state machine.

Provides PremiumPool plus its records, results and transfer collaborators.
"""
from .errors import ErrorKind, PoolError, Result
from .invariants import check_invariants, verify_invariants
from .ledger import PremiumPool
from .models import (
    Deposit,
    Dispute,
    DisputeState,
    PoolConfig,
    PoolState,
    PoolStats,
    Premium,
    SaleVerification,
)
from .transfer import FailingTransfer, RecordingTransfer, Transfer, TransferRecord

__all__ = [
    "PremiumPool",
    "ErrorKind",
    "PoolError",
    "Result",
    "check_invariants",
    "verify_invariants",
    "PoolConfig",
    "PoolState",
    "PoolStats",
    "Deposit",
    "SaleVerification",
    "Premium",
    "Dispute",
    "DisputeState",
    "Transfer",
    "TransferRecord",
    "RecordingTransfer",
    "FailingTransfer",
]
