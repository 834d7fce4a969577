"""Core subpackage for PremiumPool receipt primitives.

Exports all from receipt.py, schemas.py, and constants.py.
"""
from .receipt import dual_hash, emit_receipt, merkle, StopRule
from .schemas import RECEIPT_SCHEMAS, REQUIRED_FIELDS, validate_receipt
from .constants import (
    TENANT_ID,
    POOL_IDENTITY,
    DEFAULT_AUTHORITY,
    DEFAULT_PREMIUM_RATE,
    DEFAULT_DISTRIBUTION_PERIOD,
    DEFAULT_PENALTY_RATE,
    DEFAULT_CLAIM_THRESHOLD,
    DEFAULT_MAX_DEPOSITS,
)

__all__ = [
    # Receipt primitives
    "dual_hash",
    "emit_receipt",
    "merkle",
    "StopRule",
    # Schemas
    "RECEIPT_SCHEMAS",
    "REQUIRED_FIELDS",
    "validate_receipt",
    # Constants
    "TENANT_ID",
    "POOL_IDENTITY",
    "DEFAULT_AUTHORITY",
    "DEFAULT_PREMIUM_RATE",
    "DEFAULT_DISTRIBUTION_PERIOD",
    "DEFAULT_PENALTY_RATE",
    "DEFAULT_CLAIM_THRESHOLD",
    "DEFAULT_MAX_DEPOSITS",
]
