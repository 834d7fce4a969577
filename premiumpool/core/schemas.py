"""Receipt schema definitions and validation.

Constants:
    RECEIPT_SCHEMAS: Schema dicts keyed by receipt_type
    REQUIRED_FIELDS: Fields required in all receipts

Functions:
    validate_receipt: Validate receipt against schema
"""
from .receipt import StopRule


REQUIRED_FIELDS = ["receipt_type", "ts", "tenant_id", "payload_hash"]

_BASE = {
    "receipt_type": str,
    "ts": str,
    "tenant_id": str,
    "payload_hash": str,
}


RECEIPT_SCHEMAS = {
    "premium-deposited": {
        **_BASE,
        "depositor": str,
        "amount": int,
    },
    "sale-verified": {
        **_BASE,
        "sale_id": int,
        "batch_id": int,
    },
    "premium-distributed": {
        **_BASE,
        "farmer": str,
        "amount": int,
        "premium_id": int,
    },
    "premium-claimed": {
        **_BASE,
        "farmer": str,
        "amount": int,
        "premium_id": int,
    },
    "dispute-initiated": {
        **_BASE,
        "premium_id": int,
        "dispute_id": int,
    },
    "dispute-resolved": {
        **_BASE,
        "dispute_id": int,
        "in_favor": bool,
    },
    "config-updated": {
        **_BASE,
        "field": str,
        "value": (str, int, bool, type(None)),
    },
    "operation_rejected": {
        **_BASE,
        "operation": str,
        "caller": str,
        "error": str,
        "code": int,
    },
    "anchor": {
        **_BASE,
        "merkle_root": str,
        "hash_algos": list,
        "batch_size": int,
    },
    "anomaly": {
        **_BASE,
        "metric": str,
        "baseline": (int, float),
        "delta": (int, float),
        "classification": str,
        "action": str,
    },
}


def validate_receipt(receipt: dict) -> bool:
    """Validate receipt has required fields and matches schema.

    Args:
        receipt: Receipt dict to validate

    Returns:
        True if valid

    Raises:
        StopRule: If validation fails (missing field, wrong type or unknown
            receipt_type)
    """
    if not isinstance(receipt, dict):
        raise StopRule("Receipt must be a dict")

    for field in REQUIRED_FIELDS:
        if field not in receipt:
            raise StopRule(f"Missing required field: {field}")

    receipt_type = receipt["receipt_type"]
    if receipt_type not in RECEIPT_SCHEMAS:
        raise StopRule(f"Unknown receipt_type: {receipt_type}")

    for field, expected in RECEIPT_SCHEMAS[receipt_type].items():
        if field not in receipt:
            raise StopRule(f"Missing {receipt_type} field: {field}")
        if not isinstance(receipt[field], expected):
            raise StopRule(f"Field {field} has wrong type in {receipt_type}")

    return True
