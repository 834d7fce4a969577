"""Error taxonomy and discriminated results for ledger operations.

Every ledger operation returns a Result. Precondition checks raise PoolError
internally; the operation boundary turns it into Result.failure before any
state has been touched.
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from ..core import constants as c


class ErrorKind(IntEnum):
    """Error kinds with their stable numeric codes."""
    NOT_AUTHORIZED = c.ERR_NOT_AUTHORIZED
    INVALID_AMOUNT = c.ERR_INVALID_AMOUNT
    INVALID_PREMIUM_RATE = c.ERR_INVALID_PREMIUM_RATE
    INVALID_DISTRIBUTION_PERIOD = c.ERR_INVALID_DISTRIBUTION_PERIOD
    INSUFFICIENT_BALANCE = c.ERR_INSUFFICIENT_BALANCE
    PREMIUM_ALREADY_CLAIMED = c.ERR_PREMIUM_ALREADY_CLAIMED
    NO_ACTIVE_PREMIUM = c.ERR_NO_ACTIVE_PREMIUM
    INVALID_FARMER_ID = c.ERR_INVALID_FARMER_ID
    INVALID_BATCH_ID = c.ERR_INVALID_BATCH_ID
    INVALID_ORACLE_DATA = c.ERR_INVALID_ORACLE_DATA
    DISPUTE_IN_PROGRESS = c.ERR_DISPUTE_IN_PROGRESS
    INVALID_STATUS = c.ERR_INVALID_STATUS
    POOL_NOT_ACTIVE = c.ERR_POOL_NOT_ACTIVE
    INVALID_RECIPIENT = c.ERR_INVALID_RECIPIENT
    TRANSFER_FAILED = c.ERR_TRANSFER_FAILED
    INVALID_PENALTY_RATE = c.ERR_INVALID_PENALTY_RATE
    INVALID_THRESHOLD = c.ERR_INVALID_THRESHOLD
    MAX_DEPOSITS_EXCEEDED = c.ERR_MAX_DEPOSITS_EXCEEDED
    INVALID_CURRENCY = c.ERR_INVALID_CURRENCY
    AUTHORITY_NOT_SET = c.ERR_AUTHORITY_NOT_SET
    INVALID_TIMESTAMP = c.ERR_INVALID_TIMESTAMP

    @property
    def label(self) -> str:
        """CamelCase name, e.g. NotAuthorized."""
        return "".join(part.capitalize() for part in self.name.split("_"))


class PoolError(Exception):
    """A rejected ledger operation. Carries the ErrorKind."""

    def __init__(self, kind: ErrorKind):
        super().__init__(f"{kind.label} ({int(kind)})")
        self.kind = kind


@dataclass(frozen=True)
class Result:
    """Tagged outcome of a ledger operation.

    Attributes:
        ok: True on success
        value: Operation return value on success, None on failure
        error: ErrorKind on failure, None on success
    """
    ok: bool
    value: Any = None
    error: ErrorKind | None = None

    @classmethod
    def success(cls, value: Any) -> "Result":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, kind: ErrorKind) -> "Result":
        return cls(ok=False, error=kind)

    def unwrap(self) -> Any:
        """Return the value or raise PoolError for a failed result."""
        if not self.ok:
            raise PoolError(self.error)
        return self.value


def require(condition: bool, kind: ErrorKind) -> None:
    """Raise PoolError(kind) unless condition holds."""
    if not condition:
        raise PoolError(kind)


def is_uint(value: Any) -> bool:
    """True for a non-negative int. bool is not a quantity."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
