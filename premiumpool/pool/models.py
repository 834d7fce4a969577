"""Ledger records: pool configuration, deposits, sales, premiums, disputes.

Records are mutable dataclasses owned by PoolState. Callers outside the
ledger only ever see copies (see PremiumPool query methods).
"""
from dataclasses import asdict, dataclass, field
from enum import Enum

from ..core.constants import (
    DEFAULT_AUTHORITY,
    DEFAULT_CLAIM_THRESHOLD,
    DEFAULT_DISTRIBUTION_PERIOD,
    DEFAULT_MAX_DEPOSITS,
    DEFAULT_PENALTY_RATE,
    DEFAULT_PREMIUM_RATE,
)
from .errors import is_uint

Identity = str


class DisputeState(str, Enum):
    """Dispute lifecycle as seen from the contested premium."""
    NONE = "none"
    OPEN = "open"
    RESOLVED_FAVOR = "resolved_favor"
    RESOLVED_AGAINST = "resolved_against"


@dataclass
class PoolConfig:
    """Singleton pool configuration, mutated only by the authority.

    distribution_period, penalty_rate and claim_threshold are stored and
    settable but no operation enforces them.
    """
    active: bool = True
    premium_rate: int = DEFAULT_PREMIUM_RATE
    distribution_period: int = DEFAULT_DISTRIBUTION_PERIOD
    penalty_rate: int = DEFAULT_PENALTY_RATE
    claim_threshold: int = DEFAULT_CLAIM_THRESHOLD
    max_deposits: int = DEFAULT_MAX_DEPOSITS
    authority: Identity = DEFAULT_AUTHORITY
    oracle: Identity | None = None
    certification: Identity | None = None
    tracker: Identity | None = None
    resolver: Identity | None = None

    def __post_init__(self):
        for name in ("premium_rate", "distribution_period", "penalty_rate",
                     "claim_threshold", "max_deposits"):
            if not is_uint(getattr(self, name)):
                raise ValueError(f"{name} must be a non-negative integer")

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Deposit:
    """Cumulative deposit of one identity."""
    amount: int = 0
    timestamp: int = 0


@dataclass
class SaleVerification:
    """Oracle attestation of a sale."""
    batch_id: int
    price: int
    verified: bool = True


@dataclass
class Premium:
    """Premium credited to a farmer from a verified sale."""
    farmer: Identity
    amount: int
    batch_id: int
    sale_id: int
    claimed: bool = False
    dispute_state: DisputeState = DisputeState.NONE


@dataclass
class Dispute:
    """Farmer-raised contest against an unclaimed premium."""
    initiator: Identity
    reason: str
    premium_id: int
    resolved: bool = False
    in_favor: bool | None = None


@dataclass(frozen=True)
class PoolStats:
    """Snapshot returned by pool_stats()."""
    active: bool
    total_deposited: int
    total_distributed: int


@dataclass
class PoolState:
    """The single owned aggregate behind a PremiumPool."""
    config: PoolConfig = field(default_factory=PoolConfig)
    total_deposited: int = 0
    total_distributed: int = 0
    deposits: dict[Identity, Deposit] = field(default_factory=dict)
    sales: dict[int, SaleVerification] = field(default_factory=dict)
    premiums: dict[int, Premium] = field(default_factory=dict)
    balances: dict[Identity, int] = field(default_factory=dict)
    disputes: dict[int, Dispute] = field(default_factory=dict)
    consumed_sales: set[int] = field(default_factory=set)
    next_premium_id: int = 1
    next_dispute_id: int = 1
