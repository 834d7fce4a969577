"""Premium pool ledger: deposits, sale verification, distribution, claims, disputes.

PremiumPool owns one PoolState and serializes every operation behind a
single re-entrant lock. Each mutating operation:

    1. checks its preconditions in order (first failure wins),
    2. performs the external transfer, if any,
    3. commits all state changes,
    4. emits one receipt onto the event trail,
    5. re-verifies ledger invariants.

A failed precondition or failed transfer returns Result.failure with no state
touched and nothing appended to the event trail.
"""
import copy
import functools
import threading
from dataclasses import replace

from ..config import features
from ..core.constants import (
    MAX_PENALTY_RATE,
    MAX_PREMIUM_RATE,
    PERCENT_DENOMINATOR,
    POOL_IDENTITY,
    TENANT_ID,
)
from ..core.receipt import emit_receipt
from .errors import ErrorKind, PoolError, Result, is_uint, require
from .invariants import verify_invariants
from .models import (
    Deposit,
    Dispute,
    DisputeState,
    Identity,
    PoolConfig,
    PoolState,
    PoolStats,
    Premium,
    SaleVerification,
)
from .transfer import RecordingTransfer, Transfer


def _operation(name: str):
    """Run a ledger operation under the lock and wrap its outcome in a Result."""
    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(self, caller: Identity, *args, **kwargs) -> Result:
            with self._lock:
                try:
                    value = fn(self, caller, *args, **kwargs)
                except PoolError as e:
                    self._reject(name, caller, e.kind)
                    return Result.failure(e.kind)
                verify_invariants(self._state, name)
                return Result.success(value)
        return wrapper
    return decorator


class PremiumPool:
    """Escrow ledger for commodity-sale premiums.

    Attributes:
        transfer: Value-transfer collaborator
        events: Receipts of every successful mutation, in commit order
        journaled: Count of events already written to a journal
        tenant_id: Tenant stamped on every receipt
    """

    def __init__(
        self,
        config: PoolConfig | None = None,
        transfer: Transfer | None = None,
        tenant_id: str = TENANT_ID,
    ):
        self._state = PoolState(config=replace(config) if config else PoolConfig())
        self._lock = threading.RLock()
        self.transfer = transfer if transfer is not None else RecordingTransfer()
        self.events: list[dict] = []
        self.journaled = 0
        self.tenant_id = tenant_id

    # ------------------------------------------------------------------
    # receipts
    # ------------------------------------------------------------------

    def _record(self, receipt_type: str, data: dict) -> dict:
        receipt = emit_receipt(receipt_type, {"tenant_id": self.tenant_id, **data})
        self.events.append(receipt)
        return receipt

    def _reject(self, operation: str, caller: Identity, kind: ErrorKind) -> None:
        emit_receipt("operation_rejected", {
            "tenant_id": self.tenant_id,
            "operation": operation,
            "caller": str(caller),
            "error": kind.label,
            "code": int(kind),
        })

    def _move(self, amount: int, sender: Identity, recipient: Identity) -> None:
        if not self.transfer(amount, sender, recipient):
            raise PoolError(ErrorKind.TRANSFER_FAILED)

    def _require_authority(self, caller: Identity) -> None:
        require(caller == self._state.config.authority, ErrorKind.NOT_AUTHORIZED)

    def _update_config(self, field: str, value) -> None:
        setattr(self._state.config, field, value)
        self._record("config-updated", {"field": field, "value": value})

    # ------------------------------------------------------------------
    # authority-only configuration
    # ------------------------------------------------------------------

    @_operation("configure_oracle")
    def configure_oracle(self, caller: Identity, new_oracle: Identity) -> bool:
        self._require_authority(caller)
        require(bool(new_oracle), ErrorKind.INVALID_RECIPIENT)
        self._update_config("oracle", new_oracle)
        return True

    @_operation("set_certification")
    def set_certification(self, caller: Identity, identity: Identity) -> bool:
        self._require_authority(caller)
        require(bool(identity), ErrorKind.INVALID_RECIPIENT)
        self._update_config("certification", identity)
        return True

    @_operation("set_tracker")
    def set_tracker(self, caller: Identity, identity: Identity) -> bool:
        self._require_authority(caller)
        require(bool(identity), ErrorKind.INVALID_RECIPIENT)
        self._update_config("tracker", identity)
        return True

    @_operation("set_resolver")
    def set_resolver(self, caller: Identity, identity: Identity) -> bool:
        self._require_authority(caller)
        require(bool(identity), ErrorKind.INVALID_RECIPIENT)
        self._update_config("resolver", identity)
        return True

    @_operation("set_authority")
    def set_authority(self, caller: Identity, new_authority: Identity) -> bool:
        self._require_authority(caller)
        require(bool(new_authority), ErrorKind.AUTHORITY_NOT_SET)
        self._update_config("authority", new_authority)
        return True

    @_operation("set_pool_active")
    def set_pool_active(self, caller: Identity, active: bool) -> bool:
        self._require_authority(caller)
        self._update_config("active", bool(active))
        return True

    @_operation("set_premium_rate")
    def set_premium_rate(self, caller: Identity, rate: int) -> bool:
        self._require_authority(caller)
        require(is_uint(rate) and 0 < rate <= MAX_PREMIUM_RATE, ErrorKind.INVALID_PREMIUM_RATE)
        self._update_config("premium_rate", rate)
        return True

    @_operation("set_distribution_period")
    def set_distribution_period(self, caller: Identity, period: int) -> bool:
        self._require_authority(caller)
        require(is_uint(period) and period > 0, ErrorKind.INVALID_DISTRIBUTION_PERIOD)
        self._update_config("distribution_period", period)
        return True

    @_operation("set_penalty_rate")
    def set_penalty_rate(self, caller: Identity, rate: int) -> bool:
        self._require_authority(caller)
        require(is_uint(rate) and rate <= MAX_PENALTY_RATE, ErrorKind.INVALID_PENALTY_RATE)
        self._update_config("penalty_rate", rate)
        return True

    @_operation("set_claim_threshold")
    def set_claim_threshold(self, caller: Identity, threshold: int) -> bool:
        self._require_authority(caller)
        require(is_uint(threshold) and threshold > 0, ErrorKind.INVALID_THRESHOLD)
        self._update_config("claim_threshold", threshold)
        return True

    @_operation("set_max_deposits")
    def set_max_deposits(self, caller: Identity, maximum: int) -> bool:
        self._require_authority(caller)
        require(is_uint(maximum) and maximum > 0, ErrorKind.INVALID_AMOUNT)
        self._update_config("max_deposits", maximum)
        return True

    # ------------------------------------------------------------------
    # core operations
    # ------------------------------------------------------------------

    @_operation("deposit")
    def deposit(self, caller: Identity, amount: int, current_time: int = 0) -> int:
        """Move `amount` from caller into the pool. Returns the amount."""
        state = self._state
        require(is_uint(amount) and amount > 0, ErrorKind.INVALID_AMOUNT)
        require(state.config.active, ErrorKind.POOL_NOT_ACTIVE)
        current = state.deposits.get(caller, Deposit())
        require(current.amount + amount <= state.config.max_deposits,
                ErrorKind.MAX_DEPOSITS_EXCEEDED)

        self._move(amount, caller, POOL_IDENTITY)

        state.deposits[caller] = Deposit(amount=current.amount + amount,
                                         timestamp=current_time)
        state.total_deposited += amount
        self._record("premium-deposited", {"depositor": caller, "amount": amount})
        return amount

    @_operation("verify_sale")
    def verify_sale(self, caller: Identity, sale_id: int, batch_id: int, price: int) -> bool:
        """Oracle attestation of a sale. Reusing sale_id overwrites."""
        state = self._state
        oracle = state.config.oracle
        require(oracle is not None and caller == oracle, ErrorKind.NOT_AUTHORIZED)
        require(is_uint(batch_id) and batch_id > 0, ErrorKind.INVALID_BATCH_ID)
        require(is_uint(price) and price > 0, ErrorKind.INVALID_ORACLE_DATA)
        require(is_uint(sale_id), ErrorKind.INVALID_ORACLE_DATA)

        state.sales[sale_id] = SaleVerification(batch_id=batch_id, price=price)
        self._record("sale-verified", {"sale_id": sale_id, "batch_id": batch_id})
        return True

    @_operation("calculate_and_distribute")
    def calculate_and_distribute(
        self,
        caller: Identity,
        farmer: Identity,
        batch_id: int,
        sale_id: int,
    ) -> int:
        """Credit farmer with premium_rate percent of the verified sale price.

        Any caller other than the farmer may trigger a distribution unless
        FEATURE_DISTRIBUTION_REQUIRES_ROLE is on.
        """
        state = self._state
        config = state.config
        verification = state.sales.get(sale_id) if is_uint(sale_id) else None
        require(verification is not None, ErrorKind.NO_ACTIVE_PREMIUM)
        require(farmer != caller, ErrorKind.NOT_AUTHORIZED)
        if features.FEATURE_DISTRIBUTION_REQUIRES_ROLE:
            require(caller in (config.oracle, config.authority), ErrorKind.NOT_AUTHORIZED)
        require(is_uint(batch_id) and batch_id > 0, ErrorKind.INVALID_BATCH_ID)
        require(verification.price > 0, ErrorKind.INVALID_ORACLE_DATA)
        require(verification.verified, ErrorKind.INVALID_STATUS)
        if features.FEATURE_SINGLE_USE_SALES:
            require(sale_id not in state.consumed_sales, ErrorKind.INVALID_STATUS)

        premium_amount = verification.price * config.premium_rate // PERCENT_DENOMINATOR
        require(state.total_deposited >= premium_amount, ErrorKind.INSUFFICIENT_BALANCE)

        premium_id = state.next_premium_id
        state.next_premium_id += 1
        state.premiums[premium_id] = Premium(
            farmer=farmer,
            amount=premium_amount,
            batch_id=batch_id,
            sale_id=sale_id,
        )
        state.balances[farmer] = state.balances.get(farmer, 0) + premium_amount
        state.total_distributed += premium_amount
        state.total_deposited -= premium_amount
        state.consumed_sales.add(sale_id)
        self._record("premium-distributed", {
            "farmer": farmer,
            "amount": premium_amount,
            "premium_id": premium_id,
        })
        return premium_amount

    @_operation("claim")
    def claim(self, caller: Identity, premium_id: int) -> int:
        """Pay a credited premium out of the pool to its farmer."""
        state = self._state
        premium = state.premiums.get(premium_id) if is_uint(premium_id) else None
        require(premium is not None, ErrorKind.NO_ACTIVE_PREMIUM)
        require(caller == premium.farmer, ErrorKind.NOT_AUTHORIZED)
        require(not premium.claimed, ErrorKind.PREMIUM_ALREADY_CLAIMED)
        if features.FEATURE_DISPUTE_BLOCKS_CLAIM:
            require(premium.dispute_state != DisputeState.OPEN,
                    ErrorKind.DISPUTE_IN_PROGRESS)
        balance = state.balances.get(premium.farmer, 0)
        require(balance >= premium.amount, ErrorKind.INSUFFICIENT_BALANCE)

        self._move(premium.amount, POOL_IDENTITY, caller)

        premium.claimed = True
        state.balances[premium.farmer] = balance - premium.amount
        self._record("premium-claimed", {
            "farmer": premium.farmer,
            "amount": premium.amount,
            "premium_id": premium_id,
        })
        return premium.amount

    @_operation("initiate_dispute")
    def initiate_dispute(self, caller: Identity, premium_id: int, reason: str) -> int:
        """Open a dispute against an unclaimed premium. Returns dispute_id."""
        state = self._state
        premium = state.premiums.get(premium_id) if is_uint(premium_id) else None
        require(premium is not None, ErrorKind.NO_ACTIVE_PREMIUM)
        require(caller == premium.farmer, ErrorKind.NOT_AUTHORIZED)
        require(not premium.claimed, ErrorKind.PREMIUM_ALREADY_CLAIMED)

        dispute_id = state.next_dispute_id
        state.next_dispute_id += 1
        state.disputes[dispute_id] = Dispute(
            initiator=caller,
            reason=reason,
            premium_id=premium_id,
        )
        premium.dispute_state = DisputeState.OPEN
        self._record("dispute-initiated", {
            "premium_id": premium_id,
            "dispute_id": dispute_id,
        })
        return dispute_id

    @_operation("resolve_dispute")
    def resolve_dispute(self, caller: Identity, dispute_id: int, resolve_in_favor: bool) -> bool:
        """Close a dispute. The outcome is recorded, no funds move."""
        state = self._state
        dispute = state.disputes.get(dispute_id) if is_uint(dispute_id) else None
        require(dispute is not None, ErrorKind.NO_ACTIVE_PREMIUM)
        self._require_authority(caller)
        require(not dispute.resolved, ErrorKind.INVALID_STATUS)

        dispute.resolved = True
        dispute.in_favor = bool(resolve_in_favor)

        premium = state.premiums.get(dispute.premium_id)
        # linear in the number of disputes
        still_open = any(
            d.premium_id == dispute.premium_id and not d.resolved
            for d in state.disputes.values()
        )
        if premium is not None and not still_open:
            premium.dispute_state = (DisputeState.RESOLVED_FAVOR if resolve_in_favor
                                     else DisputeState.RESOLVED_AGAINST)
        self._record("dispute-resolved", {
            "dispute_id": dispute_id,
            "in_favor": bool(resolve_in_favor),
        })
        return True

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def pool_stats(self) -> PoolStats:
        with self._lock:
            return PoolStats(
                active=self._state.config.active,
                total_deposited=self._state.total_deposited,
                total_distributed=self._state.total_distributed,
            )

    def farmer_balance(self, identity: Identity) -> int:
        with self._lock:
            return self._state.balances.get(identity, 0)

    def get_deposit(self, identity: Identity) -> Deposit | None:
        with self._lock:
            deposit = self._state.deposits.get(identity)
            return replace(deposit) if deposit else None

    def get_sale_verification(self, sale_id: int) -> SaleVerification | None:
        with self._lock:
            sale = self._state.sales.get(sale_id)
            return replace(sale) if sale else None

    def get_premium(self, premium_id: int) -> Premium | None:
        with self._lock:
            premium = self._state.premiums.get(premium_id)
            return replace(premium) if premium else None

    def get_dispute(self, dispute_id: int) -> Dispute | None:
        with self._lock:
            dispute = self._state.disputes.get(dispute_id)
            return replace(dispute) if dispute else None

    @property
    def config(self) -> PoolConfig:
        with self._lock:
            return replace(self._state.config)

    def events_since(self, index: int) -> list[dict]:
        with self._lock:
            return list(self.events[index:])

    def snapshot(self) -> PoolState:
        """Deep copy of the whole ledger state."""
        with self._lock:
            return copy.deepcopy(self._state)
