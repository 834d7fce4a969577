"""Ledger invariant checks.

check_invariants lists every broken invariant; verify_invariants emits an
anomaly receipt and raises StopRule when the list is non-empty.
"""
from ..core.receipt import StopRule, emit_receipt
from .models import PoolState


def check_invariants(state: PoolState) -> list[str]:
    """Return human-readable descriptions of every violated invariant.

    The conservation identities are recomputed from every deposit and premium
    on each call, so one check costs time linear in the ledger's history.

    Args:
        state: Ledger state to inspect

    Returns:
        Empty list when the state is consistent
    """
    violations = []

    if state.total_deposited < 0:
        violations.append(f"total_deposited negative: {state.total_deposited}")
    if state.total_distributed < 0:
        violations.append(f"total_distributed negative: {state.total_distributed}")

    for identity, balance in state.balances.items():
        if balance < 0:
            violations.append(f"balance of {identity} negative: {balance}")

    outstanding = sum(state.balances.values())
    if outstanding > state.total_distributed:
        violations.append(
            f"outstanding balances ({outstanding}) exceed "
            f"total_distributed ({state.total_distributed})"
        )

    deposited = sum(d.amount for d in state.deposits.values())
    if state.total_deposited != deposited - state.total_distributed:
        violations.append(
            f"pool drift: total_deposited {state.total_deposited} != "
            f"deposits {deposited} - distributed {state.total_distributed}"
        )

    claimed = sum(p.amount for p in state.premiums.values() if p.claimed)
    if outstanding != state.total_distributed - claimed:
        violations.append(
            f"balance drift: outstanding {outstanding} != "
            f"distributed {state.total_distributed} - claimed {claimed}"
        )

    return violations


def verify_invariants(state: PoolState, operation: str = "unknown") -> bool:
    """Verify ledger invariants after a mutation.

    Args:
        state: Ledger state to verify
        operation: Name of the operation that just committed

    Returns:
        True if invariants hold

    Raises:
        StopRule: If any invariant is violated
    """
    violations = check_invariants(state)
    if not violations:
        return True

    emit_receipt("anomaly", {
        "metric": "ledger_invariant",
        "baseline": 0,
        "delta": len(violations),
        "classification": "violation",
        "action": "halt",
        "operation": operation,
        "violations": violations,
    })
    raise StopRule(f"Invariant violation after {operation}: {violations[0]}")
