"""Pool commands: run (replay a scenario), defaults."""
import contextlib
import io
import json
import sys
import time
from dataclasses import asdict

import click

from premiumpool.core.receipt import merkle
from premiumpool.journal import ReceiptStore, journal_events
from premiumpool.pool import PoolConfig, PremiumPool

from .output import error_box, print_json, success_box, table

# scenario op name -> PremiumPool method
OPS = {
    "deposit": "deposit",
    "verify_sale": "verify_sale",
    "distribute": "calculate_and_distribute",
    "claim": "claim",
    "initiate_dispute": "initiate_dispute",
    "resolve_dispute": "resolve_dispute",
    "configure_oracle": "configure_oracle",
    "set_certification": "set_certification",
    "set_tracker": "set_tracker",
    "set_resolver": "set_resolver",
    "set_authority": "set_authority",
    "set_pool_active": "set_pool_active",
    "set_premium_rate": "set_premium_rate",
    "set_distribution_period": "set_distribution_period",
    "set_penalty_rate": "set_penalty_rate",
    "set_claim_threshold": "set_claim_threshold",
    "set_max_deposits": "set_max_deposits",
}


class ScenarioError(ValueError):
    """A scenario line that cannot be replayed."""


def load_scenario(path: str) -> list[dict]:
    """Read JSONL scenario steps, skipping blank lines."""
    steps = []
    with open(path) as f:
        for number, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                steps.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise ScenarioError(f"line {number}: invalid JSON ({e.msg})") from e
    return steps


def replay(pool: PremiumPool, steps: list[dict]) -> list[dict]:
    """Apply each step to pool in order.

    Rejections are ordinary results; only malformed steps raise.

    Args:
        pool: Ledger to drive
        steps: Dicts with "op", "caller" and the operation's keyword args

    Returns:
        One result dict per step: step, op, caller, ok, value, error

    Raises:
        ScenarioError: Unknown op, missing caller, or bad arguments
    """
    results = []
    for index, step in enumerate(steps, start=1):
        args = dict(step)
        op = args.pop("op", None)
        if op not in OPS:
            raise ScenarioError(f"step {index}: unknown op {op!r}")
        if "caller" not in args:
            raise ScenarioError(f"step {index}: missing caller")
        caller = args.pop("caller")

        method = getattr(pool, OPS[op])
        try:
            result = method(caller, **args)
        except TypeError as e:
            raise ScenarioError(f"step {index}: bad arguments for {op} ({e})") from e

        results.append({
            "step": index,
            "op": op,
            "caller": caller,
            "ok": result.ok,
            "value": result.value,
            "error": result.error.label if result.error is not None else None,
        })
    return results


def _load_config(path: str | None) -> PoolConfig | None:
    if path is None:
        return None
    with open(path) as f:
        return PoolConfig(**json.load(f))


@click.command()
@click.argument('scenario', type=click.Path(exists=True))
@click.option('--config', 'config_path', type=click.Path(exists=True),
              help='PoolConfig overrides as JSON')
@click.option('--journal', type=click.Path(), help='Append event receipts to JSONL journal')
@click.option('--json', 'as_json', is_flag=True, help='Print results as JSON')
@click.option('--receipts', is_flag=True, help='Echo emitted receipts after the results')
def run(scenario: str, config_path: str | None, journal: str | None, as_json: bool, receipts: bool):
    """Replay a JSONL scenario against a fresh pool."""
    t0 = time.perf_counter()
    emitted = io.StringIO()
    try:
        ledger = PremiumPool(config=_load_config(config_path))
        with contextlib.redirect_stdout(emitted):
            results = replay(ledger, load_scenario(scenario))
            if journal:
                journal_events(ledger, ReceiptStore(journal))
    except (ValueError, TypeError, OSError) as e:
        error_box("Pool Run: FAILED", str(e))
        sys.exit(2)

    stats = ledger.pool_stats()
    root = merkle(ledger.events)
    elapsed_ms = int((time.perf_counter() - t0) * 1000)

    if as_json:
        print_json({
            "results": results,
            "stats": asdict(stats),
            "events": len(ledger.events),
            "merkle_root": root,
        })
    else:
        table(
            ["#", "op", "caller", "result"],
            [[str(r["step"]), r["op"], str(r["caller"]),
              f"ok {r['value']}" if r["ok"] else f"err {r['error']}"]
             for r in results],
        )
        rejected = sum(1 for r in results if not r["ok"])
        success_box("Pool Run: COMPLETE", [
            ("Steps", str(len(results))),
            ("Rejected", str(rejected)),
            ("Deposited", str(stats.total_deposited)),
            ("Distributed", str(stats.total_distributed)),
            ("Events", str(len(ledger.events))),
            ("Root", root[:32]),
            ("Duration", f"{elapsed_ms}ms"),
        ], "pool run --journal receipts.jsonl" if not journal else None)

    if receipts:
        click.echo(emitted.getvalue(), nl=False)
    sys.exit(0)


@click.command()
def defaults():
    """Print the default pool configuration."""
    print_json(PoolConfig().to_dict())
