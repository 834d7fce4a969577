"""Test configuration and fixtures for the premium pool.

Identities: fixed principals shared by every test module
Fixtures: pools in common starting states, temporary receipt journal
"""
import pytest

from premiumpool.journal import ReceiptStore
from premiumpool.pool import PremiumPool

AUTHORITY = "ST1TEST"
ORACLE = "ST2ORACLE"
FARMER = "ST3FARMER"
DEPOSITOR = "ST4DEPOSITOR"
OUTSIDER = "ST5FAKE"


@pytest.fixture
def pool() -> PremiumPool:
    """Fresh pool with default configuration."""
    return PremiumPool()


@pytest.fixture
def oracle_pool(pool: PremiumPool) -> PremiumPool:
    """Pool with ORACLE configured."""
    pool.configure_oracle(AUTHORITY, ORACLE).unwrap()
    return pool


@pytest.fixture
def funded_pool(oracle_pool: PremiumPool) -> PremiumPool:
    """1000 deposited by DEPOSITOR, sale 1 (batch 10, price 5000) verified."""
    oracle_pool.deposit(DEPOSITOR, 1000, current_time=1).unwrap()
    oracle_pool.verify_sale(ORACLE, 1, 10, 5000).unwrap()
    return oracle_pool


@pytest.fixture
def distributed_pool(funded_pool: PremiumPool) -> PremiumPool:
    """funded_pool with premium 1 (500) credited to FARMER."""
    funded_pool.calculate_and_distribute(DEPOSITOR, FARMER, 10, 1).unwrap()
    return funded_pool


@pytest.fixture
def tmp_store(tmp_path) -> ReceiptStore:
    """Temporary ReceiptStore under tmp_path."""
    return ReceiptStore(str(tmp_path / "receipts.jsonl"))


@pytest.fixture(autouse=True)
def default_features(monkeypatch):
    """Start every test with all hardening flags off.

    Flags are read at call time, so patching the module is enough.
    """
    import premiumpool.config.features as features
    monkeypatch.setattr(features, "FEATURE_DISPUTE_BLOCKS_CLAIM", False)
    monkeypatch.setattr(features, "FEATURE_DISTRIBUTION_REQUIRES_ROLE", False)
    monkeypatch.setattr(features, "FEATURE_SINGLE_USE_SALES", False)
