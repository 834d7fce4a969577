"""Feature flags for PremiumPool.

All hardenings start DISABLED so the ledger behaves exactly as the core
rules describe. Enable one at a time:
1. DISPUTE_BLOCKS_CLAIM (open dispute freezes the premium)
2. DISTRIBUTION_REQUIRES_ROLE (only oracle or authority may distribute)
3. SINGLE_USE_SALES (a verified sale backs one distribution)

Flags are read at call time, so monkeypatching this module is enough.
"""

# Claim of a premium with an open dispute fails with DisputeInProgress
FEATURE_DISPUTE_BLOCKS_CLAIM = False

# calculate-and-distribute caller must be the oracle or the authority
FEATURE_DISTRIBUTION_REQUIRES_ROLE = False

# A sale verification can be consumed by one distribution only
FEATURE_SINGLE_USE_SALES = False
