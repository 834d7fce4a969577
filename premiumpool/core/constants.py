"""PremiumPool constants and defaults.

All magic numbers live here. No exceptions.
"""

# Receipt tenant
TENANT_ID = "premiumpool"

# Counterparty used for every pool-side transfer
POOL_IDENTITY = "contract"

# Pool configuration defaults
DEFAULT_AUTHORITY = "ST1TEST"
DEFAULT_PREMIUM_RATE = 10          # percent of verified sale price
DEFAULT_DISTRIBUTION_PERIOD = 144  # blocks, informational only
DEFAULT_PENALTY_RATE = 5           # percent, stored but not enforced
DEFAULT_CLAIM_THRESHOLD = 100      # stored but not enforced
DEFAULT_MAX_DEPOSITS = 1_000_000   # cumulative cap per depositor

# Rate bounds
PERCENT_DENOMINATOR = 100
MAX_PREMIUM_RATE = 100
MAX_PENALTY_RATE = 100

# Error codes
ERR_NOT_AUTHORIZED = 100
ERR_INVALID_AMOUNT = 101
ERR_INVALID_PREMIUM_RATE = 102
ERR_INVALID_DISTRIBUTION_PERIOD = 103
ERR_INSUFFICIENT_BALANCE = 104
ERR_PREMIUM_ALREADY_CLAIMED = 105
ERR_NO_ACTIVE_PREMIUM = 106
ERR_INVALID_FARMER_ID = 107
ERR_INVALID_BATCH_ID = 108
ERR_INVALID_ORACLE_DATA = 109
ERR_DISPUTE_IN_PROGRESS = 110
ERR_INVALID_STATUS = 111
ERR_POOL_NOT_ACTIVE = 112
ERR_INVALID_RECIPIENT = 113
ERR_TRANSFER_FAILED = 114
ERR_INVALID_PENALTY_RATE = 115
ERR_INVALID_THRESHOLD = 116
ERR_MAX_DEPOSITS_EXCEEDED = 117
ERR_INVALID_CURRENCY = 118
ERR_AUTHORITY_NOT_SET = 119
ERR_INVALID_TIMESTAMP = 120
