from __future__ import annotations

# Thresholds and knobs (unit: percent unless noted)
SECTOR_CONCENTRATION_PCT = 30.0
EQUITY_OVERWEIGHT_PCT = 60.0
FUND_UNDERWEIGHT_PCT = 20.0
SMALL_CAP_EXPOSURE_PCT = 30.0
LOW_RATED_FUNDS_PCT = 20.0

BETA_HIGH = 1.2
BETA_LOW = 0.8
BETA_NEUTRAL = 1.0                   # per-symbol default without market data

TAX_SAVINGS_NOTABLE = 10000.0        # rupees

# Goal & liquidity
ASSUMED_ANNUAL_GROWTH = 0.12         # fraction, not percent
EMERGENCY_FUND_MONTHS = 6
NEAR_TERM_MONTHS = 12
DEFAULT_GOAL_HORIZON_YEARS = 5.0     # used when no future expense has a parsable timeframe

# Performance approximations. No dated cash flows exist, so these are
# scalings of the simple profit/loss percentage, not time-weighted returns.
CAGR_SCALE = 0.8
IRR_SCALE = 0.9
SHARPE_DIVISOR = 15.0

# Quality score weights: overall = 100 - w_small * small_cap% - w_low * low_rated%
QUALITY_SMALL_CAP_WEIGHT = 0.6
QUALITY_LOW_RATED_WEIGHT = 0.4
LOW_RATED_MAX_STARS = 2

# Diversification baselines
DIVERSIFIED_SECTOR_MIN = 5
DIVERSIFIED_ASSET_CLASS_MIN = 3
PARTIAL_DIVERSIFICATION_MIN = 3

# Tax estimate placeholders (Indian rules of thumb, not tax advice)
LOSS_HARVEST_RATE = 0.20
ASSUMED_TAX_SLAB = 0.30
SECTION_80C_LIMIT = 150000.0
SECTION_80CCD_1B_LIMIT = 50000.0

# History
HISTORY_MAX_REPORTS = 10
HISTORY_MAX_USERS = 1000

EQUITIES_LABEL = "Equities"
FUNDS_LABEL = "Mutual Funds"
UNKNOWN_LABEL = "Unknown"
