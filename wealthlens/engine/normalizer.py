from __future__ import annotations

import math
import re
from collections.abc import Mapping

import structlog

from ..errors import InvalidInputError
from .constants import UNKNOWN_LABEL
from .mappings import (
    TIMEFRAME_BUCKETS,
    to_asset_type,
    to_city_tier,
    to_expense_type,
    to_frequency,
    to_priority,
    to_purpose,
    to_risk_tolerance,
)
from .models import (
    EquityHolding,
    ExternalAsset,
    FundHolding,
    FutureExpense,
    PortfolioSnapshot,
    RecurringExpense,
    Timeframe,
    UserProfile,
)

log = structlog.get_logger()

_TIMEFRAME_RE = re.compile(r"(?:(\d+(?:\.\d+)?)[\s-]*|\b)(months?|mos?|years?|yrs?)\b", re.IGNORECASE)

# Section keys accepted on input, canonical first. The dashboard stores
# "stocks", "mutualFunds", ... so those spellings are accepted too.
_SECTION_KEYS = {
    "equity_holdings": ("equityHoldings", "equity_holdings", "stocks"),
    "fund_holdings": ("fundHoldings", "fund_holdings", "mutualFunds", "mutual_funds"),
    "external_assets": ("externalAssets", "external_assets", "externalInvestments", "external_investments"),
    "recurring_expenses": ("recurringExpenses", "recurring_expenses", "expenses"),
    "future_expenses": ("futureExpenses", "future_expenses"),
    "user_profile": ("userProfile", "user_profile", "userInfo", "user_info"),
}


def _pick(row: Mapping, *keys, default=None):
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    return default


def _coerce_float(val):
    if val is None or isinstance(val, bool):
        return None
    try:
        out = float(val)
    except (TypeError, ValueError):
        return None
    return out if math.isfinite(out) else None


def clean_amount(val) -> float:
    """Non-negative finite float; anything else collapses to 0."""
    out = _coerce_float(val)
    if out is None or out < 0:
        return 0.0
    return out


def clean_quantity(val) -> int:
    return int(math.floor(clean_amount(val)))


def clean_text(val, default: str = "") -> str:
    if val is None:
        return default
    text = str(val).strip()
    return text or default


def _rows(section) -> list[Mapping]:
    if not isinstance(section, (list, tuple)):
        return []
    return [row for row in section if isinstance(row, Mapping)]


def parse_timeframe(raw) -> Timeframe | None:
    """Parse a free-text horizon ("6 months", "2 years", "short_term") once.

    Returns None when the text carries no month/year horizon; callers treat
    that as not near-term.
    """
    if raw is None:
        return None
    if isinstance(raw, Timeframe):
        return raw
    if isinstance(raw, Mapping):
        unit = clean_text(raw.get("unit")).lower()
        count = _coerce_float(raw.get("count"))
        if unit in ("months", "years") and count is not None and count >= 0:
            return Timeframe(unit=unit, count=count)
        return None
    text = clean_text(raw).lower()
    if not text:
        return None
    bucket = TIMEFRAME_BUCKETS.get(text.replace("-", "_").replace(" ", "_"))
    if bucket is not None:
        return Timeframe(unit="years", count=bucket)
    match = _TIMEFRAME_RE.search(text)
    if not match:
        return None
    count = float(match.group(1)) if match.group(1) else 1.0
    unit = "months" if match.group(2).lower().startswith("mo") else "years"
    return Timeframe(unit=unit, count=count)


def _equity(row: Mapping) -> EquityHolding:
    symbol = clean_text(_pick(row, "symbol", "tradingsymbol"))
    return EquityHolding(
        symbol=symbol,
        name=clean_text(_pick(row, "name"), symbol),
        quantity=clean_quantity(_pick(row, "quantity")),
        average_cost=clean_amount(_pick(row, "averageCost", "average_cost", "averagePrice", "average_price")),
        current_price=clean_amount(_pick(row, "currentPrice", "current_price", "last_price")),
        sector=clean_text(_pick(row, "sector"), UNKNOWN_LABEL),
    )


def _fund(row: Mapping) -> FundHolding:
    return FundHolding(
        name=clean_text(_pick(row, "name")),
        invested_amount=clean_amount(_pick(row, "investedAmount", "invested_amount")),
        current_value=clean_amount(_pick(row, "currentValue", "current_value")),
        category=clean_text(_pick(row, "category"), UNKNOWN_LABEL),
    )


def _external(row: Mapping) -> ExternalAsset:
    return ExternalAsset(
        name=clean_text(_pick(row, "name", "investment_name")),
        type=to_asset_type(_pick(row, "type", "investment_type")),
        amount=clean_amount(_pick(row, "amount")),
        notes=clean_text(_pick(row, "notes")) or None,
    )


def _recurring(row: Mapping) -> RecurringExpense:
    return RecurringExpense(
        name=clean_text(_pick(row, "name", "description")),
        type=to_expense_type(_pick(row, "type", "expense_type")),
        amount=clean_amount(_pick(row, "amount")),
        frequency=to_frequency(_pick(row, "frequency")),
        notes=clean_text(_pick(row, "notes")) or None,
    )


def _future(row: Mapping) -> FutureExpense:
    return FutureExpense(
        purpose=to_purpose(_pick(row, "purpose")),
        amount=clean_amount(_pick(row, "amount")),
        timeframe=parse_timeframe(_pick(row, "timeframe")),
        priority=to_priority(_pick(row, "priority")),
        notes=clean_text(_pick(row, "notes")) or None,
    )


def _profile(row) -> UserProfile | None:
    if not isinstance(row, Mapping):
        return None
    goals = _pick(row, "financialGoals", "financial_goals", default=())
    if isinstance(goals, str):
        goals = [goals]
    elif not isinstance(goals, (list, tuple, set, frozenset)):
        goals = ()
    age = _coerce_float(_pick(row, "age"))
    return UserProfile(
        age=int(age) if age is not None and age > 0 else 0,
        city=to_city_tier(_pick(row, "city")),
        risk_tolerance=to_risk_tolerance(_pick(row, "riskTolerance", "risk_tolerance")),
        financial_goals=frozenset(clean_text(g) for g in goals if clean_text(g)),
    )


def normalize(raw) -> PortfolioSnapshot:
    """Validate and default a raw snapshot mapping into a PortfolioSnapshot.

    Only an absent (or non-mapping) snapshot is an error. Missing sections
    become empty, unknown labels fall back to their "Others"-style member and
    bad numbers are clamped to 0.
    """
    if raw is None:
        raise InvalidInputError("snapshot is required")
    if isinstance(raw, PortfolioSnapshot):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidInputError(f"snapshot must be a mapping, got {type(raw).__name__}")

    sections = {name: _pick(raw, *keys) for name, keys in _SECTION_KEYS.items()}
    snapshot = PortfolioSnapshot(
        equity_holdings=tuple(_equity(r) for r in _rows(sections["equity_holdings"])),
        fund_holdings=tuple(_fund(r) for r in _rows(sections["fund_holdings"])),
        external_assets=tuple(_external(r) for r in _rows(sections["external_assets"])),
        recurring_expenses=tuple(_recurring(r) for r in _rows(sections["recurring_expenses"])),
        future_expenses=tuple(_future(r) for r in _rows(sections["future_expenses"])),
        user_profile=_profile(sections["user_profile"]),
    )
    log.debug(
        "snapshot_normalized",
        equities=len(snapshot.equity_holdings),
        funds=len(snapshot.fund_holdings),
        external=len(snapshot.external_assets),
        recurring=len(snapshot.recurring_expenses),
        future=len(snapshot.future_expenses),
        has_profile=snapshot.user_profile is not None,
    )
    return snapshot
