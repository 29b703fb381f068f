"""Label <-> canonical enum tables for the storage and presentation boundary.

Collaborators store and display these concepts under several spellings
("Fixed Deposit", "FD", "National Pension Scheme", "medium" for moderate risk,
city names for tiers, "short_term" for timeframes). Everything past the
normalizer only sees the canonical enums from models.py.
"""
from __future__ import annotations

from enum import Enum
from typing import Type, TypeVar

from .models import (
    AssetType,
    CityTier,
    ExpenseType,
    Frequency,
    FuturePurpose,
    Priority,
    RiskTolerance,
)

E = TypeVar("E", bound=Enum)

ASSET_TYPE_LABELS = {
    AssetType.GOLD: "Gold",
    AssetType.FIXED_DEPOSIT: "Fixed Deposit",
    AssetType.REAL_ESTATE: "Real Estate",
    AssetType.BANK_DEPOSIT: "Bank Deposit",
    AssetType.PPF: "PPF",
    AssetType.EPF: "EPF",
    AssetType.NPS: "NPS",
    AssetType.BONDS: "Bonds",
    AssetType.OTHERS: "Others",
}

ASSET_TYPE_ALIASES = {
    "fd": AssetType.FIXED_DEPOSIT,
    "fixed deposit": AssetType.FIXED_DEPOSIT,
    "fixed deposits": AssetType.FIXED_DEPOSIT,
    "real estate": AssetType.REAL_ESTATE,
    "property": AssetType.REAL_ESTATE,
    "bank deposit": AssetType.BANK_DEPOSIT,
    "savings": AssetType.BANK_DEPOSIT,
    "national pension scheme": AssetType.NPS,
    "national pension system": AssetType.NPS,
    "sgb": AssetType.GOLD,
    "bond": AssetType.BONDS,
    "other": AssetType.OTHERS,
}

FREQUENCY_ALIASES = {
    "month": Frequency.MONTHLY,
    "quarter": Frequency.QUARTERLY,
    "annual": Frequency.YEARLY,
    "annually": Frequency.YEARLY,
    "year": Frequency.YEARLY,
    "once": Frequency.ONE_TIME,
    "one_time": Frequency.ONE_TIME,
    "onetime": Frequency.ONE_TIME,
}

EXPENSE_TYPE_ALIASES = {
    "loan": ExpenseType.LOAN_PAYMENT,
    "insurance": ExpenseType.INSURANCE_PREMIUM,
    "utilities": ExpenseType.UTILITY_BILLS,
    "fees": ExpenseType.SCHOOL_FEES,
    "other": ExpenseType.OTHERS,
}

PURPOSE_ALIASES = {
    "house": FuturePurpose.HOME,
    "home purchase": FuturePurpose.HOME,
    "car": FuturePurpose.VEHICLE,
    "travel": FuturePurpose.VACATION,
    "marriage": FuturePurpose.WEDDING,
    "medical": FuturePurpose.HEALTHCARE,
    "other": FuturePurpose.OTHERS,
}

RISK_TOLERANCE_ALIASES = {
    "low": RiskTolerance.CONSERVATIVE,
    "medium": RiskTolerance.MODERATE,
    "high": RiskTolerance.AGGRESSIVE,
}

CITY_ALIASES = {
    "mumbai": CityTier.METRO,
    "delhi": CityTier.METRO,
    "bangalore": CityTier.METRO,
    "bengaluru": CityTier.METRO,
    "hyderabad": CityTier.TIER1,
    "chennai": CityTier.TIER1,
    "kolkata": CityTier.TIER1,
    "pune": CityTier.TIER1,
    "ahmedabad": CityTier.TIER2,
    "jaipur": CityTier.TIER2,
    "lucknow": CityTier.TIER3,
    "other": CityTier.OVERSEAS,
}

# Stored future-expense horizons; values are years.
TIMEFRAME_BUCKETS = {
    "short_term": 1.0,
    "medium_term": 5.0,
    "long_term": 10.0,
}


def timeframe_bucket(years: float) -> str:
    """Storage bucket for a parsed horizon (inverse of TIMEFRAME_BUCKETS)."""
    if years <= 1.0:
        return "short_term"
    if years <= 5.0:
        return "medium_term"
    return "long_term"


def _key(value) -> str:
    return str(value).strip().lower().replace("-", " ").replace("_", " ")


def coerce_enum(enum_cls: Type[E], value, aliases: dict | None = None, fallback: E | None = None) -> E | None:
    """Map a raw label onto enum_cls. Matches values, member names and aliases, case-insensitively."""
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return fallback
    key = _key(value)
    for member in enum_cls:
        if key in (_key(member.value), _key(member.name)):
            return member
    for alias, member in (aliases or {}).items():
        if key == _key(alias):
            return member
    return fallback


def asset_type_label(asset_type: AssetType) -> str:
    return ASSET_TYPE_LABELS.get(asset_type, asset_type.value)


def to_asset_type(value) -> AssetType:
    return coerce_enum(AssetType, value, ASSET_TYPE_ALIASES, AssetType.OTHERS)


def to_frequency(value) -> Frequency:
    return coerce_enum(Frequency, value, FREQUENCY_ALIASES, Frequency.ONE_TIME)


def to_expense_type(value) -> ExpenseType:
    return coerce_enum(ExpenseType, value, EXPENSE_TYPE_ALIASES, ExpenseType.OTHERS)


def to_purpose(value) -> FuturePurpose:
    return coerce_enum(FuturePurpose, value, PURPOSE_ALIASES, FuturePurpose.OTHERS)


def to_priority(value) -> Priority:
    return coerce_enum(Priority, value, None, Priority.MEDIUM)


def to_risk_tolerance(value) -> RiskTolerance:
    return coerce_enum(RiskTolerance, value, RISK_TOLERANCE_ALIASES, RiskTolerance.MODERATE)


def to_city_tier(value) -> CityTier:
    return coerce_enum(CityTier, value, CITY_ALIASES, CityTier.OVERSEAS)


RISK_TOLERANCE_STORAGE = {member: word for word, member in RISK_TOLERANCE_ALIASES.items()}


def risk_tolerance_storage_label(risk_tolerance: RiskTolerance) -> str:
    """The low/medium/high word profile storage keeps for a risk tolerance."""
    return RISK_TOLERANCE_STORAGE[risk_tolerance]
