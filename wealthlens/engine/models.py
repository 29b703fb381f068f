from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from . import constants as C


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class AssetType(str, Enum):
    GOLD = "Gold"
    FIXED_DEPOSIT = "FixedDeposit"
    REAL_ESTATE = "RealEstate"
    BANK_DEPOSIT = "BankDeposit"
    PPF = "PPF"
    EPF = "EPF"
    NPS = "NPS"
    BONDS = "Bonds"
    OTHERS = "Others"


class ExpenseType(str, Enum):
    EMI = "EMI"
    RENT = "Rent"
    SCHOOL_FEES = "School Fees"
    LOAN_PAYMENT = "Loan Payment"
    INSURANCE_PREMIUM = "Insurance Premium"
    UTILITY_BILLS = "Utility Bills"
    MEDICAL = "Medical"
    OTHERS = "Others"


class Frequency(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    ONE_TIME = "one-time"


class FuturePurpose(str, Enum):
    HOME = "home"
    EDUCATION = "education"
    VEHICLE = "vehicle"
    VACATION = "vacation"
    WEDDING = "wedding"
    HEALTHCARE = "healthcare"
    OTHERS = "others"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskTolerance(str, Enum):
    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


class CityTier(str, Enum):
    METRO = "metro"
    TIER1 = "tier1"
    TIER2 = "tier2"
    TIER3 = "tier3"
    OVERSEAS = "overseas"


class InsightType(str, Enum):
    STRENGTH = "strength"
    WARNING = "warning"
    SUGGESTION = "suggestion"
    TAX = "tax"
    GOAL = "goal"
    VOLATILITY = "volatility"


class Timeframe(_Frozen):
    """A parsed horizon. Built once at the snapshot boundary."""

    unit: Literal["months", "years"]
    count: float

    @property
    def months(self) -> float:
        return self.count if self.unit == "months" else self.count * 12.0

    @property
    def years(self) -> float:
        return self.count if self.unit == "years" else self.count / 12.0


# --- snapshot ---------------------------------------------------------------

class EquityHolding(_Frozen):
    symbol: str
    name: str = ""
    quantity: int = Field(default=0, ge=0)
    average_cost: float = Field(default=0.0, ge=0)
    current_price: float = Field(default=0.0, ge=0)
    sector: str = "Unknown"

    @property
    def current_value(self) -> float:
        return self.quantity * self.current_price

    @property
    def cost_basis(self) -> float:
        return self.quantity * self.average_cost


class FundHolding(_Frozen):
    name: str
    invested_amount: float = Field(default=0.0, ge=0)
    current_value: float = Field(default=0.0, ge=0)
    category: str = "Unknown"


class ExternalAsset(_Frozen):
    name: str
    type: AssetType = AssetType.OTHERS
    amount: float = Field(default=0.0, ge=0)
    notes: Optional[str] = None


class RecurringExpense(_Frozen):
    name: str
    type: ExpenseType = ExpenseType.OTHERS
    amount: float = Field(default=0.0, ge=0)
    frequency: Frequency = Frequency.MONTHLY
    notes: Optional[str] = None


class FutureExpense(_Frozen):
    purpose: FuturePurpose = FuturePurpose.OTHERS
    amount: float = Field(default=0.0, ge=0)
    timeframe: Optional[Timeframe] = None
    priority: Priority = Priority.MEDIUM
    notes: Optional[str] = None


class UserProfile(_Frozen):
    age: int = 0
    city: CityTier = CityTier.OVERSEAS
    risk_tolerance: RiskTolerance = RiskTolerance.MODERATE
    financial_goals: frozenset[str] = frozenset()


class PortfolioSnapshot(_Frozen):
    equity_holdings: tuple[EquityHolding, ...] = ()
    fund_holdings: tuple[FundHolding, ...] = ()
    external_assets: tuple[ExternalAsset, ...] = ()
    recurring_expenses: tuple[RecurringExpense, ...] = ()
    future_expenses: tuple[FutureExpense, ...] = ()
    user_profile: Optional[UserProfile] = None


# --- report -----------------------------------------------------------------

class AllocationItem(_Frozen):
    type: str
    value: float
    percentage: float


class SectorItem(_Frozen):
    sector: str
    total_value: float
    percentage: float


class PerformanceMetrics(_Frozen):
    total_value: float
    profit_loss: float
    profit_loss_percentage: float
    cagr: float
    irr: float
    sharpe_ratio: float


class QualityScore(_Frozen):
    overall: float
    small_cap_exposure: float
    low_rated_funds: float


class RiskMetrics(_Frozen):
    portfolio_beta: float
    market_comparison: str
    quality_score: QualityScore


class GoalAnalysis(_Frozen):
    current_value: float
    target_value: float
    timeframe_years: float
    projected_value: float
    monthly_investment_needed: float
    shortfall: float


class TaxInsights(_Frozen):
    potential_savings: float
    suggestions: tuple[str, ...] = ()
    disclaimer: str = ""


class Insight(_Frozen):
    type: InsightType
    title: str
    description: str
    priority: Priority = Priority.MEDIUM
    actionable: bool = False


class AnalysisReport(_Frozen):
    generated_at: str
    asset_allocation: tuple[AllocationItem, ...]
    sector_breakdown: tuple[SectorItem, ...]
    performance_metrics: PerformanceMetrics
    risk_metrics: RiskMetrics
    goal_analysis: GoalAnalysis
    tax_insights: TaxInsights
    insights: tuple[Insight, ...]
    liquidity_analysis: str
    liquidity_buffer: float
    rebalancing_recommendations: tuple[str, ...]


# --- configuration ----------------------------------------------------------

class AnalysisConfig(_Frozen):
    """Thresholds and assumptions the engine reads. Defaults mirror constants.py."""

    assumed_annual_growth: float = Field(default=C.ASSUMED_ANNUAL_GROWTH, gt=-1.0)
    emergency_fund_months: int = C.EMERGENCY_FUND_MONTHS
    near_term_months: int = C.NEAR_TERM_MONTHS
    default_goal_horizon_years: float = C.DEFAULT_GOAL_HORIZON_YEARS
    sector_concentration_pct: float = C.SECTOR_CONCENTRATION_PCT
    equity_overweight_pct: float = C.EQUITY_OVERWEIGHT_PCT
    fund_underweight_pct: float = C.FUND_UNDERWEIGHT_PCT
    small_cap_exposure_pct: float = C.SMALL_CAP_EXPOSURE_PCT
    low_rated_funds_pct: float = C.LOW_RATED_FUNDS_PCT
    beta_high: float = C.BETA_HIGH
    beta_low: float = C.BETA_LOW
    tax_savings_notable: float = C.TAX_SAVINGS_NOTABLE
    cagr_scale: float = C.CAGR_SCALE
    irr_scale: float = C.IRR_SCALE
    sharpe_divisor: float = C.SHARPE_DIVISOR
    quality_small_cap_weight: float = C.QUALITY_SMALL_CAP_WEIGHT
    quality_low_rated_weight: float = C.QUALITY_LOW_RATED_WEIGHT
    low_rated_max_stars: int = C.LOW_RATED_MAX_STARS


class ComputedMetrics(_Frozen):
    """Everything the insight rules read, gathered before the report is assembled."""

    asset_allocation: tuple[AllocationItem, ...]
    sector_breakdown: tuple[SectorItem, ...]
    performance_metrics: PerformanceMetrics
    risk_metrics: RiskMetrics
    goal_analysis: GoalAnalysis
    tax_insights: TaxInsights
    liquidity_buffer: float
    liquid_assets: float
    user_profile: Optional[UserProfile] = None
