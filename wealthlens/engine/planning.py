from __future__ import annotations

from typing import Iterable

from ..utils import fmt_money
from .models import (
    AnalysisConfig,
    AssetType,
    ExternalAsset,
    Frequency,
    FutureExpense,
    GoalAnalysis,
    PortfolioSnapshot,
    RecurringExpense,
)

# Months covered by one payment at each frequency; one-time spends are not recurring.
_MONTHS_PER_PAYMENT = {
    Frequency.MONTHLY: 1.0,
    Frequency.QUARTERLY: 3.0,
    Frequency.YEARLY: 12.0,
}

LIQUID_ASSET_TYPES = (AssetType.BANK_DEPOSIT, AssetType.FIXED_DEPOSIT)


def project_goal(
    current_value: float,
    target_value: float,
    timeframe_years: float,
    assumed_annual_growth: float,
) -> GoalAnalysis:
    """Compound current_value forward and size the gap to target_value.

    A horizon of zero or less is not an error: nothing compounds and the
    monthly figure is 0, leaving the whole gap in shortfall. Growth below
    -100% is treated as a total loss.
    """
    current_value = max(0.0, float(current_value))
    target_value = max(0.0, float(target_value))
    years = float(timeframe_years)
    growth_factor = max(0.0, 1.0 + float(assumed_annual_growth))
    if years > 0:
        projected = current_value * growth_factor ** years
    else:
        projected = current_value
    shortfall = max(0.0, target_value - projected)
    monthly = shortfall / (years * 12.0) if years > 0 else 0.0
    return GoalAnalysis(
        current_value=round(current_value, 2),
        target_value=round(target_value, 2),
        timeframe_years=round(max(0.0, years), 2),
        projected_value=round(projected, 2),
        monthly_investment_needed=round(monthly, 2),
        shortfall=round(shortfall, 2),
    )


def goal_horizon_years(future_expenses: Iterable[FutureExpense], default_years: float) -> float:
    """Longest parsed horizon across planned expenses."""
    horizons = [e.timeframe.years for e in future_expenses if e.timeframe is not None]
    return max(horizons) if horizons else default_years


def plan_goal(snapshot: PortfolioSnapshot, current_value: float, config: AnalysisConfig) -> GoalAnalysis:
    target = sum(e.amount for e in snapshot.future_expenses)
    years = goal_horizon_years(snapshot.future_expenses, config.default_goal_horizon_years)
    return project_goal(current_value, target, years, config.assumed_annual_growth)


def monthly_expense_equivalent(recurring_expenses: Iterable[RecurringExpense]) -> float:
    total = 0.0
    for e in recurring_expenses:
        months = _MONTHS_PER_PAYMENT.get(e.frequency)
        if months is None:
            continue
        total += e.amount / months
    return total


def near_term_outflows(future_expenses: Iterable[FutureExpense], near_term_months: int) -> float:
    """Planned expenses due within near_term_months. Unparsed horizons are not near-term."""
    return float(
        sum(
            e.amount
            for e in future_expenses
            if e.timeframe is not None and e.timeframe.months <= near_term_months
        )
    )


def compute_liquidity_buffer(
    recurring_expenses: Iterable[RecurringExpense],
    future_expenses: Iterable[FutureExpense],
    months: int = 6,
    near_term_months: int = 12,
) -> float:
    """months x monthly-equivalent expenses, less near-term planned outflows, floored at 0."""
    monthly = monthly_expense_equivalent(recurring_expenses)
    buffer = monthly * months - near_term_outflows(future_expenses, near_term_months)
    return round(max(0.0, buffer), 2)


def liquid_assets(external_assets: Iterable[ExternalAsset]) -> float:
    return float(sum(a.amount for a in external_assets if a.type in LIQUID_ASSET_TYPES))


def describe_liquidity(
    buffer: float,
    external_assets: Iterable[ExternalAsset],
    monthly_expenses: float,
    months: int,
) -> str:
    liquid = liquid_assets(external_assets)
    if buffer <= 0 and monthly_expenses <= 0:
        return (
            "No recurring expenses recorded, so no emergency reserve could be sized. "
            f"Bank and fixed deposits currently hold {fmt_money(liquid)}."
        )
    head = (
        f"Recommended emergency reserve: {fmt_money(buffer)} "
        f"({months} months of expenses, net of planned outflows within a year)."
    )
    covered = liquid / monthly_expenses if monthly_expenses > 0 else 0.0
    if liquid >= buffer:
        return (
            f"{head} Bank and fixed deposits of {fmt_money(liquid)} cover it "
            f"(about {covered:.1f} months of expenses)."
        )
    return (
        f"{head} Bank and fixed deposits hold {fmt_money(liquid)}, "
        f"{fmt_money(buffer - liquid)} short of the target. "
        "Build the gap in liquid instruments before adding market risk."
    )
