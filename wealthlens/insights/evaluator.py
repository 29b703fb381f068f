from __future__ import annotations

from typing import List

import structlog

from ..engine.allocation import allocation_pct
from ..engine.constants import (
    BETA_NEUTRAL,
    DIVERSIFIED_ASSET_CLASS_MIN,
    DIVERSIFIED_SECTOR_MIN,
    EQUITIES_LABEL,
    PARTIAL_DIVERSIFICATION_MIN,
)
from ..engine.models import (
    AnalysisConfig,
    ComputedMetrics,
    Insight,
    InsightType,
    Priority,
    RiskTolerance,
)
from ..utils import fmt_money, fmt_pct

log = structlog.get_logger()

_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


def _mk(kind: InsightType, priority: Priority, title: str, description: str, actionable: bool = False) -> Insight:
    return Insight(type=kind, title=title, description=description, priority=priority, actionable=actionable)


def order_insights(insights: List[Insight]) -> tuple[Insight, ...]:
    """High before medium before low; rule order within a priority."""
    return tuple(sorted(insights, key=lambda i: _PRIORITY_RANK[i.priority]))


def synthesize(metrics: ComputedMetrics, config: AnalysisConfig | None = None) -> tuple[Insight, ...]:
    config = config or AnalysisConfig()
    insights: List[Insight] = []
    sectors = metrics.sector_breakdown
    allocation = metrics.asset_allocation
    risk = metrics.risk_metrics
    quality = risk.quality_score
    goal = metrics.goal_analysis
    tax = metrics.tax_insights

    # 1) Sector concentration
    if sectors and sectors[0].percentage > config.sector_concentration_pct:
        top = sectors[0]
        insights.append(_mk(
            InsightType.WARNING,
            Priority.HIGH,
            "High Sector Concentration",
            f"{top.sector} makes up {fmt_pct(top.percentage)} of your equity holdings "
            f"(above {fmt_pct(config.sector_concentration_pct, 0)}). "
            "A downturn in one sector would hit a large part of the portfolio.",
            actionable=True,
        ))

    # 2) Volatility
    if risk.portfolio_beta > config.beta_high:
        insights.append(_mk(
            InsightType.VOLATILITY,
            Priority.MEDIUM,
            "Above-Market Volatility",
            f"Portfolio beta of {risk.portfolio_beta:.2f} means swings larger than the market. "
            "Blend in lower-beta holdings if drawdowns would be hard to sit through.",
        ))

    # 3) Goal shortfall
    if goal.shortfall > 0:
        insights.append(_mk(
            InsightType.GOAL,
            Priority.HIGH,
            "Goal Shortfall",
            f"Planned expenses of {fmt_money(goal.target_value)} over {goal.timeframe_years:g} years "
            f"exceed the projected {fmt_money(goal.projected_value)} by {fmt_money(goal.shortfall)}. "
            f"Investing about {fmt_money(goal.monthly_investment_needed)} a month closes the gap.",
            actionable=True,
        ))

    # 4) Quality
    if (
        quality.small_cap_exposure > config.small_cap_exposure_pct
        or quality.low_rated_funds > config.low_rated_funds_pct
    ):
        parts = []
        if quality.small_cap_exposure > config.small_cap_exposure_pct:
            parts.append(f"small caps are {fmt_pct(quality.small_cap_exposure)} of equities")
        if quality.low_rated_funds > config.low_rated_funds_pct:
            parts.append(f"low-rated funds are {fmt_pct(quality.low_rated_funds)} of fund value")
        insights.append(_mk(
            InsightType.WARNING,
            Priority.MEDIUM,
            "Portfolio Quality Concerns",
            f"Quality score {quality.overall:.0f}/100: " + " and ".join(parts) + ".",
            actionable=True,
        ))

    # 5) Tax opportunity
    if tax.potential_savings > config.tax_savings_notable:
        insights.append(_mk(
            InsightType.TAX,
            Priority.MEDIUM,
            "Tax Saving Opportunity",
            f"An estimated {fmt_money(tax.potential_savings)} could be saved in tax. "
            "See the tax suggestions for details.",
            actionable=True,
        ))

    # 6) Diversification strength
    n_sectors = len(sectors)
    n_classes = len(allocation)
    if n_sectors >= DIVERSIFIED_SECTOR_MIN and n_classes >= DIVERSIFIED_ASSET_CLASS_MIN:
        insights.append(_mk(
            InsightType.STRENGTH,
            Priority.MEDIUM,
            "Well Diversified",
            f"Holdings span {n_sectors} sectors and {n_classes} asset classes.",
        ))
    elif n_sectors >= PARTIAL_DIVERSIFICATION_MIN or n_classes >= PARTIAL_DIVERSIFICATION_MIN:
        insights.append(_mk(
            InsightType.STRENGTH,
            Priority.LOW,
            "Reasonable Diversification",
            f"Holdings span {n_sectors} sectors and {n_classes} asset classes.",
        ))

    # 7) Emergency fund gap
    if metrics.liquidity_buffer > 0 and metrics.liquid_assets < metrics.liquidity_buffer:
        gap = metrics.liquidity_buffer - metrics.liquid_assets
        insights.append(_mk(
            InsightType.SUGGESTION,
            Priority.MEDIUM,
            "Build Your Emergency Fund",
            f"Bank and fixed deposits of {fmt_money(metrics.liquid_assets)} fall {fmt_money(gap)} short "
            f"of the recommended {fmt_money(metrics.liquidity_buffer)} reserve.",
            actionable=True,
        ))

    # 8) Risk profile mismatch
    profile = metrics.user_profile
    equity_pct = allocation_pct(allocation, EQUITIES_LABEL)
    if profile is not None and profile.risk_tolerance == RiskTolerance.CONSERVATIVE and (
        equity_pct > config.equity_overweight_pct or risk.portfolio_beta > BETA_NEUTRAL
    ):
        insights.append(_mk(
            InsightType.SUGGESTION,
            Priority.LOW,
            "Risk Above Your Stated Tolerance",
            f"You describe yourself as conservative, but direct equities are {fmt_pct(equity_pct)} "
            f"of assets with a beta of {risk.portfolio_beta:.2f}.",
            actionable=True,
        ))

    ordered = order_insights(insights)
    log.debug("insights_synthesized", count=len(ordered), types=[i.type.value for i in ordered])
    return ordered
