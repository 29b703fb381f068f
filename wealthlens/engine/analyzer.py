from __future__ import annotations

import time

import structlog

from ..insights.evaluator import synthesize
from ..insights.rebalancing import recommend_rebalancing
from ..utils import now_utc_iso
from .allocation import compute_asset_allocation, compute_sector_breakdown, external_value
from .market_data import MarketDataProvider, NeutralMarketData
from .models import AnalysisConfig, AnalysisReport, ComputedMetrics, RiskMetrics
from .normalizer import normalize
from .performance import compute_performance
from .planning import compute_liquidity_buffer, describe_liquidity, liquid_assets, monthly_expense_equivalent, plan_goal
from .risk import compute_beta, compute_quality_score, describe_market_comparison
from .tax import estimate_tax_insights

log = structlog.get_logger()


def analyze_portfolio(
    raw,
    config: AnalysisConfig | None = None,
    market_data: MarketDataProvider | None = None,
    generated_at: str | None = None,
) -> AnalysisReport:
    """Run the full analysis over one snapshot.

    raw may be a PortfolioSnapshot or a mapping in snapshot shape. The result
    depends only on the inputs; pass generated_at to make it reproducible.
    """
    started = time.monotonic()
    config = config or AnalysisConfig()
    market_data = market_data or NeutralMarketData()
    snapshot = normalize(raw)

    sectors = compute_sector_breakdown(snapshot.equity_holdings)
    allocation = compute_asset_allocation(
        snapshot.equity_holdings, snapshot.fund_holdings, snapshot.external_assets
    )
    performance = compute_performance(snapshot.equity_holdings, snapshot.fund_holdings, config)

    beta = compute_beta(snapshot.equity_holdings, market_data)
    risk = RiskMetrics(
        portfolio_beta=beta,
        market_comparison=describe_market_comparison(beta, config),
        quality_score=compute_quality_score(
            snapshot.fund_holdings, snapshot.equity_holdings, market_data, config
        ),
    )

    net_worth = performance.total_value + external_value(snapshot.external_assets)
    goal = plan_goal(snapshot, net_worth, config)
    buffer = compute_liquidity_buffer(
        snapshot.recurring_expenses,
        snapshot.future_expenses,
        months=config.emergency_fund_months,
        near_term_months=config.near_term_months,
    )
    liquidity = describe_liquidity(
        buffer,
        snapshot.external_assets,
        monthly_expense_equivalent(snapshot.recurring_expenses),
        config.emergency_fund_months,
    )

    tax = estimate_tax_insights(snapshot)

    metrics = ComputedMetrics(
        asset_allocation=allocation,
        sector_breakdown=sectors,
        performance_metrics=performance,
        risk_metrics=risk,
        goal_analysis=goal,
        tax_insights=tax,
        liquidity_buffer=buffer,
        liquid_assets=liquid_assets(snapshot.external_assets),
        user_profile=snapshot.user_profile,
    )
    insights = synthesize(metrics, config)
    rebalancing = recommend_rebalancing(allocation, sectors, config)

    report = AnalysisReport(
        generated_at=generated_at or now_utc_iso(),
        asset_allocation=allocation,
        sector_breakdown=sectors,
        performance_metrics=performance,
        risk_metrics=risk,
        goal_analysis=goal,
        tax_insights=tax,
        insights=insights,
        liquidity_analysis=liquidity,
        liquidity_buffer=buffer,
        rebalancing_recommendations=rebalancing,
    )
    log.info(
        "analysis_completed",
        total_value=performance.total_value,
        net_worth=net_worth,
        insights=len(insights),
        high_priority=sum(1 for i in insights if i.priority.value == "high"),
        elapsed_ms=round((time.monotonic() - started) * 1000, 2),
    )
    return report
