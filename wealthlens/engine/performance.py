from __future__ import annotations

from typing import Iterable

from .allocation import equity_value, fund_value
from .models import AnalysisConfig, EquityHolding, FundHolding, PerformanceMetrics


def _round(val: float, places: int = 2) -> float:
    return round(float(val), places)


def _safe_pct(numerator: float, denominator: float) -> float:
    if not denominator:
        return 0.0
    return numerator / denominator * 100.0


def cost_basis(equity_holdings: Iterable[EquityHolding], fund_holdings: Iterable[FundHolding]) -> float:
    return float(sum(h.cost_basis for h in equity_holdings) + sum(f.invested_amount for f in fund_holdings))


def compute_performance(
    equity_holdings: Iterable[EquityHolding],
    fund_holdings: Iterable[FundHolding],
    config: AnalysisConfig | None = None,
) -> PerformanceMetrics:
    """Totals and profit/loss over brokerage holdings.

    cagr, irr and sharpe_ratio are estimates scaled from the simple
    profit/loss percentage (see constants.py). Holdings carry no purchase
    dates, so nothing time-weighted can be derived here.
    """
    config = config or AnalysisConfig()
    equity_holdings = tuple(equity_holdings)
    fund_holdings = tuple(fund_holdings)
    total = equity_value(equity_holdings) + fund_value(fund_holdings)
    basis = cost_basis(equity_holdings, fund_holdings)
    pnl = total - basis
    pnl_pct = _safe_pct(pnl, basis)
    sharpe = pnl_pct / config.sharpe_divisor if config.sharpe_divisor else 0.0
    return PerformanceMetrics(
        total_value=total,
        profit_loss=pnl,
        profit_loss_percentage=_round(pnl_pct),
        cagr=_round(pnl_pct * config.cagr_scale),
        irr=_round(pnl_pct * config.irr_scale),
        sharpe_ratio=_round(sharpe),
    )
