from __future__ import annotations

from typing import Iterable

from .allocation import equity_value, fund_value
from .constants import BETA_NEUTRAL
from .market_data import MarketDataProvider, NeutralMarketData
from .models import AnalysisConfig, EquityHolding, FundHolding, QualityScore


def _clamp(val: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, val))


def compute_beta(
    equity_holdings: Iterable[EquityHolding],
    market_data: MarketDataProvider | None = None,
) -> float:
    """Value-weighted average of per-symbol betas; 1.0 for an empty or zero-valued book."""
    market_data = market_data or NeutralMarketData()
    equity_holdings = tuple(equity_holdings)
    total = equity_value(equity_holdings)
    if total <= 0:
        return BETA_NEUTRAL
    weighted = 0.0
    for h in equity_holdings:
        beta = market_data.beta(h.symbol)
        if beta is None:
            beta = BETA_NEUTRAL
        weighted += beta * (h.current_value / total)
    return round(weighted, 4)


def describe_market_comparison(beta: float, config: AnalysisConfig | None = None) -> str:
    config = config or AnalysisConfig()
    if beta > config.beta_high:
        return f"Higher volatility than the market (beta {beta:.2f})"
    if beta < config.beta_low:
        return f"Lower volatility than the market (beta {beta:.2f})"
    return f"In line with market volatility (beta {beta:.2f})"


def small_cap_exposure(equity_holdings: Iterable[EquityHolding], market_data: MarketDataProvider) -> float:
    equity_holdings = tuple(equity_holdings)
    total = equity_value(equity_holdings)
    if total <= 0:
        return 0.0
    small = sum(h.current_value for h in equity_holdings if market_data.market_cap_class(h.symbol) == "small")
    return small / total * 100.0


def low_rated_fund_exposure(
    fund_holdings: Iterable[FundHolding],
    market_data: MarketDataProvider,
    max_stars: int,
) -> float:
    fund_holdings = tuple(fund_holdings)
    total = fund_value(fund_holdings)
    if total <= 0:
        return 0.0
    low = 0.0
    for f in fund_holdings:
        rating = market_data.fund_rating(f.name)
        if rating is not None and rating <= max_stars:
            low += f.current_value
    return low / total * 100.0


def compute_quality_score(
    fund_holdings: Iterable[FundHolding],
    equity_holdings: Iterable[EquityHolding],
    market_data: MarketDataProvider | None = None,
    config: AnalysisConfig | None = None,
) -> QualityScore:
    """Exposure to small caps and low-rated funds, folded into a 0-100 score.

    overall = 100 - small_cap_weight * small_cap% - low_rated_weight * low_rated%
    Holdings without classification data count as neither.
    """
    market_data = market_data or NeutralMarketData()
    config = config or AnalysisConfig()
    small = small_cap_exposure(equity_holdings, market_data)
    low = low_rated_fund_exposure(fund_holdings, market_data, config.low_rated_max_stars)
    overall = 100.0 - config.quality_small_cap_weight * small - config.quality_low_rated_weight * low
    return QualityScore(
        overall=round(_clamp(overall, 0.0, 100.0), 2),
        small_cap_exposure=round(small, 2),
        low_rated_funds=round(low, 2),
    )
