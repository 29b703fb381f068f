from __future__ import annotations

from typing import Iterable, List

from ..engine.allocation import allocation_pct
from ..engine.constants import EQUITIES_LABEL, FUNDS_LABEL
from ..engine.models import AllocationItem, AnalysisConfig, SectorItem
from ..utils import fmt_pct

BALANCED_MESSAGE = (
    "Your portfolio is well-balanced across the tracked thresholds. "
    "Review it and rebalance periodically, for example once a year."
)


def recommend_rebalancing(
    asset_allocation: Iterable[AllocationItem],
    sector_breakdown: Iterable[SectorItem],
    config: AnalysisConfig | None = None,
) -> tuple[str, ...]:
    """Threshold rules over the allocation. Never empty."""
    config = config or AnalysisConfig()
    allocation = tuple(asset_allocation)
    sectors = tuple(sector_breakdown)
    if not allocation:
        return (BALANCED_MESSAGE,)

    out: List[str] = []
    for item in sectors:
        if item.percentage > config.sector_concentration_pct:
            out.append(
                f"Trim {item.sector} from {fmt_pct(item.percentage)} of equities toward "
                f"{fmt_pct(config.sector_concentration_pct, 0)} or less."
            )

    equity_pct = allocation_pct(allocation, EQUITIES_LABEL)
    if equity_pct > config.equity_overweight_pct:
        out.append(
            f"Direct equities are {fmt_pct(equity_pct)} of total assets. Consider moving part of it "
            f"into diversified funds or debt to stay under {fmt_pct(config.equity_overweight_pct, 0)}."
        )

    fund_pct = allocation_pct(allocation, FUNDS_LABEL)
    if fund_pct < config.fund_underweight_pct:
        out.append(
            f"Mutual funds are only {fmt_pct(fund_pct)} of total assets. Raising them to at least "
            f"{fmt_pct(config.fund_underweight_pct, 0)} adds professionally managed diversification."
        )

    return tuple(out) if out else (BALANCED_MESSAGE,)
