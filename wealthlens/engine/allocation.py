from __future__ import annotations

from typing import Iterable

import pandas as pd

from .constants import EQUITIES_LABEL, FUNDS_LABEL
from .mappings import asset_type_label
from .models import AllocationItem, EquityHolding, ExternalAsset, FundHolding, SectorItem


def _ranked_shares(values: pd.Series) -> pd.Series:
    """Percent of total per label, largest first; ties keep first-seen order."""
    total = float(values.sum())
    if total <= 0:
        return pd.Series(dtype=float)
    pct = values / total * 100.0
    return pct.sort_values(ascending=False, kind="mergesort")


def equity_value(equity_holdings: Iterable[EquityHolding]) -> float:
    return float(sum(h.current_value for h in equity_holdings))


def fund_value(fund_holdings: Iterable[FundHolding]) -> float:
    return float(sum(f.current_value for f in fund_holdings))


def external_value(external_assets: Iterable[ExternalAsset]) -> float:
    return float(sum(a.amount for a in external_assets))


def compute_sector_breakdown(equity_holdings: Iterable[EquityHolding]) -> tuple[SectorItem, ...]:
    """Equity value per sector. Sector labels are grouped verbatim (case-sensitive)."""
    rows = [(h.sector, h.current_value) for h in equity_holdings]
    if not rows:
        return ()
    frame = pd.DataFrame(rows, columns=["sector", "value"])
    totals = frame.groupby("sector", sort=False)["value"].sum()
    shares = _ranked_shares(totals)
    return tuple(
        SectorItem(sector=str(sector), total_value=float(totals[sector]), percentage=float(pct))
        for sector, pct in shares.items()
    )


def compute_asset_allocation(
    equity_holdings: Iterable[EquityHolding],
    fund_holdings: Iterable[FundHolding],
    external_assets: Iterable[ExternalAsset],
) -> tuple[AllocationItem, ...]:
    """Value and share of the grand total for equities, funds and each external asset type.

    Classes holding no value are left out, so an empty portfolio yields an
    empty allocation instead of a row of zero percentages.
    """
    labels = [EQUITIES_LABEL, FUNDS_LABEL]
    values = [equity_value(equity_holdings), fund_value(fund_holdings)]
    external = list(external_assets)
    if external:
        frame = pd.DataFrame(
            [(asset_type_label(a.type), a.amount) for a in external],
            columns=["type", "amount"],
        )
        by_type = frame.groupby("type", sort=False)["amount"].sum()
        labels.extend(str(t) for t in by_type.index)
        values.extend(float(v) for v in by_type.values)
    series = pd.Series(values, index=labels, dtype=float)
    series = series[series > 0]
    shares = _ranked_shares(series)
    return tuple(
        AllocationItem(type=str(label), value=float(series[label]), percentage=float(pct))
        for label, pct in shares.items()
    )


def allocation_pct(allocation: Iterable[AllocationItem], label: str) -> float:
    for item in allocation:
        if item.type == label:
            return item.percentage
    return 0.0
