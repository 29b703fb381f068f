from __future__ import annotations

from ..utils import fmt_money
from .constants import (
    ASSUMED_TAX_SLAB,
    LOSS_HARVEST_RATE,
    SECTION_80C_LIMIT,
    SECTION_80CCD_1B_LIMIT,
)
from .models import AssetType, PortfolioSnapshot, TaxInsights

TAX_DISCLAIMER = (
    "Estimated figures from simple rules of thumb (assumed 30% slab, 20% short-term gains rate). "
    "Not tax advice; confirm with a tax professional."
)


def harvestable_losses(snapshot: PortfolioSnapshot) -> float:
    """Unrealized losses across equities and funds."""
    equity = sum(max(0.0, h.cost_basis - h.current_value) for h in snapshot.equity_holdings)
    funds = sum(max(0.0, f.invested_amount - f.current_value) for f in snapshot.fund_holdings)
    return float(equity + funds)


def _has_elss(snapshot: PortfolioSnapshot) -> bool:
    return any(
        "elss" in f.category.lower() or "elss" in f.name.lower() or "tax saver" in f.name.lower()
        for f in snapshot.fund_holdings
    )


def _has_asset(snapshot: PortfolioSnapshot, *types: AssetType) -> bool:
    return any(a.type in types and a.amount > 0 for a in snapshot.external_assets)


def _holds_assets(snapshot: PortfolioSnapshot) -> bool:
    return (
        any(h.current_value > 0 for h in snapshot.equity_holdings)
        or any(f.current_value > 0 for f in snapshot.fund_holdings)
        or any(a.amount > 0 for a in snapshot.external_assets)
    )


def estimate_tax_insights(snapshot: PortfolioSnapshot) -> TaxInsights:
    """Rough savings estimate and templated suggestions.

    Three components, each only counted when it applies:
      - booking unrealized losses against gains (losses x 20%)
      - an unused Section 80C bucket when no ELSS, PPF or EPF is held
      - the extra 80CCD(1B) NPS deduction when no NPS is held
    The two deduction components need something invested to be meaningful,
    so a snapshot holding no value gets neither.
    """
    savings = 0.0
    invested = _holds_assets(snapshot)
    suggestions: list[str] = []

    losses = harvestable_losses(snapshot)
    if losses > 0:
        harvest = losses * LOSS_HARVEST_RATE
        savings += harvest
        suggestions.append(
            f"Book unrealized losses of {fmt_money(losses)} to offset gains "
            f"(up to {fmt_money(harvest)} in tax)."
        )

    if invested and not _has_elss(snapshot) and not _has_asset(snapshot, AssetType.PPF, AssetType.EPF):
        gap = SECTION_80C_LIMIT * ASSUMED_TAX_SLAB
        savings += gap
        suggestions.append(
            f"Use the Section 80C limit of {fmt_money(SECTION_80C_LIMIT)} through ELSS funds or PPF "
            f"(about {fmt_money(gap)} saved at a 30% slab)."
        )

    if invested and not _has_asset(snapshot, AssetType.NPS):
        nps = SECTION_80CCD_1B_LIMIT * ASSUMED_TAX_SLAB
        savings += nps
        suggestions.append(
            f"An NPS contribution of {fmt_money(SECTION_80CCD_1B_LIMIT)} qualifies for the extra "
            f"80CCD(1B) deduction (about {fmt_money(nps)} saved)."
        )

    if snapshot.equity_holdings or snapshot.fund_holdings:
        suggestions.append("Hold equity positions past one year so gains are taxed at long-term rates.")

    return TaxInsights(
        potential_savings=round(savings, 2),
        suggestions=tuple(suggestions),
        disclaimer=TAX_DISCLAIMER,
    )
