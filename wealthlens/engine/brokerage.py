"""Map brokerage holding rows into snapshot holdings.

Rows arrive already fetched (Kite-style keys: tradingsymbol, exchange,
quantity, average_price, last_price). Exchange-listed rows become equities;
rows whose symbol carries an "MF" marker become funds; anything else is
skipped.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Iterable

import structlog

from .constants import UNKNOWN_LABEL
from .models import EquityHolding, FundHolding
from .normalizer import clean_amount, clean_quantity, clean_text

log = structlog.get_logger()

EQUITY_EXCHANGES = {"NSE", "BSE"}


def holdings_from_brokerage(
    rows: Iterable[Mapping],
    sectors: Mapping[str, str] | None = None,
) -> tuple[tuple[EquityHolding, ...], tuple[FundHolding, ...]]:
    sectors = {k.upper(): v for k, v in (sectors or {}).items()}
    equities: list[EquityHolding] = []
    funds: list[FundHolding] = []
    skipped = 0
    for row in rows or []:
        if not isinstance(row, Mapping):
            skipped += 1
            continue
        symbol = clean_text(row.get("tradingsymbol") or row.get("symbol")).upper()
        if not symbol:
            skipped += 1
            continue
        exchange = clean_text(row.get("exchange")).upper()
        quantity = clean_amount(row.get("quantity"))
        average = clean_amount(row.get("average_price"))
        last = clean_amount(row.get("last_price"))
        if exchange in EQUITY_EXCHANGES:
            equities.append(EquityHolding(
                symbol=symbol,
                name=clean_text(row.get("name"), symbol),
                quantity=clean_quantity(quantity),
                average_cost=average,
                current_price=last,
                sector=sectors.get(symbol, UNKNOWN_LABEL),
            ))
        elif "MF" in symbol:
            funds.append(FundHolding(
                name=clean_text(row.get("fund") or row.get("name"), symbol),
                invested_amount=quantity * average,
                current_value=quantity * last,
                category=UNKNOWN_LABEL,
            ))
        else:
            skipped += 1
    log.info("brokerage_holdings_mapped", equities=len(equities), funds=len(funds), skipped=skipped)
    return tuple(equities), tuple(funds)
