"""Per-symbol classification data the risk assessor reads.

The engine never fetches prices. Callers hand it a provider that already
knows each symbol's beta, market-cap class and fund star rating. When a value
is unknown the provider returns None and the engine uses a neutral default.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Protocol

import structlog

log = structlog.get_logger()

MARKET_CAP_CLASSES = ("large", "mid", "small")


class MarketDataProvider(Protocol):
    def beta(self, symbol: str) -> Optional[float]: ...

    def market_cap_class(self, symbol: str) -> Optional[str]: ...

    def fund_rating(self, name: str) -> Optional[int]: ...


class NeutralMarketData:
    """Knows nothing: beta 1.0 everywhere, no small caps, no low-rated funds."""

    def beta(self, symbol: str) -> Optional[float]:
        return None

    def market_cap_class(self, symbol: str) -> Optional[str]:
        return None

    def fund_rating(self, name: str) -> Optional[int]:
        return None


class StaticMarketData:
    """Table-backed provider. Symbols match case-insensitively, fund names exactly."""

    def __init__(
        self,
        betas: dict[str, float] | None = None,
        market_caps: dict[str, str] | None = None,
        fund_ratings: dict[str, int] | None = None,
    ):
        self._betas = {k.upper(): float(v) for k, v in (betas or {}).items()}
        self._caps = {
            k.upper(): str(v).lower()
            for k, v in (market_caps or {}).items()
            if str(v).lower() in MARKET_CAP_CLASSES
        }
        self._ratings = {k: int(v) for k, v in (fund_ratings or {}).items()}

    def beta(self, symbol: str) -> Optional[float]:
        return self._betas.get((symbol or "").upper())

    def market_cap_class(self, symbol: str) -> Optional[str]:
        return self._caps.get((symbol or "").upper())

    def fund_rating(self, name: str) -> Optional[int]:
        return self._ratings.get(name)

    @classmethod
    def from_dict(cls, payload: dict) -> "StaticMarketData":
        return cls(
            betas=payload.get("betas"),
            market_caps=payload.get("market_caps"),
            fund_ratings=payload.get("fund_ratings"),
        )

    @classmethod
    def from_json_file(cls, path: str | Path) -> "StaticMarketData":
        path = Path(path)
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        if not isinstance(payload, dict):
            raise ValueError(f"market data file {path} must hold a JSON object")
        provider = cls.from_dict(payload)
        log.info(
            "market_data_loaded",
            path=str(path),
            betas=len(provider._betas),
            market_caps=len(provider._caps),
            fund_ratings=len(provider._ratings),
        )
        return provider
