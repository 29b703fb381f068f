from datetime import datetime, timezone


def now_utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def fmt_money(x) -> str:
    try:
        return f"₹{float(x):,.0f}"
    except (TypeError, ValueError):
        return "—"


def fmt_pct(x, precision: int = 1) -> str:
    try:
        return f"{float(x):.{precision}f}%"
    except (TypeError, ValueError):
        return "—"
