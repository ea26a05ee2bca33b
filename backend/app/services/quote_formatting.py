"""Display formatting for quotes — cost breakdowns, response times, validity and status styles."""

import math
from datetime import datetime, timedelta, timezone

from app.schemas.quote import ComparisonMetrics

BREAKDOWN_SEPARATOR = " • "
BREAKDOWN_LABELS = (
    ("labor", "Labor"),
    ("materials", "Materials"),
    ("equipment", "Equipment"),
    ("other", "Other"),
)

MS_PER_DAY = 1000 * 60 * 60 * 24

STATUS_STYLES = {
    "Accepted": "bg-green-100 text-green-800",
    "Rejected": "bg-red-100 text-red-800",
    "Submitted": "bg-blue-100 text-blue-800",
}
DEFAULT_STATUS_STYLE = "bg-gray-100 text-gray-800"

SORT_FIELDS = ("cost", "response_time", "validity")


def format_currency(amount: float | None) -> str:
    if amount is None:
        return "N/A"
    return f"${amount:.2f}"


def format_cost_breakdown(breakdown: dict | None) -> str:
    """Join the non-zero breakdown components, e.g. 'Labor: $1200.00 • Other: $50.00'."""
    if not breakdown:
        return ""
    parts = []
    for key, label in BREAKDOWN_LABELS:
        value = breakdown.get(key) or 0
        if value > 0:
            parts.append(f"{label}: {format_currency(float(value))}")
    return BREAKDOWN_SEPARATOR.join(parts)


def format_response_time(hours: int | None) -> str:
    if hours is None:
        return "N/A"
    if hours < 24:
        return f"{hours}h"
    days, remaining = divmod(hours, 24)
    return f"{days}d {remaining}h" if remaining > 0 else f"{days}d"


def _parse_timestamp(value: datetime | str) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def days_until(valid_until: datetime | str, now: datetime | None = None) -> int:
    """Whole days remaining, rounded up from the millisecond difference."""
    valid = _parse_timestamp(valid_until)
    current = _parse_timestamp(now) if now is not None else datetime.now(timezone.utc)
    diff_ms = (valid - current) / timedelta(milliseconds=1)
    return math.ceil(diff_ms / MS_PER_DAY)


def format_validity_period(valid_until: datetime | str | None, now: datetime | None = None) -> str:
    """
    Relative validity label for a quote.

    Anything less than a full day in the past still rounds up to 0 and
    reads as 'Expires today'; a day or more in the past is 'Expired'.
    """
    if valid_until is None:
        return "No expiry"
    days = days_until(valid_until, now)
    if days < 0:
        return "Expired"
    if days == 0:
        return "Expires today"
    if days == 1:
        return "Expires tomorrow"
    return f"{days} days left"


def get_status_style(status: str | None) -> str:
    return STATUS_STYLES.get(status, DEFAULT_STATUS_STYLE)


def get_cost_position(cost: float, metrics: ComparisonMetrics) -> str:
    """Place a cost against the comparison extremes: lowest, highest or middle."""
    if cost == metrics.lowest_cost:
        return "lowest"
    if cost == metrics.highest_cost:
        return "highest"
    return "middle"


def _sort_value(quote: dict, sort_by: str):
    if sort_by == "response_time":
        return quote.get("response_time_hours")
    if sort_by == "validity":
        valid_until = quote.get("valid_until")
        return _parse_timestamp(valid_until) if valid_until is not None else None
    return quote.get("cost")


def sort_quotes(quotes: list[dict], sort_by: str = "cost", order: str = "asc") -> list[dict]:
    """
    Re-order quotes for display without touching their ranks.

    Unknown sort fields fall back to cost. Quotes missing the sort value
    are placed last in either direction.
    """
    if order not in ("asc", "desc"):
        raise ValueError(f"Unknown sort order: {order}")
    if sort_by not in SORT_FIELDS:
        sort_by = "cost"

    present = [q for q in quotes if _sort_value(q, sort_by) is not None]
    missing = [q for q in quotes if _sort_value(q, sort_by) is None]
    present.sort(key=lambda q: _sort_value(q, sort_by), reverse=(order == "desc"))
    return present + missing


def format_vs_lowest(percentage: int | None) -> str:
    """'+41% vs lowest' for a quote above the lowest cost, else an empty string."""
    if percentage is None or percentage <= 100:
        return ""
    return f"+{percentage - 100}% vs lowest"


def build_quote_display(quote: dict, metrics: ComparisonMetrics, now: datetime | None = None) -> dict:
    """All display strings for one ranked quote."""
    cost = float(quote["cost"])
    rank = quote.get("cost_rank")
    return {
        "rank": f"#{rank}" if rank is not None else "",
        "vs_lowest": format_vs_lowest(quote.get("cost_percentage_of_lowest")),
        "cost": format_currency(cost),
        "cost_breakdown": format_cost_breakdown(quote.get("cost_breakdown")),
        "response_time": format_response_time(quote.get("response_time_hours")),
        "validity": format_validity_period(quote.get("valid_until"), now),
        "status_style": get_status_style(quote.get("status")),
        "cost_position": get_cost_position(cost, metrics),
    }
