"""Summary aggregator — compact quote statistics for dashboard badges."""

import math
from collections import Counter

from app.schemas.quote import QuoteSummary
from app.services.quote_metrics import quote_cost


def summarize_quotes(quotes: list[dict]) -> QuoteSummary:
    """Summarize an asset's quotes. An empty list yields an all-zero summary."""
    if not quotes:
        return QuoteSummary()

    costs = [quote_cost(q) for q in quotes]
    lowest = min(costs)
    highest = max(costs)
    average = min(max(math.fsum(costs) / len(costs), lowest), highest)

    status_counts = Counter(q.get("status") or "Unknown" for q in quotes)

    return QuoteSummary(
        quote_count=len(quotes),
        lowest_cost=lowest,
        highest_cost=highest,
        average_cost=average,
        status_counts=dict(status_counts),
        has_multiple_quotes=len(quotes) > 1,
    )
