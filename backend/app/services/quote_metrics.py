"""Cost metrics calculator — ranks an asset's quotes by cost and computes comparison metrics."""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from app.config import settings
from app.schemas.quote import ComparisonMetrics


class InvalidQuoteCost(ValueError):
    """Raised when a quote carries a missing, non-numeric or negative cost."""

    def __init__(self, quote_id, cost):
        self.quote_id = quote_id
        self.cost = cost
        super().__init__(f"Quote {quote_id} has invalid cost: {cost!r}")


@dataclass(frozen=True)
class NoQuotesAvailable:
    message: str = "No quotes available for comparison"


@dataclass
class CostComparison:
    quotes: list[dict]
    metrics: ComparisonMetrics
    # Ranked copies in the caller's arrival order, same objects as ``quotes``
    by_arrival: list[dict] = field(default_factory=list)


def quote_cost(quote: dict) -> float:
    """Return a quote's cost as a float, rejecting malformed values."""
    cost = quote.get("cost")
    if isinstance(cost, bool) or not isinstance(cost, (int, float, Decimal)):
        raise InvalidQuoteCost(quote.get("id"), cost)
    value = float(cost)
    if not math.isfinite(value) or value < 0:
        raise InvalidQuoteCost(quote.get("id"), cost)
    return value


def filter_comparable_quotes(
    quotes: Iterable[dict], statuses: Iterable[str] | None = None
) -> list[dict]:
    """Keep quotes whose status takes part in comparison (drops Pending by default)."""
    allowed = set(statuses if statuses is not None else settings.comparison_status_list)
    return [q for q in quotes if q.get("status") in allowed]


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def percentage_of_lowest(cost: float, lowest_cost: float) -> int | None:
    """
    Cost as a whole percentage of the lowest cost.

    With a zero lowest cost the ratio is undefined: zero-cost quotes
    report 100 and every other quote reports None.
    """
    if lowest_cost == 0:
        return 100 if cost == 0 else None
    return round_half_up(cost / lowest_cost * 100)


def compare_quote_costs(quotes: list[dict]) -> CostComparison | NoQuotesAvailable:
    """
    Rank quotes by cost and compute comparison metrics.

    Equal costs keep their arrival order, so repeated calls on the same
    input produce the same ranks. Returned quotes are new dicts in rank
    order; the input is not modified.
    """
    if not quotes:
        return NoQuotesAvailable()

    costs = [quote_cost(q) for q in quotes]

    lowest = highest = costs[0]
    for cost in costs[1:]:
        if cost < lowest:
            lowest = cost
        elif cost > highest:
            highest = cost

    # fsum keeps the mean inside [lowest, highest] for repeated values
    average = min(max(math.fsum(costs) / len(costs), lowest), highest)

    order = sorted(range(len(quotes)), key=lambda i: costs[i])
    ranked: list[dict | None] = [None] * len(quotes)
    for rank, index in enumerate(order, start=1):
        ranked[index] = {
            **quotes[index],
            "cost_rank": rank,
            "cost_percentage_of_lowest": percentage_of_lowest(costs[index], lowest),
        }

    metrics = ComparisonMetrics(
        lowest_cost=lowest,
        highest_cost=highest,
        average_cost=average,
        quote_count=len(quotes),
        cost_range=highest - lowest,
    )

    return CostComparison(
        quotes=[ranked[i] for i in order],
        metrics=metrics,
        by_arrival=ranked,
    )
