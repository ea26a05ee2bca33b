"""Quote comparison service — loads an asset's quotes and wraps the computed results in response envelopes."""

import logging
import uuid
from collections.abc import Iterable

from app.config import settings
from app.schemas.quote import ErrorCode
from app.services.quote_metrics import NoQuotesAvailable, compare_quote_costs, filter_comparable_quotes
from app.services.quote_store import QuoteStore
from app.services.quote_summary import summarize_quotes

logger = logging.getLogger(__name__)


def error_envelope(code: ErrorCode, message: str, details: str | None = None) -> dict:
    error = {"code": code.value, "message": message}
    if details:
        error["details"] = details
    return {"success": False, "error": error}


def parse_asset_id(asset_id: str | uuid.UUID) -> uuid.UUID:
    if isinstance(asset_id, uuid.UUID):
        return asset_id
    return uuid.UUID(str(asset_id))


class QuoteComparisonService:
    """
    Builds quote comparison and summary envelopes for one asset.

    Every failure is returned as ``{"success": False, "error": {...}}``;
    nothing raised by the store or the calculators escapes these methods.
    """

    def __init__(self, store: QuoteStore, statuses: Iterable[str] | None = None):
        self.store = store
        self.statuses = list(statuses) if statuses is not None else settings.comparison_status_list

    async def get_quote_comparison(self, asset_id: str | uuid.UUID) -> dict:
        """Ranked quotes plus comparison metrics. Requires at least one quote."""
        try:
            asset_uuid = parse_asset_id(asset_id)
        except ValueError:
            return error_envelope(ErrorCode.NOT_FOUND, "Asset ID must be a valid UUID")

        try:
            asset = await self.store.get_asset(asset_uuid)
            if asset is None:
                logger.info(f"Quote comparison: asset {asset_uuid} not found")
                return error_envelope(ErrorCode.NOT_FOUND, "Asset not found")

            quotes = await self.store.list_quotes(asset_uuid, self.statuses)
            quotes = filter_comparable_quotes(quotes, self.statuses)
            comparison = compare_quote_costs(quotes)
        except Exception as e:
            logger.error(f"Quote comparison failed for asset {asset_uuid}: {e}")
            return error_envelope(
                ErrorCode.API_ERROR,
                "An unexpected error occurred during quote comparison",
                details=str(e),
            )

        if isinstance(comparison, NoQuotesAvailable):
            logger.info(f"Quote comparison: no quotes for asset {asset_uuid}")
            return error_envelope(ErrorCode.NO_QUOTES, comparison.message)

        return {
            "success": True,
            "data": {
                "asset": asset,
                "quotes": comparison.quotes,
                "comparison_metrics": comparison.metrics.model_dump(),
            },
            "message": f"Found {comparison.metrics.quote_count} quotes for comparison",
        }

    async def get_quote_summary(self, asset_id: str | uuid.UUID) -> dict:
        """Dashboard summary. Succeeds with zero quotes."""
        try:
            asset_uuid = parse_asset_id(asset_id)
        except ValueError:
            return error_envelope(ErrorCode.NOT_FOUND, "Asset ID must be a valid UUID")

        try:
            quotes = await self.store.list_quotes(asset_uuid, self.statuses)
            summary = summarize_quotes(filter_comparable_quotes(quotes, self.statuses))
        except Exception as e:
            logger.error(f"Quote summary failed for asset {asset_uuid}: {e}")
            return error_envelope(
                ErrorCode.API_ERROR,
                "An unexpected error occurred",
                details=str(e),
            )

        return {"success": True, "data": summary.model_dump()}
