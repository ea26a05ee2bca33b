"""Quote comparison router — ranked comparison and dashboard summary per asset."""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.dependencies import get_comparison_service
from app.schemas.quote import ComparisonMetrics, ErrorCode, QuoteComparisonResponse, QuoteSummaryResponse
from app.services.quote_comparison_service import QuoteComparisonService, error_envelope
from app.services.quote_formatting import SORT_FIELDS, build_quote_display, sort_quotes

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_STATUS = {
    ErrorCode.NOT_FOUND.value: 404,
    ErrorCode.NO_QUOTES.value: 404,
    ErrorCode.API_ERROR.value: 502,
}


def _respond(envelope: dict) -> JSONResponse:
    if envelope["success"]:
        return JSONResponse(status_code=200, content=envelope)
    code = envelope["error"]["code"]
    return JSONResponse(status_code=ERROR_STATUS.get(code, 500), content=envelope)


@router.get(
    "/compare/{asset_id}",
    response_model=QuoteComparisonResponse,
    responses={404: {"model": QuoteComparisonResponse}, 502: {"model": QuoteComparisonResponse}},
)
async def get_quote_comparison(
    asset_id: str,
    include_display: bool = Query(False),
    sort_by: str | None = Query(None, pattern="^(" + "|".join(SORT_FIELDS) + ")$"),
    order: str = Query("asc", pattern="^(asc|desc)$"),
    service: QuoteComparisonService = Depends(get_comparison_service),
):
    """All quotes for an asset, ranked by cost, with comparison metrics."""
    envelope = await service.get_quote_comparison(asset_id)

    if envelope["success"] and (include_display or sort_by):
        data = envelope["data"]
        try:
            quotes = data["quotes"]
            if sort_by:
                quotes = sort_quotes(quotes, sort_by, order)
            if include_display:
                metrics = ComparisonMetrics(**data["comparison_metrics"])
                quotes = [{**q, "display": build_quote_display(q, metrics)} for q in quotes]
        except Exception as e:
            logger.error(f"Quote display formatting failed for asset {asset_id}: {e}")
            return _respond(error_envelope(
                ErrorCode.API_ERROR,
                "Failed to format quotes for display",
                details=str(e),
            ))
        data["quotes"] = quotes

    return _respond(envelope)


@router.get(
    "/compare/{asset_id}/summary",
    response_model=QuoteSummaryResponse,
    responses={404: {"model": QuoteSummaryResponse}, 502: {"model": QuoteSummaryResponse}},
)
async def get_quote_summary(
    asset_id: str,
    service: QuoteComparisonService = Depends(get_comparison_service),
):
    """Quick quote summary for dashboard display."""
    envelope = await service.get_quote_summary(asset_id)
    return _respond(envelope)
