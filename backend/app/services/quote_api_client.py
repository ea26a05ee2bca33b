"""Quote comparison API client — fetches comparison and summary envelopes over HTTP."""

import logging

import httpx
from pydantic import BaseModel

from app.config import settings
from app.schemas.quote import ErrorCode, QuoteComparisonResponse, QuoteSummaryResponse
from app.services.quote_comparison_service import error_envelope

logger = logging.getLogger(__name__)

# Error codes a caller renders as distinct empty states; passed through as-is
DOMAIN_ERROR_CODES = {ErrorCode.NOT_FOUND.value, ErrorCode.NO_QUOTES.value}


class QuoteComparisonClient:
    """
    Client for the quote comparison endpoints.

    Fails closed: a missing base URL, a transport failure or a bad
    response comes back as an API_ERROR envelope instead of raising.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        url = base_url if base_url is not None else settings.quote_api_base_url
        self.base_url = (url or "").rstrip("/")
        self.timeout = timeout if timeout is not None else settings.quote_api_timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={"Content-Type": "application/json"},
            )
        return self._client

    async def close(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_quote_comparison(self, asset_id: str) -> dict:
        """GET /api/quotes/compare/{asset_id}"""
        return await self._fetch(
            f"/api/quotes/compare/{asset_id}", QuoteComparisonResponse, "Quote comparison"
        )

    async def get_quote_summary(self, asset_id: str) -> dict:
        """GET /api/quotes/compare/{asset_id}/summary"""
        return await self._fetch(
            f"/api/quotes/compare/{asset_id}/summary", QuoteSummaryResponse, "Quote summary"
        )

    async def _fetch(self, path: str, schema: type[BaseModel], label: str) -> dict:
        if not self.base_url:
            logger.error(f"{label} skipped: quote API base URL not configured")
            return error_envelope(
                ErrorCode.API_ERROR,
                "Quote API URL not configured",
                details="Set QUOTE_API_BASE_URL to the comparison service URL",
            )

        try:
            client = await self._get_client()
            resp = await client.get(path)
        except Exception as e:
            logger.error(f"{label} request failed: {e}")
            return error_envelope(ErrorCode.API_ERROR, f"{label} request failed", details=str(e) or repr(e))

        decode_error = None
        try:
            data = resp.json()
        except ValueError as e:
            data = None
            decode_error = str(e) or repr(e)

        if not resp.is_success:
            error = data.get("error") if isinstance(data, dict) else None
            if isinstance(error, dict) and error.get("code") in DOMAIN_ERROR_CODES:
                return data
            fallback = f"HTTP {resp.status_code}: {resp.reason_phrase}"
            message = error.get("message") if isinstance(error, dict) and error.get("message") else fallback
            logger.error(f"{label} failed: {message}")
            return error_envelope(ErrorCode.API_ERROR, message, details=fallback)

        if decode_error is not None:
            logger.error(f"{label} returned an undecodable body: {decode_error}")
            return error_envelope(ErrorCode.API_ERROR, f"Malformed {label.lower()} response", details=decode_error)

        try:
            schema.model_validate(data)
        except ValueError as e:
            logger.error(f"{label} returned a malformed envelope: {e}")
            return error_envelope(ErrorCode.API_ERROR, f"Malformed {label.lower()} response", details=str(e))

        return data


quote_comparison_client = QuoteComparisonClient()
