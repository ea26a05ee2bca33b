from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    API_ERROR = "API_ERROR"
    NO_QUOTES = "NO_QUOTES"
    NOT_FOUND = "NOT_FOUND"


class CostBreakdown(BaseModel):
    labor: float = Field(default=0, ge=0)
    materials: float = Field(default=0, ge=0)
    equipment: float = Field(default=0, ge=0)
    other: float = Field(default=0, ge=0)


class SupplierInfo(BaseModel):
    id: str
    supplier_name: str
    contact_email: str | None = None
    service_categories: list[str] = []


class ProjectInfo(BaseModel):
    id: str
    project_name: str
    client_name: str | None = None


class AssetInfo(BaseModel):
    id: str
    name: str
    specifications: str | None = None
    timeline: str | None = None
    status: str | None = None
    project: ProjectInfo | None = None


class RankedQuote(BaseModel):
    id: str
    cost: float
    cost_breakdown: CostBreakdown | None = None
    notes_capacity: str | None = None
    status: str
    valid_until: datetime | None = None
    response_time_hours: int | None = None
    created_at: datetime | None = None
    cost_rank: int
    cost_percentage_of_lowest: int | None = None
    supplier: SupplierInfo | None = None

    model_config = {"extra": "allow"}


class ComparisonMetrics(BaseModel):
    lowest_cost: float
    highest_cost: float
    average_cost: float
    quote_count: int
    cost_range: float


class QuoteSummary(BaseModel):
    quote_count: int = 0
    lowest_cost: float = 0
    highest_cost: float = 0
    average_cost: float = 0
    status_counts: dict[str, int] = {}
    has_multiple_quotes: bool = False


class ApiError(BaseModel):
    code: str
    message: str
    details: str | None = None


class QuoteComparisonData(BaseModel):
    asset: AssetInfo
    quotes: list[RankedQuote]
    comparison_metrics: ComparisonMetrics


class QuoteComparisonResponse(BaseModel):
    success: bool
    data: QuoteComparisonData | None = None
    message: str | None = None
    error: ApiError | None = None


class QuoteSummaryResponse(BaseModel):
    success: bool
    data: QuoteSummary | None = None
    message: str | None = None
    error: ApiError | None = None
