import sys
import uuid
from pathlib import Path

import pytest

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


class FakeQuoteStore:
    """In-memory QuoteStore."""

    def __init__(self, asset=None, quotes=None, error=None):
        self.asset = asset
        self.quotes = quotes or []
        self.error = error
        self.requested_statuses = None
        self.calls = []

    async def get_asset(self, asset_id):
        self.calls.append(("get_asset", asset_id))
        if self.error:
            raise self.error
        return self.asset

    async def list_quotes(self, asset_id, statuses):
        self.calls.append(("list_quotes", asset_id))
        if self.error:
            raise self.error
        self.requested_statuses = list(statuses)
        return [q for q in self.quotes if q["status"] in self.requested_statuses]


@pytest.fixture
def asset_id():
    return str(uuid.UUID("3f2b8c1e-5d4a-4c7b-9e1f-2a3b4c5d6e7f"))


@pytest.fixture
def sample_asset(asset_id):
    return {
        "id": asset_id,
        "name": "LED stage backdrop",
        "specifications": "6m x 3m, P3.9 pixel pitch",
        "timeline": "2 weeks",
        "status": "Quoting",
        "project": {
            "id": "0b7c1c5e-8f59-4a8c-a3c2-9d8e7f6a5b4c",
            "project_name": "Spring Launch Gala",
            "client_name": "Northwind",
        },
    }


@pytest.fixture
def make_quote():
    counter = {"n": 0}

    def _make(cost, status="Submitted", **extra):
        counter["n"] += 1
        quote = {
            "id": f"quote-{counter['n']}",
            "cost": cost,
            "cost_breakdown": None,
            "notes_capacity": None,
            "status": status,
            "valid_until": None,
            "response_time_hours": None,
            "created_at": f"2026-03-0{min(counter['n'], 9)}T10:00:00+00:00",
            "supplier": {
                "id": f"supplier-{counter['n']}",
                "supplier_name": f"Supplier {counter['n']}",
                "contact_email": f"bids{counter['n']}@example.com",
                "service_categories": ["staging"],
            },
        }
        quote.update(extra)
        return quote

    return _make


@pytest.fixture
def fake_store():
    return FakeQuoteStore
