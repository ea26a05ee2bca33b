import asyncio
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy.dialects import postgresql

from app.models import Asset, Project, Quote, Supplier
from app.services.quote_store import SqlQuoteStore, asset_to_dict, quote_to_dict, quotes_for_asset


def test_asset_to_dict_includes_project():
    project = Project(id=uuid.uuid4(), project_name="Spring Launch Gala", client_name="Northwind")
    asset = Asset(
        id=uuid.uuid4(),
        project_id=project.id,
        asset_name="LED wall",
        specifications="6m x 3m",
        timeline="2 weeks",
        status="Quoting",
    )
    asset.project = project

    data = asset_to_dict(asset)

    assert data["id"] == str(asset.id)
    assert data["name"] == "LED wall"
    assert data["project"] == {
        "id": str(project.id),
        "project_name": "Spring Launch Gala",
        "client_name": "Northwind",
    }


def test_quote_to_dict_converts_numeric_and_time_fields():
    supplier = Supplier(
        id=uuid.uuid4(),
        supplier_name="Brightline AV",
        contact_email="bids@brightline.example",
        service_categories=["lighting", "video"],
    )
    quote = Quote(
        id=uuid.uuid4(),
        supplier_id=supplier.id,
        asset_id=uuid.uuid4(),
        cost=Decimal("8500.00"),
        cost_breakdown={"labor": "5000", "materials": 3500},
        notes_capacity="Crew of four",
        status="Submitted",
        valid_until=datetime(2026, 4, 1, tzinfo=timezone.utc),
        response_time_hours=30,
        created_at=datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc),
    )
    quote.supplier = supplier

    data = quote_to_dict(quote)

    assert data["cost"] == 8500.0
    assert isinstance(data["cost"], float)
    assert data["cost_breakdown"] == {"labor": 5000.0, "materials": 3500.0, "equipment": 0.0, "other": 0.0}
    assert data["valid_until"] == "2026-04-01T00:00:00+00:00"
    assert data["created_at"] == "2026-03-01T09:30:00+00:00"
    assert data["supplier"]["supplier_name"] == "Brightline AV"
    assert data["supplier"]["service_categories"] == ["lighting", "video"]


def test_quote_to_dict_without_optional_fields():
    quote = Quote(id=uuid.uuid4(), cost=Decimal("0"), status="Pending")

    data = quote_to_dict(quote)

    assert data["cost"] == 0.0
    assert data["cost_breakdown"] is None
    assert data["valid_until"] is None
    assert data["supplier"] is None


def test_quotes_query_filters_by_asset_and_status_in_arrival_order():
    asset_id = uuid.uuid4()
    compiled = quotes_for_asset(asset_id, ["Submitted", "Accepted"]).compile(dialect=postgresql.dialect())
    sql = " ".join(str(compiled).split())

    assert "WHERE quotes.asset_id = " in sql
    assert "quotes.status IN (" in sql
    assert sql.endswith("ORDER BY quotes.created_at, quotes.id")
    assert asset_id in compiled.params.values()
    assert ["Submitted", "Accepted"] in compiled.params.values()


class _Result:
    def __init__(self, rows):
        self._rows = rows

    def scalars(self):
        return self

    def all(self):
        return self._rows


class _RecordingSession:
    def __init__(self, rows):
        self.rows = rows
        self.statements = []

    async def execute(self, statement):
        self.statements.append(statement)
        return _Result(self.rows)


def test_list_quotes_runs_the_arrival_order_query():
    asset_id = uuid.uuid4()
    quote = Quote(id=uuid.uuid4(), asset_id=asset_id, cost=Decimal("120.50"), status="Submitted")
    session = _RecordingSession([quote])

    quotes = asyncio.run(SqlQuoteStore(session).list_quotes(asset_id, ["Submitted"]))

    assert [q["cost"] for q in quotes] == [120.5]
    sql = " ".join(str(session.statements[0].compile(dialect=postgresql.dialect())).split())
    assert sql.endswith("ORDER BY quotes.created_at, quotes.id")
