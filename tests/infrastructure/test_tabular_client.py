"""Tests for the tabular API client envelope and error mapping."""

import pytest

from storefront.domain.exceptions import PersistenceError
from storefront.infrastructure.persistence.tabular_client import TabularClient, eq, order_by
from tests.infrastructure.fake_session import ExplodingSession, FakeResponse, FakeSession, ok


def _client(session) -> TabularClient:
    return TabularClient("https://api.example.test/", "tenant-1", "shop", session=session)


class TestEnvelope:

    def test_url(self):
        session = FakeSession()
        _client(session).select("products")
        assert session.urls == ["https://api.example.test/tenants/tenant-1/databases/shop/execute"]

    def test_select(self):
        session = FakeSession(lambda r: ok([{"id": "p1"}]))
        rows = _client(session).select(
            "products", where=[eq("is_published", True)], sort=[order_by("created_at", "DESC")], limit=5
        )
        assert rows == [{"id": "p1"}]
        assert session.requests[0] == {
            "operation": "select",
            "table": "products",
            "data": [],
            "where_conditions": [{"column": "is_published", "op": "eq", "value": True}],
            "order_by": [{"column": "created_at", "direction": "DESC"}],
            "limit": 5,
        }

    def test_update(self):
        session = FakeSession()
        _client(session).update("orders", {"status": "PROCESSING"}, where=[eq("id", "o1")], returning=["id"])
        assert session.requests[0] == {
            "operation": "update",
            "table": "orders",
            "data": [{"status": "PROCESSING"}],
            "where_conditions": [{"column": "id", "op": "eq", "value": "o1"}],
            "return_columns": ["id"],
        }

    def test_missing_returned_data_is_empty(self):
        session = FakeSession(lambda r: FakeResponse({"success": True}))
        assert _client(session).insert("carts", [{"session_id": "s"}]) == []


class TestErrors:

    def test_transport_failure(self):
        with pytest.raises(PersistenceError, match="connection refused"):
            _client(ExplodingSession()).select("orders")

    def test_http_error(self):
        session = FakeSession(lambda r: FakeResponse(None, status_code=503, reason="Service Unavailable"))
        with pytest.raises(PersistenceError, match="503 Service Unavailable"):
            _client(session).select("orders")

    def test_unsuccessful_operation(self):
        session = FakeSession(lambda r: FakeResponse({"success": False, "error": "table missing"}))
        with pytest.raises(PersistenceError, match="table missing"):
            _client(session).delete("cart_items", where=[eq("cart_id", "c")])

    def test_non_json_body(self):
        session = FakeSession(lambda r: FakeResponse(ValueError("bad json")))
        with pytest.raises(PersistenceError, match="non-JSON"):
            _client(session).select("orders")

    def test_no_retry(self):
        session = FakeSession(lambda r: FakeResponse(None, status_code=500, reason="Error"))
        with pytest.raises(PersistenceError):
            _client(session).select("orders")
        assert len(session.requests) == 1
