"""HTTP client for the hosted tabular-data API.

Every call is a JSON envelope posted to one ``execute`` endpoint::

    {"operation": "select", "table": "cart_items", "data": [],
     "where_conditions": [{"column": "cart_id", "op": "eq", "value": "c1"}]}

and the response carries ``success`` plus the affected rows in
``returned_data``. Transport faults, HTTP errors and ``success: false``
all surface as PersistenceError; nothing is retried.
"""

from __future__ import annotations

from typing import Any

import requests
import structlog

from storefront.domain.exceptions import PersistenceError

logger = structlog.get_logger(__name__)


def eq(column: str, value: Any) -> dict:
    """Equality filter for ``where_conditions``."""
    return {"column": column, "op": "eq", "value": value}


def order_by(column: str, direction: str = "ASC") -> dict:
    return {"column": column, "direction": direction}


class TabularClient:

    def __init__(
        self,
        base_url: str,
        tenant_id: str,
        database: str = "default",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self._url = (
            f"{base_url.rstrip('/')}/tenants/{tenant_id}/databases/{database}/execute"
        )
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return self._url

    # --- Operations -----------------------------------------------------------

    def select(
        self,
        table: str,
        where: list[dict] | None = None,
        sort: list[dict] | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict]:
        request: dict[str, Any] = {"operation": "select", "table": table, "data": []}
        if where:
            request["where_conditions"] = where
        if sort:
            request["order_by"] = sort
        if limit is not None:
            request["limit"] = limit
        if offset is not None:
            request["offset"] = offset
        return self.execute(request)

    def insert(
        self,
        table: str,
        rows: list[dict],
        returning: list[str] | None = None,
    ) -> list[dict]:
        request: dict[str, Any] = {"operation": "insert", "table": table, "data": rows}
        if returning:
            request["return_columns"] = returning
        return self.execute(request)

    def update(
        self,
        table: str,
        values: dict,
        where: list[dict],
        returning: list[str] | None = None,
    ) -> list[dict]:
        request: dict[str, Any] = {
            "operation": "update",
            "table": table,
            "data": [values],
            "where_conditions": where,
        }
        if returning:
            request["return_columns"] = returning
        return self.execute(request)

    def delete(self, table: str, where: list[dict]) -> None:
        self.execute(
            {"operation": "delete", "table": table, "data": [], "where_conditions": where}
        )

    # --- Transport ------------------------------------------------------------

    def execute(self, request: dict) -> list[dict]:
        """Post one envelope and return ``returned_data`` (possibly empty)."""
        operation = request["operation"]
        table = request["table"]
        try:
            response = self._session.post(self._url, json=request, timeout=self._timeout)
        except requests.RequestException as exc:
            logger.error("tabular_request_failed", operation=operation, table=table, error=str(exc))
            raise PersistenceError(f"{operation} on '{table}' failed: {exc}") from exc

        if not response.ok:
            logger.error(
                "tabular_request_rejected",
                operation=operation,
                table=table,
                status=response.status_code,
            )
            raise PersistenceError(
                f"{operation} on '{table}' failed: "
                f"{response.status_code} {response.reason}"
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise PersistenceError(
                f"{operation} on '{table}' returned a non-JSON body"
            ) from exc

        if not isinstance(body, dict) or not body.get("success", False):
            error = body.get("error") if isinstance(body, dict) else None
            logger.error("tabular_operation_failed", operation=operation, table=table, error=error)
            raise PersistenceError(
                f"{operation} on '{table}' was not applied: {error or 'unknown error'}"
            )

        return body.get("returned_data") or []
