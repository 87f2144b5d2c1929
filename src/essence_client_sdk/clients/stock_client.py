from __future__ import annotations

from ..models import StockAssignment
from ..normalizers import unwrap_rows
from .base import BaseClient


class StockClient(BaseClient):
    def list_distributor_stock(
        self,
        distributor_id: str = "me",
        *,
        context_key: str | None = None,
        context_version: int | None = None,
    ) -> list[StockAssignment]:
        payload = self._request(
            "GET",
            f"/stock/distributor/{distributor_id}",
            module="stock",
            operation="list_distributor_stock",
            context_key=context_key,
            context_version=context_version,
        )
        return [StockAssignment.model_validate(row) for row in unwrap_rows(payload)]
