from __future__ import annotations

from typing import Any

from ..models import Category, Product
from ..normalizers import normalize_listing, unwrap_rows
from .base import BaseClient


class CatalogClient(BaseClient):
    def list_products(
        self,
        filters: dict[str, Any] | None = None,
        *,
        context_key: str | None = None,
        context_version: int | None = None,
    ) -> list[Product]:
        payload = self._request(
            "GET",
            "/products",
            params=filters or None,
            module="catalog",
            operation="list_products",
            context_key=context_key,
            context_version=context_version,
        )
        return [Product.model_validate(row) for row in unwrap_rows(payload)]

    def list_products_page(self, page: int = 1, limit: int = 20) -> dict[str, Any]:
        payload = self._request(
            "GET",
            "/products",
            params={"page": page, "limit": limit},
            module="catalog",
            operation="list_products_page",
        )
        listing = normalize_listing(payload)
        listing["rows"] = [Product.model_validate(row) for row in listing["rows"]]
        return listing

    def get_product(self, product_id: str) -> Product:
        payload = self._request("GET", f"/products/{product_id}", module="catalog", operation="get_product")
        return Product.model_validate(payload)

    def list_categories(
        self,
        *,
        context_key: str | None = None,
        context_version: int | None = None,
    ) -> list[Category]:
        payload = self._request(
            "GET",
            "/categories",
            module="catalog",
            operation="list_categories",
            context_key=context_key,
            context_version=context_version,
        )
        return [Category.model_validate(row) for row in unwrap_rows(payload)]

    def get_category(self, category_id: str) -> Category:
        payload = self._request("GET", f"/categories/{category_id}", module="catalog", operation="get_category")
        return Category.model_validate(payload)

    def my_catalog(
        self,
        *,
        context_key: str | None = None,
        context_version: int | None = None,
    ) -> list[Product]:
        """Products assigned to the authenticated distributor."""
        payload = self._request(
            "GET",
            "/products/my-catalog",
            module="catalog",
            operation="my_catalog",
            context_key=context_key,
            context_version=context_version,
        )
        return [Product.model_validate(row) for row in unwrap_rows(payload)]
