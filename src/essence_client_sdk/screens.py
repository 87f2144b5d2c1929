from __future__ import annotations

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .access_gate import AccessGate, GateResult
from .catalog import (
    ALL_CATEGORIES,
    categories_with_counts,
    featured_subset,
    find_category_by_slug,
    products_in_category,
)
from .clients.catalog_client import CatalogClient
from .clients.stock_client import StockClient
from .exceptions import ApiError, NotFoundError, TransportError, to_user_message
from .http_client import HttpClient
from .logging_utils import get_logger, log_action
from .models import Category, CategoryWithCount, Product, Role, StockAssignment
from .session import SessionStore
from .stock import (
    StockLevel,
    StockSummary,
    distinct_category_names,
    filter_by_search_and_category,
    filter_by_stock_level,
    stock_summary,
)

logger = get_logger(__name__)

LOAD_ERROR_MESSAGE = "Error al cargar los productos"


class Screen:
    """Gate check, a single load per open, and a whole-result commit.

    ``close()`` bumps the screen's transport context so a load that is still
    in flight is discarded instead of committed.
    """

    name = "screen"
    required_role: Role | None = None

    def __init__(self, session_store: SessionStore, http: HttpClient) -> None:
        self.session_store = session_store
        self.http = http
        self.gate = AccessGate(session_store)
        self.error: str | None = None
        self.loaded = False

    @property
    def context_key(self) -> str:
        return f"screen.{self.name}"

    def open(self) -> GateResult:
        result = self.gate.require(self.required_role, self.name)
        if result.allowed:
            self.refresh()
        return result

    def close(self) -> None:
        self.http.switch_context(self.context_key)

    def refresh(self) -> bool:
        version = self.http.get_context_version(self.context_key)
        self.error = None
        try:
            data = self._fetch(version)
        except TransportError as exc:
            if exc.code == "REQUEST_CANCELLED":
                self._log("discarded")
                return False
            self.error = to_user_message(exc, LOAD_ERROR_MESSAGE)
            self._log("network_error")
            return False
        except ApiError as exc:
            self.error = to_user_message(exc, LOAD_ERROR_MESSAGE)
            self._log("error")
            return False
        except PydanticValidationError:
            self.error = LOAD_ERROR_MESSAGE
            self._log("invalid_payload")
            return False

        if self.http.get_context_version(self.context_key) != version:
            self._log("discarded")
            return False
        self._commit(data)
        self.loaded = True
        self._log("success")
        return True

    def _token(self) -> str | None:
        return self.session_store.get_token()

    def _request_context(self, version: int) -> dict[str, Any]:
        return {"context_key": self.context_key, "context_version": version}

    def _log(self, outcome: str) -> None:
        identity = self.session_store.get_current_identity()
        log_action(logger, self.name, "load", identity.role.value if identity else None, outcome)

    def _fetch(self, version: int) -> Any:
        raise NotImplementedError

    def _commit(self, data: Any) -> None:
        raise NotImplementedError


class HomeScreen(Screen):
    name = "home"

    def __init__(self, session_store: SessionStore, http: HttpClient, featured_limit: int | None = None) -> None:
        super().__init__(session_store, http)
        self.featured_limit = http.config.featured_limit if featured_limit is None else featured_limit
        self.featured: list[Product] = []
        self.categories: list[CategoryWithCount] = []

    def _fetch(self, version: int) -> tuple[list[Product], list[Category]]:
        client = CatalogClient(http=self.http, access_token=self._token())
        context = self._request_context(version)
        products = client.list_products(**context)
        categories = client.list_categories(**context)
        return products, categories

    def _commit(self, data: tuple[list[Product], list[Category]]) -> None:
        products, categories = data
        self.featured = featured_subset(products, self.featured_limit)
        self.categories = categories_with_counts(categories, products)


class CategoryScreen(Screen):
    name = "category"

    def __init__(self, session_store: SessionStore, http: HttpClient, slug: str) -> None:
        super().__init__(session_store, http)
        self.slug = slug
        self.category: Category | None = None
        self.products: list[Product] = []

    def _fetch(self, version: int) -> tuple[Category, list[Product]]:
        if not self.slug:
            raise NotFoundError(code="INVALID_SLUG", message="Categoría no válida", status_code=404)
        client = CatalogClient(http=self.http, access_token=self._token())
        context = self._request_context(version)
        category = find_category_by_slug(client.list_categories(**context), self.slug)
        products = client.list_products(**context)
        return category, products

    def _commit(self, data: tuple[Category, list[Product]]) -> None:
        category, products = data
        self.category = category
        self.products = products_in_category(products, category.id)


class DistributorStockScreen(Screen):
    name = "distributor_stock"
    required_role = Role.DISTRIBUTOR

    def __init__(self, session_store: SessionStore, http: HttpClient) -> None:
        super().__init__(session_store, http)
        self.items: list[StockAssignment] = []
        self.level = StockLevel.ALL

    def set_level(self, level: StockLevel | str) -> None:
        self.level = StockLevel(level)

    @property
    def visible_items(self) -> list[StockAssignment]:
        return filter_by_stock_level(self.items, self.level)

    @property
    def summary(self) -> StockSummary:
        return stock_summary(self.items)

    def _fetch(self, version: int) -> list[StockAssignment]:
        identity = self.session_store.get_current_identity()
        distributor_id = identity.id if identity else "me"
        client = StockClient(http=self.http, access_token=self._token())
        return client.list_distributor_stock(distributor_id, **self._request_context(version))

    def _commit(self, data: list[StockAssignment]) -> None:
        self.items = data


class DistributorCatalogScreen(Screen):
    name = "distributor_catalog"
    required_role = Role.DISTRIBUTOR

    def __init__(self, session_store: SessionStore, http: HttpClient) -> None:
        super().__init__(session_store, http)
        self.products: list[Product] = []
        self.categories: list[str] = []
        self.search_term = ""
        self.selected_category = ALL_CATEGORIES

    @property
    def visible_products(self) -> list[Product]:
        return filter_by_search_and_category(self.products, self.search_term, self.selected_category)

    def _fetch(self, version: int) -> list[Product]:
        client = CatalogClient(http=self.http, access_token=self._token())
        return client.my_catalog(**self._request_context(version))

    def _commit(self, data: list[Product]) -> None:
        self.products = data
        self.categories = distinct_category_names(data)


__all__ = [
    "CategoryScreen",
    "DistributorCatalogScreen",
    "DistributorStockScreen",
    "HomeScreen",
    "LOAD_ERROR_MESSAGE",
    "Screen",
]
