from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence, TypeVar, Union

from .catalog import ALL_CATEGORIES, matches_search
from .models import Product, StockAssignment

StockOrProduct = TypeVar("StockOrProduct", bound=Union[StockAssignment, Product])


class StockLevel(str, Enum):
    ALL = "all"
    NORMAL = "normal"
    LOW = "low"


@dataclass(frozen=True)
class StockSummary:
    total: int
    normal: int
    low: int


def is_low_stock(item: StockAssignment) -> bool:
    return item.quantity <= item.low_stock_alert


def filter_by_stock_level(
    items: Sequence[StockAssignment],
    level: StockLevel | str,
) -> list[StockAssignment]:
    level = StockLevel(level)
    if level is StockLevel.ALL:
        return list(items)
    want_low = level is StockLevel.LOW
    return [item for item in items if is_low_stock(item) == want_low]


def stock_summary(items: Sequence[StockAssignment]) -> StockSummary:
    low = sum(1 for item in items if is_low_stock(item))
    return StockSummary(total=len(items), normal=len(items) - low, low=low)


def _product_of(item: StockAssignment | Product) -> Product | None:
    if isinstance(item, Product):
        return item
    return item.product_detail


def category_name_of(item: StockAssignment | Product) -> str | None:
    product = _product_of(item)
    return product.category_name if product else None


def filter_by_search_and_category(
    items: Iterable[StockOrProduct],
    search_term: str,
    category: str = ALL_CATEGORIES,
) -> list[StockOrProduct]:
    """Case-insensitive name/description search AND exact category-name match.

    Items whose product is only an id reference have no name to match, so
    they pass only an empty search with the ``"all"`` category.
    """
    selected: list[StockOrProduct] = []
    for item in items:
        product = _product_of(item)
        name = product.name if product else None
        description = product.description if product else None
        if not matches_search(name, description, search_term):
            continue
        if category != ALL_CATEGORIES and category_name_of(item) != category:
            continue
        selected.append(item)
    return selected


def margin(item: StockAssignment | Product) -> float:
    """Client price minus distributor price, unclamped."""
    product = _product_of(item)
    if product is None:
        return 0.0
    return (product.client_price or 0.0) - product.distributor_price


def distinct_category_names(items: Iterable[StockAssignment | Product]) -> list[str]:
    """Category display names in first-seen order.

    A product whose category is only an id reference contributes that id as
    its name, so the list may mix names and ids.
    """
    seen: dict[str, None] = {}
    for item in items:
        name = category_name_of(item)
        if name and name not in seen:
            seen[name] = None
    return list(seen)
