from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from .exceptions import NotFoundError
from .logging_utils import get_logger
from .models import Category, CategoryWithCount, Product

logger = get_logger(__name__)

ALL_CATEGORIES = "all"
SORT_OPTIONS = ("price-asc", "price-desc", "name", "featured")


def featured_subset(products: Iterable[Product], limit: int) -> list[Product]:
    if limit <= 0:
        return []
    featured: list[Product] = []
    for product in products:
        if product.featured:
            featured.append(product)
            if len(featured) >= limit:
                break
    return featured


def products_in_category(products: Iterable[Product], category_id: str) -> list[Product]:
    return [product for product in products if product.category_id == category_id]


def categories_with_counts(
    categories: Sequence[Category],
    products: Iterable[Product],
) -> list[CategoryWithCount]:
    known_ids = {category.id for category in categories}
    counts: Counter[str] = Counter()
    for product in products:
        category_id = product.category_id
        if category_id in known_ids:
            counts[category_id] += 1
        else:
            logger.debug("product %s references unknown category %s", product.id, category_id)
    return [
        CategoryWithCount(
            **category.model_dump(include=set(Category.model_fields)),
            product_count=counts[category.id],
        )
        for category in categories
    ]


def find_category_by_slug(categories: Iterable[Category], slug: str) -> Category:
    for category in categories:
        if category.slug == slug:
            return category
    raise NotFoundError(
        code="CATEGORY_NOT_FOUND",
        message="Categoría no encontrada",
        details={"slug": slug},
        status_code=404,
    )


def matches_search(name: str | None, description: str | None, term: str) -> bool:
    needle = (term or "").lower()
    if not needle:
        return True
    return needle in (name or "").lower() or needle in (description or "").lower()


def search_products(products: Iterable[Product], term: str) -> list[Product]:
    return [product for product in products if matches_search(product.name, product.description, term)]


def _display_price(product: Product) -> float:
    if product.client_price is not None:
        return product.client_price
    return product.distributor_price


def sort_products(products: Iterable[Product], sort_by: str | None) -> list[Product]:
    ordered = list(products)
    if sort_by == "price-asc":
        ordered.sort(key=_display_price)
    elif sort_by == "price-desc":
        ordered.sort(key=_display_price, reverse=True)
    elif sort_by == "name":
        ordered.sort(key=lambda product: product.name.casefold())
    elif sort_by == "featured":
        ordered.sort(key=lambda product: not product.featured)
    return ordered


def filter_catalog(
    products: Iterable[Product],
    search_term: str = "",
    category_id: str = ALL_CATEGORIES,
    sort_by: str | None = None,
) -> list[Product]:
    """Public catalog view: search, then category by id, then sort."""
    filtered = search_products(products, search_term)
    if category_id != ALL_CATEGORIES:
        filtered = [product for product in filtered if product.category_id == category_id]
    return sort_products(filtered, sort_by)
