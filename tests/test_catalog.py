from __future__ import annotations

import pytest

from essence_client_sdk.catalog import (
    categories_with_counts,
    featured_subset,
    filter_catalog,
    find_category_by_slug,
    products_in_category,
    search_products,
    sort_products,
)
from essence_client_sdk.exceptions import NotFoundError
from essence_client_sdk.models import Category, Product


def _product(pid: str, name: str, category: str | None = "c1", **fields) -> Product:
    return Product.model_validate({"_id": pid, "name": name, "category": category, **fields})


@pytest.fixture
def categories() -> list[Category]:
    return [
        Category.model_validate({"_id": "c1", "name": "Perfumes", "slug": "perfumes"}),
        Category.model_validate({"_id": "c2", "name": "Cremas", "slug": "cremas"}),
    ]


@pytest.fixture
def products() -> list[Product]:
    return [
        _product("p1", "Rosa Intensa", "c1", featured=True, clientPrice=40),
        _product("p2", "Crema Nocturna", {"_id": "c2", "name": "Cremas"}, description="hidratante", clientPrice=25),
        _product("p3", "Ámbar", "c1", featured=True, distributorPrice=18),
        _product("p4", "Loción sin categoría", "catX", featured=True, clientPrice=12),
        _product("p5", "Sérum", None, clientPrice=60),
    ]


def test_featured_subset_keeps_source_order_and_limit(products: list[Product]) -> None:
    assert [p.id for p in featured_subset(products, 2)] == ["p1", "p3"]
    assert [p.id for p in featured_subset(products, 6)] == ["p1", "p3", "p4"]
    assert featured_subset(products, 0) == []


def test_counts_skip_orphaned_and_uncategorized_products(
    categories: list[Category], products: list[Product]
) -> None:
    counted = categories_with_counts(categories, products)

    assert [(c.id, c.product_count) for c in counted] == [("c1", 2), ("c2", 1)]
    assert sum(c.product_count for c in counted) <= len(products)
    assert counted[0].slug == "perfumes"


def test_counts_cover_every_product_when_none_are_orphaned(
    categories: list[Category], products: list[Product]
) -> None:
    linked = [p for p in products if p.category_id in {"c1", "c2"}]

    counted = categories_with_counts(categories, linked)

    assert sum(c.product_count for c in counted) == len(linked)


def test_backend_count_field_is_replaced_by_computed_count() -> None:
    categories = [Category.model_validate({"_id": "c1", "name": "Perfumes", "slug": "perfumes", "productCount": 99})]

    counted = categories_with_counts(categories, [_product("p1", "Rosa", "c1")])

    assert counted[0].product_count == 1
    assert counted[0].model_dump(by_alias=True)["productCount"] == 1


def test_category_with_no_products_counts_zero(categories: list[Category]) -> None:
    counted = categories_with_counts(categories, [])

    assert [c.product_count for c in counted] == [0, 0]


def test_find_category_by_slug(categories: list[Category]) -> None:
    assert find_category_by_slug(categories, "cremas").id == "c2"

    with pytest.raises(NotFoundError) as excinfo:
        find_category_by_slug(categories, "maquillaje")
    assert excinfo.value.message == "Categoría no encontrada"


def test_products_in_category_accepts_embedded_and_bare_references(products: list[Product]) -> None:
    assert [p.id for p in products_in_category(products, "c2")] == ["p2"]
    assert [p.id for p in products_in_category(products, "c1")] == ["p1", "p3"]


def test_search_matches_name_or_description_case_insensitively(products: list[Product]) -> None:
    assert [p.id for p in search_products(products, "ROSA")] == ["p1"]
    assert [p.id for p in search_products(products, "hidrat")] == ["p2"]
    assert len(search_products(products, "")) == len(products)


def test_sort_by_price_falls_back_to_distributor_price(products: list[Product]) -> None:
    ordered = sort_products(products, "price-asc")

    assert [p.id for p in ordered] == ["p4", "p3", "p2", "p1", "p5"]
    assert [p.id for p in sort_products(products, "price-desc")][0] == "p5"


def test_sort_featured_first_is_stable(products: list[Product]) -> None:
    assert [p.id for p in sort_products(products, "featured")] == ["p1", "p3", "p4", "p2", "p5"]


def test_unknown_sort_keeps_order(products: list[Product]) -> None:
    assert sort_products(products, None) == products


def test_filter_catalog_combines_search_category_and_sort(products: list[Product]) -> None:
    result = filter_catalog(products, search_term="a", category_id="c1", sort_by="price-asc")

    assert [p.id for p in result] == ["p3", "p1"]


def test_sort_by_name_ignores_case() -> None:
    products = [_product("a", "rosa"), _product("b", "Crema"), _product("c", "loción")]

    assert [p.id for p in sort_products(products, "name")] == ["b", "c", "a"]
