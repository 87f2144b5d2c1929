from __future__ import annotations

from typing import Any


def unwrap_rows(payload: Any) -> list[Any]:
    """Return the row list of a bare array or of a ``{"data": [...]}`` envelope.

    Anything else (``None``, an error body, an envelope without a list)
    normalizes to an empty list so resolvers never branch on transport shape.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ("data", "rows", "items"):
            rows = payload.get(key)
            if isinstance(rows, list):
                return rows
    return []


def normalize_listing(payload: Any) -> dict[str, Any]:
    rows = unwrap_rows(payload)
    pagination: dict[str, Any] = {}
    if isinstance(payload, dict) and isinstance(payload.get("pagination"), dict):
        pagination = dict(payload["pagination"])

    page = _to_int(pagination.get("page")) or 1
    limit = _to_int(pagination.get("limit")) or len(rows)
    total = _to_int(pagination.get("total"))
    if total is None:
        total = len(rows)
    has_more = pagination.get("hasMore")
    if not isinstance(has_more, bool):
        has_more = page * max(limit, 1) < total

    return {
        "rows": rows,
        "page": page,
        "limit": limit,
        "total": total,
        "has_more": has_more,
    }


def _to_int(value: Any) -> int | None:
    try:
        if value is None or value == "":
            return None
        return int(value)
    except (TypeError, ValueError):
        return None
