"""Filter & search engine – derives visible categories and displayed KPIs from a catalog."""

from __future__ import annotations

from typing import Any, Iterable

from src.catalog.metrics_catalog import Catalog, MetricRecord

# Fields checked by ``matches``, in short-circuit order.
SEARCH_FIELDS: tuple[str, ...] = (
    "MetricTitle",
    "MetricDescription",
    "Category",
    "SubCategory",
    "ReportPeriod",
    "Target",
    "Comment",
    "Contributor",
    "Source",
)

# Optional fields shown in a record's detail panel, in display order.
DETAIL_FIELDS: tuple[str, ...] = ("ReportPeriod", "Target", "Comment", "Contributor", "Source")

FIELD_ICONS: dict[str, str] = {
    "ReportPeriod": "calendar",
    "Target": "bullseye",
    "Comment": "comment",
    "Contributor": "user",
    "Source": "link",
}

# Placeholder values contributors use for "not applicable".
_PLACEHOLDERS = {"", "-", "null"}


def normalize(text: Any) -> str:
    if not isinstance(text, str):
        return ""
    return text.lower()


def matches(record: MetricRecord, normalized_query: str) -> bool:
    """True if *normalized_query* is a substring of any searchable field of *record*.

    An empty query matches everything.
    """
    if not normalized_query:
        return True
    return any(normalized_query in normalize(getattr(record, name, "")) for name in SEARCH_FIELDS)


def _normalized_query(query: Any) -> str:
    return normalize(query).strip()


def visible_categories(catalog: Catalog, query: str) -> list[dict[str, Any]]:
    """Return ``{category, slug, count, match_count}`` for each category worth showing.

    With an active query a category is shown when it has at least one match; without one
    ``match_count`` mirrors ``count`` and any non-empty category is shown.
    """
    q = _normalized_query(query)
    result: list[dict[str, Any]] = []
    for cat in catalog:
        if q:
            match_count = sum(1 for item in cat.items if matches(item, q))
            visible = match_count > 0
        else:
            match_count = cat.count
            visible = cat.count > 0
        if visible:
            result.append({
                "category": cat.category,
                "slug": cat.slug,
                "count": cat.count,
                "match_count": match_count,
            })
    return result


def reconcile_selection(visible: Iterable[dict[str, Any]], selected_category: str) -> str:
    """Keep *selected_category* if still visible, else fall back to the first visible one."""
    names = [v["category"] for v in visible]
    if selected_category in names:
        return selected_category
    return names[0] if names else ""


def display_records(catalog: Catalog, query: str, selected_category: str) -> list[MetricRecord]:
    """Records to show: global matches while searching, else the selected category's items."""
    q = _normalized_query(query)
    if q:
        return [item for cat in catalog for item in cat.items if matches(item, q)]
    cat = catalog.find(selected_category)
    return list(cat.items) if cat is not None else []


def _is_placeholder(value: str) -> bool:
    return value.strip().lower() in _PLACEHOLDERS


def detail_fields(record: MetricRecord) -> list[dict[str, Any]]:
    """DETAIL_FIELDS of *record* that carry a meaningful value, with their icons."""
    fields: list[dict[str, Any]] = []
    for name in DETAIL_FIELDS:
        value = getattr(record, name, "")
        if _is_placeholder(value):
            continue
        fields.append({"field": name, "value": value, "icon": FIELD_ICONS.get(name)})
    return fields
