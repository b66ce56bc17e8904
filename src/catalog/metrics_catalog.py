"""Metrics catalog – bundled registry of cybersecurity KPIs grouped by category."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from typing import Any, Iterator, Mapping, Sequence

import yaml

logger = logging.getLogger(__name__)

_DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "..", "data")
_MANIFEST_FILE = "categories.yaml"
_METRICS_DIR = "metrics"

# Hydrated field order on a MetricRecord (id excluded).
RECORD_FIELDS: tuple[str, ...] = (
    "Category",
    "SubCategory",
    "MetricTitle",
    "MetricDescription",
    "ReportPeriod",
    "Target",
    "Comment",
    "Contributor",
    "Source",
)


class CatalogError(ValueError):
    """Raised when the bundled catalog files are structurally unusable."""


@dataclass(frozen=True)
class CategoryMeta:
    category: str
    slug: str
    declared_count: int = 0


@dataclass(frozen=True)
class MetricRecord:
    id: str
    Category: str = ""
    SubCategory: str = ""
    MetricTitle: str = ""
    MetricDescription: str = ""
    ReportPeriod: str = ""
    Target: str = ""
    Comment: str = ""
    Contributor: str = ""
    Source: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, **{name: getattr(self, name) for name in RECORD_FIELDS}}


@dataclass(frozen=True)
class Category:
    category: str
    slug: str
    declared_count: int
    items: tuple[MetricRecord, ...] = ()

    @property
    def count(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class Catalog:
    categories: tuple[Category, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Category]:
        return iter(self.categories)

    def __len__(self) -> int:
        return len(self.categories)

    def find(self, name: str) -> Category | None:
        """Return the category whose display name is *name*, if any."""
        for cat in self.categories:
            if cat.category == name:
                return cat
        return None

    @property
    def total_records(self) -> int:
        return sum(cat.count for cat in self.categories)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def hydrate_record(raw: Mapping[str, Any], slug: str, index: int) -> MetricRecord:
    """Copy the known fields of *raw*, defaulting absent/null values to ``""``."""
    values = {name: _as_text(raw.get(name)) for name in RECORD_FIELDS}
    return MetricRecord(id=f"{slug}-{index}", **values)


def _parse_manifest_entry(entry: Any) -> CategoryMeta | None:
    if isinstance(entry, CategoryMeta):
        slug = entry.slug.strip()
        return replace(entry, slug=slug) if slug else None
    if not isinstance(entry, Mapping):
        return None
    slug = _as_text(entry.get("slug")).strip()
    if not slug:
        return None
    name = entry.get("Category", entry.get("category"))
    return CategoryMeta(
        category=_as_text(name),
        slug=slug,
        declared_count=_as_int(entry.get("count", entry.get("declared_count"))),
    )


def load(
    manifest: Sequence[Any],
    record_sources: Mapping[str, Sequence[Any]],
) -> Catalog:
    """Build an immutable :class:`Catalog` from a manifest and ``slug -> records`` sources.

    Manifest entries may be :class:`CategoryMeta` instances or raw mappings of the form
    ``{Category, slug, count}``. Entries without a slug are dropped; a slug with no
    record source becomes an empty category. Slugs and display names must be unique;
    later entries repeating either are skipped. The declared count is kept for reference
    only, ``Category.count`` always reflects the hydrated items.
    """
    categories: list[Category] = []
    seen: set[str] = set()
    seen_names: set[str] = set()
    for entry in manifest:
        meta = _parse_manifest_entry(entry)
        if meta is None:
            logger.warning("Dropping manifest entry without a slug: %r", entry)
            continue
        if meta.slug in seen:
            logger.warning("Skipping duplicate category slug %r", meta.slug)
            continue
        if meta.category in seen_names:
            logger.warning("Skipping duplicate category name %r (slug %r)", meta.category, meta.slug)
            continue
        seen.add(meta.slug)
        seen_names.add(meta.category)

        raw_items = record_sources.get(meta.slug)
        if raw_items is None:
            logger.debug("No record source for category %r", meta.slug)
            raw_items = []

        items = tuple(
            hydrate_record(raw, meta.slug, i)
            for i, raw in enumerate(raw_items)
            if isinstance(raw, Mapping)
        )
        categories.append(
            Category(
                category=meta.category,
                slug=meta.slug,
                declared_count=meta.declared_count,
                items=items,
            )
        )
    return Catalog(categories=tuple(categories))


def _resolve_data_dir(data_dir: str | None) -> str:
    return data_dir or os.environ.get("KPI_CATALOG_DATA_DIR") or _DATA_DIR


def _load_manifest(path: str) -> list[Any]:
    with open(path, "r", encoding="utf-8") as f:
        manifest = yaml.safe_load(f)
    if manifest is None:
        return []
    if not isinstance(manifest, list):
        raise CatalogError(f"Manifest {path} must be a list of categories")
    return manifest


def _load_record_file(path: str) -> list[Any]:
    with open(path, "r", encoding="utf-8") as f:
        records = json.load(f)
    if not isinstance(records, list):
        raise CatalogError(f"Record file {path} must contain a JSON array")
    return records


def load_record_sources(manifest: Sequence[Any], data_dir: str | None = None) -> dict[str, list[Any]]:
    """Read ``metrics/<slug>.json`` for every manifest slug that has a file."""
    metrics_dir = os.path.join(_resolve_data_dir(data_dir), _METRICS_DIR)
    sources: dict[str, list[Any]] = {}
    for entry in manifest:
        meta = _parse_manifest_entry(entry)
        if meta is None:
            continue
        path = os.path.join(metrics_dir, f"{meta.slug}.json")
        if os.path.exists(path):
            sources[meta.slug] = _load_record_file(path)
    return sources


def load_bundle(data_dir: str | None = None) -> Catalog:
    """Load the catalog bundled under *data_dir* (manifest YAML + per-slug JSON)."""
    data_dir = _resolve_data_dir(data_dir)
    manifest = _load_manifest(os.path.join(data_dir, _MANIFEST_FILE))
    catalog = load(manifest, load_record_sources(manifest, data_dir))
    logger.info(
        "Loaded metrics catalog from %s: %d categories, %d records",
        data_dir, len(catalog), catalog.total_records,
    )
    return catalog
