"""Browsing view state – query/selection setters that keep derived state reconciled."""

from __future__ import annotations

import logging
from typing import Any

from src.catalog.metrics_catalog import Catalog, MetricRecord
from src.search.engine import display_records, reconcile_selection, visible_categories

logger = logging.getLogger(__name__)


class CatalogView:
    """Holds (catalog, query, selection) and recomputes derived state on every change.

    The catalog is never mutated; :meth:`reload` swaps the whole reference.
    """

    def __init__(self, catalog: Catalog, query: str = "", selected_category: str = "") -> None:
        self._catalog = catalog
        self._query = query or ""
        self._selected = selected_category or ""
        self._visible: list[dict[str, Any]] = []
        self._records: list[MetricRecord] = []
        self._recompute()

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def query(self) -> str:
        return self._query

    @property
    def selected_category(self) -> str:
        return self._selected

    @property
    def visible_categories(self) -> list[dict[str, Any]]:
        return list(self._visible)

    @property
    def records(self) -> list[MetricRecord]:
        return list(self._records)

    def set_query(self, text: str) -> None:
        self._query = text if isinstance(text, str) else ""
        self._recompute()

    def set_selected_category(self, name: str) -> None:
        self._selected = name if isinstance(name, str) else ""
        self._recompute()

    def reload(self, catalog: Catalog) -> None:
        self._catalog = catalog
        self._recompute()

    def _recompute(self) -> None:
        visible = visible_categories(self._catalog, self._query)
        selected = reconcile_selection(visible, self._selected)
        if selected != self._selected:
            logger.debug("Selection %r no longer visible, switching to %r", self._selected, selected)
        self._visible = visible
        self._selected = selected
        self._records = display_records(self._catalog, self._query, selected)
