"""Streamlit UI – searchable browser for the cybersecurity KPI catalog."""

from __future__ import annotations

import logging
import os
import sys

# Ensure project root is on sys.path so `src.*` imports work when
# Streamlit is launched from the repo root via `streamlit run src/ui/app.py`.
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import altair as alt
import pandas as pd
import streamlit as st

from src.catalog.export import records_to_csv
from src.catalog.metrics_catalog import load_bundle
from src.search.engine import detail_fields
from src.search.view_state import CatalogView

logging.basicConfig(level=os.environ.get("KPI_CATALOG_LOG_LEVEL", "INFO"))

# Glyphs for the icon identifiers returned by detail_fields.
ICON_GLYPHS: dict[str, str] = {
    "calendar": "📅",
    "bullseye": "🎯",
    "comment": "💬",
    "user": "👤",
    "link": "🔗",
}

# ── page config ──────────────────────────────────────────────────
st.set_page_config(page_title="Cybersecurity KPI Catalog", layout="wide")
st.title("🛡️ Cybersecurity KPI Catalog")
st.caption("Browse curated security metrics by category, or search across the whole catalog.")

# ── catalog ──────────────────────────────────────────────────────
@st.cache_resource
def get_catalog():
    return load_bundle()

catalog = get_catalog()

if "view" not in st.session_state:
    st.session_state["view"] = CatalogView(catalog)
view: CatalogView = st.session_state["view"]
if view.catalog is not catalog:
    view.reload(catalog)

# ── sidebar ──────────────────────────────────────────────────────
def _on_query_change():
    st.session_state["view"].set_query(st.session_state["query"])


def _on_category_change():
    st.session_state["view"].set_selected_category(st.session_state["category"])


if "query" not in st.session_state:
    st.session_state["query"] = view.query

with st.sidebar:
    st.header("Search")
    st.text_input(
        "Filter metrics:",
        key="query",
        on_change=_on_query_change,
        placeholder="e.g., phishing, MTTR, patch",
    )

    st.markdown("---")
    st.header("Categories")
    visible = view.visible_categories
    if visible:
        names = [v["category"] for v in visible]
        labels = {v["category"]: f"{v['category']} ({v['match_count']})" for v in visible}
        # Reconciliation may have moved the selection since the last click.
        st.session_state["category"] = view.selected_category
        st.radio(
            "Category",
            names,
            key="category",
            on_change=_on_category_change,
            format_func=lambda name: labels[name],
            label_visibility="collapsed",
            disabled=bool(view.query.strip()),
        )
    else:
        st.info("No categories match.")

# ── summary ──────────────────────────────────────────────────────
c1, c2, c3 = st.columns(3)
c1.metric("Categories", sum(1 for cat in catalog if cat.count))
c2.metric("Metrics", catalog.total_records)
c3.metric("Showing", len(view.records))

if visible:
    df = pd.DataFrame(visible)
    chart = (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X("match_count:Q", title="Matching metrics"),
            y=alt.Y("category:N", sort=None, title=None),
            tooltip=["category", "count", "match_count"],
        )
    )
    st.altair_chart(chart, width="stretch")

# ── records ──────────────────────────────────────────────────────
records = view.records
if view.query.strip():
    st.markdown(f"### 🔍 Results for “{view.query.strip()}”")
elif view.selected_category:
    st.markdown(f"### {view.selected_category}")

if not records:
    st.info("No results. Try a different search term.")
else:
    for record in records:
        with st.expander(record.MetricTitle or record.id):
            st.markdown(record.MetricDescription)
            if record.SubCategory:
                st.caption(f"{record.Category} · {record.SubCategory}")
            for entry in detail_fields(record):
                glyph = ICON_GLYPHS.get(entry["icon"], "•")
                st.markdown(f"{glyph} **{entry['field']}:** {entry['value']}")

    st.download_button(
        "⬇️ Download CSV",
        data=records_to_csv(records),
        file_name="kpi_catalog_export.csv",
        mime="text/csv",
    )
