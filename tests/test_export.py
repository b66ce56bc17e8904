"""Tests for the CSV/DataFrame export."""

import io

import pandas as pd

from src.catalog.export import EXPORT_COLUMNS, records_to_csv, records_to_frame


def test_frame_has_all_columns(catalog):
    df = records_to_frame(catalog.find("Governance").items)
    assert list(df.columns) == EXPORT_COLUMNS
    assert list(df["id"]) == ["governance-0", "governance-1"]
    assert df.loc[1, "Target"] == ""


def test_csv_round_trips_titles(catalog):
    text = records_to_csv(catalog.find("Incident Response").items)
    df = pd.read_csv(io.StringIO(text), keep_default_na=False)
    assert list(df["MetricTitle"]) == ["Mean Time to Contain"]
    assert df.loc[0, "Source"] == "Incident tracker"


def test_empty_export_keeps_header():
    text = records_to_csv([])
    assert text.strip() == ",".join(EXPORT_COLUMNS)
