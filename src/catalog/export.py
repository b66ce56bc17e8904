"""Tabular export of displayed KPI records (DataFrame / CSV)."""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from src.catalog.metrics_catalog import RECORD_FIELDS, MetricRecord

EXPORT_COLUMNS: list[str] = ["id", *RECORD_FIELDS]


def records_to_frame(records: Iterable[MetricRecord]) -> pd.DataFrame:
    return pd.DataFrame([r.to_dict() for r in records], columns=EXPORT_COLUMNS)


def records_to_csv(records: Iterable[MetricRecord]) -> str:
    """CSV text for *records*, header included even when there are none."""
    return records_to_frame(records).to_csv(index=False)
