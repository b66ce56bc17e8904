"""Shared fixtures: a small hand-built catalog."""

import pytest

from src.catalog.metrics_catalog import load

MANIFEST = [
    {"Category": "Governance", "slug": "governance", "count": 2},
    {"Category": "Incident Response", "slug": "incident-response", "count": 1},
    {"Category": "Third-Party Risk", "slug": "third-party-risk", "count": 5},
]

SOURCES = {
    "governance": [
        {
            "Category": "Governance",
            "MetricTitle": "Board Reporting Cadence",
            "MetricDescription": "Security updates presented to the board.",
            "ReportPeriod": "Annually",
            "Target": "4 per year",
        },
        {
            "Category": "Governance",
            "MetricTitle": "Policy Review Rate",
            "MetricDescription": "Policies reviewed on schedule.",
            "Contributor": "GRC Team",
        },
    ],
    "incident-response": [
        {
            "Category": "Incident Response",
            "SubCategory": "Containment",
            "MetricTitle": "Mean Time to Contain",
            "MetricDescription": "Average time from detection to containment.",
            "Source": "Incident tracker",
        },
    ],
}


@pytest.fixture
def catalog():
    return load(MANIFEST, SOURCES)
