"""Pytest fixtures/config for Gatedrop tests."""

import os
import sys

import pandas as pd
import pytest


def pytest_sessionstart(session) -> None:  # type: ignore[unused-argument]
    repo_root = os.path.dirname(os.path.dirname(__file__))
    src_path = os.path.join(repo_root, "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)


def _candidate_rows():
    """Ten riders per class: 2 All-Stars, 8 others, distinct expected points."""
    rows = []
    for bike_class, base in (("450", 100), ("250", 200)):
        for i in range(10):
            rows.append({
                "rider_id": base + i,
                "rider_name": f"Rider {base + i}",
                "bike_class": bike_class,
                "is_all_star": i in (1, 6),
                "is_excluded": False,
                "expected_points": 40.0 - i * 3.5,
            })
    return rows


@pytest.fixture
def candidate_rows():
    """Candidate rows as dicts (see _candidate_rows)."""
    return _candidate_rows()


@pytest.fixture
def candidates_df():
    """Candidate rows as a DataFrame."""
    return pd.DataFrame(_candidate_rows())
