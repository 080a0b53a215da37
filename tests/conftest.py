"""
Pytest configuration and shared fixtures for propclean tests.
"""

import pandas as pd
import pytest


@pytest.fixture
def records():
    """Small mixed-type frame resembling assessor parcel records."""
    return pd.DataFrame(
        {
            "parcel_id": [101, 102, 103, 104],
            "owner": ["JOHN A SMITH", "SMITH & JONES LLC", "UNKNOWN", None],
            "address": ["123 N. MAIN ST", "45 ELM ST APT 3B", "PO BOX 45", "125-127A MAIN ST"],
            "city": ["DORCHESTER", "BOSTON", "ROXBURY CROSSING", None],
            "assessed": [250000.0, 310000.5, None, 99000.0],
        },
        index=[10, 11, 12, 13],
    )


@pytest.fixture
def neighborhoods():
    """Pre-normalized neighborhood table."""
    return {
        "DORCHESTER": "BOSTON",
        "JAMAICA PLAIN": "BOSTON",
        "ALLSTON": "BOSTON",
    }


@pytest.fixture
def neighborhood_csv(tmp_path):
    """Neighborhood CSV in the layout of the Boston open data export."""
    path = tmp_path / "bos_neighborhoods.csv"
    path.write_text(
        "OBJECTID,Name,Acres\n"
        "1,Roslindale,1605.5\n"
        "2,Jamaica Plain,2519.2\n"
        "3, Dorchester ,4662.8\n"
        "4,,12.0\n",
        encoding="utf-8",
    )
    return path
