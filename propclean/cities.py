"""
City name standardization.

Neighborhood names reported in city fields ("DORCHESTER", "JAMAICA PLAIN")
are replaced with their parent city. The neighborhood table is supplied by
the caller (see ``propclean.reference.lookup_neighborhoods``).
"""

from types import MappingProxyType
from typing import Mapping

import pandas as pd

from .columns import Columns, apply_to_columns
from .logging_utils import get_logger

logger = get_logger(__name__)

# Postal place names that are not in the neighborhood table.
CITY_ALIASES: Mapping[str, str] = MappingProxyType({
    "ROXBURY CROSSING": "BOSTON",
    "DORCHESTER CENTER": "BOSTON",
    "NORTHWEST BEDFORD": "BEDFORD",
})


def std_city_names(
    df: pd.DataFrame,
    cols: Columns,
    neighborhoods: Mapping[str, str],
) -> pd.DataFrame:
    """
    Replace neighborhood names with their parent city.

    Values are compared trimmed and upper-cased; a value that is not a known
    neighborhood or alias is returned unchanged.

    Args:
        df: Input frame
        cols: City column(s)
        neighborhoods: Neighborhood name -> parent city, upper-cased

    Returns:
        New DataFrame with the city columns rewritten
    """
    parents = {
        **CITY_ALIASES,
        **{name.strip().upper(): city for name, city in neighborhoods.items()},
    }

    def parent_city(value: str) -> str:
        return parents.get(value.strip().upper(), value)

    logger.debug(f"std_city_names using {len(parents)} neighborhood names")
    return apply_to_columns(df, cols, parent_city, stage="std_city_names")


__all__ = ["CITY_ALIASES", "std_city_names"]
