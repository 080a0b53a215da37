"""
Column selection for standardization stages.

A stage only ever rewrites the text columns it was asked for. Requested
names that are missing from the frame, or whose values are not text, are
skipped rather than raised, so one flow can run against datasets whose
schemas drift.
"""

from typing import Callable, Iterable, Optional, Union

import pandas as pd

from .logging_utils import get_logger
from .rules import is_null

logger = get_logger(__name__)

Columns = Union[str, Iterable[str]]


def is_text_column(series: pd.Series) -> bool:
    """
    Check whether a column holds optional-string values.

    String dtypes qualify. Object columns qualify when every non-null value is
    a ``str`` (so an all-null object column counts as text).
    """
    if isinstance(series.dtype, pd.StringDtype):
        return True
    if not pd.api.types.is_object_dtype(series.dtype):
        return False
    return all(isinstance(value, str) for value in series.dropna())


def select_text_columns(df: pd.DataFrame, cols: Columns) -> list[str]:
    """
    Resolve a target set to the columns a stage may rewrite.

    Args:
        df: Frame being standardized
        cols: A column name or iterable of names

    Returns:
        Requested names present in ``df`` and text-typed, in request order
    """
    if isinstance(cols, str):
        cols = [cols]

    selected = []
    for col in dict.fromkeys(cols):
        if col not in df.columns:
            logger.debug(f"Skipping column '{col}': not present")
            continue
        if not is_text_column(df[col]):
            logger.debug(f"Skipping column '{col}': not text ({df[col].dtype})")
            continue
        selected.append(col)
    return selected


def apply_to_columns(
    df: pd.DataFrame,
    cols: Columns,
    func: Callable[[str], Optional[str]],
    stage: Optional[str] = None,
) -> pd.DataFrame:
    """
    Map ``func`` over the selected text columns of a copy of ``df``.

    Nulls are passed through without calling ``func``. Other columns, the
    index and the column order are left as they were.

    Args:
        df: Input frame (not modified)
        cols: Target column name(s)
        func: Value transform; may return None to null the field
        stage: Stage name for logging

    Returns:
        New DataFrame with the targeted columns rewritten
    """
    out = df.copy()
    targets = select_text_columns(df, cols)

    for col in targets:
        out[col] = out[col].map(
            lambda value: value if is_null(value) else func(value)
        )

    logger.debug(f"{stage or getattr(func, '__name__', 'stage')} applied to {targets}")
    return out


__all__ = [
    "Columns",
    "apply_to_columns",
    "is_text_column",
    "select_text_columns",
]
