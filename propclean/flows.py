"""
Standardization workflows.

Each workflow chains stages in a fixed order:
- std_flow_strings: generic cleanup for any free-text column
- std_flow_addresses: street addresses (run after std_flow_strings)
- std_flow_cities: city names, given a neighborhood table
- std_flow_names: owner and corporate names

Stages never raise for individual values, so a workflow always returns a
frame with the same rows, in the same order, as its input.
"""

from functools import partial
from typing import Callable, Mapping, Sequence

import pandas as pd

from .addresses import (
    std_hyphenated_numbers,
    std_massachusetts,
    std_onewordaddress,
    std_simplify_address,
    std_street_types,
)
from .cities import std_city_names
from .columns import Columns
from .logging_utils import get_logger, set_stage
from .names import std_corp_rm_sys, std_corp_types, std_remove_middle_initial
from .strings import (
    std_andslash,
    std_directions,
    std_remove_special,
    std_replace_blank,
    std_small_numbers,
    std_the,
    std_trailingwords,
    std_uppercase,
)

logger = get_logger(__name__)

Stage = Callable[[pd.DataFrame, Columns], pd.DataFrame]

STRING_STAGES: Sequence[Stage] = (
    std_andslash,
    std_remove_special,
    std_replace_blank,
    std_the,
    std_small_numbers,
    std_trailingwords,
    std_uppercase,
)

ADDRESS_STAGES: Sequence[Stage] = (
    std_street_types,
    std_simplify_address,
    std_directions,
    std_hyphenated_numbers,
    std_onewordaddress,
    std_massachusetts,
)

NAME_STAGES: Sequence[Stage] = (
    std_corp_types,
    std_corp_rm_sys,
    std_remove_middle_initial,
)


def _stage_name(stage: Stage) -> str:
    return getattr(stage, "__name__", None) or stage.func.__name__


def run_stages(
    df: pd.DataFrame,
    cols: Columns,
    stages: Sequence[Stage],
    flow: str,
) -> pd.DataFrame:
    """
    Apply ``stages`` to ``df`` in order.

    Args:
        df: Input frame (not modified)
        cols: Target column(s), passed to every stage
        stages: Stage callables taking (df, cols)
        flow: Workflow name for logging

    Returns:
        Frame returned by the last stage
    """
    cols = [cols] if isinstance(cols, str) else list(cols)
    logger.info(f"{flow}: {len(df)} rows, columns {cols}")

    try:
        for stage in stages:
            set_stage(_stage_name(stage))
            df = stage(df, cols)
    finally:
        set_stage(None)

    logger.info(f"{flow} complete")
    return df


def std_flow_strings(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """
    Generic string standardization workflow.

    andslash -> remove_special -> replace_blank -> the -> small_numbers ->
    trailingwords -> uppercase
    """
    return run_stages(df, cols, STRING_STAGES, "std_flow_strings")


def std_flow_addresses(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """
    Address standardization workflow.

    street_types -> simplify_address -> directions -> hyphenated_numbers ->
    onewordaddress -> massachusetts
    """
    return run_stages(df, cols, ADDRESS_STAGES, "std_flow_addresses")


def std_flow_cities(
    df: pd.DataFrame,
    cols: Columns,
    neighborhoods: Mapping[str, str],
) -> pd.DataFrame:
    """
    City standardization workflow.

    city_names -> directions

    Args:
        df: Input frame
        cols: City column(s)
        neighborhoods: Loaded neighborhood table (see lookup_neighborhoods)
    """
    stages = (
        partial(std_city_names, neighborhoods=neighborhoods),
        std_directions,
    )
    return run_stages(df, cols, stages, "std_flow_cities")


def std_flow_names(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """
    Name standardization workflow.

    corp_types -> corp_rm_sys -> remove_middle_initial
    """
    return run_stages(df, cols, NAME_STAGES, "std_flow_names")


__all__ = [
    "ADDRESS_STAGES",
    "NAME_STAGES",
    "STRING_STAGES",
    "run_stages",
    "std_flow_addresses",
    "std_flow_cities",
    "std_flow_names",
    "std_flow_strings",
]
