"""
Owner and corporate name standardizers.
"""

import pandas as pd

from .columns import Columns, apply_to_columns
from .logging_utils import get_logger
from .rules import BLANK, Case, CaseTable, Rule, RuleTable

logger = get_logger(__name__)

CORP_TYPES = RuleTable(
    name="corp_types",
    rules=[
        Rule.of(r"LIMITED PARTNER?(SHIP)?", "LP"),
        Rule.of(r"LIMITED LIABILITY PARTNER?(SHIP)?", "LLP"),
        Rule.of(r"LIMITED LIABILITY (COMPANY|CORPORATION)", "LLC"),
        Rule.of(r"PRIVATE LIMITED", "LTD"),
        Rule.of(r"INCO?R?P?O?R?A?T?E?D ?$", "INC"),
        Rule.of(r"CORPO?R?A?T?I?O?N ?$", "CORP"),
        Rule.of(r"COMP(ANY)? ?$", "CO"),
        Rule.of(r"LIMITED$", "LTD"),
        Rule.of(r" TRU?S?T?E?E?S?( OF)?$", " TRUST"),
    ],
)

# Registered agent / corporate services boilerplate
CORP_SERVICES = CaseTable(
    name="corp_rm_sys",
    cases=[
        Case.search(r"((CORP(ORATION)?|LLC)?\s|^)(SYS|SER)", BLANK),
        Case.search(r"AGENT", BLANK),
        Case.search(r"BUSINESS FILINGS", BLANK),
    ],
)

# Single letter between two multi-letter tokens; first occurrence only.
MIDDLE_INITIAL = RuleTable(
    name="remove_middle_initial",
    rules=[
        Rule.of(r"[A-Z] ", "", before=r"[A-Z]{2} ", after=r"[A-Z]{2}", count=1),
    ],
)

CARE_OF = RuleTable(
    name="remove_co",
    rules=[
        Rule.of(r"C / O? ?", "", before=" |^"),
    ],
    trim=True,
)


def std_corp_types(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """
    Standardize corporate entity types.

    LIMITED PARTNERSHIP -> LP, LIMITED LIABILITY COMPANY -> LLC, trailing
    INCORPORATED -> INC, CORPORATION -> CORP, COMPANY -> CO, LIMITED -> LTD,
    TRUSTEES (OF) -> TRUST.
    """
    return apply_to_columns(df, cols, CORP_TYPES, stage="std_corp_types")


def std_corp_rm_sys(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """
    Null registered agent and corporate services boilerplate.

    Catches values like "CT CORPORATION SYSTEM", "CORPORATION SERVICE CO",
    "REGISTERED AGENTS INC" and "BUSINESS FILINGS INC", which name the
    filing agent rather than the owner.
    """
    return apply_to_columns(df, cols, CORP_SERVICES, stage="std_corp_rm_sys")


def std_remove_middle_initial(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """Remove a middle initial when formatted like "ERIC R HUNTLEY"."""
    return apply_to_columns(df, cols, MIDDLE_INITIAL, stage="std_remove_middle_initial")


def std_remove_co(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """
    Remove a "C / O" (care of) marker.

    Expects slashes already spaced by ``std_andslash``.
    """
    return apply_to_columns(df, cols, CARE_OF, stage="std_remove_co")


__all__ = [
    "CARE_OF",
    "CORP_SERVICES",
    "CORP_TYPES",
    "MIDDLE_INITIAL",
    "std_corp_rm_sys",
    "std_corp_types",
    "std_remove_co",
    "std_remove_middle_initial",
]
