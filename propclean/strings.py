"""
General-purpose string standardizers.

These stages apply to any free-text column (names, addresses, cities):
- blank classification (placeholder values become null)
- cardinal direction expansion
- slash/ampersand spacing
- special character removal
- small number and ordinal words to digits
- leading/trailing THE, AND, OF stripping
- upper-casing
"""

import re
from typing import Optional

import pandas as pd

from .columns import Columns, apply_to_columns
from .logging_utils import get_logger
from .rules import BLANK, Case, CaseTable, Rule, RuleTable

logger = get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")


def squish(value: str) -> str:
    """Trim and collapse internal whitespace runs to one space."""
    return _WHITESPACE.sub(" ", value).strip()


# Placeholder values meaning "no value"
BLANK_VALUES = CaseTable(
    name="blank",
    cases=[
        Case.search(r"^X+$", BLANK),
        Case.search(r"^N(ONE)?$", BLANK),
        Case.search(r"^UNKNOWN$", BLANK),
        Case.search(r"ABOVE", BLANK),
        Case.search(r"^N ?/ ?A$", BLANK),
        Case.search(r"^[- ]*SAME( ADDRESS)?", BLANK),
    ],
    otherwise=squish,
)


def classify_blank(value: Optional[str]) -> Optional[str]:
    """Null a semantically blank value, otherwise squish its whitespace."""
    if value is None:
        return None
    return BLANK_VALUES.apply(squish(value))


# Expanded with a single space either side; the caller trims afterwards.
DIRECTIONS = RuleTable(
    name="directions",
    rules=[
        Rule.of(r"(^| )N\.? ", " NORTH "),
        Rule.of(r"(^| )N\.?W\.? ", " NORTHWEST "),
        Rule.of(r"(^| )N\.?E\.? ", " NORTHEAST "),
        Rule.of(r"(^| )S\.? ", " SOUTH "),
        Rule.of(r"(^| )S\.?W\.? ", " SOUTHWEST "),
        Rule.of(r"(^| )S\.?E\.? ", " SOUTHEAST "),
        Rule.of(r"(^| )E\.? ", " EAST "),
        Rule.of(r"(^| )W\.? ", " WEST "),
    ],
    trim=True,
)

AND_SLASH = RuleTable(
    name="andslash",
    rules=[
        Rule.of(r" ?/ ?", " / "),
        Rule.of(r" ?& ?", " AND "),
    ],
)

SPECIAL_CHARACTERS = RuleTable(
    name="remove_special",
    rules=[
        Rule.of(r"[^\w\s/-]|_", ""),
    ],
)

SMALL_NUMBERS = RuleTable(
    name="small_numbers",
    rules=[
        Rule.of(rf"^{word}", digit, after="[ -]")
        for word, digit in (
            ("ZERO", "0"),
            ("ONE", "1"),
            ("TWO", "2"),
            ("THREE", "3"),
            ("FOUR", "4"),
            ("FIVE", "5"),
            ("SIX", "6"),
            ("SEVEN", "7"),
            ("EIGHT", "8"),
            ("NINE", "9"),
            ("TEN", "10"),
        )
    ] + [
        Rule.of(word, ordinal, before=" |^", after=" ")
        for word, ordinal in (
            ("FIRST", "1ST"),
            ("SECOND", "2ND"),
            ("THIRD", "3RD"),
            ("FOURTH", "4TH"),
            ("FIFTH", "5TH"),
            ("SIXTH", "6TH"),
            ("SEVENTH", "7TH"),
            ("EIGHTH", "8TH"),
            ("NINTH", "9TH"),
            ("TENTH", "10TH"),
        )
    ],
)

TRAILING_WORDS = RuleTable(
    name="trailingwords",
    rules=[
        Rule.of(r" OF$", ""),
        Rule.of(r" AND$", ""),
        Rule.of(r"^THE ", ""),
    ],
)

EDGE_THE = RuleTable(
    name="the",
    rules=[
        Rule.of(r" THE$", ""),
        Rule.of(r"^THE ", ""),
    ],
)

EDGE_AND = RuleTable(
    name="and",
    rules=[
        Rule.of(r" AND$", ""),
        Rule.of(r"^AND ", ""),
    ],
)


def std_uppercase(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """Uppercase string values."""
    return apply_to_columns(df, cols, str.upper, stage="std_uppercase")


def std_replace_blank(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """
    Replace placeholder values with null and squish whitespace.

    Blank placeholders: all-X fillers, N / NONE, UNKNOWN, anything containing
    ABOVE, N/A, and SAME / SAME ADDRESS (optionally led by dashes or spaces).
    Empty and whitespace-only strings are not placeholders: they come back
    as ``""``, not null. Must run before stages that assume real content.
    """
    return apply_to_columns(df, cols, classify_blank, stage="std_replace_blank")


def std_directions(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """
    Expand abbreviated cardinal directions.

    ``N``, ``NW``, ``NE``, ``S``, ``SW``, ``SE``, ``E``, ``W`` (periods
    optional) at the start of a word become NORTH, NORTHWEST and so on.
    """
    return apply_to_columns(df, cols, DIRECTIONS, stage="std_directions")


def std_andslash(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """Put one space either side of slashes and replace & with AND."""
    return apply_to_columns(df, cols, AND_SLASH, stage="std_andslash")


def std_remove_special(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """Remove all special characters except slash and hyphen."""
    return apply_to_columns(df, cols, SPECIAL_CHARACTERS, stage="std_remove_special")


def std_small_numbers(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """
    Convert small number words to digits.

    A leading ZERO..TEN followed by a space or hyphen becomes 0..10; a
    standalone FIRST..TENTH becomes 1ST..10TH.
    """
    return apply_to_columns(df, cols, SMALL_NUMBERS, stage="std_small_numbers")


def std_trailingwords(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """Strip a trailing OF, a trailing AND and a leading THE."""
    return apply_to_columns(df, cols, TRAILING_WORDS, stage="std_trailingwords")


def std_the(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """Strip a leading or trailing THE."""
    return apply_to_columns(df, cols, EDGE_THE, stage="std_the")


def std_and(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """Strip a leading or trailing AND."""
    return apply_to_columns(df, cols, EDGE_AND, stage="std_and")


__all__ = [
    "AND_SLASH",
    "BLANK_VALUES",
    "DIRECTIONS",
    "EDGE_AND",
    "EDGE_THE",
    "SMALL_NUMBERS",
    "SPECIAL_CHARACTERS",
    "TRAILING_WORDS",
    "classify_blank",
    "squish",
    "std_and",
    "std_andslash",
    "std_directions",
    "std_remove_special",
    "std_replace_blank",
    "std_small_numbers",
    "std_the",
    "std_trailingwords",
    "std_uppercase",
]
