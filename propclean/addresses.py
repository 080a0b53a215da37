"""
Street address standardizers.

Handles the address-specific rewrites:
- Street type abbreviation expansion (ST -> STREET, AVE -> AVENUE, ...)
- Unit/suite/floor suffix stripping, with PO Box lines set aside
- Hyphenated street number ranges (125-127A -> 125)
- Residual one-word address blanking
- State name and ZIP code simplification
- Choosing between two candidate address columns
"""

import pandas as pd

from .columns import Columns, apply_to_columns, select_text_columns
from .logging_utils import get_logger
from .rules import BLANK, Case, CaseTable, Rule, RuleTable, is_null

logger = get_logger(__name__)

# Token end: end of string, whitespace or a period
_TOKEN_END = r"$|\s|\."

STREET_TYPES = RuleTable(
    name="street_types",
    rules=[
        # Join numbers to ordinal suffixes first, so "3 RD" can't become "3 ROAD".
        # A suffix ending the value is a street type ("42 ST"), so it stays apart.
        Rule.of(r" ", "", before=r"[1-9 ][1-9]", after=r"(ST|RD|TH|ND) |$"),
        Rule.of(r"ST", "STREET", before=" ", after=_TOKEN_END),
        Rule.of(r"AVE?", "AVENUE", before=" ", after=_TOKEN_END),
        Rule.of(r"LA?N", "LANE", before=" ", after=_TOKEN_END),
        Rule.of(r"BLV?R?D?", "BOULEVARD", before=" ", after=_TOKEN_END),
        Rule.of(r"PR?KWA?Y", "PARKWAY", before=" ", after=_TOKEN_END),
        Rule.of(r"DRV?", "DRIVE", before=" ", after=_TOKEN_END),
        Rule.of(r"RD", "ROAD", before=" ", after=_TOKEN_END),
        Rule.of(r"TE?R+CE?|TERR?", "TERRACE", before=" ", after=_TOKEN_END),
        Rule.of(r"PLC?E?", "PLACE", before=" ", after=_TOKEN_END),
        Rule.of(r"CI?RC?", "CIRCLE", before=" ", after=_TOKEN_END),
        Rule.of(r"AL+E?Y", "ALLEY", before=" ", after=_TOKEN_END),
        Rule.of(r"SQR?", "SQUARE", before=" ", after=_TOKEN_END),
        Rule.of(r"HG?WY", "HIGHWAY", before=" ", after=_TOKEN_END),
        Rule.of(r"FR?WY", "FREEWAY", before=" ", after=_TOKEN_END),
        Rule.of(r"CR?T", "COURT", before=" ", after=_TOKEN_END),
        Rule.of(r"PLZ?", "PLAZA", before=" ", after=_TOKEN_END),
        Rule.of(r"W[HR]+F", "WHARF", before=" ", after=_TOKEN_END),
        Rule.of(r"P\.? ?O\.? ?BO?X", "PO BOX", before=" |^", after=_TOKEN_END),
    ],
)

# Trailing sub-address identifiers, most specific first.
UNIT_SUFFIXES = RuleTable(
    name="simplify_address",
    rules=[
        # Nth floor ending the value, before the unit word rule can take "FLOOR" alone.
        Rule.of(r"[ -]+[1-9]+(ND|ST|RD|TH)? FLO?O?R?$", ""),
        # Unit word, optionally followed by a short unit code.
        Rule.of(
            r"[ -]+(BLDG|UN?I?T|S(UI)?T?E|AP(ARTMEN)?T|NO|P ?O BOX|FLO?O?R|R(OO)?M|PMB)"
            r"( *#?[A-Z]?[0-9-]*([A-Z]|[A-Z][A-Z]|ABC)? ?$)",
            "",
        ),
        # Nth floor
        Rule.of(r"[ -]+[1-9]+(ND|ST|RD|TH)? (FLO?O?R?)", ""),
        # Ends with a series of letters and numbers.
        Rule.of(r"[ -]+[A-Z]?[0-9-]+([A-Z]|ABC)? ?$", ""),
        # Ends with a single number or letter.
        Rule.of(r"[ -]+[A-Z0-9-]$", ""),
    ],
)

HYPHENATED_NUMBERS = RuleTable(
    name="hyphenated_numbers",
    rules=[
        Rule.of(r"-[0-9]+[A-Z]?", "", before=r"[0-9]{1,4}[A-Z]?"),
        Rule.of(r"-", "", before=r"[0-9]{1,4}[A-Z]?", after=r"[A-Z]{1,2}"),
    ],
)

ONE_WORD_ADDRESS = RuleTable(
    name="onewordaddress",
    rules=[
        Rule.of(r"^[A-Z0-9]+$", BLANK),
    ],
)

MASSACHUSETTS = RuleTable(
    name="massachusetts",
    rules=[
        Rule.of(r"MASS ", "MASSACHUSETTS "),
    ],
)

ZIP_CODES = CaseTable(
    name="zip",
    cases=[
        Case.search(r"[0-9] [0-9]", lambda value: value.rsplit(" ", 1)[0]),
        Case.search(r"-", lambda value: value.rsplit("-", 1)[0]),
        Case.search(r"^0+$", BLANK),
    ],
)

PO_BOX_PREFIX = "PO BOX"


def std_street_types(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """
    Standardize street types.

    Abbreviations are expanded only as whole tokens (preceded by a space,
    followed by end of string, whitespace or a period).
    """
    return apply_to_columns(df, cols, STREET_TYPES, stage="std_street_types")


def std_simplify_address(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """
    Strip unit, suite, floor and similar trailing identifiers.

    Rows whose address starts with "PO BOX" are set aside before stripping,
    since a box number looks like a unit code, and are merged back by their
    original row position.

    Args:
        df: Input frame
        cols: Address column(s)

    Returns:
        New DataFrame with the same rows, in the same order

    Example:
        ```python
        std_simplify_address(df, ["address"])
        # "45 ELM STREET APT 3B" -> "45 ELM STREET"
        # "PO BOX 45"            -> "PO BOX 45"
        ```
    """
    out = df.copy()

    for col in select_text_columns(df, cols):
        # Positional index tags each row with its original place.
        values = out[col].reset_index(drop=True)
        is_po_box = values.str.startswith(PO_BOX_PREFIX, na=False).astype(bool)

        po_box = values[is_po_box]
        rest = values[~is_po_box].map(
            lambda value: value if is_null(value) else UNIT_SUFFIXES(value)
        )

        merged = pd.concat([rest, po_box]).sort_index()
        out[col] = merged.set_axis(out.index)

        logger.debug(
            f"std_simplify_address on '{col}': {int(is_po_box.sum())} PO Box rows set aside"
        )

    return out


def std_hyphenated_numbers(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """
    Strip the second half of a hyphenated street number.

    "125-127A" becomes "125" and "125-A" becomes "125A". The two passes are
    independent.
    """
    return apply_to_columns(df, cols, HYPHENATED_NUMBERS, stage="std_hyphenated_numbers")


def std_onewordaddress(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """
    Null addresses left as a single token.

    After unit stripping, values like "APT" or "3B" are fragments rather
    than addresses.
    """
    return apply_to_columns(df, cols, ONE_WORD_ADDRESS, stage="std_onewordaddress")


def std_massachusetts(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """Replace "MASS" with "MASSACHUSETTS"."""
    return apply_to_columns(df, cols, MASSACHUSETTS, stage="std_massachusetts")


def std_zip(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
    """
    Simplify US postal codes to their 5-digit form.

    Drops a space- or hyphen-separated suffix ("02118-1234" -> "02118");
    all-zero codes become null.
    """
    return apply_to_columns(df, cols, ZIP_CODES, stage="std_zip")


def std_select_address(
    df: pd.DataFrame,
    addr_col1: str,
    addr_col2: str,
    output_col: str = "address",
) -> pd.DataFrame:
    """
    Choose an address column on simple criteria.

    ``addr_col2`` wins when it starts with a number and ``addr_col1`` either
    does not, or names an LLC; otherwise ``addr_col1`` is kept.

    Args:
        df: Input frame
        addr_col1: Preferred address column
        addr_col2: Fallback address column
        output_col: Column that stores the selected address

    Returns:
        New DataFrame with ``output_col`` added (or overwritten)

    Raises:
        KeyError: If either address column is missing
    """
    missing = [col for col in (addr_col1, addr_col2) if col not in df.columns]
    if missing:
        raise KeyError(f"Address columns not found: {', '.join(missing)}")

    first = df[addr_col1].astype("object")
    second = df[addr_col2].astype("object")

    second_numbered = second.str.match(r"[0-9]", na=False).astype(bool)
    first_numbered = first.str.match(r"[0-9]", na=False).astype(bool)
    first_llc = first.str.contains("LLC", na=False).astype(bool)

    use_second = second_numbered & (~first_numbered | first_llc)

    out = df.copy()
    out[output_col] = second.where(use_second, first)

    logger.debug(
        f"std_select_address: {int(use_second.sum())}/{len(df)} rows took '{addr_col2}'"
    )
    return out


__all__ = [
    "HYPHENATED_NUMBERS",
    "MASSACHUSETTS",
    "ONE_WORD_ADDRESS",
    "STREET_TYPES",
    "UNIT_SUFFIXES",
    "ZIP_CODES",
    "std_hyphenated_numbers",
    "std_massachusetts",
    "std_onewordaddress",
    "std_select_address",
    "std_simplify_address",
    "std_street_types",
    "std_zip",
]
