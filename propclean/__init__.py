"""
Text standardization for administrative property records.

This package provides rule-based cleanup for:
- Free-text strings (blanks, punctuation, number words)
- Street addresses (street types, unit suffixes, PO Boxes)
- City names (neighborhood -> parent city)
- Owner and corporate names (entity types, agent boilerplate)
"""

from .addresses import (
    std_hyphenated_numbers,
    std_massachusetts,
    std_onewordaddress,
    std_select_address,
    std_simplify_address,
    std_street_types,
    std_zip,
)
from .cities import std_city_names
from .flows import (
    std_flow_addresses,
    std_flow_cities,
    std_flow_names,
    std_flow_strings,
)
from .names import (
    std_corp_rm_sys,
    std_corp_types,
    std_remove_co,
    std_remove_middle_initial,
)
from .reference import lookup_neighborhoods
from .strings import (
    std_and,
    std_andslash,
    std_directions,
    std_remove_special,
    std_replace_blank,
    std_small_numbers,
    std_the,
    std_trailingwords,
    std_uppercase,
)

__version__ = "0.1.0"

__all__ = [
    "lookup_neighborhoods",
    "std_and",
    "std_andslash",
    "std_city_names",
    "std_corp_rm_sys",
    "std_corp_types",
    "std_directions",
    "std_flow_addresses",
    "std_flow_cities",
    "std_flow_names",
    "std_flow_strings",
    "std_hyphenated_numbers",
    "std_massachusetts",
    "std_onewordaddress",
    "std_remove_co",
    "std_remove_middle_initial",
    "std_remove_special",
    "std_replace_blank",
    "std_select_address",
    "std_simplify_address",
    "std_small_numbers",
    "std_street_types",
    "std_the",
    "std_trailingwords",
    "std_uppercase",
    "std_zip",
]
