"""
Integration tests for the standardization workflows.

Tests stage ordering end to end plus the row and column invariants every
workflow must keep.
"""

import logging

import pandas as pd
import pytest
from pandas.testing import assert_frame_equal

from propclean.flows import (
    ADDRESS_STAGES,
    NAME_STAGES,
    STRING_STAGES,
    run_stages,
    std_flow_addresses,
    std_flow_cities,
    std_flow_names,
    std_flow_strings,
)
from propclean.logging_utils import stage_ctx


def values(df, col):
    return [None if pd.isna(value) else value for value in df[col]]


class TestStageOrder:
    """The workflows run their stages in a fixed order."""

    def test_string_stages(self):
        assert [stage.__name__ for stage in STRING_STAGES] == [
            "std_andslash",
            "std_remove_special",
            "std_replace_blank",
            "std_the",
            "std_small_numbers",
            "std_trailingwords",
            "std_uppercase",
        ]

    def test_address_stages(self):
        assert [stage.__name__ for stage in ADDRESS_STAGES] == [
            "std_street_types",
            "std_simplify_address",
            "std_directions",
            "std_hyphenated_numbers",
            "std_onewordaddress",
            "std_massachusetts",
        ]

    def test_name_stages(self):
        assert [stage.__name__ for stage in NAME_STAGES] == [
            "std_corp_types",
            "std_corp_rm_sys",
            "std_remove_middle_initial",
        ]


class TestFlowAddresses:
    """Tests for std_flow_addresses."""

    def test_examples(self, records):
        result = std_flow_addresses(records, ["address"])

        assert values(result, "address") == [
            "123 NORTH MAIN STREET",
            "45 ELM STREET",
            "PO BOX 45",
            "125 MAIN STREET",
        ]

    def test_po_box_survives_whole_flow(self):
        df = pd.DataFrame({"address": ["P.O. BOX 1209", "PO BOX 45 APT 3"]})

        result = std_flow_addresses(df, ["address"])

        assert values(result, "address") == ["PO BOX 1209", "PO BOX 45 APT 3"]

    def test_fragment_is_blanked(self):
        df = pd.DataFrame({"address": ["APT 5", "12 MASS AVE"]})

        result = std_flow_addresses(df, ["address"])

        assert values(result, "address") == [None, "12 MASSACHUSETTS AVENUE"]

    def test_ordinal_street_survives(self):
        """Ordinal suffixes are joined before street types are expanded."""
        df = pd.DataFrame({"address": ["10 W 3 RD ST"]})

        result = std_flow_addresses(df, ["address"])

        assert values(result, "address") == ["10 WEST 3RD STREET"]

    def test_numbered_street_is_not_blanked(self):
        """A final ST after a number stays a street type, so the value keeps two tokens."""
        df = pd.DataFrame({"address": ["100 W 42 ST", "12 ST"]})

        result = std_flow_addresses(df, ["address"])

        assert values(result, "address") == ["100 WEST 42 STREET", "12 STREET"]

    def test_floor_ordinal_is_stripped(self):
        df = pd.DataFrame({"address": ["10 MAIN ST 3RD FLOOR"]})

        result = std_flow_addresses(df, ["address"])

        assert values(result, "address") == ["10 MAIN STREET"]


class TestFlowStrings:
    """Tests for std_flow_strings."""

    def test_examples(self, records):
        result = std_flow_strings(records, ["owner"])

        assert values(result, "owner") == ["JOHN A SMITH", "SMITH AND JONES LLC", None, None]

    def test_cleans_then_uppercases(self):
        df = pd.DataFrame({"value": ["THE  FIRST CHURCH OF", "ONE-TWO ST.", "N/A", "XXX"]})

        result = std_flow_strings(df, "value")

        assert values(result, "value") == ["1ST CHURCH", "1-TWO ST", None, None]

    def test_feeds_address_flow(self):
        df = pd.DataFrame({"address": ["1 ELM ST., APT #4", "123 n. main st"]})

        result = std_flow_addresses(std_flow_strings(df, ["address"]), ["address"])

        assert values(result, "address") == ["1 ELM STREET", "123 NORTH MAIN STREET"]


class TestFlowNames:
    """Tests for std_flow_names."""

    def test_examples(self, records):
        cleaned = std_flow_strings(records, ["owner"])

        result = std_flow_names(cleaned, ["owner"])

        assert values(result, "owner") == ["JOHN SMITH", "SMITH AND JONES LLC", None, None]

    def test_boilerplate_and_suffixes(self):
        df = pd.DataFrame(
            {"owner": ["CT CORPORATION SYSTEM", "ERIC R HUNTLEY", "ACME REALTY LIMITED PARTNERSHIP"]}
        )

        result = std_flow_names(df, ["owner"])

        assert values(result, "owner") == [None, "ERIC HUNTLEY", "ACME REALTY LP"]


class TestFlowCities:
    """Tests for std_flow_cities."""

    def test_examples(self, records, neighborhoods):
        result = std_flow_cities(records, ["city"], neighborhoods)

        assert values(result, "city") == ["BOSTON", "BOSTON", "BOSTON", None]

    def test_expands_directions_after_lookup(self, neighborhoods):
        df = pd.DataFrame({"city": ["N ANDOVER", "S. BOSTON", "JAMAICA PLAIN"]})

        result = std_flow_cities(df, ["city"], neighborhoods)

        assert values(result, "city") == ["NORTH ANDOVER", "SOUTH BOSTON", "BOSTON"]


class TestInvariants:
    """Row and column invariants across every workflow."""

    @pytest.fixture
    def flows(self, neighborhoods):
        return [
            std_flow_strings,
            std_flow_addresses,
            std_flow_names,
            lambda df, cols: std_flow_cities(df, cols, neighborhoods),
        ]

    @pytest.mark.parametrize("target", ["owner", "address", "city"])
    def test_rows_and_untargeted_columns(self, records, flows, target):
        for flow in flows:
            result = flow(records, [target])

            assert len(result) == len(records)
            assert list(result.index) == list(records.index)
            assert list(result.columns) == list(records.columns)
            assert_frame_equal(result.drop(columns=target), records.drop(columns=target))

    def test_input_not_mutated(self, records, flows):
        original = records.copy()

        for flow in flows:
            flow(records, ["owner", "address", "city"])

        assert_frame_equal(records, original)

    def test_non_text_targets_are_noops(self, records, flows):
        for flow in flows:
            assert_frame_equal(flow(records, ["parcel_id", "assessed", "nope"]), records)


class TestRunStages:
    """Tests for run_stages."""

    def test_logs_stage_context(self, caplog):
        df = pd.DataFrame({"owner": ["ERIC R HUNTLEY"]})

        with caplog.at_level(logging.DEBUG, logger="propclean"):
            std_flow_names(df, ["owner"])

        stages = {getattr(record, "stage", None) for record in caplog.records}
        assert {"std_corp_types", "std_corp_rm_sys", "std_remove_middle_initial"} <= stages

    def test_stage_context_cleared(self):
        def failing(df, cols):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            run_stages(pd.DataFrame({"a": ["x"]}), ["a"], [failing], "test_flow")

        assert stage_ctx.get() is None
