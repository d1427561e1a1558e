"""Unit tests for encoded size calculation."""

from __future__ import annotations

import pytest

from lcicodec import (
    BssidList,
    FloorField,
    GeodeticField,
    LocationRecord,
    UnknownSubelement,
    UsagePolicyField,
    encode,
    encoded_size,
    subelement_sizes,
)
from lcicodec.utils import HEADER_LENGTH, subelement_size


class TestSubelementSize:
    """Test worst-case size of each subelement."""

    def test_fixed_sizes(self) -> None:
        """Test subelements with a fixed largest form."""
        assert subelement_size(GeodeticField()) == 18
        assert subelement_size(FloorField()) == 8
        assert subelement_size(UsagePolicyField()) == 5

    def test_variable_sizes(self) -> None:
        """Test subelements sized by their content."""
        bssids = BssidList(addresses=["00:11:22:33:44:55", "001122334466"])
        assert subelement_size(bssids) == 2 + 1 + 12
        assert subelement_size(UnknownSubelement(subelement_id=9, payload=b"abc")) == 5

    def test_not_a_subelement(self) -> None:
        with pytest.raises(TypeError):
            subelement_size(LocationRecord())  # type: ignore[arg-type]


class TestEncodedSize:
    """Test worst-case size of records."""

    def test_empty(self) -> None:
        """Test a record without subelements."""
        assert encoded_size(LocationRecord()) == HEADER_LENGTH

    def test_sydney(self, sydney_record: LocationRecord) -> None:
        """Test that the bound covers the actual encoding."""
        assert encoded_size(sydney_record) == 3 + 18 + 8 + 5
        assert len(encode(sydney_record).data) <= encoded_size(sydney_record)

    def test_sizes_by_id(self, sydney_record: LocationRecord) -> None:
        assert subelement_sizes(sydney_record) == {0: 18, 4: 8, 6: 5}

    def test_unknown_sizes_accumulate(self) -> None:
        """Test several unknown subelements with the same ID."""
        record = LocationRecord(
            unknown=[
                UnknownSubelement(subelement_id=9, payload=b"a"),
                UnknownSubelement(subelement_id=9, payload=b"bc"),
            ]
        )
        assert subelement_sizes(record) == {9: 7}
