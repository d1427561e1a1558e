"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from lcicodec import (
    FloorField,
    GeodeticField,
    LocationRecord,
    UsagePolicyField,
)

# Sydney Opera House, as published in hostapd's test configurations (fixed form)
SYDNEY_HEX = "010008001052834d12efd2b08b9b4bf1cc2c0000410406000000000012060101"

# Mountain View sample from hostapd's hwsim tests (5-octet Z, no usage)
MTV_HEX = "01000800101298c0b512926666f6c2f1001c00004104050000c00012"

# MIT CSAIL Stata Center
MIT_HEX = "010008001052234a2e15923c6674dc1101500000410406000000000000060101"


@pytest.fixture
def sydney_hex() -> str:
    return SYDNEY_HEX


@pytest.fixture
def sydney_record() -> LocationRecord:
    """Sydney Opera House record that encodes to SYDNEY_HEX."""
    return LocationRecord(
        location=GeodeticField(
            latitude=-33.8570095,
            longitude=151.2152005,
            altitude=11.2,
            latitude_uncertainty=0.0007105,
            longitude_uncertainty=0.0007055,
            altitude_uncertainty=33.7,
        ),
        floor=FloorField(height_uncertainty=0.0078125),
        usage=UsagePolicyField(),
    )


@pytest.fixture
def mit_record() -> LocationRecord:
    """MIT Stata Center record that encodes to MIT_HEX."""
    return LocationRecord(
        location=GeodeticField(
            latitude=42.3616375,
            longitude=-71.09063,
            altitude=20,
            latitude_uncertainty=0.00063,
            longitude_uncertainty=0.00078,
            altitude_uncertainty=15,
        ),
        floor=FloorField(),
        usage=UsagePolicyField(),
    )


@pytest.fixture
def mit_hex() -> str:
    return MIT_HEX


@pytest.fixture
def mtv_hex() -> str:
    return MTV_HEX
