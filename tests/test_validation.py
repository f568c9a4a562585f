"""
Tests for identifier validation.
"""

import re

import pytest

from remote_resources import FORECAST, TIMESERIES
from remote_resources.models.resource import identifier_pattern
from remote_resources.validation import (
    resource_type_of,
    validate,
    validate_resource_id,
)

TIMESERIES_ID = "timeseries/abc123def456abc123def456"


class TestValidate:
    """Test pattern validation of candidate identifiers."""

    def test_matching_identifier(self):
        assert validate(TIMESERIES_ID, identifier_pattern("timeseries")) is True

    def test_accepts_pattern_string(self):
        assert validate(TIMESERIES_ID, r"^timeseries/[a-zA-Z0-9]{24}$") is True

    @pytest.mark.parametrize(
        "candidate",
        [
            None,
            "",
            42,
            "timeseries/abc123",  # too short
            "timeseries/abc123def456abc123def4567",  # too long
            "timeseries/abc123def456abc123def45!",  # bad character
            "forecast/abc123def456abc123def456",  # wrong type
            " timeseries/abc123def456abc123def456",
            "timeseries/abc123def456abc123def456\n",
        ],
    )
    def test_rejects(self, candidate):
        assert validate(candidate, identifier_pattern("timeseries")) is False

    def test_pattern_is_anchored_on_the_full_value(self):
        pattern = re.compile(r"timeseries/[a-zA-Z0-9]{24}")
        assert validate("x" + TIMESERIES_ID, pattern) is False


class TestResourceIdValidation:
    """Test validation against registered resource types."""

    def test_type_pattern(self):
        assert validate_resource_id(TIMESERIES_ID, TIMESERIES)
        assert not validate_resource_id(TIMESERIES_ID, FORECAST)

    def test_resource_type_of(self):
        assert resource_type_of(TIMESERIES_ID) == "timeseries"
        assert resource_type_of("forecast/0123456789abcdef01234567") == "forecast"

    @pytest.mark.parametrize("candidate", [None, "", "timeseries", "timeseries/short", 7])
    def test_resource_type_of_malformed(self, candidate):
        assert resource_type_of(candidate) is None
