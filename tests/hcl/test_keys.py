"""Tests for attribute key normalization."""

import pytest
from hclimport.hcl.keys import normalize_key


class TestNormalizeKey:
    """Test mixed-case to snake_case conversion."""

    @pytest.mark.parametrize("name,expected", [
        ("userId", "user_id"),
        ("user_Id", "user_id"),
        ("Enabled", "enabled"),
        ("Roles", "roles"),
        ("HTTPServer", "http_server"),
        ("userID", "user_id"),
        ("brandId2", "brand_id2"),
        ("AllowAssumedSignin", "allow_assumed_signin"),
    ])
    def test_mixed_case(self, name, expected):
        """Mixed-case names become lowercase words joined by underscores."""
        assert normalize_key(name) == expected

    @pytest.mark.parametrize("name", ["already_snake", "id", "x", "123", "-", "a_b_c"])
    def test_passthrough(self, name):
        """Normalized and non-alphabetic names are unchanged."""
        assert normalize_key(name) == name

    def test_idempotent(self):
        """Normalizing twice gives the same result."""
        once = normalize_key("loginConfigURLValue")
        assert normalize_key(once) == once
