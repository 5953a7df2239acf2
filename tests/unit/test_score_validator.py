"""
Unit Tests for Score Validator

Tests for:
- Text and numeric parsing
- Clamping to the 0-100 range
- Malformed input normalization
- Idempotence
"""

import math

import pytest

from academic_transcript.score_validator import clamp_score, parse_score, validate_score


class TestValidateScore:
    """Tests for validate_score"""

    @pytest.mark.parametrize("raw, expected", [
        ("150", 100.0),
        ("-20", 0.0),
        ("", 0.0),
        ("85", 85.0),
        (" 92.5 ", 92.5),
        ("88abc", 88.0),
        (".5", 0.5),
        ("1e2", 100.0),
        (73, 73.0),
        (64.25, 64.25),
        (101.0, 100.0),
    ])
    def test_parses_and_clamps(self, raw, expected):
        """Test text and numeric input normalization"""
        assert validate_score(raw) == expected

    @pytest.mark.parametrize("raw", [None, "abc", "--5", "%", float("nan"), "-inf", "inf", True, [], {}])
    def test_malformed_input_is_zero(self, raw):
        """Test that unparseable or NaN input becomes 0"""
        assert validate_score(raw) == 0.0

    @pytest.mark.parametrize("raw, expected", [
        ("1e400", 100.0),
        ("-1e400", 0.0),
        (10 ** 400, 100.0),
        (-(10 ** 400), 0.0),
        (float("inf"), 100.0),
        (float("-inf"), 0.0),
    ])
    def test_overflow_clamps_to_bound(self, raw, expected):
        """Test values beyond the float range are clamped, not zeroed"""
        assert validate_score(raw) == expected

    @pytest.mark.parametrize("raw", ["150", "-20", "", "99.999", 42, "7.5e1", None, "x", -0.0, 100])
    def test_idempotent(self, raw):
        """Test validate(validate(x)) == validate(x)"""
        once = validate_score(raw)
        assert validate_score(once) == once
        assert 0.0 <= once <= 100.0

    def test_negative_zero_normalized(self):
        """Test that -0 comes back as a plain zero"""
        result = validate_score("-0")
        assert result == 0.0
        assert math.copysign(1.0, result) == 1.0


class TestHelpers:
    """Tests for parse/clamp helpers"""

    def test_parse_keeps_out_of_range_values(self):
        assert parse_score("150") == 150.0
        assert parse_score("-20") == -20.0

    def test_parse_overflow_keeps_sign(self):
        assert parse_score(10 ** 400) == math.inf
        assert parse_score("-1e400") == -math.inf

    def test_clamp_bounds(self):
        assert clamp_score(-1) == 0.0
        assert clamp_score(100.5) == 100.0
        assert clamp_score(55.5) == 55.5
