"""
Tests for severity classification
"""
import pytest

import sys
sys.path.insert(0, '.')

from src.core.constants import HIGH_SEVERITY_KEYWORDS, MEDIUM_SEVERITY_KEYWORDS
from src.reports.classifier import classify
from src.reports.models import Indicator, Severity


class TestClassifier:
    """Test suite for the keyword severity classifier."""

    def test_high_keyword_wins_over_medium(self):
        """Test a single high keyword outranks medium keywords."""
        result = classify("URGENT overflow near garbage bin")

        assert result.level == Severity.HIGH
        assert result.indicator == Indicator.RED

    def test_high_dominates_many_medium_hits(self):
        result = classify("dirty unclean smell garbage waste broken, dangerous")

        assert result.level == Severity.HIGH
        assert result.matched_keywords == ("dangerous",)

    def test_matched_keywords_sorted_tuple_of_words(self):
        result = classify("Urgent: drain blocked, severe overflow")

        assert isinstance(result.matched_keywords, tuple)
        assert result.matched_keywords == ("blocked", "overflow", "severe", "urgent")
        assert all(isinstance(word, str) for word in result.matched_keywords)

    def test_medium_keyword(self):
        result = classify("the bin smells bad")

        assert result.level == Severity.MEDIUM
        assert result.indicator == Indicator.YELLOW
        assert "smell" in result.matched_keywords

    def test_no_keyword_is_low(self):
        result = classify("nice clean street")

        assert result.level == Severity.LOW
        assert result.indicator == Indicator.GREEN
        assert result.matched_keywords == ()

    @pytest.mark.parametrize("description", ["", "   ", "\n\t"])
    def test_empty_description_is_low(self, description):
        assert classify(description).level == Severity.LOW

    def test_case_insensitive(self):
        assert classify("EmErGeNcY at the market").level == Severity.HIGH
        assert classify("GARBAGE everywhere").level == Severity.MEDIUM

    def test_substring_matching(self):
        """Test keywords match inside longer words."""
        assert classify("Overflowing sewer").level == Severity.HIGH
        assert classify("wastewater pooling").level == Severity.MEDIUM

    @pytest.mark.parametrize("keyword", sorted(HIGH_SEVERITY_KEYWORDS))
    def test_every_high_keyword(self, keyword):
        assert classify(f"there is a {keyword} issue").level == Severity.HIGH

    @pytest.mark.parametrize("keyword", sorted(MEDIUM_SEVERITY_KEYWORDS))
    def test_every_medium_keyword(self, keyword):
        assert classify(f"there is a {keyword} issue").level == Severity.MEDIUM

    def test_deterministic(self):
        text = "Blocked drain with garbage"
        assert classify(text) == classify(text)

    def test_indicator_hex_codes(self):
        assert Indicator.RED.hex == "#ef4444"
        assert Indicator.YELLOW.hex == "#eab308"
        assert Indicator.GREEN.hex == "#22c55e"
