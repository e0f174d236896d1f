"""
Tests for tier and prestige classification and label filters.
"""

import pytest

from gradmatch.logic.constants import TierLabel, PrestigeCategory
from gradmatch.logic.classifier import (
    classify_tier,
    classify_prestige,
    parse_label_filter,
    is_unfiltered,
    get_category_counts,
)
from gradmatch.logic.exceptions import ValidationError


class TestTier:

    @pytest.mark.parametrize("student, institution, expected", [
        (90, 75, TierLabel.SAFE),
        (80, 75, TierLabel.SAFE),        # difference exactly +5
        (79.99, 75, TierLabel.MODERATE),
        (75, 75, TierLabel.MODERATE),
        (70, 75, TierLabel.MODERATE),    # difference exactly -5
        (69.99, 75, TierLabel.AMBITIOUS),
        (40, 75, TierLabel.AMBITIOUS),
    ])
    def test_boundaries(self, student, institution, expected):
        assert classify_tier(student, institution) is expected


class TestPrestige:

    @pytest.mark.parametrize("ranking, expected", [
        (1, PrestigeCategory.DREAM),
        (40, PrestigeCategory.DREAM),
        (41, PrestigeCategory.COMPETITIVE),
        (120, PrestigeCategory.COMPETITIVE),
        (121, PrestigeCategory.SAFE),
        (9999, PrestigeCategory.SAFE),
        (0, PrestigeCategory.SAFE),      # unranked
        (-3, PrestigeCategory.SAFE),
    ])
    def test_boundaries(self, ranking, expected):
        assert classify_prestige(ranking) is expected


class TestLabelFilter:

    @pytest.mark.parametrize("value", [None, "", "all", "ALL", " all "])
    def test_unfiltered(self, value):
        assert is_unfiltered(value)
        assert parse_label_filter(value, TierLabel) is None

    def test_case_insensitive_label(self):
        assert parse_label_filter("dream", PrestigeCategory) is PrestigeCategory.DREAM
        assert parse_label_filter("Ambitious", TierLabel) is TierLabel.AMBITIOUS

    def test_shared_label_text_resolves_per_set(self):
        assert parse_label_filter("Safe", TierLabel) is TierLabel.SAFE
        assert parse_label_filter("Safe", PrestigeCategory) is PrestigeCategory.SAFE

    def test_enum_member_passes_through(self):
        assert parse_label_filter(TierLabel.MODERATE, TierLabel) is TierLabel.MODERATE

    def test_member_of_other_set_rejected(self):
        with pytest.raises(ValidationError) as exc:
            parse_label_filter(PrestigeCategory.SAFE, TierLabel)
        assert "filter" in exc.value.errors

    def test_unknown_label_rejected(self):
        with pytest.raises(ValidationError) as exc:
            parse_label_filter("Dream", TierLabel)
        assert "expected one of" in exc.value.errors["filter"]


def test_category_counts_include_empty_labels():
    counts = get_category_counts(
        [PrestigeCategory.DREAM, PrestigeCategory.DREAM, PrestigeCategory.SAFE],
        PrestigeCategory,
    )
    assert counts == {"Dream": 2, "Competitive": 0, "Safe": 1}
