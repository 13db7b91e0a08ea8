"""Unit tests for site risk aggregation."""

import pytest

from cookielens.classification.models import CategoryCounts, RiskLevel
from cookielens.classification.risk import aggregate, risk_level_for


class TestAggregate:
    """Test the weighted risk formula."""

    def test_no_cookies_is_low_risk(self):
        risk = aggregate(CategoryCounts())

        assert risk.score == 0
        assert risk.label == RiskLevel.LOW
        assert risk.color == "#10B981"

    def test_score_is_clamped_to_maximum(self):
        risk = aggregate(CategoryCounts(targeting=13))

        assert risk.score == 100
        assert risk.label == RiskLevel.HIGH
        assert risk.color == "#F43F5E"

    def test_strictly_necessary_cannot_go_negative(self):
        assert aggregate(CategoryCounts(strictly_necessary=50)).score == 0

    def test_raw_value_is_floored(self):
        # 3 - 0.5 = 2.5
        assert aggregate(CategoryCounts(functional=3, strictly_necessary=1)).score == 2
        # 8 + 3 + 1 - 1.5 = 10.5
        counts = CategoryCounts(targeting=1, performance=1, functional=1, strictly_necessary=3)
        assert aggregate(counts).score == 10

    def test_weights(self):
        assert aggregate(CategoryCounts(targeting=1)).score == 8
        assert aggregate(CategoryCounts(performance=1)).score == 3
        assert aggregate(CategoryCounts(functional=1)).score == 1

    @pytest.mark.parametrize("functional,label", [
        (25, RiskLevel.LOW),
        (26, RiskLevel.MODERATE),
        (50, RiskLevel.MODERATE),
        (51, RiskLevel.ELEVATED),
        (75, RiskLevel.ELEVATED),
        (76, RiskLevel.HIGH),
        (100, RiskLevel.HIGH),
    ])
    def test_band_boundaries(self, functional, label):
        assert aggregate(CategoryCounts(functional=functional)).label == label

    def test_monotonic_in_each_count(self):
        """Raising a tracking count never lowers the score; raising strict never raises it."""
        base = dict(functional=2, performance=3, targeting=1, strictly_necessary=4)
        base_score = aggregate(CategoryCounts(**base)).score

        for field in ("functional", "performance", "targeting"):
            previous = base_score
            for extra in range(1, 20):
                score = aggregate(CategoryCounts(**{**base, field: base[field] + extra})).score
                assert score >= previous
                previous = score

        previous = base_score
        for extra in range(1, 40):
            score = aggregate(CategoryCounts(**{**base, "strictly_necessary": base["strictly_necessary"] + extra})).score
            assert score <= previous
            previous = score

    def test_score_always_in_bounds(self):
        for targeting in range(0, 30, 3):
            for strict in range(0, 200, 25):
                score = aggregate(CategoryCounts(targeting=targeting, strictly_necessary=strict)).score
                assert 0 <= score <= 100


class TestRiskLevelFor:

    def test_colors(self):
        assert risk_level_for(0) == (RiskLevel.LOW, "#10B981")
        assert risk_level_for(40) == (RiskLevel.MODERATE, "#F59E0B")
        assert risk_level_for(60) == (RiskLevel.ELEVATED, "#F97316")
        assert risk_level_for(99) == (RiskLevel.HIGH, "#F43F5E")
