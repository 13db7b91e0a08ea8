"""Site risk aggregation over per-category cookie counts."""

import math
from typing import Tuple

from .models import CategoryCounts, RiskLevel, RiskResult

TARGETING_WEIGHT = 8
PERFORMANCE_WEIGHT = 3
FUNCTIONAL_WEIGHT = 1
STRICTLY_NECESSARY_WEIGHT = 0.5

MAX_SCORE = 100

# Upper bound (inclusive) of each band, with its display color
RISK_BANDS: Tuple[Tuple[int, RiskLevel, str], ...] = (
    (25, RiskLevel.LOW, "#10B981"),
    (50, RiskLevel.MODERATE, "#F59E0B"),
    (75, RiskLevel.ELEVATED, "#F97316"),
    (MAX_SCORE, RiskLevel.HIGH, "#F43F5E"),
)


def risk_level_for(score: int) -> Tuple[RiskLevel, str]:
    """Get the severity band and color for a score."""
    for upper_bound, level, color in RISK_BANDS:
        if score <= upper_bound:
            return level, color
    return RISK_BANDS[-1][1], RISK_BANDS[-1][2]


def aggregate(counts: CategoryCounts) -> RiskResult:
    """Fold a site's category counts into a risk score.

    Targeting cookies weigh the most, strictly necessary cookies lower the
    score slightly. The raw value is floored and clamped to 0-100.

    Args:
        counts: Category counts for one scan

    Returns:
        Risk score with its severity label and color
    """
    raw = (
        counts.targeting * TARGETING_WEIGHT
        + counts.performance * PERFORMANCE_WEIGHT
        + counts.functional * FUNCTIONAL_WEIGHT
        - counts.strictly_necessary * STRICTLY_NECESSARY_WEIGHT
    )
    score = min(MAX_SCORE, max(0, math.floor(raw)))
    label, color = risk_level_for(score)
    return RiskResult(score=score, label=label, color=color)
