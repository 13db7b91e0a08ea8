"""Mapping of free-text dataset category labels onto the consent categories."""

from typing import Dict, Optional

from .models import CookieCategory

# Labels are compared lowercase. The dataset uses "Functional" for cookies
# the site cannot work without, so it lands in Strictly Necessary.
CATEGORY_LABELS: Dict[str, CookieCategory] = {
    "functional": CookieCategory.STRICTLY_NECESSARY,
    "security": CookieCategory.STRICTLY_NECESSARY,
    "strictly necessary": CookieCategory.STRICTLY_NECESSARY,
    "personalization": CookieCategory.FUNCTIONAL,
    "preferences": CookieCategory.FUNCTIONAL,
    "analytics": CookieCategory.PERFORMANCE,
    "performance": CookieCategory.PERFORMANCE,
    "statistics": CookieCategory.PERFORMANCE,
    "marketing": CookieCategory.TARGETING,
    "advertising": CookieCategory.TARGETING,
    "targeting": CookieCategory.TARGETING,
}


def normalize_category(label: Optional[str]) -> CookieCategory:
    """Normalize a dataset category label.

    Args:
        label: Category label as written in the dataset

    Returns:
        Matching consent category, Functional when the label is unknown
    """
    if not isinstance(label, str):
        return CookieCategory.FUNCTIONAL
    return CATEGORY_LABELS.get(label.strip().lower(), CookieCategory.FUNCTIONAL)
