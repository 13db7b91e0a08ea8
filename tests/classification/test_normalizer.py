"""Unit tests for dataset category normalization."""

import pytest

from cookielens.classification.models import CookieCategory
from cookielens.classification.normalizer import normalize_category


class TestNormalizeCategory:

    @pytest.mark.parametrize("label,expected", [
        ("Functional", CookieCategory.STRICTLY_NECESSARY),
        ("Security", CookieCategory.STRICTLY_NECESSARY),
        ("Strictly Necessary", CookieCategory.STRICTLY_NECESSARY),
        ("Personalization", CookieCategory.FUNCTIONAL),
        ("Preferences", CookieCategory.FUNCTIONAL),
        ("Analytics", CookieCategory.PERFORMANCE),
        ("Statistics", CookieCategory.PERFORMANCE),
        ("Marketing", CookieCategory.TARGETING),
        ("Advertising", CookieCategory.TARGETING),
    ])
    def test_known_labels(self, label, expected):
        assert normalize_category(label) == expected

    def test_case_and_whitespace_insensitive(self):
        assert normalize_category("  MARKETING ") == CookieCategory.TARGETING
        assert normalize_category("analytics") == CookieCategory.PERFORMANCE

    def test_dataset_functional_is_strictly_necessary(self):
        """The dataset's "Functional" label means the site cannot work without the cookie."""
        assert normalize_category("Functional") != CookieCategory.FUNCTIONAL

    @pytest.mark.parametrize("label", ["", "Other", "unknown", None, 42])
    def test_unknown_labels_default_to_functional(self, label):
        assert normalize_category(label) == CookieCategory.FUNCTIONAL
