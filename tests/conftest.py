"""Shared test fixtures and configuration for cookielens tests."""

import json
import sys
from pathlib import Path

import pytest

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from cookielens.classification.classifier import CookieClassifier
from cookielens.classification.config import ConfigurationLoader
from cookielens.classification.knowledge_base import build_knowledge_base
from cookielens.classification.scoring import HeuristicScorer

# Fixed wall clock shared by lifespan-sensitive tests
FIXED_NOW = 1_700_000_000.0


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep COOKIELENS_* variables of the host shell out of the tests."""
    for env_suffix in ConfigurationLoader.ENV_MAPPING:
        monkeypatch.delenv(f"{ConfigurationLoader.ENV_PREFIX}{env_suffix}", raising=False)


@pytest.fixture
def sample_dataset():
    """Small vendor-grouped dataset covering exact and pattern definitions."""
    return {
        "Google Analytics": [
            {
                "id": "ga-1",
                "category": "Analytics",
                "cookie": "_ga",
                "domain": "google-analytics.com",
                "description": "Distinguishes unique users.",
                "retentionPeriod": "2 years",
                "dataController": "Google",
                "privacyLink": "https://policies.google.com/privacy",
                "wildcardMatch": "0"
            },
            {
                "id": "ga-2",
                "category": "Analytics",
                "cookie": "^_ga_[A-Z0-9]+$",
                "domain": "google-analytics.com",
                "description": "Persists session state.",
                "retentionPeriod": "2 years",
                "dataController": "Google",
                "privacyLink": "",
                "wildcardMatch": "1"
            }
        ],
        "PHP.net": [
            {
                "id": "php-1",
                "category": "Functional",
                "cookie": "PHPSESSID",
                "domain": "",
                "description": "Preserves user session state.",
                "retentionPeriod": "session",
                "dataController": "",
                "privacyLink": "",
                "wildcardMatch": "0"
            }
        ],
        "Hotjar": [
            {
                "id": "hj-1",
                "category": "Analytics",
                "cookie": "_hj",
                "domain": "hotjar.com",
                "description": "Generic Hotjar cookie.",
                "retentionPeriod": "1 year",
                "dataController": "Hotjar",
                "privacyLink": "",
                "wildcardMatch": "1"
            },
            {
                "id": "hj-2",
                "category": "Marketing",
                "cookie": "_hjSession",
                "domain": "hotjar.com",
                "description": "Hotjar session cookie.",
                "retentionPeriod": "30 minutes",
                "dataController": "Hotjar",
                "privacyLink": "",
                "wildcardMatch": "1"
            }
        ]
    }


@pytest.fixture
def knowledge_base(sample_dataset):
    return build_knowledge_base(sample_dataset, source="fixture")


@pytest.fixture
def classifier(knowledge_base):
    """Classifier over the sample dataset with a frozen clock."""
    return CookieClassifier(
        knowledge_base=knowledge_base,
        scorer=HeuristicScorer(clock=lambda: FIXED_NOW)
    )


@pytest.fixture
def dataset_file(tmp_path, sample_dataset):
    path = tmp_path / "cookies-db.json"
    path.write_text(json.dumps(sample_dataset), encoding="utf-8")
    return path


@pytest.fixture
def cookie_export_file(tmp_path):
    """Browser cookie-jar export with one known and one unknown cookie."""
    path = tmp_path / "cookies.json"
    path.write_text(json.dumps([
        {
            "name": "_ga",
            "domain": ".example.com",
            "value": "GA1.2.123456789.1700000000",
            "path": "/",
            "httpOnly": False,
            "secure": False,
            "hostOnly": False,
            "session": False,
            "sameSite": "lax",
            "expirationDate": FIXED_NOW + 2 * 31536000
        },
        {
            "name": "sess_id",
            "domain": "example.com",
            "value": "abc",
            "path": "/",
            "httpOnly": True,
            "secure": True,
            "hostOnly": True,
            "session": True,
            "sameSite": "strict"
        }
    ]), encoding="utf-8")
    return path
