"""Cookie consent classification and site risk scoring.

This package classifies observed cookies into consent categories using a
known-cookie knowledge base with a heuristic scoring fallback, and folds
per-site category counts into a bounded risk score.
"""

from .models import (
    CookieAttributes,
    SameSiteStatus,
    CookieCategory,
    RetentionLabel,
    MatchType,
    KnowledgeBaseRecord,
    ClassificationResult,
    HeuristicVerdict,
    CategoryCounts,
    RiskLevel,
    RiskResult,
    ClassifiedCookie,
    SiteScanReport
)

from .exceptions import (
    CookieLensError,
    KnowledgeBaseFormatError,
    RestrictedPageError,
    CookieExportError
)

from .normalizer import normalize_category
from .knowledge_base import (
    KnowledgeBase,
    build_knowledge_base,
    load_knowledge_base,
    load_default_knowledge_base
)
from .heuristics import calculate_entropy, is_known_ad_domain, is_third_party
from .scoring import HeuristicScorer
from .classifier import CookieClassifier
from .risk import aggregate
from .collection import load_cookie_export, parse_cookie_export
from .service import CookieScanService, create_scan_service, hostname_from_url
from .config import (
    ClassifierConfiguration,
    load_configuration,
    build_classifier
)

__all__ = [
    # Core Models
    "CookieAttributes",
    "SameSiteStatus",
    "CookieCategory",
    "RetentionLabel",
    "MatchType",
    "KnowledgeBaseRecord",
    "ClassificationResult",
    "HeuristicVerdict",
    "CategoryCounts",
    "RiskLevel",
    "RiskResult",
    "ClassifiedCookie",
    "SiteScanReport",

    # Errors
    "CookieLensError",
    "KnowledgeBaseFormatError",
    "RestrictedPageError",
    "CookieExportError",

    # Knowledge Base
    "normalize_category",
    "KnowledgeBase",
    "build_knowledge_base",
    "load_knowledge_base",
    "load_default_knowledge_base",

    # Engine
    "calculate_entropy",
    "is_known_ad_domain",
    "is_third_party",
    "HeuristicScorer",
    "CookieClassifier",
    "aggregate",

    # Host Adapters
    "load_cookie_export",
    "parse_cookie_export",
    "CookieScanService",
    "create_scan_service",
    "hostname_from_url",

    # Configuration
    "ClassifierConfiguration",
    "load_configuration",
    "build_classifier"
]
