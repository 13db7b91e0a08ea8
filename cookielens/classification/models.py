"""Pydantic models for cookie classification and site risk scoring.

This module defines the data model shared by the knowledge base, the
classification engine, the heuristic scorer and the risk aggregator:
observed cookie attributes, the closed category set, classification
results, per-scan category counts and the aggregated risk result.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field, field_validator


class SameSiteStatus(str, Enum):
    """SameSite policy as reported by the browser cookie jar."""
    NO_RESTRICTION = "no_restriction"
    LAX = "lax"
    STRICT = "strict"
    UNSPECIFIED = "unspecified"

    @classmethod
    def coerce(cls, value: Any) -> "SameSiteStatus":
        """Map a raw sameSite value onto the enum, defaulting to unspecified."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.UNSPECIFIED

        normalized = value.strip().lower()
        # Set-Cookie spelling of no_restriction
        if normalized == "none":
            return cls.NO_RESTRICTION
        for member in cls:
            if member.value == normalized:
                return member
        return cls.UNSPECIFIED


class CookieCategory(str, Enum):
    """Consent categories a cookie can be classified into."""
    STRICTLY_NECESSARY = "Strictly Necessary"
    FUNCTIONAL = "Functional"
    PERFORMANCE = "Performance"
    TARGETING = "Targeting"


class RetentionLabel(str, Enum):
    """Retention labels used for cookie lifetimes."""
    SESSION = "Session"
    SHORT_TERM = "Short-term"
    MEDIUM_TERM = "Medium-term"
    LONG_TERM = "Long-term"
    PERSISTENT = "Persistent"
    VARIABLE = "Variable"


class MatchType(str, Enum):
    """Which resolution stage produced a classification."""
    EXACT = "exact"
    PATTERN = "pattern"
    HEURISTIC = "heuristic"


class RiskLevel(str, Enum):
    """Severity bands for the site risk score."""
    LOW = "Low Risk"
    MODERATE = "Moderate"
    ELEVATED = "Elevated"
    HIGH = "High Risk"


class CookieAttributes(BaseModel):
    """A cookie as observed in the browser.

    Accepts both snake_case field names and the camelCase keys used by
    browser cookie-jar APIs (httpOnly, hostOnly, sameSite, expirationDate).
    Missing values fall back to their neutral defaults.
    """

    name: str = Field(description="Cookie name")
    domain: str = Field(default="", description="Cookie domain attribute")
    value: str = Field(default="", description="Cookie value")
    path: str = Field(default="/", description="Cookie path")

    http_only: bool = Field(default=False, alias="httpOnly", description="HttpOnly flag")
    secure: bool = Field(default=False, description="Secure flag")
    host_only: bool = Field(default=False, alias="hostOnly", description="Host-only flag")
    session: bool = Field(default=False, description="Whether cookie is session-only")
    same_site: SameSiteStatus = Field(
        default=SameSiteStatus.UNSPECIFIED,
        alias="sameSite",
        description="SameSite policy"
    )
    expiration_date: Optional[float] = Field(
        default=None,
        alias="expirationDate",
        description="Absolute expiration time in epoch seconds"
    )

    class Config:
        """Pydantic configuration."""
        frozen = True
        populate_by_name = True
        extra = "ignore"

    @field_validator('same_site', mode='before')
    @classmethod
    def coerce_same_site(cls, v):
        return SameSiteStatus.coerce(v)

    @field_validator('name', 'domain', 'value', mode='before')
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v


class ClassificationResult(BaseModel):
    """Outcome of classifying a single cookie."""

    category: CookieCategory = Field(description="Consent category")
    vendor: str = Field(description="Human-readable vendor attribution")
    description: str = Field(description="User-facing rationale")
    retention: str = Field(description="Retention label or dataset retention period")
    match_type: MatchType = Field(
        default=MatchType.HEURISTIC,
        description="Resolution stage that produced this result"
    )

    class Config:
        """Pydantic configuration."""
        frozen = True


class KnowledgeBaseRecord(BaseModel):
    """A known cookie definition compiled from the dataset."""

    match_key: str = Field(description="Lowercase cookie name or regex source")
    is_pattern: bool = Field(default=False, description="Whether match_key is a regex")
    category: CookieCategory = Field(description="Normalized consent category")
    vendor: str = Field(description="Vendor label")
    description: str = Field(default="", description="Dataset description")
    retention: str = Field(default="", description="Dataset retention period, verbatim")
    domain: str = Field(default="", description="Domain noted in the dataset")
    privacy_link: str = Field(default="", description="Vendor privacy policy link")

    class Config:
        """Pydantic configuration."""
        frozen = True

    def to_result(self, match_type: MatchType) -> ClassificationResult:
        return ClassificationResult(
            category=self.category,
            vendor=self.vendor,
            description=self.description,
            retention=self.retention,
            match_type=match_type,
        )


class HeuristicVerdict(BaseModel):
    """Full output of the heuristic scorer, including the evidence behind it."""

    category: CookieCategory
    vendor: str
    description: str
    retention: RetentionLabel
    scores: Dict[CookieCategory, int] = Field(default_factory=dict)
    signals: List[str] = Field(default_factory=list)
    lifespan_seconds: float = 0.0

    class Config:
        """Pydantic configuration."""
        frozen = True

    def to_result(self) -> ClassificationResult:
        return ClassificationResult(
            category=self.category,
            vendor=self.vendor,
            description=self.description,
            retention=self.retention.value,
            match_type=MatchType.HEURISTIC,
        )


class CategoryCounts(BaseModel):
    """Per-category cookie counts for one page scan."""

    functional: int = Field(default=0, ge=0)
    performance: int = Field(default=0, ge=0)
    targeting: int = Field(default=0, ge=0)
    strictly_necessary: int = Field(default=0, ge=0)

    @classmethod
    def from_results(cls, results: Iterable[ClassificationResult]) -> "CategoryCounts":
        counts = cls()
        for result in results:
            counts.add(result.category)
        return counts

    def add(self, category: CookieCategory) -> None:
        """Count one more cookie in the given category."""
        if category == CookieCategory.FUNCTIONAL:
            self.functional += 1
        elif category == CookieCategory.PERFORMANCE:
            self.performance += 1
        elif category == CookieCategory.TARGETING:
            self.targeting += 1
        elif category == CookieCategory.STRICTLY_NECESSARY:
            self.strictly_necessary += 1

    def reset(self) -> None:
        self.functional = 0
        self.performance = 0
        self.targeting = 0
        self.strictly_necessary = 0

    @property
    def total(self) -> int:
        return self.functional + self.performance + self.targeting + self.strictly_necessary


class RiskResult(BaseModel):
    """Aggregated risk for a site."""

    score: int = Field(ge=0, le=100, description="Risk score from 0 to 100")
    label: RiskLevel = Field(description="Severity band")
    color: str = Field(description="Display color hint")

    class Config:
        """Pydantic configuration."""
        frozen = True


class ClassifiedCookie(BaseModel):
    """A cookie paired with its classification."""

    name: str
    domain: str
    result: ClassificationResult


class SiteScanReport(BaseModel):
    """Classification of every cookie seen on a site, with the site risk."""

    hostname: str = Field(description="Hostname that was scanned")
    cookies: List[ClassifiedCookie] = Field(default_factory=list)
    counts: CategoryCounts = Field(default_factory=CategoryCounts)
    risk: RiskResult
    scanned_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the scan was performed"
    )

    @property
    def total(self) -> int:
        return len(self.cookies)

    def by_category(self, category: CookieCategory) -> List[ClassifiedCookie]:
        return [c for c in self.cookies if c.result.category == category]
