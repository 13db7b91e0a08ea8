"""Known-cookie knowledge base compiled from an Open Cookie Database style dataset.

The dataset maps a vendor name to a list of cookie definitions. Loading
compiles it into two disjoint lookup structures:

- an exact-match table keyed by lowercase cookie name (last write wins)
- an ordered list of case-insensitive patterns (first match wins)

A definition whose pattern does not compile, or that lacks a cookie name,
is logged and dropped. A dataset whose top-level shape is wrong raises
KnowledgeBaseFormatError. The resulting KnowledgeBase never changes after
construction; reloading always builds a new one.
"""

import json
import logging
import re
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Pattern, Tuple, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import KnowledgeBaseFormatError
from .models import KnowledgeBaseRecord, MatchType
from .normalizer import normalize_category

logger = logging.getLogger(__name__)

# Only this literal marks a definition as a pattern
WILDCARD_PATTERN_FLAG = "1"

DEFAULT_DATASET_PACKAGE = "cookielens.classification"
DEFAULT_DATASET_NAME = "open_cookie_database.json"


class CookieDefinition(BaseModel):
    """One cookie definition as written in the dataset."""

    id: str = Field(default="", description="Dataset identifier")
    category: str = Field(default="", description="Free-text category label")
    cookie: str = Field(description="Cookie name or regex")
    domain: str = Field(default="", description="Domain noted by the dataset")
    description: str = Field(default="", description="What the cookie does")
    retention_period: str = Field(default="", alias="retentionPeriod")
    data_controller: str = Field(default="", alias="dataController")
    privacy_link: str = Field(default="", alias="privacyLink")
    wildcard_match: Any = Field(default="0", alias="wildcardMatch")

    class Config:
        """Pydantic configuration."""
        populate_by_name = True
        extra = "ignore"

    @field_validator(
        'id', 'category', 'cookie', 'domain', 'description',
        'retention_period', 'data_controller', 'privacy_link',
        mode='before'
    )
    @classmethod
    def coerce_text(cls, v):
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    @property
    def is_pattern(self) -> bool:
        return self.wildcard_match == WILDCARD_PATTERN_FLAG


class PatternEntry(NamedTuple):
    """A compiled pattern and the record it resolves to."""
    regex: Pattern[str]
    record: KnowledgeBaseRecord


class KnowledgeBase:
    """Immutable exact-match table and ordered pattern list."""

    def __init__(
        self,
        exact: Optional[Mapping[str, KnowledgeBaseRecord]] = None,
        patterns: Optional[List[PatternEntry]] = None
    ):
        self._exact: Mapping[str, KnowledgeBaseRecord] = MappingProxyType(dict(exact or {}))
        self._patterns: Tuple[PatternEntry, ...] = tuple(patterns or ())

    @classmethod
    def empty(cls) -> "KnowledgeBase":
        return cls()

    @property
    def exact_matches(self) -> Mapping[str, KnowledgeBaseRecord]:
        return self._exact

    @property
    def patterns(self) -> Tuple[PatternEntry, ...]:
        return self._patterns

    @property
    def exact_count(self) -> int:
        return len(self._exact)

    @property
    def pattern_count(self) -> int:
        return len(self._patterns)

    @property
    def is_empty(self) -> bool:
        return not self._exact and not self._patterns

    def __len__(self) -> int:
        return self.exact_count + self.pattern_count

    def __repr__(self) -> str:
        return f"KnowledgeBase(exact={self.exact_count}, patterns={self.pattern_count})"

    def lookup_exact(self, cookie_name: str) -> Optional[KnowledgeBaseRecord]:
        return self._exact.get(cookie_name.lower())

    def lookup_pattern(self, cookie_name: str) -> Optional[KnowledgeBaseRecord]:
        for entry in self._patterns:
            if entry.regex.search(cookie_name):
                return entry.record
        return None

    def lookup(self, cookie_name: str) -> Optional[Tuple[KnowledgeBaseRecord, MatchType]]:
        """Find the record for a cookie name.

        Args:
            cookie_name: Cookie name as observed

        Returns:
            Tuple of (record, match_type), or None when the name is unknown
        """
        record = self.lookup_exact(cookie_name)
        if record is not None:
            return record, MatchType.EXACT

        record = self.lookup_pattern(cookie_name)
        if record is not None:
            return record, MatchType.PATTERN

        return None


def build_knowledge_base(dataset: Mapping[str, Any], source: Optional[str] = None) -> KnowledgeBase:
    """Compile a vendor-grouped dataset into a KnowledgeBase.

    Args:
        dataset: Mapping of vendor name to list of cookie definitions
        source: Where the dataset came from, for error reporting

    Returns:
        Newly built knowledge base

    Raises:
        KnowledgeBaseFormatError: If the dataset is not a mapping of lists
    """
    if not isinstance(dataset, Mapping):
        raise KnowledgeBaseFormatError(
            f"Knowledge base must map vendor names to cookie lists, got {type(dataset).__name__}",
            source=source
        )

    exact: Dict[str, KnowledgeBaseRecord] = {}
    patterns: List[PatternEntry] = []
    skipped = 0

    for vendor, definitions in dataset.items():
        if not isinstance(definitions, list):
            raise KnowledgeBaseFormatError(
                f"Cookie definitions for vendor {vendor!r} must be a list",
                source=source
            )

        for raw_definition in definitions:
            try:
                definition = CookieDefinition.model_validate(raw_definition)
            except ValidationError as e:
                logger.warning(f"Skipping malformed cookie definition for vendor {vendor!r}: {e.errors()[0]['msg']}")
                skipped += 1
                continue

            fields = {
                'category': normalize_category(definition.category),
                'vendor': vendor or definition.data_controller or "Unknown",
                'description': definition.description,
                'retention': definition.retention_period,
                'domain': definition.domain,
                'privacy_link': definition.privacy_link,
            }

            if definition.is_pattern:
                try:
                    regex = re.compile(definition.cookie, re.IGNORECASE)
                except re.error as e:
                    logger.warning(f"Invalid regex in knowledge base: {definition.cookie!r} ({e})")
                    skipped += 1
                    continue
                patterns.append(PatternEntry(
                    regex=regex,
                    record=KnowledgeBaseRecord(match_key=definition.cookie, is_pattern=True, **fields)
                ))
            else:
                key = definition.cookie.lower()
                exact[key] = KnowledgeBaseRecord(match_key=key, is_pattern=False, **fields)

    knowledge_base = KnowledgeBase(exact, patterns)

    logger.info(
        f"Knowledge base loaded: {knowledge_base.exact_count} exact matches, "
        f"{knowledge_base.pattern_count} patterns"
    )
    if skipped:
        logger.warning(f"Dropped {skipped} cookie definitions while loading knowledge base")

    return knowledge_base


def load_knowledge_base(path: Union[str, Path]) -> KnowledgeBase:
    """Load a knowledge base from a JSON dataset file.

    Args:
        path: Path to the dataset file

    Returns:
        Loaded knowledge base

    Raises:
        KnowledgeBaseFormatError: If the file cannot be read or parsed
    """
    dataset_path = Path(path)
    try:
        dataset = json.loads(dataset_path.read_text(encoding='utf-8'))
    except OSError as e:
        raise KnowledgeBaseFormatError(f"Cannot read knowledge base: {e}", source=str(dataset_path)) from e
    except json.JSONDecodeError as e:
        raise KnowledgeBaseFormatError(f"Invalid JSON in knowledge base: {e}", source=str(dataset_path)) from e

    return build_knowledge_base(dataset, source=str(dataset_path))


def load_default_knowledge_base() -> KnowledgeBase:
    """Load the dataset bundled with the package."""
    dataset_file = resources.files(DEFAULT_DATASET_PACKAGE) / "data" / DEFAULT_DATASET_NAME
    dataset = json.loads(dataset_file.read_text(encoding='utf-8'))
    return build_knowledge_base(dataset, source=DEFAULT_DATASET_NAME)
