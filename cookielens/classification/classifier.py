"""Cookie classification engine.

Resolves each cookie in three stages, first applicable wins:

1. exact match of the lowercase cookie name in the knowledge base
2. first pattern in the knowledge base that matches the cookie name
3. heuristic scoring of the cookie's structural properties

The knowledge base is an explicit, immutable handle passed to the
classifier; there is no module-level database.
"""

import logging
import time
from typing import Any, Callable, List, Mapping, Optional, Sequence

from .knowledge_base import KnowledgeBase, build_knowledge_base
from .models import ClassificationResult, CookieAttributes, HeuristicVerdict
from .scoring import HeuristicScorer

logger = logging.getLogger(__name__)


class CookieClassifier:
    """Classifies cookies into consent categories.

    Safe to share between threads: classification only reads the current
    knowledge base, and reload() publishes a fully built replacement with a
    single reference assignment.
    """

    def __init__(
        self,
        knowledge_base: Optional[KnowledgeBase] = None,
        scorer: Optional[HeuristicScorer] = None,
        clock: Callable[[], float] = time.time
    ):
        """Initialize cookie classifier.

        Args:
            knowledge_base: Known cookie definitions, empty when omitted
            scorer: Heuristic scorer used as the fallback stage
            clock: Source of the current epoch time, used when no scorer is given
        """
        self._knowledge_base = knowledge_base if knowledge_base is not None else KnowledgeBase.empty()
        self.scorer = scorer if scorer is not None else HeuristicScorer(clock=clock)

    @property
    def knowledge_base(self) -> KnowledgeBase:
        return self._knowledge_base

    def reload(self, dataset: Mapping[str, Any], source: Optional[str] = None) -> KnowledgeBase:
        """Rebuild the knowledge base from a dataset and swap it in.

        Args:
            dataset: Vendor-grouped cookie definitions
            source: Where the dataset came from, for error reporting

        Returns:
            The newly published knowledge base
        """
        knowledge_base = build_knowledge_base(dataset, source=source)
        self._knowledge_base = knowledge_base
        logger.info(f"Classifier reloaded with {knowledge_base!r}")
        return knowledge_base

    def classify(self, cookie: CookieAttributes, current_hostname: str) -> ClassificationResult:
        """Classify a single cookie.

        Args:
            cookie: Cookie to classify
            current_hostname: Hostname of the page the cookie was observed on

        Returns:
            Classification result; never fails
        """
        return self._resolve(self._knowledge_base, cookie, current_hostname)

    def explain(self, cookie: CookieAttributes, current_hostname: str) -> HeuristicVerdict:
        """Run the heuristic scorer on a cookie regardless of knowledge base matches."""
        return self.scorer.score(cookie, current_hostname)

    def classify_cookies(self, cookies: Sequence[CookieAttributes], current_hostname: str) -> List[ClassificationResult]:
        """Classify a list of cookies observed on one page.

        Args:
            cookies: Cookies to classify
            current_hostname: Hostname of the page

        Returns:
            One result per cookie, in input order
        """
        # Pin one knowledge base for the whole batch
        knowledge_base = self._knowledge_base
        results = []

        for cookie in cookies:
            results.append(self._resolve(knowledge_base, cookie, current_hostname))

        logger.info(f"Classified {len(results)} cookies for {current_hostname}")

        return results

    def _resolve(
        self,
        knowledge_base: KnowledgeBase,
        cookie: CookieAttributes,
        current_hostname: str
    ) -> ClassificationResult:
        match = knowledge_base.lookup(cookie.name)
        if match is not None:
            record, match_type = match
            logger.debug(f"Cookie {cookie.name!r} resolved by {match_type.value} match ({record.vendor})")
            return record.to_result(match_type)

        return self.scorer.score(cookie, current_hostname).to_result()
