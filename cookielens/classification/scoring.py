"""Heuristic scoring engine for cookies missing from the knowledge base.

Every signal is evaluated independently and adds a fixed weight to one
category. The winning category is picked in the fixed order Targeting,
Performance, Functional, Strictly Necessary, and only a strictly greater
score displaces the current best, so ties go to the earlier category.
An all-zero score vector resolves to Functional.
"""

import logging
import time
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .heuristics import (
    AD_NETWORK_DOMAINS,
    ANALYTICS_NAME_PREFIXES,
    ONE_DAY_SECONDS,
    ONE_YEAR_SECONDS,
    PREFERENCE_NAME_PATTERN,
    SECURITY_NAME_PATTERN,
    TARGETING_NAME_PATTERN,
    TRACKER_NAME_PREFIXES,
    calculate_entropy,
    clean_cookie_domain,
    has_name_prefix,
    is_known_ad_domain,
    is_third_party,
    remaining_lifespan,
)
from .models import CookieAttributes, CookieCategory, HeuristicVerdict, RetentionLabel, SameSiteStatus

logger = logging.getLogger(__name__)

WINNER_PRIORITY: Tuple[CookieCategory, ...] = (
    CookieCategory.TARGETING,
    CookieCategory.PERFORMANCE,
    CookieCategory.FUNCTIONAL,
    CookieCategory.STRICTLY_NECESSARY,
)

ENTROPY_THRESHOLD = 3.5
VALUE_LENGTH_THRESHOLD = 20

GENERIC_FUNCTIONAL_DESCRIPTION = (
    "This cookie doesn't match known tracking patterns. "
    "It's likely remembering your preferences or site state."
)
GENERIC_DESCRIPTION = (
    "This cookie doesn't match known tracking patterns. "
    "Its attributes most closely resemble a {category} cookie."
)


def select_winner(scores: Dict[CookieCategory, int]) -> CookieCategory:
    """Pick the highest scoring category, breaking ties by priority order."""
    best_category = CookieCategory.FUNCTIONAL
    # A category must score above zero to displace the Functional default
    best_score = 0
    for category in WINNER_PRIORITY:
        score = scores.get(category, 0)
        if score > best_score:
            best_category = category
            best_score = score
    return best_category


def retention_for(cookie: CookieAttributes, lifespan: float) -> RetentionLabel:
    if cookie.session:
        return RetentionLabel.SESSION
    if lifespan > ONE_YEAR_SECONDS:
        return RetentionLabel.LONG_TERM
    if lifespan < ONE_DAY_SECONDS:
        return RetentionLabel.SHORT_TERM
    return RetentionLabel.MEDIUM_TERM


class HeuristicScorer:
    """Infers a category for an unknown cookie from its structural properties.

    Provides the signal table, winner selection, vendor attribution and
    description building. The ad-network and tracker-prefix sets can be
    extended; every other weight is fixed.
    """

    def __init__(
        self,
        ad_domains: Optional[Iterable[str]] = None,
        tracker_prefixes: Optional[Iterable[str]] = None,
        clock: Callable[[], float] = time.time
    ):
        """Initialize heuristic scorer.

        Args:
            ad_domains: Extra ad network domains on top of the built-in set
            tracker_prefixes: Extra tracker cookie name prefixes on top of the built-in set
            clock: Source of the current epoch time in seconds
        """
        self.ad_domains = frozenset(AD_NETWORK_DOMAINS | {d.lower().lstrip('.') for d in (ad_domains or ())})
        self.tracker_prefixes = TRACKER_NAME_PREFIXES + tuple(p.lower() for p in (tracker_prefixes or ()))
        self.clock = clock

    def score(self, cookie: CookieAttributes, current_hostname: str, now: Optional[float] = None) -> HeuristicVerdict:
        """Score a cookie against every signal.

        Args:
            cookie: Cookie to score
            current_hostname: Hostname of the visited page
            now: Current epoch time, read from the clock when omitted

        Returns:
            Verdict with the winning category, its evidence and the per-category scores
        """
        if now is None:
            now = self.clock()

        scores: Dict[CookieCategory, int] = {category: 0 for category in WINNER_PRIORITY}
        signals: List[str] = []

        name = cookie.name
        domain = clean_cookie_domain(cookie.domain)
        third_party = is_third_party(cookie.domain, current_hostname)
        ad_network = is_known_ad_domain(cookie.domain, self.ad_domains)
        lifespan = remaining_lifespan(cookie.expiration_date, now)

        # Domain relationship
        if third_party:
            scores[CookieCategory.TARGETING] += 40
            signals.append(f"comes from a different domain ({domain})")
        if ad_network:
            scores[CookieCategory.TARGETING] += 30
            signals.append(f"comes from the ad network {domain}")

        # SameSite policy
        if cookie.same_site == SameSiteStatus.NO_RESTRICTION:
            scores[CookieCategory.TARGETING] += 25
            signals.append("allows cross-site access (SameSite=None)")
        elif cookie.same_site == SameSiteStatus.STRICT:
            scores[CookieCategory.STRICTLY_NECESSARY] += 10

        # Security flags
        if cookie.http_only and cookie.secure:
            scores[CookieCategory.STRICTLY_NECESSARY] += 20
            signals.append("uses server-side security flags (HttpOnly+Secure)")
        elif cookie.http_only:
            scores[CookieCategory.STRICTLY_NECESSARY] += 10
            signals.append("is managed by the server (HttpOnly)")
        if cookie.host_only:
            scores[CookieCategory.STRICTLY_NECESSARY] += 5

        # Name families
        if has_name_prefix(name, self.tracker_prefixes):
            scores[CookieCategory.TARGETING] += 25
            signals.append("has a known tracker name prefix")
        if has_name_prefix(name, ANALYTICS_NAME_PREFIXES):
            scores[CookieCategory.PERFORMANCE] += 20
            signals.append("has a known analytics name prefix")
        if TARGETING_NAME_PATTERN.search(name):
            scores[CookieCategory.TARGETING] += 15
            signals.append("shows tracking signals in its name")
        if SECURITY_NAME_PATTERN.search(name):
            scores[CookieCategory.STRICTLY_NECESSARY] += 15
            signals.append("has a security-related name pattern")
        if PREFERENCE_NAME_PATTERN.search(name):
            scores[CookieCategory.FUNCTIONAL] += 15
            signals.append("has a preference-related name pattern")

        # Value shape
        entropy = calculate_entropy(cookie.value)
        value_length = len(cookie.value)
        if entropy > ENTROPY_THRESHOLD and value_length > VALUE_LENGTH_THRESHOLD:
            scores[CookieCategory.TARGETING] += 10
            signals.append("has a high-entropy value (likely a tracking ID)")
        elif entropy <= ENTROPY_THRESHOLD and value_length <= VALUE_LENGTH_THRESHOLD:
            scores[CookieCategory.FUNCTIONAL] += 5

        # Lifetime
        if cookie.session:
            scores[CookieCategory.STRICTLY_NECESSARY] += 5
        if lifespan > ONE_YEAR_SECONDS:
            scores[CookieCategory.TARGETING] += 10
            signals.append("persists for over a year")
        elif 0 < lifespan < ONE_DAY_SECONDS:
            scores[CookieCategory.PERFORMANCE] += 5

        category = select_winner(scores)

        if ad_network:
            vendor = f"Ad Network ({domain})"
        elif third_party:
            vendor = f"Third Party ({domain})"
        elif signals:
            vendor = "Heuristic Match"
        else:
            vendor = "Unknown"

        if signals:
            description = "This cookie " + ", and ".join(signals) + "."
        elif category == CookieCategory.FUNCTIONAL:
            description = GENERIC_FUNCTIONAL_DESCRIPTION
        else:
            description = GENERIC_DESCRIPTION.format(category=category.value)

        logger.debug(
            f"Heuristic scores for {name!r} on {current_hostname}: "
            f"{ {c.value: s for c, s in scores.items()} } -> {category.value}"
        )

        return HeuristicVerdict(
            category=category,
            vendor=vendor,
            description=description,
            retention=retention_for(cookie, lifespan),
            scores=scores,
            signals=signals,
            lifespan_seconds=lifespan,
        )
