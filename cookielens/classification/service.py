"""Site scan orchestration.

Ties the classifier and the risk aggregator together the way a browser
popup uses them: classify every cookie of the visited page, keep a fresh
per-category tally for the scan, and fold the tally into a risk score.
"""

import logging
from typing import Optional, Sequence
from urllib.parse import urlparse

from .classifier import CookieClassifier
from .exceptions import RestrictedPageError
from .knowledge_base import load_default_knowledge_base
from .models import CategoryCounts, ClassifiedCookie, CookieAttributes, SiteScanReport
from .risk import aggregate

logger = logging.getLogger(__name__)

SCANNABLE_SCHEMES = ("http", "https")


def hostname_from_url(url: str) -> str:
    """Extract the hostname of a scannable page.

    Args:
        url: Page URL

    Returns:
        Lowercase hostname

    Raises:
        RestrictedPageError: If the URL is not http(s) or has no hostname
    """
    parsed = urlparse(url)
    if parsed.scheme.lower() not in SCANNABLE_SCHEMES or not parsed.hostname:
        raise RestrictedPageError(url)
    return parsed.hostname


class CookieScanService:
    """Classifies all cookies of a site and scores the site's risk."""

    def __init__(self, classifier: CookieClassifier):
        self.classifier = classifier

    def scan(self, cookies: Sequence[CookieAttributes], hostname: str) -> SiteScanReport:
        """Scan the cookies observed on a hostname.

        Args:
            cookies: Cookies observed on the page
            hostname: Hostname of the page

        Returns:
            Report with every classification, the category counts and the risk
        """
        results = self.classifier.classify_cookies(cookies, hostname)
        counts = CategoryCounts.from_results(results)
        risk = aggregate(counts)

        report = SiteScanReport(
            hostname=hostname,
            cookies=[
                ClassifiedCookie(name=cookie.name, domain=cookie.domain, result=result)
                for cookie, result in zip(cookies, results)
            ],
            counts=counts,
            risk=risk,
        )

        logger.info(
            f"Scanned {report.total} cookies on {hostname}: "
            f"risk {risk.score} ({risk.label.value})"
        )
        return report

    def scan_url(self, url: str, cookies: Sequence[CookieAttributes]) -> SiteScanReport:
        """Scan the cookies observed on a page URL.

        Raises:
            RestrictedPageError: If the page is not an http(s) page
        """
        return self.scan(cookies, hostname_from_url(url))


def create_scan_service(classifier: Optional[CookieClassifier] = None) -> CookieScanService:
    """Create a scan service, using the bundled knowledge base by default."""
    if classifier is None:
        classifier = CookieClassifier(knowledge_base=load_default_knowledge_base())
    return CookieScanService(classifier)
