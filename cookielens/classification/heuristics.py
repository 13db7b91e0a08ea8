"""Signal predicates used by the heuristic scorer and for vendor attribution.

Domain checks here are plain string-suffix comparisons, not public-suffix
aware. is_third_party has no dot boundary before the suffix, so
"notexample.com" counts as first-party on "example.com".
"""

import math
import re
from collections import Counter
from typing import Iterable, Optional, Tuple

ONE_DAY_SECONDS = 86400
ONE_YEAR_SECONDS = 31536000

# Ad and tracking networks whose cookies are treated as targeting
AD_NETWORK_DOMAINS = frozenset({
    "doubleclick.net",
    "googlesyndication.com",
    "googleadservices.com",
    "criteo.com",
    "criteo.net",
    "adnxs.com",
    "taboola.com",
    "outbrain.com",
    "amazon-adsystem.com",
    "rubiconproject.com",
    "pubmatic.com",
    "openx.net",
    "adsrvr.org",
    "casalemedia.com",
    "scorecardresearch.com",
    "quantserve.com",
})

TRACKER_NAME_PREFIXES: Tuple[str, ...] = (
    "_fbp",
    "_fbc",
    "_gcl_",
    "_uet",
    "ide",
    "muid",
    "nid",
    "_ttp",
    "_pin_unauth",
    "_rdt_uuid",
    "li_fat_id",
    "__gads",
    "__gpi",
    "_scid",
    "uuid2",
)

ANALYTICS_NAME_PREFIXES: Tuple[str, ...] = ("_ga", "_gid", "_gat", "_pk_", "_hj", "__utm")

# "ad"/"ads" only counts when not embedded in a longer word
TARGETING_NAME_PATTERN = re.compile(r"pixel|tracker|retarget|campaign|(?<![a-z])ads?(?![a-z])", re.IGNORECASE)
SECURITY_NAME_PATTERN = re.compile(r"^(__Host-|__Secure-)|sess|csrf|xsrf|token|auth", re.IGNORECASE)
PREFERENCE_NAME_PATTERN = re.compile(r"pref|lang|theme|mode|locale|consent", re.IGNORECASE)


def clean_cookie_domain(cookie_domain: str) -> str:
    """Strip the leading dot of a domain cookie."""
    return cookie_domain[1:] if cookie_domain.startswith(".") else cookie_domain


def clean_hostname(hostname: str) -> str:
    return hostname[4:] if hostname.startswith("www.") else hostname


def is_third_party(cookie_domain: str, hostname: str) -> bool:
    """Check whether a cookie domain is unrelated to the visited hostname.

    Args:
        cookie_domain: Domain attribute of the cookie
        hostname: Hostname of the page being visited

    Returns:
        True if neither domain is a suffix of the other
    """
    domain = clean_cookie_domain(cookie_domain)
    host = clean_hostname(hostname)
    return not (host.endswith(domain) or domain.endswith(host))


def is_known_ad_domain(cookie_domain: str, ad_domains: Iterable[str] = AD_NETWORK_DOMAINS) -> bool:
    """Check whether a cookie domain is, or is a subdomain of, a known ad network."""
    domain = clean_cookie_domain(cookie_domain)
    if not domain:
        return False
    for ad_domain in ad_domains:
        if domain == ad_domain or domain.endswith(f".{ad_domain}"):
            return True
    return False


def has_name_prefix(cookie_name: str, prefixes: Iterable[str]) -> bool:
    name = cookie_name.lower()
    return any(name.startswith(prefix.lower()) for prefix in prefixes)


def calculate_entropy(value: str) -> float:
    """Shannon entropy, in bits per character, of a cookie value.

    Args:
        value: Cookie value

    Returns:
        Entropy over the character frequency distribution, 0.0 for an empty value
    """
    if not value:
        return 0.0

    total = len(value)
    entropy = 0.0
    for count in Counter(value).values():
        ratio = count / total
        entropy -= ratio * math.log2(ratio)
    return entropy


def remaining_lifespan(expiration_date: Optional[float], now: float) -> float:
    """Seconds until expiration, or 0 when the cookie has no expiration date."""
    if not expiration_date:
        return 0.0
    return expiration_date - now
