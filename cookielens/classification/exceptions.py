"""Exceptions raised by the cookielens classification package.

Only loading and host-adapter code raises. Classification, risk aggregation
and category normalization are total functions and never raise these.
"""

from typing import Optional


class CookieLensError(Exception):
    """Base cookielens error."""

    def __init__(
        self,
        message: str = "cookielens error",
        error_code: str = "cookielens_error",
        details: Optional[dict] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class KnowledgeBaseFormatError(CookieLensError):
    """Raised when a knowledge base dataset has an unusable top-level shape."""

    def __init__(
        self,
        message: str = "Malformed knowledge base dataset",
        source: Optional[str] = None
    ):
        super().__init__(
            message=message,
            error_code="knowledge_base_format",
            details={"source": source} if source else {}
        )


class RestrictedPageError(CookieLensError):
    """Raised when a scan is requested for a page that cannot carry cookies."""

    def __init__(self, url: str):
        super().__init__(
            message=f"Cannot scan cookies on this page: {url}",
            error_code="restricted_page",
            details={"url": url}
        )


class CookieExportError(CookieLensError):
    """Raised when a cookie export cannot be read as a list of cookies."""

    def __init__(
        self,
        message: str = "Invalid cookie export",
        source: Optional[str] = None
    ):
        super().__init__(
            message=message,
            error_code="cookie_export",
            details={"source": source} if source else {}
        )
