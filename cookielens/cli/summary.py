"""Report formatting for CLI output.

Renders site scan reports and risk results as human-readable text, JSON
or YAML.
"""

import json
from typing import Any, Dict, List

import yaml

from ..classification.models import CategoryCounts, CookieCategory, RiskResult, SiteScanReport

CATEGORY_ORDER = (
    CookieCategory.STRICTLY_NECESSARY,
    CookieCategory.FUNCTIONAL,
    CookieCategory.PERFORMANCE,
    CookieCategory.TARGETING,
)

RISK_ICONS = {
    "Low Risk": "🟢",
    "Moderate": "🟡",
    "Elevated": "🟠",
    "High Risk": "🔴",
}


def counts_by_label(counts: CategoryCounts) -> Dict[str, int]:
    return {
        CookieCategory.STRICTLY_NECESSARY.value: counts.strictly_necessary,
        CookieCategory.FUNCTIONAL.value: counts.functional,
        CookieCategory.PERFORMANCE.value: counts.performance,
        CookieCategory.TARGETING.value: counts.targeting,
    }


class ReportFormatter:
    """Formats scan reports into various output formats."""

    def __init__(self, format_type: str = "text", verbose: bool = False):
        self.format_type = format_type.lower()
        self.verbose = verbose

    def format_report(self, report: SiteScanReport) -> str:
        """Format a site scan report into the configured format."""
        if self.format_type == "json":
            return json.dumps(self._report_dict(report), indent=2)
        elif self.format_type == "yaml":
            return yaml.safe_dump(self._report_dict(report), default_flow_style=False, sort_keys=False)
        else:
            return self._format_text(report)

    def format_risk(self, risk: RiskResult, counts: CategoryCounts) -> str:
        """Format a standalone risk result."""
        data = {
            "counts": counts_by_label(counts),
            "risk": risk.model_dump(mode="json"),
        }
        if self.format_type == "json":
            return json.dumps(data, indent=2)
        elif self.format_type == "yaml":
            return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
        return self._risk_line(risk)

    def _report_dict(self, report: SiteScanReport) -> Dict[str, Any]:
        return {
            "hostname": report.hostname,
            "scanned_at": report.scanned_at.isoformat(),
            "total_cookies": report.total,
            "counts": counts_by_label(report.counts),
            "risk": report.risk.model_dump(mode="json"),
            "cookies": [
                {
                    "name": cookie.name,
                    "domain": cookie.domain,
                    **cookie.result.model_dump(mode="json"),
                }
                for cookie in report.cookies
            ],
        }

    def _risk_line(self, risk: RiskResult) -> str:
        icon = RISK_ICONS.get(risk.label.value, "")
        return f"{icon} Risk Score: {risk.score}/100 ({risk.label.value})".strip()

    def _format_text(self, report: SiteScanReport) -> str:
        """Format report as human-readable text."""
        lines: List[str] = []

        lines.append(f"🍪 COOKIE SCAN: {report.hostname}")
        lines.append("=" * 50)
        lines.append(f"Total Cookies: {report.total}")
        for label, count in counts_by_label(report.counts).items():
            lines.append(f"  {label}: {count}")
        lines.append("")
        lines.append(self._risk_line(report.risk))

        if not report.cookies:
            return "\n".join(lines)

        lines.append("")
        lines.append("📋 COOKIES")
        lines.append("-" * 20)

        for category in CATEGORY_ORDER:
            for cookie in report.by_category(category):
                result = cookie.result
                lines.append(f"• {cookie.name} [{result.category.value}] {result.vendor}")
                if self.verbose:
                    lines.append(f"    Domain: {cookie.domain or '-'}")
                    lines.append(f"    Retention: {result.retention or '-'}")
                    lines.append(f"    Matched by: {result.match_type.value}")
                    lines.append(f"    {result.description}")

        return "\n".join(lines)
