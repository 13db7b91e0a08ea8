"""Unit tests for cookie-jar export loading."""

import pytest

from cookielens.classification.collection import load_cookie_export, parse_cookie_export
from cookielens.classification.exceptions import CookieExportError
from cookielens.classification.models import SameSiteStatus


class TestParseCookieExport:

    def test_parses_browser_cookies(self):
        cookies = parse_cookie_export([
            {"name": "a", "domain": ".example.com", "sameSite": "no_restriction", "httpOnly": True},
            {"name": "b", "value": "1", "session": True},
        ])

        assert [c.name for c in cookies] == ["a", "b"]
        assert cookies[0].same_site == SameSiteStatus.NO_RESTRICTION
        assert cookies[0].http_only is True
        assert cookies[1].session is True

    def test_unknown_keys_are_ignored(self):
        cookies = parse_cookie_export([{"name": "a", "storeId": "0", "firstPartyDomain": ""}])

        assert len(cookies) == 1

    def test_invalid_entries_are_skipped(self, caplog):
        cookies = parse_cookie_export(
            [{"name": "ok"}, "garbage", {"domain": "no-name.com"}, {"name": "x", "expirationDate": "soon"}],
            source="export.json"
        )

        assert [c.name for c in cookies] == ["ok"]
        assert "Skipping invalid cookie #1 in export.json" in caplog.text

    def test_non_list_export_raises(self):
        with pytest.raises(CookieExportError) as exc_info:
            parse_cookie_export({"cookies": []}, source="export.json")

        assert exc_info.value.error_code == "cookie_export"
        assert exc_info.value.details == {"source": "export.json"}


class TestLoadCookieExport:

    def test_load_file(self, cookie_export_file):
        cookies = load_cookie_export(cookie_export_file)

        assert [c.name for c in cookies] == ["_ga", "sess_id"]
        assert cookies[1].same_site == SameSiteStatus.STRICT

    def test_missing_file(self, tmp_path):
        with pytest.raises(CookieExportError, match="Cannot read cookie export"):
            load_cookie_export(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "cookies.json"
        path.write_text("[{", encoding="utf-8")

        with pytest.raises(CookieExportError, match="Invalid JSON"):
            load_cookie_export(path)
