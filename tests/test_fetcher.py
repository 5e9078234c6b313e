import pytest
import requests

from sheet_inventory import fetcher, settings
from sheet_inventory.exceptions import InventoryRetrievalError
from sheet_inventory.fetcher import extract_sheet_id, get_raw_csv_text

CSV_TEXT = "SKU,Model,Description,Qty\nX1,BMW,Wheel,5\n"


class TestExtractSheetId:
    def test_bare_id(self):
        assert extract_sheet_id("abc_123-XYZ") == "abc_123-XYZ"

    def test_full_url(self):
        url = "https://docs.google.com/spreadsheets/d/1AbC-d_E/edit#gid=0"
        assert extract_sheet_id(url) == "1AbC-d_E"

    def test_empty_uses_default(self):
        assert extract_sheet_id("") == settings.DEFAULT_SHEET_ID
        assert extract_sheet_id(None) == settings.DEFAULT_SHEET_ID

    def test_unrecognized_url_uses_default(self):
        assert extract_sheet_id("https://example.com/sheet") == settings.DEFAULT_SHEET_ID


class TestGetRawCsvText:
    def test_first_working_strategy_wins(self, monkeypatch, fake_response):
        calls = []

        def fake_get(url, params=None, headers=None, timeout=None):
            calls.append(url)
            return fake_response(CSV_TEXT)

        monkeypatch.setattr(fetcher.requests, "get", fake_get)

        assert get_raw_csv_text("sheet1") == CSV_TEXT
        # Relay is not configured, so gviz is the first request
        assert calls == [fetcher.gviz_url("sheet1")]

    def test_gviz_request_is_cache_busted(self, monkeypatch, fake_response):
        seen = {}

        def fake_get(url, params=None, headers=None, timeout=None):
            seen.update(params or {})
            seen["headers"] = headers
            return fake_response(CSV_TEXT)

        monkeypatch.setattr(fetcher.requests, "get", fake_get)
        get_raw_csv_text("sheet1")
        assert "t" in seen
        assert seen["headers"]["User-Agent"] == settings.USER_AGENT

    def test_falls_back_to_export_after_error(self, monkeypatch, fake_response):
        def fake_get(url, params=None, headers=None, timeout=None):
            if "gviz" in url:
                raise requests.exceptions.ConnectionError("down")
            return fake_response(CSV_TEXT)

        monkeypatch.setattr(fetcher.requests, "get", fake_get)
        assert get_raw_csv_text("sheet1") == CSV_TEXT

    def test_http_error_and_empty_body_fall_through(self, monkeypatch, fake_response):
        monkeypatch.setattr(settings, "CORS_PROXY_URL", "https://proxy.example/raw")

        def fake_get(url, params=None, headers=None, timeout=None):
            if "gviz" in url:
                return fake_response("", status_code=500)
            if "export" in url:
                return fake_response("   ")
            assert params == {"url": fetcher.gviz_url("sheet1")}
            return fake_response(CSV_TEXT)

        monkeypatch.setattr(fetcher.requests, "get", fake_get)
        assert get_raw_csv_text("sheet1") == CSV_TEXT

    def test_relay_html_page_is_rejected(self, monkeypatch, fake_response):
        monkeypatch.setattr(settings, "RELAY_URL", "https://app.example/api/inventory")

        def fake_get(url, params=None, headers=None, timeout=None):
            if url == settings.RELAY_URL:
                assert params == {"sheetId": "sheet1"}
                return fake_response("<!DOCTYPE html><html></html>", headers={"content-type": "text/html"})
            return fake_response("from gviz")

        monkeypatch.setattr(fetcher.requests, "get", fake_get)
        assert get_raw_csv_text("sheet1") == "from gviz"

    def test_gviz_login_page_falls_through_to_export(self, monkeypatch, fake_response):
        login_page = "<!DOCTYPE html><html><title>Sign in</title></html>"

        def fake_get(url, params=None, headers=None, timeout=None):
            if "gviz" in url:
                return fake_response(login_page, headers={"content-type": "text/html; charset=utf-8"})
            return fake_response(CSV_TEXT)

        monkeypatch.setattr(fetcher.requests, "get", fake_get)
        assert get_raw_csv_text("sheet1") == CSV_TEXT

    def test_html_from_every_strategy_raises(self, monkeypatch, fake_response):
        monkeypatch.setattr(settings, "CORS_PROXY_URL", "https://proxy.example/raw")
        login_page = "<!doctype html><html><title>Sign in</title></html>"

        def fake_get(url, params=None, headers=None, timeout=None):
            # Plain text content type; the doctype alone marks it as HTML
            return fake_response(login_page, headers={"content-type": "text/plain"})

        monkeypatch.setattr(fetcher.requests, "get", fake_get)
        with pytest.raises(InventoryRetrievalError):
            get_raw_csv_text("sheet1")

    def test_relay_used_when_configured(self, monkeypatch, fake_response):
        monkeypatch.setattr(settings, "RELAY_URL", "https://app.example/api/inventory")
        monkeypatch.setattr(fetcher.requests, "get", lambda url, **kw: fake_response(f"via {url}"))
        assert get_raw_csv_text("sheet1") == "via https://app.example/api/inventory"

    def test_all_strategies_fail(self, monkeypatch):
        def fake_get(url, params=None, headers=None, timeout=None):
            raise requests.exceptions.Timeout("slow")

        monkeypatch.setattr(fetcher.requests, "get", fake_get)
        with pytest.raises(InventoryRetrievalError):
            get_raw_csv_text("sheet1")
