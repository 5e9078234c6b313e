import pytest
import requests

from sheet_inventory import settings


class FakeResponse:
    def __init__(self, text="", status_code=200, headers=None, json_data=None):
        self.text = text
        self.status_code = status_code
        self.headers = headers or {"content-type": "text/csv; charset=utf-8"}
        self._json = json_data

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error")

    def json(self):
        return self._json


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keeps tests away from real endpoints and the real output directory."""
    monkeypatch.setattr(settings, "RELAY_URL", None)
    monkeypatch.setattr(settings, "CORS_PROXY_URL", None)
    monkeypatch.setattr(settings, "WEBHOOK_URL", None)
    monkeypatch.setattr(settings, "OVERRIDES_URL", None)
    monkeypatch.setattr(settings, "OVERRIDES_KEY", None)
    monkeypatch.setattr(settings, "OUTPUT_DIR", tmp_path / "output")
    monkeypatch.setattr(settings, "SAVE_CSV_OUTPUT", True)
    monkeypatch.setattr(settings, "SAVE_JSON_OUTPUT", False)
