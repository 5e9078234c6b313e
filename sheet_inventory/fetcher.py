import logging
import re
import time
from typing import Callable, Optional
import requests

from . import settings
from .exceptions import InventoryRetrievalError

logger = logging.getLogger(__name__)

SHEETS_BASE_URL = "https://docs.google.com/spreadsheets/d"


def extract_sheet_id(source: Optional[str]) -> str:
    """Accepts a bare sheet ID or a Google Sheets URL and returns the sheet ID."""
    if not source:
        return settings.DEFAULT_SHEET_ID
    match = re.search(r"/d/([a-zA-Z0-9-_]+)", source)
    if match:
        return match.group(1)
    return settings.DEFAULT_SHEET_ID if "/" in source else source


def gviz_url(sheet_id: str) -> str:
    return f"{SHEETS_BASE_URL}/{sheet_id}/gviz/tq?tqx=out:csv"


def export_url(sheet_id: str) -> str:
    return f"{SHEETS_BASE_URL}/{sheet_id}/export?format=csv"


def _get(url: str, params: Optional[dict] = None) -> requests.Response:
    response = requests.get(
        url,
        params=params,
        headers={"User-Agent": settings.USER_AGENT, "Accept": "text/csv"},
        timeout=settings.REQUEST_TIMEOUT,
    )
    response.raise_for_status()
    return response


def _looks_like_html(response: requests.Response) -> bool:
    content_type = response.headers.get("content-type", "")
    return "text/html" in content_type or response.text.strip().lower().startswith(
        "<!doctype"
    )


def _csv_body(response: requests.Response, strategy: str) -> Optional[str]:
    """Returns the body, or None when the endpoint answered with an HTML page (login, error)."""
    if _looks_like_html(response):
        logger.warning(f"  > '{strategy}' answered with an HTML page, ignoring.")
        return None
    return response.text


def fetch_via_relay(sheet_id: str) -> Optional[str]:
    """Strategy 1: our own relay endpoint. A rewrite to an HTML page counts as a miss."""
    if not settings.RELAY_URL:
        return None
    return _csv_body(_get(settings.RELAY_URL, params={"sheetId": sheet_id}), "relay")


def fetch_via_gviz(sheet_id: str) -> Optional[str]:
    """Strategy 2: direct gviz CSV export, timestamped to bypass caches."""
    response = _get(gviz_url(sheet_id), params={"t": int(time.time() * 1000)})
    return _csv_body(response, "gviz")


def fetch_via_export(sheet_id: str) -> Optional[str]:
    """Strategy 3: the standard CSV export endpoint."""
    return _csv_body(_get(export_url(sheet_id)), "export")


def fetch_via_proxy(sheet_id: str) -> Optional[str]:
    """Strategy 4: public CORS proxy wrapping the gviz URL."""
    if not settings.CORS_PROXY_URL:
        return None
    response = _get(settings.CORS_PROXY_URL, params={"url": gviz_url(sheet_id)})
    return _csv_body(response, "proxy")


# --- Fetch Strategy Registry ---
# Tried in order; the first non-empty body wins.
FETCH_STRATEGIES: list[dict[str, Callable[[str], Optional[str]]]] = [
    {"name": "relay", "func": fetch_via_relay},
    {"name": "gviz", "func": fetch_via_gviz},
    {"name": "export", "func": fetch_via_export},
    {"name": "proxy", "func": fetch_via_proxy},
]


def get_raw_csv_text(source: Optional[str] = None) -> str:
    """
    Returns the raw CSV text of the sheet, trying each strategy in turn.
    Raises InventoryRetrievalError when none of them succeeds.
    """
    sheet_id = extract_sheet_id(source if source is not None else settings.SHEET_SOURCE)

    for strategy in FETCH_STRATEGIES:
        try:
            text = strategy["func"](sheet_id)
        except requests.exceptions.RequestException as e:
            logger.warning(f"  > ⚠️ Fetch strategy '{strategy['name']}' failed: {e}")
            continue

        if text and text.strip():
            logger.info(f"  > Fetched sheet {sheet_id} via '{strategy['name']}'.")
            return text

    raise InventoryRetrievalError("Unable to load inventory data from any source.")
