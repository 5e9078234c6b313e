import os
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# --- Sheet Source ---
# Either a bare spreadsheet ID or a full Google Sheets URL.
DEFAULT_SHEET_ID = os.getenv(
    "DEFAULT_SHEET_ID", "10VF9Yk-r9pINttngYz8MNXFk-ujPAvvOukF7Ypf4LBg"
)
SHEET_SOURCE = os.getenv("SHEET_SOURCE", DEFAULT_SHEET_ID)

# --- Fetch Strategies ---
# Relay endpoint that serves the sheet CSV (takes ?sheetId=). Skipped when unset.
RELAY_URL = os.getenv("RELAY_URL", "").strip() or None
# Public CORS proxy, last resort. Takes ?url=<encoded gviz url>. Skipped when unset.
CORS_PROXY_URL = os.getenv("CORS_PROXY_URL", "").strip() or None
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "15"))
USER_AGENT = os.getenv("USER_AGENT", "SheetInventory/1.0")

# --- Refresh Cycle ---
POLL_INTERVAL_SECONDS = int(os.getenv("POLL_INTERVAL_SECONDS", "30"))

# --- Outputs ---
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")
REPORT_FILENAME_BASE = os.getenv("REPORT_FILENAME_BASE", "inventory_snapshot")
SAVE_CSV_OUTPUT = _env_bool("SAVE_CSV_OUTPUT", True)
SAVE_JSON_OUTPUT = _env_bool("SAVE_JSON_OUTPUT", False)

# --- Webhook ---
WEBHOOK_URL = os.getenv("WEBHOOK_URL")

# --- Overrides Store (PostgREST / Supabase REST) ---
OVERRIDES_URL = os.getenv("OVERRIDES_URL", "").strip() or None
OVERRIDES_KEY = os.getenv("OVERRIDES_KEY", "").strip() or None
OVERRIDES_TABLE = os.getenv("OVERRIDES_TABLE", "inventory_overrides")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")
LOG_FILENAME = "sheet_inventory.log"

# --- Column Mapping ---
# Optional spreadsheet column letters per role, e.g. COLUMN_SKU=C.
# Roles left blank fall back to header keyword detection.
COLUMN_ROLES = [
    "model",
    "sku",
    "partNumber",
    "productDetails",
    "productImage",
    "quantity",
    "altStock",
    "eta1",
    "eta2",
    "eta3",
    "eta4",
    "eta5",
    "weight",
    "shippingWeight",
]


def _env_name_for_role(role: str) -> str:
    # partNumber -> COLUMN_PART_NUMBER
    snake = "".join(f"_{c}" if c.isupper() else c for c in role)
    return f"COLUMN_{snake.upper()}"


COLUMN_MAPPING = {
    role: os.getenv(_env_name_for_role(role), "").strip()
    for role in COLUMN_ROLES
    if os.getenv(_env_name_for_role(role), "").strip()
}
