import re
from datetime import datetime
from typing import Iterable, Literal
import pandas as pd

from .schemas import InventoryRecord

# Columns of the flat, analytics-friendly export (raw/etas are nested and left out)
FRAME_COLUMNS = [
    "id",
    "sku",
    "part_number",
    "name",
    "category",
    "location",
    "quantity",
    "alt_quantity",
    "status",
    "eta",
    "weight",
    "shipping_weight",
    "image_url",
    "price",
]


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def records_to_frame(records: Iterable[InventoryRecord]) -> pd.DataFrame:
    """Flattens records into a DataFrame with a stable column order, even when empty."""
    rows = [record.model_dump(include=set(FRAME_COLUMNS)) for record in records]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def get_optimized_image_url(url: str | None, kind: Literal["thumb", "full"]) -> str:
    """
    Rewrites known image hosts to a size suited for display.
    - Google Drive share links -> thumbnail endpoint or direct view link.
    - googleusercontent links -> size suffix (=s250 / =s1000).
    Anything else is returned unchanged.
    """
    if not url:
        return ""

    drive_match = re.search(r"/d/([a-zA-Z0-9-_]+)", url) or re.search(
        r"id=([a-zA-Z0-9-_]+)", url
    )
    if drive_match:
        file_id = drive_match.group(1)
        if kind == "thumb":
            return f"https://drive.google.com/thumbnail?id={file_id}&sz=w250"
        return f"https://drive.google.com/uc?export=view&id={file_id}"

    if "googleusercontent.com" in url:
        base_url = url.split("=")[0]
        return f"{base_url}=s250" if kind == "thumb" else f"{base_url}=s1000"

    return url
