import json
import logging
from pathlib import Path
from typing import Optional, Sequence
import requests

from . import settings
from . import utils
from .schemas import InventoryRecord, InventoryStats

logger = logging.getLogger(__name__)


def save_outputs(
    records: Sequence[InventoryRecord], report_name: Optional[str] = None
) -> dict[str, Path]:
    """Saves the snapshot to a dated CSV and, when configured, a dated JSON file."""
    report_name = report_name or settings.REPORT_FILENAME_BASE
    settings.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename()
    written = {}

    if settings.SAVE_CSV_OUTPUT:
        csv_path = settings.OUTPUT_DIR / f"{report_name}_{date_suffix}.csv"
        csv_columns = {
            name: info.alias
            for name, info in InventoryRecord.model_fields.items()
            if info.alias
        }
        df = utils.records_to_frame(records).rename(columns=csv_columns)
        df.to_csv(csv_path, index=False)
        logger.info(f"✅ Inventory snapshot saved to: {csv_path}")
        written["csv"] = csv_path

    if settings.SAVE_JSON_OUTPUT:
        json_path = settings.OUTPUT_DIR / f"{report_name}_{date_suffix}.json"
        with open(json_path, "w", encoding="utf-8") as f:
            json_data = [record.model_dump(mode="json", by_alias=True) for record in records]
            json.dump(json_data, f, indent=2)
        logger.info(f"✅ JSON output saved to: {json_path}")
        written["json"] = json_path
    else:
        logger.debug("Skipping JSON file save as per configuration.")

    return written


def post_to_webhook(records: Sequence[InventoryRecord], stats: InventoryStats) -> bool:
    """Posts the records AND the stats summary to the webhook. Failures are logged, not raised."""
    if not settings.WEBHOOK_URL:
        logger.debug("WEBHOOK_URL not set. Skipping webhook post.")
        return False

    logger.info(f"🚀 Posting {len(records)} records to webhook.")

    payload = {
        "reportData": [record.model_dump(mode="json", by_alias=True) for record in records],
        "stats": stats.model_dump(mode="json", by_alias=True),
    }

    try:
        response = requests.post(settings.WEBHOOK_URL, json=payload, timeout=15)
        response.raise_for_status()
        logger.info("✅ Data and stats successfully posted to webhook.")
        return True
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error posting to webhook: {e}")
        return False
