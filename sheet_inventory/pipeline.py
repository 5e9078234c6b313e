import logging
import time
from typing import Optional

from . import data_handler, settings
from .exceptions import InventoryRetrievalError
from .fetcher import get_raw_csv_text
from .overrides import OverridesClient, apply_overrides
from .parsers import parse_inventory
from .schemas import ColumnMapping, InventoryRecord, InventorySnapshot
from .store import InventoryStore

logger = logging.getLogger(__name__)


class InventoryPipeline:
    """
    One refresh cycle of the sheet feed: Extract -> Transform -> Load.
    Scheduled polls and manual refreshes both go through run().
    """

    def __init__(
        self,
        store: Optional[InventoryStore] = None,
        sheet_source: Optional[str] = None,
        mapping: ColumnMapping | dict | None = None,
        overrides: Optional[OverridesClient] = None,
        save_outputs: bool = True,
        post_webhook: bool = True,
    ):
        self.store = store if store is not None else InventoryStore()
        self.sheet_source = sheet_source or settings.SHEET_SOURCE
        self.mapping = mapping if mapping is not None else settings.COLUMN_MAPPING
        self.overrides = overrides if overrides is not None else OverridesClient()
        self.save_outputs = save_outputs
        self.post_webhook = post_webhook

    def run(self) -> InventorySnapshot:
        logger.info("🚀 STEP: INVENTORY REFRESH")
        logger.info("-" * 30)
        ticket = self.store.begin_fetch()

        # --- 1. EXTRACT ---
        try:
            csv_text = self.extract()
        except InventoryRetrievalError as e:
            logger.error(f"❌ {e}")
            self.store.fail(ticket, str(e))
            return self.store.snapshot()

        # --- 2. TRANSFORM ---
        records = self.transform(csv_text)

        # --- 3. LOAD ---
        self.load(ticket, records)

        logger.info("✅ Inventory Refresh Finished.")
        logger.info("=" * 60)
        return self.store.snapshot()

    def extract(self) -> str:
        return get_raw_csv_text(self.sheet_source)

    def transform(self, csv_text: str) -> list[InventoryRecord]:
        records = parse_inventory(csv_text, self.mapping)
        overrides = self.overrides.get_overrides()
        if overrides:
            records = apply_overrides(records, overrides)
            logger.info(f"Applied {len(overrides)} item overrides.")
        return records

    def load(self, ticket: int, records: list[InventoryRecord]):
        if not self.store.publish(ticket, records):
            return

        stats = self.store.snapshot().stats
        logger.info("\n--- Inventory Summary ---")
        logger.info(f"Items: {stats.total_items}")
        logger.info(f"Total value: {stats.total_value:,.2f}")
        logger.info(f"Low stock: {stats.low_stock_count}")
        logger.info(f"Out of stock: {stats.out_of_stock_count}")

        if self.save_outputs and records:
            data_handler.save_outputs(records)
        elif not records:
            logger.warning("No data to save to disk.")

        if self.post_webhook:
            data_handler.post_to_webhook(records, stats)

    def poll(self, interval: Optional[int] = None, max_cycles: Optional[int] = None):
        """Runs a refresh every `interval` seconds. A failed cycle keeps the last good data."""
        interval = interval if interval is not None else settings.POLL_INTERVAL_SECONDS
        cycles = 0
        while max_cycles is None or cycles < max_cycles:
            self.run()
            cycles += 1
            if max_cycles is not None and cycles >= max_cycles:
                break
            time.sleep(interval)
