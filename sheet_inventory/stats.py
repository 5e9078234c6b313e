from typing import Sequence

from .schemas import LOW_STOCK, OUT_OF_STOCK, UNCATEGORIZED, InventoryRecord, InventoryStats
from .utils import records_to_frame


def compute_stats(records: Sequence[InventoryRecord]) -> InventoryStats:
    """Full recomputation of the summary counters for the current collection."""
    df = records_to_frame(records)
    if df.empty:
        return InventoryStats()

    categories = (
        df["category"].replace("", UNCATEGORIZED).fillna(UNCATEGORIZED).value_counts()
    )

    return InventoryStats(
        total_items=len(df),
        total_value=float((df["price"] * df["quantity"]).sum()),
        low_stock_count=int((df["status"] == LOW_STOCK).sum()),
        out_of_stock_count=int((df["status"] == OUT_OF_STOCK).sum()),
        categories={str(k): int(v) for k, v in categories.items()},
    )
