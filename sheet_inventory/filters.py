import logging
from collections import Counter
from typing import Iterable, Optional

from .schemas import UNCATEGORIZED, InventoryRecord

logger = logging.getLogger(__name__)

# Exact id/name values that only appear on repeated header rows
HEADER_KEYWORDS = frozenset(
    {
        "part #",
        "part number",
        "sku",
        "part no.",
        "item id",
        "id",
        "description",
        "desc",
        "qty",
        "quantity",
    }
)


def _missing_id(item: InventoryRecord) -> bool:
    return not item.id


def _empty_row(item: InventoryRecord) -> bool:
    has_name = bool(item.name.strip())
    has_qty = item.quantity > 0
    has_category = bool(item.category) and item.category != UNCATEGORIZED
    return not has_name and not has_qty and not has_category


def _fitment_banner(item: InventoryRecord) -> bool:
    return "fitment" in item.name.lower()


def _high_offset(item: InventoryRecord) -> bool:
    return (
        "(highoffset)" in item.part_number.lower() or "(highoffset)" in item.id.lower()
    )


def _header_repeat(item: InventoryRecord) -> bool:
    return (
        item.id.lower().strip() in HEADER_KEYWORDS
        or item.name.lower().strip() in HEADER_KEYWORDS
    )


def _description_header(item: InventoryRecord) -> bool:
    return "description" in item.name.lower().strip() and item.quantity == 0


# --- Junk Row Rules ---
# Evaluated in order; the first rule that matches drops the row.
ROW_RULES = [
    {"rule": "missing_id", "func": _missing_id},
    {"rule": "empty_row", "func": _empty_row},
    {"rule": "fitment_banner", "func": _fitment_banner},
    {"rule": "high_offset", "func": _high_offset},
    {"rule": "header_repeat", "func": _header_repeat},
    {"rule": "description_header", "func": _description_header},
]


def junk_reason(item: InventoryRecord) -> Optional[str]:
    """Name of the first rule that rejects the row, or None for genuine inventory."""
    for rule in ROW_RULES:
        if rule["func"](item):
            return rule["rule"]
    return None


def is_inventory_row(item: InventoryRecord) -> bool:
    return junk_reason(item) is None


def filter_rows(items: Iterable[InventoryRecord]) -> list[InventoryRecord]:
    """Drops junk rows silently; counts per rule are logged at DEBUG."""
    kept = []
    dropped = Counter()
    for item in items:
        reason = junk_reason(item)
        if reason is None:
            kept.append(item)
        else:
            dropped[reason] += 1

    if dropped:
        logger.debug(f"Dropped {sum(dropped.values())} junk rows: {dict(dropped)}")
    return kept
