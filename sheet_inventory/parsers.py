import logging

from .columns import resolve_role_map
from .filters import filter_rows
from .records import build_record
from .schemas import ColumnMapping, InventoryRecord
from .tokenizer import parse_csv_line, split_csv_lines

logger = logging.getLogger(__name__)


def parse_inventory(
    csv_text: str, mapping: ColumnMapping | dict | None = None
) -> list[InventoryRecord]:
    """
    Turns a raw sheet CSV export into normalized inventory records.
    - Resolves column roles once from the header row.
    - Builds one record per data row.
    - Drops junk rows (repeated headers, fitment banners, empty rows).
    A sheet with no data rows gives an empty list, never an error.
    """
    lines = split_csv_lines(csv_text)
    if len(lines) < 2:
        logger.warning("⚠️ Sheet has no data rows. Returning empty inventory.")
        return []

    header_row = parse_csv_line(lines[0])
    role_map = resolve_role_map(header_row, mapping)

    built = [build_record(parse_csv_line(line), role_map, header_row) for line in lines[1:]]
    records = filter_rows(built)

    logger.info(
        f"✅ Parsed {len(records)} inventory records ({len(built) - len(records)} junk rows skipped)."
    )
    return records
