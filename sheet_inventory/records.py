import re
from typing import Optional, Sequence

from .columns import UNRESOLVED
from .schemas import UNASSIGNED, UNCATEGORIZED, ColumnRoleMap, InventoryRecord

# Vendor annotations that are noise in the product title
_NAME_TAGS = [
    re.compile(r"(^|\s+)\(\s*FLOW\s*FORMING\s*\)", re.IGNORECASE),
    re.compile(r"(^|\s+)\(\s*new\s*arrive\s*\)", re.IGNORECASE),
]

_INT_PATTERN = re.compile(r"-?\d+")
_FLOAT_PATTERN = re.compile(r"\d*\.?\d+")


def cell(cells: Sequence[str], index: int) -> str:
    """Safe indexed lookup; unresolved or out-of-range columns read as empty."""
    if index == UNRESOLVED or index < 0 or index >= len(cells):
        return ""
    return cells[index].strip()


def clean_name(name: str) -> str:
    for pattern in _NAME_TAGS:
        name = pattern.sub(" ", name)
    return re.sub(r"\s+", " ", name).strip()


def fallback_id(seed: str) -> str:
    """
    Deterministic id for rows without any usable text field.
    Java-style 31x string hash wrapped to signed 32 bits.
    """
    h = 0
    for char in seed:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return f"GEN-{abs(h)}"


def derive_id(sku: str, part_number: str, name: str, category: str, location: str) -> str:
    record_id = sku or part_number
    if record_id:
        return record_id

    record_id = re.sub(r"\s+", "", name)
    if record_id:
        return record_id

    return fallback_id(f"{category}-{location}")


def parse_quantity(value: str) -> Optional[int]:
    """Keeps digits and '-', then reads the leading integer. None if nothing parses."""
    cleaned = re.sub(r"[^0-9-]", "", value)
    match = _INT_PATTERN.match(cleaned)
    if not match:
        return None
    try:
        return int(match.group())
    except ValueError:
        # Past the interpreter's int digit limit
        return None


def parse_price(value: str) -> float:
    cleaned = re.sub(r"[^0-9.]", "", value)
    match = _FLOAT_PATTERN.match(cleaned)
    return float(match.group()) if match else 0.0


def collect_etas(values: Sequence[str]) -> list[str]:
    return [v for v in values if v and v.lower() != "n/a"]


def build_record(
    cells: Sequence[str], role_map: ColumnRoleMap, header_row: Sequence[str]
) -> InventoryRecord:
    """Converts one tokenized sheet row into a normalized InventoryRecord."""
    sku = cell(cells, role_map.sku)
    part_number = cell(cells, role_map.part_number)
    category = cell(cells, role_map.model) or UNCATEGORIZED
    location_cell = cell(cells, role_map.location)
    name = clean_name(cell(cells, role_map.product_details))

    image_url = cell(cells, role_map.product_image)
    if not image_url.startswith("http"):
        image_url = None

    etas = collect_etas([cell(cells, index) for index in role_map.etas])

    return InventoryRecord(
        id=derive_id(sku, part_number, name, category, location_cell),
        sku=sku,
        part_number=part_number,
        name=name,
        category=category,
        location=location_cell or UNASSIGNED,
        quantity=parse_quantity(cell(cells, role_map.quantity)) or 0,
        alt_quantity=parse_quantity(cell(cells, role_map.alt_stock)),
        etas=etas,
        eta=", ".join(etas),
        weight=cell(cells, role_map.weight) or None,
        shipping_weight=cell(cells, role_map.shipping_weight) or None,
        image_url=image_url,
        price=parse_price(cell(cells, role_map.price)),
        raw={
            header: cells[i] if i < len(cells) else ""
            for i, header in enumerate(header_row)
        },
    )
