from typing import Literal, Optional, Sequence

from .schemas import LOW_STOCK, OUT_OF_STOCK, UNCATEGORIZED, FilterState, InventoryRecord

SortField = Literal["id", "name", "quantity", "location", "status"]
SortOrder = Literal["asc", "desc"]


def _matches(record: InventoryRecord, term: str) -> bool:
    term = term.lower()
    return any(
        term in value.lower()
        for value in (record.id, record.sku, record.part_number, record.name, record.category)
    )


def search_records(records: Sequence[InventoryRecord], query: str) -> list[InventoryRecord]:
    return [record for record in records if _matches(record, query)]


def lookup_records(
    records: Sequence[InventoryRecord], terms: Sequence[str]
) -> list[InventoryRecord]:
    """Multi-lookup: keeps records matching any of the terms."""
    return [record for record in records if any(_matches(record, t) for t in terms)]


def filter_records(
    records: Sequence[InventoryRecord], state: FilterState
) -> list[InventoryRecord]:
    """
    Search (multi-lookup first, then free text) ignores the other filters.
    Without a search, the quick stock filter and the category filter combine.
    """
    if state.multi_lookups:
        return lookup_records(records, state.multi_lookups)
    if state.search_query.strip():
        return search_records(records, state.search_query)

    result = list(records)
    if state.quick_filter == "LOW":
        result = [r for r in result if r.status == LOW_STOCK]
    elif state.quick_filter == "OUT":
        result = [r for r in result if r.status == OUT_OF_STOCK]

    if state.category:
        result = [r for r in result if r.category == state.category]
    return result


def sort_records(
    records: Sequence[InventoryRecord],
    field: Optional[SortField],
    order: SortOrder = "asc",
) -> list[InventoryRecord]:
    """Stable sort; text fields compare case-insensitively."""
    if not field:
        return list(records)

    def key(record: InventoryRecord):
        value = getattr(record, field)
        return value.lower() if isinstance(value, str) else value

    return sorted(records, key=key, reverse=order == "desc")


def unique_models(records: Sequence[InventoryRecord]) -> list[str]:
    return sorted({r.category for r in records if r.category and r.category != UNCATEGORIZED})
