"""
Column role resolution.

Each semantic role (sku, quantity, ...) is resolved to a zero-based column
index by an ordered chain of strategies; the first one that does not return
UNRESOLVED wins:

1. An explicit spreadsheet column letter supplied by the user ("C", "AA").
2. The first header whose normalized text contains one of the role keywords.
3. A hardcoded positional fallback (which may itself be UNRESOLVED).
"""

import logging
import re
from typing import Callable, Optional, Sequence

from .schemas import ColumnMapping, ColumnRoleMap

logger = logging.getLogger(__name__)

UNRESOLVED = -1

# --- Role Registry ---
# role -> keywords matched against normalized headers, and positional fallback.
ROLE_REGISTRY = {
    "model": {"keywords": ["model", "category", "type", "group"], "fallback": 1},
    "sku": {"keywords": ["sku", "partnumber", "part#", "id", "itemcode"], "fallback": 2},
    "part_number": {"keywords": ["partnumber", "part#", "mpn"], "fallback": UNRESOLVED},
    "product_details": {
        "keywords": ["description", "name", "details", "desc", "title", "producttitle"],
        "fallback": 3,
    },
    "product_image": {
        "keywords": ["image", "url", "photo", "picture"],
        "fallback": UNRESOLVED,
    },
    "quantity": {"keywords": ["qty", "quantity", "stock", "onhand"], "fallback": 4},
    "alt_stock": {"keywords": ["alt", "alternate", "reserve"], "fallback": 6},
    "eta1": {"keywords": ["eta1"], "fallback": 7},
    "eta2": {"keywords": ["eta2"], "fallback": 8},
    "eta3": {"keywords": ["eta3"], "fallback": 9},
    "eta4": {"keywords": ["eta4"], "fallback": 11},
    "eta5": {"keywords": ["eta5"], "fallback": 12},
    "weight": {"keywords": ["weight", "wt", "mass"], "fallback": 13},
    "shipping_weight": {"keywords": ["shipping", "shipwt"], "fallback": UNRESOLVED},
}

# Auto-detected only; there is no user mapping for these.
LOCATION_KEYWORDS = ["loc", "bin", "shelf", "warehouse"]
PRICE_KEYWORDS = ["price", "cost", "msrp"]

ETA_ROLES = ["eta1", "eta2", "eta3", "eta4", "eta5"]

Strategy = Callable[[], int]


def column_letter_to_index(letter: Optional[str]) -> int:
    """Converts a spreadsheet column letter (A, B, AA) to a zero-based index, -1 if none."""
    if not letter:
        return UNRESOLVED
    clean = re.sub(r"[^A-Za-z]", "", letter).upper()
    if not clean:
        return UNRESOLVED

    index = 0
    for char in clean:
        index = index * 26 + (ord(char) - ord("A") + 1)
    return index - 1


def normalize_header(header: str) -> str:
    return re.sub(r"[\s_]+", "", header.lower())


def find_header(headers: Sequence[str], keywords: Sequence[str]) -> int:
    """Index of the first normalized header containing any keyword, -1 if none."""
    for index, header in enumerate(headers):
        if any(keyword in header for keyword in keywords):
            return index
    return UNRESOLVED


def _first_resolved(strategies: Sequence[Strategy]) -> int:
    for strategy in strategies:
        index = strategy()
        if index != UNRESOLVED:
            return index
    return UNRESOLVED


def resolve(
    user_value: Optional[str],
    keywords: Sequence[str],
    fallback_index: int,
    headers: Sequence[str],
) -> int:
    """
    Resolves one role. `headers` must already be normalized.
    An explicit column letter always wins, even if that column is empty.
    """
    return _first_resolved(
        [
            lambda: column_letter_to_index(user_value),
            lambda: find_header(headers, keywords),
            lambda: fallback_index,
        ]
    )


def resolve_role_map(
    header_row: Sequence[str], mapping: ColumnMapping | dict | None = None
) -> ColumnRoleMap:
    """Builds the immutable role -> column index map for one parse pass."""
    if mapping is None:
        mapping = ColumnMapping()
    elif isinstance(mapping, dict):
        mapping = ColumnMapping.model_validate(mapping)

    headers = [normalize_header(h) for h in header_row]

    resolved = {}
    for role, config in ROLE_REGISTRY.items():
        resolved[role] = resolve(
            getattr(mapping, role), config["keywords"], config["fallback"], headers
        )

    role_map = ColumnRoleMap(
        model=resolved["model"],
        sku=resolved["sku"],
        part_number=resolved["part_number"],
        product_details=resolved["product_details"],
        product_image=resolved["product_image"],
        quantity=resolved["quantity"],
        alt_stock=resolved["alt_stock"],
        etas=tuple(resolved[role] for role in ETA_ROLES),
        weight=resolved["weight"],
        shipping_weight=resolved["shipping_weight"],
        location=find_header(headers, LOCATION_KEYWORDS),
        price=find_header(headers, PRICE_KEYWORDS),
    )
    logger.debug(f"Resolved column roles: {role_map.model_dump()}")
    return role_map
