import pytest

from sheet_inventory.columns import (
    UNRESOLVED,
    column_letter_to_index,
    normalize_header,
    resolve,
    resolve_role_map,
)
from sheet_inventory.schemas import ColumnMapping

# ── Column Letters ─────────────────────────────────────────────────────


class TestColumnLetterToIndex:
    @pytest.mark.parametrize(
        "letter,expected",
        [("A", 0), ("B", 1), ("Z", 25), ("AA", 26), ("AB", 27), ("AZ", 51), ("BA", 52), ("ZZ", 701), ("AAA", 702)],
    )
    def test_known_letters(self, letter, expected):
        assert column_letter_to_index(letter) == expected

    def test_case_insensitive(self):
        assert column_letter_to_index("aa") == column_letter_to_index("AA")

    def test_non_letters_ignored(self):
        assert column_letter_to_index(" c ") == 2

    @pytest.mark.parametrize("value", [None, "", "  ", "12"])
    def test_unresolved(self, value):
        assert column_letter_to_index(value) == UNRESOLVED

    def test_bijection_over_two_letter_range(self):
        letters = [chr(c) for c in range(ord("A"), ord("Z") + 1)]
        names = letters + [a + b for a in letters for b in letters]
        indices = [column_letter_to_index(n) for n in names]
        assert indices == list(range(len(names)))


# ── Resolution Chain ───────────────────────────────────────────────────


class TestResolve:
    headers = [normalize_header(h) for h in ["Item_Code", "Model", "Qty On Hand"]]

    def test_explicit_letter_wins(self):
        assert resolve("Z", ["qty"], 4, self.headers) == 25

    def test_keyword_match(self):
        assert resolve("", ["qty", "quantity"], 4, self.headers) == 2

    def test_underscore_and_space_removed(self):
        assert resolve(None, ["itemcode"], -1, self.headers) == 0
        assert resolve(None, ["qtyonhand"], -1, self.headers) == 2

    def test_fallback(self):
        assert resolve(None, ["price"], 7, self.headers) == 7

    def test_fallback_unresolved(self):
        assert resolve(None, ["price"], UNRESOLVED, self.headers) == UNRESOLVED


class TestResolveRoleMap:
    def test_auto_detect(self):
        role_map = resolve_role_map(["SKU", "Model", "Description", "Qty"])
        assert role_map.sku == 0
        assert role_map.model == 1
        assert role_map.product_details == 2
        assert role_map.quantity == 3
        assert role_map.part_number == UNRESOLVED
        assert role_map.location == UNRESOLVED
        assert role_map.price == UNRESOLVED

    def test_positional_fallbacks(self):
        role_map = resolve_role_map(["a", "b", "c", "d", "e"])
        assert role_map.model == 1
        assert role_map.sku == 2
        assert role_map.product_details == 3
        assert role_map.quantity == 4
        assert role_map.alt_stock == 6
        assert role_map.etas == (7, 8, 9, 11, 12)
        assert role_map.weight == 13
        assert role_map.shipping_weight == UNRESOLVED

    def test_location_and_price_detected(self):
        role_map = resolve_role_map(["SKU", "Bin Location", "Unit Price"])
        assert role_map.location == 1
        assert role_map.price == 2

    def test_user_mapping_dict(self):
        role_map = resolve_role_map(["SKU", "Qty"], {"sku": "D", "quantity": "B"})
        assert role_map.sku == 3
        assert role_map.quantity == 1

    def test_user_mapping_model(self):
        role_map = resolve_role_map(["x"], ColumnMapping(part_number="AA"))
        assert role_map.part_number == 26

    def test_role_map_is_frozen(self):
        role_map = resolve_role_map(["SKU"])
        with pytest.raises(Exception):
            role_map.sku = 5
