"""Unit tests for order-time stock matching"""

from domain.inventory import InventoryItem
from domain.sku import MatchType, find_sku_match


def item(item_id, sku, status1="STOCK", status2="UNCOMMITTED"):
    return InventoryItem(id=item_id, sku=sku, status1=status1, status2=status2)


class TestFindSkuMatch:

    def test_exact_match_preferred_over_universal(self):
        items = [
            item("i-1", "ST-32-S-36-RAW"),
            item("i-2", "ST-32-S-30-STA"),
        ]
        result = find_sku_match("ST-32-S-30-STA", items)
        assert result.match_type == MatchType.EXACT
        assert result.item.id == "i-2"
        assert result.production_required is False
        assert result.universal_sku == "ST-32-S-36-RAW"

    def test_universal_match_picks_smallest_surplus(self):
        items = [
            item("i-1", "ST-32-S-36-RAW"),
            item("i-2", "ST-32-S-32-IND"),
            item("i-3", "ST-32-S-34-STA"),
        ]
        result = find_sku_match("ST-32-S-30-STA", items)
        assert result.match_type == MatchType.UNIVERSAL
        assert result.item.id == "i-2"

    def test_universal_tie_keeps_catalog_order(self):
        items = [
            item("i-1", "ST-32-S-32-RAW"),
            item("i-2", "ST-32-S-32-IND"),
        ]
        assert find_sku_match("ST-32-S-30-STA", items).item.id == "i-1"

    def test_committed_items_are_ignored(self):
        items = [
            item("i-1", "ST-32-S-30-STA", status2="COMMITTED"),
            item("i-2", "ST-32-S-30-STA", status2="ASSIGNED"),
        ]
        result = find_sku_match("ST-32-S-30-STA", items)
        assert result.match_type == MatchType.NONE
        assert result.production_required is True
        assert result.universal_sku == "ST-32-S-36-RAW"

    def test_shorter_and_other_group_units_do_not_match(self):
        items = [
            item("i-1", "ST-32-S-28-RAW"),
            item("i-2", "ST-32-S-36-BLK"),
        ]
        assert find_sku_match("ST-32-S-30-STA", items).matched is False

    def test_malformed_inventory_sku_is_skipped(self):
        items = [
            item("i-1", "garbage"),
            item("i-2", "ST-32-S-34-RAW"),
        ]
        assert find_sku_match("ST-32-S-30-STA", items).item.id == "i-2"

    def test_malformed_order_sku(self):
        result = find_sku_match("not-a-sku", [item("i-1", "ST-32-S-30-STA")])
        assert result.match_type == MatchType.NONE
        assert result.universal_sku is None
        assert result.production_required is False
