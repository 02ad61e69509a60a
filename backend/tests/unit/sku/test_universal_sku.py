"""Unit tests for wash groups, universal SKUs and convertibility"""

import pytest

from domain.sku import (
    WashGroup,
    build_sku,
    can_convert_to_sku,
    get_representative_wash,
    get_universal_sku,
    get_wash_group,
    parse_sku,
    universal_sku_key,
)


class TestWashGroups:

    @pytest.mark.parametrize("wash,group,representative", [
        ("RAW", WashGroup.LIGHT, "RAW"),
        ("STA", WashGroup.LIGHT, "RAW"),
        ("IND", WashGroup.LIGHT, "RAW"),
        ("BRW", WashGroup.DARK, "BRW"),
        ("ONX", WashGroup.DARK, "BRW"),
        ("JAG", WashGroup.DARK, "BRW"),
        ("BLK", WashGroup.BLACK, "BLK"),
    ])
    def test_known_washes(self, wash, group, representative):
        assert get_wash_group(wash) == group
        assert get_representative_wash(wash) == representative

    def test_unknown_wash_is_its_own_group(self):
        assert get_wash_group("ZZZ") is None
        assert get_representative_wash("ZZZ") == "ZZZ"


class TestUniversalSku:

    def test_universal_sku_uses_max_inseam_and_representative(self):
        universal = get_universal_sku(parse_sku("ST-32-S-30-STA"))
        assert build_sku(universal) == "ST-32-S-36-RAW"

    def test_dark_group_representative(self):
        assert universal_sku_key(parse_sku("SL-30-X-32-ONX")) == "SL-30-X-36-BRW"

    def test_universal_sku_is_idempotent(self):
        once = get_universal_sku(parse_sku("RL-34-R-28-JAG"))
        assert get_universal_sku(once) == once

    def test_group_members_share_universal_sku(self):
        keys = {
            universal_sku_key(parse_sku(sku))
            for sku in ("ST-32-S-30-RAW", "ST-32-S-34-STA", "ST-32-S-26-IND")
        }
        assert keys == {"ST-32-S-36-RAW"}

    def test_unknown_wash_keeps_own_universal_sku(self):
        assert universal_sku_key(parse_sku("ST-32-S-30-ZZZ")) == "ST-32-S-36-ZZZ"


class TestCanConvertToSku:

    def test_longer_unit_converts_to_shorter_same_group(self):
        candidate = parse_sku("ST-32-S-36-RAW")
        target = parse_sku("ST-32-S-30-STA")
        assert can_convert_to_sku(candidate, target) is True

    def test_equal_inseam_converts(self):
        assert can_convert_to_sku(parse_sku("ST-32-S-30-IND"), parse_sku("ST-32-S-30-STA")) is True

    def test_unit_cannot_be_lengthened(self):
        assert can_convert_to_sku(parse_sku("ST-32-S-30-RAW"), parse_sku("ST-32-S-32-RAW")) is False

    @pytest.mark.parametrize("longer,shorter", [
        ("ST-32-S-34-RAW", "ST-32-S-30-STA"),
        ("ST-32-S-36-BRW", "ST-32-S-26-ONX"),
        ("ST-32-S-31-ONX", "ST-32-S-30-ONX"),
    ])
    def test_conversion_only_runs_from_longer_to_shorter(self, longer, shorter):
        a, b = parse_sku(longer), parse_sku(shorter)
        assert can_convert_to_sku(a, b) is True
        assert can_convert_to_sku(b, a) is False

    @pytest.mark.parametrize("candidate", [
        "SL-32-S-36-RAW",  # style
        "ST-33-S-36-RAW",  # waist (exact only)
        "ST-32-R-36-RAW",  # shape
        "ST-32-S-36-ONX",  # wash group
    ])
    def test_fixed_attributes_must_match(self, candidate):
        assert can_convert_to_sku(parse_sku(candidate), parse_sku("ST-32-S-30-STA")) is False
