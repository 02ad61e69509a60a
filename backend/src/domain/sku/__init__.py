"""SKU domain module for DenimFlow.

This module implements the SKU codec, universal SKU classification, and
order-time stock matching.
"""

from .errors import SkuError, InvalidSkuError, InvalidQuantityError
from .codec import (
    SkuComponents,
    HemCode,
    HEM_ADJUSTMENTS,
    SKU_PATTERN,
    parse_sku,
    build_sku,
    is_valid_components,
    get_hem_adjustment,
    adjust_inseam_for_hem,
)
from .universal import (
    WashGroup,
    WASH_GROUPS,
    GROUP_REPRESENTATIVES,
    get_wash_group,
    get_representative_wash,
    get_universal_sku,
    universal_sku_key,
    can_convert_to_sku,
)
from .matching import MatchType, SkuMatchResult, find_sku_match

__all__ = [
    "SkuError",
    "InvalidSkuError",
    "InvalidQuantityError",
    "SkuComponents",
    "HemCode",
    "HEM_ADJUSTMENTS",
    "SKU_PATTERN",
    "parse_sku",
    "build_sku",
    "is_valid_components",
    "get_hem_adjustment",
    "adjust_inseam_for_hem",
    "WashGroup",
    "WASH_GROUPS",
    "GROUP_REPRESENTATIVES",
    "get_wash_group",
    "get_representative_wash",
    "get_universal_sku",
    "universal_sku_key",
    "can_convert_to_sku",
    "MatchType",
    "SkuMatchResult",
    "find_sku_match",
]
