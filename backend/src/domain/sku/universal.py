"""Universal SKU classification.

A universal SKU is the equivalence-class key for substitutable units: inseam
forced to the longest producible length and wash replaced by its group
representative. Two SKUs are interchangeable stock iff their universal SKU
text is identical.
"""

from dataclasses import replace
from enum import Enum
from typing import Dict, Optional

from .codec import INSEAM_MAX, SkuComponents, build_sku


class WashGroup(str, Enum):
    """Wash families sharing one physical base treatment."""
    LIGHT = "LIGHT"
    DARK = "DARK"
    BLACK = "BLACK"


# Known wash vocabulary. Every code belongs to exactly one group.
WASH_GROUPS: Dict[str, WashGroup] = {
    "RAW": WashGroup.LIGHT,
    "STA": WashGroup.LIGHT,
    "IND": WashGroup.LIGHT,
    "BRW": WashGroup.DARK,
    "ONX": WashGroup.DARK,
    "JAG": WashGroup.DARK,
    "BLK": WashGroup.BLACK,
}

GROUP_REPRESENTATIVES: Dict[WashGroup, str] = {
    WashGroup.LIGHT: "RAW",
    WashGroup.DARK: "BRW",
    WashGroup.BLACK: "BLK",
}


def get_wash_group(wash: str) -> Optional[WashGroup]:
    """Look up the group of a wash code.

    Returns:
        WashGroup, or None for codes outside the known vocabulary
    """
    return WASH_GROUPS.get(wash)


def get_representative_wash(wash: str) -> str:
    """Get the representative wash of a code's group.

    Unknown codes form a singleton group and represent themselves.
    """
    group = get_wash_group(wash)
    if group is None:
        return wash
    return GROUP_REPRESENTATIVES[group]


def get_universal_sku(components: SkuComponents) -> SkuComponents:
    """Map components to their equivalence-class representative.

    Args:
        components: Specific SKU components

    Returns:
        New components with inseam=36 and the group representative wash

    Example:
        >>> get_universal_sku(parse_sku("ST-32-S-30-STA"))
        SkuComponents(style='ST', waist=32, shape='S', inseam=36, wash='RAW')
    """
    return replace(
        components,
        inseam=INSEAM_MAX,
        wash=get_representative_wash(components.wash),
    )


def universal_sku_key(components: SkuComponents) -> str:
    """Canonical text of the universal SKU, used as equivalence and lock key."""
    return build_sku(get_universal_sku(components))


def can_convert_to_sku(candidate: SkuComponents, target: SkuComponents) -> bool:
    """Decide whether a physical unit can be finished into the target SKU.

    Style, waist and shape are fixed at cutting. A unit can always be
    shortened, never lengthened. Within a wash group the finishing treatment
    is treated as interchangeable; this rule lives only here.

    Args:
        candidate: Components of the available unit
        target: Components the demand asks for

    Returns:
        True if the unit can satisfy the target
    """
    if candidate.style != target.style:
        return False
    if candidate.waist != target.waist:
        return False
    if candidate.shape != target.shape:
        return False

    if candidate.inseam < target.inseam:
        return False

    return get_representative_wash(candidate.wash) == get_representative_wash(target.wash)
