"""SKU text codec and hem-length lookup.

Canonical SKU text is ``STYLE-WAIST-SHAPE-INSEAM-WASH``, for example
``ST-32-S-30-STA``. Parsing is a query: malformed text is an expected input
(live typing, partial forms) and yields ``None``. Building is a command and
rejects invalid components with ``InvalidSkuError``.
"""

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Optional

from .errors import InvalidSkuError


WAIST_MIN = 20
WAIST_MAX = 50
INSEAM_MIN = 26
INSEAM_MAX = 36

SKU_SEPARATOR = "-"
SKU_PATTERN = re.compile(r"^[A-Z]{2}-[0-9]{2}-[A-Z]-[0-9]{2}-[A-Z]{3}$")

_STYLE_PATTERN = re.compile(r"^[A-Z]{2}$")
_SHAPE_PATTERN = re.compile(r"^[A-Z]$")
_WASH_PATTERN = re.compile(r"^[A-Z]{3}$")


@dataclass(frozen=True)
class SkuComponents:
    """Structured SKU value.

    Attributes:
        style: 2-letter style code (e.g. "ST", "SL", "RL")
        waist: Waist in inches (20-50)
        shape: 1-letter shape code (e.g. "S", "R", "X")
        inseam: Inseam in inches (26-36)
        wash: 3-letter wash code (e.g. "RAW", "STA", "ONX")
    """
    style: str
    waist: int
    shape: str
    inseam: int
    wash: str


class HemCode(str, Enum):
    """Hem finishing styles."""
    RWH = "RWH"  # Raw hem
    STH = "STH"  # Standard hem
    ORL = "ORL"  # Original roll
    HRL = "HRL"  # Heavy roll


# Inseam delta (inches) a hem style consumes from the finished length
HEM_ADJUSTMENTS: Dict[HemCode, int] = {
    HemCode.RWH: 0,
    HemCode.STH: 0,
    HemCode.ORL: 2,
    HemCode.HRL: 4,
}


def _validation_error(components: SkuComponents) -> Optional[str]:
    """Return a reason string if components are invalid, else None."""
    if not isinstance(components.style, str) or not _STYLE_PATTERN.fullmatch(components.style):
        return "Style must be 2 uppercase letters"
    if not isinstance(components.shape, str) or not _SHAPE_PATTERN.fullmatch(components.shape):
        return "Shape must be 1 uppercase letter"
    if not isinstance(components.wash, str) or not _WASH_PATTERN.fullmatch(components.wash):
        return "Wash must be 3 uppercase letters"
    # bool is an int subclass
    if isinstance(components.waist, bool) or not isinstance(components.waist, int):
        return "Waist must be an integer"
    if not WAIST_MIN <= components.waist <= WAIST_MAX:
        return f"Waist must be between {WAIST_MIN} and {WAIST_MAX}"
    if isinstance(components.inseam, bool) or not isinstance(components.inseam, int):
        return "Inseam must be an integer"
    if not INSEAM_MIN <= components.inseam <= INSEAM_MAX:
        return f"Inseam must be between {INSEAM_MIN} and {INSEAM_MAX}"
    return None


def is_valid_components(components: SkuComponents) -> bool:
    """Check whether components are within every field's domain."""
    return _validation_error(components) is None


def parse_sku(text: Optional[str]) -> Optional[SkuComponents]:
    """Parse SKU text into components.

    Args:
        text: Raw SKU text (e.g. "ST-32-S-30-STA")

    Returns:
        SkuComponents, or None if the text is malformed or out of range

    Example:
        >>> parse_sku("ST-32-S-30-STA")
        SkuComponents(style='ST', waist=32, shape='S', inseam=30, wash='STA')
        >>> parse_sku("ST-32-S") is None
        True
    """
    if not isinstance(text, str) or not SKU_PATTERN.fullmatch(text):
        return None

    style, waist_str, shape, inseam_str, wash = text.split(SKU_SEPARATOR)
    components = SkuComponents(
        style=style,
        waist=int(waist_str),
        shape=shape,
        inseam=int(inseam_str),
        wash=wash,
    )
    if _validation_error(components) is not None:
        return None
    return components


def build_sku(components: SkuComponents) -> str:
    """Format components as canonical SKU text.

    Args:
        components: Validated SKU components

    Returns:
        Canonical SKU text

    Raises:
        InvalidSkuError: If any component is malformed or out of range
    """
    reason = _validation_error(components)
    if reason is not None:
        raise InvalidSkuError(components, reason)

    return SKU_SEPARATOR.join([
        components.style,
        f"{components.waist:02d}",
        components.shape,
        f"{components.inseam:02d}",
        components.wash,
    ])


def get_hem_adjustment(hem: HemCode) -> int:
    """Get the inseam delta for a hem style.

    Args:
        hem: Hem code (HemCode member or its string value)

    Returns:
        Signed inseam delta in inches
    """
    return HEM_ADJUSTMENTS[HemCode(hem)]


def adjust_inseam_for_hem(
    components: SkuComponents,
    from_hem: HemCode,
    to_hem: HemCode
) -> SkuComponents:
    """Recompute inseam when a line item switches hem style.

    The base inseam (before any hem delta) is kept, so the finished length
    intent survives the change: new = (inseam - delta(from)) + delta(to).

    Args:
        components: Current SKU components
        from_hem: Hem style the current inseam was computed with
        to_hem: Newly selected hem style

    Returns:
        New components with the adjusted inseam

    Raises:
        InvalidSkuError: If the adjusted inseam leaves the producible range
    """
    base_inseam = components.inseam - get_hem_adjustment(from_hem)
    adjusted = replace(components, inseam=base_inseam + get_hem_adjustment(to_hem))

    reason = _validation_error(adjusted)
    if reason is not None:
        raise InvalidSkuError(adjusted, reason)
    return adjusted
