"""
Recognize the shape of a paint/layout property value.

The classification is done once per value; editors receive the resulting tag instead of
re-inspecting the raw value.
"""

import re
from typing import Any, Dict, List, Optional

from models.style import ClassifiedProperty, PropertyKind
from services.styling.colors import is_simple_color
from services.styling.constants import PROPERTY_DESCRIPTIONS, SIMPLE_NUMBER_PROPERTIES


def is_stops_table(value: Any) -> bool:
    return isinstance(value, dict) and isinstance(value.get("stops"), list)


def is_match_expression(value: Any) -> bool:
    return isinstance(value, list) and len(value) > 0 and value[0] == "match"


def is_interpolate_expression(value: Any) -> bool:
    return isinstance(value, list) and len(value) > 0 and value[0] == "interpolate"


def is_simple_number_property(key: str) -> bool:
    return any(prop in key for prop in SIMPLE_NUMBER_PROPERTIES)


def property_kind(key: str, value: Any) -> PropertyKind:
    """Return the variant tag of ``value`` given the property ``key``. First match wins."""
    if "dasharray" in key:
        return PropertyKind.DASHARRAY
    if is_stops_table(value):
        return PropertyKind.STOPS
    if is_match_expression(value):
        return PropertyKind.MATCH
    if is_interpolate_expression(value):
        return PropertyKind.INTERPOLATE
    if "color" in key and is_simple_color(value):
        return PropertyKind.COLOR
    if "opacity" in key:
        return PropertyKind.OPACITY
    if "width" in key:
        return PropertyKind.WIDTH
    if is_simple_number_property(key):
        return PropertyKind.NUMBER
    return PropertyKind.LITERAL


def format_property_name(key: str) -> str:
    """``"fill-outline-color"`` -> ``"Fill Outline Color"``."""
    return " ".join(_capitalize(word) for word in key.split("-"))


def format_layer_name(layer_id: str) -> str:
    """Human readable layer name; splits on dashes and underscores."""
    return " ".join(_capitalize(word) for word in re.split(r"[-_]", layer_id))


def get_property_description(key: str) -> str:
    return PROPERTY_DESCRIPTIONS.get(key, "")


def classify_property(key: str, value: Any) -> ClassifiedProperty:
    return ClassifiedProperty(
        key=key,
        kind=property_kind(key, value),
        label=format_property_name(key),
        description=get_property_description(key),
        value=value,
    )


def classify_block(block: Optional[Dict[str, Any]]) -> List[ClassifiedProperty]:
    """Classify every entry of a paint or layout block, in document order."""
    if not block:
        return []
    return [classify_property(key, value) for key, value in block.items()]


def opacity_percent(value: Any) -> int:
    """Opacity as a 0-100 slider value; non-numeric (e.g. expression) values show as 100."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return round(value * 100)
    return 100


def _capitalize(word: str) -> str:
    # Only the first letter changes, unlike str.capitalize()
    return word[:1].upper() + word[1:]
