"""
In-place edits of a StyleDocument.

Functions here only touch the document; re-rendering and notifications are the editor
session's job. A layer id that is not in the document makes an edit a silent no-op.
"""

import logging
from typing import Any, Callable, List, Optional, Union

from models.style import PropertyBlock, StyleDocument, StyleLayer
from services.styling.colors import hex_to_color_text
from services.styling.constants import QUICK_COLOR_RULES

logger = logging.getLogger(__name__)

VISIBLE = "visible"
HIDDEN = "none"


def find_layer(document: StyleDocument, layer_id: str) -> Optional[StyleLayer]:
    """Return the first layer with ``layer_id``. Duplicate ids are a data error."""
    for layer in document.layers:
        if layer.id == layer_id:
            return layer
    return None


def get_property(
    document: StyleDocument, layer_id: str, block: Union[PropertyBlock, str], key: str
) -> Any:
    layer = find_layer(document, layer_id)
    if layer is None:
        return None
    properties = getattr(layer, PropertyBlock(block).value)
    return (properties or {}).get(key)


def set_property(
    document: StyleDocument,
    layer_id: str,
    block: Union[PropertyBlock, str],
    key: str,
    value: Any,
) -> Optional[StyleLayer]:
    """
    Write ``value`` to ``layer.<block>[key]``, creating the block if needed.

    Returns:
        The edited layer, or ``None`` when no layer has ``layer_id``.

    Raises:
        ValueError: if ``block`` is neither ``paint`` nor ``layout``.
    """
    block = PropertyBlock(block)
    layer = find_layer(document, layer_id)
    if layer is None:
        logger.debug(f"set_property: layer {layer_id!r} not found, ignoring edit of {key}")
        return None

    properties = getattr(layer, block.value)
    if properties is None:
        properties = {}
        setattr(layer, block.value, properties)
    properties[key] = value
    return layer


def edit_property(
    document: StyleDocument,
    layer_id: str,
    block: Union[PropertyBlock, str],
    key: str,
    edit: Callable[[Any], Any],
) -> Optional[StyleLayer]:
    """
    Replace a property with ``edit(current_value)``.

    ``edit`` is one of the pure codec operations (add a stop, update a case, ...). The
    property must already exist; a missing layer or key leaves the document unchanged.
    """
    current = get_property(document, layer_id, block, key)
    if current is None:
        logger.debug(f"edit_property: no {block}.{key} on layer {layer_id!r}")
        return None
    return set_property(document, layer_id, block, key, edit(current))


def is_layer_visible(layer: StyleLayer) -> bool:
    return (layer.layout or {}).get("visibility") != HIDDEN


def toggle_visibility(layer: StyleLayer) -> bool:
    """Flip ``layout.visibility`` between visible and none. Returns the new visibility."""
    if layer.layout is None:
        layer.layout = {}
    visible = is_layer_visible(layer)
    layer.layout["visibility"] = HIDDEN if visible else VISIBLE
    return not visible


def layer_matches_category(layer_id: str, category: str) -> bool:
    rule = QUICK_COLOR_RULES[category]
    lowered = layer_id.lower()
    return lowered in rule["ids"] or any(part in lowered for part in rule["contains"])


def apply_color_to_matching_layers(
    document: StyleDocument, category: str, hex_color: str
) -> List[str]:
    """
    Recolor every layer whose id matches ``category`` (water, roads, ...).

    Only paint keys that already exist are overwritten; no key or block is created.

    Returns:
        Ids of the layers that were changed.

    Raises:
        ValueError: for an unknown category or a malformed hex color.
    """
    if category not in QUICK_COLOR_RULES:
        raise ValueError(f"Unknown color category: {category}")
    color_text = hex_to_color_text(hex_color)
    paint_keys = QUICK_COLOR_RULES[category]["paint_keys"]

    changed: List[str] = []
    for layer in document.layers:
        if not layer.paint or not layer_matches_category(layer.id, category):
            continue
        touched = False
        for key in paint_keys:
            if key in layer.paint:
                layer.paint[key] = color_text
                touched = True
        if touched:
            changed.append(layer.id)

    logger.info(f"Applied {category} color {hex_color} to {len(changed)} layers")
    return changed
