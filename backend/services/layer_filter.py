from typing import Iterable, List

from models.style import StyleLayer

ALL_TYPES = "all"


def filter_layers(
    layers: Iterable[StyleLayer], layer_type: str = ALL_TYPES, query: str = ""
) -> List[StyleLayer]:
    """
    Layers of ``layer_type`` whose id or source-layer contains ``query`` (case-insensitive).

    Returns a new list in document order; the input is never modified.
    """
    selected = list(layers)

    if layer_type and layer_type != ALL_TYPES:
        selected = [layer for layer in selected if layer.type == layer_type]

    needle = (query or "").strip().lower()
    if needle:
        selected = [
            layer
            for layer in selected
            if needle in layer.id.lower()
            or (layer.source_layer and needle in layer.source_layer.lower())
        ]

    return selected
