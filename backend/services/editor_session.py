"""
The editing session: owns the live style document and drives the renderer.

Every successful edit goes through the document mutator and is then committed: the
document is marked dirty, handed in full to the renderer (no incremental patching)
and a notification is queued for the UI.
"""

import logging
from collections import deque
from datetime import datetime
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple, Union

from core.config import (
    BASE_STYLE_URL,
    DEFAULT_CENTER_LAT,
    DEFAULT_CENTER_LNG,
    DEFAULT_STYLE_NAME,
    DEFAULT_ZOOM,
    NOTIFICATION_HISTORY,
    SEARCH_RESULT_ZOOM,
)
from models.geocoding import PlaceResult
from models.session import LatLng, MapView, Notification, NotificationLevel
from models.style import (
    ClassifiedProperty,
    ColorPreset,
    LayerFilterOption,
    PropertyBlock,
    StyleDocument,
    StyleLayer,
)
from services import document_mutator
from services.geocoding import GeocodingClient, GeocodingError
from services.layer_filter import ALL_TYPES, filter_layers
from services.renderer import MapRenderer
from services.style_export import export_style
from services.style_source import StyleFetchError, fetch_style
from services.styling import dasharray, expressions, stops
from services.styling.classifier import classify_block, format_layer_name
from services.styling.colors import hex_to_color_text
from services.styling.constants import DEFAULT_COLOR_PRESETS, LAYER_FILTERS

logger = logging.getLogger(__name__)

NOT_YET_MODIFIED = "Not yet"


class NoStyleLoadedError(Exception):
    """Raised by operations that need a style document when none is loaded."""


def default_map_view() -> MapView:
    return MapView(center=LatLng(lat=DEFAULT_CENTER_LAT, lng=DEFAULT_CENTER_LNG), zoom=DEFAULT_ZOOM)


class EditorSession:
    def __init__(
        self,
        renderer: MapRenderer,
        base_style_url: str = BASE_STYLE_URL,
        geocoder: Optional[GeocodingClient] = None,
        style_fetcher: Callable[[str], StyleDocument] = fetch_style,
        style_name: str = DEFAULT_STYLE_NAME,
    ):
        self.renderer = renderer
        self.base_style_url = base_style_url
        self.geocoder = geocoder or GeocodingClient()
        self.style_fetcher = style_fetcher
        self.style_name = style_name

        self.document: Optional[StyleDocument] = None
        self.selected_layer_id: Optional[str] = None
        self.last_modified: Optional[datetime] = None
        self.dirty = False
        self.map_view: MapView = renderer.get_view()
        self.color_presets = [ColorPreset(**preset) for preset in DEFAULT_COLOR_PRESETS]
        self.layer_filters = [LayerFilterOption(**option) for option in LAYER_FILTERS]
        self.notifications: Deque[Notification] = deque(maxlen=NOTIFICATION_HISTORY)

    # =========================================================================
    # Notifications and commit
    # =========================================================================

    def notify(self, message: str, level: NotificationLevel = NotificationLevel.SUCCESS) -> None:
        if level == NotificationLevel.ERROR:
            logger.warning(message)
        else:
            logger.info(message)
        self.notifications.append(Notification(message=message, level=level))

    def _commit(self, message: Optional[str] = None) -> None:
        """
        Push the edited document to the renderer.

        ``dirty`` stays set while the renderer reloads and remains set if the reload
        raises, so a failed reload is visible to the caller.
        """
        self.dirty = True
        self.last_modified = datetime.now()
        self.renderer.set_style(self.document)
        self.dirty = False
        if message:
            self.notify(message)

    @property
    def last_modified_label(self) -> str:
        if self.last_modified is None:
            return NOT_YET_MODIFIED
        return self.last_modified.strftime("%H:%M:%S")

    # =========================================================================
    # Loading
    # =========================================================================

    def load_base_style(self) -> bool:
        """
        Replace the document with a fresh copy of the base style.

        On failure the previous document (possibly none) is kept and an error
        notification is queued.
        """
        try:
            document = self.style_fetcher(self.base_style_url)
        except StyleFetchError as e:
            logger.error(f"Failed to load base style: {e}")
            self.notify("Failed to load map style", NotificationLevel.ERROR)
            return False

        self.document = document
        self.renderer.set_style(self.document)
        return True

    def initialize(self) -> bool:
        loaded = self.load_base_style()
        if loaded:
            self.notify("Map loaded successfully!")
        return loaded

    def reset_style(self) -> bool:
        """Discard all edits by reloading the base style."""
        if not self.load_base_style():
            return False
        self.selected_layer_id = None
        self.last_modified = None
        self.notify("Style reset to default")
        return True

    # =========================================================================
    # Layers
    # =========================================================================

    @property
    def selected_layer(self) -> Optional[StyleLayer]:
        if self.document is None or self.selected_layer_id is None:
            return None
        return document_mutator.find_layer(self.document, self.selected_layer_id)

    def select_layer(self, layer_id: Optional[str]) -> Optional[StyleLayer]:
        self.selected_layer_id = layer_id
        return self.selected_layer

    def find_layer(self, layer_id: str) -> Optional[StyleLayer]:
        if self.document is None:
            return None
        return document_mutator.find_layer(self.document, layer_id)

    def visible_layers(self, layer_type: str = ALL_TYPES, query: str = "") -> List[StyleLayer]:
        """The layer list as shown in the sidebar, filtered by type and search text."""
        if self.document is None:
            return []
        return filter_layers(self.document.layers, layer_type, query)

    def describe_layer(self, layer_id: str) -> Optional[Dict[str, List[ClassifiedProperty]]]:
        layer = self.find_layer(layer_id)
        if layer is None:
            return None
        return {
            PropertyBlock.PAINT.value: classify_block(layer.paint),
            PropertyBlock.LAYOUT.value: classify_block(layer.layout),
        }

    # =========================================================================
    # Property edits
    # =========================================================================

    def set_property(
        self, layer_id: str, block: Union[PropertyBlock, str], key: str, value: Any
    ) -> Optional[StyleLayer]:
        if self.document is None:
            return None
        layer = document_mutator.set_property(self.document, layer_id, block, key, value)
        if layer is not None:
            self._commit("Property updated")
        return layer

    def set_color(
        self, layer_id: str, block: Union[PropertyBlock, str], key: str, hex_color: str
    ) -> Optional[StyleLayer]:
        """Store a color picker value in the document's rgba text form."""
        return self.set_property(layer_id, block, key, hex_to_color_text(hex_color))

    def toggle_layer_visibility(self, layer_id: str) -> Optional[bool]:
        layer = self.find_layer(layer_id)
        if layer is None:
            return None
        visible = document_mutator.toggle_visibility(layer)
        self._commit(f"{format_layer_name(layer.id)} {'shown' if visible else 'hidden'}")
        return visible

    def update_quick_color(self, category: str, hex_color: str) -> List[str]:
        """Apply a preset color to every layer of ``category``. Returns the changed ids."""
        if self.document is None:
            return []
        changed = document_mutator.apply_color_to_matching_layers(
            self.document, category, hex_color
        )
        for preset in self.color_presets:
            if preset.id == category:
                preset.color = hex_color
        self._commit(f"All {category} colors updated")
        return changed

    def _edit(
        self,
        layer_id: str,
        key: str,
        edit: Callable[[Any], Any],
        message: Optional[str] = None,
        block: Union[PropertyBlock, str] = PropertyBlock.PAINT,
    ) -> Optional[StyleLayer]:
        if self.document is None:
            return None
        layer = document_mutator.edit_property(self.document, layer_id, block, key, edit)
        if layer is not None:
            self._commit(message)
        return layer

    # Structural edits default to the paint block; pass ``block="layout"`` for layout
    # expressions such as an interpolated ``text-size``.

    # Dasharray

    def update_dasharray_value(
        self, layer_id: str, key: str, index: int, value: Any, block=PropertyBlock.PAINT
    ):
        return self._edit(
            layer_id, key, lambda v: dasharray.update_dash(v, index, value), block=block
        )

    def add_dasharray_value(self, layer_id: str, key: str, block=PropertyBlock.PAINT):
        return self._edit(layer_id, key, dasharray.add_dash, "Dasharray value added", block)

    def remove_dasharray_value(
        self, layer_id: str, key: str, index: int, block=PropertyBlock.PAINT
    ):
        return self._edit(
            layer_id,
            key,
            lambda v: dasharray.remove_dash(v, index),
            "Dasharray value removed",
            block,
        )

    # Stops tables

    def update_stop_value(
        self,
        layer_id: str,
        key: str,
        stop_index: int,
        slot: int,
        value: Any,
        block=PropertyBlock.PAINT,
    ):
        return self._edit(
            layer_id, key, lambda v: stops.update_stop(v, stop_index, slot, value), block=block
        )

    def add_stop(self, layer_id: str, key: str, block=PropertyBlock.PAINT):
        return self._edit(layer_id, key, stops.add_stop, "Stop added", block)

    def remove_stop(self, layer_id: str, key: str, stop_index: int, block=PropertyBlock.PAINT):
        return self._edit(
            layer_id, key, lambda v: stops.remove_stop(v, stop_index), "Stop removed", block
        )

    # Interpolate expressions

    def update_interpolate_stop(
        self,
        layer_id: str,
        key: str,
        stop_index: int,
        slot: int,
        value: Any,
        block=PropertyBlock.PAINT,
    ):
        return self._edit(
            layer_id,
            key,
            lambda v: expressions.update_interpolate_stop(v, stop_index, slot, value),
            block=block,
        )

    def add_interpolate_stop(self, layer_id: str, key: str, block=PropertyBlock.PAINT):
        return self._edit(layer_id, key, expressions.add_interpolate_stop, "Stop added", block)

    def remove_interpolate_stop(
        self, layer_id: str, key: str, stop_index: int, block=PropertyBlock.PAINT
    ):
        return self._edit(
            layer_id,
            key,
            lambda v: expressions.remove_interpolate_stop(v, stop_index),
            "Stop removed",
            block,
        )

    # Match expressions

    def update_match_result(
        self, layer_id: str, key: str, case_index: int, value: Any, block=PropertyBlock.PAINT
    ):
        return self._edit(
            layer_id,
            key,
            lambda v: expressions.update_match_result(v, case_index, value),
            block=block,
        )

    def update_match_default(self, layer_id: str, key: str, value: Any, block=PropertyBlock.PAINT):
        return self._edit(
            layer_id, key, lambda v: expressions.update_match_default(v, value), block=block
        )

    # =========================================================================
    # Search and camera
    # =========================================================================

    def search_location(self, query: str) -> Optional[List[PlaceResult]]:
        """
        Geocode ``query``. Failures become notifications; ``None`` means the response
        was superseded by a newer search.
        """
        if not query or not query.strip():
            self.notify("Please enter a location", NotificationLevel.ERROR)
            return []
        try:
            results = self.geocoder.search(query)
        except GeocodingError as e:
            logger.error(f"Search error: {e}")
            self.notify("Search failed", NotificationLevel.ERROR)
            return []
        if results is not None and not results:
            self.notify("No results found", NotificationLevel.ERROR)
        return results

    def fly_to_result(self, result: PlaceResult) -> MapView:
        self.renderer.fly_to(result.center, SEARCH_RESULT_ZOOM)
        self.geocoder.clear()
        self.map_view = self.renderer.get_view()
        self.notify(f"Navigated to {result.text}")
        return self.map_view

    def zoom_in(self) -> MapView:
        self.renderer.zoom_in()
        self.map_view = self.renderer.get_view()
        return self.map_view

    def zoom_out(self) -> MapView:
        self.renderer.zoom_out()
        self.map_view = self.renderer.get_view()
        return self.map_view

    def reset_view(self) -> MapView:
        home = default_map_view()
        self.renderer.fly_to([home.center.lng, home.center.lat], home.zoom)
        self.map_view = self.renderer.get_view()
        return self.map_view

    def on_view_changed(self, center: LatLng, zoom: float) -> None:
        """Called by the host on load/move/zoom. Later camera moves start from this view."""
        self.map_view = MapView(center=center, zoom=zoom)
        self.renderer.set_view(self.map_view)

    # =========================================================================
    # Export
    # =========================================================================

    def export_style(self, style_name: Optional[str] = None) -> Tuple[str, str]:
        if self.document is None:
            raise NoStyleLoadedError("No style loaded")
        if style_name is not None:
            self.style_name = style_name
        file_name, text = export_style(self.document, self.style_name)
        self.notify(f"Style exported as {file_name}")
        return file_name, text
