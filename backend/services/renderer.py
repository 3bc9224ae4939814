"""Interface to the map renderer that displays the edited style."""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from models.session import LatLng, MapView
from models.style import StyleDocument

logger = logging.getLogger(__name__)

MIN_ZOOM = 0
MAX_ZOOM = 24


class MapRenderer(ABC):
    """
    A renderer is handed the whole document on every change and redraws from scratch.

    It only reads the document; the editor session remains its sole owner.
    """

    @abstractmethod
    def set_style(self, document: StyleDocument) -> None: ...

    @abstractmethod
    def fly_to(self, center: List[float], zoom: float) -> None:
        """Move the camera. ``center`` is ``[lng, lat]``."""

    @abstractmethod
    def zoom_in(self) -> None: ...

    @abstractmethod
    def zoom_out(self) -> None: ...

    @abstractmethod
    def get_view(self) -> MapView: ...

    @abstractmethod
    def set_view(self, view: MapView) -> None:
        """Sync the camera with a view reported by the host after a pan or zoom."""


class InMemoryRenderer(MapRenderer):
    """Headless renderer that keeps the last style and the camera state.

    Used by the HTTP API, where the browser does the actual drawing from ``GET /style``.
    """

    def __init__(self, view: MapView):
        self.view = view
        self.style: Optional[StyleDocument] = None
        self.reload_count = 0

    def set_style(self, document: StyleDocument) -> None:
        self.style = document
        self.reload_count += 1
        logger.debug(f"Style reloaded ({self.reload_count}): {len(document.layers)} layers")

    def fly_to(self, center: List[float], zoom: float) -> None:
        lng, lat = center
        self.view = MapView(center=LatLng(lat=lat, lng=lng), zoom=zoom)

    def zoom_in(self) -> None:
        self.view = self.view.model_copy(update={"zoom": min(MAX_ZOOM, self.view.zoom + 1)})

    def zoom_out(self) -> None:
        self.view = self.view.model_copy(update={"zoom": max(MIN_ZOOM, self.view.zoom - 1)})

    def get_view(self) -> MapView:
        return self.view

    def set_view(self, view: MapView) -> None:
        self.view = view
