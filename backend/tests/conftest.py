import copy
import sys
from pathlib import Path

# Add the backend root directory to Python path first
backend_root = Path(__file__).parent.parent
sys.path.insert(0, str(backend_root))

"""
Pytest configuration and fixtures for style editor tests.
"""

import pytest

from models.style import StyleDocument
from services.editor_session import EditorSession, default_map_view
from services.geocoding import GeocodingClient
from services.renderer import InMemoryRenderer
from services.style_source import StyleFetchError

SAMPLE_STYLE = {
    "version": 8,
    "name": "beachglass",
    "sources": {"composite": {"type": "vector", "url": "mapbox://mapbox.mapbox-streets-v8"}},
    "sprite": "mapbox://sprites/test/beachglass",
    "glyphs": "mapbox://fonts/test/{fontstack}/{range}.pbf",
    "layers": [
        {
            "id": "background",
            "type": "background",
            "paint": {"background-color": "rgba(255, 255, 255, 1)"},
        },
        {
            "id": "water-fill",
            "type": "fill",
            "source": "composite",
            "source-layer": "water",
            "paint": {"fill-color": "rgba(0,0,0,1)", "fill-opacity": 0.8},
        },
        {
            "id": "parks",
            "type": "fill",
            "source": "composite",
            "source-layer": "landuse",
            "paint": {"fill-color": "#00ff00"},
        },
        {
            "id": "road-primary",
            "type": "line",
            "source": "composite",
            "source-layer": "road",
            "layout": {"line-cap": "round"},
            "paint": {
                "line-color": "#000000",
                "line-width": ["interpolate", ["exponential", 1.5], ["zoom"], 5, 0.5, 18, 12],
                "line-dasharray": [2, 1],
            },
        },
        {
            "id": "building",
            "type": "fill",
            "source": "composite",
            "source-layer": "building",
            "minzoom": 15,
            "paint": {
                "fill-color": [
                    "match",
                    ["get", "type"],
                    ["school", "college"],
                    "#f0e0d0",
                    "hospital",
                    "#ffdddd",
                    "#dcdcdc",
                ],
                "fill-opacity": {"base": 1, "stops": [[15, 0], [16, 1]]},
            },
        },
        {
            "id": "place-label",
            "type": "symbol",
            "source": "composite",
            "source-layer": "place_label",
            "layout": {"text-field": ["get", "name"], "text-size": 12},
            "paint": {"text-color": "#333333", "text-halo-width": 1},
        },
    ],
}


@pytest.fixture
def style_dict():
    """A fresh copy of the sample style JSON."""
    return copy.deepcopy(SAMPLE_STYLE)


@pytest.fixture
def style_document(style_dict):
    return StyleDocument.model_validate(style_dict)


@pytest.fixture
def renderer():
    return InMemoryRenderer(default_map_view())


@pytest.fixture
def fake_fetcher():
    """Style fetcher returning the sample style; set ``fail = True`` to simulate errors."""

    class FakeFetcher:
        def __init__(self):
            self.calls = []
            self.fail = False

        def __call__(self, url):
            self.calls.append(url)
            if self.fail:
                raise StyleFetchError("connection refused")
            return StyleDocument.model_validate(copy.deepcopy(SAMPLE_STYLE))

    return FakeFetcher()


@pytest.fixture
def session(renderer, fake_fetcher):
    """An editor session with the sample style loaded."""
    editor = EditorSession(
        renderer=renderer,
        base_style_url="https://styles.test/base.json",
        geocoder=GeocodingClient(base_url="https://geocoder.test/places", access_token="tok"),
        style_fetcher=fake_fetcher,
    )
    assert editor.load_base_style()
    return editor
