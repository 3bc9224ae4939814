"""Tests for the editing session: commit/re-render cycle, notifications, search and export."""

import json
from unittest.mock import Mock

import pytest

from models.geocoding import PlaceResult
from models.session import LatLng, NotificationLevel
from services.editor_session import NOT_YET_MODIFIED, EditorSession, NoStyleLoadedError
from services.geocoding import GeocodingError
from services.styling.expressions import ExpressionEditError, LastStopError


def last_message(session):
    return session.notifications[-1].message


class TestLoading:
    def test_load_hands_document_to_renderer(self, session, renderer, fake_fetcher):
        assert fake_fetcher.calls == ["https://styles.test/base.json"]
        assert renderer.style is session.document
        assert renderer.reload_count == 1
        assert session.last_modified_label == NOT_YET_MODIFIED

    def test_initialize_notifies(self, renderer, fake_fetcher):
        editor = EditorSession(renderer=renderer, style_fetcher=fake_fetcher)
        assert editor.initialize()
        assert last_message(editor) == "Map loaded successfully!"

    def test_failed_load_keeps_session_usable(self, renderer, fake_fetcher):
        fake_fetcher.fail = True
        editor = EditorSession(renderer=renderer, style_fetcher=fake_fetcher)

        assert editor.initialize() is False
        assert editor.document is None
        assert editor.notifications[-1].level == NotificationLevel.ERROR
        assert editor.visible_layers() == []
        assert editor.set_property("parks", "paint", "fill-color", "#fff") is None
        assert editor.update_quick_color("water", "#3355ff") == []
        assert renderer.reload_count == 0

    def test_reset_discards_edits(self, session):
        session.select_layer("parks")
        session.set_property("parks", "paint", "fill-color", "#123456")
        assert session.last_modified is not None

        assert session.reset_style()
        assert session.find_layer("parks").paint["fill-color"] == "#00ff00"
        assert session.selected_layer_id is None
        assert session.last_modified_label == NOT_YET_MODIFIED
        assert last_message(session) == "Style reset to default"

    def test_failed_reset_keeps_edits(self, session, fake_fetcher):
        session.set_property("parks", "paint", "fill-color", "#123456")
        fake_fetcher.fail = True

        assert session.reset_style() is False
        assert session.find_layer("parks").paint["fill-color"] == "#123456"
        assert last_message(session) == "Failed to load map style"


class TestEdits:
    def test_set_property_rerenders_whole_document(self, session, renderer):
        layer = session.set_property("parks", "paint", "fill-opacity", 0.5)

        assert layer.paint["fill-opacity"] == 0.5
        assert renderer.reload_count == 2
        assert renderer.style is session.document
        assert session.dirty is False
        assert session.last_modified is not None
        assert last_message(session) == "Property updated"

    def test_unknown_layer_does_not_render(self, session, renderer):
        assert session.set_property("ghost", "paint", "fill-color", "#fff") is None
        assert renderer.reload_count == 1
        assert session.last_modified is None

    def test_set_color_stores_rgba_text(self, session):
        layer = session.set_color("parks", "paint", "fill-color", "#3355ff")
        assert layer.paint["fill-color"] == "rgba(51, 85, 255, 1)"

    def test_toggle_visibility(self, session):
        assert session.toggle_layer_visibility("parks") is False
        assert last_message(session) == "Parks hidden"
        assert session.toggle_layer_visibility("parks") is True
        assert last_message(session) == "Parks shown"
        assert session.find_layer("parks").layout == {"visibility": "visible"}
        assert session.toggle_layer_visibility("ghost") is None

    def test_quick_color_updates_layers_and_preset(self, session):
        changed = session.update_quick_color("water", "#3355ff")

        assert changed == ["water-fill"]
        assert session.find_layer("water-fill").paint["fill-color"] == "rgba(51, 85, 255, 1)"
        assert session.find_layer("parks").paint["fill-color"] == "#00ff00"
        water_preset = next(p for p in session.color_presets if p.id == "water")
        assert water_preset.color == "#3355ff"
        assert last_message(session) == "All water colors updated"

    def test_interpolate_edits(self, session):
        session.add_interpolate_stop("road-primary", "line-width")
        width = session.find_layer("road-primary").paint["line-width"]
        assert width[-2:] == [19, 12]
        assert last_message(session) == "Stop added"

        session.update_interpolate_stop("road-primary", "line-width", 2, 1, 20)
        session.remove_interpolate_stop("road-primary", "line-width", 0)
        width = session.find_layer("road-primary").paint["line-width"]
        assert width == ["interpolate", ["exponential", 1.5], ["zoom"], 18, 12, 19, 20]

    def test_edit_replaces_value_object(self, session, renderer):
        before = session.find_layer("road-primary").paint["line-width"]
        session.update_interpolate_stop("road-primary", "line-width", 0, 1, 1)
        after = renderer.style.layers[3].paint["line-width"]
        assert after is not before
        assert before[4] == 0.5
        assert after[4] == 1

    def test_match_edits(self, session):
        session.update_match_result("building", "fill-color", 0, "#aaaaaa")
        session.update_match_default("building", "fill-color", "#bbbbbb")
        fill = session.find_layer("building").paint["fill-color"]
        assert fill[3] == "#aaaaaa"
        assert fill[2] == ["school", "college"]
        assert fill[-1] == "#bbbbbb"

    def test_stops_edits(self, session):
        session.add_stop("building", "fill-opacity")
        session.update_stop_value("building", "fill-opacity", 0, 1, 0.2)
        session.remove_stop("building", "fill-opacity", 1)
        opacity = session.find_layer("building").paint["fill-opacity"]
        assert opacity == {"base": 1, "stops": [[15, 0.2], [17, 1]]}

    def test_dasharray_edits(self, session):
        session.add_dasharray_value("road-primary", "line-dasharray")
        session.update_dasharray_value("road-primary", "line-dasharray", 0, 4)
        session.remove_dasharray_value("road-primary", "line-dasharray", 1)
        assert session.find_layer("road-primary").paint["line-dasharray"] == [4, 1]
        assert last_message(session) == "Dasharray value removed"

    def test_failed_edit_leaves_document_and_renderer_alone(self, session, renderer):
        before = session.document.to_style_json()
        session.remove_stop("building", "fill-opacity", 0)
        with pytest.raises(LastStopError):
            session.remove_stop("building", "fill-opacity", 0)
        with pytest.raises(ExpressionEditError):
            session.add_interpolate_stop("building", "fill-color")

        opacity = session.find_layer("building").paint["fill-opacity"]
        assert opacity == {"base": 1, "stops": [[16, 1]]}
        assert renderer.reload_count == 2
        before_layers = {layer["id"]: layer for layer in before["layers"]}
        assert session.find_layer("building").paint["fill-color"] == (
            before_layers["building"]["paint"]["fill-color"]
        )

    def test_edit_of_missing_property_is_noop(self, session, renderer):
        assert session.add_stop("parks", "fill-opacity") is None
        assert renderer.reload_count == 1

    def test_layout_block_edit(self, session):
        size = ["interpolate", ["linear"], ["zoom"], 10, 12, 16, 18]
        session.set_property("place-label", "layout", "text-size", size)

        assert session.add_interpolate_stop("place-label", "text-size") is None
        layer = session.add_interpolate_stop("place-label", "text-size", block="layout")

        assert layer.layout["text-size"][-2:] == [17, 18]
        assert "text-size" not in layer.paint

    def test_dirty_until_renderer_reload_succeeds(self, session, renderer):
        seen = []
        reload = renderer.set_style

        def recording_set_style(document):
            seen.append(session.dirty)
            reload(document)

        renderer.set_style = recording_set_style
        session.set_property("parks", "paint", "fill-opacity", 0.5)
        assert seen == [True]
        assert session.dirty is False

        renderer.set_style = Mock(side_effect=RuntimeError("context lost"))
        with pytest.raises(RuntimeError):
            session.set_property("parks", "paint", "fill-opacity", 0.6)
        assert session.dirty is True


class TestLayers:
    def test_visible_layers(self, session):
        fills = session.visible_layers("fill")
        assert [layer.id for layer in fills] == ["water-fill", "parks", "building"]
        assert [layer.id for layer in session.visible_layers("all", "label")] == ["place-label"]

    def test_select_layer(self, session):
        assert session.select_layer("road-primary").type == "line"
        assert session.selected_layer.id == "road-primary"
        assert session.select_layer("ghost") is None

    def test_describe_layer(self, session):
        blocks = session.describe_layer("building")
        assert [p.kind.value for p in blocks["paint"]] == ["match", "stops"]
        assert blocks["layout"] == []
        assert session.describe_layer("ghost") is None


class TestSearch:
    def test_blank_query(self, session):
        assert session.search_location("   ") == []
        assert last_message(session) == "Please enter a location"

    def test_results_and_fly_to(self, session, renderer):
        paris = PlaceResult(name="Paris, France", text="Paris", center=[2.35, 48.85])
        session.geocoder.fetch = Mock(return_value=[paris])

        assert session.search_location("Paris") == [paris]
        assert session.geocoder.results == [paris]

        view = session.fly_to_result(paris)
        assert view.center == LatLng(lat=48.85, lng=2.35)
        assert view.zoom == 12
        assert session.geocoder.results == []
        assert last_message(session) == "Navigated to Paris"

    def test_no_results(self, session):
        session.geocoder.fetch = Mock(return_value=[])
        assert session.search_location("nowhere") == []
        assert last_message(session) == "No results found"

    def test_network_failure(self, session):
        session.geocoder.fetch = Mock(side_effect=GeocodingError("timeout"))
        assert session.search_location("Paris") == []
        assert last_message(session) == "Search failed"
        assert session.notifications[-1].level == NotificationLevel.ERROR


class TestView:
    def test_zoom_and_reset(self, session):
        start = session.map_view.zoom
        assert session.zoom_in().zoom == start + 1
        assert session.zoom_out().zoom == start
        session.fly_to_result(PlaceResult(name="x", text="x", center=[0, 0]))
        view = session.reset_view()
        assert view.center == LatLng(lat=25.773357, lng=-80.1919)

    def test_on_view_changed(self, session):
        session.on_view_changed(LatLng(lat=1, lng=2), 7.5)
        assert session.map_view.zoom == 7.5
        assert session.map_view.center.lng == 2

    def test_zoom_starts_from_reported_view(self, session, renderer):
        session.on_view_changed(LatLng(lat=48.85, lng=2.35), 5)

        view = session.zoom_in()

        assert view.zoom == 6
        assert view.center == LatLng(lat=48.85, lng=2.35)
        assert renderer.get_view() == view


class TestExport:
    def test_export_names_document(self, session):
        file_name, text = session.export_style("my-style")
        assert file_name == "my-style.json"
        assert session.document.name == "my-style"
        exported = json.loads(text)
        assert exported["name"] == "my-style"
        assert exported["version"] == 8
        assert [layer["id"] for layer in exported["layers"]][:2] == ["background", "water-fill"]
        assert last_message(session) == "Style exported as my-style.json"

    def test_export_uses_session_style_name(self, session):
        file_name, _ = session.export_style()
        assert file_name == "custom-style.json"

    def test_export_without_document(self, renderer, fake_fetcher):
        editor = EditorSession(renderer=renderer, style_fetcher=fake_fetcher)
        with pytest.raises(NoStyleLoadedError):
            editor.export_style("x")
