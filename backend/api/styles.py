"""HTTP endpoints for the style editor session."""

import logging
from dataclasses import asdict
from typing import Any, Callable, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel

from api.deps import get_editor_session
from models.geocoding import PlaceResult
from models.session import LatLng, MapView, Notification
from models.style import (
    ClassifiedProperty,
    ColorPreset,
    LayerFilterOption,
    PropertyBlock,
    PropertyKind,
    StyleLayer,
)
from services.document_mutator import is_layer_visible
from services.editor_session import EditorSession, NoStyleLoadedError
from services.styling.classifier import format_layer_name, opacity_percent
from services.styling.colors import color_text_to_hex
from services.styling.expressions import decode_interpolate, decode_match
from services.styling.stops import decode_stops
from utility.string_methods import header_safe_filename

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/style", tags=["style"])


# =============================================================================
# Request / response models
# =============================================================================


class StyleStatus(BaseModel):
    loaded: bool
    name: Optional[str] = None
    style_name: str
    last_modified: str
    selected_layer_id: Optional[str] = None
    style: Optional[Dict[str, Any]] = None


class ActionResult(BaseModel):
    success: bool
    message: str


class LayerSummary(BaseModel):
    id: str
    type: str
    display_name: str
    source_layer: Optional[str] = None
    visible: bool


class PropertyView(BaseModel):
    key: str
    kind: PropertyKind
    label: str
    description: str
    value: Any
    # Editor helpers, filled depending on kind
    hex: Optional[str] = None
    percent: Optional[int] = None
    decoded: Optional[Dict[str, Any]] = None


class LayerDetail(LayerSummary):
    paint: List[PropertyView] = []
    layout: List[PropertyView] = []


class PropertyUpdate(BaseModel):
    block: PropertyBlock = PropertyBlock.PAINT
    key: str
    value: Any


class ColorUpdate(BaseModel):
    block: PropertyBlock = PropertyBlock.PAINT
    key: str
    color: str


class PropertyEdit(BaseModel):
    """A structural edit of a dasharray, stops table, interpolate or match value."""

    op: Literal[
        "update_dash",
        "add_dash",
        "remove_dash",
        "update_stop",
        "add_stop",
        "remove_stop",
        "update_interpolate_stop",
        "add_interpolate_stop",
        "remove_interpolate_stop",
        "update_match_result",
        "update_match_default",
    ]
    block: PropertyBlock = PropertyBlock.PAINT
    key: str
    index: Optional[int] = None
    slot: Optional[int] = None
    value: Any = None


class QuickColorRequest(BaseModel):
    category: str
    color: str


class QuickColorResponse(BaseModel):
    category: str
    changed_layers: List[str]


class VisibilityResponse(BaseModel):
    id: str
    visible: bool


class SearchResponse(BaseModel):
    results: List[PlaceResult]
    stale: bool = False


# =============================================================================
# Helpers
# =============================================================================


EditHandler = Callable[[EditorSession, str, PropertyEdit], Optional[StyleLayer]]

EDIT_OPERATIONS: Dict[str, EditHandler] = {
    "update_dash": lambda s, lid, e: s.update_dasharray_value(
        lid, e.key, e.index, e.value, block=e.block
    ),
    "add_dash": lambda s, lid, e: s.add_dasharray_value(lid, e.key, block=e.block),
    "remove_dash": lambda s, lid, e: s.remove_dasharray_value(lid, e.key, e.index, block=e.block),
    "update_stop": lambda s, lid, e: s.update_stop_value(
        lid, e.key, e.index, e.slot, e.value, block=e.block
    ),
    "add_stop": lambda s, lid, e: s.add_stop(lid, e.key, block=e.block),
    "remove_stop": lambda s, lid, e: s.remove_stop(lid, e.key, e.index, block=e.block),
    "update_interpolate_stop": lambda s, lid, e: s.update_interpolate_stop(
        lid, e.key, e.index, e.slot, e.value, block=e.block
    ),
    "add_interpolate_stop": lambda s, lid, e: s.add_interpolate_stop(lid, e.key, block=e.block),
    "remove_interpolate_stop": lambda s, lid, e: s.remove_interpolate_stop(
        lid, e.key, e.index, block=e.block
    ),
    "update_match_result": lambda s, lid, e: s.update_match_result(
        lid, e.key, e.index, e.value, block=e.block
    ),
    "update_match_default": lambda s, lid, e: s.update_match_default(
        lid, e.key, e.value, block=e.block
    ),
}


def _property_view(prop: ClassifiedProperty) -> PropertyView:
    view = PropertyView(
        key=prop.key,
        kind=prop.kind,
        label=prop.label,
        description=prop.description,
        value=prop.value,
    )
    if prop.kind == PropertyKind.COLOR:
        view.hex = color_text_to_hex(prop.value)
    elif prop.kind == PropertyKind.OPACITY:
        view.percent = opacity_percent(prop.value)
    elif prop.kind == PropertyKind.STOPS:
        view.decoded = asdict(decode_stops(prop.value))
    elif prop.kind == PropertyKind.INTERPOLATE:
        view.decoded = asdict(decode_interpolate(prop.value))
    elif prop.kind == PropertyKind.MATCH:
        view.decoded = asdict(decode_match(prop.value))
    return view


def _layer_summary(layer: StyleLayer) -> LayerSummary:
    return LayerSummary(
        id=layer.id,
        type=layer.type,
        display_name=format_layer_name(layer.id),
        source_layer=layer.source_layer,
        visible=is_layer_visible(layer),
    )


def _layer_detail(session: EditorSession, layer: StyleLayer) -> LayerDetail:
    blocks = session.describe_layer(layer.id)
    return LayerDetail(
        **_layer_summary(layer).model_dump(),
        paint=[_property_view(p) for p in blocks[PropertyBlock.PAINT.value]],
        layout=[_property_view(p) for p in blocks[PropertyBlock.LAYOUT.value]],
    )


def _require_layer(session: EditorSession, layer_id: str) -> StyleLayer:
    if session.document is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No style loaded")
    layer = session.find_layer(layer_id)
    if layer is None:
        raise HTTPException(status_code=404, detail=f"Layer {layer_id} not found")
    return layer


# =============================================================================
# Document
# =============================================================================


@router.get("", response_model=StyleStatus)
def get_style(session: EditorSession = Depends(get_editor_session)) -> StyleStatus:
    """Current document, as handed to the renderer."""
    document = session.document
    return StyleStatus(
        loaded=document is not None,
        name=document.name if document else None,
        style_name=session.style_name,
        last_modified=session.last_modified_label,
        selected_layer_id=session.selected_layer_id,
        style=document.to_style_json() if document else None,
    )


@router.post("/reset", response_model=ActionResult)
def reset_style(session: EditorSession = Depends(get_editor_session)) -> ActionResult:
    """Reload the base style, discarding all edits."""
    if session.reset_style():
        return ActionResult(success=True, message="Style reset to default")
    return ActionResult(success=False, message="Failed to load map style")


@router.get("/export")
def export_style(
    name: Optional[str] = Query(None, description="Style name; defaults to the session's"),
    session: EditorSession = Depends(get_editor_session),
) -> Response:
    try:
        file_name, text = session.export_style(name)
    except NoStyleLoadedError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return Response(
        content=text,
        media_type="application/json",
        headers={
            "Content-Disposition": f'attachment; filename="{header_safe_filename(file_name)}"'
        },
    )


# =============================================================================
# Layers
# =============================================================================


@router.get("/filters", response_model=List[LayerFilterOption])
def list_filters(session: EditorSession = Depends(get_editor_session)):
    return session.layer_filters


@router.get("/layers", response_model=List[LayerSummary])
def list_layers(
    layer_type: str = Query("all", alias="type", description="Layer type filter, or 'all'"),
    q: str = Query("", description="Substring of the layer id or source-layer"),
    session: EditorSession = Depends(get_editor_session),
) -> List[LayerSummary]:
    return [_layer_summary(layer) for layer in session.visible_layers(layer_type, q)]


@router.get("/layers/{layer_id}", response_model=LayerDetail)
def get_layer(layer_id: str, session: EditorSession = Depends(get_editor_session)) -> LayerDetail:
    layer = _require_layer(session, layer_id)
    return _layer_detail(session, layer)


@router.post("/layers/{layer_id}/select", response_model=LayerDetail)
def select_layer(
    layer_id: str, session: EditorSession = Depends(get_editor_session)
) -> LayerDetail:
    layer = _require_layer(session, layer_id)
    session.select_layer(layer.id)
    return _layer_detail(session, layer)


@router.put("/layers/{layer_id}/properties", response_model=LayerDetail)
def update_property(
    layer_id: str,
    payload: PropertyUpdate,
    session: EditorSession = Depends(get_editor_session),
) -> LayerDetail:
    _require_layer(session, layer_id)
    layer = session.set_property(layer_id, payload.block, payload.key, payload.value)
    return _layer_detail(session, layer)


@router.put("/layers/{layer_id}/colors", response_model=LayerDetail)
def update_color(
    layer_id: str,
    payload: ColorUpdate,
    session: EditorSession = Depends(get_editor_session),
) -> LayerDetail:
    _require_layer(session, layer_id)
    try:
        layer = session.set_color(layer_id, payload.block, payload.key, payload.color)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _layer_detail(session, layer)


@router.post("/layers/{layer_id}/edits", response_model=LayerDetail)
def edit_property(
    layer_id: str,
    payload: PropertyEdit,
    session: EditorSession = Depends(get_editor_session),
) -> LayerDetail:
    """Add, update or remove a stop, case or dash of an existing property."""
    _require_layer(session, layer_id)
    try:
        layer = EDIT_OPERATIONS[payload.op](session, layer_id, payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if layer is None:
        raise HTTPException(status_code=404, detail=f"Property {payload.key} not found")
    return _layer_detail(session, layer)


@router.post("/layers/{layer_id}/visibility", response_model=VisibilityResponse)
def toggle_visibility(
    layer_id: str, session: EditorSession = Depends(get_editor_session)
) -> VisibilityResponse:
    _require_layer(session, layer_id)
    visible = session.toggle_layer_visibility(layer_id)
    return VisibilityResponse(id=layer_id, visible=visible)


# =============================================================================
# Quick colors
# =============================================================================


@router.get("/presets", response_model=List[ColorPreset])
def list_presets(session: EditorSession = Depends(get_editor_session)):
    return session.color_presets


@router.post("/quick-color", response_model=QuickColorResponse)
def quick_color(
    payload: QuickColorRequest, session: EditorSession = Depends(get_editor_session)
) -> QuickColorResponse:
    if session.document is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No style loaded")
    try:
        changed = session.update_quick_color(payload.category, payload.color)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return QuickColorResponse(category=payload.category, changed_layers=changed)


# =============================================================================
# Search and view
# =============================================================================


@router.get("/search", response_model=SearchResponse)
def search_location(
    q: str = Query("", description="Free-text place query"),
    session: EditorSession = Depends(get_editor_session),
) -> SearchResponse:
    results = session.search_location(q)
    if results is None:
        return SearchResponse(results=[], stale=True)
    return SearchResponse(results=results)


@router.post("/fly-to", response_model=MapView)
def fly_to(result: PlaceResult, session: EditorSession = Depends(get_editor_session)) -> MapView:
    return session.fly_to_result(result)


@router.get("/view", response_model=MapView)
def get_view(session: EditorSession = Depends(get_editor_session)) -> MapView:
    return session.map_view


@router.put("/view", response_model=MapView)
def report_view(view: MapView, session: EditorSession = Depends(get_editor_session)) -> MapView:
    """The browser map reports its center and zoom after load/move/zoom events."""
    session.on_view_changed(LatLng(lat=view.center.lat, lng=view.center.lng), view.zoom)
    return session.map_view


@router.post("/view/zoom-in", response_model=MapView)
def zoom_in(session: EditorSession = Depends(get_editor_session)) -> MapView:
    return session.zoom_in()


@router.post("/view/zoom-out", response_model=MapView)
def zoom_out(session: EditorSession = Depends(get_editor_session)) -> MapView:
    return session.zoom_out()


@router.post("/view/reset", response_model=MapView)
def reset_view(session: EditorSession = Depends(get_editor_session)) -> MapView:
    return session.reset_view()


@router.get("/notifications", response_model=List[Notification])
def list_notifications(session: EditorSession = Depends(get_editor_session)):
    return list(session.notifications)
