"""Style document models and the editable forms of property values."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PropertyBlock(str, Enum):
    PAINT = "paint"
    LAYOUT = "layout"


class PropertyKind(str, Enum):
    COLOR = "color"
    OPACITY = "opacity"
    WIDTH = "width"
    DASHARRAY = "dasharray"
    STOPS = "stops"
    INTERPOLATE = "interpolate"
    MATCH = "match"
    NUMBER = "number"
    LITERAL = "literal"


class StyleLayer(BaseModel):
    """One draw pass of the style. Unknown fields (filter, minzoom, ...) pass through."""

    id: str
    type: str
    source: Optional[str] = None
    source_layer: Optional[str] = Field(None, alias="source-layer")
    paint: Optional[Dict[str, Any]] = None
    layout: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class StyleDocument(BaseModel):
    """A whole style document. Layer order is draw order."""

    name: Optional[str] = None
    layers: List[StyleLayer] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_style_json(self) -> Dict[str, Any]:
        """Serialize back to the renderer's JSON shape, keeping only fields that were set."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class ColorPreset(BaseModel):
    """Quick-apply color bound to a layer-id heuristic. Never written into the document."""

    id: str
    label: str
    color: str


class LayerFilterOption(BaseModel):
    label: str
    value: str


@dataclass
class ClassifiedProperty:
    key: str
    kind: PropertyKind
    label: str
    description: str
    value: Any


@dataclass
class StopsTable:
    """Legacy zoom function: ``{"stops": [[zoom, value], ...], "base": ...}``."""

    stops: List[List[Any]] = field(default_factory=list)
    base: Optional[float] = None
    # Other keys of the stops object (type, property, default, ...)
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Stop:
    zoom: Any
    value: Any


@dataclass
class InterpolateExpression:
    interpolation_type: str = "linear"
    base: float = 1
    stops: List[Stop] = field(default_factory=list)
    # Tracks whether the source array spelled out the base, so re-encoding is exact
    explicit_base: bool = False
    input: List[Any] = field(default_factory=lambda: ["zoom"])


@dataclass
class MatchCase:
    values: List[Any]
    result: Any
    # True when the source slot held a bare scalar instead of a list
    scalar: bool = False


@dataclass
class MatchExpression:
    property: str
    cases: List[MatchCase] = field(default_factory=list)
    default: Any = None
