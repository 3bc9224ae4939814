"""
Editing support for legacy zoom functions: ``{"stops": [[zoom, value], ...], "base": 1.2}``.

Mirrors the interpolate editor in ``expressions`` but works on the object form.
Every edit returns a new dict and leaves the input untouched.
"""

import copy
from typing import Any, Dict, Optional

from models.style import StopsTable
from services.styling.classifier import is_stops_table
from services.styling.expressions import (
    VALUE_SLOT,
    ZOOM_SLOT,
    ExpressionEditError,
    LastStopError,
    check_index,
    next_zoom,
)


def decode_stops(value: Any) -> Optional[StopsTable]:
    if not is_stops_table(value):
        return None
    extra = {k: v for k, v in value.items() if k not in ("stops", "base")}
    return StopsTable(
        stops=[list(stop) for stop in value["stops"]], base=value.get("base"), extra=extra
    )


def encode_stops(table: StopsTable) -> Dict[str, Any]:
    encoded: Dict[str, Any] = dict(table.extra)
    encoded["stops"] = [list(stop) for stop in table.stops]
    if table.base is not None:
        encoded["base"] = table.base
    return encoded


def update_stop(
    value: Dict[str, Any], stop_index: int, slot: int, new_value: Any
) -> Dict[str, Any]:
    """Overwrite the zoom (``slot=0``) or the value (``slot=1``) of one stop."""
    _require_stops(value)
    if slot not in (ZOOM_SLOT, VALUE_SLOT):
        raise ExpressionEditError(f"Slot must be 0 (zoom) or 1 (value), got {slot}")
    check_index(stop_index, len(value["stops"]), "stop")

    updated = copy.deepcopy(value)
    updated["stops"][stop_index][slot] = new_value
    return updated


def add_stop(value: Dict[str, Any]) -> Dict[str, Any]:
    """Append ``[last_zoom + 1, last_value]``."""
    _require_stops(value)
    if not value["stops"]:
        raise ExpressionEditError("Cannot add a stop to an empty stops table")

    updated = copy.deepcopy(value)
    last_zoom, last_value = updated["stops"][-1][ZOOM_SLOT], updated["stops"][-1][VALUE_SLOT]
    updated["stops"].append([next_zoom(last_zoom), copy.deepcopy(last_value)])
    return updated


def remove_stop(value: Dict[str, Any], stop_index: int) -> Dict[str, Any]:
    _require_stops(value)
    check_index(stop_index, len(value["stops"]), "stop")
    if len(value["stops"]) <= 1:
        raise LastStopError("A stops table needs at least one stop")

    updated = copy.deepcopy(value)
    del updated["stops"][stop_index]
    return updated


def _require_stops(value: Any) -> None:
    if not is_stops_table(value):
        raise ExpressionEditError(f"Expected a stops table, got {value!r}")
