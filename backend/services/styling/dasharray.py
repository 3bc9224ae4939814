"""Element-wise edits of ``*-dasharray`` values (plain number lists)."""

from numbers import Number
from typing import Any, List

from services.styling.expressions import ExpressionEditError, check_index

# Value appended by add_dash; a 1px dash/gap keeps the pattern visible
NEW_DASH_LENGTH = 1


def update_dash(values: List[Any], index: int, new_value: Any) -> List[Any]:
    _require_dash_array(values)
    check_index(index, len(values), "dash")
    if not _is_length(new_value):
        raise ExpressionEditError(f"Dash length must be a number, got {new_value!r}")
    updated = list(values)
    updated[index] = new_value
    return updated


def add_dash(values: List[Any]) -> List[Any]:
    _require_dash_array(values)
    return [*values, NEW_DASH_LENGTH]


def remove_dash(values: List[Any], index: int) -> List[Any]:
    _require_dash_array(values)
    check_index(index, len(values), "dash")
    return [value for i, value in enumerate(values) if i != index]


def _is_length(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _require_dash_array(values: Any) -> None:
    # Expression arrays (["interpolate", ...], ["step", ...]) are not dash arrays
    if not isinstance(values, list) or not all(_is_length(value) for value in values):
        raise ExpressionEditError(f"Expected a list of dash lengths, got {values!r}")
