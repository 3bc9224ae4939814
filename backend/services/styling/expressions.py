"""
Editing support for ``interpolate`` and ``match`` style expressions.

Both expressions are positional arrays::

    ["interpolate", [type, base?], ["zoom"], zoom_1, value_1, zoom_2, value_2, ...]
    ["match", ["get", property], values_1, result_1, values_2, result_2, ..., default]

``decode_*`` turns an array into an editable dataclass and ``encode_*`` turns it back.
The edit operations work directly on the array and always return a new list; the
array passed in is never modified.
"""

import copy
import logging
from numbers import Number
from typing import Any, List, Optional

from models.style import InterpolateExpression, MatchCase, MatchExpression, Stop

logger = logging.getLogger(__name__)

# ["interpolate", [type, base?], ["zoom"], ...stops]
INTERPOLATE_HEADER_SIZE = 3
# ["match", ["get", property], ...cases, default]
MATCH_HEADER_SIZE = 2

ZOOM_SLOT = 0
VALUE_SLOT = 1


class ExpressionEditError(ValueError):
    """An edit addressed a stop/case that does not exist or a value of the wrong shape."""


class LastStopError(ExpressionEditError):
    """Removing the stop would leave the expression without any stop."""


# =============================================================================
# INTERPOLATE
# =============================================================================


def decode_interpolate(expression: Any) -> Optional[InterpolateExpression]:
    """
    Decode an ``interpolate`` array, or return ``None`` if it is not one.

    An incomplete trailing (zoom, value) pair is dropped rather than reported.
    """
    if not _is_expression(expression, "interpolate"):
        return None

    header = expression[1] if len(expression) > 1 and isinstance(expression[1], list) else []
    interpolation_type = header[0] if header else "linear"
    explicit_base = len(header) > 1
    base = header[1] if explicit_base else 1
    input_expression = expression[2] if len(expression) > 2 else ["zoom"]

    stops: List[Stop] = []
    for i in range(INTERPOLATE_HEADER_SIZE, len(expression), 2):
        if i + 1 >= len(expression):
            logger.debug(f"Dropping incomplete trailing stop at index {i} of interpolate")
            break
        stops.append(Stop(zoom=expression[i], value=expression[i + 1]))

    return InterpolateExpression(
        interpolation_type=interpolation_type,
        base=base,
        stops=stops,
        explicit_base=explicit_base,
        input=input_expression,
    )


def encode_interpolate(decoded: InterpolateExpression) -> List[Any]:
    header = [decoded.interpolation_type]
    if decoded.explicit_base or decoded.base != 1:
        header.append(decoded.base)

    expression: List[Any] = ["interpolate", header, copy.deepcopy(decoded.input)]
    for stop in decoded.stops:
        expression.extend([stop.zoom, stop.value])
    return expression


def interpolate_stop_count(expression: List[Any]) -> int:
    return max(0, (len(expression) - INTERPOLATE_HEADER_SIZE) // 2)


def update_interpolate_stop(
    expression: List[Any], stop_index: int, slot: int, value: Any
) -> List[Any]:
    """Overwrite the zoom (``slot=0``) or the value (``slot=1``) of one stop."""
    _require_expression(expression, "interpolate")
    if slot not in (ZOOM_SLOT, VALUE_SLOT):
        raise ExpressionEditError(f"Slot must be 0 (zoom) or 1 (value), got {slot}")
    check_index(stop_index, interpolate_stop_count(expression), "stop")

    updated = copy.deepcopy(expression)
    updated[INTERPOLATE_HEADER_SIZE + 2 * stop_index + slot] = value
    return updated


def add_interpolate_stop(expression: List[Any]) -> List[Any]:
    """
    Append a stop one zoom level after the last one, repeating the last value.

    The repeated value keeps the rendered result unchanged until the new stop is edited.
    """
    _require_expression(expression, "interpolate")
    count = interpolate_stop_count(expression)
    if count == 0:
        raise ExpressionEditError("Cannot add a stop to an interpolate expression without stops")

    updated = copy.deepcopy(expression[: INTERPOLATE_HEADER_SIZE + 2 * count])
    last_zoom, last_value = updated[-2], updated[-1]
    updated.extend([next_zoom(last_zoom), copy.deepcopy(last_value)])
    return updated


def remove_interpolate_stop(expression: List[Any], stop_index: int) -> List[Any]:
    _require_expression(expression, "interpolate")
    count = interpolate_stop_count(expression)
    check_index(stop_index, count, "stop")
    if count <= 1:
        raise LastStopError("An interpolate expression needs at least one stop")

    updated = copy.deepcopy(expression)
    start = INTERPOLATE_HEADER_SIZE + 2 * stop_index
    del updated[start : start + 2]
    return updated


# =============================================================================
# MATCH
# =============================================================================


def decode_match(expression: Any) -> Optional[MatchExpression]:
    """Decode a ``match`` array, or return ``None`` if it is not one."""
    if not _is_expression(expression, "match"):
        return None

    getter = expression[1] if len(expression) > 1 else None
    property_name = getter[1] if isinstance(getter, list) and len(getter) > 1 else None

    cases: List[MatchCase] = []
    for i in range(MATCH_HEADER_SIZE, len(expression) - 1, 2):
        raw_values = expression[i]
        scalar = not isinstance(raw_values, list)
        cases.append(
            MatchCase(
                values=[raw_values] if scalar else list(raw_values),
                result=expression[i + 1],
                scalar=scalar,
            )
        )

    default = expression[-1] if len(expression) > MATCH_HEADER_SIZE else None
    return MatchExpression(property=property_name, cases=cases, default=default)


def encode_match(decoded: MatchExpression) -> List[Any]:
    expression: List[Any] = ["match", ["get", decoded.property]]
    for case in decoded.cases:
        if case.scalar and len(case.values) == 1:
            expression.append(case.values[0])
        else:
            expression.append(list(case.values))
        expression.append(case.result)
    expression.append(decoded.default)
    return expression


def match_case_count(expression: List[Any]) -> int:
    return max(0, (len(expression) - MATCH_HEADER_SIZE - 1) // 2)


def update_match_result(expression: List[Any], case_index: int, value: Any) -> List[Any]:
    """Overwrite the result of one case. The case's match values are left untouched."""
    _require_expression(expression, "match")
    check_index(case_index, match_case_count(expression), "case")

    updated = copy.deepcopy(expression)
    updated[MATCH_HEADER_SIZE + 2 * case_index + 1] = value
    return updated


def update_match_default(expression: List[Any], value: Any) -> List[Any]:
    _require_expression(expression, "match")
    if len(expression) <= MATCH_HEADER_SIZE:
        raise ExpressionEditError("Match expression has no default value")

    updated = copy.deepcopy(expression)
    updated[-1] = value
    return updated


# =============================================================================
# HELPERS
# =============================================================================


def _is_expression(value: Any, operator: str) -> bool:
    return isinstance(value, list) and len(value) > 0 and value[0] == operator


def _require_expression(value: Any, operator: str) -> None:
    if not _is_expression(value, operator):
        raise ExpressionEditError(f"Expected a '{operator}' expression, got {value!r}")


def check_index(index: int, count: int, what: str) -> None:
    if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < count:
        raise ExpressionEditError(f"No {what} at index {index!r} (have {count})")


def next_zoom(zoom: Any) -> Any:
    if not isinstance(zoom, Number) or isinstance(zoom, bool):
        raise ExpressionEditError(f"Cannot derive the next zoom level from {zoom!r}")
    return zoom + 1
