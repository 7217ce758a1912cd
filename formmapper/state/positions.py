"""Normalized field positions: lookup with defaults, clamped adjustment and layout presets."""

from __future__ import annotations

from enum import Enum
import logging
import math
from typing import Iterable, Mapping, Sequence

from formmapper.model.catalog import DEFAULT_POSITIONS
from formmapper.model.field import FieldPosition, clamp_percent, parse_percent
from formmapper.model.mapping import FieldMappingRecord

logger = logging.getLogger(__name__)

PositionMap = dict[str, FieldPosition]

DEFAULT_STEP = 1.0
GRID_SIZE = 5.0
ORIGIN = FieldPosition(top=0.0, left=0.0)


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class HorizontalAlignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VerticalAlignment(str, Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class Axis(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


def resolve_position(
    field_name: str | None,
    position_map: Mapping[str, FieldPosition],
    defaults: Mapping[str, FieldPosition] = DEFAULT_POSITIONS,
) -> FieldPosition:
    if not field_name:
        return ORIGIN
    position = position_map.get(field_name)
    if position is not None:
        return position
    return defaults.get(field_name, ORIGIN)


def adjust_position(
    direction: Direction | str,
    field_name: str | None,
    position_map: PositionMap,
    step: float | None = DEFAULT_STEP,
    defaults: Mapping[str, FieldPosition] = DEFAULT_POSITIONS,
) -> PositionMap:
    """Move one field by ``step`` percentage points and return a new map.

    The input map is never modified. An empty field name (nothing selected)
    returns the input map itself.
    """
    if not field_name:
        return position_map

    try:
        direction = Direction(direction)
    except ValueError:
        logger.debug("Ignoring unknown direction %r for field %s", direction, field_name)
        return position_map

    step = step or DEFAULT_STEP
    current = resolve_position(field_name, position_map, defaults)
    top, left = current.top, current.left

    if direction is Direction.UP:
        top = clamp_percent(top - step)
    elif direction is Direction.DOWN:
        top = clamp_percent(top + step)
    elif direction is Direction.LEFT:
        left = clamp_percent(left - step)
    else:
        left = clamp_percent(left + step)

    updated = dict(position_map)
    updated[field_name] = FieldPosition(top=top, left=left, width=current.width, height=current.height)
    return updated


def place_position(
    field_name: str | None,
    top: float,
    left: float,
    position_map: PositionMap,
    defaults: Mapping[str, FieldPosition] = DEFAULT_POSITIONS,
) -> PositionMap:
    if not field_name:
        return position_map

    current = resolve_position(field_name, position_map, defaults)
    updated = dict(position_map)
    updated[field_name] = FieldPosition(
        top=clamp_percent(top),
        left=clamp_percent(left),
        width=current.width,
        height=current.height,
    )
    return updated


def positions_from_records(records: Iterable[FieldMappingRecord]) -> PositionMap:
    positions: PositionMap = {}
    for record in records:
        position = record.position()
        if position is None:
            logger.warning("Field %s missing position data", record.name)
            continue
        positions[record.name] = position
    return positions


def layer_positions(base: Mapping[str, FieldPosition], overrides: Mapping[str, FieldPosition]) -> PositionMap:
    layered = dict(base)
    layered.update(overrides)
    return layered


def snap_to_grid(position: FieldPosition, grid_size: float | None = GRID_SIZE) -> FieldPosition:
    grid_size = grid_size if grid_size and grid_size > 0 else GRID_SIZE
    return FieldPosition(
        top=clamp_percent(_round_to(position.top, grid_size)),
        left=clamp_percent(_round_to(position.left, grid_size)),
        width=position.width,
        height=position.height,
    )


def snap_all_to_grid(
    position_map: PositionMap,
    field_names: Sequence[str],
    grid_size: float | None = GRID_SIZE,
    defaults: Mapping[str, FieldPosition] = DEFAULT_POSITIONS,
) -> PositionMap:
    present = _present(field_names, position_map, defaults)
    if not present:
        return position_map

    updated = dict(position_map)
    for name, position in present:
        updated[name] = snap_to_grid(position, grid_size)
    return updated


def align_horizontal(
    position_map: PositionMap,
    field_names: Sequence[str],
    alignment: HorizontalAlignment | str,
    defaults: Mapping[str, FieldPosition] = DEFAULT_POSITIONS,
) -> PositionMap:
    """Line up the named fields on their left edges, centers or right edges.

    Widths come from each field's ``width`` percentage; a field without one
    counts as zero wide.
    """
    alignment = HorizontalAlignment(alignment)
    present = _present(field_names, position_map, defaults)
    if not present:
        return position_map

    left_most = min(position.left for _, position in present)
    right_most = max(position.left + parse_percent(position.width) for _, position in present)

    updated = dict(position_map)
    for name, position in present:
        width = parse_percent(position.width)
        if alignment is HorizontalAlignment.LEFT:
            left = left_most
        elif alignment is HorizontalAlignment.RIGHT:
            left = right_most - width
        else:
            left = (left_most + right_most) / 2 - width / 2
        updated[name] = FieldPosition(
            top=position.top,
            left=clamp_percent(left),
            width=position.width,
            height=position.height,
        )
    return updated


def align_vertical(
    position_map: PositionMap,
    field_names: Sequence[str],
    alignment: VerticalAlignment | str,
    defaults: Mapping[str, FieldPosition] = DEFAULT_POSITIONS,
) -> PositionMap:
    alignment = VerticalAlignment(alignment)
    present = _present(field_names, position_map, defaults)
    if not present:
        return position_map

    top_most = min(position.top for _, position in present)
    bottom_most = max(position.top + parse_percent(position.height) for _, position in present)

    updated = dict(position_map)
    for name, position in present:
        height = parse_percent(position.height)
        if alignment is VerticalAlignment.TOP:
            top = top_most
        elif alignment is VerticalAlignment.BOTTOM:
            top = bottom_most - height
        else:
            top = (top_most + bottom_most) / 2 - height / 2
        updated[name] = FieldPosition(
            top=clamp_percent(top),
            left=position.left,
            width=position.width,
            height=position.height,
        )
    return updated


def distribute_evenly(
    position_map: PositionMap,
    field_names: Sequence[str],
    axis: Axis | str,
    defaults: Mapping[str, FieldPosition] = DEFAULT_POSITIONS,
) -> PositionMap:
    """Space three or more fields at equal steps between the outermost two."""
    axis = Axis(axis)
    present = _present(field_names, position_map, defaults)
    if len(present) < 3:
        return position_map

    horizontal = axis is Axis.HORIZONTAL
    present.sort(key=lambda item: item[1].left if horizontal else item[1].top)
    first = present[0][1].left if horizontal else present[0][1].top
    last = present[-1][1].left if horizontal else present[-1][1].top
    spacing = (last - first) / (len(present) - 1)

    updated = dict(position_map)
    for index, (name, position) in enumerate(present):
        offset = first + spacing * index
        updated[name] = FieldPosition(
            top=position.top if horizontal else offset,
            left=offset if horizontal else position.left,
            width=position.width,
            height=position.height,
        )
    return updated


def _present(
    field_names: Sequence[str],
    position_map: Mapping[str, FieldPosition],
    defaults: Mapping[str, FieldPosition],
) -> list[tuple[str, FieldPosition]]:
    present: list[tuple[str, FieldPosition]] = []
    seen: set[str] = set()
    for name in field_names:
        if not name or name in seen:
            continue
        seen.add(name)
        if name in position_map or name in defaults:
            present.append((name, resolve_position(name, position_map, defaults)))
        else:
            logger.debug("Field %s has no position; skipping", name)
    return present


def _round_to(value: float, grid_size: float) -> float:
    # Halves round up, away from the page origin.
    return math.floor(value / grid_size + 0.5) * grid_size
