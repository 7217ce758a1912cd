"""In-memory session state owning the field list, indices and positions."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Callable, Iterable, Sequence

from formmapper import config
from formmapper.model.catalog import DEFAULT_POSITIONS, FL320_FIELDS, LEGACY_FIELD_INDEX
from formmapper.model.field import (
    DrawnRect,
    FieldDescriptor,
    FieldPosition,
    FieldType,
    NewFieldPayload,
    build_new_field,
    percent_string,
)
from formmapper.model.mapping import FieldMappingRecord
from formmapper.state.field_index import FieldIndexMap, index_drift, merge_field_index, ordered_names
from formmapper.state.navigation import FieldCursor
from formmapper.state.positions import (
    Axis,
    Direction,
    HorizontalAlignment,
    PositionMap,
    VerticalAlignment,
    adjust_position,
    align_horizontal,
    align_vertical,
    distribute_evenly,
    layer_positions,
    place_position,
    positions_from_records,
    resolve_position,
    snap_all_to_grid,
)
from formmapper.viewer.keyboard import NavigateTo, resolve_key

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FormSession:
    form_number: str = config.FORM_NUMBER
    legacy_index: dict[str, int] = field(default_factory=lambda: dict(LEGACY_FIELD_INDEX))
    catalog: Sequence[FieldDescriptor] = field(default_factory=lambda: list(FL320_FIELDS))
    defaults: dict[str, FieldPosition] = field(default_factory=lambda: dict(DEFAULT_POSITIONS))
    positions: PositionMap = field(default_factory=dict)
    edit_mode: bool = False
    save_handler: Callable[[NewFieldPayload], None] | None = None
    field_index: FieldIndexMap = field(default_factory=dict)
    cursor: FieldCursor = field(default_factory=FieldCursor)
    _dynamic_names: list[str] = field(default_factory=list, init=False, repr=False)
    _descriptors: dict[str, FieldDescriptor] = field(default_factory=dict, init=False, repr=False)
    _created_names: list[str] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        for descriptor in self.catalog:
            self._descriptors[descriptor.name] = descriptor
        self._rebuild()

    @property
    def fields(self) -> list[FieldDescriptor]:
        return self.cursor.fields

    @property
    def current_field(self) -> FieldDescriptor | None:
        return self.cursor.current

    def descriptor(self, name: str) -> FieldDescriptor | None:
        return self._descriptors.get(name)

    def page_fields(self, page: int) -> list[FieldDescriptor]:
        return [descriptor for descriptor in self.fields if descriptor.page == page]

    def load_records(self, records: Iterable[FieldMappingRecord]) -> None:
        records = list(records)
        for record in records:
            self._descriptors[record.name] = record.descriptor()
        self._dynamic_names = [record.name for record in records]
        self.positions = layer_positions(self.positions, positions_from_records(records))
        self._rebuild()
        logger.info(
            "Loaded %d mapping record(s) for %s; %d field(s) in session",
            len(records),
            self.form_number,
            len(self.field_index),
        )

    def position_of(self, name: str | None) -> FieldPosition:
        return resolve_position(name, self.positions, self.defaults)

    def current_position(self) -> FieldPosition:
        return self.position_of(self.cursor.current_name)

    def move_field(self, name: str | None, direction: Direction | str, step: float | None = None) -> FieldPosition:
        self.positions = adjust_position(
            direction,
            name,
            self.positions,
            step=step if step is not None else config.ADJUST_STEP,
            defaults=self.defaults,
        )
        return self.position_of(name)

    def move_current(self, direction: Direction | str, step: float | None = None) -> FieldPosition:
        return self.move_field(self.cursor.current_name, direction, step)

    def place_field(self, name: str | None, top: float, left: float) -> FieldPosition:
        self.positions = place_position(name, top, left, self.positions, defaults=self.defaults)
        return self.position_of(name)

    def snap_fields(self, names: Sequence[str], grid_size: float | None = None) -> bool:
        grid_size = grid_size if grid_size is not None else config.GRID_SIZE
        return self._apply_layout(
            snap_all_to_grid(self.positions, names, grid_size=grid_size, defaults=self.defaults),
            f"snapped to {grid_size:g}% grid",
        )

    def align_fields(self, names: Sequence[str], alignment: HorizontalAlignment | VerticalAlignment | str) -> bool:
        try:
            horizontal = HorizontalAlignment(alignment)
        except ValueError:
            vertical = VerticalAlignment(alignment)
            updated = align_vertical(self.positions, names, vertical, defaults=self.defaults)
            return self._apply_layout(updated, f"aligned {vertical.value}")
        updated = align_horizontal(self.positions, names, horizontal, defaults=self.defaults)
        return self._apply_layout(updated, f"aligned {horizontal.value}")

    def distribute_fields(self, names: Sequence[str], axis: Axis | str) -> bool:
        return self._apply_layout(
            distribute_evenly(self.positions, names, axis, defaults=self.defaults),
            f"distributed {Axis(axis).value}ly",
        )

    def handle_key(self, key: str, shift: bool = False) -> bool:
        command = resolve_key(key, shift=shift, edit_mode=self.edit_mode)
        if command is None:
            return False

        if command.navigate is NavigateTo.NEXT:
            self.cursor.next()
        elif command.navigate is NavigateTo.PREV:
            self.cursor.prev()
        elif command.direction is not None:
            if self.cursor.current is None:
                self.cursor.go_to(0)
                return True
            self.move_current(command.direction, command.step)
        return True

    def create_field(
        self,
        name: str,
        field_type: FieldType | str,
        rect: DrawnRect,
        page: int,
    ) -> NewFieldPayload:
        payload = build_new_field(name, field_type, rect, page)

        self._descriptors[payload.name] = FieldDescriptor(
            name=payload.name,
            label=payload.name,
            field_type=payload.field_type,
            page=payload.page,
        )
        if payload.name not in self._created_names:
            self._created_names.append(payload.name)
        self.positions = layer_positions(
            self.positions,
            {
                payload.name: FieldPosition(
                    top=rect.top,
                    left=rect.left,
                    width=percent_string(rect.width),
                    height=percent_string(rect.height),
                ).clamped()
            },
        )
        self._rebuild()
        self.cursor.go_to_name(payload.name)
        logger.info("Created field %s on page %d", payload.name, payload.page)

        if self.save_handler is not None:
            self.save_handler(payload)
        return payload

    def records(self) -> list[FieldMappingRecord]:
        records: list[FieldMappingRecord] = []
        for descriptor in self.fields:
            position = self.positions.get(descriptor.name) or self.defaults.get(descriptor.name)
            records.append(
                FieldMappingRecord(
                    name=descriptor.name,
                    label=descriptor.label,
                    field_type=descriptor.field_type,
                    page=descriptor.page,
                    position_top=position.top if position else None,
                    position_left=position.left if position else None,
                    width=_percent_value(position.width) if position else None,
                    height=_percent_value(position.height) if position else None,
                )
            )
        return records

    def _apply_layout(self, updated: PositionMap, action: str) -> bool:
        if updated is self.positions:
            return False
        changed = sum(1 for name, position in updated.items() if self.positions.get(name) != position)
        self.positions = updated
        logger.info("Layout preset %s moved %d field(s)", action, changed)
        return True

    def _rebuild(self) -> None:
        merged = merge_field_index(self.legacy_index, self._dynamic_names + self._created_names)
        drift = index_drift(self.field_index, merged)
        for name, (old_index, new_index) in drift.items():
            logger.warning("Field %s moved from index %d to %d after re-merge", name, old_index, new_index)
        self.field_index = merged

        ordered = [self._descriptors.get(name) or FieldDescriptor(name=name, label=name) for name in ordered_names(merged)]
        self.cursor.set_fields(ordered)


def _percent_value(value: str | None) -> float | None:
    if not value:
        return None
    return float(value.rstrip("%"))
