"""Current-field cursor over the ordered field list."""

from __future__ import annotations

from enum import Enum
import logging
from typing import Sequence

from formmapper.model.field import FieldDescriptor

logger = logging.getLogger(__name__)


class CursorState(str, Enum):
    IDLE = "idle"
    READY = "ready"


class FieldCursor:
    """Tracks the selected field as an index into an ordered descriptor list.

    The list may be replaced at any time (a backend snapshot arriving late, a
    field being created). The index follows it: reset to the first field when
    the list first fills, clamped when it shrinks.
    """

    def __init__(self, fields: Sequence[FieldDescriptor] = ()) -> None:
        self._fields: list[FieldDescriptor] = []
        self._index = 0
        self.set_fields(fields)

    @property
    def state(self) -> CursorState:
        return CursorState.READY if self._fields else CursorState.IDLE

    @property
    def fields(self) -> list[FieldDescriptor]:
        return list(self._fields)

    @property
    def field_count(self) -> int:
        return len(self._fields)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current(self) -> FieldDescriptor | None:
        if not self.is_valid_index(self._index):
            return None
        return self._fields[self._index]

    @property
    def current_name(self) -> str:
        current = self.current
        return current.name if current is not None else ""

    def set_fields(self, fields: Sequence[FieldDescriptor]) -> None:
        was_idle = self.state is CursorState.IDLE
        self._fields = list(fields)

        if not self._fields:
            self._index = 0
            return
        if was_idle:
            self._index = 0
            logger.debug("Field cursor ready with %d field(s)", len(self._fields))
        elif self._index > len(self._fields) - 1:
            self._index = len(self._fields) - 1

    def is_valid_index(self, index: int) -> bool:
        return 0 <= index < len(self._fields)

    def next(self) -> int:
        if self._fields:
            self._index = min(len(self._fields) - 1, self._index + 1)
        return self._index

    def prev(self) -> int:
        if self._fields:
            self._index = max(0, self._index - 1)
        return self._index

    def go_to(self, index: int) -> bool:
        if not self.is_valid_index(index):
            return False
        self._index = index
        return True

    def go_to_name(self, name: str) -> bool:
        for index, field in enumerate(self._fields):
            if field.name == name:
                self._index = index
                return True
        return False

    def search(self, query: str) -> list[FieldDescriptor]:
        return [field for field in self._fields if field.matches(query)]

    def position_label(self) -> str:
        current = self.current
        if current is None:
            return "No field selected"
        return f"Field {self._index + 1} of {len(self._fields)}: {current.label}"
