"""Backend field-mapping records and their JSON snapshot format."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
from typing import Any, Iterable

from formmapper.model.field import FieldDescriptor, FieldPosition, FieldType, percent_string

logger = logging.getLogger(__name__)


class MappingLoadError(RuntimeError):
    """Raised when a field-mapping snapshot cannot be read."""


class MappingSaveError(RuntimeError):
    """Raised when a field-mapping snapshot cannot be written."""


@dataclass(slots=True)
class FieldMappingRecord:
    name: str
    label: str
    field_type: FieldType
    page: int = 1
    position_top: float | None = None
    position_left: float | None = None
    width: float | None = None
    height: float | None = None

    def descriptor(self) -> FieldDescriptor:
        return FieldDescriptor(
            name=self.name,
            label=self.label or self.name,
            field_type=self.field_type,
            page=self.page,
        )

    def position(self) -> FieldPosition | None:
        if self.position_top is None or self.position_left is None:
            return None
        return FieldPosition(
            top=self.position_top,
            left=self.position_left,
            width=percent_string(self.width),
            height=percent_string(self.height),
        ).clamped()

    def to_row(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "type": self.field_type.value,
            "page": self.page,
            "position_top": self.position_top,
            "position_left": self.position_left,
            "width": self.width,
            "height": self.height,
        }


def record_from_row(row: dict[str, Any]) -> FieldMappingRecord:
    """Normalize one backend row.

    Accepts the flat export shape (``name``, ``type``, ``width``...) as well as
    the joined database shape (``form_field_name``, ``page_number``,
    ``field_width``, ``canonical_field``...).
    """
    if not isinstance(row, dict):
        raise MappingLoadError(f"Field mapping row is not an object: {row!r}")

    canonical = row.get("canonical_field") or row.get("canonical_fields") or {}
    if isinstance(canonical, list):
        canonical = canonical[0] if canonical else {}
    if not isinstance(canonical, dict):
        canonical = {}

    name = row.get("name") or row.get("form_field_name") or canonical.get("field_key")
    if not isinstance(name, str) or not name.strip():
        raise MappingLoadError(f"Field mapping row has no field name: {row!r}")

    label = row.get("label") or canonical.get("field_label") or row.get("placeholder_text") or name
    field_type = FieldType.coerce(row.get("type") or canonical.get("field_type"))

    try:
        page = int(row.get("page") or row.get("page_number") or 1)
        return FieldMappingRecord(
            name=name.strip(),
            label=str(label),
            field_type=field_type,
            page=page,
            position_top=_optional_float(row.get("position_top")),
            position_left=_optional_float(row.get("position_left")),
            width=_optional_float(row.get("width", row.get("field_width"))),
            height=_optional_float(row.get("height", row.get("field_height"))),
        )
    except (TypeError, ValueError) as exc:
        raise MappingLoadError(f"Field mapping row for {name!r} has invalid geometry") from exc


def records_from_rows(rows: Any) -> list[FieldMappingRecord]:
    if not isinstance(rows, (list, tuple)):
        return []

    records: list[FieldMappingRecord] = []
    for row in rows:
        try:
            records.append(record_from_row(row))
        except MappingLoadError as exc:
            logger.warning("Skipping field mapping row: %s", exc)
    return records


def load_mapping_file(path: str | Path) -> tuple[str | None, list[FieldMappingRecord]]:
    source = Path(path)
    try:
        with source.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        raise MappingLoadError(f"Failed to read field mapping: {source}") from exc

    if isinstance(payload, list):
        return None, records_from_rows(payload)
    if not isinstance(payload, dict):
        raise MappingLoadError(f"Unexpected field mapping layout in: {source}")

    form_number = payload.get("form_number")
    records = records_from_rows(payload.get("fields"))
    logger.info("Loaded %d field mapping(s) from %s", len(records), source)
    return form_number, records


def save_mapping_file(
    path: str | Path,
    records: Iterable[FieldMappingRecord],
    form_number: str | None = None,
) -> None:
    output = Path(path)
    payload = {
        "form_number": form_number,
        "fields": [record.to_row() for record in records],
    }
    try:
        with output.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2)
    except (OSError, TypeError) as exc:
        raise MappingSaveError(f"Failed to write field mapping: {output}") from exc


def _optional_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return float(value)
