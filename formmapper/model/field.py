"""Form field model definitions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging

logger = logging.getLogger(__name__)


class InvalidFieldError(ValueError):
    """Raised when a new field definition cannot be built."""


class FieldType(str, Enum):
    INPUT = "input"
    TEXTAREA = "textarea"
    CHECKBOX = "checkbox"
    DATE = "date"
    SIGNATURE = "signature"

    @classmethod
    def coerce(cls, value: object) -> FieldType:
        if isinstance(value, FieldType):
            return value
        raw = str(value or "").strip().lower()
        aliases = {
            "text": cls.INPUT,
            "/tx": cls.INPUT,
            "/btn": cls.CHECKBOX,
            "/sig": cls.SIGNATURE,
        }
        if raw in aliases:
            return aliases[raw]
        try:
            return cls(raw)
        except ValueError:
            return cls.INPUT


@dataclass(slots=True, frozen=True)
class FieldDescriptor:
    name: str
    label: str
    field_type: FieldType = FieldType.INPUT
    page: int = 1

    def matches(self, query: str) -> bool:
        needle = (query or "").lower()
        return needle in self.label.lower() or needle in self.name.lower()


@dataclass(slots=True, frozen=True)
class FieldPosition:
    top: float
    left: float
    width: str | None = None
    height: str | None = None

    def clamped(self) -> FieldPosition:
        return FieldPosition(
            top=clamp_percent(self.top),
            left=clamp_percent(self.left),
            width=self.width,
            height=self.height,
        )


@dataclass(slots=True, frozen=True)
class Point:
    x: float
    y: float


@dataclass(slots=True, frozen=True)
class ContainerBox:
    width: float
    height: float


@dataclass(slots=True, frozen=True)
class DrawnRect:
    top: float
    left: float
    width: float
    height: float

    def to_dict(self) -> dict[str, float]:
        return {
            "top": self.top,
            "left": self.left,
            "width": self.width,
            "height": self.height,
        }


@dataclass(slots=True, frozen=True)
class NewFieldPayload:
    name: str
    field_type: FieldType
    rect: DrawnRect
    page: int

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "type": self.field_type.value,
            "rect": self.rect.to_dict(),
            "page": self.page,
        }


def clamp_percent(value: float) -> float:
    return max(0.0, min(100.0, float(value)))


def percent_string(value: float | None) -> str | None:
    if not value:
        return None
    return f"{value:g}%"


def parse_percent(value: str | None, fallback: float = 0.0) -> float:
    if not value:
        return fallback
    try:
        return float(value.rstrip("%"))
    except ValueError:
        logger.debug("Unparseable percentage %r; using %.1f", value, fallback)
        return fallback


def build_new_field(
    name: str,
    field_type: FieldType | str,
    rect: DrawnRect,
    page: int,
) -> NewFieldPayload:
    clean_name = (name or "").strip()
    if not clean_name:
        raise InvalidFieldError("Field name is required.")
    try:
        resolved_type = FieldType(field_type)
    except ValueError as exc:
        raise InvalidFieldError(f"Unknown field type: {field_type}") from exc
    if page < 1:
        raise InvalidFieldError(f"Page number must be 1 or greater: {page}")
    return NewFieldPayload(name=clean_name, field_type=resolved_type, rect=rect, page=page)
