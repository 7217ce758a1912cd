"""Pointer-driven rectangle capture for defining new fields on a page."""

from __future__ import annotations

from enum import Enum
import logging
from typing import Callable, Protocol

from formmapper import config
from formmapper.model.field import ContainerBox, DrawnRect, Point

logger = logging.getLogger(__name__)


class PointerCapture(Protocol):
    def capture(self, pointer_id: int | None) -> None: ...

    def release(self, pointer_id: int | None) -> None: ...


class DrawState(str, Enum):
    INACTIVE = "inactive"
    DRAWING = "drawing"


class DrawingTool:
    """Turns a pointer-down / move / up gesture into a normalized rectangle.

    Points are container-relative pixels, clamped to the container. The
    container size is passed with each event that needs it, so the result
    follows scroll or resize during the gesture.
    """

    def __init__(
        self,
        on_draw_complete: Callable[[DrawnRect], None] | None = None,
        capture: PointerCapture | None = None,
        min_size_px: float = config.DRAW_MIN_PX,
    ) -> None:
        self.on_draw_complete = on_draw_complete
        self.edit_enabled = False
        self._capture = capture
        self._min_size_px = min_size_px
        self._state = DrawState.INACTIVE
        self._start: Point | None = None
        self._current: Point | None = None
        self._pointer_id: int | None = None

    @property
    def state(self) -> DrawState:
        return self._state

    @property
    def is_drawing(self) -> bool:
        return self._state is DrawState.DRAWING

    def pointer_down(self, point: Point, container: ContainerBox, pointer_id: int | None = None) -> bool:
        if not self.edit_enabled or self.is_drawing:
            return False

        start = _clamp_point(point, container)
        self._pointer_id = pointer_id
        self._acquire_capture()
        self._start = start
        self._current = start
        self._state = DrawState.DRAWING
        return True

    def pointer_move(self, point: Point) -> None:
        if not self.is_drawing:
            return
        self._current = point

    def pointer_up(
        self,
        point: Point,
        container: ContainerBox,
        pointer_id: int | None = None,
    ) -> DrawnRect | None:
        if not self.is_drawing or self._start is None:
            return None

        self._current = point
        rect: DrawnRect | None = None
        width_px, height_px = self._pixel_size(container)
        if width_px > self._min_size_px and height_px > self._min_size_px:
            rect = self._normalized(container)
        else:
            logger.debug("Discarding %.1fx%.1f px draw gesture", width_px, height_px)

        self._finish(pointer_id)

        if rect is not None and self.on_draw_complete is not None:
            self.on_draw_complete(rect)
        return rect

    def pointer_cancel(self, pointer_id: int | None = None) -> None:
        if not self.is_drawing:
            return
        logger.debug("Draw gesture cancelled")
        self._finish(pointer_id)

    def preview_rect(self, container: ContainerBox) -> DrawnRect | None:
        if not self.is_drawing:
            return None
        return self._normalized(container)

    def _pixel_size(self, container: ContainerBox) -> tuple[float, float]:
        if self._start is None or self._current is None:
            return 0.0, 0.0
        start = _clamp_point(self._start, container)
        current = _clamp_point(self._current, container)
        return abs(current.x - start.x), abs(current.y - start.y)

    def _normalized(self, container: ContainerBox) -> DrawnRect | None:
        if self._start is None or self._current is None:
            return None
        if container.width <= 0 or container.height <= 0:
            logger.debug("Container has no area; cannot normalize rectangle")
            return None

        start = _clamp_point(self._start, container)
        current = _clamp_point(self._current, container)
        x1 = min(start.x, current.x)
        y1 = min(start.y, current.y)
        width_px, height_px = self._pixel_size(container)
        return DrawnRect(
            top=y1 * 100 / container.height,
            left=x1 * 100 / container.width,
            width=width_px * 100 / container.width,
            height=height_px * 100 / container.height,
        )

    def _finish(self, pointer_id: int | None) -> None:
        self._release_capture(pointer_id if pointer_id is not None else self._pointer_id)
        self._state = DrawState.INACTIVE
        self._start = None
        self._current = None
        self._pointer_id = None

    def _acquire_capture(self) -> None:
        if self._capture is None:
            return
        try:
            self._capture.capture(self._pointer_id)
        except Exception as exc:
            logger.warning("Failed to capture pointer: %s", exc)

    def _release_capture(self, pointer_id: int | None) -> None:
        if self._capture is None:
            return
        try:
            self._capture.release(pointer_id)
        except Exception as exc:
            logger.warning("Failed to release pointer capture: %s", exc)


def _clamp_point(point: Point, container: ContainerBox) -> Point:
    return Point(
        x=max(0.0, min(float(container.width), point.x)),
        y=max(0.0, min(float(container.height), point.y)),
    )
