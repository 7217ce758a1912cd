"""Interactive page canvas: field overlays, drag-to-reposition and field drawing."""

from __future__ import annotations

import logging

from PySide6.QtCore import QPointF, QRectF, Qt, QTimer, Signal
from PySide6.QtGui import QColor, QPainter, QPen, QPixmap
from PySide6.QtWidgets import QWidget

from formmapper import config
from formmapper.model.field import ContainerBox, DrawnRect, FieldDescriptor, FieldType, Point, parse_percent
from formmapper.state.batching import FrameBatcher, FrameThrottle
from formmapper.state.session import FormSession
from formmapper.viewer.drawing import DrawingTool

logger = logging.getLogger(__name__)

_QT_KEYS = {
    Qt.Key.Key_Up: "ArrowUp",
    Qt.Key.Key_Down: "ArrowDown",
    Qt.Key.Key_Left: "ArrowLeft",
    Qt.Key.Key_Right: "ArrowRight",
    Qt.Key.Key_Tab: "Tab",
    Qt.Key.Key_Backtab: "Tab",
}

# Intrinsic overlay size (% of page) for fields stored as a point only.
_INTRINSIC_SIZE = {
    FieldType.INPUT: (25.0, 2.2),
    FieldType.DATE: (14.0, 2.2),
    FieldType.TEXTAREA: (60.0, 8.0),
    FieldType.CHECKBOX: (1.8, 1.4),
    FieldType.SIGNATURE: (30.0, 3.0),
}


def _frame_scheduler(callback) -> None:
    QTimer.singleShot(config.FRAME_INTERVAL_MS, callback)


class WidgetPointerCapture:
    """Pointer capture backed by Qt's mouse grab."""

    def __init__(self, widget: QWidget) -> None:
        self._widget = widget

    def capture(self, pointer_id: int | None) -> None:
        self._widget.grabMouse()

    def release(self, pointer_id: int | None) -> None:
        self._widget.releaseMouse()


class FormCanvas(QWidget):
    field_selected = Signal(str)
    positions_changed = Signal()
    field_drawn = Signal(object)

    def __init__(self, session: FormSession) -> None:
        super().__init__()
        self._session = session
        self._pixmap: QPixmap | None = None
        self._page = 1
        self._drag_name: str | None = None
        self._drag_offset_px: QPointF | None = None

        self.drawing = DrawingTool(
            on_draw_complete=self._on_draw_complete,
            capture=WidgetPointerCapture(self),
        )
        self._repaint_batch = FrameBatcher(_frame_scheduler)
        self._drag_update = FrameThrottle(self._apply_drag, _frame_scheduler)

        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMouseTracking(True)
        self.setMinimumSize(500, 600)

    @property
    def page(self) -> int:
        return self._page

    def set_session(self, session: FormSession) -> None:
        self._cancel_interaction()
        self._session = session
        self.update()

    def set_page(self, pixmap: QPixmap, page: int) -> None:
        self._cancel_interaction()
        self._pixmap = pixmap
        self._page = page
        self.resize(pixmap.size())
        self.update()

    def clear_page(self) -> None:
        self._cancel_interaction()
        self._pixmap = None
        self.resize(500, 600)
        self.update()

    def set_edit_mode(self, enabled: bool) -> None:
        self._session.edit_mode = enabled
        self.drawing.edit_enabled = enabled
        if not enabled:
            self._cancel_interaction()
        self.update()

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor("#e9eaee"))

        if self._pixmap is None:
            return

        painter.drawPixmap(0, 0, self._pixmap)
        current = self._session.current_field
        for descriptor in self._session.page_fields(self._page):
            rect_px = self._field_rect_px(descriptor)
            selected = current is not None and descriptor.name == current.name
            pen = QPen(QColor("#c62828") if selected else QColor("#1565c0"))
            pen.setWidth(2)
            painter.setPen(pen)
            painter.drawRect(rect_px)

        preview = self.drawing.preview_rect(self._container())
        if preview is not None:
            pen = QPen(QColor("#2e7d32"))
            pen.setStyle(Qt.PenStyle.DashLine)
            pen.setWidth(2)
            painter.setPen(pen)
            painter.drawRect(self._percent_rect_px(preview.top, preview.left, preview.width, preview.height))

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if self._pixmap is None or event.button() != Qt.MouseButton.LeftButton:
            return

        self.setFocus()
        pos = event.position()
        hit = self._field_at(pos)
        if hit is not None:
            self._session.cursor.go_to_name(hit.name)
            self.field_selected.emit(hit.name)
            if self._session.edit_mode:
                self._drag_name = hit.name
                self._drag_offset_px = pos - self._field_rect_px(hit).topLeft()
            self.update()
            return

        self.drawing.pointer_down(Point(pos.x(), pos.y()), self._container())
        self.update()

    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        pos = event.position()
        if self.drawing.is_drawing:
            self.drawing.pointer_move(Point(pos.x(), pos.y()))
            self._repaint_batch.schedule(self.update)
        elif self._drag_name is not None:
            self._drag_update(self._drag_name, QPointF(pos))

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        pos = event.position()
        if self.drawing.is_drawing:
            self.drawing.pointer_up(Point(pos.x(), pos.y()), self._container())
            self.update()
        elif self._drag_name is not None:
            self._drag_update(self._drag_name, QPointF(pos))
            self._drag_update.flush()
            self._drag_name = None
            self._drag_offset_px = None

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        key = _QT_KEYS.get(event.key())
        if key is None:
            if event.key() == Qt.Key.Key_Escape:
                self._cancel_interaction()
                self.update()
                return
            super().keyPressEvent(event)
            return

        shift = bool(event.modifiers() & Qt.KeyboardModifier.ShiftModifier)
        shift = shift or event.key() == Qt.Key.Key_Backtab
        before = self._session.cursor.current_name
        if not self._session.handle_key(key, shift=shift):
            super().keyPressEvent(event)
            return

        event.accept()
        after = self._session.cursor.current_name
        if after != before:
            self.field_selected.emit(after)
        else:
            self.positions_changed.emit()
        self._repaint_batch.schedule(self.update)

    def focusNextPrevChild(self, next: bool) -> bool:  # type: ignore[override]
        # Tab walks fields, not widgets.
        return False

    def focusOutEvent(self, event) -> None:  # type: ignore[override]
        self.drawing.pointer_cancel()
        super().focusOutEvent(event)

    def _apply_drag(self, name: str, pos: QPointF) -> None:
        container = self._container()
        if container.width <= 0 or container.height <= 0:
            return
        top_left = pos - (self._drag_offset_px or QPointF(0, 0))
        self._session.place_field(
            name,
            top=top_left.y() / container.height * 100,
            left=top_left.x() / container.width * 100,
        )
        self.positions_changed.emit()
        self.update()

    def _on_draw_complete(self, rect: DrawnRect) -> None:
        logger.debug("Drew rectangle on page %d: %s", self._page, rect.to_dict())
        self.field_drawn.emit(rect)

    def _cancel_interaction(self) -> None:
        self.drawing.pointer_cancel()
        self._drag_update.cancel()
        self._repaint_batch.cancel()
        self._drag_name = None
        self._drag_offset_px = None

    def _container(self) -> ContainerBox:
        return ContainerBox(width=float(self.width()), height=float(self.height()))

    def _field_rect_px(self, descriptor: FieldDescriptor) -> QRectF:
        position = self._session.position_of(descriptor.name)
        default_w, default_h = _INTRINSIC_SIZE.get(descriptor.field_type, _INTRINSIC_SIZE[FieldType.INPUT])
        width = parse_percent(position.width, default_w)
        height = parse_percent(position.height, default_h)
        return self._percent_rect_px(position.top, position.left, width, height)

    def _percent_rect_px(self, top: float, left: float, width: float, height: float) -> QRectF:
        container = self._container()
        return QRectF(
            left / 100 * container.width,
            top / 100 * container.height,
            width / 100 * container.width,
            height / 100 * container.height,
        )

    def _field_at(self, pos: QPointF) -> FieldDescriptor | None:
        page_fields = self._session.page_fields(self._page)
        for descriptor in reversed(page_fields):
            if self._field_rect_px(descriptor).contains(pos):
                return descriptor
        return None

