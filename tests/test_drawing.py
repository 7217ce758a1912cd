import logging

import pytest

from formmapper.model.field import ContainerBox, DrawnRect, Point
from formmapper.viewer.drawing import DrawingTool, DrawState

BOX = ContainerBox(width=500, height=500)


class RecordingCapture:
    def __init__(self):
        self.calls = []

    def capture(self, pointer_id):
        self.calls.append(("capture", pointer_id))

    def release(self, pointer_id):
        self.calls.append(("release", pointer_id))


class BrokenCapture:
    def capture(self, pointer_id):
        raise RuntimeError("pointer capture unsupported")

    def release(self, pointer_id):
        raise RuntimeError("pointer capture unsupported")


@pytest.fixture
def emitted():
    return []


@pytest.fixture
def tool(emitted):
    drawing = DrawingTool(on_draw_complete=emitted.append, min_size_px=10)
    drawing.edit_enabled = True
    return drawing


def drag(tool, start, end, box=BOX):
    tool.pointer_down(Point(*start), box)
    tool.pointer_move(Point(*end))
    return tool.pointer_up(Point(*end), box)


def test_small_drag_emits_nothing(tool, emitted):
    assert drag(tool, (0, 0), (5, 5)) is None
    assert emitted == []
    assert tool.state is DrawState.INACTIVE


def test_drag_emits_normalized_rect(tool, emitted):
    rect = drag(tool, (0, 0), (50, 50))

    assert rect == DrawnRect(top=0, left=0, width=10, height=10)
    assert emitted == [rect]
    assert tool.state is DrawState.INACTIVE


def test_reverse_drag_uses_bounding_box(tool):
    rect = drag(tool, (300, 200), (100, 50), box=ContainerBox(width=1000, height=500))

    assert rect.left == pytest.approx(10)
    assert rect.top == pytest.approx(10)
    assert rect.width == pytest.approx(20)
    assert rect.height == pytest.approx(30)


def test_both_dimensions_must_exceed_threshold(tool, emitted):
    assert drag(tool, (0, 0), (200, 10)) is None
    assert drag(tool, (0, 0), (10, 200)) is None
    assert emitted == []


def test_uses_container_size_at_pointer_up(tool):
    tool.pointer_down(Point(0, 0), BOX)
    tool.pointer_move(Point(100, 100))

    rect = tool.pointer_up(Point(100, 100), ContainerBox(width=1000, height=200))

    assert rect == DrawnRect(top=0, left=0, width=10, height=50)


def test_ignored_outside_edit_mode(tool, emitted):
    tool.edit_enabled = False

    assert not tool.pointer_down(Point(0, 0), BOX)
    tool.pointer_move(Point(80, 80))
    assert tool.pointer_up(Point(80, 80), BOX) is None
    assert emitted == []


def test_move_and_up_without_down_are_ignored(tool, emitted):
    tool.pointer_move(Point(50, 50))

    assert tool.pointer_up(Point(50, 50), BOX) is None
    assert tool.state is DrawState.INACTIVE
    assert emitted == []


def test_preview_rect_while_drawing(tool):
    assert tool.preview_rect(BOX) is None

    tool.pointer_down(Point(50, 50), BOX)
    tool.pointer_move(Point(100, 150))

    assert tool.preview_rect(BOX) == DrawnRect(top=10, left=10, width=10, height=20)


def test_cancel_releases_capture_and_resets(emitted):
    capture = RecordingCapture()
    tool = DrawingTool(on_draw_complete=emitted.append, capture=capture)
    tool.edit_enabled = True

    tool.pointer_down(Point(0, 0), BOX, pointer_id=7)
    tool.pointer_move(Point(90, 90))
    tool.pointer_cancel()

    assert tool.state is DrawState.INACTIVE
    assert capture.calls == [("capture", 7), ("release", 7)]
    assert emitted == []
    assert tool.pointer_down(Point(0, 0), BOX)


def test_capture_released_even_below_threshold():
    capture = RecordingCapture()
    tool = DrawingTool(capture=capture)
    tool.edit_enabled = True

    drag(tool, (0, 0), (3, 3))

    assert capture.calls == [("capture", None), ("release", None)]


def test_capture_failures_are_logged_and_drawing_continues(emitted, caplog):
    tool = DrawingTool(on_draw_complete=emitted.append, capture=BrokenCapture())
    tool.edit_enabled = True

    with caplog.at_level(logging.WARNING, logger="formmapper.viewer.drawing"):
        rect = drag(tool, (0, 0), (50, 50))

    assert rect == DrawnRect(top=0, left=0, width=10, height=10)
    assert emitted == [rect]
    assert "Failed to capture pointer" in caplog.text
    assert "Failed to release pointer capture" in caplog.text


def test_zero_sized_container_discards_gesture(tool, emitted):
    assert drag(tool, (0, 0), (50, 50), box=ContainerBox(width=0, height=0)) is None
    assert emitted == []
    assert tool.state is DrawState.INACTIVE


def test_points_outside_container_are_clamped(tool, emitted):
    tool.pointer_down(Point(50, 50), BOX)
    tool.pointer_move(Point(-50, 600))

    rect = tool.pointer_up(Point(-50, 600), BOX)

    assert rect == DrawnRect(top=10, left=0, width=10, height=90)
    assert emitted == [rect]


def test_threshold_applies_to_clamped_size(tool, emitted):
    assert drag(tool, (495, 0), (600, 100)) is None
    assert emitted == []


def test_start_point_outside_container_is_clamped(tool):
    rect = drag(tool, (-100, -100), (100, 100))

    assert rect == DrawnRect(top=0, left=0, width=20, height=20)
