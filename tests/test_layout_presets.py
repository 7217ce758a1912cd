import pytest

from formmapper.model.field import FieldPosition
from formmapper.state.positions import (
    Axis,
    HorizontalAlignment,
    VerticalAlignment,
    align_horizontal,
    align_vertical,
    distribute_evenly,
    snap_all_to_grid,
    snap_to_grid,
)

NO_DEFAULTS = {}


@pytest.fixture
def row():
    return {
        "a": FieldPosition(top=10, left=20, width="10%", height="4%"),
        "b": FieldPosition(top=30, left=40, width="20%", height="10%"),
    }


@pytest.mark.parametrize(
    ("position", "grid", "expected"),
    [
        (FieldPosition(top=12.4, left=17.5), 5, FieldPosition(top=10, left=20)),
        (FieldPosition(top=98.9, left=0.4), 5, FieldPosition(top=100, left=0)),
        (FieldPosition(top=95, left=95), 60, FieldPosition(top=100, left=100)),
        (FieldPosition(top=12.4, left=17.5), 0, FieldPosition(top=10, left=20)),
    ],
)
def test_snap_to_grid_rounds_and_clamps(position, grid, expected):
    assert snap_to_grid(position, grid) == expected


def test_snap_keeps_geometry():
    snapped = snap_to_grid(FieldPosition(top=3, left=8, width="12%", height="2%"))

    assert snapped == FieldPosition(top=5, left=10, width="12%", height="2%")


def test_snap_all_only_touches_named_fields(row):
    result = snap_all_to_grid(row, ["a", "missing"], 25, defaults=NO_DEFAULTS)

    assert result["a"] == FieldPosition(top=0, left=25, width="10%", height="4%")
    assert result["b"] == row["b"]
    assert "missing" not in result
    assert row["a"].top == 10


def test_snap_all_without_known_fields_returns_same_map(row):
    assert snap_all_to_grid(row, ["missing"], defaults=NO_DEFAULTS) is row
    assert snap_all_to_grid(row, [], defaults=NO_DEFAULTS) is row


@pytest.mark.parametrize(
    ("alignment", "a_left", "b_left"),
    [
        (HorizontalAlignment.LEFT, 20, 20),
        (HorizontalAlignment.RIGHT, 50, 40),
        (HorizontalAlignment.CENTER, 35, 30),
    ],
)
def test_align_horizontal_uses_widths(row, alignment, a_left, b_left):
    result = align_horizontal(row, ["a", "b"], alignment, defaults=NO_DEFAULTS)

    assert result["a"].left == pytest.approx(a_left)
    assert result["b"].left == pytest.approx(b_left)
    assert result["a"].top == 10
    assert result["b"].width == "20%"


def test_align_center_treats_missing_width_as_zero(row):
    row["c"] = FieldPosition(top=50, left=5)

    result = align_horizontal(row, ["a", "c"], "center", defaults=NO_DEFAULTS)

    assert result["c"].left == pytest.approx(17.5)
    assert result["a"].left == pytest.approx(12.5)


@pytest.mark.parametrize(
    ("alignment", "a_top", "b_top"),
    [
        (VerticalAlignment.TOP, 10, 10),
        (VerticalAlignment.BOTTOM, 36, 30),
        (VerticalAlignment.MIDDLE, 23, 20),
    ],
)
def test_align_vertical_uses_heights(row, alignment, a_top, b_top):
    result = align_vertical(row, ["a", "b"], alignment, defaults=NO_DEFAULTS)

    assert result["a"].top == pytest.approx(a_top)
    assert result["b"].top == pytest.approx(b_top)
    assert result["a"].left == 20


def test_align_reads_default_positions():
    defaults = {"x": FieldPosition(top=10, left=30), "y": FieldPosition(top=20, left=60)}

    result = align_vertical({}, ["x", "y"], "top", defaults=defaults)

    assert result == {"x": FieldPosition(top=10, left=30), "y": FieldPosition(top=10, left=60)}


def test_align_rejects_unknown_alignment(row):
    with pytest.raises(ValueError):
        align_horizontal(row, ["a", "b"], "justify", defaults=NO_DEFAULTS)


def test_align_without_known_fields_returns_same_map(row):
    assert align_vertical(row, ["nope"], "top", defaults=NO_DEFAULTS) is row


def test_distribute_needs_three_fields(row):
    assert distribute_evenly(row, ["a", "b"], Axis.HORIZONTAL, defaults=NO_DEFAULTS) is row
    assert distribute_evenly(row, ["a", "b", "missing"], Axis.VERTICAL, defaults=NO_DEFAULTS) is row


def test_distribute_horizontally_between_outermost():
    positions = {
        "a": FieldPosition(top=5, left=10),
        "b": FieldPosition(top=6, left=70),
        "c": FieldPosition(top=7, left=20, width="3%"),
    }

    result = distribute_evenly(positions, ["b", "c", "a", "ghost"], "horizontal", defaults=NO_DEFAULTS)

    assert result["a"] == FieldPosition(top=5, left=10)
    assert result["c"] == FieldPosition(top=7, left=40, width="3%")
    assert result["b"] == FieldPosition(top=6, left=70)


def test_distribute_vertically():
    positions = {name: FieldPosition(top=top, left=1) for name, top in zip("abcd", (0, 5, 50, 90))}

    result = distribute_evenly(positions, list("abcd"), Axis.VERTICAL, defaults=NO_DEFAULTS)

    assert [result[name].top for name in "abcd"] == pytest.approx([0, 30, 60, 90])
    assert all(result[name].left == 1 for name in "abcd")
    assert positions["b"].top == 5
