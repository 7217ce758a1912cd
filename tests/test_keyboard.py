import pytest

from formmapper.state.positions import Direction
from formmapper.viewer.keyboard import KeyCommand, NavigateTo, arrow_step, resolve_key


def test_arrow_steps():
    assert arrow_step(False) == 0.5
    assert arrow_step(True) == 5


@pytest.mark.parametrize(
    ("key", "direction"),
    [
        ("ArrowUp", Direction.UP),
        ("ArrowDown", Direction.DOWN),
        ("ArrowLeft", Direction.LEFT),
        ("ArrowRight", Direction.RIGHT),
    ],
)
def test_arrow_keys_move_in_edit_mode(key, direction):
    assert resolve_key(key) == KeyCommand(direction=direction, step=0.5)
    assert resolve_key(key, shift=True) == KeyCommand(direction=direction, step=5)


def test_arrow_keys_ignored_in_fill_mode():
    assert resolve_key("ArrowUp", edit_mode=False) is None


def test_tab_navigates_in_any_mode():
    assert resolve_key("Tab").navigate is NavigateTo.NEXT
    assert resolve_key("Tab", shift=True, edit_mode=False).navigate is NavigateTo.PREV


def test_other_keys_are_ignored():
    assert resolve_key("a") is None
    assert resolve_key("Enter", shift=True) is None
