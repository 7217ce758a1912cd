"""Map raw key presses to field move and navigation commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from formmapper import config
from formmapper.state.positions import Direction

ARROW_DIRECTIONS: dict[str, Direction] = {
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
}


class NavigateTo(str, Enum):
    NEXT = "next"
    PREV = "prev"


@dataclass(slots=True, frozen=True)
class KeyCommand:
    direction: Direction | None = None
    step: float = 0.0
    navigate: NavigateTo | None = None


def arrow_step(accelerated: bool) -> float:
    return config.ARROW_STEP_FAST if accelerated else config.ARROW_STEP


def resolve_key(key: str, shift: bool = False, edit_mode: bool = True) -> KeyCommand | None:
    if key == "Tab":
        return KeyCommand(navigate=NavigateTo.PREV if shift else NavigateTo.NEXT)

    direction = ARROW_DIRECTIONS.get(key)
    if direction is None or not edit_mode:
        return None
    return KeyCommand(direction=direction, step=arrow_step(shift))
