from __future__ import annotations

from typing import Callable

from github_trending.panes import PaneController

Action = Callable[[PaneController], bool]

KEY_ACTIONS: dict[str, Action] = {
    "DOWN": PaneController.move_down,
    "j": PaneController.move_down,
    "UP": PaneController.move_up,
    "k": PaneController.move_up,
    "LEFT": PaneController.move_left,
    "h": PaneController.move_left,
    "RIGHT": PaneController.move_right,
    "l": PaneController.move_right,
    "TAB": PaneController.move_right,
    "PGDN": PaneController.page_down,
    "PGUP": PaneController.page_up,
    "HOME": PaneController.move_top,
    "g": PaneController.move_top,
    "END": PaneController.move_bottom,
    "G": PaneController.move_bottom,
    "ENTER": PaneController.open_selected,
    "o": PaneController.open_selected,
    "q": PaneController.quit,
    "QUIT": PaneController.quit,
}


def dispatch(controller: PaneController, key: str) -> bool:
    """Run the action bound to ``key``. Returns False for unbound keys."""
    action = KEY_ACTIONS.get(key)
    if action is None:
        return False
    action(controller)
    return True
