"""Pane synchronization for the languages / repositories / details panes.

``PaneController`` is the session object for the interactive phase. It owns
the selection (focus, active category, active repository) and the two
scrollable viewports, and it is the only thing that mutates them. The
details pane has no state of its own: it is derived from the current
selection every time it is read.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable

from github_trending.errors import LaunchError
from github_trending.launcher import open_url
from github_trending.store import CategoryStore, Repository
from github_trending.viewport import Viewport

Launcher = Callable[[str, str], str]


class Focus(Enum):
    CATEGORIES = "categories"
    ITEMS = "items"


class PaneController:
    def __init__(
        self,
        store: CategoryStore,
        open_command: str = "",
        launcher: Launcher = open_url,
        categories_height: int = 20,
        items_height: int = 20,
    ) -> None:
        self.store = store
        self.open_command = open_command
        self.launcher = launcher
        self.focus = Focus.CATEGORIES
        self.categories_view = Viewport(height=categories_height, length=len(store.categories()))
        self.active_category = store.default_category()
        self.items_view = Viewport(height=items_height, length=len(self.items()))
        self.status_message = ""
        self.status_is_error = False
        self.finished = False
        self.revision = 0

    @property
    def active_item_index(self) -> int:
        return self.items_view.cursor

    def categories(self) -> tuple[str, ...]:
        return self.store.categories()

    def items(self) -> tuple[Repository, ...]:
        return self.store.get(self.active_category)

    def current_item(self) -> Repository | None:
        items = self.items()
        index = self.items_view.cursor
        if 0 <= index < len(items):
            return items[index]
        return None

    def details(self) -> list[str]:
        """Details pane lines for the current repository; empty when none."""
        item = self.current_item()
        if item is None:
            return []
        lines = [f"{item.language or '-'} 🌟{item.stars or '0'}"]
        if item.stars_today:
            lines.append(item.stars_today)
        if item.description:
            lines.append(item.description)
        lines.append(item.url)
        return lines

    def move_down(self) -> bool:
        return self._move_focused(1)

    def move_up(self) -> bool:
        return self._move_focused(-1)

    def page_down(self) -> bool:
        return self._move_focused(self._focused_view().height)

    def page_up(self) -> bool:
        return self._move_focused(-self._focused_view().height)

    def move_top(self) -> bool:
        return self._jump_focused(0)

    def move_bottom(self) -> bool:
        return self._jump_focused(self._focused_view().last_index())

    def move_left(self) -> bool:
        return self._set_focus(Focus.CATEGORIES)

    def move_right(self) -> bool:
        return self._set_focus(Focus.ITEMS)

    def open_selected(self) -> bool:
        """Open the selected repository in a browser.

        Only acts when the repositories pane has focus and a repository is
        selected. Launch failures become a status message; the session goes on.
        """
        if self.focus is not Focus.ITEMS:
            return False
        item = self.current_item()
        if item is None:
            return False
        try:
            self.launcher(item.url, self.open_command)
        except LaunchError as exc:
            self._set_status(str(exc), error=True)
            return False
        self._set_status(f"Opened {item.name}")
        return True

    def quit(self) -> bool:
        self.finished = True
        return True

    def resize(self, categories_height: int, items_height: int) -> None:
        if (categories_height, items_height) == (self.categories_view.height, self.items_view.height):
            return
        self.categories_view.set_height(categories_height)
        self.items_view.set_height(items_height)
        self.revision += 1

    def _focused_view(self) -> Viewport:
        if self.focus is Focus.CATEGORIES:
            return self.categories_view
        return self.items_view

    def _move_focused(self, delta: int) -> bool:
        if not self._focused_view().move(delta):
            return False
        return self._cursor_moved()

    def _jump_focused(self, index: int) -> bool:
        view = self._focused_view()
        if view.length == 0 or not view.set_cursor(index):
            return False
        return self._cursor_moved()

    def _cursor_moved(self) -> bool:
        view = self._focused_view()
        if self.focus is Focus.CATEGORIES:
            self._select_category(self.categories()[view.cursor])
        self._changed()
        return True

    def _select_category(self, category: str) -> None:
        self.active_category = category
        self.items_view.reset(length=len(self.store.get(category)))

    def _set_focus(self, focus: Focus) -> bool:
        if self.focus is focus:
            return False
        self.focus = focus
        self._changed()
        return True

    def _set_status(self, message: str, error: bool = False) -> None:
        self.status_message = message
        self.status_is_error = error
        self.revision += 1

    def _changed(self) -> None:
        self.status_message = ""
        self.status_is_error = False
        self.revision += 1
