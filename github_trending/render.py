from __future__ import annotations

from rich.layout import Layout
from rich.panel import Panel
from rich.text import Text

from github_trending.panes import Focus, PaneController
from github_trending.provider import normalize_text
from github_trending.viewport import Viewport

CATEGORIES_TITLE = "Language"
ITEMS_TITLE = "GitHub Trending"
DETAILS_TITLE = "Details"
CATEGORIES_SELECTED_STYLE = "black on blue"
ITEMS_SELECTED_STYLE = "black on green"
HOTKEYS = "↑↓/jk move | ←→/hl pane | PgUp/PgDn page | Enter/o open | q quit"

# Panel borders take one row at the top and one at the bottom.
BORDER_ROWS = 2
FOOTER_ROWS = 1
MIN_HEIGHT = 10


def truncate(value: str, width: int) -> str:
    if len(value) <= width:
        return value
    if width <= 1:
        return value[:width]
    return f"{value[: width - 1]}…"


def layout_heights(terminal_height: int) -> tuple[int, int, int]:
    """Outer heights of the categories, items and details panels."""
    usable = max(MIN_HEIGHT, terminal_height) - FOOTER_ROWS
    details_height = max(BORDER_ROWS + 1, usable - int(usable * 0.8))
    items_height = usable - details_height
    return usable, items_height, details_height


def visible_rows(terminal_height: int) -> tuple[int, int]:
    """Content rows available to the categories and items viewports."""
    categories_height, items_height, _ = layout_heights(terminal_height)
    return (
        max(1, categories_height - BORDER_ROWS),
        max(1, items_height - BORDER_ROWS),
    )


def render_list(lines: list[str], view: Viewport, selected_style: str) -> Text:
    text = Text(no_wrap=True, overflow="ellipsis")
    for index in view.visible_range():
        if index > view.origin:
            text.append("\n")
        style = selected_style if index == view.cursor else ""
        text.append(lines[index], style=style)
    return text


def render_list_panel(
    title: str,
    lines: list[str],
    view: Viewport,
    selected_style: str,
    focused: bool,
) -> Panel:
    if lines:
        body = render_list(lines, view, selected_style)
    else:
        body = Text("Nothing to show.", style="dim")
    return Panel(
        body,
        title=title,
        title_align="left",
        border_style="bright_cyan" if focused else "cyan",
        padding=(0, 0),
    )


def render_details_panel(lines: list[str]) -> Panel:
    return Panel(
        Text("\n".join(lines)),
        title=DETAILS_TITLE,
        title_align="left",
        border_style="cyan",
        padding=(0, 0),
    )


def summarize_fetch_errors(errors: tuple[str, ...], max_chars: int) -> str:
    """One line naming how many languages failed, followed by their messages."""
    messages = [normalize_text(message) for message in errors]
    messages = [message for message in messages if message]
    if not messages:
        return ""
    noun = "language" if len(messages) == 1 else "languages"
    return truncate(f"{len(messages)} {noun} failed to load: {'; '.join(messages)}", max_chars)


def render_footer(controller: PaneController, terminal_width: int) -> Text:
    max_chars = max(20, terminal_width - 1)
    if controller.status_message:
        style = "bold red" if controller.status_is_error else "bold green"
        return Text(truncate(controller.status_message, max_chars), style=style)
    summary = summarize_fetch_errors(
        controller.store.errors,
        max(20, max_chars - len(HOTKEYS) - 3),
    )
    if not summary:
        return Text(truncate(HOTKEYS, max_chars), style="cyan")
    return Text(truncate(f"{summary} | {HOTKEYS}", max_chars), style="yellow")


def build_screen(controller: PaneController, terminal_width: int, terminal_height: int) -> Layout:
    categories_height, items_height, details_height = layout_heights(terminal_height)

    categories_panel = render_list_panel(
        CATEGORIES_TITLE,
        list(controller.categories()),
        controller.categories_view,
        CATEGORIES_SELECTED_STYLE,
        focused=controller.focus is Focus.CATEGORIES,
    )
    items_panel = render_list_panel(
        ITEMS_TITLE,
        [item.list_line() for item in controller.items()],
        controller.items_view,
        ITEMS_SELECTED_STYLE,
        focused=controller.focus is Focus.ITEMS,
    )
    details_panel = render_details_panel(controller.details())

    right_layout = Layout(name="right")
    right_layout.split_column(
        Layout(items_panel, name="items", size=items_height),
        Layout(details_panel, name="details", size=details_height),
    )
    body_layout = Layout(name="body", size=categories_height)
    body_layout.split_row(
        Layout(categories_panel, name="categories", ratio=1),
        Layout(right_layout, name="right", ratio=4),
    )
    root_layout = Layout(name="root")
    root_layout.split_column(
        body_layout,
        Layout(render_footer(controller, terminal_width), name="footer", size=FOOTER_ROWS),
    )
    return root_layout
