from __future__ import annotations

import argparse
import sys
from functools import partial
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.live import Live
from rich.markup import escape

from github_trending import __version__
from github_trending.config import AppConfig, edit_config, load_config
from github_trending.dispatcher import dispatch
from github_trending.errors import ConfigError, UIInitError
from github_trending.fetcher import build_store
from github_trending.panes import PaneController
from github_trending.provider import fetch_trending
from github_trending.render import build_screen, visible_rows
from github_trending.store import CategoryStore
from github_trending.terminal import KeyReader

DEADLINE_GRACE_SECONDS = 5.0
KEY_POLL_SECONDS = 0.5


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="github-trending",
        description="Browse GitHub trending repositories by language.",
    )
    parser.add_argument("-c", "--configure", action="store_true", help="edit the config file")
    parser.add_argument("--config", type=Path, default=None, help="path to config.toml")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def preload(config: AppConfig, err_console: Console) -> CategoryStore:
    def report(message: str) -> None:
        err_console.print(f"[yellow]Fetch error:[/yellow] {escape(message)}")

    with err_console.status(f"Fetching trending repositories ({len(config.languages)} languages)..."):
        return build_store(
            config.languages,
            partial(fetch_trending, timeout_seconds=config.timeout_seconds),
            deadline_seconds=config.timeout_seconds + DEADLINE_GRACE_SECONDS,
            on_error=report,
        )


def interact(controller: PaneController, console: Console, reader: KeyReader) -> int:
    last_drawn: tuple[int, int, int] | None = None
    try:
        live = Live(
            console=console,
            screen=True,
            auto_refresh=False,
            vertical_overflow="crop",
        )
        live.start()
    except Exception as exc:
        raise UIInitError(f"Cannot start terminal UI: {exc}") from exc

    try:
        while not controller.finished:
            width, height = console.size
            controller.resize(*visible_rows(height))
            frame = (controller.revision, width, height)
            if frame != last_drawn:
                live.update(build_screen(controller, width, height), refresh=True)
                last_drawn = frame

            key = reader.read_key(timeout=KEY_POLL_SECONDS)
            if key is None:
                continue
            dispatch(controller, key)
    finally:
        live.stop()
    return 0


def run(config: AppConfig, console: Console, err_console: Console) -> int:
    store = preload(config, err_console)
    with KeyReader() as reader:
        controller = PaneController(store, open_command=config.browser)
        return interact(controller, console, reader)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    console = Console()
    err_console = Console(stderr=True)
    args = parse_args(argv if argv is not None else sys.argv[1:])

    if args.configure:
        try:
            edit_config(args.config)
        except ConfigError as exc:
            err_console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
            return 1
        return 0

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        return 1

    if not config.languages:
        console.print(f"Please specify languages in {config.path}.")
        return 0

    try:
        return run(config, console, err_console)
    except UIInitError as exc:
        err_console.print(f"[red]Terminal error:[/red] {escape(str(exc))}")
        return 1
    except KeyboardInterrupt:
        console.print("\n[bold]Stopped.[/bold]")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
