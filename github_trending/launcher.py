from __future__ import annotations

import shlex
import subprocess
import sys
import webbrowser
from typing import Callable

from github_trending.errors import LaunchError

Runner = Callable[[list[str]], int]


def run_command(argv: list[str]) -> int:
    completed = subprocess.run(
        argv,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        check=False,
    )
    return completed.returncode


def default_command(platform: str | None = None) -> list[str]:
    platform = platform or sys.platform
    if platform.startswith("win"):
        return ["cmd", "/c", "start", ""]
    if platform == "darwin":
        return ["open"]
    return ["xdg-open"]


def open_url(
    url: str,
    command: str = "",
    runner: Runner = run_command,
    platform: str | None = None,
    use_webbrowser: bool = True,
) -> str:
    """Open ``url`` with the first launcher that works.

    Tries the configured ``command`` first, then the platform default handler,
    then the ``webbrowser`` module. Returns a short description of the
    launcher that succeeded; raises ``LaunchError`` when all of them failed.
    """
    clean_url = url.strip()
    if not clean_url:
        raise LaunchError(url, ["empty URL"])

    attempts: list[str] = []
    chain: list[list[str]] = []
    if command.strip():
        try:
            chain.append(shlex.split(command))
        except ValueError as exc:
            attempts.append(f"{command}: {exc}")
    chain.append(default_command(platform))

    for argv in chain:
        label = " ".join(argv)
        try:
            returncode = runner([*argv, clean_url])
        except OSError as exc:
            attempts.append(f"{label}: {exc.strerror or exc}")
            continue
        if returncode == 0:
            return label
        attempts.append(f"{label}: exit status {returncode}")

    if use_webbrowser:
        try:
            if webbrowser.open(clean_url, new=2):
                return "webbrowser"
            attempts.append("webbrowser: no usable browser")
        except webbrowser.Error as exc:
            attempts.append(f"webbrowser: {exc}")

    raise LaunchError(clean_url, attempts)
