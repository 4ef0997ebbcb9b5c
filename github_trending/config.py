"""Configuration file handling.

The config lives in ``config.toml`` inside the platform user config directory
and is created with defaults on first run. ``GITHUB_TRENDING_CONFIG`` (from
the environment or a ``.env`` file) points at an alternative file.
"""

from __future__ import annotations

import os
import shlex
import subprocess
import tomllib
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from github_trending.errors import ConfigError
from github_trending.provider import DEFAULT_TIMEOUT_SECONDS
from github_trending.store import ALL_CATEGORY

APP_NAME = "github-trending"
CONFIG_FILENAME = "config.toml"
CONFIG_ENV_VAR = "GITHUB_TRENDING_CONFIG"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_BROWSER = "google-chrome"
DEFAULT_EDITOR = "vim"

DEFAULT_CONFIG_TEXT = f"""\
# Languages shown in the left pane, in this order. "{ALL_CATEGORY}" means every language.
languages = ["{ALL_CATEGORY}"]

# Command used to open a repository. The URL is appended as the last argument.
browser = "{DEFAULT_BROWSER}"

# Seconds to wait for each trending page.
timeout_seconds = {DEFAULT_TIMEOUT_SECONDS:g}
"""


@dataclass(frozen=True)
class AppConfig:
    languages: tuple[str, ...]
    browser: str
    timeout_seconds: float
    path: Path


def config_path() -> Path:
    override = os.getenv(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH


def ensure_config(path: Path) -> Path:
    if path.exists():
        return path
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(DEFAULT_CONFIG_TEXT, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot create {path}: {exc}") from exc
    return path


def parse_config(data: dict[str, object], path: Path) -> AppConfig:
    raw_languages = data.get("languages", [])
    if not isinstance(raw_languages, list) or not all(isinstance(v, str) for v in raw_languages):
        raise ConfigError(f"{path}: 'languages' must be a list of strings")
    languages: list[str] = []
    for raw in raw_languages:
        language = raw.strip()
        if language and language not in languages:
            languages.append(language)

    browser = data.get("browser", "")
    if not isinstance(browser, str):
        raise ConfigError(f"{path}: 'browser' must be a string")

    timeout = data.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(f"{path}: 'timeout_seconds' must be a positive number")

    return AppConfig(
        languages=tuple(languages),
        browser=browser.strip(),
        timeout_seconds=float(timeout),
        path=path,
    )


def load_config(path: Path | None = None) -> AppConfig:
    path = ensure_config(path or config_path())
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: {exc}") from exc
    return parse_config(data, path)


def edit_config(path: Path | None = None) -> None:
    path = ensure_config(path or config_path())
    editor = os.environ.get("EDITOR", "").strip() or DEFAULT_EDITOR
    cmd = shlex.split(editor)
    if not cmd:
        raise ConfigError("Cannot edit: $EDITOR is empty.")
    try:
        completed = subprocess.run([*cmd, str(path)], check=False)
    except OSError as exc:
        raise ConfigError(f"Failed to launch editor: {exc}") from exc
    if completed.returncode != 0:
        raise ConfigError(f"Editor exited with status {completed.returncode}")
