"""Concurrent preload of every configured category.

Each category is fetched on its own daemon thread. ``build_store`` blocks
until all of them finished or the deadline expired; a failed or expired
category ends up with an empty list and a diagnostic, the others are
unaffected. Threads left behind by the deadline never keep the process alive.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Iterable

from github_trending.errors import FetchError
from github_trending.provider import normalize_text
from github_trending.store import CategoryStore, Repository

FetchItems = Callable[[str], Iterable[Repository]]


def _describe(category: str, exc: BaseException) -> str:
    if isinstance(exc, FetchError):
        return str(exc)
    message = normalize_text(str(exc)) or exc.__class__.__name__
    return f"{category}: {message[:160]}"


def build_store(
    categories: Iterable[str],
    fetch_items: FetchItems,
    deadline_seconds: float | None = None,
    on_error: Callable[[str], None] | None = None,
) -> CategoryStore:
    declared: list[str] = []
    for category in categories:
        if category not in declared:
            declared.append(category)
    if not declared:
        return CategoryStore()

    results: dict[str, tuple[Repository, ...]] = {}
    failures: dict[str, str] = {}
    lock = threading.Lock()

    def fetch_one(category: str) -> None:
        try:
            repositories = tuple(fetch_items(category))
        except Exception as exc:
            with lock:
                failures[category] = _describe(category, exc)
            return
        with lock:
            results[category] = repositories

    workers = [
        threading.Thread(
            target=fetch_one,
            args=(category,),
            name=f"github-trending-fetch-{category}",
            daemon=True,
        )
        for category in declared
    ]
    for worker in workers:
        worker.start()

    expires_at = None if deadline_seconds is None else time.monotonic() + deadline_seconds
    for worker in workers:
        if expires_at is None:
            worker.join()
        else:
            worker.join(max(0.0, expires_at - time.monotonic()))

    with lock:
        for category in declared:
            if category not in results and category not in failures:
                failures[category] = f"{category}: timed out after {deadline_seconds:g}s"
        snapshot = {
            category: () if category in failures else results[category]
            for category in declared
        }
        errors = [failures[category] for category in declared if category in failures]

    if on_error is not None:
        for message in errors:
            on_error(message)

    return CategoryStore.from_results(declared, snapshot, errors)
