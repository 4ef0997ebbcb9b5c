from __future__ import annotations

import subprocess
import sys
import textwrap
import threading
import time
import unittest
from pathlib import Path

from github_trending.errors import FetchError
from github_trending.fetcher import build_store
from github_trending.store import CategoryStore, Repository

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _repo(name: str) -> Repository:
    return Repository(name=name, description=f"about {name}")


class CategoryStoreTests(unittest.TestCase):
    def test_get_unknown_category_is_empty(self) -> None:
        store = CategoryStore.from_results(["go"], {"go": [_repo("a/b")]})
        self.assertEqual(store.get("rust"), ())
        self.assertEqual(store.get(None), ())

    def test_declared_order_drives_default_and_keys(self) -> None:
        store = CategoryStore.from_results(["rust", "all", "go", "rust"], {})
        self.assertEqual(store.categories(), ("rust", "all", "go"))
        self.assertEqual(store.default_category(), "rust")
        self.assertEqual(store.keys(), frozenset({"rust", "all", "go"}))
        self.assertIsNone(CategoryStore().default_category())

    def test_repository_url_and_list_line(self) -> None:
        repo = Repository(name="owner/name", description="Fast thing")
        self.assertEqual(repo.url, "https://github.com/owner/name")
        self.assertEqual(repo.list_line(), "[owner/name] Fast thing")
        self.assertEqual(Repository(name="x/y").list_line(), "[x/y]")


class BuildStoreTests(unittest.TestCase):
    def test_preserves_provider_order_per_category(self) -> None:
        pages = {
            "go": [_repo("z/last"), _repo("a/first"), _repo("m/middle")],
            "rust": [_repo("b/two"), _repo("a/one")],
        }
        store = build_store(["go", "rust"], lambda category: pages[category])
        self.assertEqual([r.name for r in store.get("go")], ["z/last", "a/first", "m/middle"])
        self.assertEqual([r.name for r in store.get("rust")], ["b/two", "a/one"])
        self.assertEqual(store.errors, ())

    def test_one_failed_category_does_not_affect_the_other(self) -> None:
        def fetch(category: str) -> list[Repository]:
            if category == "rust":
                raise FetchError(category, "HTTP 503")
            return [_repo("c/3"), _repo("a/1"), _repo("b/2")]

        reported: list[str] = []
        store = build_store(["go", "rust"], fetch, on_error=reported.append)

        self.assertEqual(store.get("rust"), ())
        self.assertEqual([r.name for r in store.get("go")], ["c/3", "a/1", "b/2"])
        self.assertEqual(store.categories(), ("go", "rust"))
        self.assertEqual(reported, ["rust: HTTP 503"])
        self.assertEqual(store.errors, ("rust: HTTP 503",))

    def test_unexpected_exception_is_recorded_like_a_fetch_error(self) -> None:
        def fetch(category: str) -> list[Repository]:
            raise ValueError("bad <b>markup</b>")

        store = build_store(["all"], fetch)
        self.assertEqual(store.get("all"), ())
        self.assertEqual(store.errors, ("all: bad markup",))

    def test_fetches_run_concurrently(self) -> None:
        barrier = threading.Barrier(3, timeout=5)

        def fetch(category: str) -> list[Repository]:
            barrier.wait()
            return [_repo(f"{category}/x")]

        store = build_store(["a", "b", "c"], fetch)
        self.assertEqual(store.errors, ())
        self.assertEqual(len(store), 3)

    def test_every_category_fetches_at_the_same_time(self) -> None:
        languages = [f"lang{i}" for i in range(12)]
        barrier = threading.Barrier(len(languages), timeout=5)

        def fetch(category: str) -> list[Repository]:
            barrier.wait()
            return [_repo(f"{category}/x")]

        store = build_store(languages, fetch)
        self.assertEqual(store.errors, ())
        self.assertEqual([len(store.get(language)) for language in languages], [1] * 12)

    def test_many_slow_categories_finish_within_one_deadline(self) -> None:
        languages = [f"lang{i}" for i in range(10)]

        def fetch(category: str) -> list[Repository]:
            time.sleep(0.4)
            return [_repo(f"{category}/x")]

        store = build_store(languages, fetch, deadline_seconds=1.5)
        self.assertEqual(store.errors, ())
        self.assertTrue(all(store.get(language) for language in languages))

    def test_expired_fetch_does_not_delay_process_exit(self) -> None:
        script = textwrap.dedent(
            """
            import time
            from github_trending.fetcher import build_store

            def fetch(category):
                time.sleep(30)
                return []

            store = build_store(["slow"], fetch, deadline_seconds=0.1)
            assert store.get("slow") == ()
            """
        )
        started = time.monotonic()
        completed = subprocess.run(
            [sys.executable, "-c", script],
            cwd=PROJECT_ROOT,
            capture_output=True,
            text=True,
            timeout=20,
        )
        elapsed = time.monotonic() - started
        self.assertEqual(completed.returncode, 0, completed.stderr)
        self.assertLess(elapsed, 10)

    def test_duplicate_categories_are_fetched_once(self) -> None:
        calls: list[str] = []
        lock = threading.Lock()

        def fetch(category: str) -> list[Repository]:
            with lock:
                calls.append(category)
            return []

        build_store(["go", "go", "all"], fetch)
        self.assertEqual(sorted(calls), ["all", "go"])

    def test_deadline_turns_slow_fetch_into_empty_category(self) -> None:
        release = threading.Event()

        def fetch(category: str) -> list[Repository]:
            if category == "slow":
                release.wait(5)
            return [_repo(f"{category}/x")]

        try:
            started = time.monotonic()
            store = build_store(["fast", "slow"], fetch, deadline_seconds=0.2)
            elapsed = time.monotonic() - started
        finally:
            release.set()

        self.assertLess(elapsed, 4)
        self.assertEqual(store.get("slow"), ())
        self.assertEqual([r.name for r in store.get("fast")], ["fast/x"])
        self.assertEqual(store.errors, ("slow: timed out after 0.2s",))

    def test_no_categories_builds_empty_store(self) -> None:
        store = build_store([], lambda category: [])
        self.assertEqual(store.categories(), ())


if __name__ == "__main__":
    unittest.main()
