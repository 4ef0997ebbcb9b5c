from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

GITHUB_URL = "https://github.com/"
ALL_CATEGORY = "all"


@dataclass(frozen=True)
class Repository:
    name: str
    description: str = ""
    language: str = ""
    stars: str = ""
    stars_today: str = ""

    @property
    def url(self) -> str:
        return GITHUB_URL + self.name

    def list_line(self) -> str:
        if self.description:
            return f"[{self.name}] {self.description}"
        return f"[{self.name}]"


@dataclass(frozen=True)
class CategoryStore:
    """Repositories per category, in the order the provider returned them.

    ``order`` is the declared configuration order and drives both the
    categories pane and the default category. The store is built once by
    ``fetcher.build_store`` and never mutated afterwards.
    """

    order: tuple[str, ...] = ()
    repositories: Mapping[str, tuple[Repository, ...]] = field(default_factory=dict)
    errors: tuple[str, ...] = ()

    @classmethod
    def from_results(
        cls,
        order: Iterable[str],
        results: Mapping[str, Iterable[Repository]],
        errors: Iterable[str] = (),
    ) -> CategoryStore:
        declared: list[str] = []
        for category in order:
            if category not in declared:
                declared.append(category)
        frozen = {category: tuple(results.get(category, ())) for category in declared}
        return cls(order=tuple(declared), repositories=frozen, errors=tuple(errors))

    def get(self, category: str | None) -> tuple[Repository, ...]:
        if category is None:
            return ()
        return self.repositories.get(category, ())

    def keys(self) -> frozenset[str]:
        return frozenset(self.order)

    def categories(self) -> tuple[str, ...]:
        return self.order

    def default_category(self) -> str | None:
        return self.order[0] if self.order else None

    def __len__(self) -> int:
        return len(self.order)
