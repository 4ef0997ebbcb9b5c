from __future__ import annotations


class TrendingError(Exception):
    """Base class for errors raised by github-trending."""


class FetchError(TrendingError):
    """A single category could not be fetched or parsed. Never fatal."""

    def __init__(self, category: str, message: str) -> None:
        super().__init__(f"{category}: {message}")
        self.category = category
        self.message = message


class LaunchError(TrendingError):
    """Every launcher in the fallback chain failed. Never fatal."""

    def __init__(self, url: str, attempts: list[str]) -> None:
        detail = "; ".join(attempts) if attempts else "no launcher available"
        super().__init__(f"Failed to open {url} ({detail})")
        self.url = url
        self.attempts = attempts


class UIInitError(TrendingError):
    """The terminal could not be prepared for the interactive session."""


class ConfigError(TrendingError):
    """Configuration is missing or invalid."""
