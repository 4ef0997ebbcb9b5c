"""Terminal browser for GitHub trending repositories grouped by language."""

__version__ = "0.3.0"
