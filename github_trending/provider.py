from __future__ import annotations

import html
import re
from typing import Any
from urllib.parse import quote

import requests

from github_trending.errors import FetchError
from github_trending.store import ALL_CATEGORY, GITHUB_URL, Repository

TRENDING_URL = GITHUB_URL + "trending"
DEFAULT_TIMEOUT_SECONDS = 20.0
USER_AGENT = "github-trending (+https://github.com/trending)"

HTML_TAG_RE = re.compile(r"<[^>]+>")
WHITESPACE_RE = re.compile(r"\s+")
ARTICLE_RE = re.compile(
    r"<article\b[^>]*class=\"[^\"]*\bBox-row\b[^\"]*\"[^>]*>(.*?)</article>",
    re.DOTALL,
)
HEADING_RE = re.compile(r"<h[12]\b[^>]*>(.*?)</h[12]>", re.DOTALL)
DESCRIPTION_RE = re.compile(r"<p\b[^>]*>(.*?)</p>", re.DOTALL)
LANGUAGE_RE = re.compile(
    r"<span\b[^>]*itemprop=\"programmingLanguage\"[^>]*>(.*?)</span>",
    re.DOTALL,
)
STARS_RE = re.compile(r"<a\b[^>]*href=\"[^\"]*/stargazers\"[^>]*>(.*?)</a>", re.DOTALL)
STARS_TODAY_RE = re.compile(
    r"<span\b[^>]*class=\"[^\"]*\bfloat-sm-right\b[^\"]*\"[^>]*>(.*?)</span>",
    re.DOTALL,
)


def normalize_text(raw: Any) -> str:
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raw = str(raw)
    unescaped = html.unescape(raw)
    no_html = HTML_TAG_RE.sub(" ", unescaped)
    return WHITESPACE_RE.sub(" ", no_html).strip()


def trending_url(category: str) -> str:
    if not category or category == ALL_CATEGORY:
        return TRENDING_URL
    return f"{TRENDING_URL}/{quote(category, safe='')}"


def _first_text(pattern: re.Pattern[str], block: str) -> str:
    match = pattern.search(block)
    if not match:
        return ""
    return normalize_text(match.group(1))


def parse_repository_name(heading: str) -> str:
    parts = [piece.strip() for piece in normalize_text(heading).split("/")]
    if len(parts) < 2 or not parts[0] or not parts[1]:
        return ""
    return f"{parts[0]}/{parts[1]}"


def parse_trending_html(page: str) -> list[Repository]:
    repositories: list[Repository] = []
    for block in ARTICLE_RE.findall(page):
        heading = HEADING_RE.search(block)
        if not heading:
            continue
        name = parse_repository_name(heading.group(1))
        if not name:
            continue
        repositories.append(
            Repository(
                name=name,
                description=_first_text(DESCRIPTION_RE, block),
                language=_first_text(LANGUAGE_RE, block),
                stars=_first_text(STARS_RE, block),
                stars_today=_first_text(STARS_TODAY_RE, block),
            )
        )
    return repositories


def fetch_trending(
    category: str,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    session: requests.Session | None = None,
) -> list[Repository]:
    """Fetch one trending page and return its repositories in page order."""
    url = trending_url(category)
    getter = session.get if session is not None else requests.get
    try:
        response = getter(url, headers={"User-Agent": USER_AGENT}, timeout=timeout_seconds)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise FetchError(category, normalize_text(str(exc))[:160]) from exc
    return parse_trending_html(response.text)
