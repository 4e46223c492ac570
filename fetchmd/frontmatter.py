"""Render an extracted article as Markdown with a YAML frontmatter header."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

try:
    from markdownify import markdownify as md  # type: ignore[import-not-found]
except ImportError as exc:
    raise SystemExit(
        "Missing dependency 'markdownify'. Install with pip install"
        " markdownify"
    ) from exc

from .errors import ConversionError
from .models import Article

EMPTY_TITLE = "(none)"

RE_LINE_BREAKS = re.compile(r"\s*[\r\n]+\s*")


def _now_iso(now: Optional[datetime] = None) -> str:
    """Return a UTC timestamp with millisecond precision and a ``Z`` suffix."""

    moment = now or datetime.now(timezone.utc)
    return (
        moment.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def _quote(value: str) -> str:
    """Escape ``value`` for a single-line double-quoted YAML scalar."""

    value = RE_LINE_BREAKS.sub(" ", value)
    return value.replace("\\", "\\\\").replace('"', '\\"')


def build_frontmatter(
    article: Article, url: str, *, now: Optional[datetime] = None
) -> str:
    """Return the ``---`` delimited metadata block for ``article``."""

    lines: list[str] = [
        "---",
        f'title: "{_quote(article.title) or EMPTY_TITLE}"',
        f"url: {url}",
        f'fetchDate: "{_now_iso(now)}"',
    ]
    if article.byline:
        lines.append(f'author: "{_quote(article.byline)}"')
    if article.excerpt:
        lines.append(f'description: "{_quote(article.excerpt)}"')
    lines.append("---")
    return "\n".join(lines)


def html_to_markdown(html: str) -> str:
    """Convert an HTML fragment into Markdown with ATX headings."""

    try:
        markdown_text: str = md(html, heading_style="ATX")
    except (AttributeError, RecursionError, TypeError, ValueError) as exc:
        raise ConversionError(f"Markdown conversion failed: {exc}") from exc
    return markdown_text.strip()


def compose_document(
    article: Article, url: str, *, now: Optional[datetime] = None
) -> str:
    """Return the full Markdown document stored for ``url``.

    ``now`` pins the ``fetchDate`` value; it defaults to the current time.
    """

    frontmatter = build_frontmatter(article, url, now=now)
    return f"{frontmatter}\n\n{html_to_markdown(article.content)}"


__all__ = ["build_frontmatter", "compose_document", "html_to_markdown"]
