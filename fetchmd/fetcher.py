"""Download a page and pull its main readable content into an Article."""

from __future__ import annotations

from typing import Any, Optional

import requests

try:
    from bs4 import BeautifulSoup  # type: ignore[import-not-found]
except ImportError as exc:
    raise SystemExit(
        "Missing dependency 'beautifulsoup4'. Install with pip install"
        " beautifulsoup4"
    ) from exc

try:
    from readability import Document  # type: ignore[import-not-found]
    from readability.readability import (  # type: ignore[import-not-found]
        Unparseable,
    )
except ImportError as exc:
    raise SystemExit(
        "Missing dependency 'readability-lxml'. Install with pip install"
        " readability-lxml"
    ) from exc

from .errors import ExtractionError, FetchTimeoutError, NetworkError
from .models import Article, ProcessOptions

NO_TITLE_PLACEHOLDER = "[no-title]"


def _meta_content(soup: Any, *keys: str) -> str:
    """Return the first non-empty ``<meta>`` content matching ``keys``."""

    for key in keys:
        for attr in ("name", "property"):
            tag = soup.find("meta", attrs={attr: key})
            if tag is not None and tag.get("content"):
                return str(tag["content"]).strip()
    return ""


def parse_article(html: str | bytes, url: Optional[str] = None) -> Article:
    """Run readability over ``html`` and collect the page metadata.

    Raw bytes are decoded by readability and BeautifulSoup themselves,
    honouring the page's ``<meta charset>``.
    """

    try:
        document = Document(html, url=url)
        content: str = document.summary(html_partial=True)
        title: str = document.short_title()
    except Unparseable as exc:
        raise ExtractionError(f"Failed to parse article: {exc}") from exc

    text_content = BeautifulSoup(content, "lxml").get_text()
    if not text_content.strip():
        raise ExtractionError("Failed to parse article: no readable content")

    page: Any = BeautifulSoup(html, "lxml")
    html_tag = page.find("html")
    direction = html_tag.get("dir", "") if html_tag is not None else ""

    return Article(
        title="" if title == NO_TITLE_PLACEHOLDER else title.strip(),
        content=content,
        text_content=text_content,
        length=len(text_content),
        excerpt=_meta_content(page, "description", "og:description"),
        byline=_meta_content(page, "author", "article:author"),
        dir=str(direction),
        site_name=_meta_content(page, "og:site_name"),
    )


def fetch_html(
    url: str,
    options: ProcessOptions,
    session: requests.Session,
) -> str | bytes:
    """GET ``url`` once and return the response body.

    The body comes back as text only when the ``Content-Type`` header
    names a charset; otherwise requests would fall back to ISO-8859-1, so
    the raw bytes are returned for the parsers to decode. ``timeout``
    bounds the connect and each socket read, not the whole download.
    """

    try:
        response = session.get(
            url,
            headers={"User-Agent": options.user_agent},
            timeout=options.timeout,
        )
    except requests.Timeout as exc:
        raise FetchTimeoutError(
            f"No response within {options.timeout:g}s"
        ) from exc
    except requests.RequestException as exc:
        raise NetworkError(str(exc)) from exc

    if not response.ok:
        raise NetworkError(
            f"HTTP error! status: {response.status_code}",
            status_code=response.status_code,
        )
    if "charset=" not in response.headers.get("Content-Type", "").lower():
        return response.content
    return response.text


def fetch_article(
    url: str,
    options: ProcessOptions,
    *,
    session: Optional[requests.Session] = None,
) -> Article:
    """Fetch ``url`` and return its extracted article.

    A throwaway session is opened when the caller does not supply one.
    """

    if session is None:
        with requests.Session() as own_session:
            html = fetch_html(url, options, own_session)
    else:
        html = fetch_html(url, options, session)
    return parse_article(html, url)


__all__ = ["fetch_article", "fetch_html", "parse_article"]
