"""Canned pages and HTTP stand-ins shared by the tests."""

from __future__ import annotations

from typing import Optional

import requests

ARTICLE_HTML = """<!DOCTYPE html>
<html lang="en" dir="ltr">
  <head>
    <title>Test Article</title>
    <meta name="description" content="A short summary of the article.">
    <meta name="author" content="Jane Roe">
    <meta property="og:site_name" content="Example News">
  </head>
  <body>
    <nav><a href="/">Home</a> <a href="/about">About</a></nav>
    <main>
      <h1>Article Headline</h1>
      <p>This is a test article content. It carries enough words for the
      readability scorer to treat this block as the main story of the page.</p>
      <p>A second paragraph keeps going with more readable text, so the
      extracted article has a clear body, with commas, and sentences.</p>
    </main>
    <footer>Copyright Example</footer>
  </body>
</html>
"""

SECOND_ARTICLE_HTML = ARTICLE_HTML.replace(
    "Article Headline", "Second Article Headline"
).replace(
    "This is a test article content.", "This is the second article content."
)


class StubResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(self, text: str, status_code: int = 200):
        self.text = text
        self.content = text.encode("utf-8")
        self.status_code = status_code
        self.headers = {"Content-Type": "text/html; charset=utf-8"}

    @property
    def ok(self) -> bool:
        return self.status_code < 400


class StubSession:
    """Records GET calls and answers them from a URL -> page mapping.

    A mapped exception is raised, a ``StubResponse`` is returned as is, a
    string becomes a 200 response, and unknown URLs answer 404.
    """

    def __init__(self, pages: Optional[dict] = None):
        self.pages = dict(pages or {})
        self.calls: list[dict] = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        page = self.pages.get(url)
        if isinstance(page, BaseException):
            raise page
        if isinstance(page, (StubResponse, requests.Response)):
            return page
        if page is None:
            return StubResponse("Not Found", status_code=404)
        return StubResponse(page)

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
        return False
