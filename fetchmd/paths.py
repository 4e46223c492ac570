"""Deterministic mapping from a source URL to its Markdown file path."""

from __future__ import annotations

import os
import re
from urllib.parse import quote, urlsplit

from .errors import InvalidUrlError

MAX_SLUG_LENGTH = 200

RE_QUERY_SEPARATORS = re.compile(r"[=&]")
RE_UNSAFE_CHARS = re.compile(r"[?#.]")

# Printable ASCII left as is by browsers in each URL component; everything
# else, including non-ASCII text, is percent-encoded as UTF-8. ``%`` is
# kept so existing escapes survive.
PATH_SAFE = "!$%&'()*+,/:;=@[\\]^|~"
QUERY_SAFE = "!$%&()*+,/:;=?@[\\]^`{|}~"
FRAGMENT_SAFE = "!#$%&'()*+,/:;=?@[\\]^{|}~"

SPECIAL_SCHEMES = frozenset({"ftp", "http", "https", "ws", "wss"})
SINGLE_DOT_SEGMENTS = frozenset({".", "%2e"})
DOUBLE_DOT_SEGMENTS = frozenset({"..", ".%2e", "%2e.", "%2e%2e"})


def _remove_dot_segments(path: str) -> str:
    """Resolve ``.`` and ``..`` segments, keeping a trailing slash."""

    segments = path.split("/")[1:]
    output: list[str] = []
    for index, segment in enumerate(segments):
        is_last = index == len(segments) - 1
        lowered = segment.lower()
        if lowered in DOUBLE_DOT_SEGMENTS:
            if output:
                output.pop()
            if is_last:
                output.append("")
        elif lowered in SINGLE_DOT_SEGMENTS:
            if is_last:
                output.append("")
        else:
            output.append(segment)
    return "/" + "/".join(output)


def _ascii_hostname(hostname: str) -> str:
    if hostname.isascii():
        return hostname
    try:
        return hostname.encode("idna").decode("ascii")
    except UnicodeError as exc:
        raise InvalidUrlError(f"Invalid hostname: {hostname!r}") from exc


def _split_url(url: str) -> tuple[str, str, str, str]:
    """Return ``(hostname, path, query, fragment)`` for an absolute URL.

    Components come back the way a browser serialises them: ASCII only,
    percent-encoded, and with dot segments resolved.
    """

    try:
        parsed = urlsplit(url)
        hostname = parsed.hostname
    except ValueError as exc:
        raise InvalidUrlError(f"Invalid URL: {url!r} ({exc})") from exc

    if not parsed.scheme or not hostname:
        raise InvalidUrlError(f"Invalid URL: {url!r}")

    path = parsed.path or "/"
    if parsed.scheme.lower() in SPECIAL_SCHEMES:
        path = path.replace("\\", "/")
    path = _remove_dot_segments(quote(path, safe=PATH_SAFE))

    return (
        _ascii_hostname(hostname),
        path,
        quote(parsed.query, safe=QUERY_SAFE),
        quote(parsed.fragment, safe=FRAGMENT_SAFE),
    )


def url_to_slug(url: str) -> str:
    """Convert ``url`` into the filename stem used for its Markdown file.

    The path (with ``index`` appended to directory URLs), the query string
    and the fragment are joined with underscores, path-unsafe characters
    become underscores, and the result is capped at ``MAX_SLUG_LENGTH``.
    Distinct URLs that only differ past the cap share a slug.
    """

    _, path, query, fragment = _split_url(url)
    if path.endswith("/"):
        path = f"{path}index"

    slug = path
    if query:
        slug += "_" + RE_QUERY_SEPARATORS.sub("_", query)
    if fragment:
        slug += f"_{fragment}"

    slug = RE_UNSAFE_CHARS.sub("_", slug.replace("/", "_"))
    if slug.startswith("_"):
        slug = slug[1:]
    return slug[:MAX_SLUG_LENGTH]


def url_to_path(url: str, base_dir: str | os.PathLike[str]) -> str:
    """Return ``<base_dir>/<hostname>/<slug>.md`` for ``url``."""

    hostname = _split_url(url)[0]
    slug = url_to_slug(url)
    return os.path.normpath(os.path.join(base_dir, hostname, f"{slug}.md"))


__all__ = ["MAX_SLUG_LENGTH", "url_to_path", "url_to_slug"]
