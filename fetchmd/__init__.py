"""Fetch web pages and store their readable content as Markdown."""

from .errors import (
    ConversionError,
    ExtractionError,
    FetchError,
    FetchMdError,
    FetchTimeoutError,
    FilesystemError,
    InvalidUrlError,
    NetworkError,
)
from .fetcher import fetch_article, parse_article
from .frontmatter import compose_document
from .models import Article
from .paths import MAX_SLUG_LENGTH, url_to_path, url_to_slug

__version__ = "0.1.0"

__all__ = [
    "Article",
    "ConversionError",
    "ExtractionError",
    "FetchError",
    "FetchMdError",
    "FetchTimeoutError",
    "FilesystemError",
    "InvalidUrlError",
    "MAX_SLUG_LENGTH",
    "NetworkError",
    "__version__",
    "compose_document",
    "fetch_article",
    "parse_article",
    "url_to_path",
    "url_to_slug",
]
