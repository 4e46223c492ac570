"""Exception hierarchy raised while turning a URL into a Markdown file."""

from __future__ import annotations

from typing import Optional


class FetchMdError(Exception):
    """Base class for failures scoped to a single URL."""


class InvalidUrlError(FetchMdError, ValueError):
    """Raised when a URL lacks a scheme or hostname."""


class FetchError(FetchMdError):
    """Raised when the page could not be downloaded."""


class NetworkError(FetchError):
    """Transport failure or a non-success HTTP status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FetchTimeoutError(FetchError):
    """No response arrived within the configured timeout."""


class ExtractionError(FetchMdError):
    """Readability could not locate a main-content article."""


class ConversionError(FetchMdError):
    """HTML to Markdown conversion failed."""


class FilesystemError(FetchMdError):
    """Creating the destination directory or writing the file failed."""
