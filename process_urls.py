"""Fetch URLs and store their readable content as Markdown files."""

from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import (
    Callable,
    Iterable,
    Iterator,
    Literal,
    Optional,
    Sequence,
    TextIO,
)

import requests

from config_loader import ConfigError, resolve_settings
from fetchmd import __version__
from fetchmd.errors import FetchMdError, FilesystemError
from fetchmd.fetcher import fetch_article
from fetchmd.frontmatter import compose_document
from fetchmd.models import OverwritePolicy, ProcessOptions
from fetchmd.paths import url_to_path

UrlStatus = Literal["saved", "skipped", "failed"]

USAGE_ERROR = (
    "Error: Please provide a URL, input file, or pipe URLs through stdin"
)


def ask_user(question: str) -> bool:
    """Ask a yes/no question on the terminal; only ``y`` counts as yes."""

    try:
        answer = input(f"{question} (y/n): ")
    except EOFError:
        return False
    return answer.strip().lower() == "y"


@dataclass(slots=True)
class ProcessContext:
    """Process-wide collaborators handed to every URL.

    Uses slots for memory efficiency. Do not inherit from this class
    unless the subclass also uses slots=True.
    """

    session: requests.Session
    interactive: bool = False
    confirm: Callable[[str], bool] = ask_user
    sleep: Callable[[float], None] = time.sleep


@dataclass(slots=True)
class UrlResult:
    """Outcome recorded for a single URL.

    Uses slots for memory efficiency. Do not inherit from this class
    unless the subclass also uses slots=True.
    """

    url: str
    status: UrlStatus
    path: Optional[str] = None
    message: Optional[str] = None


@dataclass(slots=True)
class BatchSummary:
    """Counts of per-URL outcomes across a run."""

    results: list[UrlResult] = field(default_factory=list)

    def count(self, status: UrlStatus) -> int:
        """Return how many URLs finished with ``status``."""

        return sum(1 for result in self.results if result.status == status)

    def describe(self) -> str:
        """Return a one-line human readable summary."""

        return (
            f"Processed {len(self.results)} URLs: "
            f"{self.count('saved')} saved, "
            f"{self.count('skipped')} skipped, "
            f"{self.count('failed')} failed."
        )


def read_urls(path: Path) -> Iterable[str]:
    """Yield URLs from a newline-delimited text file, skipping blanks."""

    raw = path.read_text(encoding="utf-8").splitlines()
    for line in raw:
        url = line.strip()
        if not url:
            continue
        if url.startswith(("'", '"')) and url.endswith(("'", '"')):
            url = url[1:-1]
        url = url.strip('"').strip("'")
        if url and not url.startswith("#"):
            yield url


def iter_stream_urls(stream: TextIO) -> Iterator[str]:
    """Yield trimmed, non-blank lines from ``stream`` as they arrive."""

    for line in stream:
        url = line.strip()
        if url:
            yield url


def _should_skip(
    file_path: str,
    options: ProcessOptions,
    context: ProcessContext,
) -> bool:
    """Decide whether an existing ``file_path`` is left untouched."""

    if options.overwrite is OverwritePolicy.SKIP:
        return True
    if options.overwrite is OverwritePolicy.PROMPT and context.interactive:
        return not context.confirm(
            f"File {file_path} already exists. Overwrite?"
        )
    if options.overwrite is OverwritePolicy.OVERWRITE:
        return False
    return True


def write_document(file_path: str, document: str) -> None:
    """Write ``document`` to ``file_path``, creating parent folders."""

    target = Path(file_path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(document, encoding="utf-8")
    except OSError as exc:
        raise FilesystemError(f"Unable to write {target}: {exc}") from exc


def process_url(
    url: str,
    options: ProcessOptions,
    context: ProcessContext,
) -> UrlResult:
    """Fetch, convert and store a single URL.

    Failures are reported on stderr and returned as a ``failed`` result so
    that a batch keeps going.
    """

    print(f"Processing: {url}")
    file_path: Optional[str] = None
    try:
        file_path = url_to_path(url, options.output_dir)

        if Path(file_path).exists() and _should_skip(
            file_path, options, context
        ):
            print(f"Skipping existing file: {file_path}")
            return UrlResult(url=url, status="skipped", path=file_path)

        article = fetch_article(url, options, session=context.session)
        document = compose_document(article, url)
        write_document(file_path, document)
    except FetchMdError as exc:
        message = f"{type(exc).__name__} - {exc}"
        print(f"⚠️ Error processing {url}: {message}", file=sys.stderr)
        return UrlResult(
            url=url, status="failed", path=file_path, message=message
        )

    print(f"✅ Successfully saved: {file_path}")
    return UrlResult(url=url, status="saved", path=file_path)


def process_urls(
    urls: Iterable[str],
    options: ProcessOptions,
    context: ProcessContext,
    *,
    delay: float = 0.0,
) -> BatchSummary:
    """Process ``urls`` one at a time, pausing ``delay`` seconds between."""

    summary = BatchSummary()
    for index, url in enumerate(urls):
        if index and delay > 0:
            context.sleep(delay)
        summary.results.append(process_url(url, options, context))
    return summary


def run(
    options: ProcessOptions,
    context: ProcessContext,
    *,
    url: Optional[str] = None,
    stdin: Optional[TextIO] = None,
) -> int:
    """Pick the URL source and drive the processor; return an exit code."""

    stream = stdin if stdin is not None else sys.stdin

    if options.input is not None:
        if not options.input.exists():
            raise SystemExit(f"URL list not found: {options.input}")
        try:
            urls = tuple(read_urls(options.input))
        except (OSError, UnicodeDecodeError) as exc:
            raise SystemExit(f"Unable to read URL list: {exc}") from exc
        summary = process_urls(urls, options, context, delay=options.delay)
        print(summary.describe())
    elif url:
        process_url(url, options, context)
    elif stream.isatty():
        print(USAGE_ERROR, file=sys.stderr)
        return 1
    else:
        summary = process_urls(iter_stream_urls(stream), options, context)
        print(summary.describe())
    return 0


def _overwrite_policy(args: argparse.Namespace) -> OverwritePolicy:
    if args.overwrite:
        return OverwritePolicy.OVERWRITE
    if args.skip:
        return OverwritePolicy.SKIP
    return OverwritePolicy.PROMPT


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments controlling the fetch pipeline."""

    parser = argparse.ArgumentParser(
        prog="fetchmd",
        description="Fetch web pages and convert them to Markdown.",
    )
    parser.add_argument(
        "url",
        nargs="?",
        help=(
            "URL to fetch and convert. Omit to read an --input file or"
            " URLs piped through stdin."
        ),
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        help="Output directory (default: ref-docs).",
    )
    policy = parser.add_mutually_exclusive_group()
    policy.add_argument(
        "--overwrite",
        action="store_true",
        help="Overwrite existing files without asking.",
    )
    policy.add_argument(
        "--skip",
        action="store_true",
        help="Skip existing files without asking.",
    )
    parser.add_argument(
        "-i",
        "--input",
        help="Input file containing URLs (one per line).",
    )
    parser.add_argument(
        "--user-agent",
        help=f"Custom User-Agent header (default: fetchmd/{__version__}).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds (default: 30).",
    )
    parser.add_argument(
        "--delay",
        type=float,
        help=(
            "Pause between URLs read from --input, in seconds"
            " (default: 0.5)."
        ),
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Optional JSON config file (falls back to fetchmd.json).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def build_options(args: argparse.Namespace) -> ProcessOptions:
    """Resolve CLI arguments and config defaults into run options."""

    try:
        settings = resolve_settings(
            config_path=args.config,
            output_dir=args.output_dir,
            user_agent=args.user_agent,
            timeout=args.timeout,
            delay=args.delay,
        )
    except ConfigError as exc:
        raise SystemExit(f"Config error: {exc}") from exc

    return ProcessOptions(
        output_dir=Path(settings["output_dir"]),
        overwrite=_overwrite_policy(args),
        input=Path(args.input) if args.input else None,
        user_agent=settings["user_agent"],
        timeout=settings["timeout"],
        delay=settings["delay"],
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point for fetching URLs into Markdown files."""

    args = parse_args(argv)
    options = build_options(args)
    with requests.Session() as session:
        context = ProcessContext(
            session=session,
            interactive=sys.stdin.isatty(),
        )
        return run(options, context, url=args.url)


if __name__ == "__main__":
    raise SystemExit(main())
