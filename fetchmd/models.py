"""Shared dataclasses for extracted articles and run options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


@dataclass(slots=True)
class Article:
    """Readable content pulled out of a fetched page.

    Every field is always present; missing metadata is an empty string.
    """

    title: str = ""
    content: str = ""
    text_content: str = ""
    length: int = 0
    excerpt: str = ""
    byline: str = ""
    dir: str = ""
    site_name: str = ""


class OverwritePolicy(str, Enum):
    """How to treat a target file that already exists."""

    OVERWRITE = "overwrite"
    SKIP = "skip"
    PROMPT = "prompt"


@dataclass(frozen=True, slots=True)
class ProcessOptions:
    """Settings resolved once per invocation and shared by every URL."""

    output_dir: Path
    overwrite: OverwritePolicy = OverwritePolicy.PROMPT
    input: Optional[Path] = None
    user_agent: str = ""
    timeout: float = 30.0
    delay: float = 0.5
