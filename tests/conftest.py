"""Shared fixtures for the fetchmd test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from fetchmd.models import OverwritePolicy, ProcessOptions
from process_urls import ProcessContext

from helpers import ARTICLE_HTML, SECOND_ARTICLE_HTML, StubSession


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep a developer's fetchmd.json or FETCHMD_CONFIG out of the tests."""
    monkeypatch.delenv("FETCHMD_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def stub_session() -> StubSession:
    return StubSession(
        {
            "https://example.com/article": ARTICLE_HTML,
            "https://example.com/article2": SECOND_ARTICLE_HTML,
        }
    )


@pytest.fixture
def make_options(tmp_path: Path):
    def _make(**overrides) -> ProcessOptions:
        values = {
            "output_dir": tmp_path / "out",
            "overwrite": OverwritePolicy.PROMPT,
            "user_agent": "fetchmd-tests/1.0",
            "timeout": 5.0,
            "delay": 0.5,
        }
        values.update(overrides)
        return ProcessOptions(**values)

    return _make


@pytest.fixture
def make_context(stub_session: StubSession):
    def _make(**overrides) -> ProcessContext:
        values = {
            "session": stub_session,
            "interactive": False,
            "confirm": lambda question: False,
            "sleep": lambda seconds: None,
        }
        values.update(overrides)
        return ProcessContext(**values)

    return _make
