"""Shared pytest fixtures for strme tests."""

from __future__ import annotations

from pathlib import Path
import sys

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast tests of a single module")
    config.addinivalue_line("markers", "contract: cross-operation properties")


@pytest.fixture(autouse=True)
def _no_env_allocation_limit(monkeypatch: pytest.MonkeyPatch):
    from strme.config import MAX_ALLOCATION_ENV

    monkeypatch.delenv(MAX_ALLOCATION_ENV, raising=False)
    yield


@pytest.fixture
def api_client():
    from fastapi.testclient import TestClient

    from strme.main import api_app

    return TestClient(api_app)


@pytest.fixture
def cli_runner():
    from typer.testing import CliRunner

    return CliRunner()


@pytest.fixture(
    params=[b"", b"a", b"hello", b"ab\xffcd", b"The quick brown fox"],
    ids=["empty", "single", "word", "high-byte", "sentence"],
)
def sample_content(request) -> bytes:
    return request.param
