"""Shared test fixtures for prismic.

Provides reusable fixtures for loading JSON fixtures, serving them through
an :class:`httpx.MockTransport`, isolating config environments, managing
output state and running CLI commands.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from prismic.cache import reset_default_cache
from prismic.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"

API_URL = "https://lesbonneschoses.example.io/api"
SEARCH_URL = "https://lesbonneschoses.example.io/api/documents/search"


def load_fixture(name: str) -> Any:
    with open(FIXTURES_DIR / name) as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Auto-reset global state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_globals_between_tests() -> None:
    """Reset the global OutputManager and the default response cache.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    The default cache would otherwise leak responses between tests.
    """
    yield
    reset_output()
    reset_default_cache()


# ---------------------------------------------------------------------------
# JSON fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def api_data() -> dict[str, Any]:
    """The API entry document."""
    return load_fixture("api.json")


@pytest.fixture
def search_data() -> dict[str, Any]:
    """One page of search results with two documents."""
    return load_fixture("search.json")


# ---------------------------------------------------------------------------
# HTTP fixtures
# ---------------------------------------------------------------------------


class FakeRepository:
    """Serves the entry document and search results, recording every request."""

    def __init__(self, api_data: dict[str, Any], search_data: dict[str, Any]) -> None:
        self.api_data = api_data
        self.search_data = search_data
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/api":
            return httpx.Response(200, json=self.api_data)
        if request.url.path == "/api/documents/search":
            return httpx.Response(200, json=self._search(request))
        return httpx.Response(404, json={"message": "Not found"})

    def _search(self, request: httpx.Request) -> dict[str, Any]:
        query = request.url.params.get("q", "")
        if "document.id" not in query:
            return self.search_data
        results = [d for d in self.search_data["results"] if f'"{d["id"]}"' in query]
        return dict(self.search_data, results=results, results_size=len(results))

    @property
    def search_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/search")]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def repository(api_data: dict[str, Any], search_data: dict[str, Any]) -> FakeRepository:
    return FakeRepository(api_data, search_data)


@pytest.fixture
def make_api(repository: FakeRepository) -> Callable[..., Any]:
    """Factory opening an :class:`~prismic.api.Api` against the fake repository."""
    from prismic.api import Api
    from prismic.cache import LruCache

    def _make(**kwargs: Any) -> Api:
        kwargs.setdefault("cache", LruCache(10))
        return Api.get(API_URL, transport=repository.transport(), **kwargs)

    return _make


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_CONFIG_HOME and XDG_DATA_HOME to subdirectories of tmp_path,
    forces XDG path resolution, clears the PRISMIC_* environment variables
    and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("prismic.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["PRISMIC_API_URL", "PRISMIC_ACCESS_TOKEN"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
