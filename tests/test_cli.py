"""End-to-end tests for the ``prismic`` command line.

Every command runs against the fake repository from ``conftest.py``:
:meth:`Api.get` is patched to use its mock transport, and configuration is
isolated to a temporary directory.
"""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from prismic import __version__
from prismic.api import Api
from prismic.app import app, main
from prismic.config import load_global_config, save_global_config
from prismic.exceptions import NotFoundError
from prismic.models import GlobalConfig

API_URL = "https://lesbonneschoses.example.io/api"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_logging() -> Any:
    """The root callback reconfigures logging onto the runner's stderr."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def fake_api(monkeypatch: pytest.MonkeyPatch, repository: Any, isolated_config: Path) -> Any:
    """Route every :meth:`Api.get` call to the fake repository."""
    monkeypatch.setattr(Api, "get", functools.partial(Api.get, transport=repository.transport()))
    return repository


def _invoke(runner: CliRunner, *args: str, fmt: str = "--plain") -> Any:
    return runner.invoke(app, ["--api-url", API_URL, fmt, *args])


# ---------------------------------------------------------------------------
# Root options
# ---------------------------------------------------------------------------


class TestRoot:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"prismic {__version__}" in result.stdout

    def test_no_api_url(self, runner: CliRunner, isolated_config: Path) -> None:
        result = runner.invoke(app, ["--plain", "info"])
        assert result.exit_code == 1

    def test_api_url_from_env(
        self, runner: CliRunner, fake_api: Any, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PRISMIC_API_URL", API_URL)
        result = runner.invoke(app, ["--json", "info"])
        assert result.exit_code == 0
        assert str(fake_api.requests[0].url) == API_URL


# ---------------------------------------------------------------------------
# info
# ---------------------------------------------------------------------------


class TestInfo:
    def test_json(self, runner: CliRunner, fake_api: Any) -> None:
        result = _invoke(runner, "info", fmt="--json")
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["refs"][0] == {"label": "Master", "ref": "UlfoxUnM0wkXYXbs", "master": True}
        assert data["bookmarks"] == {"about": "UlfoxUnM0wkXYXbH"}
        assert data["tags"] == ["Macaron", "Cupcake"]
        assert data["forms"] == ["everything", "products", "upload"]

    def test_configured_format_applies_without_flag(
        self, runner: CliRunner, fake_api: Any
    ) -> None:
        config = GlobalConfig(api_url=API_URL)
        config.output.format = "json"
        save_global_config(config)

        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["types"] == {"article": "Article", "product": "Product"}


# ---------------------------------------------------------------------------
# search
# ---------------------------------------------------------------------------


class TestSearch:
    def test_plain_rows(self, runner: CliRunner, fake_api: Any) -> None:
        result = _invoke(runner, "search")
        assert result.exit_code == 0
        assert "UlfoxUnM0wkXYXbH\tarticle\tpastry-dreams" in result.stdout
        assert "UlfoxUnM0wkXYXbj\tproduct\tcupcakes" in result.stdout

    def test_json_records(self, runner: CliRunner, fake_api: Any) -> None:
        result = _invoke(runner, "search", fmt="--json")
        assert result.exit_code == 0
        records = json.loads(result.stdout)
        assert records[0] == {"id": "UlfoxUnM0wkXYXbH", "type": "article", "slug": "pastry-dreams"}

    def test_query_and_paging_are_sent(self, runner: CliRunner, fake_api: Any) -> None:
        result = _invoke(
            runner,
            "search",
            "--query", '[[:d = at(document.type, "product")]]',
            "--page", "2",
            "--page-size", "5",
            "--ref", "Christmas",
        )
        assert result.exit_code == 0
        params = fake_api.search_requests[0].url.params
        assert params["q"] == '[[:d = at(document.type, "product")]]'
        assert params["page"] == "2"
        assert params["pageSize"] == "5"
        assert params["ref"] == "UlfoxUnM0wkXYXbt"

    def test_unknown_form(self, runner: CliRunner, fake_api: Any) -> None:
        result = _invoke(runner, "search", "--form", "drafts")
        assert result.exit_code == 4

    def test_unknown_ref(self, runner: CliRunner, fake_api: Any) -> None:
        result = _invoke(runner, "search", "--ref", "Easter")
        assert result.exit_code == 4

    def test_no_results(self, runner: CliRunner, fake_api: Any) -> None:
        fake_api.search_data = dict(fake_api.search_data, results=[], total_results_size=0)
        result = _invoke(runner, "search")
        assert result.exit_code == 0
        assert "UlfoxUnM0wkXYXbH" not in result.stdout


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------


class TestRender:
    def test_field_html(self, runner: CliRunner, fake_api: Any) -> None:
        result = _invoke(runner, "render", "UlfoxUnM0wkXYXbH", "--field", "article.content")
        assert result.exit_code == 0
        assert "<p>This <em>is</em> <strong>a</strong> simple test.</p>" in result.stdout
        assert '<a href="/product/UlfoxUnM0wkXYXbj">Cupcakes</a>' in result.stdout

    def test_link_pattern(self, runner: CliRunner, fake_api: Any) -> None:
        result = _invoke(
            runner,
            "render", "UlfoxUnM0wkXYXbH",
            "--field", "content",
            "--link-pattern", "/shop/{slug}",
        )
        assert result.exit_code == 0
        assert '<a href="/shop/cupcakes">Cupcakes</a>' in result.stdout

    def test_link_pattern_with_unknown_placeholder(
        self, runner: CliRunner, fake_api: Any, isolated_config: Path
    ) -> None:
        result = _invoke(
            runner,
            "render", "UlfoxUnM0wkXYXbH",
            "--field", "content",
            "--link-pattern", "/{lang}/{id}",
        )
        assert result.exit_code == 2
        assert not (isolated_config / "data" / "prismic" / "logs").exists()

    def test_field_text(self, runner: CliRunner, fake_api: Any) -> None:
        result = _invoke(
            runner, "render", "UlfoxUnM0wkXYXbH", "--field", "article.title", "--text"
        )
        assert result.exit_code == 0
        assert result.stdout.strip() == "Pastry & dreams"

    def test_text_of_non_text_field(self, runner: CliRunner, fake_api: Any) -> None:
        result = _invoke(
            runner, "render", "UlfoxUnM0wkXYXbH", "--field", "article.price", "--text"
        )
        assert result.exit_code == 8

    def test_whole_document(self, runner: CliRunner, fake_api: Any) -> None:
        result = _invoke(runner, "render", "UlfoxUnM0wkXYXbj")
        assert result.exit_code == 0
        assert '<section data-field="name"><span class="text">Cupcakes</span></section>' in (
            result.stdout
        )

    def test_json_wraps_html(self, runner: CliRunner, fake_api: Any) -> None:
        result = _invoke(
            runner, "render", "UlfoxUnM0wkXYXbH", "--field", "author", fmt="--json"
        )
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"html": '<span class="text">Jane &lt;Doe&gt;</span>'}

    def test_missing_document(self, runner: CliRunner, fake_api: Any) -> None:
        result = _invoke(runner, "render", "nope")
        assert result.exit_code == 4

    def test_missing_field(self, runner: CliRunner, fake_api: Any) -> None:
        result = _invoke(runner, "render", "UlfoxUnM0wkXYXbH", "--field", "article.summary")
        assert result.exit_code == 4

    def test_text_requires_field(self, runner: CliRunner, fake_api: Any) -> None:
        result = _invoke(runner, "render", "UlfoxUnM0wkXYXbH", "--text")
        assert result.exit_code == 2
        assert fake_api.requests == []


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------


class TestConfigCommands:
    def test_show_json(self, runner: CliRunner, isolated_config: Path) -> None:
        result = runner.invoke(app, ["--json", "config", "show"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["link_pattern"] == "/{type}/{id}"

    def test_set_string(self, runner: CliRunner, isolated_config: Path) -> None:
        result = runner.invoke(app, ["config", "set", "api_url", API_URL])
        assert result.exit_code == 0
        assert load_global_config().api_url == API_URL

    def test_set_nested_int(self, runner: CliRunner, isolated_config: Path) -> None:
        result = runner.invoke(app, ["config", "set", "cache.capacity", "500"])
        assert result.exit_code == 0
        assert load_global_config().cache.capacity == 500

    def test_set_bool(self, runner: CliRunner, isolated_config: Path) -> None:
        result = runner.invoke(app, ["config", "set", "request.verify_ssl", "false"])
        assert result.exit_code == 0
        assert load_global_config().request.verify_ssl is False

    def test_clear_optional(self, runner: CliRunner, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(api_url=API_URL))
        result = runner.invoke(app, ["config", "set", "api_url", ""])
        assert result.exit_code == 0
        assert load_global_config().api_url is None

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("nope", "x"),
            ("cache.nope", "1"),
            ("cache", "1"),
            ("cache.capacity", "many"),
            ("cache.capacity", "0"),
        ],
    )
    def test_set_rejected(
        self, runner: CliRunner, isolated_config: Path, key: str, value: str
    ) -> None:
        result = runner.invoke(app, ["config", "set", key, value])
        assert result.exit_code == 2
        assert load_global_config() == GlobalConfig()

    def test_reset_force(self, runner: CliRunner, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(api_url=API_URL))
        result = runner.invoke(app, ["config", "reset", "--force"])
        assert result.exit_code == 0
        assert load_global_config() == GlobalConfig()

    def test_reset_declined(self, runner: CliRunner, isolated_config: Path) -> None:
        save_global_config(GlobalConfig(api_url=API_URL))
        result = runner.invoke(app, ["config", "reset"], input="n\n")
        assert result.exit_code == 0
        assert load_global_config().api_url == API_URL


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


class TestMain:
    @pytest.fixture(autouse=True)
    def _no_signal_handlers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("prismic.app.signal.signal", lambda *args: None)

    def test_prismic_error_exit_code(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        def _raise() -> None:
            raise NotFoundError("Document 'x' not found")

        monkeypatch.setattr("prismic.app.app", _raise)
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 4
        assert "Document 'x' not found" in capsys.readouterr().err

    def test_unexpected_error_writes_crash_log(
        self, monkeypatch: pytest.MonkeyPatch, isolated_config: Path
    ) -> None:
        def _raise() -> None:
            raise RuntimeError("boom")

        monkeypatch.setattr("prismic.app.app", _raise)
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
        logs = list((isolated_config / "data" / "prismic" / "logs").glob("crash-*.log"))
        assert len(logs) == 1
        assert "RuntimeError: boom" in logs[0].read_text(encoding="utf-8")
