"""Tests for the command-line entry point."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import httpx
import pytest
from pydantic import ValidationError
from typer.testing import CliRunner

from okta_browser import cli as cli_module
from okta_browser.app import DirectoryBrowserApp
from okta_browser.cli import cli, configure_logging
from okta_browser.client import OktaDirectoryClient
from okta_browser.config import Settings

runner = CliRunner()

ORG_URL = "https://example.okta.com"


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def serve(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[Settings], OktaDirectoryClient]:
    """Route every client the CLI builds through ``handler``."""

    def fake_build_client(settings: Settings) -> OktaDirectoryClient:
        return OktaDirectoryClient(
            settings.okta_org_url,
            settings.okta_api_token.get_secret_value(),
            transport=httpx.MockTransport(handler),
        )

    return fake_build_client


class TestStartupErrors:
    def test_missing_settings_exit_with_error(self) -> None:
        result = runner.invoke(cli, [])
        assert result.exit_code == 1
        assert "OKTA_ORG_URL" in result.output
        assert "OKTA_API_TOKEN" in result.output

    def test_missing_token_only(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OKTA_ORG_URL", ORG_URL)
        result = runner.invoke(cli, [])
        assert result.exit_code == 1
        assert "OKTA_API_TOKEN" in result.output
        assert "OKTA_ORG_URL" not in result.output

    def test_invalid_url(self) -> None:
        result = runner.invoke(cli, ["--org-url", "not a url", "--token", "tok"])
        assert result.exit_code == 1
        assert "Invalid Okta org URL" in result.output

    def test_initial_load_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"errorSummary": "Invalid token provided"})

        monkeypatch.setattr(cli_module, "build_client", serve(handler))
        result = runner.invoke(cli, ["--org-url", ORG_URL, "--token", "bad"])
        assert result.exit_code == 1
        assert "Invalid token provided" in result.output


    def test_invalid_environment_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FETCH_TIMEOUT_SECONDS", "abc")
        result = runner.invoke(cli, ["--org-url", ORG_URL, "--token", "tok"])
        assert result.exit_code == 1
        assert not isinstance(result.exception, ValidationError)
        assert "Error:" in result.output
        assert "FETCH_TIMEOUT_SECONDS" in result.output

    def test_unwritable_log_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "missing-dir" / "browser.log"
        result = runner.invoke(
            cli, ["--org-url", ORG_URL, "--token", "tok", "--log-file", str(log_file)]
        )
        assert result.exit_code == 1
        assert "Cannot open log file" in result.output

    def test_error_is_reported_once(self) -> None:
        result = runner.invoke(cli, [])
        assert result.output.count("OKTA_ORG_URL") == 1


class TestStartup:
    def test_loads_users_then_runs_app(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["Authorization"] == "SSWS tok"
            return httpx.Response(200, json=[{"id": "00u1", "profile": {"login": "alice"}}])

        launched: list[DirectoryBrowserApp] = []

        def fake_run(self: DirectoryBrowserApp, **kwargs: object) -> None:
            launched.append(self)

        monkeypatch.setattr(cli_module, "build_client", serve(handler))
        monkeypatch.setattr(DirectoryBrowserApp, "run", fake_run)
        monkeypatch.setenv("OKTA_ORG_URL", ORG_URL)
        monkeypatch.setenv("OKTA_API_TOKEN", "tok")

        result = runner.invoke(cli, [])
        assert result.exit_code == 0, result.output
        assert len(launched) == 1
        assert [e.login for e in launched[0].app_state.browser.entries] == ["alice"]

    def test_options_override_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: list[Settings] = []

        def fake_bootstrap(settings: Settings) -> list:
            seen.append(settings)
            return []

        monkeypatch.setattr(cli_module, "bootstrap", fake_bootstrap)
        monkeypatch.setattr(DirectoryBrowserApp, "run", lambda self, **kwargs: None)
        monkeypatch.setenv("OKTA_ORG_URL", "https://env.okta.com")
        monkeypatch.setenv("OKTA_API_TOKEN", "env-token")

        result = runner.invoke(cli, ["--org-url", ORG_URL, "--timeout", "5"])
        assert result.exit_code == 0, result.output
        assert seen[0].okta_org_url == ORG_URL
        assert seen[0].okta_api_token.get_secret_value() == "env-token"
        assert seen[0].fetch_timeout_seconds == 5.0


def test_configure_logging_to_file(tmp_path: Path) -> None:
    log_file = tmp_path / "browser.log"
    configure_logging(Settings(_env_file=None, log_level="debug", log_file=log_file))
    logging.getLogger("okta_browser.test").debug("hello")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "DEBUG:okta_browser.test:hello" in log_file.read_text(encoding="utf-8")
