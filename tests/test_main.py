"""Tests for the entry point: exit codes and failure reporting."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from milestone_closer.adapters import GitPlatformError
from milestone_closer.main import main, parse_args
from milestone_closer.models import Milestone

ENV_PREFIXES = ("INPUT_", "GITHUB_", "MILESTONE_", "LOGGING_", "RUNNER_")


@pytest.fixture(autouse=True)
def action_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Minimal action environment: token, repo, schedule trigger."""
    import os

    for key in list(os.environ):
        if key.upper().startswith(ENV_PREFIXES):
            monkeypatch.delenv(key)
    monkeypatch.setenv("INPUT_REPO-TOKEN", "tok")
    monkeypatch.setenv("GITHUB_REPOSITORY", "owner/repo")
    monkeypatch.setenv("GITHUB_EVENT_NAME", "schedule")


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "missing.yaml"


def test_parse_args_defaults() -> None:
    args = parse_args([])
    assert args.config == Path("config.yaml")
    assert args.check is False


def test_check_only_validates(config_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """--check loads config and exits 0 without calling the API."""
    with patch("milestone_closer.main.GitHubAdapter") as adapter_cls:
        code = main(["--config", str(config_path), "--check"])

    assert code == 0
    adapter_cls.assert_not_called()
    assert "Config OK: owner/repo" in capsys.readouterr().out


def test_invalid_minimum_issues_fails_before_fetch(
    monkeypatch: pytest.MonkeyPatch, config_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Validation failure: exit 1, ::error:: reported, no adapter built."""
    monkeypatch.setenv("INPUT_MINIMUM-ISSUES", "many")

    with patch("milestone_closer.main.GitHubAdapter") as adapter_cls:
        code = main(["--config", str(config_path)])

    assert code == 1
    adapter_cls.assert_not_called()
    assert "::error::Invalid configuration" in capsys.readouterr().out


def test_successful_run_closes_eligible(config_path: Path) -> None:
    """A full pass closes eligible milestones through the adapter and exits 0."""
    adapter = MagicMock()
    adapter.list_milestones.side_effect = [
        [Milestone(id=50, number=5, title="v1", open_issues=0, closed_issues=4)],
        [],
    ]

    with patch("milestone_closer.main.GitHubAdapter", return_value=adapter) as adapter_cls:
        code = main(["--config", str(config_path)])

    assert code == 0
    adapter_cls.assert_called_once_with(token="tok", api_url="https://api.github.com")
    adapter.update_milestone_state.assert_called_once_with("owner/repo", 5, "closed")


def test_api_error_fails_run(config_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """An adapter error becomes exit 1 with the error message surfaced."""
    adapter = MagicMock()
    adapter.list_milestones.side_effect = GitPlatformError("401: Bad credentials")

    with patch("milestone_closer.main.GitHubAdapter", return_value=adapter):
        code = main(["--config", str(config_path)])

    assert code == 1
    assert "::error::401: Bad credentials" in capsys.readouterr().out


def test_example_config_fallback_uses_runner_repository(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Without config.yaml the example config is used, but GITHUB_REPOSITORY still picks the repo."""
    (tmp_path / "config.example.yaml").write_text(
        "processor:\n  minimum_issues: 3\ngithub:\n  repository: owner/repo\n"
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GITHUB_REPOSITORY", "acme/widgets")
    adapter = MagicMock()
    adapter.list_milestones.return_value = []

    with patch("milestone_closer.main.GitHubAdapter", return_value=adapter):
        code = main([])

    assert code == 0
    assert adapter.list_milestones.call_args[0][0] == "acme/widgets"


def test_interrupted_run_fails(config_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """An interrupted pass is reported as a failure, not success."""
    adapter = MagicMock()
    adapter.list_milestones.side_effect = KeyboardInterrupt()

    with patch("milestone_closer.main.GitHubAdapter", return_value=adapter):
        code = main(["--config", str(config_path)])

    assert code == 1
    assert "::error::Interrupted" in capsys.readouterr().out
