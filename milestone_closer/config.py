"""Configuration loading from YAML, environment and GitHub Actions inputs.

Secrets (tokens) are taken from the ``repo-token`` input, from environment
variables or from files (Docker secrets). Never put real tokens in config
files committed to the repo.

Precedence for processor options: action inputs (``INPUT_*``) override the
``processor`` section of the YAML file, which overrides ``MILESTONE_*`` env
vars and defaults.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = _current_env.get(env_key)
    if value:
        return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


# Injected by load_config so helpers can read env/file
_current_env: dict[str, str] = {}

# Action input name -> ProcessorOptions field. Earlier names win when both are set.
INPUT_FIELDS: dict[str, str] = {
    "repo-token": "repo_token",
    "minimum-issues": "minimum_issues",
    "min-issues": "minimum_issues",
    "related-only": "related_only",
    "related-active": "related_active",
    "reopen-active": "reopen_active",
    "debug-only": "debug_only",
}
BOOL_FIELDS = frozenset({"related_only", "related_active", "reopen_active", "debug_only"})

# GitHubConfig field -> variable set by the Actions runner
RUNNER_FIELDS: dict[str, str] = {
    "api_url": "GITHUB_API_URL",
    "repository": "GITHUB_REPOSITORY",
    "event_name": "GITHUB_EVENT_NAME",
    "sha": "GITHUB_SHA",
}


class ProcessorOptions(BaseSettings):
    """Options for one milestone processing run."""

    model_config = SettingsConfigDict(env_prefix="MILESTONE_", extra="ignore", frozen=True)

    repo_token: str = Field(min_length=1, description="Token for the GitHub API")
    minimum_issues: int = Field(default=3, ge=0, description="Issues/PRs required before a milestone may be closed")
    related_only: bool = Field(default=False, description="Only process milestones linked to the triggering event")
    # Reserved: widening the related set via all PRs/issues is not executed
    related_active: bool = Field(default=False, description="Widen related set via PR/issue linkage (reserved)")
    reopen_active: bool = Field(default=False, description="Reopen closed milestones that have open issues")
    debug_only: bool = Field(default=False, description="Log intended actions without changing milestones")


class GitHubConfig(BaseSettings):
    """GitHub API settings and the workflow run context."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    api_url: str = Field(default="https://api.github.com", description="API base URL")
    repository: str = Field(
        default="owner/repo",
        pattern=r"^[^/\s]+/[^/\s]+$",
        description="Target repo e.g. owner/repo (env: GITHUB_REPOSITORY)",
    )
    event_name: str = Field(default="", description="Triggering event, e.g. push or pull_request")
    sha: str = Field(default="", description="Commit SHA that triggered the run")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env + action inputs."""

    model_config = SettingsConfigDict(extra="ignore")

    processor: ProcessorOptions
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        # Simple $VAR
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def _normalize_keys(raw: dict[str, Any]) -> dict[str, Any]:
    """Accept hyphenated action-style keys (min-issues) in YAML."""
    out: dict[str, Any] = {}
    for key, val in raw.items():
        field = INPUT_FIELDS.get(key, key.replace("-", "_"))
        out.setdefault(field, val)
    return out


def get_input(name: str) -> str:
    """Read an action input the way the Actions runner exposes it
    (INPUT_<NAME>)."""
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return (_current_env.get(key) or "").strip()


def read_action_inputs() -> dict[str, Any]:
    """Collect processor options from action inputs; unset inputs are
    omitted.

    Booleans are enabled only by the string ``true`` (any case).
    """
    values: dict[str, Any] = {}
    for name, field in INPUT_FIELDS.items():
        if field in values:
            continue
        value = get_input(name)
        if not value:
            continue
        values[field] = value.lower() == "true" if field in BOOL_FIELDS else value
    return values


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file, environment and action inputs.

    Secrets: repo-token input, or GITHUB_TOKEN / GITHUB_TOKEN_FILE.
    Raises pydantic.ValidationError on invalid values (e.g. negative
    minimum-issues).
    """
    global _current_env

    _current_env = dict(os.environ)

    path = config_path or Path("config.yaml")
    raw: dict[str, Any] = {}
    if path.is_file():
        raw = yaml.safe_load(path.read_text()) or {}
        raw = _substitute_env(raw)

    processor_raw = {**_normalize_keys(raw.get("processor") or {}), **read_action_inputs()}
    t = processor_raw.get("repo_token")
    if not t or str(t).startswith("${"):
        processor_raw.pop("repo_token", None)
        token = _read_secret("GITHUB_TOKEN", "GITHUB_TOKEN_FILE")
        if token:
            processor_raw["repo_token"] = token

    # Runner context (GITHUB_REPOSITORY etc.) wins over the YAML github section
    github_raw = dict(raw.get("github") or {})
    for field, env_key in RUNNER_FIELDS.items():
        if _current_env.get(env_key):
            github_raw[field] = _current_env[env_key]

    processor = ProcessorOptions(**processor_raw)
    github = GitHubConfig(**github_raw)
    logging = LoggingConfig(**(raw.get("logging") or {}))

    return AppConfig(processor=processor, github=github, logging=logging)
