"""Configuration loading from YAML and environment.

Secrets (tokens) are taken from environment variables or from files
(Docker secrets). When running as a GitHub Action the token may also come
from the action input (``token`` / ``INPUT_TOKEN``). Never put real tokens
in config files committed to the repo.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(Exception):
    """Raised when required configuration (e.g. the GitHub token) is
    missing."""

    pass


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = _current_env.get(env_key)
    if value:
        return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        try:
            return Path(file_path).read_text().strip()
        except OSError as e:
            raise ConfigError(f"cannot read secret file {file_path} ({file_env_key}): {e}") from e
    return None


# Injected by load_config so token properties can read env/file
_current_env: dict[str, str] = {}


def _is_placeholder(value: str | None) -> bool:
    return not value or value.startswith("${")


class BotConfig(BaseSettings):
    """Label names and command policy."""

    model_config = SettingsConfigDict(env_prefix="BOT_", extra="ignore")

    help_wanted_label: str = Field(default="help wanted", description="Removed on /assign")
    sync_label: str = Field(default="sync", description="Marks issues already sent to the chat group")
    kind_prefix: str = Field(default="kind/", description="Namespace for /kind labels")
    area_prefix: str = Field(default="area/", description="Namespace for /area labels")
    # Re-add the help wanted label when the assignee leaves (env: BOT_RESTORE_HELP_WANTED)
    restore_help_wanted: bool = Field(default=False, description="Add help wanted back on /unassign")


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="PAT or app token; use env or secret file")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    html_url: str = Field(default="https://github.com", description="Web base URL for links in messages")
    timeout: int = Field(default=30, ge=1, description="Per-request timeout in seconds")


class DingTalkConfig(BaseSettings):
    """DingTalk group robot settings."""

    model_config = SettingsConfigDict(env_prefix="DINGTALK_", extra="ignore")

    token: str | None = Field(default=None, description="Group robot access token")
    endpoint: str = Field(
        default="https://oapi.dingtalk.com/robot/send?access_token={token}",
        description="Robot send URL; {token} is replaced with the access token",
    )
    timeout: int = Field(default=10, ge=1, description="Request timeout in seconds")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    bot: BotConfig = Field(default_factory=BotConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    dingtalk: DingTalkConfig = Field(default_factory=DingTalkConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config, env, Docker secret file or action
        input."""
        t = self.github.token
        if not _is_placeholder(t):
            return t
        return (
            _read_secret("GITHUB_TOKEN", "GITHUB_TOKEN_FILE")
            or _current_env.get("INPUT_TOKEN")
            or _current_env.get("token")
            or None
        )

    @property
    def dingtalk_token_resolved(self) -> str:
        """Resolve DingTalk robot token; empty string when not configured."""
        t = self.dingtalk.token
        if not _is_placeholder(t):
            return t or ""
        return _read_secret("DINGTALK_TOKEN", "DINGTALK_TOKEN_FILE") or ""

    def require_github_token(self) -> str:
        """Return the GitHub token or raise ConfigError."""
        token = self.github_token_resolved
        if not token:
            raise ConfigError("empty github token")
        return token


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def _section(cls: type[BaseSettings], values: dict[str, Any], env: dict[str, str]) -> Any:
    """Build one config section from YAML values and ``<PREFIX><FIELD>`` keys
    in ``env``; YAML wins over env.

    Validated directly so only ``env`` is consulted, never os.environ.
    """
    prefix = (cls.model_config.get("env_prefix") or "").upper()
    upper_env = {k.upper(): v for k, v in env.items()}
    from_env: dict[str, Any] = {}
    for name in cls.model_fields:
        key = f"{prefix}{name.upper()}"
        if key in upper_env:
            from_env[name] = upper_env[key]
    return cls.model_validate({**from_env, **values})


def load_config(config_path: Path | None = None, env: dict[str, str] | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    ``env`` defaults to os.environ and is the only environment consulted.
    Secrets: GITHUB_TOKEN or GITHUB_TOKEN_FILE (or action input INPUT_TOKEN),
    DINGTALK_TOKEN or DINGTALK_TOKEN_FILE. Any unreadable or invalid input
    raises ConfigError.
    """
    global _current_env
    import os

    _current_env = dict(os.environ if env is None else env)

    path = config_path or Path("config.yaml")
    raw: dict[str, Any] = {}
    if path.is_file():
        try:
            raw = yaml.safe_load(path.read_text()) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"cannot read config file {path}: {e}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"config file {path} must be a mapping")
        raw = _substitute_env(raw)

    try:
        config = AppConfig.model_validate(
            {
                "bot": _section(BotConfig, raw.get("bot") or {}, _current_env),
                "github": _section(GitHubConfig, raw.get("github") or {}, _current_env),
                "dingtalk": _section(DingTalkConfig, raw.get("dingtalk") or {}, _current_env),
                "logging": _section(LoggingConfig, raw.get("logging") or {}, _current_env),
            }
        )
    except ValidationError as e:
        raise ConfigError(f"invalid config: {e}") from e

    # Read secret files now so a missing file fails at startup
    _ = config.github_token_resolved, config.dingtalk_token_resolved
    return config
