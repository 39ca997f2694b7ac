"""Configuration loading from YAML and environment.

Secrets (tokens) are taken from environment variables or from files
(Docker secrets). Never put real tokens in config files committed to the
repo.
"""

from pathlib import Path
from typing import Any
from urllib.parse import urlsplit, urlunsplit

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = Path("prsync.yaml")


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


# Injected by load_config so validators can read env/file
_current_env: dict[str, str] = {}


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="PAT or app token; use env or secret file")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    enterprise_uri: str | None = Field(
        default=None,
        description="GitHub Enterprise host URI (e.g. https://ghe.example.com); enables the avatar proxy",
    )
    timeout: int = Field(default=30, ge=1, description="HTTP timeout in seconds")

    @field_validator("enterprise_uri")
    @classmethod
    def _upgrade_to_https(cls, value: str | None) -> str | None:
        if not value:
            return None
        parts = urlsplit(value)
        if parts.scheme == "http":
            parts = parts._replace(scheme="https")
        return urlunsplit(parts)


class AvatarConfig(BaseSettings):
    """Avatar enrichment settings."""

    model_config = SettingsConfigDict(env_prefix="AVATAR_", extra="ignore")

    # "none" disables gravatar URLs; otherwise passed as the gravatar "d" parameter
    gravatar_style: str = Field(default="none", description="Default gravatar style (identicon, retro, ...)")
    gravatar_size: int = Field(default=200, ge=1, description="Gravatar image size in pixels")
    concurrency: int = Field(default=3, ge=1, description="Max in-flight Enterprise avatar fetches")
    account_workers: int = Field(default=8, ge=1, description="Threads used to enrich accounts in parallel")


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

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    avatars: AvatarConfig = Field(default_factory=AvatarConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config, env or Docker secret file."""
        t = self.github.token
        if t and not t.startswith("${"):
            return t
        return _read_secret("GITHUB_TOKEN", "GITHUB_TOKEN_FILE")


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


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    Secrets: GITHUB_TOKEN or GITHUB_TOKEN_FILE.
    """
    global _current_env
    import os

    _current_env = dict(os.environ)

    path = config_path or DEFAULT_CONFIG_PATH
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text()) or {}
    raw = _substitute_env(raw)

    return AppConfig(
        github=GitHubConfig(**(raw.get("github") or {})),
        avatars=AvatarConfig(**(raw.get("avatars") or {})),
        logging=LoggingConfig(**(raw.get("logging") or {})),
    )
