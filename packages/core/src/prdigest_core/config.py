import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from prdigest_core.digest import DEFAULT_HEADER
from prdigest_core.errors import ConfigError

DEFAULT_CONFIG: dict = {
    "api_url": "https://api.github.com",
    "repos_path": "/user/repos",  # appended to api_url; may carry a query string
    "user_agent": "request",
    "api_version": "2022-11-28",
    "header": DEFAULT_HEADER,
    "log_level": "WARNING",
}

TOKEN_ENV = "GITHUB_TOKEN"
WEBHOOK_ENV = "WEBHOOK_URI"


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for a single run.

    Built once at start-up and handed to the GitHub client and the notifier.
    """

    github_token: str
    webhook_url: str
    api_url: str = DEFAULT_CONFIG["api_url"]
    repos_path: str = DEFAULT_CONFIG["repos_path"]
    user_agent: str = DEFAULT_CONFIG["user_agent"]
    api_version: str = DEFAULT_CONFIG["api_version"]
    header: str = DEFAULT_HEADER

    @property
    def repos_url(self) -> str:
        return f"{self.api_url.rstrip('/')}{self.repos_path}"


def load_config(config_path: str = ".prdigest.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prdigest.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        if not isinstance(file_config, dict):
            raise ConfigError(f"{config_path} must contain a mapping, got {type(file_config).__name__}")
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Credentials only ever come from the environment.
    config["github_token"] = os.environ.get(TOKEN_ENV)
    config["webhook_url"] = os.environ.get(WEBHOOK_ENV)

    return config


def build_settings(config: dict) -> Settings:
    """Validate a merged config dict and freeze it into Settings.

    Raises ConfigError naming the first missing environment variable.
    """
    if not config.get("github_token"):
        raise ConfigError(f"{TOKEN_ENV} environment variable is not set.")
    if not config.get("webhook_url"):
        raise ConfigError(f"{WEBHOOK_ENV} environment variable is not set.")

    return Settings(
        github_token=config["github_token"],
        webhook_url=config["webhook_url"],
        api_url=config.get("api_url") or DEFAULT_CONFIG["api_url"],
        repos_path=config.get("repos_path") or DEFAULT_CONFIG["repos_path"],
        user_agent=config.get("user_agent") or DEFAULT_CONFIG["user_agent"],
        api_version=str(config.get("api_version") or DEFAULT_CONFIG["api_version"]),
        header=config.get("header") or DEFAULT_HEADER,
    )
