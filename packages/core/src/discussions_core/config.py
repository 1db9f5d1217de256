import os
from pathlib import Path
from typing import Optional

import yaml

from discussions_core.errors import ConfigurationError

CONFIG_DIR = Path.home() / ".github-discussions"

DEFAULT_CONFIG: dict = {
    "api_url": "https://api.github.com/graphql",
    "max_retries": 3,
    "comment_limit": 100,  # comments fetched per `show`; the API caps a page at 100
    "log_dir": str(CONFIG_DIR / "logs"),
    "output_format": "table",  # table | json | markdown
    "default_repo": None,
}


def load_config(config_path: Optional[str] = None, cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. ~/.github-discussions/config.yml (or ``config_path``)
      3. CLI argument overrides
      4. Environment variables
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path) if config_path else CONFIG_DIR / "config.yml"
    if path.exists():
        try:
            with open(path) as f:
                file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read config file {path}", details=str(e)) from e
        if not isinstance(file_config, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    if os.environ.get("GH_DISCUSSIONS_API_URL"):
        config["api_url"] = os.environ["GH_DISCUSSIONS_API_URL"]
    config["github_token"] = os.environ.get("GITHUB_TOKEN")
    config["debug"] = bool(os.environ.get("DEBUG"))

    return config
