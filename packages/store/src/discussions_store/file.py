"""File-backed stores under ~/.github-discussions/.

    token        the raw token, mode 0600
    config.yml   YAML mapping of user preferences

Read and write failures surface as ConfigurationError so the CLI can exit
with the configuration exit code instead of a traceback.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from discussions_core.errors import ConfigurationError
from discussions_store.base import BaseConfigStore, BaseCredentialStore

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".github-discussions"

_CONFIG_SUGGESTIONS = [
    "Check file permissions in ~/.github-discussions/",
    "Ensure you have write access to your home directory",
]


def _ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True, mode=0o700)
    except OSError as e:
        raise ConfigurationError(
            "Failed to create config directory", details=str(e), suggestions=_CONFIG_SUGGESTIONS
        ) from e


class FileCredentialStore(BaseCredentialStore):
    def __init__(self, config_dir: str | Path = DEFAULT_CONFIG_DIR):
        self._dir = Path(config_dir).expanduser()
        self._token_file = self._dir / "token"

    def get_token(self) -> str | None:
        try:
            token = self._token_file.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise ConfigurationError(
                "Failed to read token file", details=str(e), suggestions=_CONFIG_SUGGESTIONS
            ) from e
        return token or None

    def set_token(self, token: str) -> None:
        _ensure_dir(self._dir)
        try:
            # Create with 0600 up front so the token is never world-readable.
            fd = os.open(self._token_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(token)
        except OSError as e:
            raise ConfigurationError("Failed to save token", details=str(e), suggestions=_CONFIG_SUGGESTIONS) from e
        logger.debug("Saved token to %s", self._token_file)

    def clear_token(self) -> None:
        try:
            self._token_file.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise ConfigurationError("Failed to clear token", details=str(e), suggestions=_CONFIG_SUGGESTIONS) from e


class FileConfigStore(BaseConfigStore):
    def __init__(self, config_path: str | Path = DEFAULT_CONFIG_DIR / "config.yml"):
        self._path = Path(config_path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def get_config(self) -> dict:
        return {**self.default_config(), **self.validate_config(self._read_raw())}

    def update_config(self, partial: dict) -> None:
        # Merge into the raw mapping: the file also holds runtime settings
        # (max_retries, api_url, ...) that this store does not validate.
        merged = {**self._read_raw(), **partial}
        merged = {k: v for k, v in merged.items() if v is not None}
        _ensure_dir(self._path.parent)
        try:
            with open(self._path, "w", encoding="utf-8") as f:
                yaml.safe_dump(merged, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise ConfigurationError(
                "Failed to update config file", details=str(e), suggestions=_CONFIG_SUGGESTIONS
            ) from e

    def _read_raw(self) -> dict:
        try:
            with open(self._path, encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except FileNotFoundError:
            return {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                "Invalid YAML in config file",
                details=str(e),
                suggestions=[
                    f"Check the config file at {self._path}",
                    "Delete the config file to reset to defaults",
                ],
            ) from e
        except OSError as e:
            raise ConfigurationError(
                "Failed to read config file", details=str(e), suggestions=_CONFIG_SUGGESTIONS
            ) from e
        if not isinstance(raw, dict):
            raise ConfigurationError(f"Config file {self._path} must contain a mapping")
        return raw
