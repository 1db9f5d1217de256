"""Abstract store interfaces.

The CLI depends on these interfaces, not on a concrete backend, so the
on-disk stores can be swapped for in-memory ones (``--no-persist``, tests)
without touching command code.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod

OUTPUT_FORMATS = ("table", "json", "markdown")
_REPO_RE = re.compile(r"^[A-Za-z0-9._-]+/[A-Za-z0-9._-]+$")


def is_valid_repo(repo: str) -> bool:
    return bool(_REPO_RE.match(repo or ""))


class BaseCredentialStore(ABC):
    """Holds the GitHub token between runs."""

    @abstractmethod
    def get_token(self) -> str | None:
        """Return the stored token, or None if none has been saved."""

    @abstractmethod
    def set_token(self, token: str) -> None:
        """Persist ``token``, replacing any previous one."""

    @abstractmethod
    def clear_token(self) -> None:
        """Forget the stored token. A no-op when nothing is stored."""

    def validate_token(self, token: str) -> bool:
        """Return True if GitHub accepts ``token`` as a user credential.

        Raises NetworkError when GitHub cannot be reached, so an outage is not
        mistaken for a bad token.
        """
        from discussions_store.validation import validate_github_token

        return validate_github_token(token)


class BaseConfigStore(ABC):
    """Persistent user preferences: default repository and output format."""

    @abstractmethod
    def get_config(self) -> dict:
        """Return the validated configuration; defaults when nothing is stored."""

    @abstractmethod
    def update_config(self, partial: dict) -> None:
        """Shallow-merge ``partial`` into the stored config.

        Later writes win per key; a None value removes the key. Keys the
        store does not validate are left untouched.
        """

    def get_default_repo(self) -> str | None:
        return self.get_config().get("default_repo")

    def set_default_repo(self, repo: str) -> None:
        self.update_config({"default_repo": repo})

    @staticmethod
    def default_config() -> dict:
        return {"output_format": "table"}

    @staticmethod
    def validate_config(raw: dict) -> dict:
        """Keep only known keys with well-formed values."""
        config: dict = {}
        repo = raw.get("default_repo")
        if isinstance(repo, str) and is_valid_repo(repo):
            config["default_repo"] = repo
        fmt = raw.get("output_format")
        if isinstance(fmt, str) and fmt in OUTPUT_FORMATS:
            config["output_format"] = fmt
        return config
