"""In-memory stores. Nothing touches disk.

Used for ``--no-persist`` runs (CI, shared machines) where the token comes
from GITHUB_TOKEN and preferences from flags, and as lightweight fakes in
tests. State lives only as long as the store object.
"""

from __future__ import annotations

from discussions_store.base import BaseConfigStore, BaseCredentialStore


class MemoryCredentialStore(BaseCredentialStore):
    def __init__(self, token: str | None = None):
        self._token = token

    def get_token(self) -> str | None:
        return self._token or None

    def set_token(self, token: str) -> None:
        self._token = token

    def clear_token(self) -> None:
        self._token = None


class MemoryConfigStore(BaseConfigStore):
    def __init__(self, config: dict | None = None):
        self._config = {**self.default_config(), **self.validate_config(config or {})}

    def get_config(self) -> dict:
        return dict(self._config)

    def update_config(self, partial: dict) -> None:
        merged = {**self._config, **partial}
        self._config = {k: v for k, v in merged.items() if v is not None}
