"""GitHub token resolution with credential-store and gh CLI fallback.

Resolution order (stops at first success):
  1. GITHUB_TOKEN environment variable (CI / explicit override)
  2. The credential store (`gh-discussions config --token ...`)
  3. `gh auth token` (GitHub CLI session, available after `gh auth login`)
"""

from __future__ import annotations

import logging
import os
import subprocess
from typing import TYPE_CHECKING

from discussions_core.errors import ConfigurationError

if TYPE_CHECKING:
    from discussions_store.base import BaseCredentialStore

logger = logging.getLogger(__name__)


def resolve_github_token(store: BaseCredentialStore | None = None) -> str | None:
    """Return a GitHub token or None if no valid source is available.

    Never raises. Callers should check for None and emit a UsageError.
    """
    token = os.environ.get("GITHUB_TOKEN")
    if token:
        return token

    if store is not None:
        try:
            token = store.get_token()
        except ConfigurationError as e:
            # An unreadable token file should not hide a working gh session.
            logger.debug("Could not read stored token: %s", e)
            token = None
        if token:
            return token

    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0:
            gh_token = result.stdout.strip()
            if gh_token:
                logger.debug("Resolved GitHub token via gh CLI session.")
                return gh_token
    except (FileNotFoundError, subprocess.TimeoutExpired):
        pass

    return None
