"""Token validation against the GitHub REST API via PyGithub."""

from __future__ import annotations

import logging

import requests
from github import Auth, BadCredentialsException, Github, GithubException

from discussions_core.errors import NETWORK_SUGGESTIONS, NetworkError

logger = logging.getLogger(__name__)


def validate_github_token(token: str) -> bool:
    """Perform a lightweight identity check (``GET /user``) with ``token``."""
    if not token or not token.strip():
        return False
    gh = Github(auth=Auth.Token(token.strip()), retry=None)
    try:
        login = gh.get_user().login
    except BadCredentialsException:
        return False
    except GithubException as e:
        if e.status in (401, 403):
            return False
        raise NetworkError("Failed to validate token", details=str(e), suggestions=NETWORK_SUGGESTIONS) from e
    except requests.RequestException as e:
        raise NetworkError("Failed to validate token", details=repr(e), suggestions=NETWORK_SUGGESTIONS) from e
    finally:
        gh.close()
    logger.debug("Token belongs to %s", login)
    return bool(login)
