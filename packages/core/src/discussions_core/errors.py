"""Error taxonomy for the GitHub Discussions access layer.

Every failure that leaves the core is an ``AppError``. The concrete subclass
is the tag: callers dispatch on type (``except NetworkError``) or on the
``kind`` class attribute, never by inspecting loose attributes.

    AppError
      ├── AuthenticationError   credential invalid/expired — never retried
      ├── NetworkError          transport failure — retried
      ├── ApiError              remote-reported logical failure — retried
      ├── ConfigurationError    local state unreadable/unwritable — surfaced immediately
      └── ValidationError       malformed caller input — surfaced immediately
"""

from __future__ import annotations

import enum
import re
from typing import Any

import httpx


class ErrorKind(str, enum.Enum):
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    API_ERROR = "API_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"


AUTH_SUGGESTIONS = (
    "Check your GitHub Personal Access Token",
    "Ensure the token has discussions scope",
    "Run gh-discussions config to update your token",
)

NETWORK_SUGGESTIONS = (
    "Check your internet connection",
    "Try again later",
)

_NOT_FOUND_RE = re.compile(r"not found|404|could not resolve", re.IGNORECASE)


class AppError(Exception):
    """Base class for all classified failures.

    ``details`` is an opaque diagnostic payload (usually the remote error
    list); ``context`` is filled in by the executor when the error reaches
    the top level.
    """

    kind: ErrorKind = ErrorKind.API_ERROR

    def __init__(
        self,
        message: str,
        details: Any = None,
        suggestions: list[str] | tuple[str, ...] | None = None,
        context: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details
        self.suggestions = list(suggestions or [])
        self.context = context

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"type": self.kind.value, "message": self.message}
        if self.details is not None:
            data["details"] = self.details
        if self.suggestions:
            data["suggestions"] = list(self.suggestions)
        if self.context is not None:
            data["context"] = self.context
        return data

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class AuthenticationError(AppError):
    kind = ErrorKind.AUTHENTICATION_ERROR


class NetworkError(AppError):
    kind = ErrorKind.NETWORK_ERROR


class ApiError(AppError):
    kind = ErrorKind.API_ERROR


class ConfigurationError(AppError):
    kind = ErrorKind.CONFIGURATION_ERROR


class ValidationError(AppError):
    kind = ErrorKind.VALIDATION_ERROR


class GraphQLResponseError(Exception):
    """Raised by the transport when the response carries an ``errors`` list.

    Internal to the core: ``classify_error`` always converts it before it
    crosses the component boundary.
    """

    def __init__(self, errors: list[dict], status_code: int = 200):
        self.errors = errors
        self.status_code = status_code
        first = errors[0] if errors else {}
        super().__init__(first.get("message") or "GraphQL request failed")

    @property
    def error_type(self) -> str | None:
        return self.errors[0].get("type") if self.errors else None


def authentication_error() -> AuthenticationError:
    return AuthenticationError("Invalid or expired GitHub token", suggestions=AUTH_SUGGESTIONS)


def classify_error(exc: BaseException) -> AppError:
    """Map any raised failure onto the error taxonomy.

    Safe to apply more than once: an ``AppError`` is returned unchanged.
    """
    if isinstance(exc, AppError):
        return exc

    if isinstance(exc, GraphQLResponseError):
        if exc.error_type == "UNAUTHORIZED":
            return authentication_error()
        return ApiError(str(exc), details=exc.errors)

    if isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code == 401:
        return authentication_error()

    if isinstance(exc, (httpx.TransportError, ConnectionError)):
        return NetworkError("Network connection failed", details=repr(exc), suggestions=NETWORK_SUGGESTIONS)

    return ApiError(str(exc) or "Unknown error occurred", details=repr(exc))


def suggestions_for(kind: ErrorKind, message: str = "") -> list[str]:
    """Return remediation advice for an error that arrived without any."""
    if kind is ErrorKind.AUTHENTICATION_ERROR:
        return [
            "Check your GitHub Personal Access Token",
            "Run: gh-discussions config --token <new-token>",
            "Ensure token has required scopes (repo or public_repo)",
        ]
    if kind is ErrorKind.NETWORK_ERROR:
        return [
            "Check your internet connection",
            "Verify GitHub API is accessible",
            "Try again with DEBUG=1 for more details",
            "Check if you're behind a proxy",
        ]
    if kind is ErrorKind.API_ERROR and _NOT_FOUND_RE.search(message or ""):
        return [
            "Verify the repository exists and is accessible",
            "Check if Discussions are enabled for the repository",
            "Ensure the discussion number is correct",
        ]
    if kind is ErrorKind.API_ERROR:
        return [
            "Check GitHub API status at https://www.githubstatus.com/",
            "Verify your request parameters",
            "Try reducing the request size",
        ]
    if kind is ErrorKind.CONFIGURATION_ERROR:
        return [
            "Check the config files in ~/.github-discussions/",
            "Ensure you have write access to your home directory",
            "Run gh-discussions config --clear to reset to defaults",
        ]
    if kind is ErrorKind.VALIDATION_ERROR:
        return [
            "Repositories are given as owner/name",
            "Discussions are addressed by their number, e.g. 42",
        ]
    return [
        "Check the error details above",
        "Run with DEBUG=1 for more information",
    ]


_EXIT_CODES = {
    ErrorKind.AUTHENTICATION_ERROR: 2,
    ErrorKind.NETWORK_ERROR: 3,
    ErrorKind.CONFIGURATION_ERROR: 4,
    ErrorKind.VALIDATION_ERROR: 5,
}


def exit_code_for(kind: ErrorKind) -> int:
    return _EXIT_CODES.get(kind, 1)


_LABELS = {
    ErrorKind.AUTHENTICATION_ERROR: "Authentication Error",
    ErrorKind.NETWORK_ERROR: "Network Error",
    ErrorKind.API_ERROR: "API Error",
    ErrorKind.CONFIGURATION_ERROR: "Configuration Error",
    ErrorKind.VALIDATION_ERROR: "Validation Error",
}


def error_label(kind: ErrorKind) -> str:
    return _LABELS.get(kind, "Error")


def parse_repo(repo_id: str) -> tuple[str, str]:
    """Split ``owner/name`` on the first slash.

    Both segments must be non-empty; anything else is a ``ValidationError``.
    Everything after the first slash is the name, passed through verbatim.
    """
    owner, sep, name = (repo_id or "").partition("/")
    if not sep or not owner or not name:
        raise ValidationError(
            f"Invalid repository identifier: {repo_id!r}",
            suggestions=["Use the owner/name format, e.g. octocat/hello-world"],
        )
    return owner, name
