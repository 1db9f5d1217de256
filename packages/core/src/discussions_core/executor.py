"""Retry, backoff and terminal failure handling around API operations.

Per invocation of ``run``:

    ATTEMPTING(1) ──ok──▶ SUCCESS
         │
         └─fail─▶ classify ──auth/validation/config──▶ FAILED
                      │
                      ├─ n < max_retries ─▶ sleep(backoff_delay(n)) ─▶ ATTEMPTING(n+1)
                      └─ n == max_retries ─▶ FAILED (last error)

FAILED enriches the error with its context, fills in suggestions, writes a
diagnostic record, prints the report and exits with the kind's exit code.
Nothing survives between invocations: the attempt counter lives on the stack.
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, NoReturn, TypeVar

from discussions_core.diagnostics import DiagnosticLog
from discussions_core.errors import AppError, ErrorKind, classify_error, exit_code_for, suggestions_for
from discussions_core.reporting import render_error

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_RETRIES = 3
BASE_DELAY_SECONDS = 1.0
MAX_DELAY_SECONDS = 5.0

# Retrying cannot fix a bad credential, bad input or a broken local config.
_NOT_RETRIED = frozenset(
    {
        ErrorKind.AUTHENTICATION_ERROR,
        ErrorKind.VALIDATION_ERROR,
        ErrorKind.CONFIGURATION_ERROR,
    }
)


def backoff_delay(attempt: int) -> float:
    """Seconds to wait after failed attempt ``attempt`` (1-based): 1, 2, 4, capped at 5."""
    return min(BASE_DELAY_SECONDS * 2 ** (attempt - 1), MAX_DELAY_SECONDS)


@dataclass
class ErrorContext:
    """Where a failure happened, attached to the error when it is reported."""

    operation: str
    repository: str | None = None
    discussion_id: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def as_dict(self) -> dict:
        data = {"operation": self.operation, "timestamp": self.timestamp.isoformat()}
        if self.repository:
            data["repository"] = self.repository
        if self.discussion_id:
            data["discussion_id"] = str(self.discussion_id)
        return data


class ResilientExecutor:
    """Run an operation under the retry policy and report terminal failures.

    ``sleep``, ``report`` and ``exit`` are injectable so tests can skip real
    waits, capture output and observe the exit code.
    """

    def __init__(
        self,
        max_retries: int = DEFAULT_MAX_RETRIES,
        sleep: Callable[[float], None] = time.sleep,
        diagnostics: DiagnosticLog | None = None,
        report: Callable[[AppError], None] = render_error,
        exit: Callable[[int], NoReturn] = sys.exit,
    ):
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self.max_retries = max_retries
        self._sleep = sleep
        self._diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
        self._report = report
        self._exit = exit

    def run(self, operation: Callable[[], T], context: ErrorContext) -> T:
        """Return the operation's result, or report and terminate the process."""
        try:
            return self.retry(operation, context)
        except AppError as error:
            self.fail(error, context)
            raise  # only reached when an injected exit returns

    def retry(self, operation: Callable[[], T], context: ErrorContext) -> T:
        """Return the operation's result, or raise the last classified error."""
        attempt = 1
        while True:
            try:
                return operation()
            except Exception as e:
                error = classify_error(e)
                if error.kind in _NOT_RETRIED:
                    logger.debug("%s failed with %s; not retrying", context.operation, error.kind.value)
                    raise error
                if attempt >= self.max_retries:
                    logger.debug("%s failed after %d attempts", context.operation, attempt)
                    raise error

                delay = backoff_delay(attempt)
                logger.warning(
                    "Attempt %d/%d of %s failed (%s), retrying in %dms...",
                    attempt,
                    self.max_retries,
                    context.operation,
                    error.message,
                    int(delay * 1000),
                )
                self._sleep(delay)
                attempt += 1

    def fail(self, error: AppError, context: ErrorContext) -> NoReturn:
        """Terminal state: enrich, log, report and exit with the kind's code."""
        enrich(error, context)
        self._diagnostics.write(error)
        self._report(error)
        self._exit(exit_code_for(error.kind))


def enrich(error: AppError, context: ErrorContext) -> AppError:
    """Attach ``context`` and default suggestions, keeping anything already present."""
    error.context = {**(error.context or {}), **context.as_dict()}
    if not error.suggestions:
        error.suggestions = suggestions_for(error.kind, error.message)
    return error
