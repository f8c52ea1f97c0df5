"""Exception hierarchy for logbridge."""
from __future__ import annotations

from typing import Any


class LogBridgeError(Exception):
    """Base class for all logbridge errors."""


class UnrecognizedStatusSelector(LogBridgeError, ValueError):
    """A status selector token matched none of the registered status types."""

    def __init__(self, token: Any) -> None:
        self.token = token
        super().__init__(f"Status {token!r} not allowed in log bridge configuration filters")


class FilterConfigError(LogBridgeError):
    """Filter definitions could not be loaded into a Configuration."""


class MatcherDumpError(LogBridgeError):
    """A dumped rule table could not be read back."""
