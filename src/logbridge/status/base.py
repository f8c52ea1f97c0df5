"""Status type Protocol definition.

A status type recognises one syntax of status selector token (a single
code, a range, a class shorthand...) and expands it to concrete HTTP status
codes. Third-party types implement this Protocol and register themselves via
the entry-points mechanism:

    [project.entry-points."logbridge.status_types"]
    teapot = "my_package.status:TeapotStatusType"
"""
from __future__ import annotations

from typing import Protocol, Union, runtime_checkable

StatusToken = Union[int, str]


@runtime_checkable
class StatusType(Protocol):
    """Protocol for status selector recognisers — duck-typed, no inheritance required."""

    def match(self, token: StatusToken) -> bool:
        """Return True if the token uses the syntax handled by this type."""
        ...

    def is_exclude(self, token: StatusToken) -> bool:
        """Return True if the token's codes must be removed from the selection."""
        ...

    def get_status(self, token: StatusToken) -> set[int]:
        """Concrete status codes denoted by the token."""
        ...
