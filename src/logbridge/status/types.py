"""Built-in status selector types.

Every type accepts an optional leading ``!`` marking an exclusion:

    404        single code
    400-422    inclusive range
    5xx / 5*   whole status class
    >=500      comparison, bounded to the valid status space
    !503       any of the above, subtracted from the selection

Single codes and range bounds must lie in the valid status space (100 to 599);
comparison bounds may lie outside it, the selection is clamped to it.
"""
from __future__ import annotations

import re

from .base import StatusToken

EXCLUDE_MARKER = "!"

MIN_STATUS = 100
MAX_STATUS = 599

_SIMPLE_RE = re.compile(r"^!?(?P<code>[1-5][0-9]{2})$")
_RANGE_RE = re.compile(r"^!?(?P<start>[1-5][0-9]{2})-(?P<end>[1-5][0-9]{2})$")
_CLASS_RE = re.compile(r"^!?(?P<cls>[1-5])(?:xx|XX|\*)$")
_COMPARISON_RE = re.compile(r"^!?(?P<op>>=|<=|>|<)(?P<code>[0-9]{3})$")


def _normalize(token: StatusToken) -> str:
    return str(token).strip()


class _RegexStatusType:
    """Shared matching logic for the pattern-based types below."""

    pattern: re.Pattern[str]

    def match(self, token: StatusToken) -> bool:
        return self.pattern.match(_normalize(token)) is not None

    def is_exclude(self, token: StatusToken) -> bool:
        return _normalize(token).startswith(EXCLUDE_MARKER)

    def _groups(self, token: StatusToken) -> dict[str, str]:
        m = self.pattern.match(_normalize(token))
        if m is None:
            raise ValueError(f"{token!r} is not a {type(self).__name__} token")
        return m.groupdict()


class SimpleStatusType(_RegexStatusType):
    """A single three-digit code: ``404``."""

    pattern = _SIMPLE_RE

    def get_status(self, token: StatusToken) -> set[int]:
        return {int(self._groups(token)["code"])}


class RangeStatusType(_RegexStatusType):
    """An inclusive range: ``400-422``. Reversed bounds are swapped."""

    pattern = _RANGE_RE

    def get_status(self, token: StatusToken) -> set[int]:
        groups = self._groups(token)
        start, end = sorted((int(groups["start"]), int(groups["end"])))
        return set(range(start, end + 1))


class ClassStatusType(_RegexStatusType):
    """A whole class of codes: ``5xx`` (or ``5*``) is 500 to 599."""

    pattern = _CLASS_RE

    def get_status(self, token: StatusToken) -> set[int]:
        base = int(self._groups(token)["cls"]) * 100
        return set(range(base, base + 100))


class ComparisonStatusType(_RegexStatusType):
    """Every valid code on one side of a bound: ``>=500``, ``<400``."""

    pattern = _COMPARISON_RE

    def get_status(self, token: StatusToken) -> set[int]:
        groups = self._groups(token)
        op, code = groups["op"], int(groups["code"])
        if op == ">=":
            start, end = code, MAX_STATUS
        elif op == ">":
            start, end = code + 1, MAX_STATUS
        elif op == "<=":
            start, end = MIN_STATUS, code
        else:
            start, end = MIN_STATUS, code - 1
        return set(range(max(start, MIN_STATUS), min(end, MAX_STATUS) + 1))


def builtin_status_types() -> list[_RegexStatusType]:
    """Built-in types in evaluation order."""
    return [
        SimpleStatusType(),
        RangeStatusType(),
        ClassStatusType(),
        ComparisonStatusType(),
    ]
