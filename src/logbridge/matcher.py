"""Matcher — resolve (route, method, status) against a compiled rule table.

Lookup walks a fixed specificity cascade and stops at the first key present
in the table:

    1. route.method.status      5. route.all.all
    2. route.method.all         6. all.all.status
    3. route.all.status         7. all.method.all
    4. all.method.status        8. all.all.all

The table is read-only once built; add_filter/set_filters exist for
rebuilding and must not race with readers.
"""
from __future__ import annotations

from typing import Any, Mapping

from .filters.models import WILDCARD

# canonical key -> {"level": str, "options": dict}
RuleTable = dict[str, dict[str, Any]]


def generate_filter_key(route: Any, method: Any, status: Any) -> str:
    """Canonical ``route.method.status`` key, segments taken verbatim."""
    return f"{route}.{method}.{status}"


class Matcher:
    """Priority-cascade lookup over a compiled rule table.

    Usage::

        matcher = Matcher(FilterCompiler().compile(configuration), default_level="info")
        if matcher.match("home", "GET", 500):
            logger.log(matcher.get_level("home", "GET", 500), ...)
    """

    def __init__(self, filters: RuleTable | None = None, default_level: str = "info") -> None:
        self._filters: RuleTable = {}
        self._default_level = default_level
        if filters:
            self.set_filters(filters)

    @property
    def default_level(self) -> str:
        return self._default_level

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def generate_filter_key(self, route: Any, method: Any, status: Any) -> str:
        return generate_filter_key(route, method, status)

    def get_positive_matcher(self, route: Any, method: Any, status: Any) -> list[tuple[Any, Any, Any]]:
        """Candidate (route, method, status) triples, most specific first."""
        return [
            (route, method, status),
            (route, method, WILDCARD),
            (route, WILDCARD, status),
            (WILDCARD, method, status),
            (route, WILDCARD, WILDCARD),
            (WILDCARD, WILDCARD, status),
            (WILDCARD, method, WILDCARD),
            (WILDCARD, WILDCARD, WILDCARD),
        ]

    def get_match_filter_key(self, route: Any, method: Any, status: Any) -> str | None:
        """Key of the rule governing this request, or None."""
        if not self._filters:
            return None
        for candidate in self.get_positive_matcher(route, method, status):
            key = self.generate_filter_key(*candidate)
            if key in self._filters:
                return key
        return None

    def match(self, route: Any, method: Any, status: Any) -> bool:
        return self.get_match_filter_key(route, method, status) is not None

    def get_level(self, route: Any, method: Any, status: Any) -> str:
        key = self.get_match_filter_key(route, method, status)
        if key is None:
            return self._default_level
        return self._filters[key]["level"]

    def get_options(self, route: Any, method: Any, status: Any) -> dict[str, Any]:
        key = self.get_match_filter_key(route, method, status)
        if key is None:
            return {}
        return dict(self._filters[key]["options"])

    # ------------------------------------------------------------------
    # Table management
    # ------------------------------------------------------------------

    def has_filter(self, key: str) -> bool:
        return key in self._filters

    def add_filter(
        self,
        key: str,
        level: str | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> "Matcher":
        """Insert an entry unless the key already exists (first writer wins)."""
        if not self.has_filter(key):
            self._filters[key] = {
                "level": level if level is not None else self._default_level,
                "options": dict(options) if options is not None else {},
            }
        return self

    def set_filters(self, filters: Mapping[str, Mapping[str, Any]], overwrite: bool = False) -> "Matcher":
        """Merge entries through add_filter, or replace the whole table."""
        if overwrite:
            self._filters = dict(filters)  # type: ignore[arg-type]
        else:
            for key, entry in filters.items():
                self.add_filter(key, entry.get("level"), entry.get("options"))
        return self

    def get_filters(self) -> RuleTable:
        return self._filters

    def __len__(self) -> int:
        return len(self._filters)

    def __contains__(self, key: object) -> bool:
        return key in self._filters

    def __repr__(self) -> str:
        return f"Matcher({len(self._filters)} filters, default_level={self._default_level!r})"
