"""Filter compiler — expand declarative filters into a flat rule table.

Each filter is expanded over its methods and status codes into canonical
``route.method.status`` keys, where any undeclared segment is the wildcard
``all``:

    Filter(route="home", methods=("GET", "POST"), status=("5xx", "!503"))
      -> home.GET.500 ... home.GET.599 (no 503), same for POST

Filters are processed in priority order (active list, else declaration
order) and the first filter to produce a key keeps it.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from .config import settings
from .errors import UnrecognizedStatusSelector
from .filters.models import WILDCARD, Configuration, Filter
from .matcher import Matcher, RuleTable, generate_filter_key
from .status.base import StatusToken
from .status.manager import StatusTypeManager

logger = logging.getLogger(__name__)


def parse_status(tokens: Iterable[StatusToken], status_types: StatusTypeManager) -> list[int]:
    """Resolve status selector tokens to concrete codes.

    Tokens are applied left to right: inclusions are added to the running
    selection and exclusions removed from it, so ``["5xx", "!503"]`` selects
    every 5xx code except 503. Codes keep their first-seen order.

    Raises:
        UnrecognizedStatusSelector: If no registered type matches a token.
    """
    selected: dict[int, None] = {}
    for token in tokens:
        status_type = status_types.get_type(token)
        if status_type is None:
            raise UnrecognizedStatusSelector(token)
        codes = sorted(status_type.get_status(token))
        if status_type.is_exclude(token):
            for code in codes:
                selected.pop(code, None)
        else:
            selected.update(dict.fromkeys(codes))
    return list(selected)


class FilterCompiler:
    """Compile a Configuration into a rule table.

    Usage::

        compiler = FilterCompiler()
        table = compiler.compile(configuration)
        table["home.all.500"]  # {"level": "error", "options": {...}}
    """

    def __init__(self, status_types: StatusTypeManager | None = None) -> None:
        self._status_types = status_types if status_types is not None else StatusTypeManager.default()

    @property
    def status_types(self) -> StatusTypeManager:
        return self._status_types

    def compile(self, configuration: Configuration) -> RuleTable:
        """Expand every active filter and merge them, first writer wins.

        Raises:
            UnrecognizedStatusSelector: On the first unknown status token.
                No table is returned in that case.
        """
        table: RuleTable = {}
        for f in configuration.selected_filters():
            keys = self.compile_filter(f)
            added = 0
            for key in keys:
                if key not in table:
                    table[key] = {"level": f.level, "options": dict(f.options)}
                    added += 1
            logger.debug(
                "Filter %r: %d keys, %d shadowed by earlier filters",
                f.name, len(keys), len(keys) - added,
            )

        logger.info("Compiled %d filter keys", len(table))
        return table

    def compile_filter(self, f: Filter) -> list[str]:
        """Canonical keys produced by a single filter, in expansion order."""
        route = f.route if f.route is not None else WILDCARD
        methods = f.methods or (WILDCARD,)

        if f.status is None:
            statuses: list[Any] = [WILDCARD]
        else:
            statuses = parse_status(f.status, self._status_types)

        keys: list[str] = []
        for method in methods:
            for status in statuses:
                keys.append(generate_filter_key(route, method, status))
        return keys


def build_matcher(
    configuration: Configuration,
    status_types: StatusTypeManager | None = None,
    default_level: str | None = None,
) -> Matcher:
    """Compile a configuration straight into a ready-to-query Matcher."""
    if status_types is None and settings.discover_status_types:
        status_types = StatusTypeManager.default()
        status_types.discover()
    table = FilterCompiler(status_types).compile(configuration)
    return Matcher(table, default_level=default_level or settings.default_level)
