"""Filter data model: Filter, FilterCollection and Configuration."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

from ..status.base import StatusToken

# Segment used in compiled keys for "any route / method / status"
WILDCARD = "all"


@dataclass(frozen=True)
class Filter:
    """One declarative logging rule.

    Attributes:
        name:     Identifier of the filter within its collection.
        route:    Route name, or None for any route.
        methods:  HTTP methods as declared; empty means any method.
        status:   Status selector tokens, or None for any status.
        level:    Severity name applied to matching requests.
        options:  Free-form options handed to the logging collaborator.
    """

    name: str
    route: str | None = None
    methods: tuple[str, ...] = ()
    status: tuple[StatusToken, ...] | None = None
    level: str = "info"
    options: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "methods", tuple(self.methods))
        if self.status is not None:
            object.__setattr__(self, "status", tuple(self.status))
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))


class FilterCollection:
    """Named filters in insertion order."""

    def __init__(self, filters: Iterable[Filter] = ()) -> None:
        self._filters: dict[str, Filter] = {}
        for f in filters:
            self.add(f)

    def add(self, f: Filter) -> "FilterCollection":
        """Append a filter and return self for chaining."""
        if f.name in self._filters:
            raise ValueError(f"Filter {f.name!r} is already defined")
        self._filters[f.name] = f
        return self

    def get_by_name(self, name: str) -> Filter | None:
        return self._filters.get(name)

    def names(self) -> list[str]:
        return list(self._filters)

    def __iter__(self) -> Iterator[Filter]:
        return iter(self._filters.values())

    def __len__(self) -> int:
        return len(self._filters)

    def __contains__(self, name: object) -> bool:
        return name in self._filters

    def __repr__(self) -> str:
        return f"FilterCollection({self.names()!r})"


@dataclass(frozen=True)
class Configuration:
    """A filter collection plus the optional list of filters to activate.

    ``active_filters=None`` activates every filter in collection order.
    """

    filters: FilterCollection
    active_filters: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if self.active_filters is not None:
            object.__setattr__(self, "active_filters", tuple(self.active_filters))

    def selected_filters(self) -> list[Filter]:
        """Filters to compile, in priority order. Unknown names are skipped."""
        if self.active_filters is None:
            return list(self.filters)
        selected = []
        for name in self.active_filters:
            f = self.filters.get_by_name(name)
            if f is not None:
                selected.append(f)
        return selected
