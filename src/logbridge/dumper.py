"""Dump a compiled matcher as a build artifact and load it back.

The dumped table is a cache of the compiler's output, so a process can start
without recompiling filters:

    logbridge compile filters.json --output json > matcher.json

JSON documents have the shape ``{"default_level": str, "filters": {...}}``.
Python dumps are importable modules holding the same data as literals.
"""
from __future__ import annotations

import json
import pprint
from typing import Any

from .errors import MatcherDumpError
from .matcher import Matcher

_PYTHON_TEMPLATE = '''\
"""Compiled logbridge filters.

This module has been auto-generated by logbridge. Do not edit.
"""

DEFAULT_LEVEL = {default_level!r}

{name} = {table}
'''


def dump_json(matcher: Matcher, indent: int | None = 2) -> str:
    """Serialize the matcher's table and default level to JSON.

    Raises:
        MatcherDumpError: If an entry holds values JSON cannot carry unchanged
            (dates, tuples, sets, NaN...).
    """
    document = {"default_level": matcher.default_level, "filters": matcher.get_filters()}
    try:
        text = json.dumps(document, indent=indent, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise MatcherDumpError(f"Matcher table is not JSON serializable: {exc}") from exc
    if json.loads(text) != document:
        raise MatcherDumpError("Matcher table does not survive a JSON round-trip unchanged")
    return text


def load_json(text: str) -> Matcher:
    """Rebuild a Matcher from dump_json output.

    Raises:
        MatcherDumpError: If the document is not a valid dump.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MatcherDumpError(f"Invalid matcher dump: {exc}") from exc

    if not isinstance(data, dict) or not isinstance(data.get("filters"), dict):
        raise MatcherDumpError("Matcher dump must be an object with a 'filters' object")
    default_level = data.get("default_level", "info")
    if not isinstance(default_level, str):
        raise MatcherDumpError("'default_level' must be a string")

    filters: dict[str, Any] = {}
    for key, entry in data["filters"].items():
        if not isinstance(entry, dict) or not isinstance(entry.get("level"), str):
            raise MatcherDumpError(f"Entry {key!r} must be an object with a string 'level'")
        if not isinstance(entry.get("options", {}), dict):
            raise MatcherDumpError(f"Entry {key!r} has non-object 'options'")
        filters[key] = {"level": entry["level"], "options": entry.get("options", {})}

    return Matcher(default_level=default_level).set_filters(filters, overwrite=True)


def dump_python(matcher: Matcher, name: str = "FILTERS") -> str:
    """Render the table as the source of an importable Python module."""
    if not name.isidentifier():
        raise ValueError(f"{name!r} is not a valid Python identifier")
    table = pprint.pformat(matcher.get_filters(), indent=4, sort_dicts=False)
    return _PYTHON_TEMPLATE.format(default_level=matcher.default_level, name=name, table=table)
