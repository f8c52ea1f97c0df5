"""Load filter definitions from a mapping or a JSON file.

Layout::

    {
        "active_filters": ["home_errors", "catch_all"],
        "filters": {
            "home_errors": {
                "route": "home",
                "method": ["GET", "POST"],
                "status": ["5xx", "!503"],
                "level": "error",
                "options": {"response_body": true}
            },
            "catch_all": {"level": "warning"}
        }
    }

Only the shape is validated; routes, methods and levels are opaque strings.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..config import settings
from ..errors import FilterConfigError
from .models import Configuration, Filter, FilterCollection

logger = logging.getLogger(__name__)


class FilterDefinition(BaseModel):
    """Shape of one entry under ``filters``."""

    model_config = ConfigDict(extra="forbid")

    route: str | None = None
    method: list[str] = Field(default_factory=list)
    status: list[int | str] | None = None
    level: str | None = None
    options: dict[str, Any] = Field(default_factory=dict)

    @field_validator("method", mode="before")
    @classmethod
    def _single_method(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _single_status(cls, value: Any) -> Any:
        if isinstance(value, (int, str)):
            return [value]
        return value


class FiltersDocument(BaseModel):
    """Top-level shape of a filters file."""

    filters: dict[str, FilterDefinition] = Field(default_factory=dict)
    active_filters: list[str] | None = None


def load_configuration(
    data: Mapping[str, Any],
    default_level: str | None = None,
) -> Configuration:
    """Build a Configuration from already-parsed data.

    Args:
        data:           Mapping with ``filters`` and optional ``active_filters``.
        default_level:  Level for filters that declare none. Defaults to
                        ``settings.default_level``.

    Raises:
        FilterConfigError: If the data does not have the expected shape.
    """
    try:
        document = FiltersDocument.model_validate(data)
    except ValidationError as exc:
        raise FilterConfigError(f"Invalid filter configuration:\n{exc}") from exc

    level = default_level or settings.default_level
    collection = FilterCollection()
    for name, definition in document.filters.items():
        collection.add(Filter(
            name=name,
            route=definition.route,
            methods=tuple(definition.method),
            status=tuple(definition.status) if definition.status is not None else None,
            level=definition.level or level,
            options=definition.options,
        ))

    logger.debug(
        "Loaded %d filters (active: %s)",
        len(collection),
        "all" if document.active_filters is None else ", ".join(document.active_filters),
    )
    return Configuration(filters=collection, active_filters=document.active_filters)


def load_configuration_file(
    path: str | Path,
    default_level: str | None = None,
) -> Configuration:
    """Read and parse a JSON filters file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        FilterConfigError: If the file is not valid JSON or has the wrong shape.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise FilterConfigError(f"{path}: invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise FilterConfigError(f"{path}: expected a JSON object at top level")
    return load_configuration(data, default_level=default_level)
