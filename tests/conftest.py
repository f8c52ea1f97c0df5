"""Shared pytest fixtures for logbridge tests."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from logbridge.filters.models import Configuration, Filter, FilterCollection


@pytest.fixture()
def filters_file(tmp_path: Path):
    """Return a factory that writes a filters document to a temporary JSON file."""

    def _make(data: dict[str, Any], name: str = "filters.json") -> Path:
        p = tmp_path / name
        p.write_text(json.dumps(data), encoding="utf-8")
        return p

    return _make


@pytest.fixture()
def filters_data() -> dict[str, Any]:
    return {
        "active_filters": ["home_errors", "api_writes", "catch_all"],
        "filters": {
            "home_errors": {
                "route": "home",
                "status": ["5xx", "!503"],
                "level": "error",
                "options": {"response_body": True},
            },
            "api_writes": {
                "route": "api_users",
                "method": ["POST", "PUT"],
                "status": [422, "400-404"],
                "level": "warning",
            },
            "catch_all": {"level": "notice"},
            "disabled": {"route": "home", "level": "debug"},
        },
    }


@pytest.fixture()
def configuration() -> Configuration:
    """Two filters from the end-to-end scenario: home errors, everything else warns."""
    return Configuration(FilterCollection([
        Filter(name="A", route="home", level="error"),
        Filter(name="B", level="warning"),
    ]))
