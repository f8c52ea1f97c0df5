"""Status type manager — ordered registry of status selector types.

Resolution order:
  1. Built-in types (single code, range, class, comparison).
  2. Entry-points under the "logbridge.status_types" group (third-party packages).
  3. Types explicitly registered at runtime via StatusTypeManager.register().

The first registered type whose ``match`` accepts a token wins.
"""
from __future__ import annotations

import importlib.metadata
import logging

from .base import StatusToken, StatusType
from .types import builtin_status_types

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "logbridge.status_types"


class StatusTypeManager:
    """Ordered registry of status selector types.

    Usage::

        manager = StatusTypeManager.default()
        manager.discover()  # loads entry-point types

        status_type = manager.get_type("5xx")
        if status_type is None:
            raise UnrecognizedStatusSelector("5xx")
    """

    def __init__(self, types: list[StatusType] | None = None) -> None:
        self._types: list[StatusType] = []
        for status_type in types or []:
            self.register(status_type)

    @classmethod
    def default(cls) -> "StatusTypeManager":
        """Manager holding the built-in types in their standard order."""
        return cls(builtin_status_types())

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, status_type: StatusType, index: int | None = None) -> "StatusTypeManager":
        """Append a type, or insert it at ``index`` to give it precedence."""
        if not isinstance(status_type, StatusType):
            raise TypeError(f"{status_type!r} does not implement StatusType")
        if index is None:
            self._types.append(status_type)
        else:
            self._types.insert(index, status_type)
        logger.debug("Registered status type: %s", type(status_type).__name__)
        return self

    # ------------------------------------------------------------------
    # Discovery via entry-points
    # ------------------------------------------------------------------

    def discover(self) -> int:
        """Load all types from the 'logbridge.status_types' entry-point group.

        Returns the number of types successfully loaded.
        """
        loaded = 0
        try:
            eps = importlib.metadata.entry_points(group=ENTRY_POINT_GROUP)
        except Exception as exc:
            logger.warning("Entry-point discovery failed: %s", exc)
            return 0

        for ep in eps:
            try:
                obj = ep.load()
                instance = obj() if isinstance(obj, type) else obj
                self.register(instance)
                loaded += 1
            except Exception as exc:
                logger.warning("Failed to load status type %r: %s", ep.name, exc)

        return loaded

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_types(self) -> list[StatusType]:
        return list(self._types)

    def get_type(self, token: StatusToken) -> StatusType | None:
        """First registered type recognising ``token``, or None."""
        for status_type in self._types:
            if status_type.match(token):
                return status_type
        return None

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        names = ", ".join(type(t).__name__ for t in self._types)
        return f"StatusTypeManager([{names}])"
