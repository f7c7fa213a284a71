"""
Notifier — user-visible messages raised by the graph store.

The store calls ``show`` on failure paths (a rejected connection, an
empty duplication) and does not wait for or inspect the result. The
default implementation writes the message to the log; a UI supplies
its own toast-backed notifier.
"""

from __future__ import annotations

from logging import ERROR, INFO, WARNING, getLogger
from typing import Literal, Protocol

logger = getLogger(__name__)

NotificationType = Literal["info", "success", "warning", "error"]


class Notifier(Protocol):
    def show(self, message: str, type: NotificationType = "info") -> None: ...


class LogNotifier:
    """Notifier that only logs."""

    _LEVELS = {"info": INFO, "success": INFO, "warning": WARNING, "error": ERROR}

    def show(self, message: str, type: NotificationType = "info") -> None:
        logger.log(self._LEVELS.get(type, INFO), f"[notify:{type}] {message}")
