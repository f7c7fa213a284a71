"""
Session Logger — per-editor-session telemetry.

Keeps an in-memory record of informational, warning and error notices
for one editor session and mirrors every entry to the standard
``logging`` hierarchy. The graph store reports to it but never depends
on what it does with the entries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import INFO, WARNING, ERROR, getLogger
from typing import Any, Dict, List, Optional

from flowcanvas.utils.identifiers import generate_session_id, utc_timestamp

logger = getLogger(__name__)


@dataclass
class LogEntry:
    """A single notice recorded during a session."""
    level: str
    message: str
    timestamp: str
    context: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SessionInfo:
    """Bookkeeping for one editor session."""
    session_id: str
    started_at: str
    ended_at: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    entries: List[LogEntry] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        return self.ended_at is None


class SessionLogger:
    """Collect notices for the current editor session."""

    def __init__(self, max_entries: int = 1000) -> None:
        self._max_entries = max_entries
        self._current: Optional[SessionInfo] = None
        self._sessions: List[SessionInfo] = []

    # ── Session lifecycle ──

    def start_session(self, **metadata: Any) -> str:
        """Open a new session, closing any session still active."""
        if self._current is not None and self._current.is_active:
            self.end_session()
        session = SessionInfo(
            session_id=generate_session_id(),
            started_at=utc_timestamp(),
            metadata=dict(metadata),
        )
        self._current = session
        self._sessions.append(session)
        logger.info(f"Editor session started: {session.session_id}")
        return session.session_id

    def end_session(self) -> None:
        """Close the active session. No-op when none is active."""
        session = self._current
        if session is None or not session.is_active:
            return
        session.ended_at = utc_timestamp()
        logger.info(
            f"Editor session ended: {session.session_id} "
            f"({len(session.entries)} entries)"
        )

    def get_current_session(self) -> Optional[SessionInfo]:
        return self._current

    @property
    def sessions(self) -> List[SessionInfo]:
        return list(self._sessions)

    # ── Notices ──

    def info(self, message: str, **context: Any) -> None:
        self._record(INFO, "info", message, context)

    def warn(self, message: str, **context: Any) -> None:
        self._record(WARNING, "warn", message, context)

    def error(self, message: str, **context: Any) -> None:
        self._record(ERROR, "error", message, context)

    def _record(self, levelno: int, level: str, message: str, context: Dict[str, Any]) -> None:
        logger.log(levelno, message)
        session = self._current
        if session is None or not session.is_active:
            return
        session.entries.append(LogEntry(
            level=level,
            message=message,
            timestamp=utc_timestamp(),
            context=context,
        ))
        if len(session.entries) > self._max_entries:
            del session.entries[0]
