"""
Session Logging Module

Provides per-session telemetry for the FlowCanvas editor.
"""
from flowcanvas.logging.session_logger import LogEntry, SessionInfo, SessionLogger

__all__ = ['LogEntry', 'SessionInfo', 'SessionLogger']
