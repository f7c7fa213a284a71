"""FlowCanvas - undoable, group-aware graph state for a visual workflow editor."""

from flowcanvas.config import EditorConfig
from flowcanvas.logging import SessionLogger
from flowcanvas.workflow import WorkflowStore

__all__ = [
    "EditorConfig",
    "SessionLogger",
    "WorkflowStore",
]
