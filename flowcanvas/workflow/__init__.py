"""
Workflow Engine — state behind the visual node-graph editor.

Holds the node/edge/group graph, its undo/redo history, the adapter for
canvas change batches, and the duplication engine.

Architecture:
    nodes/             — BaseNode + the registered node kinds
    workflow_model     — Node, edge, group and payload models
    workflow_state     — Live graph arena and its integrity rules
    workflow_history   — Snapshot-based undo/redo
    workflow_changes   — Canvas change-batch adapter
    workflow_duplicate — Duplication and placement
    workflow_store     — The per-session state container
"""

from flowcanvas.workflow.nodes import (
    BaseNode,
    NodePort,
    NodeRegistry,
    get_node_registry,
    register_all_nodes,
)
from flowcanvas.workflow.notifier import LogNotifier, Notifier
from flowcanvas.workflow.workflow_changes import (
    DimensionsChange,
    PositionChange,
    RemoveChange,
    SelectionChange,
)
from flowcanvas.workflow.workflow_errors import (
    EdgeNotFoundError,
    GroupNotFoundError,
    InvalidOperationError,
    NodeNotFoundError,
    NodeTypeNotFoundError,
    NotFoundError,
    ReentrantCallError,
    WorkflowError,
)
from flowcanvas.workflow.workflow_history import HistorySnapshot, WorkflowHistory
from flowcanvas.workflow.workflow_model import (
    ConnectionRequest,
    NodeData,
    NodeGroup,
    Position,
    Rect,
    Size,
    WorkflowEdge,
    WorkflowNode,
)
from flowcanvas.workflow.workflow_state import WorkflowState
from flowcanvas.workflow.workflow_store import WorkflowStore

__all__ = [
    "BaseNode",
    "NodePort",
    "NodeRegistry",
    "get_node_registry",
    "register_all_nodes",
    "LogNotifier",
    "Notifier",
    "DimensionsChange",
    "PositionChange",
    "RemoveChange",
    "SelectionChange",
    "EdgeNotFoundError",
    "GroupNotFoundError",
    "InvalidOperationError",
    "NodeNotFoundError",
    "NodeTypeNotFoundError",
    "NotFoundError",
    "ReentrantCallError",
    "WorkflowError",
    "HistorySnapshot",
    "WorkflowHistory",
    "ConnectionRequest",
    "NodeData",
    "NodeGroup",
    "Position",
    "Rect",
    "Size",
    "WorkflowEdge",
    "WorkflowNode",
    "WorkflowState",
    "WorkflowStore",
]
