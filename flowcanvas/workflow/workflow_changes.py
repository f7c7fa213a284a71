"""
Workflow Changes — apply canvas change batches to the graph.

The canvas reports drags, resizes, selection toggles and deletions as
ordered lists of small change descriptors. This module parses them
(plain dicts or models) and applies them to a ``WorkflowState`` in order.

Nothing here records history. A caller that wants a batch to be
undoable (e.g. a multi-delete gesture) pushes a snapshot first.
"""

from __future__ import annotations

from logging import getLogger
from typing import Annotated, Any, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from flowcanvas.workflow.workflow_errors import InvalidOperationError
from flowcanvas.workflow.workflow_model import Position, Size
from flowcanvas.workflow.workflow_state import WorkflowState

logger = getLogger(__name__)


class SelectionChange(BaseModel):
    type: Literal["select"] = "select"
    id: str
    selected: bool


class RemoveChange(BaseModel):
    type: Literal["remove"] = "remove"
    id: str


class PositionChange(BaseModel):
    type: Literal["position"] = "position"
    id: str
    position: Optional[Position] = None
    dragging: Optional[bool] = None


class DimensionsChange(BaseModel):
    type: Literal["dimensions"] = "dimensions"
    id: str
    dimensions: Optional[Size] = None
    resizing: Optional[bool] = None


NodeChange = Annotated[
    Union[SelectionChange, RemoveChange, PositionChange, DimensionsChange],
    Field(discriminator="type"),
]
EdgeChange = Annotated[
    Union[SelectionChange, RemoveChange],
    Field(discriminator="type"),
]

_node_changes = TypeAdapter(List[NodeChange])
_edge_changes = TypeAdapter(List[EdgeChange])


def parse_node_changes(changes: Sequence[Any]) -> List[NodeChange]:
    """Validate a node change batch. The whole batch is rejected on any bad entry."""
    try:
        return _node_changes.validate_python(list(changes))
    except ValidationError as e:
        raise InvalidOperationError(f"Malformed node change batch: {e}") from e


def parse_edge_changes(changes: Sequence[Any]) -> List[EdgeChange]:
    try:
        return _edge_changes.validate_python(list(changes))
    except ValidationError as e:
        raise InvalidOperationError(f"Malformed edge change batch: {e}") from e


def apply_node_changes(state: WorkflowState, changes: Sequence[Any]) -> int:
    """Apply a node change batch in order; returns how many changes applied.

    Changes naming a node that no longer exists are skipped: a batch
    may remove a node and then report a late selection toggle for it.
    """
    applied = 0
    for change in parse_node_changes(changes):
        node = state.nodes.get(change.id)
        if node is None:
            logger.debug(f"Skipping {change.type} change for unknown node {change.id}")
            continue

        if isinstance(change, SelectionChange):
            node.selected = change.selected
        elif isinstance(change, RemoveChange):
            state.remove_nodes([change.id])
        elif isinstance(change, PositionChange):
            if change.position is not None:
                node.position = change.position.model_copy()
            if change.dragging is not None:
                node.dragging = change.dragging
        elif isinstance(change, DimensionsChange):
            if change.dimensions is not None:
                node.measured = change.dimensions.model_copy()
        applied += 1
    return applied


def apply_edge_changes(state: WorkflowState, changes: Sequence[Any]) -> int:
    """Apply an edge change batch in order; returns how many changes applied."""
    applied = 0
    for change in parse_edge_changes(changes):
        edge = state.edges.get(change.id)
        if edge is None:
            logger.debug(f"Skipping {change.type} change for unknown edge {change.id}")
            continue

        if isinstance(change, SelectionChange):
            edge.selected = change.selected
        elif isinstance(change, RemoveChange):
            state.remove_edge(change.id)
        applied += 1
    return applied
