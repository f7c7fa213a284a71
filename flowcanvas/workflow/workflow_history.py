"""
Workflow History — snapshot-based undo/redo.

Two linear stacks of full-graph snapshots, most recent last. A recorded
action captures the graph *before* it mutates and pushes that capture
only once the mutation has succeeded (see ``transaction``), so a failed
action never consumes an undo slot and undo never lands on a
half-applied change.

Snapshots copy nodes, edges and groups. The group selection is view
state and is not part of a snapshot.
"""

from __future__ import annotations

from contextlib import contextmanager
from logging import getLogger
from typing import Iterator, List, Tuple

from pydantic import BaseModel, ConfigDict

from flowcanvas.workflow.workflow_model import NodeGroup, WorkflowEdge, WorkflowNode
from flowcanvas.workflow.workflow_state import WorkflowState

logger = getLogger(__name__)


class HistorySnapshot(BaseModel):
    """Immutable copy of the graph content at one instant."""

    model_config = ConfigDict(frozen=True)

    nodes: Tuple[WorkflowNode, ...] = ()
    edges: Tuple[WorkflowEdge, ...] = ()
    groups: Tuple[NodeGroup, ...] = ()

    @classmethod
    def capture(cls, state: WorkflowState) -> "HistorySnapshot":
        return cls(
            nodes=tuple(n.model_copy(deep=True) for n in state.nodes.values()),
            edges=tuple(e.model_copy(deep=True) for e in state.edges.values()),
            groups=tuple(g.model_copy(deep=True) for g in state.groups.values()),
        )

    def restore(self, state: WorkflowState) -> None:
        """Replace the live graph with a copy of this snapshot."""
        state.nodes = {n.id: n.model_copy(deep=True) for n in self.nodes}
        state.edges = {e.id: e.model_copy(deep=True) for e in self.edges}
        state.groups = {g.id: g.model_copy(deep=True) for g in self.groups}
        if state.selected_group_id not in state.groups:
            state.selected_group_id = None


class WorkflowHistory:
    """Undo/redo stacks bound to one ``WorkflowState``.

    ``limit`` caps the undo stack; the oldest entries are dropped first.
    A limit of 0 keeps everything.
    """

    def __init__(self, state: WorkflowState, limit: int = 50) -> None:
        self._state = state
        self._limit = limit
        self._undo: List[HistorySnapshot] = []
        self._redo: List[HistorySnapshot] = []

    @property
    def undo_stack(self) -> List[HistorySnapshot]:
        """Copies of the undo snapshots, oldest first."""
        return [s.model_copy(deep=True) for s in self._undo]

    @property
    def redo_stack(self) -> List[HistorySnapshot]:
        return [s.model_copy(deep=True) for s in self._redo]

    @property
    def can_undo(self) -> bool:
        return len(self._undo) > 0

    @property
    def can_redo(self) -> bool:
        return len(self._redo) > 0

    def capture(self) -> HistorySnapshot:
        return HistorySnapshot.capture(self._state)

    def push(self, snapshot: HistorySnapshot) -> None:
        """Record ``snapshot`` as the next undo step; the redo timeline forks away."""
        self._undo.append(snapshot)
        if self._limit and len(self._undo) > self._limit:
            del self._undo[: len(self._undo) - self._limit]
        self._redo.clear()

    def push_snapshot(self) -> None:
        self.push(self.capture())

    def undo(self) -> bool:
        """Step back one snapshot. Returns False when there is nothing to undo."""
        if not self._undo:
            return False
        self._redo.append(self.capture())
        self._undo.pop().restore(self._state)
        logger.debug(f"Undo: {len(self._undo)} undo / {len(self._redo)} redo")
        return True

    def redo(self) -> bool:
        """Step forward one snapshot. Returns False when there is nothing to redo."""
        if not self._redo:
            return False
        self._undo.append(self.capture())
        self._redo.pop().restore(self._state)
        logger.debug(f"Redo: {len(self._undo)} undo / {len(self._redo)} redo")
        return True

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()

    @contextmanager
    def transaction(self) -> Iterator[HistorySnapshot]:
        """Run a mutation as one undo step.

        The graph is captured on entry. If the body raises, the graph is
        restored from the capture and the exception propagates with
        nothing recorded; otherwise the capture is pushed.
        """
        before = self.capture()
        selected_group_id = self._state.selected_group_id
        try:
            yield before
        except BaseException:
            before.restore(self._state)
            self._state.selected_group_id = (
                selected_group_id if selected_group_id in self._state.groups else None
            )
            raise
        self.push(before)
