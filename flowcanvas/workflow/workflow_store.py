"""
Workflow Store — the editor's state container.

One ``WorkflowStore`` is created per editor session and handed to the
view layer. It owns the live graph (``WorkflowState``), its undo/redo
history (``WorkflowHistory``) and the two collaborators it reports to:
a ``SessionLogger`` for telemetry and a ``Notifier`` for user-visible
messages.

Two kinds of mutation go through the store:

    - high-level actions (``add_node``, ``on_connect``, ``create_group``,
      ``duplicate_selected_nodes`` …). Each recorded action is a single
      undo step: the graph is captured before it changes.
    - canvas change batches (``on_nodes_change`` / ``on_edges_change``).
      These never record history; call ``push_history_snapshot`` first
      to make a batch undoable.

Actions that reference missing ids or ask for something invalid are
no-ops: the graph is left untouched, no undo step is consumed, a warning
is logged and, for user gestures, the notifier is told.
"""

from __future__ import annotations

import functools
from logging import getLogger
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar, Union

from pydantic import ValidationError

from flowcanvas.config import EditorConfig
from flowcanvas.logging import SessionLogger
from flowcanvas.utils.identifiers import generate_edge_id, generate_group_id, generate_node_id
from flowcanvas.workflow.nodes import get_node_registry
from flowcanvas.workflow.notifier import LogNotifier, Notifier, NotificationType
from flowcanvas.workflow.workflow_changes import apply_edge_changes, apply_node_changes
from flowcanvas.workflow.workflow_duplicate import duplicate_nodes
from flowcanvas.workflow.workflow_errors import (
    InvalidOperationError,
    NodeTypeNotFoundError,
    ReentrantCallError,
    WorkflowError,
)
from flowcanvas.workflow.workflow_history import HistorySnapshot, WorkflowHistory
from flowcanvas.workflow.workflow_model import (
    ConnectionRequest,
    NodeGroup,
    Position,
    Size,
    WorkflowEdge,
    WorkflowNode,
)
from flowcanvas.workflow.workflow_state import WorkflowState

logger = getLogger(__name__)

PositionLike = Union[Position, Mapping[str, float]]
F = TypeVar("F", bound=Callable[..., Any])


def _store_action(notify: bool = False) -> Callable[[F], F]:
    """Wrap a public store method.

    Rejects reentrant calls, and turns ``WorkflowError`` into a logged
    no-op returning None. ``notify`` also surfaces the failure to the
    user through the notifier.
    """

    def decorator(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(self: "WorkflowStore", *args: Any, **kwargs: Any) -> Any:
            if self._active_action is not None:
                raise ReentrantCallError(
                    f"{fn.__name__}() called while {self._active_action}() is running"
                )
            self._active_action = fn.__name__
            try:
                return fn(self, *args, **kwargs)
            except WorkflowError as e:
                self._report_failure(fn.__name__, e, notify)
                return None
            finally:
                self._active_action = None

        return wrapper  # type: ignore[return-value]

    return decorator


def _as_position(value: Optional[PositionLike]) -> Position:
    if value is None:
        return Position()
    try:
        return Position.model_validate(value).model_copy()
    except ValidationError as e:
        raise InvalidOperationError(f"Invalid position: {value!r}") from e


class WorkflowStore:
    """Undoable, group-aware graph state for one editor session."""

    def __init__(
        self,
        config: Optional[EditorConfig] = None,
        session_logger: Optional[SessionLogger] = None,
        notifier: Optional[Notifier] = None,
    ) -> None:
        self._config = config or EditorConfig.get_default_instance()
        self._state = WorkflowState()
        self._history = WorkflowHistory(self._state, limit=self._config.history_limit)
        self._session = session_logger or SessionLogger()
        self._notifier: Notifier = notifier or LogNotifier()
        self._active_action: Optional[str] = None
        self._emit("start_session", history_limit=self._config.history_limit)
        logger.info("WorkflowStore initialized")

    def close(self) -> None:
        """End the editor session."""
        self._emit("end_session")

    # ── State ──

    @property
    def config(self) -> EditorConfig:
        return self._config

    @property
    def nodes(self) -> List[WorkflowNode]:
        return list(self._state.nodes.values())

    @property
    def edges(self) -> List[WorkflowEdge]:
        return list(self._state.edges.values())

    @property
    def groups(self) -> Dict[str, NodeGroup]:
        return dict(self._state.groups)

    @property
    def selected_group_id(self) -> Optional[str]:
        return self._state.selected_group_id

    @property
    def undo_history(self) -> List[HistorySnapshot]:
        return self._history.undo_stack

    @property
    def redo_history(self) -> List[HistorySnapshot]:
        return self._history.redo_stack

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def get_node(self, node_id: str) -> Optional[WorkflowNode]:
        return self._state.nodes.get(node_id)

    def get_group(self, group_id: str) -> Optional[NodeGroup]:
        return self._state.groups.get(group_id)

    def check_integrity(self) -> List[str]:
        return self._state.check_integrity()

    # ── Nodes ──

    @_store_action()
    def add_node(self, node_type: str, position: Optional[PositionLike] = None) -> Optional[str]:
        """Place a new node of ``node_type`` with its default data."""
        kind = get_node_registry().get(node_type)
        if kind is None:
            raise NodeTypeNotFoundError(node_type)
        node = WorkflowNode(
            id=generate_node_id(node_type),
            type=node_type,
            position=_as_position(position),
            data=kind.default_data(),
        )
        with self._history.transaction():
            self._state.insert_node(node)
        logger.debug(f"Node added: {node.id}")
        return node.id

    @_store_action()
    def remove_node(self, node_id: str) -> None:
        """Remove a node and every edge touching it. Its group record stays."""
        self._state.get_node(node_id)
        with self._history.transaction():
            removed_edges = self._state.remove_nodes([node_id])
        logger.debug(f"Node removed: {node_id} ({len(removed_edges)} edges)")

    @_store_action()
    def update_node_data(self, node_id: str, partial: Mapping[str, Any]) -> None:
        """Shallow-merge ``partial`` into the node's data.

        Updates that only touch the kind's untracked fields (generation
        output such as gallery images) are applied without an undo step.
        """
        node = self._state.get_node(node_id)
        if not partial:
            return
        kind = self._state.node_kind(node)
        try:
            merged = node.data.merged(dict(partial))
        except ValidationError as e:
            raise InvalidOperationError(f"Invalid data for {node.type} node {node_id}: {e}") from e

        if kind.is_untracked_update(partial):
            node.data = merged
            return
        with self._history.transaction():
            node.data = merged

    # ── Edges ──

    @_store_action(notify=True)
    def on_connect(
        self,
        connection: Union[ConnectionRequest, Mapping[str, Any]],
    ) -> Optional[str]:
        """Wire an output port to an input port.

        Rejected: unknown nodes or handles, self-loops, mismatched data
        types and an already existing identical connection. An input
        port that accepts a single edge has its previous edge replaced
        within the same undo step.
        """
        try:
            request = ConnectionRequest.model_validate(connection)
        except ValidationError as e:
            raise InvalidOperationError(f"Malformed connection: {e}") from e

        source = self._state.get_node(request.source)
        target = self._state.get_node(request.target)
        if source.id == target.id:
            raise InvalidOperationError("Cannot connect a node to itself")

        out_port = self._state.node_kind(source).get_output_port(request.source_handle)
        if out_port is None:
            raise InvalidOperationError(
                f"{source.type} node has no output '{request.source_handle}'"
            )
        in_port = self._state.node_kind(target).get_input_port(request.target_handle)
        if in_port is None:
            raise InvalidOperationError(
                f"{target.type} node has no input '{request.target_handle}'"
            )
        if out_port.data_type != in_port.data_type:
            raise InvalidOperationError(
                f"Cannot connect {out_port.data_type} output to {in_port.data_type} input"
            )

        replaced: List[str] = []
        for edge in self._state.edges.values():
            if edge.target != target.id or edge.target_handle != in_port.id:
                continue
            if edge.source == source.id and edge.source_handle == out_port.id:
                raise InvalidOperationError("These ports are already connected")
            if not in_port.multiple:
                replaced.append(edge.id)

        edge = WorkflowEdge(
            id=generate_edge_id(),
            source=source.id,
            source_handle=out_port.id,
            target=target.id,
            target_handle=in_port.id,
        )
        with self._history.transaction():
            for edge_id in replaced:
                self._state.remove_edge(edge_id)
            self._state.insert_edge(edge)
        logger.debug(f"Edge added: {edge.id} (replaced {len(replaced)})")
        return edge.id

    @_store_action()
    def remove_edge(self, edge_id: str) -> None:
        self._state.get_edge(edge_id)
        with self._history.transaction():
            self._state.remove_edge(edge_id)

    # ── Canvas change batches (never recorded) ──

    @_store_action()
    def on_nodes_change(self, changes: Sequence[Any]) -> None:
        apply_node_changes(self._state, changes)

    @_store_action()
    def on_edges_change(self, changes: Sequence[Any]) -> None:
        apply_edge_changes(self._state, changes)

    # ── Groups ──

    @_store_action(notify=True)
    def create_group(self, node_ids: Iterable[str], name: Optional[str] = None) -> Optional[str]:
        """Frame ``node_ids`` in a new group sized to their bounds.

        Nodes already in another group move to the new one.
        """
        ids = list(dict.fromkeys(node_ids))
        if not ids:
            raise InvalidOperationError("Select at least one node to group")
        nodes = [self._state.get_node(node_id) for node_id in ids]

        rect = self._state.bounding_rect(nodes).padded(
            self._config.group_padding, self._config.group_header_height,
        )
        group = NodeGroup(
            id=generate_group_id(),
            name=name or self._next_group_name(),
            color=self._config.default_group_color,
            position=Position(x=rect.x, y=rect.y),
            size=Size(width=rect.width, height=rect.height),
        )
        with self._history.transaction():
            self._state.insert_group(group)
            for node in nodes:
                node.group_id = group.id
        self._emit("info", f"Group created: {group.name}", group_id=group.id, nodes=len(nodes))
        return group.id

    @_store_action()
    def update_group(
        self,
        group_id: str,
        name: Optional[str] = None,
        color: Optional[str] = None,
    ) -> None:
        group = self._state.get_group(group_id)
        if name is None and color is None:
            return
        with self._history.transaction():
            if name is not None:
                group.name = name
            if color is not None:
                group.color = color

    @_store_action()
    def delete_group(self, group_id: str) -> None:
        """Ungroup: drop the frame, keep its nodes on the canvas."""
        self._state.get_group(group_id)
        with self._history.transaction():
            self._state.remove_group(group_id, with_nodes=False)

    @_store_action()
    def delete_group_with_nodes(self, group_id: str) -> None:
        """Remove a group, all of its nodes and every edge touching them."""
        group = self._state.get_group(group_id)
        with self._history.transaction():
            removed = self._state.remove_group(group_id, with_nodes=True)
        self._emit("info", f"Group deleted: {group.name}", group_id=group_id, nodes=len(removed))

    @_store_action()
    def set_selected_group_id(self, group_id: Optional[str]) -> None:
        if group_id is not None:
            self._state.get_group(group_id)
        self._state.selected_group_id = group_id

    # ── Duplication ──

    @_store_action(notify=True)
    def duplicate_selected_nodes(
        self,
        selected_group_id: Optional[str] = None,
        offset: Optional[PositionLike] = None,
    ) -> Optional[List[str]]:
        """Duplicate the selection, or a whole group, as one undo step.

        Returns the ids of the new nodes, which become the selection.
        """
        resolved_offset = _as_position(offset) if offset is not None else None
        with self._history.transaction():
            result = duplicate_nodes(
                self._state,
                self._config,
                selected_group_id=selected_group_id,
                offset=resolved_offset,
            )
        self._emit(
            "info",
            f"Duplicated {len(result.node_ids)} nodes",
            groups=len(result.group_ids),
            edges=len(result.edge_ids),
        )
        return result.node_ids

    # ── History ──

    @_store_action()
    def push_history_snapshot(self) -> None:
        """Open an undo step for the change batches that follow."""
        self._history.push_snapshot()

    @_store_action()
    def undo(self) -> bool:
        return self._history.undo()

    @_store_action()
    def redo(self) -> bool:
        return self._history.redo()

    @_store_action()
    def clear_undo_redo_history(self) -> None:
        self._history.clear()

    @_store_action()
    def clear_workflow(self) -> None:
        """Empty the canvas. History is left alone."""
        self._state.clear()

    # ── Internals ──

    def _next_group_name(self) -> str:
        names = {g.name for g in self._state.groups.values()}
        index = len(self._state.groups) + 1
        while f"Group {index}" in names:
            index += 1
        return f"Group {index}"

    def _report_failure(self, action: str, error: WorkflowError, notify: bool) -> None:
        logger.warning(f"{action} ignored: {error}")
        self._emit("warn", f"{action} ignored: {error}", action=action)
        if notify:
            self._notify(str(error), "warning")

    def _emit(self, method: str, *args: Any, **kwargs: Any) -> None:
        try:
            getattr(self._session, method)(*args, **kwargs)
        except Exception as e:
            logger.warning(f"Session logger {method}() failed: {e}")

    def _notify(self, message: str, type: NotificationType = "info") -> None:
        try:
            self._notifier.show(message, type)
        except Exception as e:
            logger.warning(f"Notifier failed: {e}")
