"""
Workflow State — the live graph held by a ``WorkflowStore``.

Nodes, edges and groups are kept in insertion-ordered dicts keyed by id
(an arena), so lookups, cascades and full-state snapshots stay cheap.

Integrity rules enforced here, whatever the entry path:
    - every edge's endpoints exist; removing a node removes its edges
    - ``group_id`` on a node is either None or an existing group
    - ``selected_group_id`` is either None or an existing group

The methods below raise ``WorkflowError`` subclasses on bad input and
never leave the graph half-mutated when they do: all lookups happen
before the first write.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import Dict, Iterable, List, Optional, Set

from flowcanvas.workflow.nodes import BaseNode, get_node_registry
from flowcanvas.workflow.workflow_errors import (
    EdgeNotFoundError,
    GroupNotFoundError,
    InvalidOperationError,
    NodeNotFoundError,
    NodeTypeNotFoundError,
)
from flowcanvas.workflow.workflow_model import (
    NodeGroup,
    Rect,
    Size,
    WorkflowEdge,
    WorkflowNode,
)

logger = getLogger(__name__)


@dataclass
class WorkflowState:
    """Graph content plus the ephemeral group selection."""

    nodes: Dict[str, WorkflowNode] = field(default_factory=dict)
    edges: Dict[str, WorkflowEdge] = field(default_factory=dict)
    groups: Dict[str, NodeGroup] = field(default_factory=dict)
    selected_group_id: Optional[str] = None

    # ── Lookups ──

    def get_node(self, node_id: str) -> WorkflowNode:
        node = self.nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        return node

    def get_edge(self, edge_id: str) -> WorkflowEdge:
        edge = self.edges.get(edge_id)
        if edge is None:
            raise EdgeNotFoundError(edge_id)
        return edge

    def get_group(self, group_id: str) -> NodeGroup:
        group = self.groups.get(group_id)
        if group is None:
            raise GroupNotFoundError(group_id)
        return group

    def node_kind(self, node: WorkflowNode) -> BaseNode:
        kind = get_node_registry().get(node.type)
        if kind is None:
            raise NodeTypeNotFoundError(node.type)
        return kind

    def group_members(self, group_id: str) -> List[WorkflowNode]:
        return [n for n in self.nodes.values() if n.group_id == group_id]

    def incident_edge_ids(self, node_ids: Iterable[str]) -> List[str]:
        ids = set(node_ids)
        return [
            e.id for e in self.edges.values()
            if e.source in ids or e.target in ids
        ]

    def selected_nodes(self) -> List[WorkflowNode]:
        return [n for n in self.nodes.values() if n.selected]

    # ── Geometry ──

    def node_size(self, node: WorkflowNode) -> Size:
        """Measured size if the view reported one, else the kind default."""
        if node.measured is not None:
            return node.measured
        kind = get_node_registry().get(node.type)
        return kind.default_size() if kind is not None else Size()

    def node_rect(self, node: WorkflowNode) -> Rect:
        size = self.node_size(node)
        return Rect(node.position.x, node.position.y, size.width, size.height)

    def bounding_rect(self, nodes: Iterable[WorkflowNode]) -> Optional[Rect]:
        rect: Optional[Rect] = None
        for node in nodes:
            node_rect = self.node_rect(node)
            rect = node_rect if rect is None else rect.union(node_rect)
        return rect

    # ── Mutations ──

    def insert_node(self, node: WorkflowNode) -> None:
        if node.id in self.nodes:
            raise InvalidOperationError(f"Node id already in use: {node.id}")
        if node.group_id is not None and node.group_id not in self.groups:
            raise GroupNotFoundError(node.group_id)
        self.nodes[node.id] = node

    def insert_edge(self, edge: WorkflowEdge) -> None:
        if edge.id in self.edges:
            raise InvalidOperationError(f"Edge id already in use: {edge.id}")
        if edge.source not in self.nodes:
            raise NodeNotFoundError(edge.source)
        if edge.target not in self.nodes:
            raise NodeNotFoundError(edge.target)
        self.edges[edge.id] = edge

    def insert_group(self, group: NodeGroup) -> None:
        if group.id in self.groups:
            raise InvalidOperationError(f"Group id already in use: {group.id}")
        self.groups[group.id] = group

    def remove_nodes(self, node_ids: Iterable[str]) -> List[str]:
        """Remove nodes and every edge touching them.

        Returns the ids of the removed edges. Unknown ids raise before
        anything is removed.
        """
        ids: List[str] = []
        seen: Set[str] = set()
        for node_id in node_ids:
            if node_id not in self.nodes:
                raise NodeNotFoundError(node_id)
            if node_id not in seen:
                seen.add(node_id)
                ids.append(node_id)

        edge_ids = self.incident_edge_ids(ids)
        for edge_id in edge_ids:
            del self.edges[edge_id]
        for node_id in ids:
            del self.nodes[node_id]
        return edge_ids

    def remove_edge(self, edge_id: str) -> WorkflowEdge:
        edge = self.get_edge(edge_id)
        del self.edges[edge_id]
        return edge

    def remove_group(self, group_id: str, with_nodes: bool) -> List[str]:
        """Remove a group record.

        With ``with_nodes`` the members and their edges go too; otherwise
        members stay on the canvas with their group reference cleared.
        Returns the ids of removed member nodes.
        """
        self.get_group(group_id)
        members = [n.id for n in self.group_members(group_id)]
        if with_nodes:
            self.remove_nodes(members)
        else:
            for node_id in members:
                self.nodes[node_id].group_id = None
        del self.groups[group_id]
        if self.selected_group_id == group_id:
            self.selected_group_id = None
        return members if with_nodes else []

    def clear_selection(self) -> None:
        for node in self.nodes.values():
            node.selected = False
        for edge in self.edges.values():
            edge.selected = False

    def clear(self) -> None:
        self.nodes.clear()
        self.edges.clear()
        self.groups.clear()
        self.selected_group_id = None

    def check_integrity(self) -> List[str]:
        """Return a list of integrity violations (empty = consistent)."""
        errors: List[str] = []
        for edge in self.edges.values():
            if edge.source not in self.nodes:
                errors.append(f"Edge {edge.id} references unknown source node: {edge.source}")
            if edge.target not in self.nodes:
                errors.append(f"Edge {edge.id} references unknown target node: {edge.target}")
        for node in self.nodes.values():
            if node.group_id is not None and node.group_id not in self.groups:
                errors.append(f"Node {node.id} references unknown group: {node.group_id}")
        if self.selected_group_id is not None and self.selected_group_id not in self.groups:
            errors.append(f"Selected group does not exist: {self.selected_group_id}")
        return errors
