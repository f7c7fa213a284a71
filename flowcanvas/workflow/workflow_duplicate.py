"""
Workflow Duplicate — clone a selection or whole groups.

Duplication produces structurally independent copies:

    * every source node gets a new id, a deep copy of its payload and
      the same type, moved by one shared displacement
    * edges with both endpoints in the source set are re-created
      between the clones; edges leaving the set are not copied
    * groups whose every member is in the source set are cloned as
      new groups named ``"<name> Copy"``; clones of nodes from a
      partially selected group are left ungrouped
    * the clones become the selection

Placement: the displacement starts at the caller's offset, or one
source-width plus a margin to the right. When groups are cloned it is
then pushed further right until no cloned frame overlaps an existing
one, so a duplicated group is never drawn on top of another group.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import Dict, List, Optional, Tuple

from flowcanvas.config import EditorConfig
from flowcanvas.utils.identifiers import generate_edge_id, generate_group_id, generate_node_id
from flowcanvas.workflow.workflow_errors import InvalidOperationError
from flowcanvas.workflow.workflow_model import (
    NodeGroup,
    Position,
    Rect,
    WorkflowEdge,
    WorkflowNode,
)
from flowcanvas.workflow.workflow_state import WorkflowState

logger = getLogger(__name__)

COPY_SUFFIX = "Copy"


@dataclass
class DuplicationResult:
    """Ids created by one duplication."""
    node_ids: List[str] = field(default_factory=list)
    edge_ids: List[str] = field(default_factory=list)
    group_ids: List[str] = field(default_factory=list)
    offset: Tuple[float, float] = (0.0, 0.0)
    selected_group_id: Optional[str] = None


def resolve_source_nodes(
    state: WorkflowState,
    selected_group_id: Optional[str] = None,
) -> Tuple[List[WorkflowNode], Optional[str]]:
    """Decide what gets duplicated.

    A selected group (passed in, or the state's current group selection)
    means the whole group; otherwise the selected nodes. Returns the
    source nodes and the group they came from, if any.
    """
    group_id = selected_group_id if selected_group_id is not None else state.selected_group_id
    if group_id is not None:
        state.get_group(group_id)
        members = state.group_members(group_id)
        if not members:
            raise InvalidOperationError(f"Group {group_id} has no nodes to duplicate")
        return members, group_id

    selected = state.selected_nodes()
    if not selected:
        raise InvalidOperationError("Nothing selected to duplicate")
    return selected, None


def whole_groups(state: WorkflowState, nodes: List[WorkflowNode]) -> List[NodeGroup]:
    """Groups whose entire membership is contained in ``nodes``."""
    source_ids = {n.id for n in nodes}
    groups: List[NodeGroup] = []
    for group_id in dict.fromkeys(n.group_id for n in nodes if n.group_id is not None):
        group = state.groups.get(group_id)
        if group is None:
            continue
        if all(m.id in source_ids for m in state.group_members(group_id)):
            groups.append(group)
    return groups


def resolve_offset(
    state: WorkflowState,
    nodes: List[WorkflowNode],
    groups: List[NodeGroup],
    margin: float,
    offset: Optional[Position] = None,
) -> Tuple[float, float]:
    """Pick the displacement applied to every clone."""
    source_rect = state.bounding_rect(nodes)
    for group in groups:
        source_rect = group.rect if source_rect is None else source_rect.union(group.rect)

    if offset is not None:
        dx, dy = offset.x, offset.y
    else:
        dx, dy = (source_rect.width if source_rect else 0.0) + margin, 0.0

    if not groups:
        return dx, dy

    occupied: List[Rect] = [g.rect for g in state.groups.values()]
    step = max(g.size.width for g in groups) + margin
    while _collides([g.rect.shifted(dx, dy) for g in groups], occupied):
        dx += step
    return dx, dy


def _collides(candidates: List[Rect], occupied: List[Rect]) -> bool:
    return any(c.overlaps(o) for c in candidates for o in occupied)


def duplicate_nodes(
    state: WorkflowState,
    config: EditorConfig,
    selected_group_id: Optional[str] = None,
    offset: Optional[Position] = None,
) -> DuplicationResult:
    """Clone the current selection (or a group) into ``state``.

    Raises ``WorkflowError`` before touching the graph when there is
    nothing to duplicate or the group does not exist.
    """
    nodes, source_group_id = resolve_source_nodes(state, selected_group_id)
    groups = whole_groups(state, nodes)
    dx, dy = resolve_offset(state, nodes, groups, config.duplicate_margin, offset)

    result = DuplicationResult(offset=(dx, dy))
    state.clear_selection()

    group_map: Dict[str, str] = {}
    for group in groups:
        clone = NodeGroup(
            id=generate_group_id(),
            name=f"{group.name} {COPY_SUFFIX}",
            color=group.color,
            position=group.position.shifted(dx, dy),
            size=group.size.model_copy(),
        )
        state.insert_group(clone)
        group_map[group.id] = clone.id
        result.group_ids.append(clone.id)

    node_map: Dict[str, str] = {}
    for node in nodes:
        clone = WorkflowNode(
            id=generate_node_id(node.type),
            type=node.type,
            position=node.position.shifted(dx, dy),
            data=node.data.model_copy(deep=True),
            selected=True,
            group_id=group_map.get(node.group_id) if node.group_id else None,
            measured=node.measured.model_copy() if node.measured else None,
        )
        state.insert_node(clone)
        node_map[node.id] = clone.id
        result.node_ids.append(clone.id)

    internal = [
        e for e in state.edges.values()
        if e.source in node_map and e.target in node_map
    ]
    for edge in internal:
        clone = WorkflowEdge(
            id=generate_edge_id(),
            source=node_map[edge.source],
            source_handle=edge.source_handle,
            target=node_map[edge.target],
            target_handle=edge.target_handle,
        )
        state.insert_edge(clone)
        result.edge_ids.append(clone.id)

    if source_group_id is not None and source_group_id in group_map:
        result.selected_group_id = group_map[source_group_id]
    elif len(group_map) == 1:
        result.selected_group_id = next(iter(group_map.values()))
    state.selected_group_id = result.selected_group_id

    logger.debug(
        f"Duplicated {len(result.node_ids)} nodes, {len(result.edge_ids)} edges, "
        f"{len(result.group_ids)} groups at offset ({dx}, {dy})"
    )
    return result
