"""
Workflow Data Models — nodes, edges, groups, and node payloads.

These are the records held by ``WorkflowState`` and captured whole in
every ``HistorySnapshot``. Node payloads are per-kind models declared by
the node classes in ``flowcanvas.workflow.nodes``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny


class Position(BaseModel):
    x: float = 0.0
    y: float = 0.0

    def shifted(self, dx: float, dy: float) -> "Position":
        return Position(x=self.x + dx, y=self.y + dy)


class Size(BaseModel):
    width: float = 0.0
    height: float = 0.0


class NodeData(BaseModel):
    """Base payload for every node kind.

    Extra keys are kept so a shallow merge from the view never fails on
    a key the payload model does not declare.
    """

    model_config = ConfigDict(extra="allow")

    def merged(self, partial: Dict[str, Any]) -> "NodeData":
        """Return a validated copy with ``partial`` shallow-merged in."""
        return type(self).model_validate({**self.model_dump(), **partial})


class WorkflowNode(BaseModel):
    """A single node placed on the workflow canvas.

    ``type`` references a registered ``BaseNode.node_type`` and decides
    which payload model ``data`` holds.
    """

    id: str
    type: str
    position: Position = Field(default_factory=Position)
    data: SerializeAsAny[NodeData] = Field(default_factory=NodeData)
    selected: bool = False
    dragging: bool = False
    group_id: Optional[str] = None
    measured: Optional[Size] = None  # last size reported by the view


class WorkflowEdge(BaseModel):
    """A directed edge from an output port to an input port."""

    id: str
    source: str  # source node ID
    source_handle: str
    target: str  # target node ID
    target_handle: str
    selected: bool = False


class NodeGroup(BaseModel):
    """A named rectangle framing a set of nodes.

    Membership lives on the nodes (``WorkflowNode.group_id``); the
    group only records its frame.
    """

    id: str
    name: str
    color: str = "neutral"
    position: Position = Field(default_factory=Position)
    size: Size = Field(default_factory=Size)

    @property
    def rect(self) -> "Rect":
        return Rect(self.position.x, self.position.y, self.size.width, self.size.height)


class ConnectionRequest(BaseModel):
    """A port-to-port connection emitted by the canvas.

    Accepts the canvas payload keys (``sourceHandle``) as well as the
    field names.
    """

    model_config = ConfigDict(populate_by_name=True)

    source: str
    source_handle: str = Field(alias="sourceHandle")
    target: str
    target_handle: str = Field(alias="targetHandle")


# ============================================================================
# Geometry
# ============================================================================


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in canvas coordinates."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def overlaps(self, other: "Rect") -> bool:
        """True when the projections intersect on both axes.

        Rectangles that only share an edge do not overlap.
        """
        return not (
            self.right <= other.x
            or other.right <= self.x
            or self.bottom <= other.y
            or other.bottom <= self.y
        )

    def shifted(self, dx: float, dy: float) -> "Rect":
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def union(self, other: "Rect") -> "Rect":
        left = min(self.x, other.x)
        top = min(self.y, other.y)
        return Rect(
            left,
            top,
            max(self.right, other.right) - left,
            max(self.bottom, other.bottom) - top,
        )

    def padded(self, padding: float, header: float = 0.0) -> "Rect":
        """Grow by ``padding`` on every side plus ``header`` on top."""
        return Rect(
            self.x - padding,
            self.y - padding - header,
            self.width + padding * 2,
            self.height + padding * 2 + header,
        )
