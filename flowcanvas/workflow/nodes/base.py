"""
Node Base — node kind declarations and the global NodeRegistry.

Every node kind the editor can place is a ``BaseNode`` subclass
registered with ``@register_node``. A kind declares:

    - its payload model (``data_model``) and therefore its default data
    - its input/output ports and the data type each carries
    - its default on-canvas size, used until the view measures the node
    - ``untracked_fields``: payload keys written by running generations
      rather than by the user. Updates touching only these keys are
      applied without an undo step.

Node kinds are static metadata; the registry is process-wide while the
graph state itself lives on a per-session ``WorkflowStore``.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import Any, ClassVar, Dict, FrozenSet, List, Mapping, Optional, Type, TypeVar

from flowcanvas.workflow.workflow_model import NodeData, Size

logger = getLogger(__name__)


@dataclass(frozen=True)
class NodePort:
    """A named connection point on a node.

    ``id`` is the handle name used by edges; ``data_type`` decides which
    ports may be wired together.
    """
    id: str
    data_type: str
    label: str = ""
    multiple: bool = False  # input accepts more than one edge


class BaseNode:
    """Declaration of one node kind."""

    node_type: ClassVar[str] = ""
    label: ClassVar[str] = ""
    description: ClassVar[str] = ""
    category: ClassVar[str] = "general"
    icon: ClassVar[str] = ""
    color: ClassVar[str] = "#64748b"

    data_model: ClassVar[Type[NodeData]] = NodeData
    input_ports: ClassVar[List[NodePort]] = []
    output_ports: ClassVar[List[NodePort]] = []

    default_width: ClassVar[float] = 300.0
    default_height: ClassVar[float] = 280.0

    untracked_fields: ClassVar[FrozenSet[str]] = frozenset()

    def default_data(self) -> NodeData:
        """Fresh payload for a newly placed node."""
        return self.data_model()

    def default_size(self) -> Size:
        return Size(width=self.default_width, height=self.default_height)

    def is_untracked_update(self, partial: Mapping[str, Any]) -> bool:
        """True when every key of ``partial`` is generation output."""
        return bool(partial) and set(partial) <= self.untracked_fields

    def get_input_port(self, handle: str) -> Optional[NodePort]:
        for port in self.input_ports:
            if port.id == handle:
                return port
        return None

    def get_output_port(self, handle: str) -> Optional[NodePort]:
        for port in self.output_ports:
            if port.id == handle:
                return port
        return None


class NodeRegistry:
    """Lookup table of registered node kinds, keyed by ``node_type``."""

    def __init__(self) -> None:
        self._nodes: Dict[str, BaseNode] = {}

    def register(self, node: BaseNode) -> None:
        if not node.node_type:
            raise ValueError(f"{type(node).__name__} has no node_type")
        if node.node_type in self._nodes:
            logger.warning(f"Node type '{node.node_type}' re-registered by {type(node).__name__}")
        self._nodes[node.node_type] = node

    def get(self, node_type: str) -> Optional[BaseNode]:
        return self._nodes.get(node_type)

    def list_all(self) -> List[BaseNode]:
        return list(self._nodes.values())


_registry: Optional[NodeRegistry] = None


def get_node_registry() -> NodeRegistry:
    """Return the global NodeRegistry singleton."""
    global _registry
    if _registry is None:
        _registry = NodeRegistry()
    return _registry


N = TypeVar("N", bound=Type[BaseNode])


def register_node(cls: N) -> N:
    """Class decorator: instantiate and register a node kind."""
    get_node_registry().register(cls())
    return cls
