"""
Workflow Nodes Package.

Auto-registers all node kinds into the global NodeRegistry.
Import this package to ensure all kinds are available.
"""

from flowcanvas.workflow.nodes.base import (
    BaseNode,
    NodePort,
    NodeRegistry,
    get_node_registry,
    register_node,
)

# Import all node modules to trigger registration
from flowcanvas.workflow.nodes import input_nodes       # noqa: F401
from flowcanvas.workflow.nodes import generation_nodes  # noqa: F401
from flowcanvas.workflow.nodes import output_nodes      # noqa: F401


def register_all_nodes() -> None:
    """Ensure all node kinds are registered.

    The module-level imports above trigger ``@register_node``
    decorators; this function provides an explicit entry point.
    """
    registry = get_node_registry()
    count = len(registry.list_all())
    from logging import getLogger
    getLogger(__name__).info(
        f"Workflow nodes registered: {count} node types"
    )


__all__ = [
    "BaseNode",
    "NodePort",
    "NodeRegistry",
    "get_node_registry",
    "register_node",
    "register_all_nodes",
]
