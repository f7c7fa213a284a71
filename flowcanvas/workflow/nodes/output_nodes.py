"""
Output Nodes — display generated results.

Output nodes are written to by runs, not by the user: the single-image
``output`` node shows the latest result and ``outputGallery`` appends
every image it receives. Both payloads are entirely untracked.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from flowcanvas.workflow.nodes.base import BaseNode, NodePort, register_node
from flowcanvas.workflow.workflow_model import NodeData


class OutputNodeData(NodeData):
    image: Optional[str] = None


@register_node
class OutputNode(BaseNode):
    """Show the most recent image that reached this node."""

    node_type = "output"
    label = "Output"
    description = "Display the final generated image"
    category = "output"
    icon = "📤"
    color = "#ef4444"

    data_model = OutputNodeData
    input_ports = [
        NodePort(id="image", data_type="image", label="Image"),
    ]

    default_width = 320.0
    default_height = 320.0

    untracked_fields = frozenset({"image"})


class OutputGalleryNodeData(NodeData):
    images: List[str] = Field(default_factory=list)


@register_node
class OutputGalleryNode(BaseNode):
    """Accumulate every image produced upstream."""

    node_type = "outputGallery"
    label = "Output Gallery"
    description = "Collect all generated images in a scrollable gallery"
    category = "output"
    icon = "🗂️"
    color = "#ec4899"

    data_model = OutputGalleryNodeData
    input_ports = [
        NodePort(id="image", data_type="image", label="Images", multiple=True),
    ]

    default_width = 360.0
    default_height = 400.0

    untracked_fields = frozenset({"images"})
