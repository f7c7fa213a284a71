"""
Input Nodes — sources of images and text.

These nodes hold user-supplied content and only expose output ports.
Every change to them is a deliberate edit, so none of their payload
fields are untracked.
"""

from __future__ import annotations

from typing import Optional

from flowcanvas.workflow.nodes.base import BaseNode, NodePort, register_node
from flowcanvas.workflow.workflow_model import NodeData, Size


# ============================================================================
# Image Input
# ============================================================================


class ImageInputNodeData(NodeData):
    image: Optional[str] = None  # data URL or asset reference
    filename: Optional[str] = None
    dimensions: Optional[Size] = None


@register_node
class ImageInputNode(BaseNode):
    """Load a reference image onto the canvas."""

    node_type = "imageInput"
    label = "Image Input"
    description = "Upload or paste an image to feed generation nodes"
    category = "input"
    icon = "🖼️"
    color = "#0ea5e9"

    data_model = ImageInputNodeData
    output_ports = [
        NodePort(id="image", data_type="image", label="Image"),
    ]

    default_width = 300.0
    default_height = 280.0


# ============================================================================
# Prompt
# ============================================================================


class PromptNodeData(NodeData):
    prompt: str = ""


@register_node
class PromptNode(BaseNode):
    """Free-text prompt authored by the user."""

    node_type = "prompt"
    label = "Prompt"
    description = "Write the text prompt sent to generation nodes"
    category = "input"
    icon = "✏️"
    color = "#8b5cf6"

    data_model = PromptNodeData
    output_ports = [
        NodePort(id="text", data_type="text", label="Text"),
    ]

    default_width = 320.0
    default_height = 220.0
