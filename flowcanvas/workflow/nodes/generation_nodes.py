"""
Generation Nodes — image and text generation.

Generation nodes receive their result while a run is in progress; the
run writes ``status``, ``error`` and the output field many times. Those
writes are untracked so a run never fills the undo stack. Settings the
user picks (model, aspect ratio, temperature) stay tracked.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from flowcanvas.workflow.nodes.base import BaseNode, NodePort, register_node
from flowcanvas.workflow.workflow_model import NodeData

GenerationStatus = Literal["idle", "loading", "complete", "error"]


# ============================================================================
# Nano Banana — image generation
# ============================================================================


class NanoBananaNodeData(NodeData):
    input_images: List[str] = Field(default_factory=list)
    input_prompt: Optional[str] = None
    output_image: Optional[str] = None
    aspect_ratio: str = "1:1"
    resolution: str = "1K"
    model: str = "nano-banana"
    status: GenerationStatus = "idle"
    error: Optional[str] = None


@register_node
class NanoBananaNode(BaseNode):
    """Generate or edit an image from a prompt and reference images."""

    node_type = "nanoBanana"
    label = "Generate Image"
    description = "Image generation from text and optional reference images"
    category = "generation"
    icon = "🍌"
    color = "#f59e0b"

    data_model = NanoBananaNodeData
    input_ports = [
        NodePort(id="image", data_type="image", label="Image", multiple=True),
        NodePort(id="text", data_type="text", label="Prompt"),
    ]
    output_ports = [
        NodePort(id="image", data_type="image", label="Image"),
    ]

    default_width = 300.0
    default_height = 300.0

    untracked_fields = frozenset({"output_image", "status", "error"})


# ============================================================================
# LLM Generate — text generation
# ============================================================================


class LLMGenerateNodeData(NodeData):
    input_prompt: Optional[str] = None
    input_images: List[str] = Field(default_factory=list)
    output_text: Optional[str] = None
    provider: str = "google"
    model: str = "gemini-2.5-flash"
    temperature: float = 0.7
    max_tokens: int = 8192
    status: GenerationStatus = "idle"
    error: Optional[str] = None


@register_node
class LLMGenerateNode(BaseNode):
    """Generate text with a language model, e.g. to expand a prompt."""

    node_type = "llmGenerate"
    label = "LLM Generate"
    description = "Text generation from a prompt and optional images"
    category = "generation"
    icon = "💬"
    color = "#10b981"

    data_model = LLMGenerateNodeData
    input_ports = [
        NodePort(id="text", data_type="text", label="Prompt"),
        NodePort(id="image", data_type="image", label="Image", multiple=True),
    ]
    output_ports = [
        NodePort(id="text", data_type="text", label="Text"),
    ]

    default_width = 320.0
    default_height = 360.0

    untracked_fields = frozenset({"output_text", "status", "error"})
