"""
Editor Configuration.

Controls undo history depth, group framing geometry, and the spacing
used when placing duplicated nodes and groups.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from flowcanvas.config.env_utils import read_env_defaults


@dataclass
class EditorConfig:
    """Graph editor state-engine settings."""

    # History
    history_limit: int = 50  # 0 = unbounded

    # Group framing
    group_padding: float = 20.0
    group_header_height: float = 32.0
    default_group_color: str = "neutral"

    # Duplication
    duplicate_margin: float = 40.0

    _ENV_MAP = {
        "history_limit": "FLOWCANVAS_HISTORY_LIMIT",
        "group_padding": "FLOWCANVAS_GROUP_PADDING",
        "group_header_height": "FLOWCANVAS_GROUP_HEADER_HEIGHT",
        "default_group_color": "FLOWCANVAS_DEFAULT_GROUP_COLOR",
        "duplicate_margin": "FLOWCANVAS_DUPLICATE_MARGIN",
    }

    def __post_init__(self) -> None:
        if self.history_limit < 0:
            raise ValueError("history_limit must be >= 0")
        if self.group_padding < 0 or self.group_header_height < 0:
            raise ValueError("group geometry must be non-negative")
        if self.duplicate_margin <= 0:
            raise ValueError("duplicate_margin must be positive")

    @classmethod
    def get_default_instance(cls) -> "EditorConfig":
        defaults = read_env_defaults(cls._ENV_MAP, cls.__dataclass_fields__)
        return cls(**defaults)

    @classmethod
    def get_config_name(cls) -> str:
        return "editor"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "history_limit": self.history_limit,
            "group_padding": self.group_padding,
            "group_header_height": self.group_header_height,
            "default_group_color": self.default_group_color,
            "duplicate_margin": self.duplicate_margin,
        }
