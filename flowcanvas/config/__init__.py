"""
Configuration Module

Dataclass-based settings with ``FLOWCANVAS_*`` environment overrides.
"""
from flowcanvas.config.editor_config import EditorConfig
from flowcanvas.config.env_utils import read_env_defaults

__all__ = ['EditorConfig', 'read_env_defaults']
