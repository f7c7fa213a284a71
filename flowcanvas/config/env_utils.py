"""
Environment helpers for configuration dataclasses.

Reads ``FLOWCANVAS_*`` environment variables and coerces them to the
type of the matching dataclass field default.
"""

from __future__ import annotations

import os
from dataclasses import MISSING, Field
from logging import getLogger
from typing import Any, Dict, Mapping

logger = getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _coerce(raw: str, default: Any) -> Any:
    if isinstance(default, bool):
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ValueError(f"not a boolean: {raw!r}")
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, float):
        return float(raw)
    return raw


def read_env_defaults(
    env_map: Mapping[str, str],
    fields: Mapping[str, Field],
) -> Dict[str, Any]:
    """Build constructor kwargs from environment variables.

    Only fields listed in ``env_map`` whose variable is set are returned;
    everything else falls back to the dataclass default. Values that
    cannot be coerced are skipped with a warning.
    """
    values: Dict[str, Any] = {}
    for field_name, env_name in env_map.items():
        raw = os.environ.get(env_name)
        if raw is None or field_name not in fields:
            continue
        default = fields[field_name].default
        if default is MISSING:
            values[field_name] = raw
            continue
        try:
            values[field_name] = _coerce(raw, default)
        except ValueError as e:
            logger.warning(f"Ignoring {env_name}={raw!r}: {e}")
    return values
