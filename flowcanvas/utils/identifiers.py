"""ID generation and timestamp utilities."""

import uuid
from datetime import datetime, timezone


def generate_node_id(node_type: str) -> str:
    """Generate a node ID prefixed with its node type."""
    return f"{node_type}-{uuid.uuid4().hex[:12]}"


def generate_edge_id() -> str:
    """Generate a unique edge ID."""
    return f"edge-{uuid.uuid4().hex[:12]}"


def generate_group_id() -> str:
    """Generate a unique group ID."""
    return f"group-{uuid.uuid4().hex[:12]}"


def generate_session_id() -> str:
    """Generate a unique editor session ID (UUID4)."""
    return str(uuid.uuid4())


def utc_timestamp() -> str:
    """Generate an ISO8601 UTC timestamp."""
    return datetime.now(timezone.utc).isoformat()
