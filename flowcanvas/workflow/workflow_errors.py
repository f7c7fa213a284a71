"""
Workflow Errors.

Raised inside the graph layer when an action references something that
does not exist or asks for something the graph cannot represent. Public
store actions turn them into no-ops; they only escape from the lower
layers (``WorkflowState``, the change adapter, the duplicator).
"""


class WorkflowError(Exception):
    """Base class for graph state errors."""


class NotFoundError(WorkflowError):
    """An action referenced an id that is not in the graph."""

    kind = "item"

    def __init__(self, item_id: str) -> None:
        super().__init__(f"{self.kind.capitalize()} not found: {item_id}")
        self.item_id = item_id


class NodeNotFoundError(NotFoundError):
    kind = "node"


class EdgeNotFoundError(NotFoundError):
    kind = "edge"


class GroupNotFoundError(NotFoundError):
    kind = "group"


class NodeTypeNotFoundError(NotFoundError):
    kind = "node type"


class InvalidOperationError(WorkflowError):
    """The action is well-formed but not allowed on the current graph."""


class ReentrantCallError(InvalidOperationError):
    """A store action was invoked while another action was still running."""
