"""Shared fixtures for the workflow store tests."""

from typing import List, Tuple

import pytest

from flowcanvas.config import EditorConfig
from flowcanvas.logging import SessionLogger
from flowcanvas.workflow import WorkflowStore


class RecordingNotifier:
    """Notifier that keeps every message it was asked to show."""

    def __init__(self):
        self.messages: List[Tuple[str, str]] = []

    def show(self, message: str, type: str = "info") -> None:
        self.messages.append((type, message))


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def session_logger():
    return SessionLogger()


@pytest.fixture
def store(notifier, session_logger):
    store = WorkflowStore(
        config=EditorConfig(),
        session_logger=session_logger,
        notifier=notifier,
    )
    yield store
    store.close()


def connect(store, source, target, source_handle="text", target_handle="text"):
    return store.on_connect({
        "source": source,
        "source_handle": source_handle,
        "target": target,
        "target_handle": target_handle,
    })


def graph_content(store):
    """Comparable dump of the observable graph."""
    return (
        [n.model_dump() for n in store.nodes],
        [e.model_dump() for e in store.edges],
        {gid: g.model_dump() for gid, g in store.groups.items()},
    )
