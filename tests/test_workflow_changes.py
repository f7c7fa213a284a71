"""Tests for the canvas change-batch adapter."""

import pytest

from conftest import connect

from flowcanvas.workflow import InvalidOperationError, PositionChange, RemoveChange, SelectionChange
from flowcanvas.workflow.workflow_changes import apply_edge_changes, apply_node_changes, parse_node_changes


class TestNodeChanges:
    """on_nodes_change applies descriptors in order."""

    def test_select_and_deselect(self, store):
        a = store.add_node("prompt", {"x": 0, "y": 0})
        b = store.add_node("prompt", {"x": 0, "y": 300})

        store.on_nodes_change([
            {"type": "select", "id": a, "selected": True},
            {"type": "select", "id": b, "selected": True},
            {"type": "select", "id": a, "selected": False},
        ])

        assert [n.id for n in store.nodes if n.selected] == [b]

    def test_position_change(self, store):
        a = store.add_node("prompt", {"x": 0, "y": 0})

        store.on_nodes_change([PositionChange(id=a, position={"x": 15, "y": 25}, dragging=True)])

        node = store.get_node(a)
        assert (node.position.x, node.position.y) == (15, 25)
        assert node.dragging is True

    def test_position_change_without_position_only_updates_dragging(self, store):
        a = store.add_node("prompt", {"x": 5, "y": 5})
        store.on_nodes_change([{"type": "position", "id": a, "dragging": True}])
        store.on_nodes_change([{"type": "position", "id": a, "dragging": False}])

        node = store.get_node(a)
        assert (node.position.x, node.position.y) == (5, 5)
        assert node.dragging is False

    def test_dimensions_change_sets_measured(self, store):
        a = store.add_node("prompt", {"x": 0, "y": 0})
        store.on_nodes_change([{"type": "dimensions", "id": a, "dimensions": {"width": 280, "height": 190}}])

        assert store.get_node(a).measured.width == 280

    def test_remove_cascades_to_edges(self, store):
        a = store.add_node("prompt", {"x": 0, "y": 0})
        b = store.add_node("nanoBanana", {"x": 300, "y": 0})
        c = store.add_node("nanoBanana", {"x": 300, "y": 400})
        connect(store, a, b)
        connect(store, a, c)
        connect(store, b, c, "image", "image")

        store.on_nodes_change([RemoveChange(id=a)])

        assert store.get_node(a) is None
        assert [e for e in store.edges if a in (e.source, e.target)] == []
        assert len(store.edges) == 1
        assert store.check_integrity() == []

    def test_unknown_ids_are_skipped(self, store):
        a = store.add_node("prompt", {"x": 0, "y": 0})

        store.on_nodes_change([
            {"type": "remove", "id": a},
            {"type": "select", "id": a, "selected": True},
            {"type": "select", "id": "missing", "selected": True},
        ])

        assert store.nodes == []

    def test_malformed_batch_is_rejected_whole(self, store):
        a = store.add_node("prompt", {"x": 0, "y": 0})

        store.on_nodes_change([
            {"type": "select", "id": a, "selected": True},
            {"type": "teleport", "id": a},
        ])

        assert store.get_node(a).selected is False

    def test_apply_returns_applied_count(self, store):
        a = store.add_node("prompt", {"x": 0, "y": 0})
        state = store._state

        applied = apply_node_changes(state, [
            SelectionChange(id=a, selected=True),
            SelectionChange(id="missing", selected=True),
        ])

        assert applied == 1

    def test_parse_rejects_unknown_type(self):
        with pytest.raises(InvalidOperationError):
            parse_node_changes([{"type": "replace", "id": "x"}])


class TestEdgeChanges:
    """on_edges_change handles select and remove."""

    def test_select_edge(self, store):
        a = store.add_node("prompt", {"x": 0, "y": 0})
        b = store.add_node("nanoBanana", {"x": 300, "y": 0})
        edge_id = connect(store, a, b)

        store.on_edges_change([{"type": "select", "id": edge_id, "selected": True}])

        assert store.edges[0].selected is True

    def test_remove_edge_keeps_nodes(self, store):
        a = store.add_node("prompt", {"x": 0, "y": 0})
        b = store.add_node("nanoBanana", {"x": 300, "y": 0})
        edge_id = connect(store, a, b)

        store.on_edges_change([{"type": "remove", "id": edge_id}])

        assert store.edges == []
        assert len(store.nodes) == 2

    def test_position_is_not_an_edge_change(self, store):
        a = store.add_node("prompt", {"x": 0, "y": 0})
        b = store.add_node("nanoBanana", {"x": 300, "y": 0})
        edge_id = connect(store, a, b)

        store.on_edges_change([{"type": "position", "id": edge_id}])

        assert len(store.edges) == 1

    def test_removed_edge_change_is_skipped(self, store):
        a = store.add_node("prompt", {"x": 0, "y": 0})
        b = store.add_node("nanoBanana", {"x": 300, "y": 0})
        edge_id = connect(store, a, b)
        store.remove_node(a)

        assert apply_edge_changes(store._state, [{"type": "remove", "id": edge_id}]) == 0
