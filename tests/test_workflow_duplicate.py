"""Tests for selection and group duplication."""

from conftest import connect

from flowcanvas.workflow.workflow_model import Rect


def _select(store, *node_ids):
    store.on_nodes_change([{"type": "select", "id": i, "selected": True} for i in node_ids])


class TestDuplicateSelection:
    """Duplicating selected, ungrouped nodes."""

    def test_duplicates_nodes_with_data_and_internal_edges(self, store):
        prompt_id = store.add_node("prompt", {"x": 10, "y": 20})
        gen_id = store.add_node("nanoBanana", {"x": 280, "y": 20})
        store.update_node_data(prompt_id, {"prompt": "keep this context"})
        connect(store, prompt_id, gen_id)

        _select(store, prompt_id, gen_id)
        new_ids = store.duplicate_selected_nodes()

        assert len(store.nodes) == 4
        assert len(store.edges) == 2

        duplicated = [n for n in store.nodes if n.selected]
        assert len(duplicated) == 2
        assert sorted(n.id for n in duplicated) == sorted(new_ids)
        duplicated_prompt = next(n for n in duplicated if n.type == "prompt")
        assert duplicated_prompt.data.prompt == "keep this context"

        cloned_edge = next(e for e in store.edges if e.source in new_ids)
        assert cloned_edge.target in new_ids
        assert (cloned_edge.source_handle, cloned_edge.target_handle) == ("text", "text")

    def test_external_edges_are_not_copied(self, store):
        prompt_id = store.add_node("prompt", {"x": 0, "y": 0})
        gen_id = store.add_node("nanoBanana", {"x": 400, "y": 0})
        connect(store, prompt_id, gen_id)

        _select(store, gen_id)
        new_ids = store.duplicate_selected_nodes()

        assert len(new_ids) == 1
        assert len(store.edges) == 1

    def test_cloned_data_is_independent(self, store):
        gallery_id = store.add_node("outputGallery", {"x": 0, "y": 0})
        store.update_node_data(gallery_id, {"images": ["img-1"]})
        _select(store, gallery_id)

        [clone_id] = store.duplicate_selected_nodes()
        store.get_node(clone_id).data.images.append("img-2")

        assert store.get_node(gallery_id).data.images == ["img-1"]

    def test_previous_selection_cleared(self, store):
        a = store.add_node("prompt", {"x": 0, "y": 0})
        _select(store, a)

        store.duplicate_selected_nodes()

        assert store.get_node(a).selected is False

    def test_default_offset_avoids_overlap(self, store):
        a = store.add_node("prompt", {"x": 0, "y": 0})
        _select(store, a)

        [clone_id] = store.duplicate_selected_nodes()

        original = store._state.node_rect(store.get_node(a))
        clone = store._state.node_rect(store.get_node(clone_id))
        assert not original.overlaps(clone)

    def test_explicit_offset_is_verbatim(self, store):
        a = store.add_node("prompt", {"x": 10, "y": 10})
        _select(store, a)

        [clone_id] = store.duplicate_selected_nodes(offset={"x": 30, "y": 45})

        clone = store.get_node(clone_id)
        assert (clone.position.x, clone.position.y) == (40, 55)

    def test_single_undo_step(self, store):
        a = store.add_node("prompt", {"x": 0, "y": 0})
        b = store.add_node("nanoBanana", {"x": 400, "y": 0})
        connect(store, a, b)
        _select(store, a, b)
        depth = len(store.undo_history)

        store.duplicate_selected_nodes()
        assert len(store.undo_history) == depth + 1

        store.undo()
        assert len(store.nodes) == 2
        assert len(store.edges) == 1

    def test_empty_selection_is_noop(self, store, notifier):
        store.add_node("prompt", {"x": 0, "y": 0})
        depth = len(store.undo_history)

        assert store.duplicate_selected_nodes() is None

        assert len(store.nodes) == 1
        assert len(store.undo_history) == depth
        assert notifier.messages

    def test_partial_group_selection_is_ungrouped(self, store):
        a = store.add_node("prompt", {"x": 0, "y": 0})
        b = store.add_node("nanoBanana", {"x": 400, "y": 0})
        store.create_group([a, b])
        _select(store, a)

        [clone_id] = store.duplicate_selected_nodes()

        assert store.get_node(clone_id).group_id is None
        assert len(store.groups) == 1


class TestDuplicateGroup:
    """Duplicating whole groups."""

    def test_selected_members_duplicate_as_new_group(self, store):
        node_a = store.add_node("prompt", {"x": 0, "y": 0})
        node_b = store.add_node("nanoBanana", {"x": 220, "y": 0})
        group_id = store.create_group([node_a, node_b])
        _select(store, node_a, node_b)

        store.duplicate_selected_nodes()

        assert len(store.groups) == 2
        duplicated = [n for n in store.nodes if n.selected]
        assert len(duplicated) == 2
        new_group_ids = {n.group_id for n in duplicated}
        assert len(new_group_ids) == 1
        [new_group_id] = new_group_ids
        assert new_group_id and new_group_id != group_id
        assert "Copy" in store.groups[new_group_id].name

    def test_group_header_selection(self, store):
        node_a = store.add_node("prompt", {"x": 0, "y": 0})
        node_b = store.add_node("nanoBanana", {"x": 220, "y": 0})
        group_id = store.create_group([node_a, node_b])
        store.set_selected_group_id(group_id)

        store.duplicate_selected_nodes(selected_group_id=group_id)

        assert len(store.groups) == 2
        assert store.selected_group_id != group_id
        duplicated = [n for n in store.nodes if n.selected]
        assert len(duplicated) == 2
        assert duplicated[0].group_id
        assert all(n.group_id == duplicated[0].group_id for n in duplicated)
        assert store.selected_group_id == duplicated[0].group_id

    def test_store_group_selection_is_used(self, store):
        node_a = store.add_node("prompt", {"x": 0, "y": 0})
        group_id = store.create_group([node_a])
        store.set_selected_group_id(group_id)

        new_ids = store.duplicate_selected_nodes()

        assert len(new_ids) == 1
        assert len(store.groups) == 2

    def test_group_copy_keeps_size_and_color(self, store):
        node_a = store.add_node("prompt", {"x": 0, "y": 0})
        group_id = store.create_group([node_a])
        store.update_group(group_id, name="Inputs", color="green")

        store.duplicate_selected_nodes(selected_group_id=group_id)

        clone = next(g for gid, g in store.groups.items() if gid != group_id)
        original = store.groups[group_id]
        assert clone.name == "Inputs Copy"
        assert clone.color == "green"
        assert clone.size == original.size

    def test_zero_offset_still_places_without_overlap(self, store):
        node_a = store.add_node("prompt", {"x": 40, "y": 80})
        node_b = store.add_node("nanoBanana", {"x": 360, "y": 80})
        group_id = store.create_group([node_a, node_b])
        store.set_selected_group_id(group_id)

        store.duplicate_selected_nodes(selected_group_id=group_id, offset={"x": 0, "y": 0})

        original = store.groups[group_id]
        duplicate_id = next(gid for gid in store.groups if gid != group_id)
        duplicated = store.groups[duplicate_id]
        overlaps = not (
            original.position.x + original.size.width <= duplicated.position.x
            or duplicated.position.x + duplicated.size.width <= original.position.x
            or original.position.y + original.size.height <= duplicated.position.y
            or duplicated.position.y + duplicated.size.height <= original.position.y
        )
        assert overlaps is False

    def test_members_move_with_group(self, store):
        node_a = store.add_node("prompt", {"x": 40, "y": 80})
        group_id = store.create_group([node_a])

        store.duplicate_selected_nodes(selected_group_id=group_id)

        original_group = store.groups[group_id]
        clone_group = next(g for gid, g in store.groups.items() if gid != group_id)
        clone_node = next(n for n in store.nodes if n.group_id == clone_group.id)
        assert clone_node.position.x - 40 == clone_group.position.x - original_group.position.x
        assert clone_node.position.y - 80 == clone_group.position.y - original_group.position.y

    def test_avoids_other_groups(self, store):
        left = store.add_node("prompt", {"x": 0, "y": 0})
        right = store.add_node("prompt", {"x": 400, "y": 0})
        left_group = store.create_group([left])
        right_group = store.create_group([right])

        store.duplicate_selected_nodes(selected_group_id=left_group)

        clone = next(
            g for gid, g in store.groups.items() if gid not in (left_group, right_group)
        )
        for gid in (left_group, right_group):
            assert not clone.rect.overlaps(store.groups[gid].rect)

    def test_member_count_matches(self, store):
        ids = [store.add_node("prompt", {"x": i * 350, "y": 0}) for i in range(3)]
        group_id = store.create_group(ids)

        store.duplicate_selected_nodes(selected_group_id=group_id)

        clone_id = next(gid for gid in store.groups if gid != group_id)
        assert len([n for n in store.nodes if n.group_id == clone_id]) == 3

    def test_unknown_group_is_noop(self, store):
        store.add_node("prompt", {"x": 0, "y": 0})
        depth = len(store.undo_history)

        assert store.duplicate_selected_nodes(selected_group_id="group-missing") is None
        assert len(store.undo_history) == depth


class TestRect:

    def test_touching_edges_do_not_overlap(self):
        assert not Rect(0, 0, 10, 10).overlaps(Rect(10, 0, 10, 10))

    def test_one_axis_disjoint_is_enough(self):
        assert not Rect(0, 0, 10, 10).overlaps(Rect(5, 20, 10, 10))

    def test_overlap(self):
        assert Rect(0, 0, 10, 10).overlaps(Rect(5, 5, 10, 10))
