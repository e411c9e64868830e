"""
Tests for tree compaction.
"""

import random

import pytest

from splitview.layout import (
    EMPTY,
    Leaf,
    MutationResult,
    ViewNode,
    collect_ids,
    compact,
    find_by_id,
    find_leaf,
    insert,
    iter_leaves,
    iter_nodes,
    remove,
    validate_tree,
)
from splitview.types import Orientation, Slot


class TestCollapseRules:
    """One test per row of the compaction table."""

    def test_both_empty_becomes_empty(self):
        root = ViewNode("r", slot1=Leaf("A"), slot2=ViewNode("n", depth=1))
        result = compact(root)
        assert result.slot1 == Leaf("A")
        assert result.slot2 is EMPTY

    def test_only_slot_1_is_promoted(self):
        root = ViewNode("r", slot1=Leaf("A"), slot2=ViewNode("n", depth=1, slot1=Leaf("B")))
        result = compact(root)
        assert result.slot2 == Leaf("B")

    def test_only_slot_2_is_promoted(self):
        root = ViewNode("r", slot1=Leaf("A"), slot2=ViewNode("n", depth=1, slot2=Leaf("C")))
        result = compact(root)
        assert result.slot2 == Leaf("C")

    def test_full_split_absorbed_when_parent_has_room(self):
        """The parent takes over both grandchildren and keeps its own axis."""
        nested = ViewNode(
            "n",
            orientation=Orientation.COLUMN,
            depth=1,
            division=0.3,
            slot1=Leaf("B"),
            slot2=Leaf("C"),
        )
        root = ViewNode("r", orientation=Orientation.ROW, division=0.6, slot2=nested)

        result = compact(root)

        assert result.node_id == "r"
        assert result.slot1 == Leaf("B")
        assert result.slot2 == Leaf("C")
        assert result.orientation is Orientation.ROW
        assert result.division == pytest.approx(0.6)

    def test_removing_sibling_of_full_split_keeps_parent_axis(self):
        """Removing A from a row {A, column{B, C}} leaves a row {B, C}."""
        nested = ViewNode("n", orientation=Orientation.COLUMN, depth=1, slot1=Leaf("B"), slot2=Leaf("C"))
        root = ViewNode("r", orientation=Orientation.ROW, slot1=Leaf("A"), slot2=nested)

        result, outcome = remove(root, "r", Slot.FIRST)

        assert outcome is MutationResult.APPLIED
        assert result == ViewNode("r", orientation=Orientation.ROW, slot1=Leaf("B"), slot2=Leaf("C"))
        assert find_by_id(result, "n") is None

    def test_full_split_kept_when_parent_is_full(self):
        nested = ViewNode("n", orientation=Orientation.COLUMN, depth=1, slot1=Leaf("B"), slot2=Leaf("C"))
        root = ViewNode("r", slot1=Leaf("A"), slot2=nested)
        assert compact(root) is root

    def test_root_is_never_removed(self):
        """A root with a single leaf or no content stays a split."""
        single = ViewNode("r", slot2=Leaf("A"))
        assert compact(single) is single

        empty = ViewNode("r")
        assert compact(empty) is empty


class TestCompactionFixedPoint:
    """Tests for cascades and repeated passes."""

    def test_cascade_of_single_child_splits(self):
        n3 = ViewNode("n3", depth=3, slot1=Leaf("B"), slot2=Leaf("C"))
        n2 = ViewNode("n2", depth=2, slot2=n3)
        n1 = ViewNode("n1", depth=1, slot2=n2)
        root = ViewNode("r", slot1=Leaf("A"), slot2=n1)

        result = compact(root)

        assert result.slot1 == Leaf("A")
        assert isinstance(result.slot2, ViewNode)
        assert result.slot2.node_id == "n3"
        assert find_by_id(result, "n1") is None
        assert find_by_id(result, "n2") is None

    def test_promoted_split_is_renumbered(self):
        n3 = ViewNode("n3", depth=3, slot1=Leaf("B"), slot2=Leaf("C"))
        root = ViewNode("r", slot1=Leaf("A"), slot2=ViewNode("n1", depth=1, slot2=ViewNode("n2", depth=2, slot2=n3)))

        result = compact(root)

        assert result.slot2.depth == 1
        assert validate_tree(result) == []

    def test_absorbed_grandchild_collapses_again(self):
        """After absorbing, the parent re-checks the content it took over."""
        n2 = ViewNode("n2", depth=2, slot1=Leaf("B"))
        n1 = ViewNode("n1", depth=1, slot1=n2, slot2=Leaf("C"))
        root = ViewNode("r", slot2=n1)

        result = compact(root)

        assert result.slot1 == Leaf("B")
        assert result.slot2 == Leaf("C")
        assert validate_tree(result) == []

    def test_child_rewrite_rechecks_parent(self):
        """A child that shrinks to one slot is then promoted into its parent."""
        n2 = ViewNode("n2", depth=2)
        n1 = ViewNode("n1", depth=1, slot1=n2, slot2=Leaf("B"))
        root = ViewNode("r", slot1=Leaf("A"), slot2=n1)

        result = compact(root)

        assert result.slot1 == Leaf("A")
        assert result.slot2 == Leaf("B")
        assert list(iter_nodes(result)) == [result]

    def test_compact_is_idempotent(self):
        n2 = ViewNode("n2", depth=2, slot1=Leaf("B"))
        n1 = ViewNode("n1", depth=1, slot1=n2, slot2=Leaf("C"))
        root = ViewNode("r", slot1=Leaf("A"), slot2=n1)

        once = compact(root)
        assert compact(once) is once

    def test_leaf_order_is_kept(self):
        n2 = ViewNode("n2", depth=2, slot2=Leaf("C"))
        n1 = ViewNode("n1", depth=1, slot1=Leaf("B"), slot2=n2)
        root = ViewNode("r", slot1=Leaf("A"), slot2=n1)

        result = compact(root)
        assert [leaf.leaf_id for leaf in iter_leaves(result)] == ["A", "B", "C"]


class TestRandomSequences:
    """Invariants hold after any mix of inserts and removes."""

    @pytest.mark.parametrize("seed", range(8))
    def test_invariants_hold(self, seed):
        rng = random.Random(seed)
        counter = iter(range(10_000))
        root = ViewNode("root")
        leaves = []

        for step in range(120):
            if leaves and rng.random() < 0.4:
                leaf_id = rng.choice(leaves)
                node, slot = find_leaf(root, leaf_id)
                root, result = remove(root, node.node_id, slot)
                assert result.changed
                leaves.remove(leaf_id)
            else:
                target = rng.choice(list(iter_nodes(root)))
                leaf_id = f"leaf-{step}"
                root, result = insert(
                    root,
                    target.node_id,
                    Leaf(leaf_id),
                    rng.choice([None, Slot.FIRST, Slot.SECOND]),
                    new_id=lambda: f"split-{next(counter)}",
                    max_depth=6,
                )
                if result.changed:
                    leaves.append(leaf_id)

            assert validate_tree(root) == []
            ids = collect_ids(root)
            assert len(ids) == len(set(ids))
            assert sorted(leaf.leaf_id for leaf in iter_leaves(root)) == sorted(leaves)
            assert root.node_id == "root"
