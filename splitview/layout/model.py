"""
Split tree model.

The layout is a binary tree of splits. Each split (ViewNode) has two slots
and every slot holds exactly one of:

- EMPTY: nothing
- Leaf: opaque caller content, wrapped with its own id
- ViewNode: a nested split

Nodes are frozen. Every operation here takes a root and returns a new root,
rebuilding only the path to the node that changed and sharing everything
else. None of them raise: a stale id or an unusable argument is reported
through MutationResult instead.
"""

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Iterator, List, Optional, Set, Tuple, Union

from splitview.config.constants import DEFAULT_DIVISION
from splitview.types import Orientation, Slot

logger = logging.getLogger(__name__)


class Empty(Enum):
    """Marker for an unoccupied slot."""

    EMPTY = "empty"

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = Empty.EMPTY


class MutationResult(Enum):
    """Outcome of a tree operation."""

    APPLIED = "applied"
    UNCHANGED = "unchanged"  # valid request, nothing to do
    NOT_FOUND = "not_found"  # stale or unknown id
    DEPTH_LIMITED = "depth_limited"  # insert refused by max_depth

    @property
    def changed(self) -> bool:
        return self is MutationResult.APPLIED


@dataclass(frozen=True)
class Leaf:
    """Terminal content placed in a slot.

    Attributes:
        leaf_id: Unique id of this placement
        content: Caller-owned payload, never inspected by the engine
    """

    leaf_id: str
    content: Any = None


@dataclass(frozen=True)
class ViewNode:
    """A split: two slots arranged along an orientation.

    Attributes:
        node_id: Unique, stable id used as the handle for commands
        orientation: Axis the two slots are laid out on
        depth: Distance from the root
        division: Share of slot 1, only meaningful when both slots are occupied
        slot1: First slot content
        slot2: Second slot content
    """

    node_id: str
    orientation: Orientation = Orientation.ROW
    depth: int = 0
    division: float = DEFAULT_DIVISION
    slot1: "SlotContent" = EMPTY
    slot2: "SlotContent" = EMPTY

    def get(self, slot: Slot) -> "SlotContent":
        """Return the content of a slot."""
        return self.slot1 if slot is Slot.FIRST else self.slot2

    def with_slot(self, slot: Slot, content: "SlotContent") -> "ViewNode":
        """Return a copy with one slot replaced."""
        if slot is Slot.FIRST:
            return replace(self, slot1=content)
        return replace(self, slot2=content)

    @property
    def occupied(self) -> List[Slot]:
        """Slots that hold something, in order."""
        return [slot for slot in Slot if self.get(slot) is not EMPTY]

    @property
    def is_empty(self) -> bool:
        return not self.occupied

    @property
    def is_full(self) -> bool:
        return len(self.occupied) == 2

    def slot_of(self, child_id: str) -> Optional[Slot]:
        """Find which slot directly holds the leaf or split with this id."""
        for slot in Slot:
            if content_id(self.get(slot)) == child_id:
                return slot
        return None


SlotContent = Union[Empty, Leaf, ViewNode]


def content_id(content: SlotContent) -> Optional[str]:
    """Return the id of a slot's content, or None for an empty slot."""
    if isinstance(content, ViewNode):
        return content.node_id
    if isinstance(content, Leaf):
        return content.leaf_id
    return None


def clamp_division(value: float) -> float:
    """Clamp a division to [0, 1]."""
    return max(0.0, min(1.0, float(value)))


# =============================================================================
# Traversal
# =============================================================================


def iter_nodes(root: SlotContent) -> Iterator[ViewNode]:
    """Yield every split in pre-order (self, slot1 subtree, slot2 subtree)."""
    if not isinstance(root, ViewNode):
        return
    yield root
    yield from iter_nodes(root.slot1)
    yield from iter_nodes(root.slot2)


def iter_leaves(root: SlotContent) -> Iterator[Leaf]:
    """Yield every leaf in display order."""
    if isinstance(root, Leaf):
        yield root
    elif isinstance(root, ViewNode):
        yield from iter_leaves(root.slot1)
        yield from iter_leaves(root.slot2)


def find_by_id(root: SlotContent, node_id: str) -> Optional[ViewNode]:
    """Find a split by id.

    Pre-order search; ids are unique so at most one node matches. Absence
    is a normal outcome (e.g. a drop target that went stale), so this
    returns None rather than raising.
    """
    if not isinstance(root, ViewNode):
        return None
    if root.node_id == node_id:
        return root
    return find_by_id(root.slot1, node_id) or find_by_id(root.slot2, node_id)


def find_leaf(root: SlotContent, leaf_id: str) -> Optional[Tuple[ViewNode, Slot]]:
    """Find the split and slot holding the leaf with this id."""
    for node in iter_nodes(root):
        for slot in Slot:
            content = node.get(slot)
            if isinstance(content, Leaf) and content.leaf_id == leaf_id:
                return node, slot
    return None


def collect_ids(root: SlotContent) -> List[str]:
    """All split and leaf ids in the tree, in pre-order."""
    ids: List[str] = []
    for node in iter_nodes(root):
        ids.append(node.node_id)
        for slot in Slot:
            content = node.get(slot)
            if isinstance(content, Leaf):
                ids.append(content.leaf_id)
    return ids


def _update_node(
    node: ViewNode, node_id: str, update: Callable[[ViewNode], ViewNode]
) -> Tuple[ViewNode, bool]:
    """Rebuild the path to node_id with update applied to that node."""
    if node.node_id == node_id:
        return update(node), True

    for slot in Slot:
        child = node.get(slot)
        if isinstance(child, ViewNode):
            new_child, found = _update_node(child, node_id, update)
            if found:
                return node.with_slot(slot, new_child), True

    return node, False


def _with_depths(node: ViewNode, depth: int) -> ViewNode:
    """Renumber depths below node, reusing subtrees that are already right."""
    slot1 = _with_depths(node.slot1, depth + 1) if isinstance(node.slot1, ViewNode) else node.slot1
    slot2 = _with_depths(node.slot2, depth + 1) if isinstance(node.slot2, ViewNode) else node.slot2

    if node.depth == depth and slot1 is node.slot1 and slot2 is node.slot2:
        return node
    return replace(node, depth=depth, slot1=slot1, slot2=slot2)


# =============================================================================
# Mutations
# =============================================================================


def insert(
    root: ViewNode,
    target_id: str,
    leaf: Leaf,
    preferred_slot: Optional[Slot] = None,
    *,
    new_id: Callable[[], str],
    max_depth: Optional[int] = None,
    division: float = DEFAULT_DIVISION,
) -> Tuple[ViewNode, MutationResult]:
    """Place a leaf into a split.

    The leaf goes into the first empty slot of the target. When both slots
    are occupied, the content of preferred_slot (default: slot 2) is pushed
    down into a new split together with the leaf:

        new split = {slot1: displaced content, slot2: leaf}

    The new split gets a fresh id, the opposite orientation of the target
    and depth target.depth + 1. If that depth would exceed max_depth the
    insert is refused.

    A value that is not a Leaf, or a leaf whose id is already in the tree,
    leaves the tree as it is (UNCHANGED).

    Args:
        root: Tree root
        target_id: Id of the split that received the drop
        leaf: Leaf to insert
        preferred_slot: Slot to displace when the target is full
        new_id: Id service used for a newly created split
        max_depth: Optional nesting limit
        division: Division of a newly created split

    Returns:
        Tuple of (new root, result)
    """
    if not isinstance(leaf, Leaf):
        logger.debug(f"Insert of non-leaf {type(leaf).__name__} ignored")
        return root, MutationResult.UNCHANGED
    if leaf.leaf_id in collect_ids(root):
        logger.debug(f"Insert of duplicate id {leaf.leaf_id} ignored")
        return root, MutationResult.UNCHANGED

    target = find_by_id(root, target_id)
    if target is None:
        logger.debug(f"Insert target {target_id} not found")
        return root, MutationResult.NOT_FOUND

    if target.slot1 is EMPTY:
        updated = target.with_slot(Slot.FIRST, leaf)
    elif target.slot2 is EMPTY:
        updated = target.with_slot(Slot.SECOND, leaf)
    else:
        if max_depth is not None and target.depth + 1 > max_depth:
            logger.debug(f"Insert into {target_id} refused: depth limit {max_depth}")
            return root, MutationResult.DEPTH_LIMITED

        slot = preferred_slot or Slot.SECOND
        split = ViewNode(
            node_id=new_id(),
            orientation=target.orientation.flipped(),
            depth=target.depth + 1,
            division=division,
            slot1=target.get(slot),
            slot2=leaf,
        )
        updated = target.with_slot(slot, split)
        logger.debug(f"Split slot {slot.value} of {target_id} into {split.node_id}")

    new_root, _ = _update_node(root, target_id, lambda _node: updated)
    return _with_depths(new_root, root.depth), MutationResult.APPLIED


def remove(root: ViewNode, split_id: str, slot: Slot) -> Tuple[ViewNode, MutationResult]:
    """Empty one slot of a split and compact the tree.

    The detached content is not destroyed; disposing of it is the caller's
    business.
    """
    target = find_by_id(root, split_id)
    if target is None:
        logger.debug(f"Remove target {split_id} not found")
        return root, MutationResult.NOT_FOUND
    if target.get(slot) is EMPTY:
        return root, MutationResult.UNCHANGED

    new_root, _ = _update_node(root, split_id, lambda node: node.with_slot(slot, EMPTY))
    return compact(new_root), MutationResult.APPLIED


def _collapse(sub: ViewNode, other_empty: bool) -> Optional[Tuple[SlotContent, ...]]:
    """Decide what replaces a nested split in its parent's slot.

    Returns a 1-tuple for content that goes into the parent's slot, a
    2-tuple when the parent should take over both grandchildren, or None
    when the nested split has to stay.
    """
    first, second = sub.slot1, sub.slot2
    if first is EMPTY and second is EMPTY:
        return (EMPTY,)
    if second is EMPTY:
        return (first,)
    if first is EMPTY:
        return (second,)
    if other_empty:
        return (first, second)
    return None


def _collapse_children(node: ViewNode) -> Tuple[ViewNode, bool]:
    """One compaction pass over the node's own slots (slot 1, then slot 2)."""
    changed = False

    for slot in Slot:
        sub = node.get(slot)
        if not isinstance(sub, ViewNode):
            continue

        outcome = _collapse(sub, other_empty=node.get(slot.other) is EMPTY)
        if outcome is None:
            continue

        if len(outcome) == 1:
            node = node.with_slot(slot, outcome[0])
        else:
            # The parent takes over the grandchildren; its own orientation
            # and division stay.
            node = replace(node, slot1=outcome[0], slot2=outcome[1])
        changed = True

    return node, changed


def _compact(node: ViewNode) -> ViewNode:
    """Collapse a node's own slots to a fixed point, then its children.

    This does every collapse a single top-down pass does, in the same
    order, and then checks a node again whenever one of its children
    rewrote itself, since the rewritten child may now collapse into it.
    """
    while True:
        changed = True
        while changed:
            node, changed = _collapse_children(node)

        slot1 = _compact(node.slot1) if isinstance(node.slot1, ViewNode) else node.slot1
        slot2 = _compact(node.slot2) if isinstance(node.slot2, ViewNode) else node.slot2
        if slot1 is node.slot1 and slot2 is node.slot2:
            return node
        # A child rewrote itself; it may now collapse into this node.
        node = replace(node, slot1=slot1, slot2=slot2)


def compact(root: ViewNode) -> ViewNode:
    """Bring the tree to its canonical minimal form.

    For each slot holding a nested split:

    | nested slot1 | nested slot2 | parent's slot becomes                    |
    |--------------|--------------|------------------------------------------|
    | empty        | empty        | empty                                    |
    | occupied     | empty        | nested slot1                             |
    | empty        | occupied     | nested slot2                             |
    | occupied     | occupied     | both taken over by the parent if its     |
    |              |              | other slot is empty, otherwise unchanged |

    A node re-runs the check on itself until nothing changes before
    descending, since a promotion can expose another one. After descending,
    a node whose children changed is checked again, so the result is also
    normal when a collapse deep down makes a nested split promotable. The
    root itself is never removed, so it is the only split allowed to have an
    empty slot. Absorbing keeps the parent's orientation and division.
    Depths are renumbered afterwards.
    """
    return _with_depths(_compact(root), root.depth)


def rotate(root: ViewNode, split_id: str) -> Tuple[ViewNode, MutationResult]:
    """Flip the orientation of a split and of every split below it."""
    if find_by_id(root, split_id) is None:
        logger.debug(f"Rotate target {split_id} not found")
        return root, MutationResult.NOT_FOUND

    new_root, _ = _update_node(root, split_id, _rotate_subtree)
    return new_root, MutationResult.APPLIED


def _rotate_subtree(node: ViewNode) -> ViewNode:
    return replace(
        node,
        orientation=node.orientation.flipped(),
        slot1=_rotate_subtree(node.slot1) if isinstance(node.slot1, ViewNode) else node.slot1,
        slot2=_rotate_subtree(node.slot2) if isinstance(node.slot2, ViewNode) else node.slot2,
    )


def set_division(
    root: ViewNode, split_id: str, division: float
) -> Tuple[ViewNode, MutationResult]:
    """Set a split's division, clamped to [0, 1]."""
    if math.isnan(division):
        return root, MutationResult.UNCHANGED

    target = find_by_id(root, split_id)
    if target is None:
        return root, MutationResult.NOT_FOUND

    value = clamp_division(division)
    if value == target.division:
        return root, MutationResult.UNCHANGED

    new_root, _ = _update_node(root, split_id, lambda node: replace(node, division=value))
    return new_root, MutationResult.APPLIED


# =============================================================================
# Validation
# =============================================================================


def validate_tree(root: ViewNode) -> List[str]:
    """Check the structural invariants of a tree.

    Returns:
        List of validation error messages (empty if valid)
    """
    errors: List[str] = []
    _validate_node(root, root.depth, True, set(), errors)
    return errors


def _validate_node(
    node: ViewNode, depth: int, is_root: bool, seen_ids: Set[str], errors: List[str]
) -> None:
    if node.node_id in seen_ids:
        errors.append(f"Duplicate id: {node.node_id}")
    seen_ids.add(node.node_id)

    if node.depth != depth:
        errors.append(f"Split {node.node_id} has depth {node.depth}, expected {depth}")
    if not 0.0 <= node.division <= 1.0:
        errors.append(f"Split {node.node_id} has division {node.division} outside [0, 1]")

    occupied = len(node.occupied)
    if not is_root and occupied == 0:
        errors.append(f"Split {node.node_id} has both slots empty")
    elif not is_root and occupied == 1:
        errors.append(f"Split {node.node_id} has a single occupied slot")

    for slot in Slot:
        content = node.get(slot)
        if isinstance(content, ViewNode):
            _validate_node(content, depth + 1, False, seen_ids, errors)
        elif isinstance(content, Leaf):
            if content.leaf_id in seen_ids:
                errors.append(f"Duplicate id: {content.leaf_id}")
            seen_ids.add(content.leaf_id)
