"""
Split layout engine.

Provides a binary tree of resizable, re-orientable splits with:
- Insertion by drop, creating nested splits when a pane is full
- Removal with automatic compaction of the tree
- Subtree-wide orientation toggling
- Live resizing of the division between two panes
- An immutable render description for the presentation layer

Example usage:
    from splitview.layout import ViewController, HitNode, HitRole

    controller = ViewController()
    chain = [HitNode(HitRole.SPLIT, controller.root.node_id)]
    controller.on_drop(chain, "my pane")
    box = controller.to_render_tree()
"""

from .controller import Bounds, Point, ViewController, default_id_factory
from .model import (
    EMPTY,
    Empty,
    Leaf,
    MutationResult,
    SlotContent,
    ViewNode,
    clamp_division,
    collect_ids,
    compact,
    find_by_id,
    find_leaf,
    insert,
    iter_leaves,
    iter_nodes,
    remove,
    rotate,
    set_division,
    validate_tree,
)
from .render import (
    RenderBox,
    RenderChild,
    RenderLeaf,
    build_render_tree,
    describe,
    shape_of,
)
from .resolver import (
    DropTarget,
    HitNode,
    HitRole,
    resolve_drop_target,
    role_from_classes,
    walk_ancestors,
)

__all__ = [
    # Model
    "EMPTY",
    "Empty",
    "Leaf",
    "MutationResult",
    "SlotContent",
    "ViewNode",
    "clamp_division",
    "collect_ids",
    "compact",
    "find_by_id",
    "find_leaf",
    "insert",
    "iter_leaves",
    "iter_nodes",
    "remove",
    "rotate",
    "set_division",
    "validate_tree",
    # Resolver
    "DropTarget",
    "HitNode",
    "HitRole",
    "resolve_drop_target",
    "role_from_classes",
    "walk_ancestors",
    # Controller
    "Bounds",
    "Point",
    "ViewController",
    "default_id_factory",
    # Render description
    "RenderBox",
    "RenderChild",
    "RenderLeaf",
    "build_render_tree",
    "describe",
    "shape_of",
]
