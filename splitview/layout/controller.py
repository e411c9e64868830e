"""
View controller for the split layout.

The ViewController owns the root of one layout for as long as the view
exists and is the only thing that changes it. It turns raw events
(hit chains from the presentation layer) into tree operations and hands
out render descriptions.

Every command runs to completion before it returns: the new tree,
compaction included, is computed first and only then swapped in, so a
listener never sees a half-applied change.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

from splitview.config.settings import EngineSettings
from splitview.types import Orientation

from .model import (
    Leaf,
    MutationResult,
    ViewNode,
    clamp_division,
    find_by_id,
    find_leaf,
    insert,
    remove,
    rotate,
    set_division,
)
from .render import RenderBox, build_render_tree
from .resolver import HitNode, HitRole, resolve_drop_target

logger = logging.getLogger(__name__)

Listener = Callable[[RenderBox], None]


def default_id_factory() -> str:
    """Produce a fresh globally unique id."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Point:
    """Pointer position, in the same coordinate space as Bounds."""

    x: float
    y: float


@dataclass(frozen=True)
class Bounds:
    """Bounding box of a split on screen."""

    left: float
    top: float
    width: float
    height: float


class ViewController:
    """Owns a split tree and exposes the layout commands.

    Usage:
        controller = ViewController(load_settings())
        controller.subscribe(redraw)

        # In the presentation layer's event handlers:
        controller.on_drop(chain, payload)
        controller.on_request_remove(chain)
        controller.on_rotate_request(split_id)
    """

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        """Initialize the controller with an empty root.

        Args:
            settings: Engine settings (defaults to EngineSettings())
            id_factory: Unique id service (defaults to uuid4 strings)
        """
        self.settings = settings or EngineSettings()
        self._new_id = id_factory or default_id_factory
        self._listeners: List[Listener] = []
        self._render_cache: Optional[RenderBox] = None
        self._resizing: Optional[str] = None
        self._root = self._create_root()

    def _create_root(self) -> ViewNode:
        return ViewNode(
            node_id=self._new_id(),
            orientation=self.settings.root_orientation,
            depth=0,
            division=self.settings.default_division,
        )

    @property
    def root(self) -> ViewNode:
        """The current tree snapshot."""
        return self._root

    @property
    def resizing(self) -> Optional[str]:
        """Id of the split being resized, if a drag is active."""
        return self._resizing

    def reset(self) -> None:
        """Discard the tree and start again from an empty root."""
        self._resizing = None
        self._root = self._create_root()
        self._render_cache = None
        self._notify()

    # Listeners

    def subscribe(self, listener: Listener) -> None:
        """Call listener with the new render tree after every change."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> bool:
        """Stop notifying a listener.

        Returns:
            True if the listener was subscribed
        """
        if listener in self._listeners:
            self._listeners.remove(listener)
            return True
        return False

    def _notify(self) -> None:
        tree = self.to_render_tree()
        for listener in list(self._listeners):
            try:
                listener(tree)
            except Exception as e:
                logger.error(f"Layout listener error: {e}")

    def _commit(self, new_root: ViewNode, result: MutationResult) -> MutationResult:
        if result.changed:
            self._root = new_root
            self._render_cache = None
            self._notify()
        return result

    # Commands

    def on_drop(self, hit_chain: Iterable[HitNode], payload: Any) -> Optional[Leaf]:
        """Insert payload where it was dropped.

        Args:
            hit_chain: Ancestor chain of the element that received the drop
            payload: Leaf content supplied by the caller

        Returns:
            The inserted Leaf, or None if nothing happened (drop outside
            the layout, stale target, or depth limit reached)
        """
        target = resolve_drop_target(hit_chain)
        if target is None:
            logger.debug("Drop outside layout ignored")
            return None

        leaf = Leaf(leaf_id=self._new_id(), content=payload)
        new_root, result = insert(
            self._root,
            target.split_id,
            leaf,
            target.entered_slot,
            new_id=self._new_id,
            max_depth=self.settings.max_depth,
            division=self.settings.default_division,
        )
        self._commit(new_root, result)
        logger.debug(f"Drop on {target.split_id}: {result.value}")
        return leaf if result.changed else None

    def on_request_remove(self, hit_chain: Iterable[HitNode]) -> Optional[Leaf]:
        """Remove the leaf whose element asked to be removed.

        The leaf id is the first id found on the chain below the slot
        element. Its slot is found by comparing that id against the
        enclosing split's slots, falling back to the slot the chain passed
        through.

        Returns:
            The detached Leaf, or None if nothing was removed
        """
        chain = list(hit_chain)
        target = resolve_drop_target(chain)
        if target is None:
            return None

        split = find_by_id(self._root, target.split_id)
        if split is None:
            logger.debug(f"Remove on stale split {target.split_id} ignored")
            return None

        leaf_id = _leaf_id_of(chain)
        slot = split.slot_of(leaf_id) if leaf_id else None
        if slot is None:
            slot = target.entered_slot
        if slot is None:
            return None

        content = split.get(slot)
        if not isinstance(content, Leaf):
            # Containers are never removed directly
            return None

        new_root, result = remove(self._root, split.node_id, slot)
        self._commit(new_root, result)
        return content

    def remove_leaf(self, leaf_id: str) -> Optional[Leaf]:
        """Remove a leaf by id, wherever it is."""
        location = find_leaf(self._root, leaf_id)
        if location is None:
            return None
        split, slot = location
        content = split.get(slot)
        new_root, result = remove(self._root, split.node_id, slot)
        self._commit(new_root, result)
        return content if result.changed else None

    def on_rotate_request(self, split_id: str) -> MutationResult:
        """Flip the orientation of a split and everything below it."""
        new_root, result = rotate(self._root, split_id)
        return self._commit(new_root, result)

    # Resize sessions

    def begin_resize(self, split_id: str) -> bool:
        """Start a resize drag on a split.

        Returns:
            True if the split exists and the drag started
        """
        if find_by_id(self._root, split_id) is None:
            return False
        self._resizing = split_id
        return True

    def end_resize(self) -> None:
        """End the active resize drag, if any."""
        self._resizing = None

    def on_pointer_down(self, hit_chain: Iterable[HitNode]) -> bool:
        """Handle any pointer press inside the layout.

        A press always ends a resize that is still active, so a release
        that was never delivered can't leave a drag stuck. A press on a
        resize handle starts a new drag on that handle's split.

        Returns:
            True if a resize drag started
        """
        if self._resizing is not None:
            logger.debug(f"Ending stale resize on {self._resizing}")
            self.end_resize()

        first = next(iter(hit_chain), None)
        if first is not None and first.role is HitRole.RESIZE_HANDLE and first.node_id:
            return self.begin_resize(first.node_id)
        return False

    def on_pointer_release(self) -> None:
        """Handle pointer release (or the pointer leaving the layout)."""
        self.end_resize()

    def on_resize_drag(self, split_id: str, pointer: Point, bounds: Bounds) -> Optional[float]:
        """Move a split's divider to follow the pointer.

        The division is the pointer's position along the split's axis as a
        fraction of its bounding box, clamped to [0, 1]. The same pointer
        position always yields the same division.

        Returns:
            The new division, or None if no drag is active on this split
        """
        if self._resizing != split_id:
            return None

        split = find_by_id(self._root, split_id)
        if split is None:
            self.end_resize()
            return None

        if split.orientation is Orientation.ROW:
            offset, extent = pointer.x - bounds.left, bounds.width
        else:
            offset, extent = pointer.y - bounds.top, bounds.height
        if extent <= 0:
            return None

        division = clamp_division(offset / extent)
        new_root, result = set_division(self._root, split_id, division)
        self._commit(new_root, result)
        return division

    # Rendering

    def to_render_tree(self) -> RenderBox:
        """Render description of the current tree."""
        if self._render_cache is None:
            self._render_cache = build_render_tree(self._root)
        return self._render_cache


def _leaf_id_of(chain: List[HitNode]) -> Optional[str]:
    """First id tagged on the chain before it reaches any layout element."""
    for hit in chain:
        if hit.role is not HitRole.NONE:
            return None
        if hit.node_id:
            return hit.node_id
    return None
