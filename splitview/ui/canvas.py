"""
Textual rendering of a split layout.

SplitCanvas draws a ViewController's render tree as nested containers and
feeds pointer events back into the controller. Every layout element is
tagged with a CSS class naming its role (split, slot1, slot2,
resize-handle), which is what hit_chain() reads when it walks up from the
widget that received an event.

When only weights changed (a resize drag) the canvas restyles the slot
frames in place; any structural change rebuilds the widget tree.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from textual import events
from textual.app import ComposeResult
from textual.dom import DOMNode
from textual.message import Message
from textual.widget import Widget

from splitview.config.constants import FR_UNITS_PER_SPLIT
from splitview.layout import (
    Bounds,
    HitNode,
    Point,
    RenderBox,
    RenderLeaf,
    ViewController,
    role_from_classes,
    shape_of,
    walk_ancestors,
)
from splitview.types import Orientation, Slot

logger = logging.getLogger(__name__)

PaneFactory = Callable[[RenderLeaf], Widget]


def _tag(node: DOMNode) -> HitNode:
    return HitNode(role=role_from_classes(node.classes), node_id=getattr(node, "layout_id", None))


def hit_chain(widget: DOMNode) -> List[HitNode]:
    """Ancestor chain of a widget, from the widget up to the app."""
    return list(walk_ancestors(widget, lambda node: node.parent, _tag))


class SplitBox(Widget):
    """Container for one split."""

    DEFAULT_CSS = """
    SplitBox {
        width: 1fr;
        height: 1fr;
    }
    """

    def __init__(self, *children: Widget, split_id: str, orientation: Orientation) -> None:
        super().__init__(*children, classes="split")
        self.layout_id = split_id
        self.split_orientation = orientation
        self.styles.layout = "horizontal" if orientation is Orientation.ROW else "vertical"


class SlotFrame(Widget):
    """One occupied slot of a split, sized by its weight."""

    DEFAULT_CSS = """
    SlotFrame {
        layout: vertical;
    }
    """

    def __init__(self, child: Widget, *, split_id: str, slot: Slot) -> None:
        super().__init__(child, classes=f"slot{slot.value}")
        self.layout_id = split_id
        self.layout_slot = slot

    def set_weight(self, weight: float, orientation: Orientation) -> None:
        """Size this frame along its split's axis."""
        share = f"{max(int(round(weight * FR_UNITS_PER_SPLIT)), 0)}fr"
        if orientation is Orientation.ROW:
            self.styles.width = share
            self.styles.height = "1fr"
        else:
            self.styles.height = share
            self.styles.width = "1fr"


class PaneFrame(Widget):
    """Wraps a leaf widget and carries the leaf's id."""

    DEFAULT_CSS = """
    PaneFrame {
        width: 1fr;
        height: 1fr;
    }
    """

    def __init__(self, child: Widget, *, leaf_id: str) -> None:
        super().__init__(child, classes="pane")
        self.layout_id = leaf_id


class ResizeHandle(Widget):
    """Draggable bar between the two slots of a split.

    Press and drag to move the division; ctrl-click to rotate the split.
    """

    DEFAULT_CSS = """
    ResizeHandle {
        background: $panel-lighten-2;
    }

    ResizeHandle:hover {
        background: $accent;
    }
    """

    class Pressed(Message):
        def __init__(self, handle: "ResizeHandle") -> None:
            self.handle = handle
            super().__init__()

    class Dragged(Message):
        def __init__(self, handle: "ResizeHandle", screen_x: float, screen_y: float) -> None:
            self.handle = handle
            self.screen_x = screen_x
            self.screen_y = screen_y
            super().__init__()

    class Released(Message):
        def __init__(self, handle: "ResizeHandle") -> None:
            self.handle = handle
            super().__init__()

    class RotateRequested(Message):
        def __init__(self, handle: "ResizeHandle") -> None:
            self.handle = handle
            super().__init__()

    def __init__(self, *, split_id: str, orientation: Orientation) -> None:
        super().__init__(classes="resize-handle")
        self.layout_id = split_id
        self._dragging = False
        if orientation is Orientation.ROW:
            self.styles.width = 1
            self.styles.height = "1fr"
        else:
            self.styles.height = 1
            self.styles.width = "1fr"

    def on_mouse_down(self, event: events.MouseDown) -> None:
        event.stop()
        if event.ctrl:
            self.post_message(self.RotateRequested(self))
            return
        self._dragging = True
        self.capture_mouse()
        self.post_message(self.Pressed(self))

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if self._dragging:
            self.post_message(self.Dragged(self, event.screen_x, event.screen_y))

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if self._dragging:
            self._dragging = False
            self.release_mouse()
            self.post_message(self.Released(self))


class SplitCanvas(Widget):
    """Draws a ViewController's layout and forwards events to it."""

    DEFAULT_CSS = """
    SplitCanvas {
        width: 1fr;
        height: 1fr;
    }
    """

    def __init__(
        self,
        controller: ViewController,
        pane_factory: PaneFactory,
        **kwargs,
    ) -> None:
        """Initialize the canvas.

        Args:
            controller: Controller owning the layout
            pane_factory: Builds the widget shown for a leaf
            **kwargs: Additional Widget arguments
        """
        super().__init__(**kwargs)
        self.controller = controller
        self.pane_factory = pane_factory
        self._frames: Dict[Tuple[str, Slot], SlotFrame] = {}
        self._panes: Dict[str, PaneFrame] = {}
        self._shape: Optional[tuple] = None
        self._focus_target: Optional[str] = None

    def compose(self) -> ComposeResult:
        self._frames.clear()
        self._panes.clear()
        tree = self.controller.to_render_tree()
        self._shape = shape_of(tree)
        yield self._build_box(tree)

    def _build_box(self, box: RenderBox) -> SplitBox:
        children: List[Widget] = []
        for child in box.children:
            if child.slot is Slot.SECOND and box.show_handle:
                children.append(ResizeHandle(split_id=box.box_id, orientation=box.orientation))

            if isinstance(child.content, RenderBox):
                inner: Widget = self._build_box(child.content)
            else:
                inner = PaneFrame(self.pane_factory(child.content), leaf_id=child.content.leaf_id)
                self._panes[child.content.leaf_id] = inner

            frame = SlotFrame(inner, split_id=box.box_id, slot=child.slot)
            frame.set_weight(child.weight, box.orientation)
            self._frames[(box.box_id, child.slot)] = frame
            children.append(frame)

        return SplitBox(*children, split_id=box.box_id, orientation=box.orientation)

    @property
    def root_box(self) -> SplitBox:
        """Widget of the root split."""
        return self.query_one(SplitBox)

    def on_mount(self) -> None:
        self.controller.subscribe(self._on_layout_changed)

    def on_unmount(self) -> None:
        self.controller.unsubscribe(self._on_layout_changed)

    def _on_layout_changed(self, tree: RenderBox) -> None:
        if shape_of(tree) == self._shape:
            self._apply_weights(tree)
        else:
            self.call_later(self._rebuild)

    async def _rebuild(self) -> None:
        await self.recompose()
        if self._focus_target is not None:
            self.focus_leaf(self._focus_target)

    def _apply_weights(self, box: RenderBox) -> None:
        for child in box.children:
            frame = self._frames.get((box.box_id, child.slot))
            if frame is not None:
                frame.set_weight(child.weight, box.orientation)
            if isinstance(child.content, RenderBox):
                self._apply_weights(child.content)

    def focus_leaf(self, leaf_id: str) -> bool:
        """Focus the pane showing a leaf, now or after the next rebuild.

        Returns:
            True if the pane was focused immediately
        """
        pane = self._panes.get(leaf_id)
        if pane is None or not pane.is_attached:
            self._focus_target = leaf_id
            return False

        self._focus_target = None
        for widget in pane.walk_children(with_self=False):
            if widget.focusable:
                widget.focus()
                return True
        return False

    # Pointer handling

    def on_mouse_down(self, event: events.MouseDown) -> None:
        # Any press outside a handle ends a resize whose release got lost
        self.controller.on_pointer_down([])

    def on_resize_handle_pressed(self, message: ResizeHandle.Pressed) -> None:
        self.controller.on_pointer_down(hit_chain(message.handle))

    def on_resize_handle_dragged(self, message: ResizeHandle.Dragged) -> None:
        split = message.handle.parent
        if not isinstance(split, SplitBox):
            return
        region = split.region
        self.controller.on_resize_drag(
            split.layout_id,
            Point(message.screen_x, message.screen_y),
            Bounds(region.x, region.y, region.width, region.height),
        )

    def on_resize_handle_released(self, message: ResizeHandle.Released) -> None:
        self.controller.on_pointer_release()

    def on_resize_handle_rotate_requested(self, message: ResizeHandle.RotateRequested) -> None:
        self.controller.on_rotate_request(message.handle.layout_id)
