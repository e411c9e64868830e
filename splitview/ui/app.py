"""
Interactive split-pane demo.

Keys act on the focused pane (or on the root split when nothing is
focused): drop a new counter next to it, remove it, or rotate the split it
sits in. Dragging a handle resizes; ctrl-click on a handle rotates.
"""

import logging
import random
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widget import Widget
from textual.widgets import Footer, Header

from splitview.config.settings import EngineSettings
from splitview.layout import RenderLeaf, ViewController, resolve_drop_target

from .canvas import SplitCanvas, hit_chain
from .panes import CounterPane, CounterTile

logger = logging.getLogger(__name__)


class SplitViewApp(App[None]):
    """Terminal front end for a ViewController."""

    TITLE = "splitview"

    BINDINGS = [
        Binding("n", "new_pane", "New pane"),
        Binding("x", "remove_pane", "Remove pane"),
        Binding("o", "rotate", "Rotate split"),
        Binding("r", "reset", "Reset"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        seed: Optional[int] = None,
    ) -> None:
        """Initialize the app.

        Args:
            settings: Engine settings for the layout
            seed: Seed for pane colours, for reproducible runs
        """
        super().__init__()
        self.controller = ViewController(settings)
        self._rng = random.Random(seed)

    def compose(self) -> ComposeResult:
        yield Header()
        yield SplitCanvas(self.controller, pane_factory=self._make_pane, id="canvas")
        yield Footer()

    def _make_pane(self, leaf: RenderLeaf) -> Widget:
        return CounterPane(leaf.content)

    @property
    def canvas(self) -> SplitCanvas:
        return self.query_one("#canvas", SplitCanvas)

    def _anchor(self) -> Widget:
        """Widget the next command applies to."""
        focused = self.focused
        if focused is not None and self.canvas in focused.ancestors:
            return focused
        return self.canvas.root_box

    def action_new_pane(self) -> None:
        """Drop a new counter next to the focused pane."""
        leaf = self.controller.on_drop(hit_chain(self._anchor()), CounterTile.random(self._rng))
        if leaf is None:
            self.notify("This pane can't be split any further", severity="warning")
            return
        self.canvas.focus_leaf(leaf.leaf_id)

    def action_remove_pane(self) -> None:
        """Remove the focused pane."""
        focused = self.focused
        if not isinstance(focused, CounterPane):
            return
        leaf = self.controller.on_request_remove(hit_chain(focused))
        if leaf is not None:
            logger.debug(f"Removed pane {leaf.leaf_id} (count {leaf.content.count})")

    def action_rotate(self) -> None:
        """Rotate the split holding the focused pane."""
        target = resolve_drop_target(hit_chain(self._anchor()))
        if target is not None:
            self.controller.on_rotate_request(target.split_id)

    def action_reset(self) -> None:
        """Clear the layout."""
        self.controller.reset()
