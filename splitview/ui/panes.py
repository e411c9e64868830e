"""
Demo leaf content: a coloured click counter.

The engine never looks inside a leaf. CounterTile is the payload handed to
the controller, and CounterPane is the widget drawn for it. The count lives
on the tile, so it survives the canvas rebuilding its widgets.
"""

import random
from dataclasses import dataclass
from typing import Optional, Tuple

from textual import events
from textual.binding import Binding
from textual.color import Color
from textual.widgets import Static

RGB = Tuple[int, int, int]


@dataclass
class CounterTile:
    """State of one counter pane."""

    background: RGB
    count: int = 0

    @classmethod
    def random(cls, rng: Optional[random.Random] = None) -> "CounterTile":
        """Create a tile with a random background colour."""
        rng = rng or random.Random()
        return cls(background=(rng.randrange(256), rng.randrange(256), rng.randrange(256)))

    @property
    def foreground(self) -> RGB:
        """Black or white, whichever contrasts best (YIQ brightness)."""
        r, g, b = self.background
        brightness = (r * 299 + g * 587 + b * 114) / 1000
        return (0, 0, 0) if brightness >= 128 else (255, 255, 255)

    def increment(self) -> int:
        self.count += 1
        return self.count


class CounterPane(Static):
    """Focusable pane showing a CounterTile's count."""

    DEFAULT_CSS = """
    CounterPane {
        width: 1fr;
        height: 1fr;
        content-align: center middle;
        text-style: bold;
    }

    CounterPane:focus {
        border: tall $accent;
    }
    """

    BINDINGS = [
        Binding("space", "increment", "Count", show=False),
    ]

    can_focus = True

    def __init__(self, tile: CounterTile, **kwargs) -> None:
        super().__init__(str(tile.count), classes="counter", **kwargs)
        self.tile = tile
        self.styles.background = Color(*tile.background)
        self.styles.color = Color(*tile.foreground)

    def on_click(self, event: events.Click) -> None:
        self.action_increment()

    def action_increment(self) -> None:
        self.update(str(self.tile.increment()))
