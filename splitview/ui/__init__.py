"""Textual presentation for splitview layouts."""

from .app import SplitViewApp
from .canvas import PaneFrame, ResizeHandle, SlotFrame, SplitBox, SplitCanvas, hit_chain
from .panes import CounterPane, CounterTile

__all__ = [
    "CounterPane",
    "CounterTile",
    "PaneFrame",
    "ResizeHandle",
    "SlotFrame",
    "SplitBox",
    "SplitCanvas",
    "SplitViewApp",
    "hit_chain",
]
