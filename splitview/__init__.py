"""
splitview - Recursive split-pane layout engine
"""

__version__ = "0.3.0"
