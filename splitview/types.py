"""Small shared enums for splitview."""

from enum import Enum


class Orientation(Enum):
    """Axis along which a split lays out its two slots."""

    ROW = "row"  # slots side by side
    COLUMN = "column"  # slots stacked

    def flipped(self) -> "Orientation":
        """Return the other axis."""
        return Orientation.COLUMN if self is Orientation.ROW else Orientation.ROW

    @classmethod
    def from_string(cls, value: str) -> "Orientation":
        """Parse an orientation name.

        Accepts "row"/"column" and the "horizontal"/"vertical" spelling
        used by flex-style layouts.

        Examples:
            >>> Orientation.from_string("Column")
            <Orientation.COLUMN: 'column'>
            >>> Orientation.from_string("horizontal")
            <Orientation.ROW: 'row'>
        """
        normalized = value.strip().lower()
        normalized = {"horizontal": "row", "vertical": "column"}.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(
                f"Invalid orientation '{value}'. Must be one of: row, column"
            ) from None


class Slot(Enum):
    """One of the two child positions of a split."""

    FIRST = "1"
    SECOND = "2"

    @property
    def other(self) -> "Slot":
        return Slot.SECOND if self is Slot.FIRST else Slot.FIRST
