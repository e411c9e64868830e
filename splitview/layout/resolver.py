"""
Interaction resolver.

Maps the element that received a drop or pointer event to the split it
belongs to. The presentation layer supplies the element's ancestor chain,
each entry tagged with its role; the resolver never touches the tree.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Iterator, Optional, TypeVar

from splitview.types import Slot

T = TypeVar("T")


class HitRole(Enum):
    """Role of an element in the layout's UI tree."""

    SPLIT = "split"
    SLOT1 = "slot1"
    SLOT2 = "slot2"
    RESIZE_HANDLE = "resize-handle"
    NONE = "none"


# Checked in this order, so a handle nested in anything still reads as a handle
_ROLE_PRECEDENCE = (
    HitRole.RESIZE_HANDLE,
    HitRole.SPLIT,
    HitRole.SLOT1,
    HitRole.SLOT2,
)

_SLOT_ROLES = {HitRole.SLOT1: Slot.FIRST, HitRole.SLOT2: Slot.SECOND}


@dataclass(frozen=True)
class HitNode:
    """One element of an ancestor chain.

    Attributes:
        role: The element's role
        node_id: Id of the split (for split, slot and handle elements) or
            of the leaf the element displays, if any
    """

    role: HitRole = HitRole.NONE
    node_id: Optional[str] = None


@dataclass(frozen=True)
class DropTarget:
    """Where an event landed: a split, and the slot it came through."""

    split_id: str
    entered_slot: Optional[Slot] = None


def role_from_classes(classes: Iterable[str]) -> HitRole:
    """Map an element's CSS classes to its role."""
    names = set(classes)
    for role in _ROLE_PRECEDENCE:
        if role.value in names:
            return role
    return HitRole.NONE


def walk_ancestors(
    element: Optional[T],
    parent_of: Callable[[T], Optional[T]],
    tag: Callable[[T], HitNode],
) -> Iterator[HitNode]:
    """Build a hit chain by following parent pointers.

    Args:
        element: The element that received the event
        parent_of: Returns an element's parent, or None at the top
        tag: Describes an element as a HitNode

    Yields:
        HitNodes from the element up to the top of its tree
    """
    current = element
    while current is not None:
        yield tag(current)
        current = parent_of(current)


def resolve_drop_target(chain: Iterable[HitNode]) -> Optional[DropTarget]:
    """Find the nearest split enclosing the hit element.

    Walks the chain upward from the hit element:

    - a split element ends the walk with a match; the slot is taken from
      the element just before it, if that was a slot element
    - a resize handle ends the walk with no match (handles are not drop
      targets)
    - running off the top of the chain means the event started outside
      the layout

    Args:
        chain: HitNodes from the hit element up to the layout root

    Returns:
        DropTarget, or None when there is no match
    """
    previous: Optional[HitNode] = None
    for hit in chain:
        if hit.role is HitRole.RESIZE_HANDLE:
            return None
        if hit.role is HitRole.SPLIT:
            if not hit.node_id:
                return None
            entered = _SLOT_ROLES.get(previous.role) if previous is not None else None
            return DropTarget(split_id=hit.node_id, entered_slot=entered)
        previous = hit
    return None
