"""
Render description of a split tree.

The presentation layer never sees ViewNodes. It gets a tree of RenderBox
values: plain, frozen data with the orientation of each box and the weight
of each child along that axis. Turning weights into real geometry, and
registering each box as a drop target, is up to whoever draws it.
"""

from dataclasses import dataclass
from typing import Any, Tuple, Union

from rich.text import Text
from rich.tree import Tree

from splitview.types import Orientation, Slot

from .model import Leaf, ViewNode


@dataclass(frozen=True)
class RenderLeaf:
    """A leaf as the presentation layer sees it.

    Only leaves can be removed; containers never offer a delete affordance.
    """

    leaf_id: str
    content: Any
    removable: bool = True


@dataclass(frozen=True)
class RenderChild:
    """One occupied slot of a box and its share of the box's axis."""

    slot: Slot
    weight: float
    content: Union["RenderBox", RenderLeaf]


@dataclass(frozen=True)
class RenderBox:
    """A split as the presentation layer sees it.

    Attributes:
        box_id: Id of the split this box was made from
        orientation: Axis the children are laid out on
        depth: Distance from the root box
        children: 0 (empty root), 1 or 2 weighted children, in slot order
    """

    box_id: str
    orientation: Orientation
    depth: int = 0
    children: Tuple[RenderChild, ...] = ()

    removable = False

    @property
    def show_handle(self) -> bool:
        """Whether a resize handle goes between the children."""
        return len(self.children) == 2


def build_render_tree(root: ViewNode) -> RenderBox:
    """Convert a split tree into its render description.

    With both slots occupied the weights are division and 1 - division;
    a single occupied slot takes the whole box.
    """
    occupied = root.occupied
    children = []
    for slot in occupied:
        if len(occupied) == 2:
            weight = root.division if slot is Slot.FIRST else 1.0 - root.division
        else:
            weight = 1.0
        children.append(RenderChild(slot=slot, weight=weight, content=_render_content(root.get(slot))))

    return RenderBox(
        box_id=root.node_id,
        orientation=root.orientation,
        depth=root.depth,
        children=tuple(children),
    )


def _render_content(content: Union[Leaf, ViewNode]) -> Union[RenderBox, RenderLeaf]:
    if isinstance(content, ViewNode):
        return build_render_tree(content)
    return RenderLeaf(leaf_id=content.leaf_id, content=content.content)


def shape_of(box: RenderBox) -> Tuple[Any, ...]:
    """Structural signature of a render tree, ignoring weights.

    Two trees with the same shape differ only in how space is divided, so a
    presentation can resize in place instead of rebuilding.
    """
    return (
        box.box_id,
        box.orientation,
        tuple(
            (child.slot, shape_of(child.content))
            if isinstance(child.content, RenderBox)
            else (child.slot, child.content.leaf_id)
            for child in box.children
        ),
    )


def describe(box: RenderBox) -> Tree:
    """Build a rich Tree of a render description, for debugging output."""
    tree = Tree(_box_label(box, weight=None))
    _describe_children(tree, box)
    return tree


def _box_label(box: RenderBox, weight: Any) -> Text:
    label = Text()
    label.append("split ", style="bold cyan")
    label.append(box.box_id, style="cyan")
    label.append(f" {box.orientation.value}", style="magenta")
    if weight is not None:
        label.append(f" {weight:.0%}", style="dim")
    if not box.children:
        label.append(" (empty)", style="dim italic")
    return label


def _describe_children(tree: Tree, box: RenderBox) -> None:
    for child in box.children:
        if isinstance(child.content, RenderBox):
            branch = tree.add(_box_label(child.content, child.weight))
            _describe_children(branch, child.content)
        else:
            label = Text()
            label.append(f"[{child.slot.value}] ", style="dim")
            label.append(child.content.leaf_id, style="green")
            label.append(f" {child.weight:.0%}", style="dim")
            tree.add(label)
