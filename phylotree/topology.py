"""
Topology edits that keep parent/child links bidirectional.

``graft`` and ``prune`` are the only operations that create or break a link;
they always update both the child's parent reference and the parent's child
list. Everything else here (and the rerooting code) is composed from them.
Composite edits are not transactional: if a later step fails, earlier
steps stay applied.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional

from phylotree.exceptions import AlreadyAttached, CannotPrune, DuplicateChild
from phylotree.node import Node

if TYPE_CHECKING:
    from phylotree.tree import Phylogeny

logger: logging.Logger = logging.getLogger(__name__)


def graft(parent: Node, child: Node, length: Optional[float] = None) -> None:
    """
    Attach ``child`` below ``parent``, appending it to the child list.

    Args:
        parent: Node that receives the child.
        child: Parentless node to attach.
        length: If given, overwrites the child's branch length.

    Raises:
        AlreadyAttached: ``child`` already has a parent.
        DuplicateChild: ``child`` is already in ``parent``'s child list.
    """
    if child.has_parent():
        raise AlreadyAttached(
            f"Cannot graft {child!r} onto {parent!r}: it already has parent "
            f"{child.parent!r}. Prune it first."
        )
    if parent.has_child(child):
        raise DuplicateChild(f"{child!r} is already a child of {parent!r}.")

    child._set_parent_unsafe(parent)
    parent._add_child_unsafe(child)
    if length is not None:
        child.length = length
    logger.debug(f"Grafted {child!r} onto {parent!r}")


def graft_all(parent: Node, children: Iterable[Node]) -> None:
    """
    Graft several children in order.

    Each graft is atomic but the batch is not: if one child fails, the
    children before it stay attached.
    """
    for child in children:
        graft(parent, child)


def prune(node: Node) -> Node:
    """
    Cut ``node`` (with its subtree) away from its parent.

    Removal from the parent's child list goes by identity, so siblings
    that merely compare equal are left in place.

    Returns:
        The pruned node, now parentless.

    Raises:
        CannotPrune: ``node`` has no parent.
    """
    parent = node.parent
    if parent is None:
        raise CannotPrune(f"Cannot prune {node!r}: it has no parent.")

    parent._remove_child_unsafe(node)
    node._remove_parent_unsafe()
    logger.debug(f"Pruned {node!r} from {parent!r}")
    return node


def prune_then_graft(
    node: Node, new_parent: Node, length: Optional[float] = None
) -> None:
    """
    Move ``node`` (with its subtree) below ``new_parent``.

    There is no cycle check: moving a node below one of its own descendants
    disconnects that part of the tree and leaves a reference cycle behind.
    """
    prune(node)
    graft(new_parent, node, length)


def delete(node: Node) -> Node:
    """
    Splice ``node`` out of the tree.

    Its children are moved, in order, to the end of its former parent's
    child list. Their branch lengths are left untouched.

    Returns:
        The removed node with its name, length and extensions intact and
        neither parent nor children.

    Raises:
        CannotPrune: ``node`` has no parent.
    """
    parent = node.parent
    prune(node)
    for child in list(node.children):
        prune_then_graft(child, parent)
    return node


def detach(
    node: Node, name: str = "", rooted: bool = True, rerootable: bool = True
) -> Phylogeny:
    """Prune ``node`` and return its subtree as a new tree."""
    from phylotree.tree import Phylogeny

    return Phylogeny(
        name=name, root=prune(node), rooted=rooted, rerootable=rerootable
    )
