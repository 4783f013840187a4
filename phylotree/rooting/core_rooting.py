"""
Outgroup rerooting for phylogenetic trees.

Rerooting reverses the direction of every edge on the path between the
outgroup and the old root. The edges themselves keep their lengths; only
the endpoint each length is stored on changes. The length of the path
between any two nodes that survive rerooting is therefore unchanged.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

from phylotree.config import Config
from phylotree.distances import mrca
from phylotree.exceptions import (
    AlreadyRoot,
    InvalidBranchLength,
    NodeNotInTree,
    NotRerootable,
)
from phylotree.node import Node, add_lengths
from phylotree.printer import render_tree
from phylotree.topology import graft, prune, prune_then_graft
from phylotree.traversal import tip_to_root
from phylotree.tree import Phylogeny, is_in_tree

logger: logging.Logger = logging.getLogger(__name__)

Outgroup = Union[Node, Iterable[Node]]

# =============================================================================
# VALIDATION
# =============================================================================


def _resolve_new_length(outgroup: Node, new_length: Optional[float]) -> Optional[float]:
    """
    Check the requested outgroup branch length against the outgroup's edge.

    ``None`` means "unspecified": the outgroup keeps its current length and
    the new root sits at the far end of the outgroup's edge.
    """
    if new_length is None:
        return outgroup.length

    if outgroup.length is None:
        raise InvalidBranchLength(
            f"Cannot place the new root {new_length} along the edge above "
            f"{outgroup!r}: its branch length is unknown."
        )
    tolerance = Config.LENGTH_TOLERANCE
    if not -tolerance <= new_length <= outgroup.length + tolerance:
        raise InvalidBranchLength(
            f"New branch length {new_length} must lie between 0 and the "
            f"outgroup's branch length {outgroup.length}."
        )
    return min(max(new_length, 0.0), outgroup.length)


def _validate(
    tree: Phylogeny, outgroup: Node, new_length: Optional[float]
) -> Optional[float]:
    """Run every precondition check before the tree is touched."""
    if not tree.is_rerootable():
        raise NotRerootable(f"Phylogeny '{tree.name}' is not rerootable.")
    if outgroup is tree.root:
        raise AlreadyRoot(f"{outgroup!r} is already the root of '{tree.name}'.")
    resolved = _resolve_new_length(outgroup, new_length)
    if not is_in_tree(tree, outgroup):
        NodeNotInTree.raise_for(outgroup, "outgroup")
    return resolved


def _subtract_lengths(a: Optional[float], b: Optional[float]) -> Optional[float]:
    if a is None:
        return None
    return a - (b or 0.0)


# =============================================================================
# REROOTING
# =============================================================================


def reroot(
    tree: Phylogeny, outgroup: Outgroup, new_length: Optional[float] = None
) -> Node:
    """
    Reroot ``tree`` on the edge above ``outgroup``.

    If the outgroup is a leaf, or a non-zero ``new_length`` is requested, a
    new root node is inserted on the outgroup's edge, ``new_length`` away
    from the outgroup. An internal outgroup with ``new_length == 0`` becomes
    the root itself. The old root is dropped if it is left with a single
    child (its two edges merge into one) or kept as an internal node if it
    still has several children.

    Args:
        tree: The tree to reroot; modified in place.
        outgroup: A node of the tree, or several nodes whose most recent
            common ancestor is used.
        new_length: Branch length between the new root and the outgroup;
            ``None`` keeps the outgroup's current length. Values outside
            ``[0, outgroup.length]`` by no more than
            ``Config.LENGTH_TOLERANCE`` are clamped to the nearest bound.

    Returns:
        The new root node.

    Raises:
        NotRerootable: The tree does not allow rerooting.
        AlreadyRoot: The outgroup is the current root.
        InvalidBranchLength: ``new_length`` does not fit on the outgroup's edge.
        NodeNotInTree: The outgroup is not part of the tree.
    """
    if not isinstance(outgroup, Node):
        outgroup = mrca(outgroup)

    resolved = _validate(tree, outgroup, new_length)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"Rerooting at {outgroup!r}, before:\n{render_tree(tree)}")

    old_root = tree.root
    # Ancestors strictly between the outgroup and the old root
    path: List[Node] = list(tip_to_root(outgroup))[1:-1]
    previous_length = outgroup.length

    if outgroup.is_leaf() or resolved != 0.0:
        new_root = Node(Config.NEW_ROOT_NAME, old_root.length)
        prune_then_graft(outgroup, new_root, resolved)
        carried = _subtract_lengths(previous_length, resolved)
    else:
        # An internal outgroup at distance 0 becomes a multifurcating root
        new_root = prune(outgroup)
        new_root.length = old_root.length
        carried = previous_length

    # Trace the outgroup lineage back towards the old root, hanging each
    # ancestor below the node that used to be its child.
    new_parent = new_root
    for ancestor in path:
        carried, ancestor.length = ancestor.length, carried
        prune_then_graft(ancestor, new_parent)
        new_parent = ancestor

    remaining = old_root.count_children()
    if remaining == 1:
        # Bifurcating root: merge its two edges into one
        ingroup = old_root.children[0]
        ingroup.length = add_lengths(ingroup.length, carried)
        prune_then_graft(ingroup, new_parent)
    elif remaining > 1:
        old_root.length = carried
        graft(new_parent, old_root)
    else:
        logger.debug(f"Dropping childless old root {old_root!r}")

    tree.root = new_root
    tree.rooted = True

    logger.info(
        f"Rerooted '{tree.name}' at {outgroup!r} "
        f"({len(path)} ancestors reversed, old root "
        f"{'kept' if remaining > 1 else 'removed'})"
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"After rerooting:\n{render_tree(tree)}")
    return new_root
