"""
Ancestry, path and distance queries on phylogenies.

Distances sum the length of every edge on the path between two nodes,
where an edge is measured by its child node's branch length
(see :func:`phylotree.node.distance_of` for unknown lengths).
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from phylotree.exceptions import NodeNotInTree
from phylotree.node import Node, distance_of
from phylotree.traversal import breadth_first, tip_to_root
from phylotree.tree import Phylogeny, is_in_tree

logger: logging.Logger = logging.getLogger(__name__)


def mrca(nodes: Iterable[Node]) -> Node:
    """
    Most recent common ancestor of ``nodes``.

    Intersects the tip-to-root walks of all nodes, keeping the order of the
    first walk, and returns the first shared node. A single node (or the
    same node repeated) is its own MRCA.

    Raises:
        ValueError: ``nodes`` is empty.
        NodeNotInTree: The nodes do not share a tree.
    """
    paths: List[List[Node]] = [list(tip_to_root(node)) for node in nodes]
    if not paths:
        raise ValueError("Cannot find the MRCA of an empty set of nodes.")

    others = [{id(n) for n in path} for path in paths[1:]]
    for candidate in paths[0]:
        if all(id(candidate) in ids for ids in others):
            return candidate
    raise NodeNotInTree("The given nodes do not share a common ancestor.")


def _check_members(tree: Phylogeny, *nodes: Node) -> None:
    for node in nodes:
        if not is_in_tree(tree, node):
            NodeNotInTree.raise_for(node)


def path_between(
    tree: Phylogeny, node1: Node, node2: Node
) -> Tuple[List[Node], Node, List[Node]]:
    """
    Find the path between two nodes of a tree.

    Returns:
        ``(ascending, ancestor, descending)``: the nodes from ``node1`` up to
        but excluding their common ancestor, the common ancestor itself, and
        the nodes from below the ancestor down to ``node2``.

    Raises:
        NodeNotInTree: Either node is not reachable from the tree root.
    """
    _check_members(tree, node1, node2)

    path1: List[Node] = list(tip_to_root(node1))
    path2: List[Node] = list(tip_to_root(node2))
    shared = {id(n) for n in path1} & {id(n) for n in path2}

    ascending = [n for n in path1 if id(n) not in shared]
    ancestor = path1[len(ascending)]
    descending = [n for n in path2 if id(n) not in shared]
    descending.reverse()
    return ascending, ancestor, descending


def distance(tree: Phylogeny, node1: Node, node2: Node) -> float:
    """Sum of edge distances along the path between two nodes."""
    ascending, _, descending = path_between(tree, node1, node2)
    return sum((distance_of(n) for n in ascending + descending), 0.0)


def depth(tree: Phylogeny, node1: Node, node2: Node) -> int:
    """Number of edges on the path between two nodes."""
    ascending, _, descending = path_between(tree, node1, node2)
    return len(ascending) + len(descending)


def distance_to_root(tree: Phylogeny, node: Node) -> float:
    """
    Sum of edge distances from ``node`` up to the root of ``tree``.

    The root's own branch length lies above the root and is not counted,
    so the root itself is at distance 0.
    """
    _check_members(tree, node)
    return sum((distance_of(n) for n in tip_to_root(node) if n.has_parent()), 0.0)


def distances_from_root(tree: Phylogeny) -> Dict[Node, float]:
    """
    Cumulative distance of every node from the root.

    The root maps to 0: its own branch length lies above the root and is
    not part of any root-to-node path.

    Keys are in pre-order. Uses an explicit stack rather than recursion.
    """
    distances: Dict[Node, float] = {}
    stack: List[Tuple[Node, float]] = [(tree.root, 0.0)]
    while stack:
        node, current = stack.pop()
        distances[node] = current
        for child in reversed(node.children):
            stack.append((child, current + distance_of(child)))
    return distances


def depths_from_root(tree: Phylogeny) -> Dict[Node, int]:
    """Number of edges between every node and the root, keys in pre-order."""
    depths: Dict[Node, int] = {}
    stack: List[Tuple[Node, int]] = [(tree.root, 0)]
    while stack:
        node, current = stack.pop()
        depths[node] = current
        for child in reversed(node.children):
            stack.append((child, current + 1))
    return depths


def distance_matrix(
    tree: Phylogeny, nodes: Optional[Sequence[Node]] = None
) -> Tuple[NDArray[np.float64], List[Node]]:
    """
    Pairwise distances between nodes of a tree.

    Uses ``d(a, b) = D(a) + D(b) - 2 D(mrca(a, b))`` with ``D`` the distance
    from the root, which agrees with :func:`distance` up to rounding.

    Args:
        tree: The tree to measure.
        nodes: Nodes to include; defaults to the terminals of the tree.

    Returns:
        The symmetric distance matrix and the node order of its rows.

    Raises:
        NodeNotInTree: One of ``nodes`` is not part of the tree.
    """
    order: List[Node] = list(nodes) if nodes is not None else tree.terminals()
    members = {id(n) for n in breadth_first(tree)}
    for node in order:
        if id(node) not in members:
            NodeNotInTree.raise_for(node)

    root_distance = distances_from_root(tree)
    n = len(order)
    matrix: NDArray[np.float64] = np.zeros((n, n), dtype=np.float64)
    for i in range(n):
        for j in range(i + 1, n):
            ancestor = mrca((order[i], order[j]))
            value = (
                root_distance[order[i]]
                + root_distance[order[j]]
                - 2.0 * root_distance[ancestor]
            )
            matrix[i, j] = matrix[j, i] = value
    logger.debug(f"Computed {n}x{n} distance matrix for tree '{tree.name}'")
    return matrix, order
