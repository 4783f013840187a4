"""
Midpoint rooting: place the root halfway along the longest path of the tree.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import List, Optional, Tuple

from phylotree.distances import distances_from_root
from phylotree.exceptions import NodeNotInTree, NotRerootable
from phylotree.node import Node, distance_of
from phylotree.rooting.core_rooting import reroot
from phylotree.tree import Phylogeny, is_in_tree

logger: logging.Logger = logging.getLogger(__name__)


def furthest_from_root(tree: Phylogeny) -> Tuple[Node, float]:
    """
    Node with the greatest distance from the root.

    Ties go to the node visited first in pre-order.
    """
    best_node = tree.root
    best_distance = 0.0
    for node, value in distances_from_root(tree).items():
        if value > best_distance:
            best_node, best_distance = node, value
    return best_node, best_distance


def _get_node_neighbors_with_distances(node: Node) -> List[Tuple[Node, float]]:
    """Parent and children of ``node`` with the length of the connecting edge."""
    neighbors: List[Tuple[Node, float]] = []
    if node.parent is not None:
        neighbors.append((node.parent, distance_of(node)))
    for child in node.children:
        neighbors.append((child, distance_of(child)))
    return neighbors


def furthest_leaf(tree: Phylogeny, node: Node) -> Tuple[Node, float]:
    """
    Leaf of ``tree`` with the greatest path distance from ``node``.

    Walks the tree as an undirected graph starting at ``node``, so every
    distance is found in a single pass. ``node`` itself is never returned
    unless the tree has no other leaf, in which case the distance is 0.

    Raises:
        NodeNotInTree: ``node`` is not part of the tree.
    """
    if not is_in_tree(tree, node):
        NodeNotInTree.raise_for(node)

    queue = deque([(node, 0.0)])
    visited = {id(node)}
    farthest_leaf: Optional[Node] = None
    max_distance = -1.0  # so that any leaf gets selected

    while queue:
        current, current_distance = queue.popleft()
        if current.is_leaf() and current is not node:
            if current_distance > max_distance:
                max_distance = current_distance
                farthest_leaf = current

        for neighbor, edge_distance in _get_node_neighbors_with_distances(current):
            if id(neighbor) not in visited:
                visited.add(id(neighbor))
                queue.append((neighbor, current_distance + edge_distance))

    if farthest_leaf is None:
        return node, 0.0
    return farthest_leaf, max_distance


def _locate_midpoint(tree: Phylogeny) -> Tuple[Node, float]:
    """
    Find the edge holding the midpoint of the longest path.

    Returns:
        The node below that edge, and the distance from that node up to the
        exact midpoint.
    """
    far_node, _ = furthest_from_root(tree)
    _, longest = furthest_leaf(tree, far_node)
    half = longest / 2.0

    # The far node is at least as far from the root as any leaf is, so the
    # midpoint lies on its way up to the root.
    accumulated = 0.0
    current = far_node
    while True:
        accumulated += distance_of(current)
        if accumulated > half or current.parent is None:
            break
        current = current.parent
    below = half - (accumulated - distance_of(current))
    return current, below


def find_midpoint(tree: Phylogeny) -> Node:
    """
    Node immediately below the midpoint of the longest path in ``tree``.

    Starting at the node furthest from the root, edges are accumulated
    towards the root until the total first exceeds half the distance to the
    leaf furthest from that node.
    """
    node, _ = _locate_midpoint(tree)
    return node


def midpoint_root(tree: Phylogeny, new_length: Optional[float] = None) -> Node:
    """
    Reroot ``tree`` at the midpoint between its two most distant taxa.

    Args:
        tree: The tree to reroot; modified in place.
        new_length: Branch length between the new root and the midpoint
            node. ``None`` places the root exactly at the midpoint when the
            edge length is known, otherwise the node keeps its length.

    Returns:
        The root of the tree afterwards. A tree whose midpoint already is
        the root is returned unchanged.
    """
    if not tree.is_rerootable():
        raise NotRerootable(f"Phylogeny '{tree.name}' is not rerootable.")

    node, below = _locate_midpoint(tree)
    if node is tree.root:
        logger.info(f"Midpoint of '{tree.name}' is already the root, leaving it unchanged")
        return tree.root

    if new_length is None and node.length is not None:
        new_length = min(max(below, 0.0), node.length)
    return reroot(tree, node, new_length)
