from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional

from phylotree.exceptions import DuplicateName, StructuralViolation
from phylotree.node import Node
from phylotree.traversal import breadth_first, depth_first, search, search_all

logger: logging.Logger = logging.getLogger(__name__)


class Phylogeny:
    """
    A phylogenetic tree: a root node plus tree-level flags.

    Attributes:
        name: Name of the tree (may be empty).
        root: Root node; it never has a parent.
        rooted: Whether the root is biologically meaningful.
        rerootable: Whether rerooting is permitted.
    """

    __slots__ = ("name", "_root", "rooted", "rerootable")

    def __init__(
        self,
        name: str = "",
        root: Optional[Node] = None,
        rooted: bool = False,
        rerootable: bool = True,
    ):
        self.name = name
        self.root = root if root is not None else Node()
        self.rooted = rooted
        self.rerootable = rerootable

    @property
    def root(self) -> Node:
        return self._root

    @root.setter
    def root(self, node: Node) -> None:
        if node.has_parent():
            raise StructuralViolation(
                f"{node!r} has parent {node.parent!r} and cannot be the root of a tree."
            )
        self._root = node

    def __repr__(self) -> str:
        return (
            f"Phylogeny(name='{self.name}', root={self._root!r}, "
            f"rooted={self.rooted}, rerootable={self.rerootable})"
        )

    def __iter__(self) -> Iterator[Node]:
        return breadth_first(self._root)

    def __len__(self) -> int:
        return sum(1 for _ in breadth_first(self._root))

    def __contains__(self, node: object) -> bool:
        return isinstance(node, Node) and is_in_tree(self, node)

    def is_empty(self) -> bool:
        """A tree is empty when its root is an unlinked node."""
        return self._root.is_unlinked()

    def is_rooted(self) -> bool:
        return self.rooted

    def is_rerootable(self) -> bool:
        return self.rerootable

    def unroot(self) -> None:
        self.rooted = False

    def set_rerootable(self, rerootable: bool) -> None:
        self.rerootable = rerootable

    def terminals(self) -> List[Node]:
        """Leaf nodes of the tree, in pre-order."""
        return self._root.terminal_descendants()


def is_in_tree(tree: Phylogeny, node: Node) -> bool:
    """
    Is ``node`` reachable from the root of ``tree``?

    The lookup goes by identity, so a node that merely equals one in the
    tree (same name, length and extensions) is not a member.
    """
    return search(breadth_first(tree), lambda n: n is node) is not None


def name_index(tree: Phylogeny) -> Dict[str, Node]:
    """
    Map each node name to its node in a single breadth-first pass.

    Raises:
        DuplicateName: Two distinct nodes share a name. Unnamed nodes count
            as sharing the empty name.
    """
    index: Dict[str, Node] = {}
    for node in breadth_first(tree):
        if node.name in index:
            raise DuplicateName(
                f"Cannot build a name index: the name '{node.name}' is used by "
                f"more than one node."
            )
        index[node.name] = node
    logger.debug(f"Built name index of {len(index)} nodes for tree '{tree.name}'")
    return index


def get_nodes(tree: Phylogeny, *names: str) -> List[Node]:
    """Return every node whose name is one of ``names``, in pre-order."""
    wanted = set(names)
    return search_all(depth_first(tree), lambda n: n.name in wanted)
