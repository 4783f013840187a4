from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Generic, Iterable, List, Optional, TypeVar

try:
    from typing import Self
except ImportError:
    from typing_extensions import Self


T = TypeVar("T")

# Edge distance used in place of an unknown branch length, so that
# cladograms still give non-zero relative distances.
UNKNOWN_LENGTH_DISTANCE: float = sys.float_info.epsilon


@dataclass
class Extension(Generic[T]):
    """
    Typed metadata attached to a node.

    Extensions let a node carry annotations from any tree format
    (confidence values, taxonomy records, colours, ...) without the node
    type knowing about them.
    """

    value: T


class Node:
    """
    A taxon or internal branch point of a phylogenetic tree.

    A node owns its ordered list of children and keeps a non-owning
    reference to its parent. ``parent is None`` means the node has no parent:
    it is either a root or not yet (or no longer) part of a tree.

    Links between nodes must only be created and broken through the
    functions of :mod:`phylotree.topology`, which keep both halves of every
    parent/child link in step.
    """

    __slots__ = ("name", "length", "extensions", "children", "_parent")

    # Type annotations (for static analysis, not runtime)
    name: str
    length: Optional[float]
    extensions: List[Extension[Any]]
    children: List[Self]
    _parent: Optional[Self]

    def __init__(
        self,
        name: str = "",
        length: Optional[float] = None,
        children: Optional[Iterable[Self]] = None,
        extensions: Optional[Iterable[Extension[Any]]] = None,
    ):
        self.name = name
        self.length = length
        # Avoid mutable default arguments; create fresh containers
        self.extensions = list(extensions) if extensions is not None else []
        self.children = []
        self._parent = None
        if children is not None:
            from phylotree.topology import graft_all

            graft_all(self, children)

    # ------------------------------------------------------------------------
    # Equality & hashing
    # ------------------------------------------------------------------------
    def __eq__(self, other: Any) -> bool:
        """
        Shallow equality: compares ``name``, ``length`` and ``extensions``.

        Neither identity nor topology take part, so two nodes in different
        places (or different trees) with the same label, length and metadata
        compare equal. Membership and traversal always go by identity.
        """
        if not isinstance(other, Node):
            return NotImplemented
        return (
            self.name == other.name
            and self.length == other.length
            and self.extensions == other.extensions
        )

    # Nodes key the distance/depth maps, so hashing stays identity based.
    __hash__ = object.__hash__

    def __repr__(self) -> str:
        return f"Node('{self.name}')"

    # ------------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------------
    @property
    def parent(self) -> Optional[Self]:
        """The parent node, or ``None`` if the node has no parent."""
        return self._parent

    def siblings(self) -> List[Self]:
        """Children of this node's parent (including the node itself)."""
        if self._parent is None:
            return []
        return list(self._parent.children)

    def count_children(self) -> int:
        return len(self.children)

    def descendants(self) -> List[Self]:
        """All nodes of the subtree rooted here, in pre-order, self first."""
        from phylotree.traversal import depth_first

        return list(depth_first(self))

    def terminal_descendants(self) -> List[Self]:
        """Leaves of the subtree rooted here, in pre-order."""
        from phylotree.traversal import depth_first, search_all

        return search_all(depth_first(self), lambda n: n.is_leaf())

    def is_ancestral(self, nodes: Iterable[Self]) -> bool:
        """True if every node in ``nodes`` lies in the subtree rooted here."""
        members = {id(n) for n in self.descendants()}
        return all(id(node) in members for node in nodes)

    # ------------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------------
    def has_parent(self) -> bool:
        return self._parent is not None

    def is_parentless(self) -> bool:
        return self._parent is None

    def has_children(self) -> bool:
        return len(self.children) > 0

    def has_child(self, child: Self) -> bool:
        """Identity test: is ``child`` in this node's child list?"""
        return any(c is child for c in self.children)

    def has_extensions(self) -> bool:
        return len(self.extensions) > 0

    def is_leaf(self) -> bool:
        """A node with a parent and no children."""
        return self.has_parent() and not self.has_children()

    def is_root(self) -> bool:
        """A node with children and no parent."""
        return self.is_parentless() and self.has_children()

    def is_node(self) -> bool:
        """An internal node: it has a parent and at least one child."""
        return self.has_parent() and self.has_children()

    def is_unlinked(self) -> bool:
        """Neither parent nor children, e.g. a freshly created node."""
        return self.is_parentless() and not self.has_children()

    def is_linked(self) -> bool:
        return self.has_parent() or self.has_children()

    def is_preterminal(self) -> bool:
        """Not a leaf, and every child is a leaf."""
        if self.is_leaf():
            return False
        return all(child.is_leaf() for child in self.children)

    def is_semipreterminal(self) -> bool:
        """At least one, but not all, children are leaves."""
        are_leaves = [child.is_leaf() for child in self.children]
        return any(are_leaves) and not all(are_leaves)

    # ------------------------------------------------------------------------
    # Unsafe link helpers.
    # These edit one half of a parent/child link only. phylotree.topology is
    # the sole caller; anything else should graft and prune instead.
    # ------------------------------------------------------------------------
    def _set_parent_unsafe(self, parent: Self) -> None:
        self._parent = parent

    def _remove_parent_unsafe(self) -> None:
        self._parent = None

    def _add_child_unsafe(self, child: Self) -> None:
        self.children.append(child)

    def _remove_child_unsafe(self, child: Self) -> None:
        self.children = [c for c in self.children if c is not child]


def distance_of(node: Node) -> float:
    """
    Length of the edge above ``node`` as used in path distances.

    Unknown branch lengths count as machine epsilon: a single unknown edge
    barely affects a path sum, while a tree with no known lengths at all
    (a cladogram) still yields meaningful relative distances.
    """
    return UNKNOWN_LENGTH_DISTANCE if node.length is None else node.length


def add_lengths(a: Optional[float], b: Optional[float]) -> Optional[float]:
    """Sum two branch lengths; an unknown operand counts as 0 unless both are unknown."""
    if a is None and b is None:
        return None
    return (a or 0.0) + (b or 0.0)
