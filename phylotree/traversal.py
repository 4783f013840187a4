"""
Lazy traversal orders over nodes and trees.

Every function returns a fresh generator, so traversals can be restarted
and run side by side without sharing a cursor. None of them detect cycles:
a topology with a reference cycle is not a valid tree and will not
terminate.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Callable, Iterable, Iterator, List, Optional, Union

from phylotree.node import Node

if TYPE_CHECKING:
    from phylotree.tree import Phylogeny

Start = Union[Node, "Phylogeny"]


def _start_node(start: Start) -> Node:
    # Trees are traversed from their root
    if isinstance(start, Node):
        return start
    return start.root


def depth_first(start: Start) -> Iterator[Node]:
    """
    Pre-order traversal: the start node, then each child subtree in
    child-list order.

    Uses an explicit stack, so deep trees do not hit the recursion limit.
    """
    stack: List[Node] = [_start_node(start)]
    while stack:
        current = stack.pop()
        yield current
        # Add children in reverse to keep left-to-right visit order
        stack.extend(reversed(current.children))


def breadth_first(start: Start) -> Iterator[Node]:
    """Level-order traversal from the start node."""
    queue = deque([_start_node(start)])
    while queue:
        current = queue.popleft()
        yield current
        queue.extend(current.children)


def tip_to_root(start: Start) -> Iterator[Node]:
    """
    Walk from the start node up through its ancestors.

    The start node comes first; the walk ends with (and includes) the first
    ancestor that has no parent.
    """
    current: Optional[Node] = _start_node(start)
    while current is not None:
        yield current
        current = current.parent


def search(nodes: Iterable[Node], predicate: Callable[[Node], bool]) -> Optional[Node]:
    """Return the first node matching ``predicate``, or ``None`` if none does."""
    for node in nodes:
        if predicate(node):
            return node
    return None


def search_all(nodes: Iterable[Node], predicate: Callable[[Node], bool]) -> List[Node]:
    """Return every node matching ``predicate``, in traversal order."""
    return [node for node in nodes if predicate(node)]
