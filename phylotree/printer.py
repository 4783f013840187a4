"""
ASCII rendering of trees.

Used for debug logging around rerooting and for quick inspection in an
interactive session.
"""

from __future__ import annotations

from typing import List, Tuple, Union

from phylotree.node import Node
from phylotree.tree import Phylogeny


def _label(node: Node) -> str:
    if node.name.strip():
        label = node.name
    elif not node.children:
        label = "leaf"
    else:
        label = "●"  # Simple dot for unnamed internal nodes
    if node.length is not None:
        label += f":{node.length:g}"
    return label


def render_tree_lines(node: Node, prefix: str = "", is_last: bool = True) -> List[str]:
    """
    Render the subtree rooted at ``node`` as ASCII art lines.

    Walks the subtree with an explicit stack, so caterpillar trees of any
    depth render without hitting the recursion limit.

    Args:
        node: Root of the subtree to render.
        prefix: Current line prefix for indentation.
        is_last: Whether this is the last child at the current level.
    """
    lines: List[str] = []
    stack: List[Tuple[Node, str, bool]] = [(node, prefix, is_last)]

    while stack:
        current, current_prefix, last = stack.pop()
        if current_prefix == "":
            lines.append(_label(current))
            child_prefix = " "
        else:
            connector = "└── " if last else "├── "
            lines.append(f"{current_prefix}{connector}{_label(current)}")
            child_prefix = current_prefix + ("    " if last else "│   ")

        final = len(current.children) - 1
        for i in range(final, -1, -1):
            stack.append((current.children[i], child_prefix, i == final))
    return lines


def render_tree(tree: Union[Node, Phylogeny]) -> str:
    """Render a tree (or the subtree below a node) as a multi-line string."""
    root = tree.root if isinstance(tree, Phylogeny) else tree
    return "\n".join(render_tree_lines(root))


def print_tree(tree: Union[Node, Phylogeny]) -> None:
    print(render_tree(tree))
