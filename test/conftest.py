import logging
from typing import Any, Callable, Dict, Tuple

import pytest

from phylotree import Node, Phylogeny, graft

# ("name", length, [child shapes...]); length may be None for unknown
NodeShape = Tuple[Any, ...]


def pytest_configure(config):
    """Set up test environment before tests run."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _build_node(shape: NodeShape, nodes: Dict[str, Node]) -> Node:
    name, length = shape[0], shape[1]
    children = shape[2] if len(shape) > 2 else []
    node = Node(name, length)
    nodes[name] = node
    for child_shape in children:
        graft(node, _build_node(child_shape, nodes))
    return node


def build_tree(
    shape: NodeShape, rooted: bool = True, rerootable: bool = True, name: str = "test"
) -> Tuple[Phylogeny, Dict[str, Node]]:
    r"""
    Build a tree from nested ``(name, length, [children])`` tuples.

    Returns the tree and a name -> node lookup.
    """
    nodes: Dict[str, Node] = {}
    root = _build_node(shape, nodes)
    return Phylogeny(name, root, rooted, rerootable), nodes


@pytest.fixture
def build() -> Callable[..., Tuple[Phylogeny, Dict[str, Node]]]:
    return build_tree


@pytest.fixture
def scenario_tree(build):
    r"""
        A
       / \
    1 B   C 2
          |
          D 3
    """
    return build(("A", None, [("B", 1.0), ("C", 2.0, [("D", 3.0)])]))


@pytest.fixture
def balanced_tree(build):
    r"""
    Bifurcating root R with clades (a, b) and (c, d):

              R
         1 /     \ 2
          X       Y
       1 / \ 2 3 / \ 4
        a   b   c   d
    """
    return build(
        (
            "R",
            None,
            [
                ("X", 1.0, [("a", 1.0), ("b", 2.0)]),
                ("Y", 2.0, [("c", 3.0), ("d", 4.0)]),
            ],
        )
    )


@pytest.fixture
def deep_tree(build):
    r"""
    Multifurcating root with a three-level lineage towards ``e``:

               R
          0.5/ |  \
            P  f  g      (f: 2.5, g: 1.5)
        0.7/ \0.3
          Q   h
       0.2/ \ 1.1
         e   i
    """
    return build(
        (
            "R",
            None,
            [
                (
                    "P",
                    0.5,
                    [
                        ("Q", 0.7, [("e", 0.2), ("i", 1.1)]),
                        ("h", 0.3),
                    ],
                ),
                ("f", 2.5),
                ("g", 1.5),
            ],
        )
    )
