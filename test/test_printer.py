import logging

from phylotree import Node, Phylogeny, graft, render_tree, reroot
from phylotree.printer import print_tree, render_tree_lines


def test_render_tree(balanced_tree):
    tree, _ = balanced_tree
    assert render_tree(tree) == "\n".join(
        [
            "R",
            " ├── X:1",
            " │   ├── a:1",
            " │   └── b:2",
            " └── Y:2",
            "     ├── c:3",
            "     └── d:4",
        ]
    )


def test_render_subtree_and_unnamed_nodes():
    root = Node(children=[Node(length=0.5), Node("z")])
    lines = render_tree_lines(root)
    assert lines[0] == "●"
    assert lines[1].endswith("leaf:0.5")
    assert lines[2].endswith("z")
    assert render_tree(root.children[1]) == "z"


def test_print_tree(balanced_tree, capsys):
    tree, _ = balanced_tree
    print_tree(tree)
    assert capsys.readouterr().out.startswith("R\n")


def test_reroot_logs_rendered_trees(balanced_tree, caplog):
    tree, nodes = balanced_tree
    with caplog.at_level(logging.DEBUG, logger="phylotree"):
        reroot(tree, nodes["a"])
    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("Rerooting at Node('a'), before:\nR") for m in messages)
    assert any("After rerooting:\nNewRoot" in m for m in messages)
    assert any(r.levelno == logging.INFO and "Rerooted" in r.getMessage() for r in caplog.records)


def build_caterpillar(depth):
    r"""
    Caterpillar tree: every internal node has one leaf and one internal child.

        n0
        ├── l1
        └── n1
            ├── l2
            └── ...
    """
    root = current = Node("n0")
    for i in range(1, depth + 1):
        inner = Node(f"n{i}", 1.0)
        graft(current, Node(f"l{i}", 1.0))
        graft(current, inner)
        current = inner
    return Phylogeny("caterpillar", root), current


def test_render_deep_tree_without_recursion():
    tree, _ = build_caterpillar(1500)
    lines = render_tree_lines(tree.root)
    assert len(lines) == 2 * 1500 + 1
    assert lines[0] == "n0"
    assert lines[-1].endswith("└── n1500:1")


def test_reroot_deep_tree_with_debug_logging(caplog):
    tree, deepest = build_caterpillar(1500)
    with caplog.at_level(logging.DEBUG, logger="phylotree"):
        new_root = reroot(tree, deepest)
    assert tree.root is new_root
    assert deepest.parent is new_root
    assert any("After rerooting:\nNewRoot" in r.getMessage() for r in caplog.records)
