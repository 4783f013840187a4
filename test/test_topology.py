import pytest

from phylotree import (
    AlreadyAttached,
    CannotPrune,
    DuplicateChild,
    Node,
    Phylogeny,
    StructuralViolation,
    delete,
    detach,
    graft,
    graft_all,
    is_in_tree,
    prune,
    prune_then_graft,
)


def test_graft_links_both_directions():
    parent, child = Node("p"), Node("c", 1.0)
    graft(parent, child)
    assert child.parent is parent
    assert parent.children == [child]
    assert child.length == 1.0


def test_graft_overwrites_length_when_given():
    parent, child = Node("p"), Node("c", 1.0)
    graft(parent, child, 4.5)
    assert child.length == 4.5


def test_graft_already_attached():
    p1, p2, child = Node("p1"), Node("p2"), Node("c")
    graft(p1, child)
    with pytest.raises(AlreadyAttached):
        graft(p2, child)
    assert p2.children == []
    assert child.parent is p1


def test_graft_duplicate_child():
    parent, child = Node("p"), Node("c")
    # Bypass graft to create a half-linked state
    parent._add_child_unsafe(child)
    with pytest.raises(DuplicateChild):
        graft(parent, child)
    assert child.parent is None


def test_structural_errors_share_a_base():
    assert issubclass(AlreadyAttached, StructuralViolation)
    assert issubclass(CannotPrune, StructuralViolation)
    assert issubclass(DuplicateChild, StructuralViolation)


def test_graft_then_prune_round_trip():
    parent, child = Node("p", 2.0), Node("c", 1.0)
    graft(parent, child)
    assert prune(child) is child
    assert parent.is_unlinked() and child.is_unlinked()
    assert parent.children == [] and child.parent is None
    assert child.length == 1.0


def test_prune_parentless_raises():
    with pytest.raises(CannotPrune):
        prune(Node("orphan"))


def test_prune_removes_by_identity():
    parent = Node("p")
    twin1, twin2 = Node("twin", 1.0), Node("twin", 1.0)
    graft_all(parent, [twin1, twin2])
    prune(twin2)
    assert len(parent.children) == 1
    assert parent.children[0] is twin1
    assert twin1.parent is parent


def test_graft_all_keeps_order():
    parent = Node("p")
    children = [Node(str(i)) for i in range(4)]
    graft_all(parent, children)
    assert [c.name for c in parent.children] == ["0", "1", "2", "3"]


def test_graft_all_is_not_transactional():
    parent, other = Node("p"), Node("other")
    a, b, c = Node("a"), Node("b"), Node("c")
    graft(other, b)
    with pytest.raises(AlreadyAttached):
        graft_all(parent, [a, b, c])
    # a went in before b failed; c was never reached
    assert parent.children == [a]
    assert c.is_unlinked()


def test_prune_then_graft_moves_subtree(balanced_tree):
    tree, nodes = balanced_tree
    prune_then_graft(nodes["X"], nodes["c"], 0.25)
    assert nodes["X"].parent is nodes["c"]
    assert nodes["X"].length == 0.25
    assert [n.name for n in nodes["R"].children] == ["Y"]
    assert [n.name for n in nodes["X"].children] == ["a", "b"]


def test_prune_then_graft_keeps_length_by_default(balanced_tree):
    _, nodes = balanced_tree
    prune_then_graft(nodes["a"], nodes["Y"])
    assert nodes["a"].length == 1.0
    assert nodes["Y"].children[-1] is nodes["a"]


def test_delete_splices_out_node(balanced_tree):
    tree, nodes = balanced_tree
    removed = delete(nodes["X"])
    assert removed is nodes["X"]
    assert removed.is_unlinked()
    assert removed.name == "X" and removed.length == 1.0
    # a and b now hang from R, in their original order, after Y
    assert [n.name for n in nodes["R"].children] == ["Y", "a", "b"]
    assert nodes["a"].parent is nodes["R"]
    assert nodes["a"].length == 1.0 and nodes["b"].length == 2.0
    assert not is_in_tree(tree, removed)


def test_delete_keeps_grandchildren(deep_tree):
    _, nodes = deep_tree
    delete(nodes["P"])
    assert nodes["Q"].parent is nodes["R"]
    assert [n.name for n in nodes["Q"].children] == ["e", "i"]


def test_delete_leaf(balanced_tree):
    _, nodes = balanced_tree
    delete(nodes["d"])
    assert [n.name for n in nodes["Y"].children] == ["c"]


def test_delete_root_raises(balanced_tree):
    tree, _ = balanced_tree
    with pytest.raises(CannotPrune):
        delete(tree.root)


def test_detach_builds_new_tree(balanced_tree):
    tree, nodes = balanced_tree
    subtree = detach(nodes["Y"], "clade", rooted=False, rerootable=False)
    assert isinstance(subtree, Phylogeny)
    assert subtree.root is nodes["Y"]
    assert subtree.name == "clade"
    assert not subtree.rooted and not subtree.rerootable
    assert nodes["Y"].parent is None
    assert not is_in_tree(tree, nodes["c"])
    assert is_in_tree(subtree, nodes["c"])


def test_detach_defaults(balanced_tree):
    _, nodes = balanced_tree
    subtree = detach(nodes["X"])
    assert subtree.name == ""
    assert subtree.rooted and subtree.rerootable
