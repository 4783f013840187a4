"""In-memory phylogenetic trees: construction, traversal, queries and rerooting."""

import logging

from phylotree.config import Config, configure_logging
from phylotree.distances import (
    depth,
    depths_from_root,
    distance,
    distance_matrix,
    distance_to_root,
    distances_from_root,
    mrca,
    path_between,
)
from phylotree.exceptions import (
    AlreadyAttached,
    AlreadyRoot,
    CannotPrune,
    DuplicateChild,
    DuplicateName,
    InvalidBranchLength,
    NodeNotInTree,
    NotRerootable,
    PhyloTreeError,
    PreconditionViolation,
    StructuralViolation,
)
from phylotree.node import Extension, Node, distance_of
from phylotree.printer import render_tree
from phylotree.rooting import find_midpoint, midpoint_root, reroot
from phylotree.topology import (
    delete,
    detach,
    graft,
    graft_all,
    prune,
    prune_then_graft,
)
from phylotree.traversal import (
    breadth_first,
    depth_first,
    search,
    search_all,
    tip_to_root,
)
from phylotree.tree import Phylogeny, get_nodes, is_in_tree, name_index

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Config",
    "configure_logging",
    "Extension",
    "Node",
    "Phylogeny",
    "distance_of",
    # traversal
    "depth_first",
    "breadth_first",
    "tip_to_root",
    "search",
    "search_all",
    # topology
    "graft",
    "graft_all",
    "prune",
    "prune_then_graft",
    "delete",
    "detach",
    # queries
    "is_in_tree",
    "name_index",
    "get_nodes",
    "mrca",
    "path_between",
    "distance",
    "depth",
    "distance_to_root",
    "distances_from_root",
    "depths_from_root",
    "distance_matrix",
    "render_tree",
    # rooting
    "reroot",
    "midpoint_root",
    "find_midpoint",
    # errors
    "PhyloTreeError",
    "StructuralViolation",
    "AlreadyAttached",
    "CannotPrune",
    "DuplicateChild",
    "NodeNotInTree",
    "PreconditionViolation",
    "NotRerootable",
    "AlreadyRoot",
    "InvalidBranchLength",
    "DuplicateName",
]
