"""
Custom exceptions for phylogenetic tree construction, lookup and rerooting.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, NoReturn

if TYPE_CHECKING:
    from phylotree.node import Node


class PhyloTreeError(Exception):
    """Base exception for all phylotree errors."""

    pass


# -----------------------------------------------------------------------------
# Structural violations (parent/child link invariants)
# -----------------------------------------------------------------------------


class StructuralViolation(PhyloTreeError):
    """Raised when an edit would break the bidirectional parent/child links."""

    pass


class AlreadyAttached(StructuralViolation):
    """Raised when grafting a node that already has a parent."""

    pass


class CannotPrune(StructuralViolation):
    """Raised when pruning a node that has no parent."""

    pass


class DuplicateChild(StructuralViolation):
    """Raised when a node is already present in the child list it is added to."""

    pass


# -----------------------------------------------------------------------------
# Lookups
# -----------------------------------------------------------------------------


class NodeNotInTree(PhyloTreeError, LookupError):
    """Raised when a node is not reachable from the root of the tree under test."""

    @staticmethod
    def raise_for(node: Node, what: str = "node") -> NoReturn:
        raise NodeNotInTree(f"The {what} {node!r} is not part of the phylogeny.")


# -----------------------------------------------------------------------------
# Precondition violations
# -----------------------------------------------------------------------------


class PreconditionViolation(PhyloTreeError):
    """Raised when an operation is called on input it does not accept."""

    pass


class NotRerootable(PreconditionViolation):
    """Raised when rerooting a tree flagged as not rerootable."""

    pass


class AlreadyRoot(PreconditionViolation):
    """Raised when the requested outgroup is already the root."""

    pass


class InvalidBranchLength(PreconditionViolation, ValueError):
    """Raised when a requested branch length lies outside the outgroup's edge."""

    pass


class DuplicateName(PreconditionViolation):
    """Raised when building a name index over nodes that share a name."""

    pass
