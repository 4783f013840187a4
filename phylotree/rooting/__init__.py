"""
Rerooting of phylogenetic trees.

- core_rooting: rerooting on an outgroup node or outgroup set
- midpoint: midpoint rooting and the distance helpers it builds on
"""

from .core_rooting import reroot
from .midpoint import (
    find_midpoint,
    furthest_from_root,
    furthest_leaf,
    midpoint_root,
)

__all__ = [
    "reroot",
    "find_midpoint",
    "furthest_from_root",
    "furthest_leaf",
    "midpoint_root",
]
