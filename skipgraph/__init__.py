"""skipgraph: a probabilistic multi-level ordered index with weighted links.

This package exposes the weighted skip graph via `skipgraph.SkipGraph` and a
small functional interface (`new`, `insert`, `delete`, `graph_structure`)
while keeping the primitives (node records, height generator, snapshot
codec) importable on their own so that ranking or rebalancing layers can be
built on top.
"""

from __future__ import annotations

__all__ = [
    "HEAD",
    "DEFAULT_MAX_LEVEL",
    "Edge",
    "Node",
    "SkipGraph",
    "WeightFn",
    "biased_random_level",
    "default_weight",
    "delete",
    "dumps",
    "enumerate_level",
    "graph_structure",
    "insert",
    "loads",
    "new",
]

from .graph import (
    SkipGraph,
    WeightFn,
    default_weight,
    delete,
    enumerate_level,
    graph_structure,
    insert,
    new,
)
from .levels import DEFAULT_MAX_LEVEL, biased_random_level
from .node import HEAD, Edge, Node
from .snapshot import dumps, loads
